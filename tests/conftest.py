import matplotlib

# headless chart rendering for the benchmark tests
matplotlib.use("Agg")
