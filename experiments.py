"""
Benchmark: static Huffman codec over synthetic byte distributions

Runs the codec repeatedly over generated datasets and records timing,
compressed size and round-trip correctness.

Outputs (in --outdir):
  - metrics.csv     (one row per run)
  - summary.csv     (grouped mean/stdev)
  - *.png           (charts)

How to run:
  python experiments.py --outdir results --runs 5
  python experiments.py --outdir results --size_kb 256 --sizes_kb 4,16,64,256
  python experiments.py --generators uniform256,english_like --no_plots
"""

from __future__ import annotations

import argparse
import bisect
import csv
import random
import statistics
import time
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Callable, Dict, List, Sequence, Tuple

import matplotlib.pyplot as plt

import codec
from huffman import build_huffman_tree, count_frequencies, tree_depth


def now_ns() -> int:
    return time.perf_counter_ns()

def ns_to_ms(ns: int) -> float:
    return ns / 1_000_000.0


# Synthetic dataset generators

def _weighted_bytes(size: int, symbols: Sequence[int], weights: Sequence[float], rng: random.Random) -> bytes:
    total = sum(weights)
    cdf = []
    acc = 0.0
    for w in weights:
        acc += w / total
        cdf.append(acc)
    last = len(symbols) - 1
    return bytes(symbols[min(bisect.bisect_left(cdf, rng.random()), last)] for _ in range(size))

def gen_uniform(size: int, alphabet: int = 256, seed: int = 0) -> bytes:
    rng = random.Random(seed)
    return bytes(rng.randrange(alphabet) for _ in range(size))

def gen_zipf_like(size: int, alphabet: int = 128, s: float = 1.2, seed: int = 0) -> bytes:
    weights = [1.0 / ((rank + 1) ** s) for rank in range(alphabet)]
    return _weighted_bytes(size, list(range(alphabet)), weights, random.Random(seed))

def gen_repetitive(size: int, dominant: int = ord('A'), dom_frac: float = 0.90, seed: int = 0) -> bytes:
    rng = random.Random(seed)
    others = [b for b in range(256) if b != dominant]
    return bytes(dominant if rng.random() < dom_frac else rng.choice(others) for _ in range(size))

ENGLISH_LETTERS = " etaoinshrdlcumwfgypbvkjxqETAOINSHRDLCUMWFGYPBVKJXQ\n"

def gen_english_like(size: int, seed: int = 0) -> bytes:
    weights = []
    for ch in ENGLISH_LETTERS:
        if ch == ' ':
            weights.append(13.0)
        elif ch == '\n':
            weights.append(1.5)
        elif ch.lower() in "etaoinshrdlu":
            weights.append(6.0)
        elif ch.lower() in "cmfwgypbvk":
            weights.append(2.5)
        else:
            weights.append(1.2)
    return _weighted_bytes(size, [ord(ch) for ch in ENGLISH_LETTERS], weights, random.Random(seed))

GENERATORS: Dict[str, Callable[[int, int], bytes]] = {
    "uniform256": lambda size, seed: gen_uniform(size, alphabet=256, seed=seed),
    "zipf128": lambda size, seed: gen_zipf_like(size, alphabet=128, seed=seed),
    "repetitive90": lambda size, seed: gen_repetitive(size, dom_frac=0.90, seed=seed),
    "repetitive99": lambda size, seed: gen_repetitive(size, dom_frac=0.99, seed=seed),
    "english_like": lambda size, seed: gen_english_like(size, seed=seed),
    "single_symbol": lambda size, seed: bytes([seed % 256]) * size,
}

def generate_dataset(name: str, size_bytes: int, seed: int) -> bytes:
    try:
        fn = GENERATORS[name]
    except KeyError:
        raise ValueError(f"unknown generator {name!r}; choose from {', '.join(sorted(GENERATORS))}") from None
    return fn(size_bytes, seed)


# Runner

@dataclass
class MetricRow:
    exp_name: str
    dataset_name: str
    original_bytes: int
    run_id: int
    distinct_symbols: int
    tree_depth: int

    compress_ms: float
    decompress_ms: float

    compressed_bytes: int
    compression_ratio: float
    bits_per_symbol: float
    correctness_ok: int  # 1 or 0


def run_one(data: bytes, exp_name: str = "", dataset_name: str = "", run_id: int = 0) -> MetricRow:
    t0 = now_ns()
    packed = codec.compress(data)
    t1 = now_ns()
    decoded = codec.decompress(packed)
    t2 = now_ns()

    ft = count_frequencies(data)
    depth = tree_depth(build_huffman_tree(ft)) if ft else 0

    return MetricRow(
        exp_name=exp_name,
        dataset_name=dataset_name,
        original_bytes=len(data),
        run_id=run_id,
        distinct_symbols=len(ft),
        tree_depth=depth,
        compress_ms=ns_to_ms(t1 - t0),
        decompress_ms=ns_to_ms(t2 - t1),
        compressed_bytes=len(packed),
        compression_ratio=len(packed) / max(1, len(data)),
        bits_per_symbol=8.0 * len(packed) / max(1, len(data)),
        correctness_ok=1 if decoded == data else 0,
    )


def write_csv(path: Path, rows: List[MetricRow]) -> None:
    names = [f.name for f in fields(MetricRow)]
    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=names)
        w.writeheader()
        for r in rows:
            w.writerow({k: getattr(r, k) for k in names})


SUMMARY_METRICS = ("compression_ratio", "bits_per_symbol", "compress_ms", "decompress_ms")

def mean_stdev(vals: List[float]) -> Tuple[float, float]:
    if len(vals) == 1:
        return vals[0], 0.0
    return statistics.mean(vals), statistics.stdev(vals)

def group_summary(rows: List[MetricRow], out_path: Path) -> None:
    """
    Group by exp_name, dataset_name, original_bytes and compute mean/stdev
    """
    groups: Dict[Tuple[str, str, int], List[MetricRow]] = {}
    for r in rows:
        groups.setdefault((r.exp_name, r.dataset_name, r.original_bytes), []).append(r)

    header = ["exp_name", "dataset_name", "original_bytes", "n_runs"]
    for m in SUMMARY_METRICS:
        header += [f"{m}_mean", f"{m}_stdev"]
    header.append("correctness_ok_rate")

    with out_path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=header)
        w.writeheader()
        for (exp_name, dataset_name, size_b), items in sorted(groups.items()):
            row = {
                "exp_name": exp_name,
                "dataset_name": dataset_name,
                "original_bytes": size_b,
                "n_runs": len(items),
                "correctness_ok_rate": sum(x.correctness_ok for x in items) / len(items),
            }
            for m in SUMMARY_METRICS:
                row[f"{m}_mean"], row[f"{m}_stdev"] = mean_stdev([getattr(x, m) for x in items])
            w.writerow(row)


# Plotting

def plot_distributions(rows: List[MetricRow], outdir: Path) -> None:
    exp_rows = [r for r in rows if r.exp_name == "distribution"]
    if not exp_rows:
        return

    datasets = sorted(set(r.dataset_name for r in exp_rows))
    x = list(range(len(datasets)))
    ratio = [statistics.mean(r.compression_ratio for r in exp_rows if r.dataset_name == d) for d in datasets]
    bps = [statistics.mean(r.bits_per_symbol for r in exp_rows if r.dataset_name == d) for d in datasets]

    plt.figure()
    plt.bar(x, ratio)
    plt.xticks(x, datasets, rotation=20, ha="right")
    plt.ylabel("Compressed Bytes / Original Bytes")
    plt.title("Compression Ratio by Distribution")
    plt.tight_layout()
    plt.savefig(outdir / "distribution_ratio.png", dpi=200)
    plt.close()

    plt.figure()
    plt.bar(x, bps)
    plt.axhline(8.0, linestyle="--", color="gray")
    plt.xticks(x, datasets, rotation=20, ha="right")
    plt.ylabel("Output Bits per Input Byte")
    plt.title("Bits per Symbol by Distribution")
    plt.tight_layout()
    plt.savefig(outdir / "distribution_bits_per_symbol.png", dpi=200)
    plt.close()


def plot_scaling(rows: List[MetricRow], outdir: Path) -> None:
    exp_rows = [r for r in rows if r.exp_name == "size_scaling"]
    if not exp_rows:
        return

    for field in ("compress_ms", "decompress_ms", "compression_ratio"):
        plt.figure()
        for dist in sorted(set(r.dataset_name for r in exp_rows)):
            dist_rows = [r for r in exp_rows if r.dataset_name == dist]
            sizes = sorted(set(r.original_bytes for r in dist_rows))
            y = [statistics.mean(getattr(r, field) for r in dist_rows if r.original_bytes == s) for s in sizes]
            plt.plot(sizes, y, marker="o", label=dist)
        plt.xscale("log", base=2)
        plt.xlabel("Input Size (bytes)")
        plt.ylabel(field)
        plt.title(f"{field} vs Input Size")
        plt.legend()
        plt.tight_layout()
        plt.savefig(outdir / f"scaling_{field}.png", dpi=200)
        plt.close()


# Main

def parse_csv_list(s: str) -> List[str]:
    return [x.strip() for x in s.split(",") if x.strip()]

def run_experiments(generators: List[str], size_kb: int, sizes_kb: List[int], runs: int, seed: int) -> List[MetricRow]:
    rows: List[MetricRow] = []

    # fixed size, every distribution
    for name in generators:
        for run_id in range(1, runs + 1):
            data = generate_dataset(name, size_kb * 1024, seed + run_id)
            rows.append(run_one(data, "distribution", name, run_id))

    # growing sizes
    for name in generators:
        for kb in sizes_kb:
            for run_id in range(1, runs + 1):
                data = generate_dataset(name, kb * 1024, seed + 10_000 + kb + run_id)
                rows.append(run_one(data, "size_scaling", name, run_id))

    return rows

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Benchmark the static Huffman codec")
    ap.add_argument("--outdir", type=str, default="results", help="Output directory for CSV and plots")
    ap.add_argument("--runs", type=int, default=3, help="Repetitions per configuration")
    ap.add_argument("--seed", type=int, default=123, help="Base random seed")
    ap.add_argument("--size_kb", type=int, default=256, help="Input size in KB for the distribution experiment")
    ap.add_argument("--sizes_kb", type=str, default="4,16,64,256", help="Comma-separated sizes in KB for size scaling")
    ap.add_argument("--generators", type=str, default="uniform256,zipf128,repetitive90,english_like",
                    help="Comma-separated dataset generator names")
    ap.add_argument("--no_plots", action="store_true", help="Skip chart rendering")
    args = ap.parse_args(argv)

    outdir = Path(args.outdir)
    outdir.mkdir(parents=True, exist_ok=True)

    rows = run_experiments(
        parse_csv_list(args.generators),
        max(1, args.size_kb),
        [int(x) for x in parse_csv_list(args.sizes_kb)],
        max(1, args.runs),
        args.seed,
    )

    metrics_csv = outdir / "metrics.csv"
    summary_csv = outdir / "summary.csv"
    write_csv(metrics_csv, rows)
    group_summary(rows, summary_csv)

    if not args.no_plots:
        plot_distributions(rows, outdir)
        plot_scaling(rows, outdir)

    ok_rate = sum(r.correctness_ok for r in rows) / max(1, len(rows))
    print(f"Wrote {len(rows)} rows to {metrics_csv}")
    print(f"Wrote grouped summary to {summary_csv}")
    print(f"Correctness rate across all runs: {ok_rate:.3f}")
    if not args.no_plots:
        print("Charts saved in:", outdir.resolve())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
