"""
Command-line front end.

How to run:
  huffman c notes.txt notes.huff
  huffman decompress notes.huff notes.txt
  huffman -q c big.bin big.huff
"""

import argparse
import sys
from typing import List, Optional

import codec
from errors import CodecError

COMMANDS = {
    "c": "compress",
    "compress": "compress",
    "d": "decompress",
    "decompress": "decompress",
}


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="huffman", description="Static Huffman file compressor")
    ap.add_argument("command", choices=sorted(COMMANDS), help="c/compress or d/decompress")
    ap.add_argument("input_file", help="File to read")
    ap.add_argument("output_file", help="File to write")
    ap.add_argument("-q", "--quiet", action="store_true", help="Only print errors")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    command = COMMANDS[args.command]
    progress = (lambda message: None) if args.quiet else print

    try:
        if command == "compress":
            stats = codec.compress_file(args.input_file, args.output_file, progress)
        else:
            stats = codec.decompress_file(args.input_file, args.output_file, progress)
    except CodecError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not args.quiet:
        summary = f"{stats.input_size} -> {stats.output_size} bytes"
        if command == "compress":
            summary += f" (compression ratio {stats.ratio:.3f})"
        print(f"{command.capitalize()}ion successful! {summary}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
