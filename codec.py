"""
Static Huffman compression of a single byte stream.

Compressed layout:

    [entry count: uint16 LE]
    entry count x [byte: uint8][frequency: uint32 LE]
    [packed codes, MSB-first, last byte zero padded]

Empty input compresses to an empty file, and an empty file decompresses
to empty output.
"""

import io
from dataclasses import dataclass
from typing import BinaryIO, Callable

from bitpack import BitPacker, unpack_bits
from errors import IOUnavailable
from header import decode_header, encode_header
from huffman import CHUNK_SIZE, build_huffman_tree, count_frequencies, generate_huffman_codes

ProgressFn = Callable[[str], None]


def _silent(message: str) -> None:
    pass


@dataclass
class CodecStats:
    input_size: int
    output_size: int
    symbols: int     # number of original bytes
    distinct: int    # distinct byte values in the frequency table

    @property
    def ratio(self) -> float:
        return self.output_size / max(1, self.input_size)


# Streams

def compress_stream(src: BinaryIO, dst: BinaryIO, progress: ProgressFn = _silent) -> CodecStats:
    """
    Compress `src` into `dst`. The source is read twice, so a
    non-seekable source is buffered in memory first.
    """
    if not src.seekable():
        src = io.BytesIO(src.read())
    start = src.tell()

    progress("Building frequency table...")
    frequency_table = count_frequencies(src)
    symbols = sum(frequency_table.values())

    if not frequency_table:
        progress("Input is empty. Creating an empty compressed file.")
        return CodecStats(input_size=0, output_size=0, symbols=0, distinct=0)

    progress("Building Huffman tree...")
    root = build_huffman_tree(frequency_table)

    progress("Generating Huffman codes...")
    code_map = generate_huffman_codes(root)

    progress("Writing header...")
    header = encode_header(frequency_table)
    dst.write(header)
    written = len(header)

    progress("Writing compressed data...")
    src.seek(start)
    packer = BitPacker(code_map)
    chunk = src.read(CHUNK_SIZE)
    while chunk:
        out = packer.write(chunk)
        dst.write(out)
        written += len(out)
        chunk = src.read(CHUNK_SIZE)
    tail = packer.flush()
    dst.write(tail)
    written += len(tail)

    return CodecStats(input_size=symbols, output_size=written, symbols=symbols, distinct=len(frequency_table))


def decompress_stream(src: BinaryIO, dst: BinaryIO, progress: ProgressFn = _silent) -> CodecStats:
    """
    Decompress `src` into `dst`. Nothing is written to `dst` unless the
    whole stream decodes.
    """
    data = src.read()
    decoded, stats = _decode(data, progress)
    dst.write(decoded)
    return stats


def _decode(data: bytes, progress: ProgressFn):
    if not data:
        progress("Input is empty. Creating an empty output file.")
        return b"", CodecStats(input_size=0, output_size=0, symbols=0, distinct=0)

    progress("Reading header...")
    frequency_table, offset = decode_header(data)
    total_symbols = sum(frequency_table.values())
    if not frequency_table:
        return b"", CodecStats(input_size=len(data), output_size=0, symbols=0, distinct=0)

    progress("Rebuilding Huffman tree...")
    root = build_huffman_tree(frequency_table)

    progress("Decoding data...")
    decoded = unpack_bits(memoryview(data)[offset:], root, total_symbols)
    return decoded, CodecStats(
        input_size=len(data),
        output_size=len(decoded),
        symbols=total_symbols,
        distinct=len(frequency_table),
    )


# Bytes

def compress(data: bytes) -> bytes:
    out = io.BytesIO()
    compress_stream(io.BytesIO(data), out)
    return out.getvalue()


def decompress(data: bytes) -> bytes:
    decoded, _ = _decode(bytes(data), _silent)
    return decoded


# Files

def _open(path, mode: str):
    try:
        return open(path, mode)
    except OSError as e:
        raise IOUnavailable(path, e.strerror or str(e)) from e


def _read_path(path) -> bytes:
    with _open(path, "rb") as src:
        try:
            return src.read()
        except OSError as e:
            raise IOUnavailable(path, e.strerror or str(e)) from e


def _write_path(path, data: bytes) -> None:
    with _open(path, "wb") as dst:
        try:
            dst.write(data)
        except OSError as e:
            raise IOUnavailable(path, e.strerror or str(e)) from e


def compress_file(input_path, output_path, progress: ProgressFn = _silent) -> CodecStats:
    """
    Compress a file. The whole result is built in memory before the
    destination is opened, so a failure never leaves a partial file.
    """
    data = _read_path(input_path)
    out = io.BytesIO()
    stats = compress_stream(io.BytesIO(data), out, progress)
    _write_path(output_path, out.getvalue())
    return stats


def decompress_file(input_path, output_path, progress: ProgressFn = _silent) -> CodecStats:
    data = _read_path(input_path)
    decoded, stats = _decode(data, progress)
    _write_path(output_path, decoded)
    return stats
