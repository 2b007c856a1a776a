import struct
from typing import Dict, Tuple

from errors import InputTooLarge, MalformedHeader

# Little-endian, fixed width: entry count, then (byte, frequency) pairs
HEADER_COUNT = struct.Struct("<H")
HEADER_ENTRY = struct.Struct("<BI")

MAX_SYMBOLS = 256
MAX_FREQUENCY = 0xFFFFFFFF # 32-bit frequency field


def encode_header(frequency_table: Dict[int, int]) -> bytes:
    """
    Serialize a frequency table as entry count followed by
    (byte, frequency) pairs in ascending byte order.
    """
    out = bytearray(HEADER_COUNT.pack(len(frequency_table)))
    for symbol in sorted(frequency_table):
        frequency = frequency_table[symbol]
        if not 0 <= symbol <= 0xFF:
            raise ValueError(f"symbol {symbol} is not a byte value")
        if frequency < 1:
            raise ValueError(f"symbol {symbol} has frequency {frequency}; only occurring bytes belong in the table")
        if frequency > MAX_FREQUENCY:
            raise InputTooLarge(f"frequency {frequency} for symbol {symbol} does not fit the 32-bit header field")
        out += HEADER_ENTRY.pack(symbol, frequency)
    return bytes(out)


def decode_header(data: bytes) -> Tuple[Dict[int, int], int]:
    """
    Parse a header from the start of `data`.

    Returns the frequency table and the offset where the packed bit
    stream begins.
    """
    if len(data) < HEADER_COUNT.size:
        raise MalformedHeader(f"need {HEADER_COUNT.size} bytes for the entry count, got {len(data)}")
    (entry_count,) = HEADER_COUNT.unpack_from(data, 0)
    if entry_count > MAX_SYMBOLS:
        raise MalformedHeader(f"entry count {entry_count} exceeds {MAX_SYMBOLS}")

    offset = HEADER_COUNT.size
    end = offset + entry_count * HEADER_ENTRY.size
    if end > len(data):
        raise MalformedHeader(
            f"header declares {entry_count} entries ({end} bytes) but only {len(data)} bytes are available"
        )

    frequency_table = {}
    for symbol, frequency in HEADER_ENTRY.iter_unpack(data[offset:end]):
        if symbol in frequency_table:
            raise MalformedHeader(f"symbol {symbol} appears twice in the header")
        if frequency == 0:
            raise MalformedHeader(f"symbol {symbol} has a zero frequency")
        frequency_table[symbol] = frequency

    return {symbol: frequency_table[symbol] for symbol in sorted(frequency_table)}, end
