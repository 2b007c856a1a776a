import struct

import pytest

from errors import CodecError, InputTooLarge, MalformedHeader
from header import HEADER_COUNT, HEADER_ENTRY, MAX_FREQUENCY, decode_header, encode_header


def test_encode_layout_is_exact():
    data = encode_header({ord("b"): 3, ord("a"): 2})
    assert data == struct.pack("<H", 2) + struct.pack("<BI", ord("a"), 2) + struct.pack("<BI", ord("b"), 3)
    assert len(data) == HEADER_COUNT.size + 2 * HEADER_ENTRY.size == 12


@pytest.mark.parametrize("table", [
    {65: 1},
    {0: 1, 255: MAX_FREQUENCY},
    {b: b + 1 for b in range(256)},
])
def test_decode_inverts_encode(table):
    data = encode_header(table)
    decoded, offset = decode_header(data + b"\xff\x00")
    assert decoded == table
    assert offset == len(data)


def test_empty_table_header():
    assert encode_header({}) == b"\x00\x00"
    assert decode_header(b"\x00\x00") == ({}, 2)


def test_encode_rejects_oversized_frequency():
    with pytest.raises(InputTooLarge) as excinfo:
        encode_header({1: MAX_FREQUENCY + 1})
    assert isinstance(excinfo.value, CodecError)


def test_encode_rejects_zero_frequency():
    with pytest.raises(ValueError):
        encode_header({1: 0})


def test_encode_rejects_non_byte_symbol():
    with pytest.raises(ValueError):
        encode_header({256: 1})


@pytest.mark.parametrize("data", [
    b"",
    b"\x01",
    struct.pack("<H", 1),
    struct.pack("<H", 2) + struct.pack("<BI", 1, 5),
    struct.pack("<H", 1) + b"\x41\x01\x00",
])
def test_decode_rejects_short_input(data):
    with pytest.raises(MalformedHeader):
        decode_header(data)


def test_decode_rejects_too_many_entries():
    data = struct.pack("<H", 257) + b"".join(struct.pack("<BI", i % 256, 1) for i in range(257))
    with pytest.raises(MalformedHeader):
        decode_header(data)


def test_decode_rejects_duplicate_symbol():
    data = struct.pack("<H", 2) + struct.pack("<BI", 7, 1) + struct.pack("<BI", 7, 2)
    with pytest.raises(MalformedHeader):
        decode_header(data)


def test_decode_rejects_zero_frequency():
    data = struct.pack("<H", 1) + struct.pack("<BI", 7, 0)
    with pytest.raises(MalformedHeader):
        decode_header(data)


def test_decode_returns_ascending_order():
    data = struct.pack("<H", 2) + struct.pack("<BI", 9, 1) + struct.pack("<BI", 3, 4)
    table, _ = decode_header(data)
    assert list(table) == [3, 9]
