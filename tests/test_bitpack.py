import pytest

from bitpack import BitPacker, pack_bits, unpack_bits
from errors import CorruptStream, TruncatedStream
from huffman import build_huffman_tree, count_frequencies, generate_huffman_codes


def _codes(data):
    root = build_huffman_tree(count_frequencies(data))
    return root, generate_huffman_codes(root)


def test_single_symbol_packs_to_zero_byte():
    root, codes = _codes(b"A")
    assert pack_bits(b"A", codes) == b"\x00"
    assert unpack_bits(b"\x00", root, 1) == b"A"


def test_msb_first_with_zero_padding():
    # c="0", a="10", b="11"
    codes = {ord("c"): "0", ord("a"): "10", ord("b"): "11"}
    assert pack_bits(b"abc", codes) == bytes([0b10110000])
    assert pack_bits(b"aaaab", codes) == bytes([0b10101010, 0b11000000])


def test_exact_byte_boundary_has_no_pad_byte():
    codes = {ord("c"): "0", ord("a"): "10", ord("b"): "11"}
    assert pack_bits(b"aaaa", codes) == bytes([0b10101010])


def test_packer_is_incremental():
    _, codes = _codes(b"hello world, hello huffman")
    packer = BitPacker(codes)
    chunks = [packer.write(part) for part in (b"hello ", b"world, ", b"hello huffman")]
    chunks.append(packer.flush())
    assert b"".join(chunks) == pack_bits(b"hello world, hello huffman", codes)
    assert packer.bit_length == sum(len(codes[b]) for b in b"hello world, hello huffman")


def test_packer_rejects_empty_code():
    with pytest.raises(ValueError):
        BitPacker({65: ""})


def test_unpack_stops_at_symbol_count():
    root, codes = _codes(b"aabbbcccc")
    packed = pack_bits(b"ab", codes)
    # padding bits would decode as extra "c" symbols if they were read
    assert unpack_bits(packed, root, 2) == b"ab"


def test_unpack_stops_mid_byte_for_single_symbol():
    root, _ = _codes(b"AAA")
    assert unpack_bits(b"\x00", root, 3) == b"AAA"


def test_unpack_truncated_raises():
    data = b"This is a test" * 20
    root, codes = _codes(data)
    packed = pack_bits(data, codes)
    with pytest.raises(TruncatedStream):
        unpack_bits(packed[:-2], root, len(data))


def test_unpack_empty_buffer_raises_truncated():
    root, _ = _codes(b"xy")
    with pytest.raises(TruncatedStream):
        unpack_bits(b"", root, 1)


def test_unpack_missing_branch_is_corrupt():
    root, _ = _codes(b"AAAA")
    with pytest.raises(CorruptStream):
        unpack_bits(b"\x80", root, 4)


def test_unpack_zero_symbols():
    root, _ = _codes(b"xy")
    assert unpack_bits(b"\xff", root, 0) == b""
