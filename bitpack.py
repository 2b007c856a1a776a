from typing import Dict, Iterable

from errors import CorruptStream, TruncatedStream
from huffman import HuffmanNode


class BitPacker:
    """
    Packs Huffman codes MSB-first into whole bytes.

    `write` returns every byte completed so far; `flush` returns the final
    partial byte (left-aligned, zero padded) or nothing if the stream
    ended on a byte boundary. The number of pad bits is not recorded
    anywhere; the decoder stops on the symbol count instead.
    """

    def __init__(self, code_map: Dict[int, str]):
        self._codes = {}
        for symbol, code in code_map.items():
            if not code:
                raise ValueError(f"empty code for symbol {symbol}")
            self._codes[symbol] = (int(code, 2), len(code))
        self._acc = 0
        self._acc_bits = 0
        self.bit_length = 0

    def write(self, data: Iterable[int]) -> bytes:
        out = bytearray()
        acc = self._acc
        acc_bits = self._acc_bits
        total = 0

        for b in data:
            value, length = self._codes[b]
            acc = (acc << length) | value
            acc_bits += length
            total += length
            while acc_bits >= 8:
                acc_bits -= 8
                out.append((acc >> acc_bits) & 0xFF)
            acc &= (1 << acc_bits) - 1

        self._acc = acc
        self._acc_bits = acc_bits
        self.bit_length += total
        return bytes(out)

    def flush(self) -> bytes:
        if self._acc_bits == 0:
            return b""
        pad_bits = 8 - self._acc_bits
        last = (self._acc << pad_bits) & 0xFF
        self._acc = 0
        self._acc_bits = 0
        return bytes([last])


def pack_bits(data: bytes, code_map: Dict[int, str]) -> bytes:
    packer = BitPacker(code_map)
    return packer.write(data) + packer.flush()


def unpack_bits(packed: bytes, root: HuffmanNode, total_symbols: int) -> bytes:
    """
    Decode packed bits using the Huffman tree.

    Stops as soon as `total_symbols` symbols have been produced, so the
    padding in the last byte is never read as data.
    """
    if total_symbols <= 0:
        return b""
    if root is None or root.is_leaf:
        raise ValueError("decoding needs a tree of depth >= 1")

    decoded = bytearray()
    node = root
    remaining = total_symbols

    for byte in packed:
        for i in range(7, -1, -1):
            node = node.right if (byte >> i) & 1 else node.left
            if node is None:
                raise CorruptStream(f"bit stream selects a missing branch after {len(decoded)} symbols")

            # Leaf
            if node.is_leaf:
                decoded.append(node.symbol)
                remaining -= 1
                if remaining == 0:
                    return bytes(decoded)
                node = root

    raise TruncatedStream(f"bit stream ended after {len(decoded)} of {total_symbols} symbols")
