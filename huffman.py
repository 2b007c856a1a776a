import heapq
from collections import Counter
from typing import BinaryIO, Dict, Optional, Union

CHUNK_SIZE = 64 * 1024

class HuffmanNode: # Node for Huffman tree
    __slots__ = ("symbol", "frequency", "left", "right")

    def __init__(self, symbol, frequency, left=None, right=None):
        self.symbol = symbol    # byte, or None for internal nodes
        self.frequency = frequency
        self.left = left
        self.right = right

    @property
    def is_leaf(self) -> bool:
        return self.symbol is not None

    def __repr__(self):
        if self.is_leaf:
            return f"HuffmanNode(symbol={self.symbol}, frequency={self.frequency})"
        return f"HuffmanNode(internal, frequency={self.frequency})"


def count_frequencies(source: Union[bytes, bytearray, memoryview, BinaryIO]) -> Dict[int, int]: # source: raw bytes or a readable binary stream
    counts = Counter()
    if isinstance(source, (bytes, bytearray, memoryview)):
        counts.update(bytes(source))
    else:
        chunk = source.read(CHUNK_SIZE)
        while chunk:
            counts.update(chunk)
            chunk = source.read(CHUNK_SIZE)

    # ascending byte order, so the header and tree seeding see a stable order
    return {symbol: counts[symbol] for symbol in sorted(counts)}


def build_huffman_tree(frequency_table: Dict[int, int]) -> HuffmanNode: # frequency_table: dict of symbol -> frequency
    """
    Greedy Huffman merge. Ties on frequency are broken by arrival order:
    leaves are seeded in ascending byte order, and each merged node is
    numbered after everything already in the heap. The first node popped
    becomes the left child.
    """
    if not frequency_table:
        raise ValueError("cannot build a Huffman tree from an empty frequency table")

    priority_queue = []
    sequence = 0
    for symbol in sorted(frequency_table):
        priority_queue.append((frequency_table[symbol], sequence, HuffmanNode(symbol, frequency_table[symbol])))
        sequence += 1
    heapq.heapify(priority_queue)

    # One distinct symbol: wrap it so its code is "0" rather than ""
    if len(priority_queue) == 1:
        frequency, _, leaf = priority_queue[0]
        return HuffmanNode(None, frequency, left=leaf)

    while len(priority_queue) > 1:
        left_freq, _, left = heapq.heappop(priority_queue)
        right_freq, _, right = heapq.heappop(priority_queue)
        merged_node = HuffmanNode(None, left_freq + right_freq, left, right) # internal node with combined frequency
        heapq.heappush(priority_queue, (merged_node.frequency, sequence, merged_node))
        sequence += 1

    return priority_queue[0][2] # root of the tree


def generate_huffman_codes(root: HuffmanNode) -> Dict[int, str]: # root: root of the Huffman tree
    if root is None:
        raise ValueError("no tree to generate codes from")
    if root.is_leaf:
        # an empty code can't be decoded
        raise ValueError("tree root is a leaf; wrap single symbols before generating codes")

    codes = {}
    def generate_codes_helper(node: Optional[HuffmanNode], current_code: str): # depth is at most 255 for a 256-symbol alphabet
        if node is None:
            return

        # Leaf node -> assign code
        if node.is_leaf:
            codes[node.symbol] = current_code
            return

        generate_codes_helper(node.left, current_code + '0')
        generate_codes_helper(node.right, current_code + '1')

    generate_codes_helper(root, '')
    return codes # return the mapping of symbols to their corresponding Huffman codes


def tree_depth(root: Optional[HuffmanNode]) -> int:
    if root is None or root.is_leaf:
        return 0
    return 1 + max(tree_depth(root.left), tree_depth(root.right))


def code_lengths(codes: Dict[int, str]) -> Dict[int, int]:
    return {symbol: len(code) for symbol, code in codes.items()}
