import heapq
import logging
from collections import Counter
from dataclasses import dataclass
from itertools import count

from bitstream import BitWriter, iter_bits
from errors import CorruptStreamError, EmptyInputError, UnknownSymbolError
from nodes import Internal, Leaf
from tree_json import deserialize_tree, serialize_tree

logger = logging.getLogger(__name__)

ACCEPTED_CHARACTERS = "abcdefghijklmnopqrstuvwxyz ,.!\n"


### INPUT FILTER ###
def filter_text(text):
    """Lowercase the text and drop every character outside ACCEPTED_CHARACTERS."""
    return "".join(ch for ch in text.lower() if ch in ACCEPTED_CHARACTERS)


### FREQUENCY COUNTING ###
def calculate_frequency(text):
    """Count each character. Keys keep first-occurrence order."""
    return Counter(text)


### TREE AND CODE GENERATION ###
def build_huffman_tree(frequency):
    """
    Builds the Huffman tree by repeatedly merging the two lowest-weight nodes.

    Ties are broken by creation order: leaves in the order of `frequency`,
    then merged nodes in the order they were made. The first node popped
    becomes the '0' child. A single distinct symbol gives a bare Leaf root.
    """
    if not frequency:
        raise EmptyInputError("Cannot build a Huffman tree without any symbols")

    sequence = count()
    priority_queue = [(freq, next(sequence), Leaf(symbol, freq))
                      for symbol, freq in frequency.items()]
    heapq.heapify(priority_queue)

    while len(priority_queue) > 1:
        left_freq, _, left = heapq.heappop(priority_queue)
        right_freq, _, right = heapq.heappop(priority_queue)
        merged_freq = left_freq + right_freq
        heapq.heappush(priority_queue,
                       (merged_freq, next(sequence), Internal(left, right, merged_freq)))

    root = priority_queue[0][2]
    logger.debug("Built Huffman tree for %d distinct symbols", len(frequency))
    return root


def generate_codes(root):
    """Walk the tree and return {symbol: bit string}."""
    # Single-symbol alphabet: the root is the leaf, give it a one-bit code
    if isinstance(root, Leaf):
        return {root.symbol: "0"}

    huffman_codes = {}

    def generate_codes_recursive(node, current_code):
        if isinstance(node, Leaf):
            huffman_codes[node.symbol] = current_code
            return
        generate_codes_recursive(node.left, current_code + "0")
        generate_codes_recursive(node.right, current_code + "1")

    generate_codes_recursive(root, "")
    return huffman_codes


### ENCODING AND DECODING ###
def pack_codes(text, codes):
    """Concatenate the code of every symbol in `text`. Returns (packed_bytes, padding_bits)."""
    # Convert each code to (int value, length) once so the writer works on integers
    table = {symbol: (int(code, 2), len(code)) for symbol, code in codes.items()}
    writer = BitWriter()
    for ch in text:
        try:
            value, length = table[ch]
        except KeyError:
            raise UnknownSymbolError(ch) from None
        writer.write(value, length)

    packed, padding_bits = writer.finish()
    logger.debug("Packed %d bits into %d bytes (%d padding bits)",
                 writer.total_bits, len(packed), padding_bits)
    return packed, padding_bits


def decode_bits(message, padding_bits, root):
    """Walk the tree one bit at a time, emitting a symbol at every leaf."""
    output = []

    if isinstance(root, Leaf):
        for bit in iter_bits(message, padding_bits):
            if bit != 0:
                raise CorruptStreamError("Single-symbol stream contains a 1 bit")
            output.append(root.symbol)
        return "".join(output)

    current_node = root
    for bit in iter_bits(message, padding_bits):
        current_node = current_node.right if bit else current_node.left
        if isinstance(current_node, Leaf):
            output.append(current_node.symbol)
            current_node = root

    if current_node is not root:
        raise CorruptStreamError("Bit stream ended in the middle of a code")
    return "".join(output)


@dataclass(frozen=True)
class EncodedResult:
    serialized_tree: str
    padding_bits: int
    packed_bytes: bytes


def encode(text, filter=True):
    """Huffman-encode `text`, optionally passing it through filter_text first."""
    filtered_input = filter_text(text) if filter else text

    frequency = calculate_frequency(filtered_input)
    root = build_huffman_tree(frequency)
    codes = generate_codes(root)
    packed, padding_bits = pack_codes(filtered_input, codes)

    return EncodedResult(serialized_tree=serialize_tree(root),
                         padding_bits=padding_bits,
                         packed_bytes=packed)


def decode(packed_bytes, padding_bits, serialized_tree):
    """Rebuild the tree from its serialized form and decode the packed bytes."""
    root = deserialize_tree(serialized_tree)
    return decode_bits(packed_bytes, padding_bits, root)


def compression_stats(text, result):
    """Size report comparing the text length with the packed byte count."""
    original_size = len(text)
    compressed_size = len(result.packed_bytes)
    saved = original_size - compressed_size
    saved_percent = round(saved / original_size * 100, 2) if original_size else 0
    return {
        "original_size": original_size,
        "compressed_size": compressed_size,
        "saved": saved,
        "saved_percent": saved_percent,
    }
