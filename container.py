import struct

from errors import FormatError
from huffman import EncodedResult

MAGIC = b"HUFF"   # 4 bytes
VERSION = 1       # 1 byte

# Header (big-endian):
# magic(4) version(1) padding_bits(1) tree_length(u32)
# followed by the tree JSON (UTF-8) and then the packed bytes
HEADER_FMT = ">4sBBI"
HEADER_SIZE = struct.calcsize(HEADER_FMT)


def dump_result(result):
    """Store an EncodedResult as one self-contained byte string."""
    tree = result.serialized_tree.encode("utf-8")
    header = struct.pack(HEADER_FMT, MAGIC, VERSION, result.padding_bits, len(tree))
    return header + tree + result.packed_bytes


def load_result(data):
    if len(data) < HEADER_SIZE:
        raise FormatError("Malformed container: header too short")
    magic, ver, padding_bits, tree_length = struct.unpack_from(HEADER_FMT, data)
    if magic != MAGIC:
        raise FormatError("Bad magic number (not a .huff container)")
    if ver != VERSION:
        raise FormatError(f"Unsupported container version: {ver}")

    tree_end = HEADER_SIZE + tree_length
    if len(data) < tree_end:
        raise FormatError("Malformed container: tree truncated")
    try:
        tree = bytes(data[HEADER_SIZE:tree_end]).decode("utf-8")
    except UnicodeDecodeError as e:
        raise FormatError(f"Malformed container: tree is not UTF-8 ({e})") from e

    return EncodedResult(serialized_tree=tree,
                         padding_bits=padding_bits,
                         packed_bytes=bytes(data[tree_end:]))
