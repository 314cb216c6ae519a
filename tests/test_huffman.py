import math
from itertools import permutations

import pytest

from config import SAMPLE_TEXT
from errors import CorruptStreamError, EmptyInputError, UnknownSymbolError
from huffman import (
    build_huffman_tree,
    calculate_frequency,
    compression_stats,
    decode,
    encode,
    filter_text,
    generate_codes,
    pack_codes,
)
from nodes import Internal, Leaf


def _roundtrip(text, filter=False):
    result = encode(text, filter=filter)
    return decode(result.packed_bytes, result.padding_bits, result.serialized_tree)


def test_filter_lowercases_and_keeps_accepted_characters():
    assert filter_text("Hello, World!\n") == "hello, world!\n"


def test_filter_drops_unsupported_characters():
    assert filter_text("It's 42 o'clock; OK?") == "its  oclock ok"


def test_frequency_counts_repeats():
    assert calculate_frequency("abacab") == {"a": 3, "b": 2, "c": 1}


def test_tree_shape_for_abacab():
    root = build_huffman_tree(calculate_frequency("abacab"))

    assert isinstance(root, Internal)
    assert root.freq == 6
    assert isinstance(root.left, Leaf) and root.left.symbol == "a"
    assert isinstance(root.right, Internal) and root.right.freq == 3
    assert root.right.left.symbol == "c"
    assert root.right.right.symbol == "b"


def test_codes_for_abacab():
    codes = generate_codes(build_huffman_tree(calculate_frequency("abacab")))
    assert codes == {"a": "0", "c": "10", "b": "11"}


def test_encode_abacab_bytes():
    result = encode("abacab", filter=False)
    # 0 11 0 10 0 11 -> 01101001 1(0000000)
    assert result.packed_bytes == b"\x69\x80"
    assert result.padding_bits == 7
    assert _roundtrip("abacab") == "abacab"


def test_stream_ending_on_byte_boundary_has_no_padding_byte():
    result = encode("abababab", filter=False)
    assert result.packed_bytes == b"\x55"
    assert result.padding_bits == 0
    assert _roundtrip("abababab") == "abababab"


def test_filtered_roundtrip_returns_filtered_text():
    result = encode("Hello, World!\n", filter=True)
    decoded = decode(result.packed_bytes, result.padding_bits, result.serialized_tree)
    assert decoded == "hello, world!\n"


def test_encode_filters_by_default():
    assert encode("ABAB") == encode("abab", filter=False)


def test_sample_text_roundtrip_unfiltered():
    assert _roundtrip(SAMPLE_TEXT) == SAMPLE_TEXT


def test_single_symbol_uses_one_bit_code():
    root = build_huffman_tree(calculate_frequency("aaaa"))
    assert isinstance(root, Leaf)
    assert generate_codes(root) == {"a": "0"}

    result = encode("aaaa", filter=False)
    assert result.packed_bytes == b"\x00"
    assert result.padding_bits == 4
    assert _roundtrip("aaaa") == "aaaa"


def test_single_symbol_stream_with_one_bit_is_corrupt():
    tree = encode("aaaa", filter=False).serialized_tree
    with pytest.raises(CorruptStreamError):
        decode(b"\x80", 4, tree)


def test_empty_input_raises():
    with pytest.raises(EmptyInputError):
        encode("", filter=False)


def test_input_filtered_to_nothing_raises():
    with pytest.raises(EmptyInputError):
        encode("123?", filter=True)


def test_pack_codes_rejects_unknown_symbol():
    with pytest.raises(UnknownSymbolError) as excinfo:
        pack_codes("abz", {"a": "0", "b": "1"})
    assert excinfo.value.symbol == "z"


def test_truncated_stream_raises():
    tree = encode("abacab", filter=False).serialized_tree
    # a single '1' bit stops inside the c/b subtree
    with pytest.raises(CorruptStreamError):
        decode(b"\x80", 7, tree)


@pytest.mark.parametrize("padding_bits", [-1, 8, 9])
def test_padding_out_of_range_raises(padding_bits):
    result = encode("abacab", filter=False)
    with pytest.raises(CorruptStreamError):
        decode(result.packed_bytes, padding_bits, result.serialized_tree)


def test_codes_are_prefix_free():
    codes = generate_codes(build_huffman_tree(calculate_frequency(SAMPLE_TEXT)))
    assert len(codes) == len(set(SAMPLE_TEXT))
    for a, b in permutations(codes.values(), 2):
        assert not b.startswith(a)


def test_byte_count_matches_total_bits():
    codes = generate_codes(build_huffman_tree(calculate_frequency(SAMPLE_TEXT)))
    total_bits = sum(len(codes[ch]) for ch in SAMPLE_TEXT)

    result = encode(SAMPLE_TEXT, filter=False)
    assert len(result.packed_bytes) == math.ceil(total_bits / 8)
    assert result.padding_bits == (-total_bits) % 8


def test_encode_is_deterministic():
    assert encode(SAMPLE_TEXT, filter=True) == encode(SAMPLE_TEXT, filter=True)


def test_compression_stats():
    result = encode("abacab", filter=False)
    assert compression_stats("abacab", result) == {
        "original_size": 6,
        "compressed_size": 2,
        "saved": 4,
        "saved_percent": 66.67,
    }
