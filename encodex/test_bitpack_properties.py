#!/usr/bin/env python3
"""
encodex - Bit Packer Property Tests
Property tests for the packer/unpacker engine.

Uses hypothesis; every property runs 100 examples.
"""

import pytest
from hypothesis import given, strategies as st, settings

from .alphabet import BASE16, BASE32, BASE32HEX, BASE64, BASE64URL
from .bitpack import BitPacker, BitUnpacker, encoded_length
from .exceptions import (
    InvalidLengthError,
    MalformedPaddingError,
    NonZeroPaddingBitsError,
    StreamClosedError,
)
from .models import PaddingPolicy


STANDARD_ALPHABETS = [BASE64, BASE64URL, BASE32, BASE32HEX, BASE16]


# ============================================================================
# Custom Strategies
# ============================================================================

alphabet_strategy = st.sampled_from(STANDARD_ALPHABETS)


@st.composite
def split_strategy(draw, data):
    """Cut a sequence into consecutive chunks at random points"""
    cuts = sorted(draw(st.lists(st.integers(min_value=0, max_value=len(data)), max_size=6)))
    bounds = [0] + cuts + [len(data)]
    return [data[a:b] for a, b in zip(bounds, bounds[1:])]


def pack(alphabet, data, pad=True):
    packer = BitPacker(alphabet, pad=pad)
    return packer.feed(data) + packer.finish()


def unpack(alphabet, text, padding=PaddingPolicy.REQUIRED):
    unpacker = BitUnpacker(alphabet, padding)
    return unpacker.feed(text) + unpacker.finish()


# ============================================================================
# Encode Direction
# ============================================================================

@settings(max_examples=100)
@given(alphabet=alphabet_strategy, data=st.binary(max_size=64), pad=st.booleans())
def test_output_length_is_predictable(alphabet, data, pad):
    """
    *For any* input, the packer emits ceil(8n / bits) data symbols, then
    padding up to the block boundary when padding is on.
    """
    text = pack(alphabet, data, pad)
    assert len(text) == encoded_length(len(data), alphabet, pad)
    data_symbols = len(text.rstrip("="))
    assert data_symbols == -(-len(data) * 8 // alphabet.bits)
    if pad:
        assert len(text) % alphabet.block_size == 0
    else:
        assert "=" not in text


@settings(max_examples=100)
@given(alphabet=alphabet_strategy, data=st.data())
def test_chunked_packing_matches_single_feed(alphabet, data):
    """
    *For any* split of the input, feeding the chunks one by one yields the
    same text as feeding everything at once.
    """
    payload = data.draw(st.binary(max_size=64))
    chunks = data.draw(split_strategy(payload))
    packer = BitPacker(alphabet)
    text = "".join(packer.feed(chunk) for chunk in chunks) + packer.finish()
    assert text == pack(alphabet, payload)


def test_empty_input_is_empty_output():
    for alphabet in STANDARD_ALPHABETS:
        assert pack(alphabet, b"") == ""
        assert unpack(alphabet, "") == b""


def test_tail_bits_are_zero_filled():
    # 0xFF -> 111111 11(0000)
    assert pack(BASE64, b"\xff") == "/w=="
    # 0xFF -> 11111 111(00)
    assert pack(BASE32, b"\xff") == "74======"


def test_packer_accepts_bytearray_and_memoryview():
    assert pack(BASE16, bytearray(b"\x01\xab")) == "01AB"
    assert pack(BASE16, memoryview(b"\x01\xab")) == "01AB"


def test_packer_rejects_text():
    with pytest.raises(TypeError):
        BitPacker(BASE64).feed("foo")


def test_packer_cannot_be_reused():
    packer = BitPacker(BASE64)
    packer.feed(b"f")
    packer.finish()
    assert packer.finished
    with pytest.raises(StreamClosedError):
        packer.feed(b"o")
    with pytest.raises(StreamClosedError):
        packer.finish()


# ============================================================================
# Decode Direction
# ============================================================================

@settings(max_examples=100)
@given(alphabet=alphabet_strategy, data=st.data())
def test_chunked_unpacking_matches_single_feed(alphabet, data):
    """
    *For any* valid text and any split of it, the unpacker returns the
    original bytes.
    """
    payload = data.draw(st.binary(max_size=64))
    text = pack(alphabet, payload)
    chunks = data.draw(split_strategy(text))
    unpacker = BitUnpacker(alphabet)
    decoded = b"".join(unpacker.feed(chunk) for chunk in chunks) + unpacker.finish()
    assert decoded == payload


@pytest.mark.parametrize("alphabet, residues", [
    (BASE64, [1]),
    (BASE32, [1, 3, 6]),
    (BASE32HEX, [1, 3, 6]),
    (BASE16, [1]),
])
def test_impossible_residues_are_invalid_length(alphabet, residues):
    zero = alphabet.symbols[0]
    for residue in residues:
        for blocks in (0, 2):
            text = zero * (blocks * alphabet.block_size + residue)
            with pytest.raises(InvalidLengthError) as exc_info:
                unpack(alphabet, text, PaddingPolicy.OPTIONAL)
            assert exc_info.value.symbol_count == len(text)


@pytest.mark.parametrize("alphabet, residues", [
    (BASE64, [2, 3]),
    (BASE32, [2, 4, 5, 7]),
])
def test_possible_residues_decode_without_padding(alphabet, residues):
    zero = alphabet.symbols[0]
    for residue in residues:
        decoded = unpack(alphabet, zero * residue, PaddingPolicy.OPTIONAL)
        assert decoded == b"\x00" * (residue * alphabet.bits // 8)


@pytest.mark.parametrize("alphabet, text", [
    (BASE64, "Zh=="),
    (BASE64, "Zm9="),
    (BASE32, "MZ======"),
    (BASE32HEX, "CP======"),
])
def test_nonzero_tail_bits_are_rejected(alphabet, text):
    with pytest.raises(NonZeroPaddingBitsError):
        unpack(alphabet, text)


@pytest.mark.parametrize("text", ["Q=Q=", "Zg==Zg==", "=Zg="])
def test_interior_padding_is_rejected(text):
    with pytest.raises(MalformedPaddingError):
        unpack(BASE64, text)


@pytest.mark.parametrize("text", ["Zg=", "Zg===", "Zm9v====", "===="])
def test_misaligned_padding_is_rejected(text):
    with pytest.raises(MalformedPaddingError):
        unpack(BASE64, text, PaddingPolicy.OPTIONAL)


@pytest.mark.parametrize("text, offset", [
    ("Zg=\n", 2),
    ("Zg=\n=\n=", 2),
    ("Zm\n9v\n=\n=", 6),
])
def test_misaligned_padding_reports_first_padding_offset(text, offset):
    unpacker = BitUnpacker(BASE64, PaddingPolicy.OPTIONAL, ignore="\n")
    unpacker.feed(text)
    with pytest.raises(MalformedPaddingError) as exc_info:
        unpacker.finish()
    assert exc_info.value.position == offset


def test_padding_policies():
    assert unpack(BASE64, "Zg", PaddingPolicy.OPTIONAL) == b"f"
    assert unpack(BASE64, "Zg==", PaddingPolicy.OPTIONAL) == b"f"
    assert unpack(BASE64, "Zg", PaddingPolicy.OMITTED) == b"f"
    with pytest.raises(MalformedPaddingError):
        unpack(BASE64, "Zg", PaddingPolicy.REQUIRED)
    with pytest.raises(MalformedPaddingError):
        unpack(BASE64, "Zg==", PaddingPolicy.OMITTED)


def test_ignored_characters_keep_offsets():
    unpacker = BitUnpacker(BASE64, ignore="\n")
    assert unpacker.feed("Zm\n9v") == b"foo"
    assert unpacker.position == 5
    assert unpacker.finish() == b""


def test_unpacker_cannot_be_reused():
    unpacker = BitUnpacker(BASE16)
    unpacker.feed("66")
    unpacker.finish()
    with pytest.raises(StreamClosedError):
        unpacker.feed("6F")
