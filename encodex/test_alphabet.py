#!/usr/bin/env python3
"""
encodex - Alphabet Table Tests
Unit tests for the alphabet tables.
"""

import pytest

from .alphabet import (
    ALPHABETS,
    BASE16,
    BASE32,
    BASE32HEX,
    BASE64,
    BASE64URL,
    Alphabet,
    get_alphabet,
)
from .exceptions import ConfigurationError, InvalidSymbolError
from .models import LetterCase, Variant


class TestStandardTables:
    """The five RFC 4648 tables"""

    @pytest.mark.parametrize("alphabet, size, bits, block_size, bytes_per_block", [
        (BASE64, 64, 6, 4, 3),
        (BASE64URL, 64, 6, 4, 3),
        (BASE32, 32, 5, 8, 5),
        (BASE32HEX, 32, 5, 8, 5),
        (BASE16, 16, 4, 2, 1),
    ])
    def test_geometry(self, alphabet, size, bits, block_size, bytes_per_block):
        assert len(alphabet) == size
        assert alphabet.bits == bits
        assert alphabet.block_size == block_size
        assert alphabet.bytes_per_block == bytes_per_block
        assert alphabet.padding == "="

    def test_base64url_differs_only_in_last_two_symbols(self):
        assert BASE64URL.symbols[:62] == BASE64.symbols[:62]
        assert BASE64.symbols[62:] == "+/"
        assert BASE64URL.symbols[62:] == "-_"

    def test_every_variant_has_a_table(self):
        assert set(ALPHABETS) == set(Variant)

    @pytest.mark.parametrize("alphabet", [BASE64, BASE64URL, BASE32, BASE32HEX, BASE16])
    def test_symbol_and_value_are_inverse(self, alphabet):
        for value in range(len(alphabet)):
            assert alphabet.value_for(alphabet.symbol_for(value)) == value

    def test_symbol_for_out_of_range(self):
        with pytest.raises(ValueError):
            BASE64.symbol_for(64)
        with pytest.raises(ValueError):
            BASE16.symbol_for(-1)


class TestValueFor:
    """Inverse lookups"""

    def test_known_values(self):
        assert BASE64.value_for("A") == 0
        assert BASE64.value_for("/") == 63
        assert BASE64URL.value_for("_") == 63
        assert BASE32.value_for("7") == 31
        assert BASE32HEX.value_for("V") == 31
        assert BASE16.value_for("F") == 15

    @pytest.mark.parametrize("alphabet, symbol", [
        (BASE64, "="),
        (BASE64, "_"),
        (BASE64, " "),
        (BASE64, "\n"),
        (BASE64URL, "+"),
        (BASE32, "a"),
        (BASE32, "1"),
        (BASE32HEX, "W"),
        (BASE16, "g"),
    ])
    def test_foreign_symbols_are_rejected(self, alphabet, symbol):
        with pytest.raises(InvalidSymbolError) as exc_info:
            alphabet.value_for(symbol, position=7)
        assert exc_info.value.symbol == symbol
        assert exc_info.value.position == 7
        assert exc_info.value.alphabet == alphabet.name

    def test_contains(self):
        assert "Q" in BASE32
        assert "q" not in BASE32
        assert "=" not in BASE64


class TestLetterCase:
    """Derived alphabets for the letter case option"""

    def test_upper_returns_same_table(self):
        assert BASE32.with_letter_case(LetterCase.UPPER) is BASE32

    def test_lower_emits_lowercase(self):
        lower = BASE32.with_letter_case(LetterCase.LOWER)
        assert lower.symbols == "abcdefghijklmnopqrstuvwxyz234567"
        assert lower.value_for("a") == 0
        with pytest.raises(InvalidSymbolError):
            lower.value_for("A")

    def test_insensitive_accepts_both_cases(self):
        table = BASE16.with_letter_case(LetterCase.INSENSITIVE)
        assert table.symbols == BASE16.symbols
        assert table.value_for("f") == 15
        assert table.value_for("F") == 15
        assert table.value_for("0") == 0

    @pytest.mark.parametrize("letter_case", [LetterCase.LOWER, LetterCase.INSENSITIVE])
    def test_mixed_case_alphabets_refuse(self, letter_case):
        with pytest.raises(ConfigurationError):
            BASE64.with_letter_case(letter_case)

    def test_get_alphabet_by_name(self):
        assert get_alphabet("base32hex") is BASE32HEX
        assert get_alphabet(Variant.BASE16, LetterCase.LOWER).symbols == "0123456789abcdef"


class TestCustomAlphabets:
    """Validation of hand-built alphabets"""

    def test_valid_custom_alphabet(self):
        crockford = Alphabet("Crockford", "0123456789ABCDEFGHJKMNPQRSTVWXYZ", padding=None)
        assert crockford.bits == 5
        assert crockford.padding is None
        assert crockford.value_for("Z") == 31

    def test_wrong_size(self):
        with pytest.raises(ConfigurationError):
            Alphabet("short", "ABC")

    def test_duplicate_symbols(self):
        with pytest.raises(ConfigurationError):
            Alphabet("dup", "0123456789ABCDEE")

    def test_padding_inside_alphabet(self):
        with pytest.raises(ConfigurationError):
            Alphabet("pad", "0123456789ABCDEF", padding="A")

    def test_multi_character_padding(self):
        with pytest.raises(ConfigurationError):
            Alphabet("pad", "0123456789ABCDEF", padding="==")

    def test_line_breaks_are_not_symbols(self):
        with pytest.raises(ConfigurationError):
            Alphabet("nl", "0123456789ABCDE\n")

    def test_tables_are_immutable(self):
        with pytest.raises(AttributeError):
            BASE64.symbols = "x" * 64
