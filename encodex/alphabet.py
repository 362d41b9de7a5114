#!/usr/bin/env python3
"""
encodex - Alphabet Tables
Forward (value -> symbol) and inverse (symbol -> value) mappings for the
RFC 4648 alphabets.

The five standard tables are built once at import time and never mutated.
Base64 and Base64url share everything except symbols 62 and 63.
"""

import math
from dataclasses import dataclass, field
from typing import Dict, Optional

from .exceptions import ConfigurationError, InvalidSymbolError
from .models import LetterCase, Variant


# symbol count -> bits per symbol
SUPPORTED_SIZES = {16: 4, 32: 5, 64: 6}

LINE_BREAKS = "\r\n"


@dataclass(frozen=True)
class Alphabet:
    """An encoding alphabet

    Attributes:
        name: display name, used in error messages
        symbols: one character per value, in value order
        padding: padding character, or None for alphabets without one
        case_insensitive: accept both letter cases when decoding
        bits: bits carried by each symbol
        block_size: symbols per repeating block (4, 8 or 2)
        bytes_per_block: input bytes per repeating block (3, 5 or 1)
    """
    name: str
    symbols: str
    padding: Optional[str] = "="
    case_insensitive: bool = False
    bits: int = field(init=False)
    block_size: int = field(init=False)
    bytes_per_block: int = field(init=False)
    _values: Dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        size = len(self.symbols)
        if size not in SUPPORTED_SIZES:
            raise ConfigurationError(
                f"alphabet '{self.name}' has {size} symbols, expected 16, 32 or 64",
                param_name="alphabet"
            )
        if len(set(self.symbols)) != size:
            raise ConfigurationError(
                f"alphabet '{self.name}' contains duplicate symbols",
                param_name="alphabet"
            )
        if any(c in LINE_BREAKS for c in self.symbols):
            raise ConfigurationError(
                f"alphabet '{self.name}' must not contain line breaks",
                param_name="alphabet"
            )
        if self.padding is not None:
            if len(self.padding) != 1:
                raise ConfigurationError(
                    f"padding must be a single character, got {self.padding!r}",
                    param_name="padding"
                )
            if self.padding in self.symbols or self.padding in LINE_BREAKS:
                raise ConfigurationError(
                    f"padding {self.padding!r} collides with alphabet '{self.name}'",
                    param_name="padding"
                )

        bits = SUPPORTED_SIZES[size]
        lcm = bits * 8 // math.gcd(bits, 8)

        values = {symbol: value for value, symbol in enumerate(self.symbols)}
        if self.case_insensitive:
            if not _case_foldable(self.symbols):
                raise ConfigurationError(
                    f"alphabet '{self.name}' mixes letter cases and cannot be case-insensitive",
                    param_name="letter_case"
                )
            for symbol, value in list(values.items()):
                values.setdefault(symbol.lower(), value)
                values.setdefault(symbol.upper(), value)
            if self.padding is not None and self.padding.swapcase() in values:
                raise ConfigurationError(
                    f"padding {self.padding!r} collides with alphabet '{self.name}'",
                    param_name="padding"
                )

        object.__setattr__(self, "bits", bits)
        object.__setattr__(self, "block_size", lcm // bits)
        object.__setattr__(self, "bytes_per_block", lcm // 8)
        object.__setattr__(self, "_values", values)

    def __len__(self) -> int:
        return len(self.symbols)

    def __contains__(self, symbol: str) -> bool:
        return symbol in self._values

    def symbol_for(self, value: int) -> str:
        """Return the symbol for a value in 0..len(self)-1."""
        if not 0 <= value < len(self.symbols):
            raise ValueError(f"value {value} out of range for alphabet '{self.name}'")
        return self.symbols[value]

    def value_for(self, symbol: str, position: Optional[int] = None) -> int:
        """Return the value of a symbol.

        Args:
            symbol: a single character
            position: input offset, reported in the error

        Raises:
            InvalidSymbolError: when the character is not part of this
                alphabet (the padding character included)
        """
        try:
            return self._values[symbol]
        except KeyError:
            raise InvalidSymbolError(symbol, position, self.name) from None

    def with_letter_case(self, letter_case: LetterCase) -> "Alphabet":
        """Derive the alphabet for a letter case option.

        Raises:
            ConfigurationError: for LOWER or INSENSITIVE on an alphabet that
                uses both cases (Base64 family)
        """
        letter_case = LetterCase(letter_case)
        if letter_case is LetterCase.UPPER:
            return self
        if not _case_foldable(self.symbols):
            raise ConfigurationError(
                f"letter case '{letter_case.value}' does not apply to {self.name}",
                param_name="letter_case"
            )
        if letter_case is LetterCase.LOWER:
            return Alphabet(self.name, self.symbols.lower(), self.padding)
        return Alphabet(self.name, self.symbols, self.padding, case_insensitive=True)


def _case_foldable(symbols: str) -> bool:
    return len({s.lower() for s in symbols}) == len(symbols)


# ============================================================================
# Standard Tables
# ============================================================================

BASE64 = Alphabet(
    "Base64",
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
)
BASE64URL = Alphabet("Base64url", BASE64.symbols[:62] + "-_")
BASE32 = Alphabet("Base32", "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567")
BASE32HEX = Alphabet("Base32hex", "0123456789ABCDEFGHIJKLMNOPQRSTUV")
BASE16 = Alphabet("Base16", "0123456789ABCDEF")

ALPHABETS = {
    Variant.BASE64: BASE64,
    Variant.BASE64URL: BASE64URL,
    Variant.BASE32: BASE32,
    Variant.BASE32HEX: BASE32HEX,
    Variant.BASE16: BASE16,
}


def get_alphabet(variant, letter_case: LetterCase = LetterCase.UPPER) -> Alphabet:
    """Return the table for a variant (or variant name) and letter case."""
    return ALPHABETS[Variant.from_name(variant)].with_letter_case(letter_case)
