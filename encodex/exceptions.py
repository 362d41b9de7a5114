#!/usr/bin/env python3
"""
encodex - Exception Classes
Exception hierarchy for the codec engine and its command-line front end.
"""

from typing import Optional


class EncodexError(Exception):
    """Base class for every error raised by encodex."""

    def __init__(self, message: str, context: str = ""):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.context:
            return f"[{self.context}] {self.message}"
        return self.message


# ============================================================================
# Decode Errors
# ============================================================================

class DecodeError(EncodexError):
    """Encoded input was rejected.

    decode() returns nothing for rejected input; Decoder.update() and
    decode_stream() may already have produced the bytes that preceded it.

    Attributes:
        position: offset into the encoded input where the problem was
            detected, or None when it concerns the input as a whole
    """

    def __init__(self, message: str, position: Optional[int] = None):
        self.position = position
        super().__init__(message, context="decode")


class InvalidSymbolError(DecodeError):
    """A character outside the active alphabet appeared in a data position.

    Examples:
        - '_' in standard Base64
        - whitespace when line breaks are not tolerated
        - lowercase letters in strict Base32
    """

    def __init__(self, symbol: str, position: Optional[int] = None, alphabet: str = ""):
        self.symbol = symbol
        self.alphabet = alphabet
        where = f" at offset {position}" if position is not None else ""
        name = f" {alphabet}" if alphabet else ""
        super().__init__(f"invalid{name} symbol {symbol!r}{where}", position)


class MalformedPaddingError(DecodeError):
    """Padding is interior, misaligned, missing, or not permitted."""


class InvalidLengthError(DecodeError):
    """The number of data symbols cannot have come from a whole number of bytes."""

    def __init__(self, message: str, symbol_count: int = 0):
        self.symbol_count = symbol_count
        super().__init__(message)


class NonZeroPaddingBitsError(DecodeError):
    """The unused bits of the final symbol are not zero."""


# ============================================================================
# Usage Errors
# ============================================================================

class ConfigurationError(EncodexError):
    """An option, alphabet definition or config file is invalid.

    Examples:
        - unknown variant name
        - negative wrap column
        - letter case option on a mixed-case alphabet
    """

    def __init__(self, message: str, param_name: str = ""):
        self.param_name = param_name
        super().__init__(message, context="config")


class StreamClosedError(EncodexError):
    """An incremental encoder or decoder was used after it was finished."""

    def __init__(self, message: str = "stream already finished"):
        super().__init__(message, context="stream")
