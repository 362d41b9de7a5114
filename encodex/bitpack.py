#!/usr/bin/env python3
"""
encodex - Bit Packer / Unpacker
Generic engine that regroups bytes into fixed-width symbols and back.

Bits are handled most-significant first, matching RFC 4648 bit numbering.
Both directions are incremental: the pending bits live in the packer or
unpacker object, which the caller owns, so input can arrive in chunks of
any size.

    packer = BitPacker(BASE64)
    text = packer.feed(b"fo") + packer.finish()        # "Zm8="

    unpacker = BitUnpacker(BASE64)
    data = unpacker.feed("Zm8=") + unpacker.finish()   # b"fo"
"""

from typing import Union

from .alphabet import Alphabet
from .exceptions import (
    InvalidLengthError,
    MalformedPaddingError,
    NonZeroPaddingBitsError,
    StreamClosedError,
)
from .models import PaddingPolicy

BytesLike = Union[bytes, bytearray, memoryview]


def encoded_length(size: int, alphabet: Alphabet, pad: bool = True) -> int:
    """Number of symbols produced for `size` input bytes, without line wrapping."""
    if size < 0:
        raise ValueError("size must not be negative")
    symbols = -(-size * 8 // alphabet.bits)
    if pad and alphabet.padding is not None:
        symbols += -symbols % alphabet.block_size
    return symbols


# ============================================================================
# Encode Direction
# ============================================================================

class BitPacker:
    """Turns bytes into symbols of one alphabet.

    Args:
        alphabet: the target alphabet
        pad: append padding up to the block boundary when finishing;
            ignored for alphabets without a padding character
    """

    def __init__(self, alphabet: Alphabet, pad: bool = True):
        self.alphabet = alphabet
        self.pad = pad and alphabet.padding is not None
        self._acc = 0
        self._nbits = 0
        self._emitted = 0
        self._finished = False

    @property
    def finished(self) -> bool:
        return self._finished

    def feed(self, data: BytesLike) -> str:
        """Consume bytes and return every symbol that is complete so far."""
        if self._finished:
            raise StreamClosedError("packer already finished")
        if isinstance(data, str) or not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError(f"a bytes-like object is required, not '{type(data).__name__}'")

        bits = self.alphabet.bits
        mask = (1 << bits) - 1
        symbols = self.alphabet.symbols
        acc, nbits = self._acc, self._nbits
        out = []
        for byte in bytes(data):
            acc = (acc << 8) | byte
            nbits += 8
            while nbits >= bits:
                nbits -= bits
                out.append(symbols[(acc >> nbits) & mask])
            acc &= (1 << nbits) - 1

        self._acc, self._nbits = acc, nbits
        self._emitted += len(out)
        return "".join(out)

    def finish(self) -> str:
        """Flush the partial group and the padding. Call exactly once."""
        if self._finished:
            raise StreamClosedError("packer already finished")
        self._finished = True

        out = []
        if self._nbits:
            # residual bits are left-aligned, the rest of the group is zero
            shift = self.alphabet.bits - self._nbits
            out.append(self.alphabet.symbols[self._acc << shift])
        count = self._emitted + len(out)
        if self.pad:
            out.append(self.alphabet.padding * (-count % self.alphabet.block_size))

        self._acc = self._nbits = 0
        return "".join(out)


# ============================================================================
# Decode Direction
# ============================================================================

class BitUnpacker:
    """Turns symbols of one alphabet back into bytes, validating as it goes.

    Errors are raised at the first offending character (InvalidSymbolError,
    interior MalformedPaddingError) or by finish() for conditions that only
    the end of input can reveal (InvalidLengthError, misaligned or missing
    padding, NonZeroPaddingBitsError).

    Args:
        alphabet: the source alphabet
        padding: padding policy; alphabets without a padding character
            behave as OMITTED
        ignore: characters to skip entirely (they still count for offsets)
    """

    def __init__(
        self,
        alphabet: Alphabet,
        padding: PaddingPolicy = PaddingPolicy.REQUIRED,
        ignore: str = ""
    ):
        self.alphabet = alphabet
        self.padding = PaddingPolicy(padding)
        if alphabet.padding is None:
            self.padding = PaddingPolicy.OMITTED
        self.ignore = frozenset(ignore)
        self._acc = 0
        self._nbits = 0
        self._data_count = 0
        self._pad_count = 0
        self._pad_start = -1
        self._position = 0
        self._last_data = -1
        self._finished = False

    @property
    def finished(self) -> bool:
        return self._finished

    @property
    def position(self) -> int:
        """Offset of the next character to be fed."""
        return self._position

    def feed(self, text: str) -> bytes:
        """Consume symbols and return every byte that is complete so far."""
        if self._finished:
            raise StreamClosedError("unpacker already finished")
        if not isinstance(text, str):
            raise TypeError(f"str expected, not '{type(text).__name__}'")

        alphabet = self.alphabet
        bits = alphabet.bits
        pad_char = alphabet.padding
        ignore = self.ignore
        acc, nbits = self._acc, self._nbits
        position = self._position
        out = bytearray()

        for char in text:
            if char in ignore:
                pass
            elif char == pad_char:
                if self.padding is PaddingPolicy.OMITTED:
                    raise MalformedPaddingError(
                        f"padding {char!r} at offset {position} is not permitted",
                        position
                    )
                if not self._pad_count:
                    self._pad_start = position
                self._pad_count += 1
            elif self._pad_count:
                raise MalformedPaddingError(
                    f"data symbol {char!r} at offset {position} follows padding",
                    position
                )
            else:
                acc = (acc << bits) | alphabet.value_for(char, position)
                nbits += bits
                if nbits >= 8:
                    nbits -= 8
                    out.append(acc >> nbits)
                    acc &= (1 << nbits) - 1
                self._data_count += 1
                self._last_data = position
            position += 1

        self._acc, self._nbits = acc, nbits
        self._position = position
        return bytes(out)

    def finish(self) -> bytes:
        """Validate the end of input. Call exactly once.

        Returns:
            b"" - every byte has already been returned by feed()
        """
        if self._finished:
            raise StreamClosedError("unpacker already finished")
        self._finished = True

        alphabet = self.alphabet
        if self._nbits >= alphabet.bits:
            residue = self._data_count % alphabet.block_size
            raise InvalidLengthError(
                f"{self._data_count} {alphabet.name} symbols cannot encode whole bytes "
                f"(a block cannot end after {residue} symbol{'s' if residue != 1 else ''})",
                symbol_count=self._data_count
            )

        expected = -self._data_count % alphabet.block_size
        if self._pad_count:
            if self._pad_count != expected:
                raise MalformedPaddingError(
                    f"{self._pad_count} padding characters do not align "
                    f"{self._data_count} symbols to a {alphabet.block_size}-symbol block",
                    self._pad_start
                )
        elif expected and self.padding is PaddingPolicy.REQUIRED:
            raise MalformedPaddingError(
                f"missing padding, expected {expected} padding characters",
                self._position
            )

        if self._acc:
            raise NonZeroPaddingBitsError(
                f"the {self._nbits} unused bits of the final symbol are not zero",
                self._last_data
            )

        self._acc = self._nbits = 0
        return b""
