#!/usr/bin/env python3
"""
encodex - Codec Facade
Public encode/decode entry points on top of the bit packer.

Usage:
    >>> encode(b"fo")
    'Zm8='
    >>> decode("Zm8=")
    b'fo'
    >>> encode(b"foobar", Variant.BASE32)
    'MZXW6YTBOI======'
"""

import logging
from dataclasses import replace
from typing import BinaryIO, IO, Optional, Union

from .alphabet import LINE_BREAKS, Alphabet, get_alphabet
from .bitpack import BitPacker, BitUnpacker, BytesLike, encoded_length as _encoded_length
from .exceptions import ConfigurationError, DecodeError
from .models import CodecConfig, LetterCase, PaddingPolicy, Variant

logger = logging.getLogger(__name__)

CHUNK_SIZE = 8192

# narrowest alphabet first, so the first clean decode is the most specific
GUESS_ORDER = (
    Variant.BASE16,
    Variant.BASE32HEX,
    Variant.BASE32,
    Variant.BASE64,
    Variant.BASE64URL,
)

_MIXED_CASE = (Variant.BASE64, Variant.BASE64URL)

VariantLike = Union[Variant, str, None]


def _resolve_config(variant: VariantLike = None, config: Optional[CodecConfig] = None) -> CodecConfig:
    config = config or CodecConfig()
    if variant is not None:
        config = replace(config, variant=Variant.from_name(variant))
    return config


def _as_text(data) -> str:
    """Encoded input may arrive as str or as ASCII bytes."""
    if isinstance(data, str):
        return data
    if isinstance(data, (bytes, bytearray, memoryview)):
        # one character per byte, so non-ASCII bytes surface as invalid symbols
        return bytes(data).decode("latin-1")
    raise TypeError(f"str or bytes-like object expected, not '{type(data).__name__}'")


# ============================================================================
# Incremental Objects
# ============================================================================

class Encoder:
    """Incremental encoder

    Feed bytes with update() and collect the text it returns, then call
    finalize() once for the tail and padding. Line wrapping is carried
    across update() calls.

    Args:
        config: codec configuration, defaults to padded Base64
    """

    def __init__(self, config: Optional[CodecConfig] = None):
        self.config = config or CodecConfig()
        self.alphabet: Alphabet = get_alphabet(self.config.variant, self.config.letter_case)
        separator = self.config.line_separator
        if self.config.line_wrap and any(
            c in self.alphabet or c == self.alphabet.padding for c in separator
        ):
            raise ConfigurationError(
                f"line separator {separator!r} overlaps the {self.alphabet.name} alphabet",
                param_name="line_separator"
            )
        self._packer = BitPacker(
            self.alphabet,
            pad=self.config.padding is not PaddingPolicy.OMITTED
        )
        self._column = 0

    def update(self, data: BytesLike) -> str:
        return self._wrap(self._packer.feed(data))

    def finalize(self) -> str:
        return self._wrap(self._packer.finish())

    def _wrap(self, chunk: str) -> str:
        width = self.config.line_wrap
        if not width or not chunk:
            return chunk

        out = []
        start = 0
        while start < len(chunk):
            # separator goes before the next symbol, never after the last one
            if self._column == width:
                out.append(self.config.line_separator)
                self._column = 0
            take = min(width - self._column, len(chunk) - start)
            out.append(chunk[start:start + take])
            start += take
            self._column += take
        return "".join(out)


class Decoder:
    """Incremental decoder

    update() returns the bytes decoded so far, so a streaming caller sees
    output before the input has been validated to the end. Use decode()
    when a corrupted input must not produce any output.

    Args:
        config: codec configuration, defaults to padded Base64
    """

    def __init__(self, config: Optional[CodecConfig] = None):
        self.config = config or CodecConfig()
        self.alphabet: Alphabet = get_alphabet(self.config.variant, self.config.letter_case)
        ignore = LINE_BREAKS if self.config.ignore_line_breaks else ""
        self._unpacker = BitUnpacker(self.alphabet, self.config.padding, ignore=ignore)

    def update(self, text: Union[str, BytesLike]) -> bytes:
        return self._unpacker.feed(_as_text(text))

    def finalize(self) -> bytes:
        return self._unpacker.finish()


# ============================================================================
# Whole-Buffer Entry Points
# ============================================================================

def encode(data: BytesLike, variant: VariantLike = None, config: Optional[CodecConfig] = None) -> str:
    """Encode bytes.

    Args:
        data: bytes, bytearray or memoryview
        variant: Variant or variant name, overrides config.variant
        config: codec configuration

    Returns:
        the encoded text
    """
    encoder = Encoder(_resolve_config(variant, config))
    return encoder.update(data) + encoder.finalize()


def decode(
    text: Union[str, BytesLike],
    variant: VariantLike = None,
    config: Optional[CodecConfig] = None
) -> bytes:
    """Decode text, validating all of it before anything is returned.

    Args:
        text: str or ASCII bytes
        variant: Variant or variant name, overrides config.variant
        config: codec configuration

    Returns:
        the decoded bytes

    Raises:
        InvalidSymbolError: a character outside the alphabet
        MalformedPaddingError: interior, misaligned, missing or forbidden padding
        InvalidLengthError: a symbol count no byte count encodes to
        NonZeroPaddingBitsError: unused trailing bits are set
    """
    config = _resolve_config(variant, config)
    decoder = Decoder(config)
    try:
        body = decoder.update(text)
        return body + decoder.finalize()
    except DecodeError as e:
        logger.debug(f"{config.variant.value} input rejected: {e}")
        raise


def encoded_length(size: int, variant: VariantLike = None, padding: PaddingPolicy = PaddingPolicy.REQUIRED) -> int:
    """Length of encode() output for `size` bytes, before line wrapping."""
    alphabet = get_alphabet(Variant.from_name(variant or Variant.BASE64))
    return _encoded_length(size, alphabet, pad=PaddingPolicy(padding) is not PaddingPolicy.OMITTED)


def guess_variant(text: Union[str, BytesLike], config: Optional[CodecConfig] = None) -> Optional[Variant]:
    """Find the most specific variant that decodes `text` cleanly.

    Candidates are tried from the narrowest alphabet to the widest, using
    the padding and line break options of `config`. Empty text returns
    config.variant.

    Returns:
        the first matching Variant, or None when no variant accepts the text
    """
    config = config or CodecConfig()
    text = _as_text(text)
    if not text:
        return config.variant

    for variant in GUESS_ORDER:
        letter_case = LetterCase.UPPER if variant in _MIXED_CASE else config.letter_case
        candidate = replace(config, variant=variant, letter_case=letter_case)
        decoder = Decoder(candidate)
        try:
            decoder.update(text)
            decoder.finalize()
        except DecodeError:
            continue
        logger.debug(f"guessed {variant.value} for {len(text)} characters of input")
        return variant
    return None


# ============================================================================
# File Streams
# ============================================================================

def encode_stream(
    src: BinaryIO,
    dst: IO[str],
    config: Optional[CodecConfig] = None,
    chunk_size: int = CHUNK_SIZE
) -> int:
    """Encode a binary file object into a text file object chunk by chunk.

    Returns:
        number of characters written
    """
    encoder = Encoder(config)
    written = 0
    while chunk := src.read(chunk_size):
        text = encoder.update(chunk)
        dst.write(text)
        written += len(text)
    text = encoder.finalize()
    dst.write(text)
    return written + len(text)


def decode_stream(
    src: IO,
    dst: BinaryIO,
    config: Optional[CodecConfig] = None,
    chunk_size: int = CHUNK_SIZE
) -> int:
    """Decode a text or binary file object into a binary file object.

    Bytes are written as they are decoded; on a DecodeError, dst already
    holds the output that preceded the bad input.

    Returns:
        number of bytes written
    """
    decoder = Decoder(config)
    written = 0
    while chunk := src.read(chunk_size):
        data = decoder.update(chunk)
        dst.write(data)
        written += len(data)
    data = decoder.finalize()
    dst.write(data)
    return written + len(data)
