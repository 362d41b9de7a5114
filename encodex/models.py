#!/usr/bin/env python3
"""
encodex - Data Models
Encoding variants, option enums and the codec configuration.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from .exceptions import ConfigurationError


# ============================================================================
# Option Enums
# ============================================================================

class Variant(Enum):
    """The RFC 4648 encodings."""
    BASE64 = "Base64"
    BASE64URL = "Base64url"
    BASE32 = "Base32"
    BASE32HEX = "Base32hex"
    BASE16 = "Base16"

    @classmethod
    def from_name(cls, name: Union[str, "Variant"]) -> "Variant":
        """Look up a variant by name, ignoring case ("base32hex", "Base64url").

        Raises:
            ConfigurationError: when the name matches no variant
        """
        if isinstance(name, cls):
            return name
        wanted = str(name).strip().lower()
        for variant in cls:
            if variant.value.lower() == wanted:
                return variant
        choices = ", ".join(v.value for v in cls)
        raise ConfigurationError(
            f"unknown base '{name}', expected one of: {choices}",
            param_name="variant"
        )


class PaddingPolicy(Enum):
    """How padding characters are produced and accepted.

    REQUIRED: emitted on encode, demanded on decode
    OMITTED:  never emitted, rejected on decode
    OPTIONAL: emitted on encode, accepted but not demanded on decode
    """
    REQUIRED = "required"
    OMITTED = "omitted"
    OPTIONAL = "optional"


class LetterCase(Enum):
    """Letter case handling for single-case alphabets (Base32 family, Base16)."""
    UPPER = "upper"
    LOWER = "lower"
    INSENSITIVE = "insensitive"


class EncodeMode(Enum):
    ENCODE = "encode"
    DECODE = "decode"


def _coerce(enum_cls, value, param_name: str):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        choices = ", ".join(m.value for m in enum_cls)
        raise ConfigurationError(
            f"invalid {param_name} '{value}', expected one of: {choices}",
            param_name=param_name
        ) from None


# ============================================================================
# Configuration Model
# ============================================================================

@dataclass(frozen=True)
class CodecConfig:
    """Codec configuration

    Attributes:
        variant: alphabet and bit width to use
        padding: padding policy for both directions
        letter_case: output case and input tolerance for single-case alphabets
        line_wrap: column after which encode inserts line_separator, 0 disables
        line_separator: text inserted between wrapped lines
        ignore_line_breaks: skip CR and LF characters while decoding
    """
    variant: Variant = Variant.BASE64
    padding: PaddingPolicy = PaddingPolicy.REQUIRED
    letter_case: LetterCase = LetterCase.UPPER
    line_wrap: int = 0
    line_separator: str = "\n"
    ignore_line_breaks: bool = False

    def __post_init__(self):
        # accept plain strings from config files and the command line
        object.__setattr__(self, "variant", Variant.from_name(self.variant))
        object.__setattr__(self, "padding", _coerce(PaddingPolicy, self.padding, "padding"))
        object.__setattr__(self, "letter_case", _coerce(LetterCase, self.letter_case, "letter_case"))
        self.validate()

    def validate(self) -> None:
        """Check option values that enums cannot express.

        Raises:
            ConfigurationError: on a negative or non-integer wrap column,
                an empty or non-string line separator, or a non-boolean
                ignore_line_breaks
        """
        if isinstance(self.line_wrap, bool) or not isinstance(self.line_wrap, int):
            raise ConfigurationError(
                f"line_wrap must be an integer, got {self.line_wrap!r}",
                param_name="line_wrap"
            )
        if self.line_wrap < 0:
            raise ConfigurationError(
                f"line_wrap must not be negative, got {self.line_wrap}",
                param_name="line_wrap"
            )
        if not isinstance(self.line_separator, str):
            raise ConfigurationError(
                f"line_separator must be a string, got {self.line_separator!r}",
                param_name="line_separator"
            )
        if not self.line_separator:
            raise ConfigurationError(
                "line_separator must not be empty",
                param_name="line_separator"
            )
        if not isinstance(self.ignore_line_breaks, bool):
            raise ConfigurationError(
                f"ignore_line_breaks must be true or false, got {self.ignore_line_breaks!r}",
                param_name="ignore_line_breaks"
            )
