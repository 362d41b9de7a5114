# encodex
# RFC 4648 encoder and decoder: Base64, Base64url, Base32, Base32hex, Base16

__version__ = "0.2.0"

from .exceptions import (
    EncodexError,
    DecodeError,
    InvalidSymbolError,
    MalformedPaddingError,
    InvalidLengthError,
    NonZeroPaddingBitsError,
    ConfigurationError,
    StreamClosedError,
)

from .models import (
    Variant,
    PaddingPolicy,
    LetterCase,
    EncodeMode,
    CodecConfig,
)

from .alphabet import (
    Alphabet,
    ALPHABETS,
    BASE64,
    BASE64URL,
    BASE32,
    BASE32HEX,
    BASE16,
    get_alphabet,
)
from .bitpack import BitPacker, BitUnpacker
from .codec import (
    Encoder,
    Decoder,
    encode,
    decode,
    encoded_length,
    guess_variant,
    encode_stream,
    decode_stream,
)
from .settings import load_settings, config_from_mapping
from .logger import CodecLogger, get_logger, setup_logging

__all__ = [
    # Exceptions
    'EncodexError',
    'DecodeError',
    'InvalidSymbolError',
    'MalformedPaddingError',
    'InvalidLengthError',
    'NonZeroPaddingBitsError',
    'ConfigurationError',
    'StreamClosedError',
    # Models
    'Variant',
    'PaddingPolicy',
    'LetterCase',
    'EncodeMode',
    'CodecConfig',
    # Alphabets
    'Alphabet',
    'ALPHABETS',
    'BASE64',
    'BASE64URL',
    'BASE32',
    'BASE32HEX',
    'BASE16',
    'get_alphabet',
    # Engine
    'BitPacker',
    'BitUnpacker',
    # Codec
    'Encoder',
    'Decoder',
    'encode',
    'decode',
    'encoded_length',
    'guess_variant',
    'encode_stream',
    'decode_stream',
    # Settings
    'load_settings',
    'config_from_mapping',
    # Logger
    'CodecLogger',
    'get_logger',
    'setup_logging',
]
