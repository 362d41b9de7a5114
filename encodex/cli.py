#!/usr/bin/env python3
"""
encodex - Command Line Interface
Encode or decode files, literal strings or standard input.

Usage:
    encodex image.png                      # Base64 of a file
    encodex -b Base32 -s "Hello World"     # Base32 of a literal string
    encodex -d -b Base64url token.txt      # decode a file
    echo Zm9vYmFy | encodex -d             # decode standard input
    encodex -d -b auto -s 666F6F           # guess the base while decoding
    encodex -w 76 -o out.txt big.bin       # wrapped output to a file
"""

import argparse
import io
import sys
from contextlib import nullcontext
from dataclasses import replace
from typing import BinaryIO, Iterator, List, Optional, Tuple, Union

from . import __version__
from .codec import decode, encode_stream, guess_variant
from .exceptions import ConfigurationError, EncodexError
from .logger import CodecLogger, setup_logging
from .models import CodecConfig, EncodeMode, LetterCase, PaddingPolicy, Variant
from .settings import load_settings

AUTO = "auto"
STDIN = "-"
WHITESPACE = b" \t\r\n"

EXIT_OK = 0
EXIT_FAILURE = 1


def create_argument_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="encodex",
        description="Encode and decode data with the RFC 4648 encodings "
                    "(Base64, Base64url, Base32, Base32hex, Base16).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  encodex image.png
  encodex -b Base32 -s "Hello World"
  encodex -d -b Base64url token.txt
  echo Zm9vYmFy | encodex -d
        """
    )

    parser.add_argument(
        "files",
        nargs="*",
        metavar="FILE",
        help="input files; '-' or no input at all reads standard input"
    )
    parser.add_argument(
        "-s", "--string",
        action="append",
        default=[],
        metavar="TEXT",
        help="literal input (UTF-8 when encoding), may be repeated"
    )

    parser.add_argument(
        "-b", "--base",
        metavar="BASE",
        help="Base64, Base64url, Base32, Base32hex or Base16 "
             "(default: Base64); 'auto' guesses the base when decoding"
    )
    parser.add_argument(
        "-d", "--decode",
        action="store_true",
        help="decode the input instead of encoding it"
    )
    parser.add_argument(
        "--padding",
        choices=[p.value for p in PaddingPolicy],
        help="padding policy (default: required)"
    )
    parser.add_argument(
        "--case",
        choices=[c.value for c in LetterCase],
        dest="letter_case",
        help="letter case for Base32, Base32hex and Base16 (default: upper)"
    )
    parser.add_argument(
        "-w", "--wrap",
        type=int,
        metavar="COLS",
        help="wrap encoded lines after COLS characters (0 disables)"
    )
    parser.add_argument(
        "--ignore-newlines",
        action="store_true",
        default=None,
        help="skip line breaks inside encoded input"
    )
    parser.add_argument(
        "--no-ignore-newlines",
        action="store_false",
        dest="ignore_newlines",
        default=None,
        help="reject line breaks even if the config file skips them"
    )

    parser.add_argument(
        "-o", "--output",
        metavar="FILE",
        help="write to FILE instead of standard output"
    )
    parser.add_argument(
        "-c", "--config",
        metavar="FILE",
        help="YAML, TOML or JSON file with default options "
             "(default: $ENCODEX_CONFIG)"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="show debug logging"
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="only log errors"
    )
    parser.add_argument(
        "--log-file",
        metavar="FILE",
        help="append log records to FILE"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    return parser


def create_config_from_args(args: argparse.Namespace, base: Optional[CodecConfig] = None) -> CodecConfig:
    """Apply command line options on top of the configured defaults.

    The 'auto' base leaves the variant untouched; it is resolved per input.
    """
    overrides = {}
    if args.base and args.base.lower() != AUTO:
        overrides["variant"] = Variant.from_name(args.base)
    if args.padding:
        overrides["padding"] = args.padding
    if args.letter_case:
        overrides["letter_case"] = args.letter_case
    if args.wrap is not None:
        overrides["line_wrap"] = args.wrap
    if args.ignore_newlines is not None:
        overrides["ignore_line_breaks"] = args.ignore_newlines
    return replace(base or CodecConfig(), **overrides)


def _log_level(args: argparse.Namespace) -> str:
    if args.verbose:
        return "DEBUG"
    if args.quiet:
        return "ERROR"
    return "WARNING"


def iter_inputs(args: argparse.Namespace, stdin: BinaryIO) -> Iterator[Tuple[str, Union[str, BinaryIO]]]:
    """Yield (label, source) for every input: files first, then strings.

    A source is either a path still to be opened or a binary stream.
    """
    if not args.files and not args.string:
        yield "<stdin>", stdin
        return
    for path in args.files:
        if path == STDIN:
            yield "<stdin>", stdin
        else:
            yield path, path
    for index, text in enumerate(args.string, 1):
        yield f"<string {index}>", io.BytesIO(text.encode("utf-8"))


def open_source(source: Union[str, BinaryIO]):
    if isinstance(source, str):
        return open(source, "rb")
    return nullcontext(source)


def report_error(log: CodecLogger, label: str, error: Exception, context: str) -> None:
    """Log an error and print the advice for it to stderr."""
    log.info(f"{label}: {error}", context=context)
    print(f"encodex: {label}: {log.get_user_friendly_message(error)}", file=sys.stderr)


# ============================================================================
# Per-Input Operations
# ============================================================================

def encode_input(src: BinaryIO, out: BinaryIO, config: CodecConfig) -> int:
    """Encode one input as a line of output."""
    text_out = io.TextIOWrapper(out, encoding="ascii", newline="", write_through=True)
    try:
        written = encode_stream(src, text_out, config)
        text_out.write("\n")
    finally:
        text_out.detach()
    return written


def decode_input(src: BinaryIO, out: BinaryIO, config: CodecConfig, guess: bool, log: CodecLogger) -> int:
    """Decode one input completely before writing any of it."""
    text = src.read().strip(WHITESPACE)
    if guess:
        variant = guess_variant(text, config)
        if variant is None:
            raise ConfigurationError("cannot detect the base of the input", param_name="variant")
        log.info(f"detected {variant.value}", context="decode")
        config = replace(config, variant=variant)
    data = decode(text, config=config)
    out.write(data)
    return len(data)


# ============================================================================
# Entry Point
# ============================================================================

def main(argv: Optional[List[str]] = None) -> int:
    """Main function

    Args:
        argv: command line arguments, None for sys.argv

    Returns:
        exit code (0 = success, 1 = at least one input failed)
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    log = setup_logging(_log_level(args), args.log_file)
    mode = EncodeMode.DECODE if args.decode else EncodeMode.ENCODE

    try:
        config = create_config_from_args(args, load_settings(args.config))
    except ConfigurationError as e:
        report_error(log, "config", e, context="config")
        log.close()
        return EXIT_FAILURE

    guess = bool(args.base) and args.base.lower() == AUTO
    if guess and mode is EncodeMode.ENCODE:
        print("encodex: the 'auto' base only works with --decode", file=sys.stderr)
        log.close()
        return EXIT_FAILURE

    log.debug(f"{mode.value} with {config}", context="config")

    try:
        out = open(args.output, "wb") if args.output else sys.stdout.buffer
    except OSError as e:
        report_error(log, args.output, e, context="output")
        log.close()
        return EXIT_FAILURE

    status = EXIT_OK
    unit = "characters" if mode is EncodeMode.ENCODE else "bytes"
    try:
        for label, source in iter_inputs(args, sys.stdin.buffer):
            try:
                with open_source(source) as src:
                    if mode is EncodeMode.ENCODE:
                        count = encode_input(src, out, config)
                    else:
                        count = decode_input(src, out, config, guess, log)
                log.debug(f"{label}: wrote {count} {unit}", context=mode.value)
            except (EncodexError, OSError) as e:
                report_error(log, label, e, context=mode.value)
                status = EXIT_FAILURE
    except KeyboardInterrupt:
        print("\nencodex: interrupted", file=sys.stderr)
        status = EXIT_FAILURE
    finally:
        out.flush()
        if args.output:
            out.close()
        log.close()

    return status


if __name__ == "__main__":
    sys.exit(main())
