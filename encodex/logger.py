#!/usr/bin/env python3
"""
encodex - Logger Module
Logging setup for the command-line front end.

Library modules log through logging.getLogger(__name__), which places them
under the "encodex" logger configured here.
"""

import logging
from pathlib import Path
from typing import Optional, Union

LOGGER_NAME = "encodex"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# user-facing advice, keyed by exception class name
USER_FRIENDLY_MESSAGES = {
    "InvalidSymbolError": "The input contains a character that is not part of the selected alphabet.\n"
                          "  - check the --base option\n"
                          "  - use --ignore-newlines for wrapped input",
    "MalformedPaddingError": "The padding ('=') of the input is wrong.\n"
                             "  - padding may only appear at the very end\n"
                             "  - use --padding optional for unpadded input",
    "InvalidLengthError": "The input length is impossible for the selected base; it is probably truncated.",
    "NonZeroPaddingBitsError": "The last symbol carries bits a conforming encoder never sets; "
                               "the input is corrupted or was not produced by this base.",
    "ConfigurationError": "Invalid option or config file.",
    "OSError": "Cannot read or write a file. Check the path and its permissions.",
}


class CodecLogger:
    """Logger for the encodex command line

    Writes to stderr and optionally to a log file, with entries formatted
    as "[context] message".

    Args:
        name: logger name
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        log_file: append log records to this file as well
    """

    def __init__(
        self,
        name: str = LOGGER_NAME,
        level: str = "WARNING",
        log_file: Optional[Union[str, Path]] = None
    ):
        self.name = name
        self.level = getattr(logging, str(level).upper(), logging.WARNING)
        self.log_file = str(log_file) if log_file else None

        self._logger = logging.getLogger(name)
        self._logger.setLevel(self.level)
        for handler in list(self._logger.handlers):
            self._logger.removeHandler(handler)
            handler.close()

        formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)

        console_handler = logging.StreamHandler()
        console_handler.setLevel(self.level)
        console_handler.setFormatter(formatter)
        self._logger.addHandler(console_handler)

        if log_file:
            self._setup_file_handler(Path(log_file), formatter)

    def _setup_file_handler(self, log_path: Path, formatter: logging.Formatter) -> None:
        try:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(str(log_path), encoding='utf-8', mode='a')
        except OSError as e:
            # console logging still works
            self._logger.warning(f"cannot create log file {log_path}: {e}")
            self.log_file = None
            return
        file_handler.setLevel(self.level)
        file_handler.setFormatter(formatter)
        self._logger.addHandler(file_handler)

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    @staticmethod
    def _format(message: str, context: str) -> str:
        return f"[{context}] {message}" if context else message

    def debug(self, message: str, context: str = "") -> None:
        self._logger.debug(self._format(message, context))

    def info(self, message: str, context: str = "") -> None:
        self._logger.info(self._format(message, context))

    def warning(self, message: str, context: str = "") -> None:
        self._logger.warning(self._format(message, context))

    def error(self, message: str, context: str = "", error: Optional[Exception] = None) -> None:
        """Log an error; the traceback is only attached at DEBUG level."""
        with_traceback = error is not None and self._logger.isEnabledFor(logging.DEBUG)
        self._logger.error(
            self._format(message, context),
            exc_info=error if with_traceback else None
        )

    def close(self) -> None:
        for handler in list(self._logger.handlers):
            self._logger.removeHandler(handler)
            handler.close()

    # ========================================================================
    # User-Friendly Error Messages
    # ========================================================================

    def get_user_friendly_message(self, error: Exception) -> str:
        """Combine the advice for an error type with the error's own message."""
        advice = None
        for cls in type(error).__mro__:
            advice = USER_FRIENDLY_MESSAGES.get(cls.__name__)
            if advice:
                break
        detail = getattr(error, "message", None) or str(error)
        if advice is None:
            return detail
        return f"{advice}\n\nDetails: {detail}"


def setup_logging(level: str = "WARNING", log_file: Optional[Union[str, Path]] = None) -> CodecLogger:
    """Configure the "encodex" logger and return its wrapper."""
    return CodecLogger(LOGGER_NAME, level=level, log_file=log_file)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the "encodex" logger or one of its children."""
    if not name or name == LOGGER_NAME:
        return logging.getLogger(LOGGER_NAME)
    if name.startswith(LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
