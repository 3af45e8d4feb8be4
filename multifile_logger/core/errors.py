"""
Error taxonomy

Initialization errors are fatal and raised to the caller.
Write errors are recorded by the router and never reach the caller.
"""

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Category of a multifile logger failure."""

    INVALID_CONFIG = "invalid_config"
    INIT_FAILED = "init_failed"
    WRITE_FAILED = "write_failed"


class MultiFileError(RuntimeError):
    """Base error for multifile_logger."""

    kind: Optional[ErrorKind] = None


class InvalidConfigError(MultiFileError, ValueError):
    """Raised when a configuration blob cannot be parsed."""

    kind = ErrorKind.INVALID_CONFIG


class InitFailedError(MultiFileError):
    """Raised when an output fails to initialize."""

    kind = ErrorKind.INIT_FAILED


class WriteFailedError(MultiFileError):
    """Raised when an output fails to accept a message."""

    kind = ErrorKind.WRITE_FAILED

    def __init__(self, message: str, filename: str = ""):
        super().__init__(message)
        self.filename = filename
