"""
Core module for the multifile logger

This module contains the fundamental classes:
- Severity: Eight-level severity enumeration
- LogMessage: Immutable log message record
- OutputConfig: Parsed output configuration blob
- Logger: Front-end logger
- LoggerBuilder: Builder pattern for logger construction
- LoggerConfig: Front-end configuration
"""

from multifile_logger.core.severity import Severity, LEVEL_NAMES, LEVEL_COUNT, FULL_SLOT
from multifile_logger.core.log_message import LogMessage
from multifile_logger.core.errors import (
    ErrorKind,
    MultiFileError,
    InvalidConfigError,
    InitFailedError,
    WriteFailedError,
)
from multifile_logger.core.output_config import OutputConfig
from multifile_logger.core.logger_config import LoggerConfig
from multifile_logger.core.logger import Logger
from multifile_logger.core.logger_builder import LoggerBuilder

__all__ = [
    "Severity",
    "LEVEL_NAMES",
    "LEVEL_COUNT",
    "FULL_SLOT",
    "LogMessage",
    "ErrorKind",
    "MultiFileError",
    "InvalidConfigError",
    "InitFailedError",
    "WriteFailedError",
    "OutputConfig",
    "LoggerConfig",
    "Logger",
    "LoggerBuilder",
]
