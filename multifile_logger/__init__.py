"""
BSD 3-Clause License

Copyright (c) 2021, 🍀☀🌕🌥 🌊
All rights reserved.

Multifile Logger - writes every log message to one full file and
selected severities to their own files
"""

__version__ = "1.0.0"
__author__ = "kcenon"
__email__ = "kcenon@naver.com"

from multifile_logger.core.severity import Severity
from multifile_logger.core.log_message import LogMessage
from multifile_logger.core.errors import (
    ErrorKind,
    MultiFileError,
    InvalidConfigError,
    InitFailedError,
    WriteFailedError,
)
from multifile_logger.core.output_config import OutputConfig
from multifile_logger.core.logger import Logger
from multifile_logger.core.logger_builder import LoggerBuilder
from multifile_logger.core.logger_config import LoggerConfig
from multifile_logger.registry import (
    AdapterRegistry,
    ADAPTER_FILE,
    ADAPTER_MULTIFILE,
    default_registry,
)
from multifile_logger.writers import FileLogWriter, MultiFileLogWriter

# Import submodules (not all classes by default)
from multifile_logger import formatters
from multifile_logger import monitoring

__all__ = [
    "Severity",
    "LogMessage",
    "ErrorKind",
    "MultiFileError",
    "InvalidConfigError",
    "InitFailedError",
    "WriteFailedError",
    "OutputConfig",
    "Logger",
    "LoggerBuilder",
    "LoggerConfig",
    "AdapterRegistry",
    "ADAPTER_FILE",
    "ADAPTER_MULTIFILE",
    "default_registry",
    "FileLogWriter",
    "MultiFileLogWriter",
    "formatters",
    "monitoring",
]
