"""
Log formatters module

Provides formatter implementations for controlling log line format.
"""

from multifile_logger.formatters.base_formatter import BaseFormatter
from multifile_logger.formatters.text_formatter import TextFormatter
from multifile_logger.formatters.json_formatter import JSONFormatter
from multifile_logger.formatters.resolver import resolve_formatter, FORMATTERS

__all__ = [
    "BaseFormatter",
    "TextFormatter",
    "JSONFormatter",
    "resolve_formatter",
    "FORMATTERS",
]
