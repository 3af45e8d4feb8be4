"""
JSON formatter for structured logging

Formats log messages as one JSON object per line
"""

import json
from multifile_logger.core.log_message import LogMessage
from multifile_logger.formatters.base_formatter import BaseFormatter


class JSONFormatter(BaseFormatter):
    """
    Format log messages as JSON objects.

    Produces structured log lines suitable for log aggregation systems.
    """

    def __init__(
        self,
        include_extra: bool = True,
        include_thread_info: bool = False,
        include_source_info: bool = False,
        ensure_ascii: bool = False
    ):
        """
        Initialize JSON formatter.

        Args:
            include_extra: Include extra fields in output
            include_thread_info: Include thread_id and thread_name
            include_source_info: Include file_name, line_number, function_name
            ensure_ascii: Escape non-ASCII characters
        """
        self.include_extra = include_extra
        self.include_thread_info = include_thread_info
        self.include_source_info = include_source_info
        self.ensure_ascii = ensure_ascii

    def format(self, msg: LogMessage) -> str:
        """
        Format log message as JSON.

        Args:
            msg: Log message to format

        Returns:
            JSON string
        """
        log_dict = {
            "timestamp": msg.timestamp.isoformat(),
            "level": str(msg.severity),
            "message": msg.text,
        }

        if msg.logger_name:
            log_dict["logger"] = msg.logger_name

        if self.include_thread_info:
            log_dict["thread_id"] = msg.thread_id
            log_dict["thread_name"] = msg.thread_name

        if self.include_source_info and (msg.file_name or msg.function_name):
            source_info = {}
            if msg.file_name:
                source_info["file"] = msg.file_name
            if msg.line_number:
                source_info["line"] = msg.line_number
            if msg.function_name:
                source_info["function"] = msg.function_name
            log_dict["source"] = source_info

        if self.include_extra and msg.extra:
            log_dict["extra"] = msg.extra

        # Lines must stay single-line, so never indent
        return json.dumps(log_dict, ensure_ascii=self.ensure_ascii, default=str)

    def __repr__(self) -> str:
        """String representation."""
        return f"JSONFormatter(extra={self.include_extra})"
