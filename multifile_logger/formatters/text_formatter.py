"""
Text formatter with customizable template

Formats log messages using a template string with placeholders
"""

from multifile_logger.core.log_message import LogMessage
from multifile_logger.formatters.base_formatter import BaseFormatter


class TextFormatter(BaseFormatter):
    """
    Format log messages using a customizable template.

    Supports placeholders for all LogMessage fields.
    """

    DEFAULT_TEMPLATE = "[{timestamp}] [{level:9}] {message}"

    def __init__(self, template: str = None, timestamp_format: str = "%Y-%m-%d %H:%M:%S.%f"):
        """
        Initialize text formatter.

        Args:
            template: Format template with placeholders.
                     Available placeholders:
                     - {timestamp}: Timestamp
                     - {level}: Severity name
                     - {level:9}: Severity name with padding
                     - {rank}: Numeric severity rank
                     - {message}: Message text
                     - {thread}: Thread name
                     - {thread_id}: Thread ID
                     - {logger}: Logger name
                     - {file}: File name
                     - {line}: Line number
                     - {function}: Function name
            timestamp_format: strftime format for timestamps

        Example:
            # Default format
            formatter = TextFormatter()

            # Custom format
            formatter = TextFormatter("{level} - {message}")
        """
        self.template = template or self.DEFAULT_TEMPLATE
        self.timestamp_format = timestamp_format

    def format(self, msg: LogMessage) -> str:
        """
        Format log message using the template.

        Args:
            msg: Log message to format

        Returns:
            Formatted string
        """
        timestamp_str = msg.timestamp.strftime(self.timestamp_format)
        if self.timestamp_format.endswith("%f"):
            timestamp_str = timestamp_str[:-3]  # Milliseconds

        format_dict = {
            "timestamp": timestamp_str,
            "level": str(msg.severity),
            "rank": int(msg.severity),
            "message": msg.text,
            "thread": msg.thread_name,
            "thread_id": msg.thread_id,
            "logger": msg.logger_name,
            "file": msg.file_name,
            "line": msg.line_number,
            "function": msg.function_name,
        }

        try:
            return self.template.format(**format_dict)
        except KeyError as e:
            # Fallback if template has unknown placeholder
            return f"[FORMAT ERROR: {e}] {msg.text}"

    def __repr__(self) -> str:
        """String representation."""
        return f"TextFormatter(template='{self.template}')"
