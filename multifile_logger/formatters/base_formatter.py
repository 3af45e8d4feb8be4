"""
Base formatter interface

Formatters turn a LogMessage into the line written by an output.
"""

from abc import ABC, abstractmethod
from multifile_logger.core.log_message import LogMessage


class BaseFormatter(ABC):
    """
    Abstract base class for log formatters.

    Formatters convert LogMessage objects into formatted strings.
    """

    @abstractmethod
    def format(self, msg: LogMessage) -> str:
        """
        Format a log message into a string.

        Args:
            msg: The log message to format

        Returns:
            Formatted string representation of the message
        """
        pass

    def __call__(self, msg: LogMessage) -> str:
        """Allow formatters to be callable."""
        return self.format(msg)
