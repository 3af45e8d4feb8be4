"""
Log message record

Produced by the logging front-end and passed read-only to every output.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict
import threading

from multifile_logger.core.severity import Severity


@dataclass(frozen=True)
class LogMessage:
    """
    Immutable log message.

    Contains the severity, text and creation time of a single message,
    plus the context captured by the front-end.
    """

    severity: Severity
    text: str
    timestamp: datetime = field(default_factory=datetime.now)
    logger_name: str = ""
    thread_id: int = field(default_factory=threading.get_ident)
    thread_name: str = field(default_factory=lambda: threading.current_thread().name)
    file_name: str = ""
    line_number: int = 0
    function_name: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Validate message after initialization."""
        if not isinstance(self.severity, Severity):
            raise TypeError("severity must be Severity enum")
        if not isinstance(self.text, str):
            object.__setattr__(self, "text", str(self.text))

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert message to dictionary.

        Returns:
            Dictionary representation
        """
        return {
            "severity": str(self.severity),
            "text": self.text,
            "timestamp": self.timestamp.isoformat(),
            "logger_name": self.logger_name,
            "thread_id": self.thread_id,
            "thread_name": self.thread_name,
            "file_name": self.file_name,
            "line_number": self.line_number,
            "function_name": self.function_name,
            "extra": dict(self.extra),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LogMessage":
        """
        Create message from dictionary.

        Args:
            data: Dictionary with message data

        Returns:
            New LogMessage instance
        """
        return cls(
            severity=Severity.from_string(data["severity"]),
            text=data["text"],
            timestamp=datetime.fromisoformat(data["timestamp"]),
            logger_name=data.get("logger_name", ""),
            thread_id=data.get("thread_id", 0),
            thread_name=data.get("thread_name", ""),
            file_name=data.get("file_name", ""),
            line_number=data.get("line_number", 0),
            function_name=data.get("function_name", ""),
            extra=data.get("extra", {}),
        )

    def __str__(self) -> str:
        """String representation."""
        return (
            f"[{self.timestamp.strftime('%Y-%m-%d %H:%M:%S.%f')[:-3]}] "
            f"[{str(self.severity):9}] "
            f"{self.text}"
        )
