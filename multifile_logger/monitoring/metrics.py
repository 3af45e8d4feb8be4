"""
Logger metrics collection

Write failures never reach the caller of a dispatch, so this collector
is where they become visible.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Optional
import threading

from multifile_logger.core.severity import Severity


@dataclass
class LoggerMetrics:
    """
    Metrics collected by the logger and its outputs.

    Contains message counters plus per-output write and error counts.
    """

    # Message counts
    total_messages: int = 0
    messages_by_level: Dict[Severity, int] = field(default_factory=dict)
    dropped_messages: int = 0

    # Output metrics, keyed by file name
    writes_by_output: Dict[str, int] = field(default_factory=dict)
    errors_by_output: Dict[str, int] = field(default_factory=dict)
    writer_errors: int = 0
    last_error: Optional[str] = None

    # Timing
    started_at: Optional[datetime] = None
    last_message_at: Optional[datetime] = None
    last_error_at: Optional[datetime] = None

    def to_dict(self) -> Dict:
        """
        Convert to dictionary for JSON export.

        Returns:
            Dictionary representation of metrics
        """
        return {
            "total_messages": self.total_messages,
            "messages_by_level": {str(k): v for k, v in self.messages_by_level.items()},
            "dropped_messages": self.dropped_messages,
            "writes_by_output": dict(self.writes_by_output),
            "errors_by_output": dict(self.errors_by_output),
            "writer_errors": self.writer_errors,
            "last_error": self.last_error,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "last_message_at": self.last_message_at.isoformat() if self.last_message_at else None,
            "last_error_at": self.last_error_at.isoformat() if self.last_error_at else None,
        }


class MetricsCollector:
    """
    Collects logger metrics.

    Thread-safe; one collector may be shared by several routers.
    """

    def __init__(self):
        self._metrics = LoggerMetrics(started_at=datetime.now())
        self._lock = threading.Lock()

    def record_message(self, level: Severity) -> None:
        """
        Record a logged message.

        Args:
            level: Severity of the message
        """
        with self._lock:
            self._metrics.total_messages += 1
            self._metrics.messages_by_level[level] = (
                self._metrics.messages_by_level.get(level, 0) + 1
            )
            self._metrics.last_message_at = datetime.now()

    def record_dropped(self, count: int = 1) -> None:
        """
        Record dropped messages.

        Args:
            count: Number of dropped messages
        """
        with self._lock:
            self._metrics.dropped_messages += count

    def record_write(self, output: str) -> None:
        """
        Record a message accepted by an output.

        Args:
            output: File name of the output
        """
        with self._lock:
            self._metrics.writes_by_output[output] = (
                self._metrics.writes_by_output.get(output, 0) + 1
            )

    def record_writer_error(self, output: str = "", error: Optional[BaseException] = None) -> None:
        """
        Record a failed write.

        Args:
            output: File name of the failing output
            error: The exception raised by the output
        """
        with self._lock:
            self._metrics.writer_errors += 1
            if output:
                self._metrics.errors_by_output[output] = (
                    self._metrics.errors_by_output.get(output, 0) + 1
                )
            if error is not None:
                self._metrics.last_error = f"{type(error).__name__}: {error}"
            self._metrics.last_error_at = datetime.now()

    def get_metrics(self) -> LoggerMetrics:
        """
        Get current metrics snapshot.

        Returns:
            Copy of current LoggerMetrics
        """
        with self._lock:
            return LoggerMetrics(
                total_messages=self._metrics.total_messages,
                messages_by_level=dict(self._metrics.messages_by_level),
                dropped_messages=self._metrics.dropped_messages,
                writes_by_output=dict(self._metrics.writes_by_output),
                errors_by_output=dict(self._metrics.errors_by_output),
                writer_errors=self._metrics.writer_errors,
                last_error=self._metrics.last_error,
                started_at=self._metrics.started_at,
                last_message_at=self._metrics.last_message_at,
                last_error_at=self._metrics.last_error_at,
            )

    def reset(self) -> None:
        """Reset all metrics to initial values."""
        with self._lock:
            self._metrics = LoggerMetrics(started_at=datetime.now())
