"""
Multi-file output

Writes every message to one full log file and, for the severities listed
in ``separate``, also to a dedicated file per severity. With
``"filename": "project.log"`` and ``"separate": ["error", "debug"]`` the
router keeps ``project.log``, ``project.error.log`` and
``project.debug.log``. Rotation options apply to each file the same way
they apply to a single FileLogWriter.
"""

from __future__ import annotations
from enum import Enum
from typing import Any, Callable, List, Optional, Tuple
import sys
import threading

from multifile_logger.core.errors import (
    InitFailedError,
    MultiFileError,
)
from multifile_logger.core.log_message import LogMessage
from multifile_logger.core.output_config import ConfigBlob, OutputConfig
from multifile_logger.core.severity import FULL_SLOT, LEVEL_COUNT, Severity
from multifile_logger.formatters.resolver import FormatFunc, resolve_formatter
from multifile_logger.monitoring.metrics import MetricsCollector
from multifile_logger.writers.base_output import FileOutput
from multifile_logger.writers.file_output import FileLogWriter

OutputFactory = Callable[[], FileOutput]


class RouterState(Enum):
    """Router lifecycle state. Transitions are linear."""

    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    SHUT_DOWN = "shut_down"


def derive_filename(output: FileOutput, severity: Severity) -> str:
    """
    Name of the dedicated file for ``severity``.

    The severity name goes between the full output's base name and its
    suffix: ``app.log`` and ``error`` give ``app.error.log``.
    """
    return f"{output.base_name}.{severity!s}{output.suffix}"


class MultiFileLogWriter:
    """
    Fan log messages out to a full file and per-severity files.

    Holds ``LEVEL_COUNT + 1`` slots. Slot ``i`` holds the dedicated output
    for ``Severity(i)`` or None, and slot ``FULL_SLOT`` holds the output
    that receives every message.

    Thread Safety:
        init() is serialized by a lock and publishes the slot list in a
        single assignment. write()/flush() do not lock; each output
        serializes its own writes.

    Example:
        router = MultiFileLogWriter()
        router.init('{"filename": "logs/app.log", "separate": ["error"]}')
        router.write(LogMessage(Severity.ERROR, "disk full"))
        router.shutdown()
    """

    def __init__(
        self,
        output_factory: OutputFactory = FileLogWriter,
        metrics: Optional[MetricsCollector] = None,
    ):
        """
        Initialize an unconfigured router.

        Args:
            output_factory: Zero-argument callable creating a FileOutput
            metrics: Collector receiving per-output write and error counts
        """
        self._output_factory = output_factory
        self._metrics = metrics
        self._slots: List[Optional[FileOutput]] = [None] * (LEVEL_COUNT + 1)
        self._formatter: Optional[FormatFunc] = None
        self._state = RouterState.UNINITIALIZED
        self._init_lock = threading.Lock()

    @property
    def state(self) -> RouterState:
        return self._state

    @property
    def metrics(self) -> Optional[MetricsCollector]:
        return self._metrics

    @metrics.setter
    def metrics(self, collector: Optional[MetricsCollector]) -> None:
        self._metrics = collector

    @property
    def formatter(self) -> Optional[FormatFunc]:
        return self._formatter

    @property
    def outputs(self) -> Tuple[Optional[FileOutput], ...]:
        """Snapshot of all slots, full output last."""
        return tuple(self._slots)

    @property
    def full_output(self) -> Optional[FileOutput]:
        return self._slots[FULL_SLOT]

    @property
    def separate(self) -> Tuple[Severity, ...]:
        """Severities that currently have a dedicated output."""
        return tuple(
            Severity(rank) for rank in range(LEVEL_COUNT)
            if self._slots[rank] is not None
        )

    def output_for(self, severity: Severity) -> Optional[FileOutput]:
        """Dedicated output for ``severity``, or None."""
        return self._slots[severity]

    def init(self, config: ConfigBlob, formatter: Any = None) -> None:
        """
        Build the full output and the dedicated outputs.

        Args:
            config: JSON text or mapping. ``filename`` and ``separate`` are
                    read here, everything else is forwarded to each output.
            formatter: Optional formatter override (BaseFormatter,
                       callable or formatter name) given to every output

        Raises:
            InvalidConfigError: If the config or formatter cannot be parsed
            InitFailedError: If any output fails to initialize
            MultiFileError: If the router was already initialized
        """
        with self._init_lock:
            if self._state is not RouterState.UNINITIALIZED:
                raise MultiFileError(f"cannot init a router in state {self._state.value}")

            resolved = resolve_formatter(formatter)
            parsed = OutputConfig.parse(config)

            slots: List[Optional[FileOutput]] = [None] * (LEVEL_COUNT + 1)
            full = self._create_output(parsed, resolved, slots)
            slots[FULL_SLOT] = full

            for severity in parsed.separate:
                dedicated_config = parsed.derive(
                    filename=derive_filename(full, severity),
                    level=severity,
                )
                slots[severity] = self._create_output(dedicated_config, resolved, slots)

            self._formatter = resolved
            self._slots = slots
            self._state = RouterState.INITIALIZED

    def _create_output(
        self,
        config: OutputConfig,
        formatter: Optional[FormatFunc],
        created: List[Optional[FileOutput]],
    ) -> FileOutput:
        """Create and init one output, undoing ``created`` on failure."""
        output = self._output_factory()
        try:
            output.init(config, formatter=formatter)
        except Exception as e:
            for other in created:
                if other is not None:
                    self._call_safely(other, other.shutdown)
            self._call_safely(output, output.shutdown)
            raise InitFailedError(
                f"failed to initialize output {config.filename!r}: {e}"
            ) from e
        return output

    def format(self, msg: LogMessage) -> str:
        """Render a message with the formatter override, if any."""
        if self._formatter:
            return self._formatter(msg)
        return msg.text

    def write(self, msg: LogMessage) -> int:
        """
        Dispatch a message.

        Writes to the full output and to the dedicated output for
        ``msg.severity`` when one exists. A failing output does not stop
        the other from being attempted, and failures are only recorded.

        Args:
            msg: Message to dispatch

        Returns:
            Number of outputs that accepted the message

        Raises:
            MultiFileError: If the router is not initialized
        """
        if self._state is not RouterState.INITIALIZED:
            raise MultiFileError(f"cannot write to a router in state {self._state.value}")

        slots = self._slots
        count = 0
        for output in (slots[FULL_SLOT], slots[msg.severity]):
            if output is None:
                continue
            try:
                output.write(msg)
            except Exception as e:
                self._report(output, e)
                continue
            count += 1
            if self._metrics:
                self._metrics.record_write(output.filename)
        return count

    def flush(self) -> None:
        """Flush every populated slot, each independently."""
        for output in self._slots:
            if output is not None:
                self._call_safely(output, output.flush)

    def shutdown(self) -> None:
        """Shut down every populated slot once. Later calls do nothing."""
        with self._init_lock:
            if self._state is RouterState.SHUT_DOWN:
                return
            self._state = RouterState.SHUT_DOWN
            slots = self._slots
        for output in slots:
            if output is not None:
                self._call_safely(output, output.shutdown)

    def close(self) -> None:
        """Alias for shutdown()."""
        self.shutdown()

    def _call_safely(self, output: FileOutput, method: Callable[[], None]) -> None:
        try:
            method()
        except Exception as e:
            self._report(output, e)

    def _report(self, output: FileOutput, error: BaseException) -> None:
        """Record an output failure on the side channel."""
        filename = getattr(error, "filename", None) or output.filename
        if self._metrics:
            self._metrics.record_writer_error(filename, error)
        print(f"Writer error ({filename}): {error}", file=sys.stderr)

    def __enter__(self) -> "MultiFileLogWriter":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.shutdown()

    def __repr__(self) -> str:
        """String representation."""
        full = self.full_output
        return (
            f"MultiFileLogWriter(state={self._state.value}, "
            f"filename={full.filename if full else None!r}, "
            f"separate={[str(s) for s in self.separate]})"
        )
