"""
Front-end logger

Builds LogMessage records and hands them to its outputs, either directly
or through a background worker thread.
"""

from __future__ import annotations
from typing import Any, List, Optional
import atexit
import queue
import sys
import threading
import time

from multifile_logger.core.log_message import LogMessage
from multifile_logger.core.logger_config import LoggerConfig
from multifile_logger.core.output_config import ConfigBlob
from multifile_logger.core.severity import Severity
from multifile_logger.monitoring.metrics import MetricsCollector
from multifile_logger.registry import AdapterRegistry, default_registry


class Logger:
    """Main logger class with async support."""

    def __init__(
        self,
        config: Optional[LoggerConfig] = None,
        registry: Optional[AdapterRegistry] = None,
    ):
        self._config = config or LoggerConfig.default()
        self._registry = registry or default_registry()
        self._outputs: List[Any] = []
        self._running = False
        self._closed = False
        self._log_queue: Optional[queue.Queue] = None
        self._worker_thread: Optional[threading.Thread] = None
        self._metrics = {"logged": 0, "dropped": 0, "processed": 0}
        self._collector = MetricsCollector() if self._config.enable_metrics else None

        if self._config.async_mode:
            self._start_async_worker()

        atexit.register(self.shutdown)

    @property
    def name(self) -> str:
        return self._config.name

    @property
    def level(self) -> Severity:
        return self._config.min_level

    @property
    def registry(self) -> AdapterRegistry:
        return self._registry

    @property
    def outputs(self) -> List[Any]:
        return list(self._outputs)

    @property
    def metrics_collector(self) -> Optional[MetricsCollector]:
        return self._collector

    def _start_async_worker(self):
        """Start async worker thread."""
        self._log_queue = queue.Queue(maxsize=self._config.queue_size)
        self._running = True
        self._worker_thread = threading.Thread(
            target=self._process_queue,
            name=f"{self._config.name}-worker",
            daemon=True
        )
        self._worker_thread.start()

    def _process_queue(self):
        """Process log messages from queue (worker thread)."""
        batch = []
        last_flush = time.time()

        while self._running or not self._log_queue.empty():
            try:
                timeout = self._config.flush_interval_ms / 1000.0
                msg = self._log_queue.get(timeout=timeout)

                try:
                    batch.append(msg)

                    should_flush = (
                        len(batch) >= self._config.batch_size or
                        (time.time() - last_flush) >= timeout
                    )

                    if should_flush:
                        self._write_batch(batch)
                        batch.clear()
                        last_flush = time.time()
                finally:
                    # Always mark task as done to prevent queue.join() deadlock
                    self._log_queue.task_done()

            except queue.Empty:
                if batch:
                    self._write_batch(batch)
                    batch.clear()
                    last_flush = time.time()

        if batch:
            self._write_batch(batch)

    def _write_batch(self, batch: List[LogMessage]):
        """Write batch of messages to all outputs."""
        for msg in batch:
            for output in self._outputs:
                try:
                    output.write(msg)
                except Exception as e:
                    if self._collector:
                        self._collector.record_writer_error(getattr(output, "filename", ""), e)
                    print(f"Writer error: {e}", file=sys.stderr)
            self._metrics["processed"] += 1

    def add_output(self, adapter: str, config: ConfigBlob = None, formatter: Any = None) -> Any:
        """
        Create an output from the registry, initialize it and attach it.

        Args:
            adapter: Registered adapter name, e.g. "multifile"
            config: Output configuration blob
            formatter: Optional formatter override for the output

        Returns:
            The initialized output

        Raises:
            KeyError: If the adapter is unknown
            InvalidConfigError, InitFailedError: If the output cannot start
        """
        output = self._registry.create(adapter)
        # Routers without their own collector share the logger's
        if getattr(output, "metrics", "") is None and self._collector:
            output.metrics = self._collector
        output.init(config, formatter=formatter)
        self._outputs.append(output)
        return output

    def add_writer(self, writer: Any) -> None:
        """Attach an output that is already initialized."""
        self._outputs.append(writer)

    def log(self, level: Severity, message: str, **kwargs) -> None:
        """Log a message."""
        if self._closed or level > self._config.min_level:
            return

        msg = LogMessage(
            severity=level,
            text=message,
            logger_name=self._config.name,
            **kwargs
        )

        if self._collector:
            self._collector.record_message(level)

        if self._config.async_mode and self._running:
            try:
                self._log_queue.put_nowait(msg)
                self._metrics["logged"] += 1
            except queue.Full:
                self._metrics["dropped"] += 1
                if self._collector:
                    self._collector.record_dropped()
        else:
            self._write_batch([msg])
            self._metrics["logged"] += 1

    def emergency(self, message: str, **kwargs) -> None:
        """Log emergency message."""
        self.log(Severity.EMERGENCY, message, **kwargs)

    def alert(self, message: str, **kwargs) -> None:
        """Log alert message."""
        self.log(Severity.ALERT, message, **kwargs)

    def critical(self, message: str, **kwargs) -> None:
        """Log critical message."""
        self.log(Severity.CRITICAL, message, **kwargs)

    def error(self, message: str, **kwargs) -> None:
        """Log error message."""
        self.log(Severity.ERROR, message, **kwargs)

    def warning(self, message: str, **kwargs) -> None:
        """Log warning message."""
        self.log(Severity.WARNING, message, **kwargs)

    warn = warning

    def notice(self, message: str, **kwargs) -> None:
        """Log notice message."""
        self.log(Severity.NOTICE, message, **kwargs)

    def info(self, message: str, **kwargs) -> None:
        """Log info message."""
        self.log(Severity.INFO, message, **kwargs)

    def debug(self, message: str, **kwargs) -> None:
        """Log debug message."""
        self.log(Severity.DEBUG, message, **kwargs)

    def flush(self):
        """Flush all pending log messages."""
        if self._config.async_mode and self._log_queue and self._running:
            # Wait for queue to empty
            self._log_queue.join()

            # Wait for all messages to be processed (not just dequeued)
            max_wait = 1.0
            start_time = time.time()
            while (time.time() - start_time) < max_wait:
                if self._metrics["processed"] >= self._metrics["logged"]:
                    break
                time.sleep(0.01)

        for output in self._outputs:
            if hasattr(output, "flush"):
                output.flush()

    def shutdown(self):
        """Drain the queue, then shut down every output."""
        if self._closed:
            return
        self._closed = True

        self._running = False
        if self._worker_thread:
            self._worker_thread.join(timeout=5.0)

        for output in self._outputs:
            for step in (output.flush, output.shutdown):
                try:
                    step()
                except Exception as e:
                    print(f"Writer error: {e}", file=sys.stderr)

        atexit.unregister(self.shutdown)

    def get_metrics(self) -> dict:
        """Get logging metrics."""
        return self._metrics.copy()
