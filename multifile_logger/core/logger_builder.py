"""Logger builder pattern"""

from typing import Any, List, Optional, Sequence, Tuple

from multifile_logger.core.logger import Logger
from multifile_logger.core.logger_config import LoggerConfig
from multifile_logger.core.output_config import ConfigBlob
from multifile_logger.core.severity import Severity
from multifile_logger.registry import (
    ADAPTER_FILE,
    ADAPTER_MULTIFILE,
    AdapterRegistry,
)


class LoggerBuilder:
    """Builder pattern for logger construction."""

    def __init__(self):
        self._config = LoggerConfig()
        self._registry: Optional[AdapterRegistry] = None
        self._formatter: Any = None
        self._outputs: List[Tuple[str, ConfigBlob, Any]] = []
        self._custom_writers = []

    def with_name(self, name: str) -> "LoggerBuilder":
        """Set logger name."""
        self._config.name = name
        return self

    def with_level(self, level: Severity) -> "LoggerBuilder":
        """Set the least severe level that is logged."""
        self._config.min_level = level
        return self

    def with_async(self, enabled: bool = True) -> "LoggerBuilder":
        """Enable/disable async mode."""
        self._config.async_mode = enabled
        return self

    def with_queue_size(self, size: int) -> "LoggerBuilder":
        """Set async queue size."""
        self._config.queue_size = size
        return self

    def with_batch_size(self, size: int) -> "LoggerBuilder":
        """Set batch size."""
        self._config.batch_size = size
        return self

    def with_metrics(self, enabled: bool = True) -> "LoggerBuilder":
        """Enable/disable the metrics collector."""
        self._config.enable_metrics = enabled
        return self

    def with_registry(self, registry: AdapterRegistry) -> "LoggerBuilder":
        """
        Use an explicit adapter registry.

        Args:
            registry: Registry consulted by with_output()

        Returns:
            Self for method chaining
        """
        self._registry = registry
        return self

    def with_formatter(self, formatter: Any) -> "LoggerBuilder":
        """
        Set the default formatter for outputs added by this builder.

        Args:
            formatter: BaseFormatter, callable or formatter name

        Returns:
            Self for method chaining
        """
        self._formatter = formatter
        return self

    def with_output(
        self,
        adapter: str,
        config: ConfigBlob = None,
        formatter: Any = None
    ) -> "LoggerBuilder":
        """
        Add an output created from the registry at build time.

        Args:
            adapter: Registered adapter name
            config: Output configuration blob
            formatter: Formatter override for this output only

        Returns:
            Self for method chaining
        """
        self._outputs.append((adapter, config, formatter))
        return self

    def with_file(self, filename: str, **options: Any) -> "LoggerBuilder":
        """Add a single-file output."""
        return self.with_output(ADAPTER_FILE, dict(options, filename=filename))

    def with_multifile(
        self,
        filename: str,
        separate: Sequence[str] = (),
        **options: Any
    ) -> "LoggerBuilder":
        """
        Add a multi-file output.

        Args:
            filename: Full log file, e.g. "logs/app.log"
            separate: Severity names that get their own file
            options: Pass-through output options (maxLines, maxsize, ...)

        Returns:
            Self for method chaining

        Example:
            logger = (LoggerBuilder()
                .with_multifile("logs/app.log", separate=["error", "debug"])
                .build())
        """
        config = dict(options, filename=filename, separate=list(separate))
        return self.with_output(ADAPTER_MULTIFILE, config)

    def add_writer(self, writer) -> "LoggerBuilder":
        """
        Add an output that is already initialized.

        Args:
            writer: Output instance

        Returns:
            Self for method chaining
        """
        self._custom_writers.append(writer)
        return self

    def build(self) -> Logger:
        """Build and return configured logger."""
        logger = Logger(self._config, self._registry)

        try:
            for adapter, config, formatter in self._outputs:
                logger.add_output(
                    adapter,
                    config,
                    formatter=formatter if formatter is not None else self._formatter,
                )
        except Exception:
            logger.shutdown()
            raise

        for writer in self._custom_writers:
            logger.add_writer(writer)

        return logger
