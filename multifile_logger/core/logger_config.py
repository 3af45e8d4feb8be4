"""
Logger configuration management
"""

from dataclasses import dataclass

from multifile_logger.core.severity import Severity


@dataclass
class LoggerConfig:
    """
    Front-end logger configuration.

    Output configuration (file names, separate levels, rotation) lives in
    the JSON blob handed to each output, not here.
    """

    # Basic settings
    name: str = "logger"
    min_level: Severity = Severity.DEBUG
    async_mode: bool = True

    # Queue settings (for async mode)
    queue_size: int = 10000
    batch_size: int = 100
    flush_interval_ms: int = 100

    # Record per-level and per-output counters
    enable_metrics: bool = True

    def __post_init__(self):
        """Validate configuration after initialization."""
        if isinstance(self.min_level, str):
            self.min_level = Severity.from_string(self.min_level)
        elif not isinstance(self.min_level, Severity):
            self.min_level = Severity(self.min_level)
        if self.queue_size <= 0:
            raise ValueError("queue_size must be positive")
        if self.batch_size <= 0:
            raise ValueError("batch_size must be positive")
        if self.batch_size > self.queue_size:
            raise ValueError("batch_size cannot exceed queue_size")
        if self.flush_interval_ms < 0:
            raise ValueError("flush_interval_ms cannot be negative")

    @classmethod
    def default(cls) -> "LoggerConfig":
        """Create default configuration."""
        return cls()

    @classmethod
    def debug_config(cls) -> "LoggerConfig":
        """Create configuration for debugging."""
        return cls(
            min_level=Severity.DEBUG,
            async_mode=False,  # Synchronous for debugging
        )

    @classmethod
    def production_config(cls) -> "LoggerConfig":
        """Create configuration for production."""
        return cls(
            min_level=Severity.INFO,
            async_mode=True,
            queue_size=20000,
            batch_size=200,
        )
