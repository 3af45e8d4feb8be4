"""Single-file output with optional rotation"""

from __future__ import annotations
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Any, Callable, Optional
import os
import sys
import threading

from multifile_logger.core.errors import InvalidConfigError, WriteFailedError
from multifile_logger.core.log_message import LogMessage
from multifile_logger.core.output_config import ConfigBlob, OutputConfig
from multifile_logger.core.severity import Severity
from multifile_logger.formatters.resolver import resolve_formatter
from multifile_logger.writers.base_output import FileOutput


class FileLogWriter(FileOutput):
    """
    Write log messages to one file.

    Rotation is driven by the ``maxsize``, ``maxLines`` and ``daily``
    options and can be switched off with ``rotate: false``. Rotated files
    are kept as ``<filename>.1`` (newest) up to ``<filename>.<maxBackups>``.

    Thread Safety:
        write/flush/shutdown are serialized by an internal lock.
    """

    def __init__(self, formatter: Optional[Callable[[LogMessage], str]] = None, encoding: str = "utf-8"):
        """
        Initialize file writer.

        Args:
            formatter: Log formatter (default: uses the message's __str__)
            encoding: File encoding (default: 'utf-8')
        """
        self.formatter = formatter
        self.encoding = encoding
        self.config: Optional[OutputConfig] = None
        self._file = None
        self._lock = threading.Lock()
        self._size = 0
        self._lines = 0
        self._opened_day: Optional[date] = None

    @property
    def level(self) -> Optional[Severity]:
        return self.config.level if self.config else None

    @property
    def filename(self) -> str:
        return self.config.filename if self.config else ""

    @property
    def filepath(self) -> Path:
        return Path(self.filename)

    def init(self, config: ConfigBlob, formatter: Any = None) -> None:
        """
        Parse the configuration and open the file.

        Args:
            config: JSON text or mapping, ``filename`` required
            formatter: Optional formatter override

        Raises:
            InvalidConfigError: If the config is malformed or has no filename
            OSError: If the file cannot be created
        """
        parsed = OutputConfig.parse(config)
        if not parsed.filename:
            raise InvalidConfigError("filename is required")
        if formatter is not None:
            self.formatter = resolve_formatter(formatter)
        self.config = parsed
        self._open()

    def _open(self):
        """Open log file."""
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        created = not self.filepath.exists()
        fd = os.open(
            self.filepath,
            os.O_WRONLY | os.O_APPEND | os.O_CREAT,
            self.config.perm,
        )
        self._file = os.fdopen(fd, "a", encoding=self.encoding)
        if created:
            # The mode passed to os.open is masked by the umask
            os.chmod(self.filepath, self.config.perm)
        self._size = self._file.tell()
        self._lines = self._count_lines() if self.config.max_lines > 0 else 0
        self._opened_day = date.today()

    def _count_lines(self) -> int:
        with open(self.filepath, "rb") as f:
            return sum(1 for _ in f)

    def _should_rotate(self) -> bool:
        """Check if file should be rotated before the next write."""
        cfg = self.config
        if not cfg.rotate or not self._file:
            return False
        if cfg.max_lines > 0 and self._lines >= cfg.max_lines:
            return True
        if cfg.max_size > 0 and self._size >= cfg.max_size:
            return True
        if cfg.daily and self._size > 0 and date.today() != self._opened_day:
            return True
        return False

    def _backup_path(self, index: int) -> Path:
        return Path(f"{self.filename}.{index}")

    def _do_rotate(self):
        """Perform file rotation. The log file is reopened even if moving files fails."""
        self._file.close()
        self._file = None

        try:
            keep = self.config.max_backups
            if keep > 0:
                oldest = self._backup_path(keep)
                if oldest.exists():
                    oldest.unlink()
                for i in range(keep - 1, 0, -1):
                    src = self._backup_path(i)
                    if src.exists():
                        src.rename(self._backup_path(i + 1))
                self.filepath.rename(self._backup_path(1))
            else:
                self.filepath.unlink()

            self._delete_expired()
        finally:
            self._open()

    def _try_rotate(self):
        """Rotate, reporting a failure if the file could still be reopened."""
        try:
            self._do_rotate()
        except OSError as e:
            if not self._file:
                raise
            print(f"Rotation error ({self.filename}): {e}", file=sys.stderr)

    def _delete_expired(self):
        """Remove backups older than maxDays."""
        if self.config.max_days <= 0:
            return
        cutoff = (datetime.now() - timedelta(days=self.config.max_days)).timestamp()
        for i in range(1, self.config.max_backups + 1):
            backup = self._backup_path(i)
            try:
                if backup.stat().st_mtime < cutoff:
                    backup.unlink()
            except FileNotFoundError:
                continue

    def format(self, msg: LogMessage) -> str:
        """Render a message as one line, without the newline."""
        if self.formatter:
            return self.formatter(msg)
        return str(msg)

    def write(self, msg: LogMessage) -> None:
        """
        Write a message if it passes the level gate.

        Raises:
            WriteFailedError: If the output is closed or the write fails
        """
        if not self.accepts(msg.severity):
            return
        line = self.format(msg) + "\n"
        with self._lock:
            if not self._file:
                raise WriteFailedError(f"{self.filename or 'output'} is not open", self.filename)
            try:
                if self._should_rotate():
                    self._try_rotate()
                self._file.write(line)
            except (OSError, ValueError) as e:
                raise WriteFailedError(f"write to {self.filename} failed: {e}", self.filename) from e
            self._size += len(line.encode(self.encoding))
            self._lines += 1

    def flush(self):
        """Flush file buffer."""
        with self._lock:
            if self._file:
                self._file.flush()

    def shutdown(self):
        """Close file."""
        with self._lock:
            if self._file:
                self._file.close()
                self._file = None

    def __repr__(self) -> str:
        """String representation."""
        return f"FileLogWriter(filename={self.filename!r}, level={self.level!s})"
