"""
File output interface

Every output built by the multifile router implements this interface.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
import os
from typing import Any, Optional, Tuple

from multifile_logger.core.log_message import LogMessage
from multifile_logger.core.output_config import ConfigBlob
from multifile_logger.core.severity import Severity


def split_filename(filename: str) -> Tuple[str, str]:
    """
    Split a file name into base name and suffix.

    The suffix is the last extension, dot included:
    ``"logs/app.log"`` gives ``("logs/app", ".log")`` and a name without
    an extension gives an empty suffix.
    """
    base, suffix = os.path.splitext(filename)
    return base, suffix


class FileOutput(ABC):
    """
    Abstract base class for single-file outputs.

    Lifecycle: construct, ``init(config)`` once, any number of
    ``write``/``flush`` calls, then ``shutdown``.
    """

    formatter = None

    @abstractmethod
    def init(self, config: ConfigBlob, formatter: Any = None) -> None:
        """
        Configure and open the output.

        Args:
            config: Configuration blob (JSON text or mapping)
            formatter: Optional formatter override (BaseFormatter,
                       callable or formatter name)

        Raises:
            InvalidConfigError: If the configuration is unusable
            OSError: If the file cannot be opened
        """
        pass

    @abstractmethod
    def write(self, msg: LogMessage) -> None:
        """
        Write one message.

        Must be safe to call from several threads at once.

        Raises:
            WriteFailedError: If the message could not be written
        """
        pass

    @abstractmethod
    def flush(self) -> None:
        """Flush buffered data."""
        pass

    @abstractmethod
    def shutdown(self) -> None:
        """Flush and release the file."""
        pass

    @property
    @abstractmethod
    def level(self) -> Optional[Severity]:
        """Least severe level accepted, None for all."""
        pass

    @property
    @abstractmethod
    def filename(self) -> str:
        """Configured file name."""
        pass

    @property
    def base_name(self) -> str:
        """File name without its suffix."""
        return split_filename(self.filename)[0]

    @property
    def suffix(self) -> str:
        """Last extension of the file name, dot included."""
        return split_filename(self.filename)[1]

    def accepts(self, severity: Severity) -> bool:
        """True if a message of this severity passes the level gate."""
        level = self.level
        return level is None or severity <= level

    def close(self) -> None:
        """Alias for shutdown()."""
        self.shutdown()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.shutdown()
