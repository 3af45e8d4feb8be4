"""Writers module - Log file outputs"""

from multifile_logger.writers.base_output import FileOutput, split_filename
from multifile_logger.writers.file_output import FileLogWriter
from multifile_logger.writers.multi_file_output import (
    MultiFileLogWriter,
    RouterState,
    derive_filename,
)

__all__ = [
    "FileOutput",
    "split_filename",
    "FileLogWriter",
    "MultiFileLogWriter",
    "RouterState",
    "derive_filename",
]
