"""Formatter lookup for the ``formatter`` option of outputs"""

from typing import Any, Callable, Dict, Optional

from multifile_logger.core.errors import InvalidConfigError
from multifile_logger.core.log_message import LogMessage
from multifile_logger.formatters.base_formatter import BaseFormatter
from multifile_logger.formatters.json_formatter import JSONFormatter
from multifile_logger.formatters.text_formatter import TextFormatter

FormatFunc = Callable[[LogMessage], str]

FORMATTERS: Dict[str, Callable[[], BaseFormatter]] = {
    "text": TextFormatter,
    "json": JSONFormatter,
}


def resolve_formatter(value: Any) -> Optional[FormatFunc]:
    """
    Turn a formatter option into a callable.

    Args:
        value: None, a BaseFormatter, any callable taking a LogMessage,
               or a formatter name ("text", "json")

    Returns:
        Callable formatter, or None when no override was given

    Raises:
        InvalidConfigError: If the name is unknown or the value unusable
    """
    if value is None:
        return None
    if isinstance(value, str):
        factory = FORMATTERS.get(value)
        if factory is None:
            raise InvalidConfigError(f"Unknown formatter: {value!r}")
        return factory()
    if callable(value):
        return value
    raise InvalidConfigError(f"Formatter must be callable, got {type(value).__name__}")
