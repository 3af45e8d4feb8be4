"""
Output configuration parsing

Outputs are configured with a JSON object such as:

    {
        "filename": "logs/app.log",
        "maxLines": 0,
        "maxsize": 0,
        "daily": true,
        "maxDays": 15,
        "rotate": true,
        "perm": "0600",
        "separate": ["emergency", "alert", "critical", "error",
                     "warning", "notice", "info", "debug"]
    }

Only the fields below are interpreted here. Everything else is kept
verbatim in ``raw`` and forwarded to every output built from the config.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple, Union
import json

from multifile_logger.core.errors import InvalidConfigError
from multifile_logger.core.severity import Severity, LEVEL_COUNT

DEFAULT_PERM = 0o660
DEFAULT_MAX_BACKUPS = 5

ConfigBlob = Union[str, bytes, Mapping[str, Any], "OutputConfig", None]


def _parse_level(value: Any) -> Optional[Severity]:
    if value is None:
        return None
    if isinstance(value, Severity):
        return value
    if isinstance(value, bool):
        raise InvalidConfigError(f"level must be a rank or a name, got {value!r}")
    if isinstance(value, int):
        if 0 <= value < LEVEL_COUNT:
            return Severity(value)
        raise InvalidConfigError(f"level rank out of range: {value}")
    if isinstance(value, str):
        try:
            return Severity.from_string(value)
        except ValueError as e:
            raise InvalidConfigError(str(e)) from e
    raise InvalidConfigError(f"level must be a rank or a name, got {value!r}")


def _parse_perm(value: Any) -> int:
    if value is None or value == "":
        return DEFAULT_PERM
    if isinstance(value, bool):
        raise InvalidConfigError(f"perm must be an octal string or int, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value, 8)
        except ValueError as e:
            raise InvalidConfigError(f"perm is not octal: {value!r}") from e
    raise InvalidConfigError(f"perm must be an octal string or int, got {value!r}")


def _parse_int(raw: Mapping[str, Any], key: str, default: int = 0) -> int:
    value = raw.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidConfigError(f"{key} must be a number, got {value!r}")
    if value < 0:
        raise InvalidConfigError(f"{key} cannot be negative")
    return int(value)


def _parse_bool(raw: Mapping[str, Any], key: str, default: bool) -> bool:
    value = raw.get(key, default)
    if not isinstance(value, bool):
        raise InvalidConfigError(f"{key} must be true or false, got {value!r}")
    return value


@dataclass
class OutputConfig:
    """
    Parsed output configuration.

    Attributes:
        raw: Complete configuration mapping, pass-through fields included
        filename: Target file path
        level: Least severe level accepted (None accepts everything)
        separate: Severities that get a dedicated file, in rank order
        max_lines: Rotate after this many lines (0 disables)
        max_size: Rotate after this many bytes (0 disables)
        daily: Rotate when the day changes
        max_days: Delete backups older than this many days (0 keeps all)
        rotate: Master switch for rotation
        perm: File permission bits
        max_backups: Number of rotated backups to keep
    """

    raw: Dict[str, Any] = field(default_factory=dict)
    filename: str = ""
    level: Optional[Severity] = None
    separate: Tuple[Severity, ...] = ()
    max_lines: int = 0
    max_size: int = 0
    daily: bool = True
    max_days: int = 7
    rotate: bool = True
    perm: int = DEFAULT_PERM
    max_backups: int = DEFAULT_MAX_BACKUPS

    @classmethod
    def parse(cls, blob: ConfigBlob) -> "OutputConfig":
        """
        Parse a configuration blob.

        Args:
            blob: JSON text, a mapping, an existing OutputConfig or None

        Returns:
            New OutputConfig

        Raises:
            InvalidConfigError: If the blob is malformed
        """
        if isinstance(blob, OutputConfig):
            return cls.parse(blob.raw)

        if blob is None or blob == "" or blob == b"":
            raw: Any = {}
        elif isinstance(blob, (str, bytes)):
            try:
                raw = json.loads(blob)
            except ValueError as e:
                raise InvalidConfigError(f"config is not valid JSON: {e}") from e
        else:
            raw = blob

        if not isinstance(raw, Mapping):
            raise InvalidConfigError("config must be a JSON object")
        raw = dict(raw)

        filename = raw.get("filename", "")
        if not isinstance(filename, str):
            raise InvalidConfigError("filename must be a string")

        separate_names = raw.get("separate", [])
        if separate_names is None:
            separate_names = []
        if not isinstance(separate_names, (list, tuple)):
            raise InvalidConfigError("separate must be a list of severity names")

        # Names that are not canonical are ignored
        wanted = {name for name in separate_names if isinstance(name, str)}
        separate = tuple(
            sev for sev in Severity if str(sev) in wanted
        )

        return cls(
            raw=raw,
            filename=filename,
            level=_parse_level(raw.get("level")),
            separate=separate,
            max_lines=_parse_int(raw, "maxLines"),
            max_size=_parse_int(raw, "maxsize"),
            daily=_parse_bool(raw, "daily", True),
            max_days=_parse_int(raw, "maxDays", 7),
            rotate=_parse_bool(raw, "rotate", True),
            perm=_parse_perm(raw.get("perm")),
            max_backups=_parse_int(raw, "maxBackups", DEFAULT_MAX_BACKUPS),
        )

    def derive(self, **overrides: Any) -> "OutputConfig":
        """
        Copy this configuration with some raw fields replaced.

        Args:
            overrides: Raw keys to replace, e.g. filename="app.error.log"

        Returns:
            New OutputConfig
        """
        raw = dict(self.raw)
        for key, value in overrides.items():
            raw[key] = int(value) if isinstance(value, Severity) else value
        return OutputConfig.parse(raw)

    def to_json(self) -> str:
        """Serialize the raw configuration back to JSON."""
        return json.dumps(self.raw, sort_keys=True)
