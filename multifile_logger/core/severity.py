"""
Severity enumeration

Eight syslog-style levels ranked from most to least severe.
The numeric rank doubles as the output slot index.
"""

from enum import IntEnum
from typing import Dict, Optional, Tuple


class Severity(IntEnum):
    """
    Log severity.

    Lower values are more severe, so ``Severity.ERROR < Severity.INFO``.
    """

    EMERGENCY = 0   # System is unusable
    ALERT = 1       # Action must be taken immediately
    CRITICAL = 2    # Critical conditions
    ERROR = 3       # Error conditions
    WARNING = 4     # Warning conditions
    NOTICE = 5      # Normal but significant
    INFO = 6        # Informational messages
    DEBUG = 7       # Debug-level messages

    def __str__(self) -> str:
        """Canonical lowercase name."""
        return LEVEL_NAMES[self]

    @classmethod
    def from_string(cls, level_str: str) -> "Severity":
        """
        Convert string to Severity.

        Args:
            level_str: Level name (case-insensitive)

        Returns:
            Severity enum value

        Raises:
            ValueError: If level_str is not valid
        """
        level_str = level_str.upper()
        if level_str in cls.__members__:
            return cls[level_str]
        raise ValueError(f"Invalid severity: {level_str}")

    @classmethod
    def from_name(cls, name: str) -> Optional["Severity"]:
        """
        Exact lookup against the canonical lowercase names.

        Returns:
            Matching Severity, or None when the name is not canonical
        """
        return LEVEL_FROM_NAME.get(name)

    def is_at_least(self, threshold: "Severity") -> bool:
        """True if this severity is as severe as ``threshold`` or more."""
        return self <= threshold

    @property
    def color_code(self) -> str:
        """
        Get ANSI color code for this severity.

        Returns:
            ANSI escape sequence
        """
        colors = {
            Severity.EMERGENCY: "\033[1;35m",  # Bold magenta
            Severity.ALERT: "\033[1;31m",      # Bold red
            Severity.CRITICAL: "\033[35m",     # Magenta
            Severity.ERROR: "\033[31m",        # Red
            Severity.WARNING: "\033[33m",      # Yellow
            Severity.NOTICE: "\033[34m",       # Blue
            Severity.INFO: "\033[32m",         # Green
            Severity.DEBUG: "\033[36m",        # Cyan
        }
        return colors.get(self, "\033[0m")

    @property
    def reset_code(self) -> str:
        """ANSI reset code."""
        return "\033[0m"


# Canonical names, indexed by rank
LEVEL_NAMES: Tuple[str, ...] = (
    "emergency",
    "alert",
    "critical",
    "error",
    "warning",
    "notice",
    "info",
    "debug",
)

LEVEL_COUNT = len(LEVEL_NAMES)

# Slot reserved for the output that receives every message
FULL_SLOT = LEVEL_COUNT

# Reverse mapping
LEVEL_FROM_NAME: Dict[str, Severity] = {
    name: Severity(rank) for rank, name in enumerate(LEVEL_NAMES)
}
