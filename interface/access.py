"""
Swift access levels and their total order.

Raw classifications come from SourceKit (``source.lang.swift.accessibility.*``).
Anything unrecognised is treated as ``private``, the most restrictive level.
"""

import logging
from enum import IntEnum
from typing import Optional

from interface.config import ACCESSIBILITY_PREFIX, DEFAULT_MIN_ACL

logger = logging.getLogger(__name__)


class AccessLevel(IntEnum):
    """Visibility classification ordered private < ... < open."""

    PRIVATE = 0
    FILEPRIVATE = 1
    INTERNAL = 2
    PUBLIC = 3
    OPEN = 4

    @property
    def label(self) -> str:
        """Swift keyword spelling of the level (e.g. ``fileprivate``)."""
        return self.name.lower()

    @classmethod
    def parse(cls, raw: Optional[str]) -> "AccessLevel":
        """Parse a raw SourceKit classification.

        Accepts the full accessibility key or the bare keyword. Absent or
        unknown input yields ``PRIVATE``; this never raises.

        Example:
            >>> AccessLevel.parse("source.lang.swift.accessibility.open")
            <AccessLevel.OPEN: 4>
            >>> AccessLevel.parse(None)
            <AccessLevel.PRIVATE: 0>
        """
        level = cls._lookup(raw)
        return cls.PRIVATE if level is None else level

    @classmethod
    def from_name(cls, name: Optional[str]) -> "AccessLevel":
        """Resolve a user supplied level name, falling back to ``PUBLIC``."""
        level = cls._lookup(name)
        if level is None:
            logger.warning(
                "Unknown access level %r; falling back to %s", name, DEFAULT_MIN_ACL
            )
            return cls[DEFAULT_MIN_ACL.upper()]
        return level

    @classmethod
    def _lookup(cls, raw: Optional[str]) -> Optional["AccessLevel"]:
        if not isinstance(raw, str):
            return None
        text = raw.strip()
        if text.startswith(ACCESSIBILITY_PREFIX):
            text = text[len(ACCESSIBILITY_PREFIX):]
        return cls.__members__.get(text.upper()) if text.islower() else None


def compare(a: AccessLevel, b: AccessLevel) -> int:
    """Three-way comparison: negative if ``a < b``, zero if equal, positive otherwise."""
    return int(a) - int(b)
