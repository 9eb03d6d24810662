"""Enumerations used throughout polyframe."""

from enum import StrEnum


class JoinType(StrEnum):
    """Spark join types accepted by the fold strategies."""

    LEFT = "left"
    INNER = "inner"
    RIGHT = "right"
    FULL = "full"

    @property
    def preserves_first_table(self) -> bool:
        """True if rows of the left-most table always survive the join."""
        return self in (JoinType.LEFT, JoinType.FULL)
