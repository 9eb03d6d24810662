"""
Exception hierarchy for polyframe.

- Construction-time: EmptyInputError, DuplicateNameError, InvalidStrategyError,
  InvalidTableError (all ConstructionError).
- Accessor-time: NotFoundError.
- Merge-time: StrategyInvocationError, StrategyContractError, InvalidOverrideError
  (all MergeError).
- Strategy-level: NoCommonColumnsError, OverlappingColumnsError, raised by the
  built-in fold strategies.
"""

from __future__ import annotations

from collections.abc import Sequence


class PolyFrameError(Exception):
    """Base class for every error raised by polyframe."""


# ---------- construction ----------


class ConstructionError(PolyFrameError, ValueError):
    """A PolyTable could not be built from the supplied inputs."""


class EmptyInputError(ConstructionError):
    """No tables were supplied."""


class DuplicateNameError(ConstructionError):
    """Two or more tables share a name."""

    def __init__(self, names: Sequence[str]) -> None:
        self.names = tuple(names)
        listed = ", ".join(repr(name) for name in self.names)
        super().__init__(f"Table names must be unique; duplicated: {listed}")


class InvalidStrategyError(ConstructionError, TypeError):
    """The merge strategy cannot be called as strategy(tables)."""


class InvalidTableError(ConstructionError, TypeError):
    """An entry is not a (name, DataFrame) pair."""


# ---------- accessors ----------


class NotFoundError(PolyFrameError, KeyError):
    """No table with the requested name."""

    def __init__(self, name: str, available: Sequence[str] = ()) -> None:
        self.name = name
        self.available = tuple(available)
        super().__init__(name)

    def __str__(self) -> str:
        return f"No table named {self.name!r}; available: {list(self.available)}"


# ---------- merge ----------


class MergeError(PolyFrameError):
    """Merging a PolyTable failed."""


class StrategyInvocationError(MergeError):
    """The merge strategy raised. The original exception is chained as __cause__."""

    def __init__(self, strategy_name: str, cause: BaseException) -> None:
        self.strategy_name = strategy_name
        self.cause = cause
        super().__init__(
            f"Merge strategy {strategy_name!r} failed: {type(cause).__name__}: {cause}"
        )


class InvalidOverrideError(MergeError, InvalidStrategyError):
    """The strategy override passed to merge cannot be called as strategy(tables)."""


class StrategyContractError(MergeError, TypeError):
    """The merge strategy returned something other than a single table."""

    def __init__(self, strategy_name: str, result: object, detail: str = "") -> None:
        self.strategy_name = strategy_name
        self.result_type = type(result)
        message = (
            f"Merge strategy {strategy_name!r} must return a single DataFrame, "
            f"got {self.result_type.__name__}"
        )
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


# ---------- strategies ----------


class NoCommonColumnsError(PolyFrameError, ValueError):
    """A fold step found no columns shared by both operands."""

    def __init__(self, step: int, left_columns: Sequence[str], right_columns: Sequence[str]) -> None:
        self.step = step
        self.left_columns = tuple(left_columns)
        self.right_columns = tuple(right_columns)
        super().__init__(
            f"Fold step {step} has no common columns to join on: "
            f"left={list(self.left_columns)}, right={list(self.right_columns)}. "
            "Pass `on=` explicitly or rename the linking columns."
        )


class OverlappingColumnsError(PolyFrameError, ValueError):
    """A fold step with fixed keys found other columns present in both operands."""

    def __init__(self, step: int, keys: Sequence[str], overlapping: Sequence[str]) -> None:
        self.step = step
        self.keys = tuple(keys)
        self.overlapping = tuple(overlapping)
        super().__init__(
            f"Fold step {step} joins on {list(self.keys)} but both operands also have "
            f"{list(self.overlapping)}; the result would hold duplicate columns. "
            "Add them to `on=`, rename them, or drop them before merging."
        )
