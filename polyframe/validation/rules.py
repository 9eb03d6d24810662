"""
Construction rules for PolyTable inputs.

Each rule inspects the normalised table entries and the default strategy, and
raises a ConstructionError subclass on the first violation it finds. Rules do
not look inside the tables: no row-level or schema checks happen here.
"""

import inspect
from collections import Counter
from collections.abc import Sequence

from polyframe.errors import (
    DuplicateNameError,
    EmptyInputError,
    InvalidStrategyError,
    InvalidTableError,
)
from polyframe.types import is_table, strategy_name

_POSITIONAL_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


class ValidationRule:
    """Base interface for a construction rule."""

    def check(self, entries: Sequence[object], merge_strategy: object) -> None:
        """Validate the entries and strategy, raising on violation."""
        raise NotImplementedError


class NonEmptyTablesRule(ValidationRule):
    """At least one table must be supplied."""

    def check(self, entries: Sequence[object], merge_strategy: object) -> None:
        """Validate that there is at least one entry."""
        if not entries:
            raise EmptyInputError("A PolyTable needs at least one table; none were supplied.")


class NamedTableEntriesRule(ValidationRule):
    """Every entry must be a (non-empty name, DataFrame) pair."""

    def check(self, entries: Sequence[object], merge_strategy: object) -> None:
        """Validate the shape of every entry."""
        for position, entry in enumerate(entries):
            if isinstance(entry, str | bytes) or not isinstance(entry, Sequence) or len(entry) != 2:
                raise InvalidTableError(
                    f"Entry {position} must be a (name, DataFrame) pair, "
                    f"got {type(entry).__name__}."
                )
            name, table = entry
            if not isinstance(name, str) or not name:
                raise InvalidTableError(f"Entry {position} has an invalid name: {name!r}.")
            if not is_table(table):
                raise InvalidTableError(
                    f"Table {name!r} must be a DataFrame, got {type(table).__name__}."
                )


class UniqueTableNamesRule(ValidationRule):
    """Table names must be unique within a PolyTable."""

    def check(self, entries: Sequence[object], merge_strategy: object) -> None:
        """Validate that no name appears twice."""
        counts = Counter(name for name, _ in entries)
        duplicated = [name for name, count in counts.items() if count > 1]
        if duplicated:
            raise DuplicateNameError(duplicated)


class CallableStrategyRule(ValidationRule):
    """The default strategy must be callable as strategy(tables)."""

    def check(self, entries: Sequence[object], merge_strategy: object) -> None:
        """Validate the default merge strategy."""
        ensure_callable_strategy(merge_strategy)


def ensure_callable_strategy(
    strategy: object,
    error_type: type[InvalidStrategyError] = InvalidStrategyError,
) -> None:
    """
    Raise `error_type` unless `strategy` accepts the tables as its one
    positional argument.

    Required keyword-only parameters are allowed; they are supplied as merge
    options. Callables whose signature cannot be introspected (some builtins
    and extension types) are accepted as-is.
    """
    if not callable(strategy):
        raise error_type(
            f"Merge strategy must be callable, got {type(strategy).__name__}."
        )
    try:
        signature = inspect.signature(strategy)
    except (TypeError, ValueError):
        return

    parameters = signature.parameters.values()
    positional = [p for p in parameters if p.kind in _POSITIONAL_KINDS]
    required = [p for p in positional if p.default is inspect.Parameter.empty]
    takes_varargs = any(p.kind is inspect.Parameter.VAR_POSITIONAL for p in parameters)

    if len(required) > 1 or not (positional or takes_varargs):
        raise error_type(
            f"Merge strategy {strategy_name(strategy)!r} must accept the sequence of "
            f"tables as its only positional argument; signature is {signature}."
        )


def default_rules() -> tuple[ValidationRule, ...]:
    """Construction rules in the order they are checked."""
    return (
        NonEmptyTablesRule(),
        NamedTableEntriesRule(),
        UniqueTableNamesRule(),
        CallableStrategyRule(),
    )
