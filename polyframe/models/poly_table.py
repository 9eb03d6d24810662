"""A fixed, ordered group of named DataFrames plus a deferred merge strategy."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field, replace
from typing import Any, ClassVar

from pyspark.sql import DataFrame

from polyframe import engine
from polyframe.errors import InvalidTableError, NotFoundError
from polyframe.strategies import left_fold
from polyframe.types import MergeStrategy, NamedTable, strategy_name
from polyframe.validation.validator import Validator


@dataclass(frozen=True, eq=False)
class PolyTable:
    """
    Related tables that share linking keys, kept apart until `merge()`.

    Tables are stored by reference and never modified. Inputs are validated
    when the instance is created, so an invalid PolyTable cannot exist.
    """

    validator: ClassVar[Validator] = Validator()

    tables: Sequence[NamedTable] | Mapping[str, DataFrame]
    merge_strategy: MergeStrategy = field(default=left_fold)

    def __post_init__(self) -> None:
        entries = _normalize_entries(self.tables)
        self.validator.validate(entries, self.merge_strategy)
        object.__setattr__(self, "tables", tuple((name, table) for name, table in entries))

    @classmethod
    def build(
        cls,
        tables: Sequence[NamedTable] | Mapping[str, DataFrame],
        merge_strategy: MergeStrategy = left_fold,
    ) -> PolyTable:
        """Build a PolyTable from (name, table) pairs or a name -> table mapping."""
        return cls(tables=tables, merge_strategy=merge_strategy)

    # --------- accessors ---------

    def names(self) -> tuple[str, ...]:
        """Table names in construction order."""
        return tuple(name for name, _ in self.tables)

    def at(self, name: str) -> DataFrame:
        """The table stored under `name`, exactly as supplied."""
        for table_name, table in self.tables:
            if table_name == name:
                return table
        raise NotFoundError(name, self.names())

    def raw_tables(self) -> tuple[DataFrame, ...]:
        """Tables in construction order; this is what the strategy receives."""
        return tuple(table for _, table in self.tables)

    def items(self) -> tuple[NamedTable, ...]:
        return tuple(self.tables)

    def __len__(self) -> int:
        return len(self.tables)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __contains__(self, name: object) -> bool:
        return name in self.names()

    def __repr__(self) -> str:
        return (
            f"PolyTable(names={list(self.names())}, "
            f"merge_strategy={strategy_name(self.merge_strategy)})"
        )

    # --------- derived values ---------

    def with_strategy(self, merge_strategy: MergeStrategy) -> PolyTable:
        """A copy holding the same tables with a different default strategy."""
        return replace(self, merge_strategy=merge_strategy)

    def merge(self, strategy_override: MergeStrategy | None = None, **options: Any) -> DataFrame:
        """Combine the tables into one DataFrame; see `polyframe.engine.MergeEngine`."""
        return engine.merge(self, strategy_override, **options)


def poly_frame(
    *tables: NamedTable,
    merge_fn: MergeStrategy = left_fold,
    **named_tables: DataFrame,
) -> PolyTable:
    """
    Variadic constructor.

    Positional arguments are (name, table) pairs; keyword arguments add more
    tables after them, in keyword order:

        poly_frame(("taxa", taxa_df), species=species_df, merge_fn=left_fold)
    """
    return PolyTable.build([*tables, *named_tables.items()], merge_strategy=merge_fn)


# -----------------
# Helpers
# -----------------


def _normalize_entries(tables: Sequence[NamedTable] | Mapping[str, DataFrame]) -> tuple:
    """Materialise the input as a tuple of entries; shape checks happen in the rules."""
    if isinstance(tables, Mapping):
        return tuple(tables.items())
    if isinstance(tables, str | bytes) or not isinstance(tables, Iterable):
        raise InvalidTableError(
            f"Tables must be a sequence of (name, DataFrame) pairs or a mapping, "
            f"got {type(tables).__name__}."
        )
    return tuple(tables)
