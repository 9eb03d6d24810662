from collections.abc import Sequence
from typing import Any, Protocol, TypeAlias

from pyspark.sql import DataFrame

NamedTable: TypeAlias = tuple[str, DataFrame]
JoinKeys: TypeAlias = str | Sequence[str]


class MergeStrategy(Protocol):
    """Reduces an ordered sequence of tables to one table."""

    def __call__(self, tables: Sequence[DataFrame], /, **options: Any) -> DataFrame: ...


def is_table(value: object) -> bool:
    """
    True if the value is a single Spark DataFrame.

    From pyspark 4.0 classic and Spark Connect DataFrames share this base class.
    """
    return isinstance(value, DataFrame)


def strategy_name(strategy: object) -> str:
    """Readable name for a strategy callable, used in error messages and logs."""
    return getattr(strategy, "__qualname__", None) or type(strategy).__name__
