"""
Built-in merge strategies.

Fold strategies combine tables pairwise and in order:

    result = join(tables[0], tables[1]); result = join(result, tables[2]); ...

At each step the join keys are the columns shared by both operands, in the
left operand's column order, unless `on=` fixes them for every step. The
default strategy, `left_fold`, uses left joins so rows of the first table are
never dropped; unmatched lookups show up as NULL.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from functools import reduce

from pyspark.sql import DataFrame

from polyframe.enums import JoinType
from polyframe.errors import NoCommonColumnsError, OverlappingColumnsError
from polyframe.logger import LOGGER
from polyframe.types import JoinKeys


def infer_join_keys(left: DataFrame, right: DataFrame) -> tuple[str, ...]:
    """Columns present in both tables, in `left` column order."""
    right_columns = set(right.columns)
    return tuple(column for column in left.columns if column in right_columns)


def normalize_join_keys(on: JoinKeys | None) -> tuple[str, ...] | None:
    """
    Explicit join keys as a tuple; None means "infer at every step".

    A bare string is one column name, as `DataFrame.join` accepts it. An
    explicit empty key set is rejected rather than treated as "infer".
    """
    if on is None:
        return None
    keys = (on,) if isinstance(on, str) else tuple(on)
    if not keys or not all(keys):
        raise ValueError(
            "Explicit join keys must be non-empty column names; pass on=None to infer them."
        )
    return keys


def _require_tables(tables: Sequence[DataFrame]) -> tuple[DataFrame, ...]:
    tables = tuple(tables)
    if not tables:
        raise ValueError("Cannot merge an empty sequence of tables.")
    return tables


def _fold(
    tables: Sequence[DataFrame],
    how: JoinType,
    on: JoinKeys | None,
) -> DataFrame:
    fixed_keys = normalize_join_keys(on)
    first, *rest = _require_tables(tables)
    if not rest:
        # Fresh projection, never the caller's own DataFrame.
        return first.select("*")

    result = first
    for step, right in enumerate(rest, start=1):
        keys = fixed_keys or infer_join_keys(result, right)
        if not keys:
            raise NoCommonColumnsError(step, result.columns, right.columns)
        overlapping = [c for c in infer_join_keys(result, right) if c not in keys]
        if overlapping:
            raise OverlappingColumnsError(step, keys, overlapping)
        result = result.join(right, on=list(keys), how=how.value)
    return result


def left_fold(tables: Sequence[DataFrame], /, *, on: JoinKeys | None = None) -> DataFrame:
    """
    Default strategy: sequential left joins on the shared columns.

    `on` fixes the keys for every step, as one column name or a sequence of
    names. Non-key columns present in both operands of a step raise
    OverlappingColumnsError; Spark would otherwise keep both copies.
    """
    return _fold(tables, JoinType.LEFT, on)


def make_fold_strategy(
    how: JoinType | str = JoinType.LEFT,
    on: JoinKeys | None = None,
) -> Callable[..., DataFrame]:
    """
    Build a fold strategy with a fixed join type and, optionally, fixed keys.

    Only LEFT and FULL keep every row of the first table; with INNER or RIGHT
    the caller owns the row-retention behaviour.
    """
    join_type = JoinType(how)
    default_on = normalize_join_keys(on)
    if not join_type.preserves_first_table:
        LOGGER.debug("Fold strategy %s_fold can drop rows of the first table.", join_type.value)

    def fold(tables: Sequence[DataFrame], /, *, on: JoinKeys | None = default_on) -> DataFrame:
        return _fold(tables, join_type, on)

    fold.__name__ = fold.__qualname__ = f"{join_type.value}_fold"
    return fold


def stack(tables: Sequence[DataFrame], /, *, allow_missing_columns: bool = True) -> DataFrame:
    """Row-wise union by column name; missing columns are filled with NULL."""
    first, *rest = _require_tables(tables)
    if not rest:
        return first.select("*")
    return reduce(
        lambda result, table: result.unionByName(
            table, allowMissingColumns=allow_missing_columns
        ),
        rest,
        first,
    )
