"""
MergeEngine: applies a merge strategy to a PolyTable.

Responsibilities
----------------
- Pick the strategy for the call: the override if given, else the PolyTable's
  stored default. The PolyTable is never modified.
- Invoke it once with the tables in construction order plus any options.
- Check the result is exactly one DataFrame.

Notes
-----
- No join logic lives here; strategies own that.
- Failures are raised to the caller. Nothing is retried or swallowed.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from pyspark.sql import DataFrame

from polyframe.errors import (
    EmptyInputError,
    InvalidOverrideError,
    StrategyContractError,
    StrategyInvocationError,
)
from polyframe.logger import LOGGER
from polyframe.types import MergeStrategy, is_table, strategy_name
from polyframe.validation.rules import ensure_callable_strategy

if TYPE_CHECKING:
    from polyframe.models.poly_table import PolyTable


class MergeEngine:
    """Stateless merge entry point; one instance can serve any number of PolyTables."""

    def merge(
        self,
        poly: PolyTable,
        strategy_override: MergeStrategy | None = None,
        **options: Any,
    ) -> DataFrame:
        """
        Merge the tables of `poly` into one DataFrame.

        `options` are passed to the strategy as keyword arguments, e.g.
        `on=["species"]` for the built-in fold strategies.
        """
        strategy = self._select_strategy(poly, strategy_override)
        tables = poly.raw_tables()
        if not tables:
            raise EmptyInputError("Cannot merge a PolyTable that holds no tables.")

        name = strategy_name(strategy)
        LOGGER.debug("Merging %d table(s) %s with %s.", len(tables), list(poly.names()), name)
        result = self._invoke(strategy, tables, options)
        self._check_result(name, result)
        LOGGER.debug("Merge with %s completed.", name)
        return result

    # ---------- steps ----------

    def _select_strategy(
        self, poly: PolyTable, strategy_override: MergeStrategy | None
    ) -> MergeStrategy:
        if strategy_override is None:
            return poly.merge_strategy
        ensure_callable_strategy(strategy_override, InvalidOverrideError)
        return strategy_override

    def _invoke(
        self,
        strategy: MergeStrategy,
        tables: Sequence[DataFrame],
        options: dict[str, Any],
    ) -> object:
        try:
            return strategy(tables, **options)
        except Exception as exc:
            raise StrategyInvocationError(strategy_name(strategy), exc) from exc

    def _check_result(self, name: str, result: object) -> None:
        if is_table(result):
            return
        if result is None:
            raise StrategyContractError(name, result, "no table was returned")
        if isinstance(result, Sequence) and not isinstance(result, str | bytes):
            raise StrategyContractError(name, result, f"{len(result)} values were returned")
        raise StrategyContractError(name, result)


_DEFAULT_ENGINE = MergeEngine()


def merge(
    poly: PolyTable,
    strategy_override: MergeStrategy | None = None,
    **options: Any,
) -> DataFrame:
    """Merge `poly` with the shared default engine."""
    return _DEFAULT_ENGINE.merge(poly, strategy_override, **options)
