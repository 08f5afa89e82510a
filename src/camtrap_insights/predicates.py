"""Filter predicates for subsetting deployments.

A predicate is a small immutable object that turns a deployments DataFrame
into a boolean mask. Accessors take any number of predicates and apply them
conjunctively before aggregating::

    get_n_species(package, pred_gte("latitude", 51.18), pred("habitat", "forest"))

Combine predicates with ``pred_and`` / ``pred_or`` for more complex filters.
"""

from __future__ import annotations

import logging
import operator
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

import pandas as pd

from camtrap_insights.errors import InvalidArgumentError
from camtrap_insights.validation import as_list

logger = logging.getLogger(__name__)

_COMPARISONS: dict[str, Callable[[Any, Any], Any]] = {
    "==": operator.eq,
    "!=": operator.ne,
    ">": operator.gt,
    ">=": operator.ge,
    "<": operator.lt,
    "<=": operator.le,
}


@dataclass(frozen=True)
class Predicate:
    """A row filter on a deployments table.

    ``op`` is a comparison operator (``==``, ``>=``, ...), a membership test
    (``in``, ``not in``), a missing-value test (``is na``, ``is not na``) or a
    combinator (``&``, ``|``) over ``children``.
    """

    op: str
    arg: str | None = None
    value: Any = None
    children: tuple[Predicate, ...] = ()

    def columns(self) -> set[str]:
        """Names of all columns the predicate reads."""
        if self.children:
            return set().union(*(child.columns() for child in self.children))
        return {self.arg} if self.arg is not None else set()

    def mask(self, df: pd.DataFrame) -> pd.Series:
        """Evaluate the predicate on ``df``; missing values never match."""
        if self.op in ("&", "|"):
            masks = [child.mask(df) for child in self.children]
            combine = operator.and_ if self.op == "&" else operator.or_
            result = masks[0]
            for m in masks[1:]:
                result = combine(result, m)
            return result

        series = df[self.arg]
        if self.op == "is na":
            return series.isna()
        if self.op == "is not na":
            return series.notna()
        if self.op in ("in", "not in"):
            values = [_coerce(series, v) for v in self.value]
            matched = series.isin(values)
            return matched if self.op == "in" else ~matched & series.notna()

        compare = _COMPARISONS[self.op]
        present = series.notna()
        result = pd.Series(False, index=series.index)
        result[present] = compare(series[present], _coerce(series, self.value)).astype(bool)
        return result

    def __str__(self) -> str:
        if self.children:
            return f" {self.op} ".join(f"({child})" for child in self.children)
        if self.op in ("is na", "is not na"):
            return f"{self.arg} {self.op}"
        return f"{self.arg} {self.op} {self.value!r}"


def _coerce(series: pd.Series, value: Any) -> Any:
    """Make ``value`` comparable with a datetime column."""
    if value is None or not pd.api.types.is_datetime64_any_dtype(series):
        return value
    ts = pd.Timestamp(value)
    tz = series.dt.tz
    if tz is not None and ts.tzinfo is None:
        ts = ts.tz_localize(tz)
    elif tz is None and ts.tzinfo is not None:
        ts = ts.tz_localize(None)
    return ts


def _check_arg(arg: Any) -> None:
    if not isinstance(arg, str):
        msg = f"Predicate column must be a single column name, not {arg!r}"
        raise InvalidArgumentError(msg)


def _scalar(op: str, arg: str, value: Any) -> Predicate:
    _check_arg(arg)
    if len(as_list(value)) != 1:
        msg = f"Predicate {arg} {op} ... expects a single value, got {value!r}"
        raise InvalidArgumentError(msg)
    return Predicate(op=op, arg=arg, value=value)


def pred(arg: str, value: Any) -> Predicate:
    """Rows where ``arg == value``."""
    return _scalar("==", arg, value)


def pred_not(arg: str, value: Any) -> Predicate:
    """Rows where ``arg != value``."""
    return _scalar("!=", arg, value)


def pred_gt(arg: str, value: Any) -> Predicate:
    """Rows where ``arg > value``."""
    return _scalar(">", arg, value)


def pred_gte(arg: str, value: Any) -> Predicate:
    """Rows where ``arg >= value``."""
    return _scalar(">=", arg, value)


def pred_lt(arg: str, value: Any) -> Predicate:
    """Rows where ``arg < value``."""
    return _scalar("<", arg, value)


def pred_lte(arg: str, value: Any) -> Predicate:
    """Rows where ``arg <= value``."""
    return _scalar("<=", arg, value)


def pred_in(arg: str, values: Iterable[Any]) -> Predicate:
    """Rows where ``arg`` is one of ``values``."""
    _check_arg(arg)
    return Predicate(op="in", arg=arg, value=tuple(as_list(values)))


def pred_notin(arg: str, values: Iterable[Any]) -> Predicate:
    """Rows where ``arg`` is none of ``values``."""
    _check_arg(arg)
    return Predicate(op="not in", arg=arg, value=tuple(as_list(values)))


def pred_na(arg: str) -> Predicate:
    """Rows where ``arg`` is missing."""
    _check_arg(arg)
    return Predicate(op="is na", arg=arg)


def pred_notna(arg: str) -> Predicate:
    """Rows where ``arg`` is present."""
    _check_arg(arg)
    return Predicate(op="is not na", arg=arg)


def _combine(op: str, predicates: tuple[Predicate, ...]) -> Predicate:
    if len(predicates) < 2:
        msg = "At least two predicates are needed to combine them"
        raise InvalidArgumentError(msg)
    for p in predicates:
        if not isinstance(p, Predicate):
            msg = f"Not a predicate: {p!r}"
            raise InvalidArgumentError(msg)
    return Predicate(op=op, children=predicates)


def pred_and(*predicates: Predicate) -> Predicate:
    """Rows matching all ``predicates``."""
    return _combine("&", predicates)


def pred_or(*predicates: Predicate) -> Predicate:
    """Rows matching at least one of ``predicates``."""
    return _combine("|", predicates)


def apply_filter_predicate(
    df: pd.DataFrame,
    *predicates: Predicate,
    verbose: bool = False,
) -> pd.DataFrame:
    """Keep the rows of ``df`` matching every predicate.

    Args:
        df: Table to filter, usually the deployments.
        *predicates: Zero or more predicates, combined with AND.
        verbose: Log the resulting filter expression.

    Returns:
        A new DataFrame with a fresh index; ``df`` itself is not modified.

    Raises:
        InvalidArgumentError: If an argument is not a predicate or a predicate
            refers to a column missing from ``df``.
    """
    if not predicates:
        return df.reset_index(drop=True)

    for p in predicates:
        if not isinstance(p, Predicate):
            msg = f"Filter arguments must be predicates, got {p!r}"
            raise InvalidArgumentError(msg)
    combined = predicates[0] if len(predicates) == 1 else Predicate(op="&", children=predicates)

    missing = sorted(combined.columns() - set(df.columns))
    if missing:
        msg = f"Invalid column name(s) in filter predicate: {', '.join(missing)}"
        raise InvalidArgumentError(msg)

    if verbose:
        logger.info("Filtering deployments on: %s", combined)
    return df.loc[combined.mask(df)].reset_index(drop=True)
