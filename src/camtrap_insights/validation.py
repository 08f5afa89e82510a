"""Up-front argument checks shared by the accessor functions.

Every check raises ``InvalidArgumentError`` before any computation starts,
with a message listing the accepted values.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import pandas as pd

from camtrap_insights.errors import InvalidArgumentError

# Longest list of valid options shown in an error message
MAX_PRINTED_OPTIONS = 20


def as_list(value: Any) -> list[Any]:
    """Wrap a scalar (or string) in a list; turn other iterables into lists."""
    if value is None:
        return []
    if isinstance(value, str) or not isinstance(value, Iterable):
        return [value]
    return list(value)


def _format_options(options: list[Any], null_allowed: bool) -> str:
    shown = [str(o) for o in options[:MAX_PRINTED_OPTIONS]]
    if len(options) > MAX_PRINTED_OPTIONS:
        shown.append("others..")
    if null_allowed:
        shown.insert(0, "None")
    return ", ".join(shown)


def check_value(
    arg: Any,
    options: Iterable[Any],
    arg_name: str,
    *,
    null_allowed: bool = True,
) -> list[Any] | None:
    """Check that every value of ``arg`` belongs to ``options``.

    Args:
        arg: A single value, a sequence of values, or None.
        options: Allowed values. Missing values (NaN/None) are dropped.
        arg_name: Argument name used in the error message.
        null_allowed: Whether ``arg`` may be None.

    Returns:
        The values of ``arg`` as a list, or None if ``arg`` is None.

    Raises:
        InvalidArgumentError: If a value is not allowed, or ``arg`` is None
            while ``null_allowed`` is False.
    """
    valid = [o for o in dict.fromkeys(options) if not pd.isna(o)]
    if arg is None:
        if not null_allowed:
            msg = f"{arg_name} must be specified. Valid inputs are: {_format_options(valid, False)}."
            raise InvalidArgumentError(msg)
        return None

    values = as_list(arg)
    wrong = [v for v in values if v not in valid]
    if wrong:
        msg = (
            f"Invalid value for {arg_name} argument: {', '.join(map(str, wrong))}. "
            f"Valid inputs are: {_format_options(valid, null_allowed)}."
        )
        raise InvalidArgumentError(msg)
    return values


def check_single(arg: Any, arg_name: str) -> None:
    """Require ``arg`` to be one scalar value, not a collection."""
    if len(as_list(arg)) != 1:
        msg = f"{arg_name} must have length 1"
        raise InvalidArgumentError(msg)
