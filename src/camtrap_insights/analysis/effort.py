"""Deployment effort: how long each camera was active."""

from __future__ import annotations

from typing import Any

import pandas as pd

from camtrap_insights.errors import InvalidArgumentError
from camtrap_insights.package import CamtrapPackage, check_package
from camtrap_insights.predicates import Predicate, apply_filter_predicate
from camtrap_insights.schemas import EffortUnit
from camtrap_insights.validation import as_list, check_single, check_value

# Label of the effort_unit column when effort is left as a duration
DURATION_UNIT = "Duration"

SECONDS_PER_DAY = 86400

# Months and years are average lengths (365.25 days per year)
SECONDS_PER_UNIT: dict[EffortUnit, float] = {
    EffortUnit.SECOND: 1,
    EffortUnit.MINUTE: 60,
    EffortUnit.HOUR: 3600,
    EffortUnit.DAY: SECONDS_PER_DAY,
    EffortUnit.MONTH: 365.25 * SECONDS_PER_DAY / 12,
    EffortUnit.YEAR: 365.25 * SECONDS_PER_DAY,
}


def get_effort(
    package: CamtrapPackage,
    *predicates: Predicate,
    unit: str | None = None,
    species: Any = None,
) -> pd.DataFrame:
    """Get the effort (active duration) of each deployment.

    Args:
        package: Camera trap data package.
        *predicates: Filters on deployments.
        unit: One of ``second``, ``minute``, ``hour``, ``day``, ``month``,
            ``year``. None (default) keeps effort as ``pandas.Timedelta``.
        species: Not supported. Effort belongs to a deployment, not to a
            species, so any value raises.

    Returns:
        DataFrame with columns ``deploymentID``, ``effort`` and
        ``effort_unit``, one row per deployment. ``effort_unit`` is ``unit``,
        or ``"Duration"`` if unit is None.

    Raises:
        InvalidArgumentError: On a species argument or an unknown unit.
    """
    check_package(package)
    if species is not None:
        msg = "get_effort() does not accept a species argument: effort is computed per deployment"
        raise InvalidArgumentError(msg)
    check_value(unit, [u.value for u in EffortUnit], "unit", null_allowed=True)
    if unit is not None:
        check_single(unit, "unit")

    deployments = apply_filter_predicate(package.deployments, *predicates, verbose=True)
    duration = deployments["end"] - deployments["start"]

    if unit is None:
        effort = duration
        label = DURATION_UNIT
    else:
        label = as_list(unit)[0]
        effort = duration.dt.total_seconds() / SECONDS_PER_UNIT[EffortUnit(label)]

    return pd.DataFrame(
        {
            "deploymentID": deployments["deploymentID"],
            "effort": effort,
            "effort_unit": label,
        }
    )
