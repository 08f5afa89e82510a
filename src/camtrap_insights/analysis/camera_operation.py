"""Camera operation matrix: daily activity of each station.

Rows are stations, columns are calendar dates, and each cell holds the
fraction of that date during which deployments at the station were active.
Fractions of co-located deployments are summed, so a cell exceeds 1 when
deployments overlap.

Time is counted inclusively at one-second resolution: a deployment covers
every whole second from its start to its end, both included, and covers
``seconds / 86400`` of each date. A deployment ending exactly at midnight
therefore claims 1/86400 of its last date, and one with ``start == end``
claims 1/86400 of its only date.
"""

from __future__ import annotations

import logging
from datetime import date

import pandas as pd

from camtrap_insights.analysis.effort import SECONDS_PER_DAY
from camtrap_insights.errors import InvalidArgumentError
from camtrap_insights.package import CamtrapPackage, check_package
from camtrap_insights.predicates import Predicate, apply_filter_predicate
from camtrap_insights.validation import check_single, check_value

logger = logging.getLogger(__name__)

STATION_PREFIX = "Station"
PREFIX_SEP = "_"
SESSION_SEP = "__SESS_"
CAMERA_SEP = "__CAM_"

_ONE_SECOND = pd.Timedelta(seconds=1)
_ONE_DAY = pd.Timedelta(days=1)


def _wall_clock(ts: pd.Timestamp) -> pd.Timestamp:
    """Drop the timezone (keeping local time) and sub-second precision."""
    if ts.tzinfo is not None:
        ts = ts.tz_localize(None)
    return ts.floor("s")


def daily_coverage(start: pd.Timestamp, end: pd.Timestamp) -> dict[date, float]:
    """Fraction of each calendar date covered by an active interval.

    Args:
        start: First active instant.
        end: Last active instant, not before ``start``.

    Returns:
        Mapping of every date from ``start`` to ``end`` to a fraction in
        (0, 1].
    """
    start, end = _wall_clock(pd.Timestamp(start)), _wall_clock(pd.Timestamp(end))
    coverage: dict[date, float] = {}
    day = start.normalize()
    while day <= end:
        first = max(start, day)
        last = min(end, day + _ONE_DAY - _ONE_SECOND)
        seconds = (last - first).total_seconds() + 1
        coverage[day.date()] = seconds / SECONDS_PER_DAY
        day += _ONE_DAY
    return coverage


def _check_no_separator(values: pd.Series, col: str) -> None:
    for sep in (SESSION_SEP, CAMERA_SEP):
        if values.astype(str).str.contains(sep, regex=False).any():
            msg = f"Column {col} must not contain {sep!r}"
            raise InvalidArgumentError(msg)


def _row_labels(
    deployments: pd.DataFrame,
    station_col: str,
    session_col: str | None,
    camera_col: str | None,
    use_prefix: bool,
) -> pd.Series:
    labels = deployments[station_col].astype(str)
    if session_col is not None:
        labels = labels + SESSION_SEP + deployments[session_col].astype(str)
    if camera_col is not None:
        labels = labels + CAMERA_SEP + deployments[camera_col].astype(str)
    if use_prefix:
        labels = STATION_PREFIX + PREFIX_SEP + labels
    return labels


def get_cam_op(
    package: CamtrapPackage,
    *predicates: Predicate,
    station_col: str = "locationName",
    camera_col: str | None = None,
    session_col: str | None = None,
    use_prefix: bool = True,
) -> pd.DataFrame:
    """Build the camera operation matrix of a package.

    Args:
        package: Camera trap data package.
        *predicates: Filters on deployments.
        station_col: Deployment column identifying stations.
        camera_col: Optional deployment column identifying cameras; each
            camera of a station gets its own row.
        session_col: Optional deployment column identifying sessions; each
            session of a station gets its own row.
        use_prefix: Prefix row labels with ``"Station_"``.

    Returns:
        DataFrame indexed by station label with one column per ISO date
        between the first start and the last end. Empty if no deployment is
        left after filtering.

    Raises:
        InvalidArgumentError: If a column argument is not a deployment column,
            the station column has missing values, or a label column contains
            one of the reserved separators.
    """
    check_package(package)
    columns = list(package.deployments.columns)

    check_value(station_col, columns, "station_col", null_allowed=False)
    check_single(station_col, "station_col")
    for arg_name, col in (("camera_col", camera_col), ("session_col", session_col)):
        if col is not None:
            check_value(col, columns, arg_name)
            check_single(col, arg_name)

    # label columns are checked on the deployments that end up in the matrix
    deployments = apply_filter_predicate(package.deployments, *predicates, verbose=True)
    if deployments[station_col].isna().any():
        msg = f"Column {station_col} must be non-empty: missing values found"
        raise InvalidArgumentError(msg)
    for col in (station_col, session_col, camera_col):
        if col is not None:
            _check_no_separator(deployments[col], col)

    if deployments.empty:
        logger.info("No deployments left: camera operation matrix is empty.")
        return pd.DataFrame(dtype=float)

    labels = _row_labels(deployments, station_col, session_col, camera_col, use_prefix)
    first_day = min(_wall_clock(ts) for ts in deployments["start"]).normalize()
    last_day = max(_wall_clock(ts) for ts in deployments["end"]).normalize()
    days = [d.date().isoformat() for d in pd.date_range(first_day, last_day, freq="D")]

    matrix = pd.DataFrame(0.0, index=sorted(labels.unique()), columns=days)
    for label, start, end in zip(labels, deployments["start"], deployments["end"], strict=True):
        for day, fraction in daily_coverage(start, end).items():
            matrix.loc[label, day.isoformat()] += fraction
    return matrix
