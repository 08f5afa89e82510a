"""Record table: one row per independent detection of a species at a station.

The layout follows the record tables used by occupancy and activity tools
(``Station``, ``Species``, ``DateTimeOriginal``, ``delta.time.*`` columns).
"""

from __future__ import annotations

import logging
import warnings
from typing import Any

import pandas as pd

from camtrap_insights.analysis.species import check_species
from camtrap_insights.errors import ConflictingArgumentWarning, InvalidArgumentError
from camtrap_insights.package import CamtrapPackage, check_package
from camtrap_insights.predicates import Predicate, apply_filter_predicate
from camtrap_insights.schemas import DeltaTimeReference
from camtrap_insights.validation import as_list, check_single, check_value

logger = logging.getLogger(__name__)

RECORD_TABLE_COLUMNS = [
    "Station",
    "Species",
    "n",
    "Date",
    "Time",
    "DateTimeOriginal",
    "delta.time.secs",
    "delta.time.mins",
    "delta.time.hours",
    "delta.time.days",
    "Directory",
    "FileName",
]


def _independent(
    timestamps: pd.Series,
    min_delta: pd.Timedelta,
    reference: str | None,
) -> tuple[list[bool], list[float]]:
    """Decide which records of one station/species pair to keep.

    Returns a keep flag and the seconds elapsed since the reference record
    for each timestamp (sorted ascending). The first record is always kept
    with a delta of 0.
    """
    keep: list[bool] = []
    deltas: list[float] = []
    previous = last_kept = None
    for ts in timestamps:
        if previous is None:
            keep.append(True)
            deltas.append(0.0)
            previous = last_kept = ts
            continue
        ref = last_kept if reference == DeltaTimeReference.LAST_INDEPENDENT_RECORD else previous
        delta = ts - ref
        kept = delta >= min_delta
        keep.append(kept)
        deltas.append(delta.total_seconds())
        previous = ts
        if kept:
            last_kept = ts
    return keep, deltas


def _media_by_sequence(media: pd.DataFrame | None) -> dict[Any, tuple[list[str], list[str]]]:
    if media is None or media.empty or "sequenceID" not in media.columns:
        return {}
    grouped = media.dropna(subset=["sequenceID"]).sort_values("timestamp").groupby("sequenceID")
    return {
        seq: (list(group["filePath"]), list(group["fileName"])) for seq, group in grouped
    }


def get_record_table(
    package: CamtrapPackage,
    *predicates: Predicate,
    station_col: str = "locationName",
    exclude: str | list[str] | None = None,
    min_delta_time: int = 0,
    delta_time_compared_to: str | None = None,
    remove_duplicate_records: bool = True,
) -> pd.DataFrame:
    """Get the record table of identified observations.

    Args:
        package: Camera trap data package.
        *predicates: Filters on deployments.
        station_col: Deployment column used as station identifier.
        exclude: Species (scientific or vernacular names) to leave out.
        min_delta_time: Minimum time in minutes between two records of the
            same species at the same station. 0 (default) keeps every record.
        delta_time_compared_to: ``"lastRecord"`` or
            ``"lastIndependentRecord"``; what a record is compared to when
            ``min_delta_time > 0``.
        remove_duplicate_records: Drop records sharing station, species and
            timestamp, keeping the first.

    Returns:
        DataFrame with the columns of ``RECORD_TABLE_COLUMNS``, sorted by
        station, species and time.

    Raises:
        InvalidArgumentError: On an unknown station column or species, a
            negative or non-integer ``min_delta_time``, or a missing
            ``delta_time_compared_to`` while ``min_delta_time > 0``.
    """
    check_package(package)
    check_value(station_col, package.deployments.columns, "station_col", null_allowed=False)
    check_single(station_col, "station_col")
    excluded = check_species(package, exclude, "exclude") if exclude is not None else []

    if isinstance(min_delta_time, bool) or not isinstance(min_delta_time, int) or min_delta_time < 0:
        msg = f"min_delta_time must be a non-negative integer, got {min_delta_time!r}"
        raise InvalidArgumentError(msg)
    if min_delta_time > 0:
        check_value(
            delta_time_compared_to,
            [r.value for r in DeltaTimeReference],
            "delta_time_compared_to",
            null_allowed=False,
        )
        check_single(delta_time_compared_to, "delta_time_compared_to")
        delta_time_compared_to = as_list(delta_time_compared_to)[0]
    elif delta_time_compared_to is not None:
        warnings.warn(
            "delta_time_compared_to ignored because min_delta_time is 0",
            ConflictingArgumentWarning,
            stacklevel=2,
        )
        delta_time_compared_to = None

    deployments = apply_filter_predicate(package.deployments, *predicates, verbose=True)
    obs = package.observations
    obs = obs[
        obs["deploymentID"].isin(deployments["deploymentID"])
        & obs["scientificName"].notna()
        & ~obs["scientificName"].isin(excluded)
    ]
    if obs.empty:
        logger.info("No observations left: record table is empty.")
        return pd.DataFrame(columns=RECORD_TABLE_COLUMNS)

    stations = deployments.set_index("deploymentID", drop=False)[station_col]
    records = pd.DataFrame(
        {
            "Station": obs["deploymentID"].map(stations),
            "Species": obs["scientificName"],
            "n": obs["count"] if "count" in obs.columns else 1,
            "DateTimeOriginal": obs["timestamp"],
            "sequenceID": obs["sequenceID"] if "sequenceID" in obs.columns else None,
        }
    ).sort_values(["Station", "Species", "DateTimeOriginal"], kind="stable")
    if remove_duplicate_records:
        records = records.drop_duplicates(subset=["Station", "Species", "DateTimeOriginal"])

    min_delta = pd.Timedelta(minutes=min_delta_time)
    keep: list[bool] = []
    deltas: list[float] = []
    for _, group in records.groupby(["Station", "Species"], sort=False, dropna=False):
        group_keep, group_deltas = _independent(
            group["DateTimeOriginal"], min_delta, delta_time_compared_to
        )
        keep.extend(group_keep)
        deltas.extend(group_deltas)
    # groupby(sort=False) visits groups in order of appearance; records are
    # sorted by group, so the flags line up with the rows
    records = records.assign(_keep=keep, _delta=deltas)
    records = records[records["_keep"]].reset_index(drop=True)

    files = _media_by_sequence(package.media)
    no_files: tuple[list[str], list[str]] = ([], [])
    linked = [files.get(seq, no_files) for seq in records["sequenceID"]]

    seconds = records["_delta"]
    records["Date"] = records["DateTimeOriginal"].dt.date
    records["Time"] = records["DateTimeOriginal"].dt.strftime("%H:%M:%S")
    records["delta.time.secs"] = seconds
    records["delta.time.mins"] = seconds / 60
    records["delta.time.hours"] = seconds / 3600
    records["delta.time.days"] = seconds / 86400
    records["Directory"] = [list(paths) for paths, _ in linked]
    records["FileName"] = [list(names) for _, names in linked]
    return records[RECORD_TABLE_COLUMNS]
