"""In-memory camera trap data package.

``CamtrapPackage`` is the single input of every accessor function. It holds
the deployments, observations and media tables as pandas DataFrames plus the
taxonomic metadata as a list of dicts, the way a Camtrap DP stores it in
``datapackage.json``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

import pandas as pd
from pydantic import BaseModel

from camtrap_insights.errors import InvalidArgumentError
from camtrap_insights.schemas import (
    DeploymentRecord,
    MediaRecord,
    ObservationRecord,
    TaxonRecord,
)

DEPLOYMENT_COLUMNS = (
    "deploymentID",
    "locationID",
    "locationName",
    "latitude",
    "longitude",
    "start",
    "end",
)
OBSERVATION_COLUMNS = (
    "observationID",
    "deploymentID",
    "sequenceID",
    "timestamp",
    "observationType",
    "scientificName",
    "count",
    "sex",
    "lifeStage",
)
MEDIA_COLUMNS = (
    "mediaID",
    "deploymentID",
    "sequenceID",
    "timestamp",
    "filePath",
    "fileName",
)

# Columns the accessors cannot work without
_REQUIRED_DEPLOYMENT_COLUMNS = ("deploymentID", "latitude", "longitude", "start", "end")
_REQUIRED_OBSERVATION_COLUMNS = ("deploymentID", "timestamp", "scientificName")


@dataclass(frozen=True)
class CamtrapPackage:
    """Deployments, observations, media and taxonomy of one camera trap study."""

    deployments: pd.DataFrame
    observations: pd.DataFrame
    taxonomic: list[dict[str, Any]] = field(default_factory=list)
    media: pd.DataFrame | None = None

    @classmethod
    def from_records(
        cls,
        deployments: Iterable[Mapping[str, Any] | DeploymentRecord],
        observations: Iterable[Mapping[str, Any] | ObservationRecord],
        taxonomic: Iterable[Mapping[str, Any] | TaxonRecord] = (),
        media: Iterable[Mapping[str, Any] | MediaRecord] = (),
    ) -> CamtrapPackage:
        """Validate raw rows and build a package with a fixed column layout.

        Raises:
            pydantic.ValidationError: If any row breaks its record schema.
        """
        dep_rows = _dump(DeploymentRecord, deployments)
        obs_rows = _dump(ObservationRecord, observations)
        media_rows = _dump(MediaRecord, media)
        taxa = [
            TaxonRecord.model_validate(t).model_dump(by_alias=True, exclude_none=True)
            for t in taxonomic
        ]

        deps = _frame(dep_rows, DEPLOYMENT_COLUMNS, datetime_columns=("start", "end"))
        obs = _frame(obs_rows, OBSERVATION_COLUMNS, datetime_columns=("timestamp",))
        obs["count"] = obs["count"].astype("Int64")
        med = _frame(media_rows, MEDIA_COLUMNS, datetime_columns=("timestamp",))
        return cls(deployments=deps, observations=obs, taxonomic=taxa, media=med)


def _dump(model: type[BaseModel], rows: Iterable[Any]) -> list[dict[str, Any]]:
    return [model.model_validate(row).model_dump(by_alias=True) for row in rows]


def _frame(
    rows: list[dict[str, Any]],
    columns: tuple[str, ...],
    datetime_columns: tuple[str, ...] = (),
) -> pd.DataFrame:
    """Build a DataFrame with ``columns`` first, followed by any extra columns."""
    df = pd.DataFrame(rows)
    extras = [c for c in df.columns if c not in columns]
    df = df.reindex(columns=[*columns, *extras])
    for col in datetime_columns:
        df[col] = pd.to_datetime(df[col])
    return df


def check_package(package: Any) -> CamtrapPackage:
    """Make sure ``package`` is a usable camera trap data package.

    Raises:
        InvalidArgumentError: If it is not a ``CamtrapPackage`` or a required
            column is missing.
    """
    if not isinstance(package, CamtrapPackage):
        msg = f"package must be a CamtrapPackage, not {type(package).__name__}"
        raise InvalidArgumentError(msg)
    for table, required in (
        ("deployments", _REQUIRED_DEPLOYMENT_COLUMNS),
        ("observations", _REQUIRED_OBSERVATION_COLUMNS),
    ):
        df = getattr(package, table)
        if not isinstance(df, pd.DataFrame):
            msg = f"package.{table} must be a pandas DataFrame"
            raise InvalidArgumentError(msg)
        missing = [c for c in required if c not in df.columns]
        if missing:
            msg = f"package.{table} is missing column(s): {', '.join(missing)}"
            raise InvalidArgumentError(msg)
    return package
