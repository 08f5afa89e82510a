"""
Domain models for camera trap data packages.

Pydantic models validate one row of each Camtrap DP table at the load
boundary. Field names are snake_case; aliases carry the Camtrap DP column
names used in the DataFrames the analysis functions work on.
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator

# =============================================================================
# Categorical arguments
# =============================================================================


class EffortUnit(StrEnum):
    """Time units accepted by ``get_effort``."""

    SECOND = "second"
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    MONTH = "month"
    YEAR = "year"


class Feature(StrEnum):
    """Deployment features that can be mapped with ``map_dep``."""

    N_SPECIES = "n_species"
    N_OBS = "n_obs"
    N_INDIVIDUALS = "n_individuals"
    RAI = "rai"
    RAI_INDIVIDUALS = "rai_individuals"
    EFFORT = "effort"


class DeltaTimeReference(StrEnum):
    """Reference record for the independence interval of record tables."""

    LAST_RECORD = "lastRecord"
    LAST_INDEPENDENT_RECORD = "lastIndependentRecord"


# =============================================================================
# Table rows
# =============================================================================


class _Record(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)


class DeploymentRecord(_Record):
    """A single camera placement session at a location."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True, extra="allow")

    deployment_id: str = Field(..., alias="deploymentID")
    location_id: str | None = Field(default=None, alias="locationID")
    location_name: str | None = Field(default=None, alias="locationName")
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    start: datetime
    end: datetime

    @model_validator(mode="after")
    def _start_before_end(self) -> DeploymentRecord:
        if self.start > self.end:
            msg = f"Deployment {self.deployment_id}: start ({self.start}) is after end ({self.end})"
            raise ValueError(msg)
        return self


class ObservationRecord(_Record):
    """A single detection event at a deployment."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True, extra="allow")

    observation_id: str = Field(..., alias="observationID")
    deployment_id: str = Field(..., alias="deploymentID")
    sequence_id: str | None = Field(default=None, alias="sequenceID")
    timestamp: datetime
    observation_type: str = Field(default="animal", alias="observationType")
    scientific_name: str | None = Field(default=None, alias="scientificName")
    count: int | None = Field(default=None, ge=1)
    sex: str | None = None
    life_stage: str | None = Field(default=None, alias="lifeStage")


class MediaRecord(_Record):
    """A single image or video file."""

    media_id: str = Field(..., alias="mediaID")
    deployment_id: str = Field(..., alias="deploymentID")
    sequence_id: str | None = Field(default=None, alias="sequenceID")
    timestamp: datetime
    file_path: str = Field(..., alias="filePath")
    file_name: str = Field(..., alias="fileName")


class TaxonRecord(_Record):
    """A taxonomic entry from the package metadata."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True, extra="allow")

    scientific_name: str = Field(..., alias="scientificName")
    taxon_id: str | None = Field(default=None, alias="taxonID")
    taxon_id_reference: str | None = Field(default=None, alias="taxonIDReference")
    vernacular_names: dict[str, str] = Field(default_factory=dict, alias="vernacularNames")
