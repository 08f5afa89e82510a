"""Relative Abundance Index (RAI).

RAI is the number of observations (or individuals) of a species at a
deployment, normalized to 100 days of camera activity::

    rai = n * 100 / (effort_seconds / 86400)

Deployments with zero effort (start equal to end) get ``<NA>`` for every
species, with a logged warning.
"""

from __future__ import annotations

import logging

import pandas as pd

from camtrap_insights.analysis.counts import get_n_individuals, get_n_obs
from camtrap_insights.analysis.effort import SECONDS_PER_DAY, get_effort
from camtrap_insights.errors import InvalidArgumentError
from camtrap_insights.package import CamtrapPackage, check_package
from camtrap_insights.predicates import Predicate

logger = logging.getLogger(__name__)

# Activity period RAI is normalized to, in days
RAI_PERIOD_DAYS = 100


def _rai(
    package: CamtrapPackage,
    predicates: tuple[Predicate, ...],
    species: str | list[str] | None,
    sex: str | list[str] | None,
    life_stage: str | list[str] | None,
    individuals: bool,
) -> pd.DataFrame:
    check_package(package)
    if species is None:
        msg = "species must be specified to calculate RAI"
        raise InvalidArgumentError(msg)

    count = get_n_individuals if individuals else get_n_obs
    n_df = count(package, *predicates, species=species, sex=sex, life_stage=life_stage)

    effort = get_effort(package, *predicates)
    effort_days = effort.set_index("deploymentID")["effort"].dt.total_seconds() / SECONDS_PER_DAY

    days = n_df["deploymentID"].map(effort_days).astype(float)
    # a deployment whose start equals its end has no activity to normalize by
    no_effort = days <= 0
    if no_effort.any():
        logger.warning(
            "RAI set to NA for deployment(s) without effort: %s",
            ", ".join(dict.fromkeys(n_df.loc[no_effort, "deploymentID"])),
        )
    n = n_df["n"].astype("Float64")
    rai = (n * RAI_PERIOD_DAYS / days.where(~no_effort)).mask(no_effort)
    return pd.DataFrame(
        {
            "deploymentID": n_df["deploymentID"],
            "scientificName": n_df["scientificName"],
            "rai": rai,
        }
    )


def get_rai(
    package: CamtrapPackage,
    *predicates: Predicate,
    species: str | list[str] = "all",
    sex: str | list[str] | None = None,
    life_stage: str | list[str] | None = None,
) -> pd.DataFrame:
    """Get the RAI of each deployment and species, based on observations.

    Args:
        package: Camera trap data package.
        *predicates: Filters on deployments.
        species: Scientific or vernacular names, case-insensitive, in any
            language of the taxonomy. ``"all"`` (default) selects every
            species.
        sex: Sex class(es) to keep. None keeps all.
        life_stage: Life stage(s) to keep. None keeps all.

    Returns:
        DataFrame with columns ``deploymentID``, ``scientificName`` and
        ``rai``. Deployments without observations get ``<NA>``.

    Raises:
        InvalidArgumentError: If a species, sex or life stage is unknown.
    """
    return _rai(package, predicates, species, sex, life_stage, individuals=False)


def get_rai_individuals(
    package: CamtrapPackage,
    *predicates: Predicate,
    species: str | list[str] = "all",
    sex: str | list[str] | None = None,
    life_stage: str | list[str] | None = None,
) -> pd.DataFrame:
    """Get the RAI of each deployment and species, based on individuals.

    Same as ``get_rai`` but counts detected individuals instead of
    observations.
    """
    return _rai(package, predicates, species, sex, life_stage, individuals=True)
