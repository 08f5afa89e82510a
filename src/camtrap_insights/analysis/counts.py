"""Per-deployment counts: species, observations and individuals.

Deployments without any observation get a missing count (``<NA>``) rather
than 0, so "no data" stays distinguishable from "nothing of this kind seen".
Counts use the pandas nullable ``Int64`` dtype for that reason.
"""

from __future__ import annotations

import logging
from typing import Any

import pandas as pd

from camtrap_insights.analysis.species import check_species, identified_species
from camtrap_insights.package import CamtrapPackage, check_package
from camtrap_insights.predicates import Predicate, apply_filter_predicate
from camtrap_insights.validation import as_list, check_value

logger = logging.getLogger(__name__)


def _column_values(df: pd.DataFrame, col: str) -> list[Any]:
    return list(df[col].dropna().unique()) if col in df.columns else []


def _observations_of(package: CamtrapPackage, deployments: pd.DataFrame) -> pd.DataFrame:
    obs = package.observations
    return obs[obs["deploymentID"].isin(deployments["deploymentID"])]


def get_dep_no_obs(package: CamtrapPackage, *predicates: Predicate) -> pd.DataFrame:
    """Get the deployments (after filtering) without any observation."""
    check_package(package)
    deployments = apply_filter_predicate(package.deployments, *predicates)
    with_obs = set(package.observations["deploymentID"])
    return deployments[~deployments["deploymentID"].isin(with_obs)].reset_index(drop=True)


def get_n_species(package: CamtrapPackage, *predicates: Predicate) -> pd.DataFrame:
    """Get the number of identified species detected by each deployment.

    Unidentified observations (no scientific name) do not count as a species.

    Returns:
        DataFrame with columns ``deploymentID`` and ``n``.
    """
    check_package(package)
    deployments = apply_filter_predicate(package.deployments, *predicates, verbose=True)
    observations = _observations_of(package, deployments)

    # nunique() leaves out the unidentified (null) bucket
    n_species = observations.groupby("deploymentID")["scientificName"].nunique()

    result = deployments[["deploymentID"]].copy()
    result["n"] = result["deploymentID"].map(n_species).astype("Int64")
    return result


def _count(
    package: CamtrapPackage,
    predicates: tuple[Predicate, ...],
    species: str | list[str] | None,
    sex: str | list[str] | None,
    life_stage: str | list[str] | None,
    individuals: bool,
) -> pd.DataFrame:
    check_package(package)
    observations = package.observations
    sex_values = check_value(sex, _column_values(observations, "sex"), "sex")
    life_stage_values = check_value(
        life_stage, _column_values(observations, "lifeStage"), "life_stage"
    )

    species_list: list[str] | None = None
    if species is not None:
        names = as_list(species)
        if "all" in names:
            species_list = list(dict.fromkeys(identified_species(package)))
            if not species_list:
                logger.warning("The taxonomy lists no species: species='all' selects none.")
        else:
            species_list = list(dict.fromkeys(check_species(package, names)))

    deployments = apply_filter_predicate(package.deployments, *predicates, verbose=True)
    obs = _observations_of(package, deployments)
    no_obs = set(deployments["deploymentID"]) - set(obs["deploymentID"])

    if sex_values is not None:
        obs = obs[obs["sex"].isin(sex_values)]
    if life_stage_values is not None:
        obs = obs[obs["lifeStage"].isin(life_stage_values)]
    obs = obs.assign(_n=obs["count"] if individuals else 1)

    if species_list is None:
        per_deployment = obs.groupby("deploymentID")["_n"].sum()
        result = deployments[["deploymentID"]].copy()
        result["n"] = result["deploymentID"].map(per_deployment).fillna(0)
    else:
        obs = obs[obs["scientificName"].isin(species_list)]
        per_species = obs.groupby(["deploymentID", "scientificName"])["_n"].sum()
        grid = pd.MultiIndex.from_product(
            [deployments["deploymentID"], species_list],
            names=["deploymentID", "scientificName"],
        )
        result = per_species.reindex(grid, fill_value=0).rename("n").reset_index()

    result["n"] = result["n"].astype("Int64")
    result.loc[result["deploymentID"].isin(no_obs), "n"] = pd.NA
    return result


def get_n_obs(
    package: CamtrapPackage,
    *predicates: Predicate,
    species: str | list[str] | None = "all",
    sex: str | list[str] | None = None,
    life_stage: str | list[str] | None = None,
) -> pd.DataFrame:
    """Get the number of observations of each deployment.

    Args:
        package: Camera trap data package.
        *predicates: Filters on deployments.
        species: Scientific or vernacular names (case-insensitive). ``"all"``
            (default) selects every species of the taxonomy. None counts all
            observations together, unidentified ones included.
        sex: Sex class(es) to keep, e.g. ``"female"``. None keeps all.
        life_stage: Life stage(s) to keep, e.g. ``["adult", "subadult"]``.
            None keeps all.

    Returns:
        DataFrame with columns ``deploymentID``, ``scientificName`` and ``n``
        (one row per deployment and species), or ``deploymentID`` and ``n``
        if ``species`` is None.
    """
    return _count(package, predicates, species, sex, life_stage, individuals=False)


def get_n_individuals(
    package: CamtrapPackage,
    *predicates: Predicate,
    species: str | list[str] | None = "all",
    sex: str | list[str] | None = None,
    life_stage: str | list[str] | None = None,
) -> pd.DataFrame:
    """Get the number of individuals of each deployment.

    Same arguments and output layout as ``get_n_obs``, but ``n`` sums the
    ``count`` of the observations.
    """
    return _count(package, predicates, species, sex, life_stage, individuals=True)
