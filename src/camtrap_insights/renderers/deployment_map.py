"""Leaflet map of deployment features.

Each deployment is drawn as a circle whose size and color grow with the
mapped feature (number of species, observations, individuals, RAI or
effort). Deployments without observations are drawn grey with the smallest
radius.
"""

from __future__ import annotations

import logging
import math
import numbers
import warnings
from dataclasses import dataclass, field
from typing import Any

import pandas as pd
from markupsafe import Markup, escape

from camtrap_insights.analysis.counts import get_n_individuals, get_n_obs, get_n_species
from camtrap_insights.analysis.effort import get_effort
from camtrap_insights.analysis.rai import get_rai, get_rai_individuals
from camtrap_insights.config import get_settings
from camtrap_insights.errors import ConflictingArgumentWarning, InvalidArgumentError
from camtrap_insights.package import CamtrapPackage, check_package
from camtrap_insights.predicates import Predicate
from camtrap_insights.renderers import render_template
from camtrap_insights.renderers.color_scale import NumericScale
from camtrap_insights.renderers.legend import (
    HOVER_PREFIXES,
    add_unit_to_legend_title,
    format_legend_labels,
    get_legend_title,
    get_prefixes,
)
from camtrap_insights.schemas import Feature
from camtrap_insights.validation import as_list, check_single, check_value

logger = logging.getLogger(__name__)

DEFAULT_HOVER_COLUMNS = (
    "n",
    "species",
    "deploymentID",
    "locationID",
    "locationName",
    "latitude",
    "longitude",
    "start",
    "end",
)

_FILTERABLE_FEATURES = (
    Feature.N_OBS,
    Feature.N_INDIVIDUALS,
    Feature.RAI,
    Feature.RAI_INDIVIDUALS,
)
_SPECIES_FREE_FEATURES = (Feature.N_SPECIES, Feature.EFFORT)


@dataclass
class MapMarker:
    """A deployment circle on the map."""

    deployment_id: str
    lat: float
    lon: float
    value: float | None
    radius: float
    color: str
    hover: str = ""


@dataclass
class MapLegend:
    """Color legend: one swatch per tick value."""

    title: str
    values: list[float]
    labels: list[str]
    colors: list[str]


@dataclass
class DeploymentMap:
    """A rendered-to-be map of one deployment feature."""

    feature: str
    title: str
    center: tuple[float, float]
    markers: list[MapMarker] = field(default_factory=list)
    legend: MapLegend | None = None
    cluster: bool = True
    notice: str | None = None

    def to_html(self) -> str:
        """Render a standalone Leaflet page."""
        settings = get_settings()
        lat, lon = self.center
        markers = [
            {
                "lat": m.lat,
                "lon": m.lon,
                "radius": m.radius,
                "color": m.color,
                "hover": m.hover,
            }
            for m in self.markers
        ]
        return render_template(
            "deployment_map.html.j2",
            title=self.title,
            center_lat=0.0 if pd.isna(lat) else lat,
            center_lon=0.0 if pd.isna(lon) else lon,
            zoom=settings.map_zoom,
            tiles_url=settings.map_tiles_url,
            attribution=settings.map_attribution,
            markers=markers,
            legend=self.legend,
            cluster=self.cluster,
            notice=self.notice,
        )


def _ignore(arg_name: str, feature: str) -> None:
    warnings.warn(
        f"{arg_name} argument ignored for feature = {feature}",
        ConflictingArgumentWarning,
        stacklevel=3,
    )


def _format_hover_value(value: Any) -> str:
    if value is None or (not isinstance(value, list | tuple) and pd.isna(value)):
        return "NA"
    if isinstance(value, pd.Timestamp):
        return value.isoformat()
    return str(value)


def _hover_html(row: pd.Series, prefixes: list[tuple[str, str]]) -> str:
    parts = [
        Markup("<p>") + Markup(prefix) + escape(_format_hover_value(row.get(info))) + Markup("</p>")
        for prefix, info in prefixes
    ]
    return str(Markup("").join(parts))


def _check_hover_columns(
    hover_columns: list[str],
    deployments: pd.DataFrame,
) -> list[str]:
    features = {f.value for f in Feature}
    allowed = [info for info in HOVER_PREFIXES if info not in features] + ["n"]
    check_value(hover_columns, allowed, "hover_columns")

    not_found = [
        c
        for c in hover_columns
        if c not in deployments.columns and c not in ("n", "scientificName")
    ]
    if not_found:
        warnings.warn(
            f"There are {len(not_found)} columns defined in hover_columns not found in "
            f"deployments: {', '.join(not_found)}",
            ConflictingArgumentWarning,
            stacklevel=3,
        )
    return [c for c in hover_columns if c not in not_found]


def _feature_table(
    package: CamtrapPackage,
    feature: str,
    predicates: tuple[Predicate, ...],
    species: str | list[str] | None,
    sex: str | list[str] | None,
    life_stage: str | list[str] | None,
    effort_unit: str | None,
) -> pd.DataFrame:
    """Compute the feature and name its value column ``n``."""
    if feature == Feature.N_SPECIES:
        return get_n_species(package, *predicates)
    if feature == Feature.N_OBS:
        return get_n_obs(package, *predicates, species=species, sex=sex, life_stage=life_stage)
    if feature == Feature.N_INDIVIDUALS:
        return get_n_individuals(
            package, *predicates, species=species, sex=sex, life_stage=life_stage
        )
    if feature == Feature.RAI:
        df = get_rai(package, *predicates, species=species, sex=sex, life_stage=life_stage)
        return df.rename(columns={"rai": "n"})
    if feature == Feature.RAI_INDIVIDUALS:
        df = get_rai_individuals(
            package, *predicates, species=species, sex=sex, life_stage=life_stage
        )
        return df.rename(columns={"rai": "n"})

    df = get_effort(package, *predicates, unit=effort_unit).rename(columns={"effort": "n"})
    if pd.api.types.is_timedelta64_dtype(df["n"]):
        # durations are shown as text while hovering, seconds are mapped
        df["n_label"] = df["n"].astype(str)
        df["n"] = df["n"].dt.total_seconds()
    return df


def map_dep(
    package: CamtrapPackage,
    feature: str,
    *predicates: Predicate,
    species: str | list[str] | None = None,
    sex: str | list[str] | None = None,
    life_stage: str | list[str] | None = None,
    effort_unit: str | None = None,
    cluster: bool = True,
    hover_columns: list[str] | tuple[str, ...] | None = DEFAULT_HOVER_COLUMNS,
    relative_scale: bool = True,
    max_scale: float | None = None,
    radius_range: tuple[float, float] | None = None,
) -> DeploymentMap:
    """Visualize a deployment feature on an interactive map.

    Args:
        package: Camera trap data package.
        feature: One of ``n_species``, ``n_obs``, ``n_individuals``, ``rai``,
            ``rai_individuals``, ``effort``.
        *predicates: Filters on deployments.
        species: Scientific or vernacular name(s). Required for ``rai`` and
            ``rai_individuals``, optional for ``n_obs`` and ``n_individuals``.
        sex: Sex class(es) to keep; count and RAI features only.
        life_stage: Life stage(s) to keep; count and RAI features only.
        effort_unit: Time unit of ``effort``. None shows durations while
            hovering and seconds in the legend.
        cluster: Cluster nearby markers.
        hover_columns: Columns shown while hovering; ``"n"`` is the feature
            value and ``"species"`` the scientific name. None disables
            hovering.
        relative_scale: Scale colors and radius to the largest value (True) or
            to ``max_scale`` (False).
        max_scale: Upper value of an absolute scale; larger values are drawn
            as ``max_scale``.
        radius_range: (smallest, largest) circle radius. Defaults to the
            configured radius range.

    Returns:
        A ``DeploymentMap``; call ``to_html()`` for the Leaflet page.

    Raises:
        InvalidArgumentError: On an unknown feature, species, sex, life stage
            or hover column, or an absolute scale without ``max_scale``.
    """
    check_package(package)
    settings = get_settings()

    check_value(feature, [f.value for f in Feature], "feature", null_allowed=False)
    check_single(feature, "feature")
    feature = Feature(as_list(feature)[0])

    if effort_unit is not None and feature != Feature.EFFORT:
        _ignore("effort_unit", feature)
        effort_unit = None
    if sex is not None and feature not in _FILTERABLE_FEATURES:
        _ignore("sex", feature)
        sex = None
    if life_stage is not None and feature not in _FILTERABLE_FEATURES:
        _ignore("life_stage", feature)
        life_stage = None

    deployments = package.deployments
    center = (float(deployments["latitude"].mean()), float(deployments["longitude"].mean()))

    hover = list(hover_columns) if hover_columns is not None else None
    if species is None or feature in _SPECIES_FREE_FEATURES:
        if species is not None:
            _ignore("species", feature)
            species = None
        if hover is not None:
            hover = [c for c in hover if c != "species"]
    elif hover is not None:
        hover = ["scientificName" if c == "species" else c for c in hover]
    if species is None and feature in (Feature.RAI, Feature.RAI_INDIVIDUALS):
        msg = f"species must be specified for feature = {feature}"
        raise InvalidArgumentError(msg)

    if not isinstance(cluster, bool):
        msg = "cluster must be True or False"
        raise InvalidArgumentError(msg)

    if hover is not None:
        hover = _check_hover_columns(hover, deployments)

    if not relative_scale:
        if max_scale is None:
            msg = "If you use an absolute scale, max_scale must be a number, not None"
            raise InvalidArgumentError(msg)
        if isinstance(max_scale, bool) or not isinstance(max_scale, numbers.Real):
            msg = "If you use an absolute scale, max_scale must be a number"
            raise InvalidArgumentError(msg)
    elif max_scale is not None:
        warnings.warn(
            "Relative scale used: max_scale value ignored.",
            ConflictingArgumentWarning,
            stacklevel=2,
        )
        max_scale = None

    if radius_range is None:
        radius_range = (settings.radius_min, settings.radius_max)
    if len(radius_range) != 2:
        msg = "radius_range must contain exactly two values: (min, max)"
        raise InvalidArgumentError(msg)
    radius_min, radius_max = radius_range

    feat_df = _feature_table(
        package, feature, predicates, species, sex, life_stage, effort_unit
    )
    title = add_unit_to_legend_title(get_legend_title(feature), unit=effort_unit)

    if feat_df.empty:
        logger.info("No deployments left.")
        return DeploymentMap(
            feature=feature,
            title=title,
            center=center,
            cluster=cluster,
            notice="No deployments left.",
        )

    deploy_columns = list(
        dict.fromkeys(
            ["deploymentID", "latitude", "longitude"]
            + [c for c in hover or [] if c not in ("n", "scientificName")]
        )
    )
    feat_df = feat_df.merge(deployments[deploy_columns], on="deploymentID", how="left")

    # non-finite values are drawn like missing ones
    values = [None if pd.isna(v) or not math.isfinite(v) else float(v) for v in feat_df["n"]]
    if not relative_scale:
        values = [None if v is None else min(v, max_scale) for v in values]
    present = [v for v in values if v is not None]
    if max_scale is not None:
        max_n = float(max_scale)
    else:
        max_n = max(present) if present else 0.0

    scale = NumericScale(
        max_value=max_n,
        low_color=settings.palette_low,
        high_color=settings.palette_high,
        na_color=settings.na_color,
        radius_min=radius_min,
        radius_max=radius_max,
    )

    prefixes = get_prefixes(feature, hover) if hover is not None else []
    if "n_label" in feat_df.columns:
        prefixes = [(p, "n_label" if info == "n" else info) for p, info in prefixes]

    markers = [
        MapMarker(
            deployment_id=row["deploymentID"],
            lat=float(row["latitude"]),
            lon=float(row["longitude"]),
            value=value,
            radius=scale.radius(value),
            color=scale.color(value),
            hover=_hover_html(row, prefixes) if prefixes else "",
        )
        for (_, row), value in zip(feat_df.iterrows(), values, strict=True)
    ]

    legend_values = scale.legend_values(settings.legend_bins)
    legend = MapLegend(
        title=title,
        values=legend_values,
        labels=format_legend_labels(legend_values, max_scale=max_scale),
        colors=[scale.color(v) for v in legend_values],
    )
    return DeploymentMap(
        feature=feature,
        title=title,
        center=center,
        markers=markers,
        legend=legend,
        cluster=cluster,
    )
