"""Legend titles, legend labels and hover prefixes for deployment maps."""

from __future__ import annotations

from camtrap_insights.errors import InvalidArgumentError
from camtrap_insights.schemas import Feature

FEATURE_TITLES: dict[str, str] = {
    Feature.N_SPECIES: "Number of detected species",
    Feature.N_OBS: "Number of observations",
    Feature.N_INDIVIDUALS: "Number of individuals",
    Feature.RAI: "RAI",
    Feature.RAI_INDIVIDUALS: "RAI (individuals)",
    Feature.EFFORT: "Effort",
}

# Hover text prefix of each feature and deployment column
HOVER_PREFIXES: dict[str, str] = {
    Feature.N_SPECIES: "<b>Number of species:</b> ",
    Feature.N_OBS: "<b>Number of observations:</b> ",
    Feature.N_INDIVIDUALS: "<b>Number of individuals:</b> ",
    Feature.RAI: "<b>RAI:</b> ",
    Feature.RAI_INDIVIDUALS: "<b>RAI (individuals):</b> ",
    Feature.EFFORT: "<b>Effort:</b> ",
    "scientificName": "<b>Species:</b> ",
    "deploymentID": "<b>Deployment ID:</b> ",
    "locationID": "<b>Location ID:</b> ",
    "locationName": "<b>Location name:</b> ",
    "latitude": "<b>Latitude:</b> ",
    "longitude": "<b>Longitude:</b> ",
    "start": "<b>Start:</b> ",
    "end": "<b>End:</b> ",
    "setupBy": "<b>Setup by:</b> ",
    "cameraID": "<b>Camera ID:</b> ",
    "cameraModel": "<b>Camera model:</b> ",
    "cameraInterval": "<b>Camera interval:</b> ",
    "cameraHeight": "<b>Camera height:</b> ",
    "cameraTilt": "<b>Camera tilt:</b> ",
    "cameraHeading": "<b>Camera heading:</b> ",
    "timestampIssues": "<b>Timestamp issues:</b> ",
    "baitUse": "<b>Bait use:</b> ",
    "session": "<b>Session:</b> ",
    "array": "<b>Array:</b> ",
    "featureType": "<b>Feature type:</b> ",
    "habitat": "<b>Habitat:</b> ",
    "tags": "<b>Tags:</b> ",
    "comments": "<b>Comments:</b> ",
    "_id": "<b>Internal id:</b> ",
}


def get_legend_title(feature: str) -> str:
    """Legend title of a mapped feature."""
    try:
        return FEATURE_TITLES[feature]
    except KeyError:
        msg = f"No legend title for feature {feature!r}"
        raise InvalidArgumentError(msg) from None


def add_unit_to_legend_title(title: str, unit: str | None = None, use_brackets: bool = True) -> str:
    """Append a unit to a legend title, e.g. ``Effort (day)``."""
    if unit is None:
        return title
    if use_brackets:
        unit = f"({unit})"
    return f"{title} {unit}"


def get_prefixes(feature: str, infos: list[str]) -> list[tuple[str, str]]:
    """Hover prefixes for ``infos``, in order.

    ``"n"`` stands for the mapped feature value and gets the feature's prefix.
    Infos without a known prefix are skipped.

    Returns:
        List of (prefix, info) pairs.
    """
    pairs: list[tuple[str, str]] = []
    for info in infos:
        key = feature if info == "n" else info
        if key in HOVER_PREFIXES:
            pairs.append((HOVER_PREFIXES[key], info))
    return pairs


def _format_number(value: float) -> str:
    text = f"{round(value, 3):,.3f}"
    return text.rstrip("0").rstrip(".") if "." in text else text


def format_legend_labels(values: list[float], max_scale: float | None = None) -> list[str]:
    """Format legend tick values.

    With an absolute scale the top label reads ``>max_scale``, since values
    above it are drawn as ``max_scale``.
    """
    labels = [_format_number(v) for v in values]
    if max_scale is not None and labels:
        labels[-1] = f">{labels[-1]}"
    return labels
