"""Species table and vernacular/scientific name resolution."""

from __future__ import annotations

import logging
from typing import Any

import pandas as pd

from camtrap_insights.errors import InvalidArgumentError
from camtrap_insights.package import CamtrapPackage, check_package
from camtrap_insights.validation import as_list, check_value

logger = logging.getLogger(__name__)

VERNACULAR_PREFIX = "vernacularNames."


def get_species(package: CamtrapPackage) -> pd.DataFrame:
    """Return the taxonomic metadata of a package as a table.

    One row per taxon. Nested vernacular names are flattened into one
    ``vernacularNames.<lang>`` column per language, e.g.
    ``vernacularNames.en``. Slots missing from a taxon are None.
    """
    check_package(package)
    rows: list[dict[str, Any]] = []
    for taxon in package.taxonomic:
        row = {k: v for k, v in taxon.items() if k != "vernacularNames"}
        for lang, name in (taxon.get("vernacularNames") or {}).items():
            row[f"{VERNACULAR_PREFIX}{lang}"] = name
        rows.append(row)

    if not rows:
        return pd.DataFrame(columns=["scientificName"])
    df = pd.DataFrame(rows).astype(object)
    return df.where(df.notna(), None)


def _vernacular_columns(species: pd.DataFrame) -> list[str]:
    return [c for c in species.columns if c.startswith(VERNACULAR_PREFIX)]


def _vernacular_lookup(species: pd.DataFrame) -> dict[str, str]:
    """Map lowercase vernacular names (all languages) to scientific names."""
    lookup: dict[str, str] = {}
    for col in _vernacular_columns(species):
        for vernacular, scientific in zip(species[col], species["scientificName"], strict=True):
            if isinstance(vernacular, str):
                lookup.setdefault(vernacular.lower(), scientific)
    return lookup


def _check_names(names: Any, arg_name: str) -> list[str]:
    values = as_list(names)
    if not values:
        msg = f"{arg_name} argument must be specified"
        raise InvalidArgumentError(msg)
    bad = [v for v in values if not isinstance(v, str)]
    if bad:
        msg = f"{arg_name} must contain strings only, got {bad!r}"
        raise InvalidArgumentError(msg)
    return values


def get_scientific_name(
    package: CamtrapPackage,
    vernacular_name: str | list[str],
) -> list[str | None]:
    """Translate vernacular names into scientific names.

    Names are matched case-insensitively against the vernacular names of
    every language in the taxonomy, so ``"mallard"`` and ``"wilde eend"``
    both give ``"Anas platyrhynchos"``.

    Args:
        package: Camera trap data package.
        vernacular_name: One name or a sequence of names.

    Returns:
        Scientific names aligned with the input. Names that cannot be
        matched give None and a logged warning.

    Raises:
        InvalidArgumentError: If no name is given or a value is not a string.
    """
    names = _check_names(vernacular_name, "vernacular_name")
    lookup = _vernacular_lookup(get_species(package))

    result: list[str | None] = []
    for name in names:
        scientific = lookup.get(name.lower())
        if scientific is None:
            logger.warning("%s is not a valid vernacular name.", name)
        result.append(scientific)
    return result


def check_species(
    package: CamtrapPackage,
    species: str | list[str] | None,
    arg_name: str = "species",
) -> list[str]:
    """Validate species given as scientific or vernacular names.

    Returns:
        Canonical scientific names, in input order.

    Raises:
        InvalidArgumentError: If ``species`` is empty or contains a name that
            is neither a scientific nor a vernacular name of the package.
    """
    names = _check_names(species, arg_name)
    all_species = get_species(package)
    scientific = {s.lower(): s for s in all_species["scientificName"] if isinstance(s, str)}
    vernacular = _vernacular_lookup(all_species)

    check_value(
        [n.lower() for n in names],
        [*scientific, *vernacular],
        arg_name,
        null_allowed=False,
    )

    resolved: list[str] = []
    for name in names:
        if name.lower() in scientific:
            resolved.append(scientific[name.lower()])
        else:
            sn = vernacular[name.lower()]
            logger.info("Scientific name of %s: %s", name, sn)
            resolved.append(sn)
    return resolved


def identified_species(package: CamtrapPackage) -> list[str]:
    """All scientific names listed in the taxonomy."""
    return [s for s in get_species(package)["scientificName"] if isinstance(s, str)]
