"""Tests for deployment effort."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pandas as pd
import pytest

from camtrap_insights.analysis.effort import DURATION_UNIT, get_effort
from camtrap_insights.errors import InvalidArgumentError
from camtrap_insights.predicates import pred

if TYPE_CHECKING:
    from camtrap_insights.package import CamtrapPackage


class TestGetEffort:
    """Test get_effort."""

    def test_default_is_duration(self, package: CamtrapPackage) -> None:
        effort = get_effort(package)
        assert list(effort.columns) == ["deploymentID", "effort", "effort_unit"]
        assert list(effort["deploymentID"]) == ["d1", "d2", "d3", "d4"]
        assert effort.loc[0, "effort"] == pd.Timedelta(days=10)
        assert (effort["effort_unit"] == DURATION_UNIT).all()

    @pytest.mark.parametrize(
        ("unit", "expected"),
        [
            ("second", 3 * 86400),
            ("minute", 3 * 1440),
            ("hour", 72),
            ("day", 3),
            ("month", 3 / (365.25 / 12)),
            ("year", 3 / 365.25),
        ],
    )
    def test_units(self, package: CamtrapPackage, unit: str, expected: float) -> None:
        effort = get_effort(package, pred("deploymentID", "d2"), unit=unit)
        assert effort.loc[0, "effort"] == pytest.approx(expected)
        assert effort.loc[0, "effort_unit"] == unit

    def test_filtered(self, package: CamtrapPackage) -> None:
        effort = get_effort(package, pred("habitat", "forest"), unit="day")
        assert list(effort["effort"]) == [10, 2, 5]

    def test_filter_removes_everything(self, package: CamtrapPackage) -> None:
        effort = get_effort(package, pred("habitat", "desert"), unit="day")
        assert effort.empty
        assert list(effort.columns) == ["deploymentID", "effort", "effort_unit"]

    def test_unknown_unit(self, package: CamtrapPackage) -> None:
        with pytest.raises(InvalidArgumentError, match="Valid inputs are: None, second"):
            get_effort(package, unit="fortnight")

    def test_several_units(self, package: CamtrapPackage) -> None:
        with pytest.raises(InvalidArgumentError):
            get_effort(package, unit=["day", "hour"])

    @pytest.mark.parametrize("species", ["Anas platyrhynchos", [], "all"])
    def test_species_rejected(self, package: CamtrapPackage, species: object) -> None:
        with pytest.raises(InvalidArgumentError, match="species"):
            get_effort(package, species=species)
