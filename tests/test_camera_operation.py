"""Tests for the camera operation matrix."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pandas as pd
import pytest

from camtrap_insights.analysis.camera_operation import daily_coverage, get_cam_op
from camtrap_insights.errors import InvalidArgumentError
from camtrap_insights.predicates import pred, pred_not

if TYPE_CHECKING:
    from collections.abc import Callable

    from camtrap_insights.package import CamtrapPackage

ONE_SECOND = 1 / 86400


def _deployment(dep_id: str, start: str, end: str, location: str = "A") -> dict[str, Any]:
    return {
        "deploymentID": dep_id,
        "locationName": location,
        "latitude": 50.0,
        "longitude": 4.0,
        "start": start,
        "end": end,
    }


class TestDailyCoverage:
    """Test daily_coverage."""

    def test_whole_days_then_midnight(self) -> None:
        coverage = daily_coverage(pd.Timestamp("2020-01-01"), pd.Timestamp("2020-01-03"))
        assert [d.isoformat() for d in coverage] == ["2020-01-01", "2020-01-02", "2020-01-03"]
        assert list(coverage.values()) == [1.0, 1.0, ONE_SECOND]

    def test_half_days(self) -> None:
        coverage = daily_coverage(
            pd.Timestamp("2020-01-01 12:00"), pd.Timestamp("2020-01-02 12:00")
        )
        assert list(coverage.values()) == [0.5, 43201 / 86400]

    def test_start_equals_end(self) -> None:
        coverage = daily_coverage(pd.Timestamp("2020-01-01 08:00"), pd.Timestamp("2020-01-01 08:00"))
        assert list(coverage.values()) == [ONE_SECOND]

    def test_timezone_uses_local_time(self) -> None:
        coverage = daily_coverage(
            pd.Timestamp("2020-01-01 12:00", tz="Europe/Brussels"),
            pd.Timestamp("2020-01-01 18:00", tz="Europe/Brussels"),
        )
        assert list(coverage) == [pd.Timestamp("2020-01-01").date()]


class TestGetCamOp:
    """Test get_cam_op on the shared package."""

    def test_shape(self, package: CamtrapPackage) -> None:
        cam_op = get_cam_op(package)
        assert list(cam_op.index) == ["Station_Bosbeek", "Station_Ramsel", "Station_Zwarte Beek"]
        assert cam_op.columns[0] == "2020-06-01"
        assert cam_op.columns[-1] == "2020-06-25"
        assert len(cam_op.columns) == 25

    def test_colocated_deployments_share_a_row(self, package: CamtrapPackage) -> None:
        row = get_cam_op(package).loc["Station_Bosbeek"]
        assert (row["2020-06-01":"2020-06-10"] == 1.0).all()
        assert row["2020-06-11"] == pytest.approx(ONE_SECOND)
        assert (row["2020-06-12":"2020-06-19"] == 0.0).all()
        assert (row["2020-06-20":"2020-06-24"] == 1.0).all()
        assert row["2020-06-25"] == pytest.approx(ONE_SECOND)

    def test_partial_days(self, package: CamtrapPackage) -> None:
        row = get_cam_op(package).loc["Station_Ramsel"]
        assert row["2020-06-04"] == 0.0
        assert row["2020-06-05"] == pytest.approx(0.5)
        assert row["2020-06-06"] == 1.0
        assert row["2020-06-07"] == 1.0
        assert row["2020-06-08"] == pytest.approx(43201 / 86400)
        assert row["2020-06-09"] == 0.0

    def test_without_prefix(self, package: CamtrapPackage) -> None:
        cam_op = get_cam_op(package, use_prefix=False)
        assert list(cam_op.index) == ["Bosbeek", "Ramsel", "Zwarte Beek"]

    def test_session_and_camera(self, package: CamtrapPackage) -> None:
        cam_op = get_cam_op(package, session_col="session", camera_col="deploymentID")
        assert list(cam_op.index) == [
            "Station_Bosbeek__SESS_spring__CAM_d1",
            "Station_Bosbeek__SESS_summer__CAM_d4",
            "Station_Ramsel__SESS_spring__CAM_d2",
            "Station_Zwarte Beek__SESS_spring__CAM_d3",
        ]

    def test_filtered(self, package: CamtrapPackage) -> None:
        cam_op = get_cam_op(package, pred("habitat", "wetland"))
        assert list(cam_op.index) == ["Station_Ramsel"]
        assert list(cam_op.columns) == [
            "2020-06-05",
            "2020-06-06",
            "2020-06-07",
            "2020-06-08",
        ]

    def test_nothing_left(self, package: CamtrapPackage) -> None:
        assert get_cam_op(package, pred("habitat", "desert")).empty

    def test_values_are_fractions(self, package: CamtrapPackage) -> None:
        cam_op = get_cam_op(package)
        assert ((cam_op >= 0) & (cam_op <= 1)).all().all()


class TestGetCamOpEdgeCases:
    """Test get_cam_op on hand-built deployments."""

    def test_gap_between_deployments(self, make_package: Callable[..., CamtrapPackage]) -> None:
        pkg = make_package(
            deployments=[
                _deployment("a", "2020-01-01T00:00:00", "2020-01-05T00:00:00"),
                _deployment("b", "2020-01-10T00:00:00", "2020-01-15T00:00:00"),
            ],
            observations=[],
        )
        row = get_cam_op(pkg).loc["Station_A"]
        assert (row["2020-01-06":"2020-01-09"] == 0.0).all()
        assert row["2020-01-05"] == pytest.approx(ONE_SECOND)
        assert row["2020-01-10"] == 1.0

    def test_overlap_sums_above_one(self, make_package: Callable[..., CamtrapPackage]) -> None:
        pkg = make_package(
            deployments=[
                _deployment("a", "2020-01-01T00:00:00", "2020-01-03T00:00:00"),
                _deployment("b", "2020-01-02T00:00:00", "2020-01-03T00:00:00"),
            ],
            observations=[],
        )
        assert get_cam_op(pkg).loc["Station_A", "2020-01-02"] == 2.0

    def test_missing_station(self, make_package: Callable[..., CamtrapPackage]) -> None:
        dep = _deployment("a", "2020-01-01T00:00:00", "2020-01-02T00:00:00")
        dep["locationName"] = None
        pkg = make_package(deployments=[dep], observations=[])
        with pytest.raises(InvalidArgumentError, match="must be non-empty"):
            get_cam_op(pkg)

    def test_reserved_separator(self, make_package: Callable[..., CamtrapPackage]) -> None:
        pkg = make_package(
            deployments=[
                _deployment("a", "2020-01-01T00:00:00", "2020-01-02T00:00:00", "A__CAM_1")
            ],
            observations=[],
        )
        with pytest.raises(InvalidArgumentError, match="__CAM_"):
            get_cam_op(pkg)

    def test_missing_station_filtered_out(
        self, make_package: Callable[..., CamtrapPackage]
    ) -> None:
        unnamed = _deployment("b", "2020-01-01T00:00:00", "2020-01-02T00:00:00")
        unnamed["locationName"] = None
        pkg = make_package(
            deployments=[
                _deployment("a", "2020-01-01T00:00:00", "2020-01-02T00:00:00"),
                unnamed,
            ],
            observations=[],
        )
        cam_op = get_cam_op(pkg, pred("deploymentID", "a"))
        assert list(cam_op.index) == ["Station_A"]

    def test_reserved_separator_filtered_out(
        self, make_package: Callable[..., CamtrapPackage]
    ) -> None:
        pkg = make_package(
            deployments=[
                _deployment("a", "2020-01-01T00:00:00", "2020-01-02T00:00:00"),
                _deployment("b", "2020-01-01T00:00:00", "2020-01-02T00:00:00", "B__SESS_1"),
            ],
            observations=[],
        )
        assert list(get_cam_op(pkg, pred_not("deploymentID", "b")).index) == ["Station_A"]

    def test_unknown_column(self, package: CamtrapPackage) -> None:
        with pytest.raises(InvalidArgumentError, match="station_col"):
            get_cam_op(package, station_col="site")
