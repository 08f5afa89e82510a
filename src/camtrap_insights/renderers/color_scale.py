"""Numeric visual encoding: marker color and radius from a feature value.

Shared by the marker layer and the legend of deployment maps.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
import pandas as pd


def _hex_to_rgb(color: str) -> tuple[int, int, int]:
    color = color.lstrip("#")
    return int(color[0:2], 16), int(color[2:4], 16), int(color[4:6], 16)


def _rgb_to_hex(rgb: tuple[float, float, float]) -> str:
    return "#" + "".join(f"{round(c):02x}" for c in rgb)


@dataclass
class NumericScale:
    """Linear color and radius scale over ``[0, max_value]``.

    Missing values get ``na_color`` and the minimum radius.
    """

    max_value: float
    low_color: str = "#ffffff"
    high_color: str = "#0000ff"
    na_color: str = "#808080"
    radius_min: float = 10.0
    radius_max: float = 50.0

    def _position(self, value: float) -> float:
        if not math.isfinite(self.max_value) or self.max_value <= 0:
            return 0.0
        return min(max(value / self.max_value, 0.0), 1.0)

    def color(self, value: float | None) -> str:
        """Interpolated hex color of ``value``."""
        if value is None or pd.isna(value) or not math.isfinite(value):
            return self.na_color
        t = self._position(value)
        low, high = _hex_to_rgb(self.low_color), _hex_to_rgb(self.high_color)
        return _rgb_to_hex(tuple(lo + (hi - lo) * t for lo, hi in zip(low, high, strict=True)))

    def radius(self, value: float | None) -> float:
        """Circle radius of ``value``; 0 maps to ``radius_min``."""
        if value is None or pd.isna(value) or not math.isfinite(value):
            return self.radius_min
        if not math.isfinite(self.max_value) or self.max_value <= 0:
            return self.radius_min
        return value * (self.radius_max - self.radius_min) / self.max_value + self.radius_min

    def legend_values(self, bins: int = 6) -> list[float]:
        """Evenly spaced tick values from 0 to ``max_value``."""
        if not math.isfinite(self.max_value) or math.isclose(self.max_value, 0):
            return [0.0]
        return [float(v) for v in np.linspace(0, self.max_value, bins)]
