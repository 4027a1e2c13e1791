"""Horizontal point spacing for fixed-width and scrollable chart modes"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from ..config.defaults import LayoutParams


class DisplayMode(str, Enum):
    """Fit the whole series into the screen, or scroll at a fixed spacing."""
    FIT = "fit"
    DAY = "day"

    @classmethod
    def parse(cls, value: "DisplayMode | str") -> "DisplayMode":
        if isinstance(value, DisplayMode):
            return value
        return cls(str(value).strip().lower())


@dataclass(frozen=True)
class LayoutSpec:
    """Horizontal geometry for point placement."""
    spacing: float
    initial_spacing: float
    end_spacing: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "spacing": self.spacing,
            "initialSpacing": self.initial_spacing,
            "endSpacing": self.end_spacing,
        }


def clamp(value: float, low: float, high: float) -> float:
    """Clamp into [low, high]; the floor wins if high < low."""
    return max(low, min(high, value))


def _normalize_multiplier(multiplier: Optional[float]) -> float:
    if multiplier is None or isinstance(multiplier, bool):
        return 1.0
    try:
        value = float(multiplier)
    except (TypeError, ValueError):
        return 1.0
    return value if math.isfinite(value) and value > 0 else 1.0


def choose_display_mode(point_count: int, params: Optional[LayoutParams] = None) -> DisplayMode:
    """Fit short series to the screen, scroll long ones."""
    params = params or LayoutParams()
    return DisplayMode.FIT if point_count <= params.fit_max_points else DisplayMode.DAY


def compute_layout(point_count: int,
                   display_mode: "DisplayMode | str",
                   spacing_multiplier: Optional[float] = None,
                   *,
                   screen_width: Optional[float] = None,
                   params: Optional[LayoutParams] = None) -> LayoutSpec:
    """
    Compute point spacing and edge padding for a chart.

    Day mode spreads at most ``day_visible_points`` points over the screen
    and scrolls the rest; fit mode squeezes every point into the screen
    width. Every value is clamped to a floor and a multiplier-scaled ceiling
    so labels stay legible at any density.

    Args:
        point_count: Number of points to place
        display_mode: "fit" or "day"
        spacing_multiplier: Zoom factor (None, non-finite or <= 0 means 1)
        screen_width: Drawable width; ``params.screen_width`` if omitted
        params: Layout parameters, defaults if omitted

    Returns:
        LayoutSpec for the chart widget
    """
    params = params or LayoutParams()
    mode = DisplayMode.parse(display_mode)
    multiplier = _normalize_multiplier(spacing_multiplier)
    width = params.screen_width if screen_width is None else float(screen_width)
    count = max(int(point_count), 0)

    if mode is DisplayMode.DAY:
        visible = max(min(count, params.day_visible_points), 1)
        base = clamp(width / visible, params.day_min_spacing, params.day_max_spacing)
        spacing = clamp(base * multiplier, params.day_min_spacing, params.day_max_spacing * multiplier)
        edge = clamp(spacing / 2, params.day_min_edge, params.day_max_edge * multiplier)
        return LayoutSpec(spacing=spacing, initial_spacing=edge, end_spacing=edge)

    gaps = max(count - 1, 1)
    usable = max(width - params.fit_horizontal_inset, 0.0)
    spacing = clamp(usable / gaps, params.fit_min_spacing, params.fit_max_spacing * multiplier)
    initial = clamp(spacing * params.fit_initial_ratio,
                    params.fit_initial_floor, params.fit_initial_ceiling * multiplier)
    end = clamp(spacing * params.fit_end_ratio,
                params.fit_end_floor, params.fit_end_ceiling * multiplier)
    return LayoutSpec(spacing=spacing, initial_spacing=initial, end_spacing=end)
