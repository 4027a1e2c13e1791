"""Chart calculator assembling render-ready points, axis and spacing"""

import sys
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional

import orjson

from ..config.defaults import DefaultConfig, get_default_config
from ..data.models import Channel, ChannelSeries, ParseStrategy
from ..utils.formatting import format_grouped, format_month_day
from .axis import AxisOverride, AxisSpec, compute_axis
from .spacing import DisplayMode, LayoutSpec, choose_display_mode, compute_layout


@dataclass(frozen=True)
class ChartPoint:
    """One plotted point; value is shifted so the axis minimum is the baseline."""
    value: float
    label: str
    data_point_text: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "value": self.value,
            "label": self.label,
            "dataPointText": self.data_point_text,
        }


@dataclass(frozen=True)
class ChartData:
    """Render-ready chart description consumed by the chart widget."""
    channel: Channel
    points: tuple[ChartPoint, ...]
    axis: AxisSpec
    spacing: LayoutSpec
    display_mode: DisplayMode
    strategy: ParseStrategy

    @property
    def has_data(self) -> bool:
        """False when the widget should show its no-data indicator."""
        return bool(self.points)

    def to_dict(self) -> dict[str, Any]:
        return {
            "points": [point.to_dict() for point in self.points],
            "axis": self.axis.to_dict(),
            "spacing": self.spacing.to_dict(),
        }

    def to_json(self) -> bytes:
        return orjson.dumps(self.to_dict())


class ChartCalculator:
    """
    Turns a channel series into the chart widget's input.
    """

    def __init__(self, config: Optional[DefaultConfig] = None):
        self.config = config or get_default_config()

    def calculate(self,
                  series: ChannelSeries,
                  *,
                  display_mode: "DisplayMode | str | None" = None,
                  axis_override: "AxisOverride | Mapping[str, Any] | None" = None,
                  spacing_multiplier: Optional[float] = None,
                  screen_width: Optional[float] = None) -> ChartData:
        """
        Calculate points, axis and spacing for one channel series.

        Args:
            series: Channel series from the fallback chain
            display_mode: "fit" or "day"; chosen from point density if omitted
            axis_override: Optional per-field axis overrides
            spacing_multiplier: Horizontal zoom factor
            screen_width: Drawable width; configured default if omitted

        Returns:
            ChartData; an empty series still gets a default axis and spacing
        """
        labels_config = self.config.labels
        point_count = len(series.points)

        mode = (DisplayMode.parse(display_mode) if display_mode is not None
                else choose_display_mode(point_count, self.config.layout))

        axis = compute_axis(
            series.values,
            override=axis_override,
            params=self.config.axis,
            fraction_digits=labels_config.fraction_digits,
        )
        spacing = compute_layout(
            point_count,
            mode,
            spacing_multiplier,
            screen_width=screen_width,
            params=self.config.layout,
        )

        points = []
        for index, channel_point in enumerate(series.points):
            label = format_month_day(channel_point.date)
            if index == 0:
                label = " " * labels_config.first_label_padding + label
            # offsets of values near the float limits saturate
            offset = min(channel_point.value - axis.min, sys.float_info.max)
            points.append(ChartPoint(
                value=offset,
                label=label,
                data_point_text=format_grouped(channel_point.value, labels_config.fraction_digits),
            ))

        return ChartData(
            channel=series.channel,
            points=tuple(points),
            axis=axis,
            spacing=spacing,
            display_mode=mode,
            strategy=series.strategy,
        )


def build_chart_data(series: ChannelSeries,
                     *,
                     display_mode: "DisplayMode | str | None" = None,
                     axis_override: "AxisOverride | Mapping[str, Any] | None" = None,
                     spacing_multiplier: Optional[float] = None,
                     screen_width: Optional[float] = None,
                     config: Optional[DefaultConfig] = None) -> ChartData:
    """Convenience wrapper around ``ChartCalculator.calculate``."""
    return ChartCalculator(config).calculate(
        series,
        display_mode=display_mode,
        axis_override=axis_override,
        spacing_multiplier=spacing_multiplier,
        screen_width=screen_width,
    )
