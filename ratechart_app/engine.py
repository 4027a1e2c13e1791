"""
Main chart preparation engine.

Orchestrates the pipeline from a raw backend payload to the chart widget's
input: envelope unwrapping, series normalization with fallback, axis and
spacing calculation.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional

import structlog

from .chart.axis import AxisOverride
from .chart.calculator import ChartCalculator, ChartData
from .chart.spacing import DisplayMode
from .chart.summary import ChangeSummary, summarize_change
from .config.loader import ConfigLoader
from .data.models import Channel, ChannelSeries
from .data.normalizer import SeriesNormalizer
from .data.parsers import parse_json_payload
from .errors import MalformedDataError

logger = structlog.get_logger(__name__)


class RateChartEngine:
    """
    Coordinator for preparing exchange rate charts.

    Manages the pipeline:
    Payload → Records → Normalized series → Channel series → Axis/Spacing → ChartData
    """

    def __init__(self, config_dir: Optional[str | Path] = None) -> None:
        """Initialize the engine with an optional configuration directory."""
        self.logger = logger
        self.config_loader = ConfigLoader.create(Path(config_dir) if config_dir else None)

    def _resolve_channel(self, channel: Channel | str) -> Channel:
        try:
            return Channel.parse(channel)
        except ValueError:
            raise MalformedDataError(
                f"Unknown channel: {channel}. Must be one of {[c.value for c in Channel]}",
                expected_format="channel",
            )

    def _resolve_display_mode(self, display_mode: DisplayMode | str | None) -> Optional[DisplayMode]:
        if display_mode is None:
            return None
        try:
            return DisplayMode.parse(display_mode)
        except ValueError:
            raise MalformedDataError(
                f"Invalid display_mode: {display_mode}. Must be 'fit' or 'day'",
                expected_format="display_mode",
            )

    def _decode(self, payload: Any) -> Any:
        if isinstance(payload, (str, bytes)):
            return parse_json_payload(payload)
        return payload

    def build_series(self,
                     payload: Any,
                     channel: Channel | str = Channel.USD,
                     config_overrides: Optional[dict[str, Any]] = None) -> ChannelSeries:
        """
        Build one channel series from a raw payload.

        Args:
            payload: JSON text, a decoded record list, or a response envelope
            channel: Currency channel
            config_overrides: Per-call configuration overrides

        Returns:
            ChannelSeries; empty (strategy "none") when no usable data exists

        Raises:
            MalformedDataError: Unknown channel or invalid JSON text
            ConfigurationError: Invalid merged configuration
        """
        resolved = self._resolve_channel(channel)
        config = self.config_loader.load_config(resolved.value, config_overrides)
        return SeriesNormalizer(config.parser).channel_series(self._decode(payload), resolved)

    def prepare_chart(self,
                      payload: Any,
                      channel: Channel | str = Channel.USD,
                      display_mode: DisplayMode | str | None = None,
                      axis_override: AxisOverride | Mapping[str, Any] | None = None,
                      spacing_multiplier: Optional[float] = None,
                      screen_width: Optional[float] = None,
                      config_overrides: Optional[dict[str, Any]] = None) -> ChartData:
        """
        Prepare the chart widget's input for one channel of a payload.

        Args:
            payload: JSON text, a decoded record list, or a response envelope
            channel: Currency channel
            display_mode: "fit" or "day"; chosen from point density if omitted
            axis_override: Optional per-field axis overrides
            spacing_multiplier: Horizontal zoom factor
            screen_width: Drawable width; configured default if omitted
            config_overrides: Per-call configuration overrides

        Returns:
            ChartData; ``has_data`` is False when the no-data state should show

        Raises:
            MalformedDataError: Unknown channel/display mode or invalid JSON text
            ConfigurationError: Invalid merged configuration
        """
        resolved = self._resolve_channel(channel)
        mode = self._resolve_display_mode(display_mode)
        config = self.config_loader.load_config(resolved.value, config_overrides)

        series = SeriesNormalizer(config.parser).channel_series(self._decode(payload), resolved)
        chart = ChartCalculator(config).calculate(
            series,
            display_mode=mode,
            axis_override=axis_override,
            spacing_multiplier=spacing_multiplier,
            screen_width=screen_width,
        )

        self.logger.info(
            "Chart prepared",
            channel=resolved.value,
            strategy=series.strategy.value,
            records=series.record_count,
            points=len(chart.points),
            display_mode=chart.display_mode.value,
            axis_min=chart.axis.min,
            axis_max=chart.axis.max,
        )
        return chart

    def summarize(self,
                  payload: Any,
                  channel: Channel | str = Channel.USD,
                  config_overrides: Optional[dict[str, Any]] = None) -> Optional[ChangeSummary]:
        """Latest value and change against the previous date, None without data."""
        return summarize_change(self.build_series(payload, channel, config_overrides))
