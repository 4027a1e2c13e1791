"""Unit tests for the main chart preparation engine."""

import math
from pathlib import Path
from typing import Dict, Any, List
from unittest.mock import Mock, patch

import orjson
import pytest
from structlog.testing import capture_logs

from ratechart_app.chart.spacing import DisplayMode
from ratechart_app.data.models import Channel, ParseStrategy
from ratechart_app.engine import RateChartEngine
from ratechart_app.errors import ConfigurationError, MalformedDataError


class TestRateChartEngine:
    """Test suite for the RateChartEngine class."""

    def test_engine_initialization(self) -> None:
        """Test that the engine can be initialized."""
        engine = RateChartEngine()
        assert engine is not None
        assert engine.config_loader.config_dir.name == "config"

    def test_engine_initialization_with_config_dir(self) -> None:
        """Test engine initialization with custom config directory."""
        with patch('ratechart_app.engine.ConfigLoader') as mock_config_loader:
            mock_config_loader.create.return_value = Mock()
            engine = RateChartEngine(config_dir="/custom/path")
            assert engine is not None
            mock_config_loader.create.assert_called_once_with(Path("/custom/path"))

    def test_build_series(self, tmp_path: Path, usd_records: List[Dict[str, Any]]) -> None:
        """Test building a channel series from decoded records."""
        engine = RateChartEngine(config_dir=tmp_path)
        series = engine.build_series(usd_records, "usd")

        assert series.channel is Channel.USD
        assert series.values == [1300.0, 1310.0, 1290.0]
        assert series.strategy is ParseStrategy.STRICT

    def test_build_series_from_json_text(self, tmp_path: Path, envelope_payload: Dict[str, Any]) -> None:
        """Test that JSON text and bytes are decoded before normalization."""
        engine = RateChartEngine(config_dir=tmp_path)
        raw = orjson.dumps(envelope_payload)

        assert engine.build_series(raw).values == [1300.0, 1310.0, 1290.0]
        assert engine.build_series(raw.decode()).values == [1300.0, 1310.0, 1290.0]

    def test_prepare_chart(self, tmp_path: Path, usd_records: List[Dict[str, Any]]) -> None:
        """Test the full chart preparation for one channel."""
        engine = RateChartEngine(config_dir=tmp_path)
        chart = engine.prepare_chart(usd_records, Channel.USD)

        assert chart.has_data
        assert chart.display_mode is DisplayMode.FIT
        assert chart.axis.min == 1288
        assert [p.value for p in chart.points] == [12.0, 22.0, 2.0]

    def test_prepare_chart_options(self, tmp_path: Path, usd_records: List[Dict[str, Any]]) -> None:
        """Test display mode, overrides and width pass-through."""
        engine = RateChartEngine(config_dir=tmp_path)
        chart = engine.prepare_chart(
            usd_records,
            "USD",
            display_mode="DAY",
            axis_override={"sections": 5},
            spacing_multiplier=2,
            screen_width=328,
        )

        assert chart.display_mode is DisplayMode.DAY
        assert chart.axis.max == 1313
        assert chart.spacing.spacing == 128

    def test_prepare_chart_config_overrides(self, tmp_path: Path, usd_records: List[Dict[str, Any]]) -> None:
        """Test per-call configuration overrides."""
        engine = RateChartEngine(config_dir=tmp_path)
        chart = engine.prepare_chart(
            usd_records,
            config_overrides={"axis": {"sections": 4}, "labels": {"first_label_padding": 0}},
        )

        assert chart.axis.sections == 4
        assert len(chart.axis.labels) == 5
        assert chart.points[0].label == "3/1"

    def test_channel_yaml_config(self, write_channels_yaml, usd_records: List[Dict[str, Any]]) -> None:
        """Test that channels.yaml settings reach the calculation."""
        config_dir = write_channels_yaml("channels:\n  USD:\n    layout:\n      fit_max_points: 2\n")
        engine = RateChartEngine(config_dir=config_dir)

        assert engine.prepare_chart(usd_records, "USD").display_mode is DisplayMode.DAY

    def test_prepare_chart_without_data(self, tmp_path: Path) -> None:
        """Test the no-data path for a channel missing from the payload."""
        engine = RateChartEngine(config_dir=tmp_path)
        chart = engine.prepare_chart([{"date": "2024-03-01", "usdRate": 1300}], "EUR")

        assert not chart.has_data
        assert chart.strategy is ParseStrategy.NONE
        assert chart.axis.min < chart.axis.max

    def test_prepare_chart_with_extreme_rates(self, tmp_path: Path) -> None:
        """Test that rates near the float limit still produce a finite chart."""
        engine = RateChartEngine(config_dir=tmp_path)
        payload = ('[{"date":"2024-01-01","usdRate":1},'
                   '{"date":"2024-01-02","usdRate":1.7e308}]')

        chart = engine.prepare_chart(payload, "USD")

        assert len(chart.points) == 2
        assert math.isfinite(chart.axis.min) and math.isfinite(chart.axis.max)
        assert chart.axis.min < 1 < 1.7e308 <= chart.axis.max
        assert all(math.isfinite(point.value) for point in chart.points)
        assert len(chart.axis.labels) == chart.axis.sections + 1


    def test_summarize(self, tmp_path: Path, usd_records: List[Dict[str, Any]]) -> None:
        """Test the change summary entry point."""
        engine = RateChartEngine(config_dir=tmp_path)
        summary = engine.summarize(usd_records, "USD")

        assert summary.latest_value == 1290.0
        assert summary.previous_value == 1310.0
        assert summary.format_amount() == "-20원"
        assert engine.summarize([], "USD") is None

    def test_unknown_channel(self, tmp_path: Path) -> None:
        """Test that unknown channels raise MalformedDataError."""
        engine = RateChartEngine(config_dir=tmp_path)

        with pytest.raises(MalformedDataError) as exc_info:
            engine.prepare_chart([], "GBP")

        assert exc_info.value.expected_format == "channel"

    def test_invalid_display_mode(self, tmp_path: Path) -> None:
        """Test that unknown display modes raise MalformedDataError."""
        engine = RateChartEngine(config_dir=tmp_path)

        with pytest.raises(MalformedDataError) as exc_info:
            engine.prepare_chart([], "USD", display_mode="week")

        assert exc_info.value.expected_format == "display_mode"

    def test_invalid_json(self, tmp_path: Path) -> None:
        """Test that undecodable JSON text raises MalformedDataError."""
        engine = RateChartEngine(config_dir=tmp_path)

        with pytest.raises(MalformedDataError):
            engine.prepare_chart("{not json", "USD")

    def test_invalid_config_overrides(self, tmp_path: Path) -> None:
        """Test that invalid overrides raise ConfigurationError."""
        engine = RateChartEngine(config_dir=tmp_path)

        with pytest.raises(ConfigurationError):
            engine.prepare_chart([], "USD", config_overrides={"layout": {"screen_width": -1}})

    def test_chart_prepared_is_logged(self, tmp_path: Path, usd_records: List[Dict[str, Any]]) -> None:
        """Test the structured summary event for prepared charts."""
        engine = RateChartEngine(config_dir=tmp_path)

        with capture_logs() as logs:
            engine.prepare_chart(usd_records, "USD")

        prepared = [entry for entry in logs if entry["event"] == "Chart prepared"]
        assert len(prepared) == 1
        assert prepared[0]["log_level"] == "info"
        assert prepared[0]["channel"] == "USD"
        assert prepared[0]["strategy"] == "strict"
        assert prepared[0]["points"] == 3
        assert prepared[0]["display_mode"] == "fit"
