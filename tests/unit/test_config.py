"""Unit tests for configuration management."""

import pytest
from pathlib import Path
from typing import Dict, Any

from ratechart_app.config.defaults import (
    AxisParams,
    DefaultConfig,
    LayoutParams,
    get_default_config,
)
from ratechart_app.config.loader import ConfigLoader
from ratechart_app.config.validation import ConfigValidator
from ratechart_app.errors import ConfigurationError


class TestDefaultConfig:
    """Test suite for default configuration."""

    def test_default_config_creation(self) -> None:
        """Test that default configuration can be created."""
        config = get_default_config()
        assert config is not None
        assert config.axis.sections == 6
        assert config.axis.padding_ratio == 0.1
        assert config.layout.screen_width == 328.0
        assert config.layout.day_visible_points == 10
        assert config.parser.keep_unparsed_dates is True
        assert config.parser.enable_lax_fallback is True
        assert config.labels.first_label_padding == 2

    def test_from_dict_ignores_unknown_keys(self) -> None:
        """Test that unknown keys in a merged dictionary are ignored."""
        config = DefaultConfig.from_dict({
            "axis": {"sections": 4, "unknown": 1},
            "layout": {"screen_width": 400.0},
            "extra": {"x": 1},
        })
        assert config.axis == AxisParams(sections=4)
        assert config.layout == LayoutParams(screen_width=400.0)
        assert config.parser == get_default_config().parser


class TestConfigLoader:
    """Test suite for configuration loader."""

    def test_config_loader_creation(self) -> None:
        """Test that ConfigLoader can be created."""
        loader = ConfigLoader.create()
        assert loader is not None
        assert isinstance(loader.config_dir, Path)
        assert loader.config_dir.name == "config"

    def test_merge_config_defaults_only(self, tmp_path: Path) -> None:
        """Test config merging with defaults only."""
        loader = ConfigLoader.create(tmp_path)
        config = loader.merge_config("USD")

        assert config["axis"]["sections"] == 6
        assert config["layout"]["fit_max_points"] == 30
        assert config["parser"]["enable_lax_fallback"] is True

    def test_merge_config_with_overrides(self, tmp_path: Path) -> None:
        """Test config merging with per-call overrides."""
        loader = ConfigLoader.create(tmp_path)
        overrides = {"axis": {"sections": 5}, "layout": {"screen_width": 400.0}}

        config = loader.merge_config("USD", overrides)

        assert config["axis"]["sections"] == 5
        assert config["layout"]["screen_width"] == 400.0
        # Other defaults should remain
        assert config["axis"]["padding_ratio"] == 0.1
        assert config["layout"]["day_visible_points"] == 10

    def test_channel_config_from_yaml(self, write_channels_yaml) -> None:
        """Test that channels.yaml overrides apply per channel."""
        config_dir = write_channels_yaml(
            "channels:\n"
            "  JPY:\n"
            "    labels:\n"
            "      fraction_digits: 1\n"
            "    axis:\n"
            "      min_padding: 0.5\n"
        )
        loader = ConfigLoader.create(config_dir)

        jpy = loader.merge_config("JPY")
        usd = loader.merge_config("USD")

        assert jpy["labels"]["fraction_digits"] == 1
        assert jpy["axis"]["min_padding"] == 0.5
        assert jpy["axis"]["sections"] == 6
        assert usd["labels"]["fraction_digits"] == 2

    def test_call_overrides_beat_channel_config(self, write_channels_yaml) -> None:
        """Test 3-tier precedence: call > channel > defaults."""
        config_dir = write_channels_yaml("channels:\n  USD:\n    axis:\n      sections: 4\n")
        loader = ConfigLoader.create(config_dir)

        assert loader.merge_config("USD")["axis"]["sections"] == 4
        assert loader.merge_config("USD", {"axis": {"sections": 8}})["axis"]["sections"] == 8

    @pytest.mark.parametrize("content", ["", "channels:\n", "channels:\n  USD:\n"])
    def test_empty_yaml_sections(self, write_channels_yaml, content: str) -> None:
        """Test that empty YAML documents and sections fall back to defaults."""
        loader = ConfigLoader.create(write_channels_yaml(content))
        assert loader.load_channel_config("USD") == {}

    def test_load_config_returns_dataclasses(self, tmp_path: Path) -> None:
        """Test materialization of the merged configuration."""
        loader = ConfigLoader.create(tmp_path)
        config = loader.load_config("EUR", {"parser": {"keep_unparsed_dates": False}})

        assert isinstance(config, DefaultConfig)
        assert config.parser.keep_unparsed_dates is False
        assert config.axis.sections == 6

    def test_load_config_rejects_invalid(self, tmp_path: Path) -> None:
        """Test that invalid merged configuration raises ConfigurationError."""
        loader = ConfigLoader.create(tmp_path)

        with pytest.raises(ConfigurationError) as exc_info:
            loader.load_config("USD", {"axis": {"sections": 0}})

        assert exc_info.value.channel == "USD"
        assert [err.field for err in exc_info.value.errors] == ["axis.sections"]
        assert "axis.sections" in str(exc_info.value)

    def test_defaults_are_not_mutated(self, tmp_path: Path) -> None:
        """Test that merging never changes the loader's defaults."""
        loader = ConfigLoader.create(tmp_path)
        loader.merge_config("USD", {"axis": {"sections": 3}})
        assert loader.merge_config("USD")["axis"]["sections"] == 6


class TestConfigValidator:
    """Test suite for configuration validation."""

    def test_valid_defaults(self) -> None:
        """Test that the defaults validate cleanly."""
        merged = ConfigLoader.create(Path("/nonexistent")).merge_config("USD")
        assert ConfigValidator.validate_config(merged) == []

    @pytest.mark.parametrize("params,field", [
        ({"sections": 0}, "axis.sections"),
        ({"sections": 2.5}, "axis.sections"),
        ({"sections": True}, "axis.sections"),
        ({"padding_ratio": 1.5}, "axis.padding_ratio"),
        ({"min_padding": -1}, "axis.min_padding"),
    ])
    def test_invalid_axis_params(self, params: Dict[str, Any], field: str) -> None:
        """Test validation of invalid axis parameters."""
        errors = ConfigValidator.validate_axis_params(params)
        assert [err.field for err in errors] == [field]

    @pytest.mark.parametrize("params,field", [
        ({"screen_width": 0}, "layout.screen_width"),
        ({"fit_end_ratio": -0.5}, "layout.fit_end_ratio"),
        ({"fit_horizontal_inset": -1}, "layout.fit_horizontal_inset"),
        ({"day_visible_points": 0}, "layout.day_visible_points"),
        ({"fit_max_points": "30"}, "layout.fit_max_points"),
        ({"day_min_spacing": 70, "day_max_spacing": 64}, "layout.day_min_spacing"),
    ])
    def test_invalid_layout_params(self, params: Dict[str, Any], field: str) -> None:
        """Test validation of invalid layout parameters."""
        errors = ConfigValidator.validate_layout_params(params)
        assert [err.field for err in errors] == [field]

    def test_zero_inset_is_valid(self) -> None:
        """Test that the fit-mode inset may be zero."""
        assert ConfigValidator.validate_layout_params({"fit_horizontal_inset": 0}) == []

    def test_invalid_parser_params(self) -> None:
        """Test that parser flags must be booleans."""
        errors = ConfigValidator.validate_parser_params({"keep_unparsed_dates": "yes"})
        assert len(errors) == 1
        assert errors[0].field == "parser.keep_unparsed_dates"
        assert errors[0].value == "yes"

    def test_invalid_label_params(self) -> None:
        """Test that label parameters must be non-negative integers."""
        errors = ConfigValidator.validate_label_params({"first_label_padding": -1, "fraction_digits": 1.5})
        assert [err.field for err in errors] == ["labels.first_label_padding", "labels.fraction_digits"]

    def test_validate_config_collects_all_sections(self) -> None:
        """Test that errors from every section are reported together."""
        errors = ConfigValidator.validate_config({
            "axis": {"sections": -1},
            "layout": {"screen_width": -1},
            "parser": {"enable_lax_fallback": 1},
            "labels": {"fraction_digits": -2},
        })
        assert len(errors) == 4
