"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_axis_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate axis parameters."""
        errors = []

        if "sections" in params:
            value = params["sections"]
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                errors.append(ValidationError(
                    field="axis.sections",
                    message="Must be a positive integer",
                    value=value
                ))

        if "padding_ratio" in params:
            value = params["padding_ratio"]
            if not _is_number(value) or value < 0 or value > 1:
                errors.append(ValidationError(
                    field="axis.padding_ratio",
                    message="Must be a number between 0 and 1",
                    value=value
                ))

        if "min_padding" in params:
            value = params["min_padding"]
            if not _is_number(value) or value < 0:
                errors.append(ValidationError(
                    field="axis.min_padding",
                    message="Must be a non-negative number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_layout_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate layout parameters."""
        errors = []

        positive_fields = [
            "screen_width", "day_min_spacing", "day_max_spacing", "day_min_edge",
            "day_max_edge", "fit_min_spacing", "fit_max_spacing", "fit_initial_ratio",
            "fit_initial_floor", "fit_initial_ceiling", "fit_end_ratio",
            "fit_end_floor", "fit_end_ceiling",
        ]
        for name in positive_fields:
            if name in params:
                value = params[name]
                if not _is_number(value) or value <= 0:
                    errors.append(ValidationError(
                        field=f"layout.{name}",
                        message="Must be a positive number",
                        value=value
                    ))

        if "fit_horizontal_inset" in params:
            value = params["fit_horizontal_inset"]
            if not _is_number(value) or value < 0:
                errors.append(ValidationError(
                    field="layout.fit_horizontal_inset",
                    message="Must be a non-negative number",
                    value=value
                ))

        for name in ("day_visible_points", "fit_max_points"):
            if name in params:
                value = params[name]
                if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                    errors.append(ValidationError(
                        field=f"layout.{name}",
                        message="Must be a positive integer",
                        value=value
                    ))

        # Floors must not exceed their unscaled ceilings
        for low, high in (("day_min_spacing", "day_max_spacing"),
                          ("day_min_edge", "day_max_edge"),
                          ("fit_min_spacing", "fit_max_spacing")):
            low_value, high_value = params.get(low), params.get(high)
            if _is_number(low_value) and _is_number(high_value) and low_value > high_value:
                errors.append(ValidationError(
                    field=f"layout.{low}",
                    message=f"Must not exceed {high}",
                    value=low_value
                ))

        return errors

    @staticmethod
    def validate_parser_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate parser parameters."""
        errors = []

        for name in ("keep_unparsed_dates", "enable_lax_fallback"):
            if name in params and not isinstance(params[name], bool):
                errors.append(ValidationError(
                    field=f"parser.{name}",
                    message="Must be a boolean",
                    value=params[name]
                ))

        return errors

    @staticmethod
    def validate_label_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate label parameters."""
        errors = []

        for name in ("first_label_padding", "fraction_digits"):
            if name in params:
                value = params[name]
                if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                    errors.append(ValidationError(
                        field=f"labels.{name}",
                        message="Must be a non-negative integer",
                        value=value
                    ))

        return errors

    @classmethod
    def validate_config(cls, config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "axis" in config:
            errors.extend(cls.validate_axis_params(config["axis"]))

        if "layout" in config:
            errors.extend(cls.validate_layout_params(config["layout"]))

        if "parser" in config:
            errors.extend(cls.validate_parser_params(config["parser"]))

        if "labels" in config:
            errors.extend(cls.validate_label_params(config["labels"]))

        return errors
