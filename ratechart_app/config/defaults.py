"""Default configuration parameters for the rate chart engine."""

from dataclasses import dataclass, fields
from typing import Any


@dataclass(frozen=True)
class AxisParams:
    """Y-axis quantization parameters."""
    sections: int = 6                     # Horizontal bands on the Y axis
    padding_ratio: float = 0.1            # Share of the data range added above and below
    min_padding: float = 1.0              # Padding floor for flat series


@dataclass(frozen=True)
class LayoutParams:
    """Horizontal point placement parameters."""
    screen_width: float = 328.0           # Window width minus screen margins

    # Scrollable "day" mode
    day_visible_points: int = 10          # Points sharing one screen width
    day_min_spacing: float = 28.0
    day_max_spacing: float = 64.0
    day_min_edge: float = 16.0
    day_max_edge: float = 24.0

    # Fixed-width "fit" mode
    fit_horizontal_inset: float = 40.0    # Width reserved for the Y axis labels
    fit_min_spacing: float = 12.0
    fit_max_spacing: float = 44.0
    fit_initial_ratio: float = 0.7
    fit_initial_floor: float = 22.0
    fit_initial_ceiling: float = 30.0
    fit_end_ratio: float = 0.8
    fit_end_floor: float = 24.0
    fit_end_ceiling: float = 34.0

    # Automatic mode selection
    fit_max_points: int = 30              # Largest series drawn without scrolling


@dataclass(frozen=True)
class ParserParams:
    """Tolerant parsing parameters."""
    keep_unparsed_dates: bool = True      # Keep unrecognized date strings as-is
    enable_lax_fallback: bool = True      # Retry with the lax parser on empty channels


@dataclass(frozen=True)
class LabelParams:
    """Point and axis label formatting parameters."""
    first_label_padding: int = 2          # Leading spaces on the first X label
    fraction_digits: int = 2              # Max decimals in tooltips and axis labels


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    axis: AxisParams
    layout: LayoutParams
    parser: ParserParams
    labels: LabelParams

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DefaultConfig":
        """Build a config from a (possibly partial) nested dictionary."""
        sections = {
            "axis": AxisParams,
            "layout": LayoutParams,
            "parser": ParserParams,
            "labels": LabelParams,
        }
        kwargs = {}
        for name, params_cls in sections.items():
            known = {f.name for f in fields(params_cls)}
            values = data.get(name) or {}
            kwargs[name] = params_cls(**{k: v for k, v in values.items() if k in known})
        return cls(**kwargs)


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        axis=AxisParams(),
        layout=LayoutParams(),
        parser=ParserParams(),
        labels=LabelParams(),
    )
