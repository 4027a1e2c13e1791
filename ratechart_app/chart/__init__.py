"""Chart geometry: Y axis quantization, point spacing and render-ready output"""

from .axis import AxisOverride, AxisSpec, compute_axis
from .calculator import ChartCalculator, ChartData, ChartPoint, build_chart_data
from .spacing import DisplayMode, LayoutSpec, choose_display_mode, compute_layout
from .summary import ChangeSummary, summarize_change

__all__ = [
    "AxisOverride",
    "AxisSpec",
    "compute_axis",
    "ChartCalculator",
    "ChartData",
    "ChartPoint",
    "build_chart_data",
    "DisplayMode",
    "LayoutSpec",
    "choose_display_mode",
    "compute_layout",
    "ChangeSummary",
    "summarize_change",
]
