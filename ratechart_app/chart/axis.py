"""Y-axis bounds, step and label calculation"""

import math
import sys
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Optional

from ..config.defaults import AxisParams
from ..utils.formatting import format_grouped, round_half_up


@dataclass(frozen=True)
class AxisSpec:
    """Quantized Y range: min < max, step > 0, labels run from max down to min."""
    min: float
    max: float
    step: float
    sections: int
    labels: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "min": self.min,
            "max": self.max,
            "step": self.step,
            "sections": self.sections,
            "labels": list(self.labels),
        }


@dataclass(frozen=True)
class AxisOverride:
    """Caller-supplied axis fields; each one set replaces the computed value."""
    min: Optional[float] = None
    max: Optional[float] = None
    step: Optional[float] = None
    sections: Optional[int] = None
    labels: Optional[tuple[str, ...]] = None

    @classmethod
    def from_value(cls, value: "AxisOverride | Mapping[str, Any] | None") -> "AxisOverride":
        """Accept an override instance, a plain mapping, or None."""
        if value is None:
            return cls()
        if isinstance(value, AxisOverride):
            return value
        labels = value.get("labels")
        return cls(
            min=_finite_or_none(value.get("min")),
            max=_finite_or_none(value.get("max")),
            step=_finite_or_none(value.get("step")),
            sections=_int_or_none(value.get("sections")),
            labels=tuple(labels) if labels is not None else None,
        )


def _finite_or_none(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value) if math.isfinite(value) else None


def _int_or_none(value: Any) -> Optional[int]:
    number = _finite_or_none(value)
    if number is None or not number.is_integer():
        return None
    return int(number)


def _clamp_finite(value: float) -> float:
    return max(min(value, sys.float_info.max), -sys.float_info.max)


def _span(axis_min: float, axis_max: float) -> float:
    return _clamp_finite(abs(axis_max - axis_min))


def _default_step(span: float, sections: int) -> float:
    return max(round_half_up(span / sections), 1)


def _generate_labels(axis_min: float, axis_max: float, sections: int,
                     fraction_digits: int) -> tuple[str, ...]:
    # weighted form stays finite for bounds near the float limits
    return tuple(
        format_grouped(axis_max * (1 - i / sections) + axis_min * (i / sections), fraction_digits)
        for i in range(sections + 1)
    )


def compute_axis(values: Iterable[Optional[float]],
                 override: "AxisOverride | Mapping[str, Any] | None" = None,
                 params: Optional[AxisParams] = None,
                 fraction_digits: int = 2) -> AxisSpec:
    """
    Derive Y-axis bounds, step and labels for a channel's values.

    The data range is padded by ``max(padding_ratio * range, min_padding)``,
    the bounds are floored/ceiled to whole numbers and split into
    ``params.sections`` bands. Override fields take precedence one by one; an
    overridden section count recomputes the top of the range so that
    ``min + step * sections`` covers it.

    Args:
        values: Channel values (None and non-finite entries are ignored)
        override: Optional per-field overrides
        params: Axis parameters, defaults if omitted
        fraction_digits: Max decimals in generated labels

    Returns:
        AxisSpec with ``min < max`` and ``step > 0``
    """
    params = params or AxisParams()
    overrides = AxisOverride.from_value(override)

    finite = [float(v) for v in values if _finite_or_none(v) is not None]
    raw_min = min(finite) if finite else 0.0
    raw_max = max(finite) if finite else 0.0

    padding = max(_span(raw_min, raw_max) * params.padding_ratio, params.min_padding)
    # padded bounds of values near the float limits are clamped before rounding
    axis_min = float(math.floor(_clamp_finite(raw_min - padding)))
    axis_max = float(math.ceil(_clamp_finite(raw_max + padding)))
    if axis_min == axis_max:
        widen = max(1.0, abs(axis_max) * sys.float_info.epsilon)
        axis_min = _clamp_finite(axis_min - widen)
        axis_max = _clamp_finite(axis_max + widen)

    sections = params.sections
    step = _default_step(_span(axis_min, axis_max), sections)

    if overrides.min is not None:
        axis_min = overrides.min
    if overrides.max is not None:
        axis_max = overrides.max
    step_override = overrides.step if overrides.step is not None and overrides.step > 0 else None

    if isinstance(overrides.sections, int) and not isinstance(overrides.sections, bool) \
            and overrides.sections > 0:
        sections = overrides.sections
        needed = max(math.ceil(_span(axis_min, axis_max) / sections), 1) if axis_max > axis_min else 1
        if step_override is not None and axis_min + step_override * sections >= axis_max:
            step = step_override
        else:
            # an overridden step too small for the range is widened to cover it
            step = needed
        axis_max = _clamp_finite(axis_min + float(step) * sections)
    elif step_override is not None:
        step = step_override
    elif overrides.min is not None or overrides.max is not None:
        step = _default_step(_span(axis_min, axis_max), sections)

    if axis_max <= axis_min:
        axis_max = _clamp_finite(axis_min + float(step) * sections)

    if overrides.labels is not None:
        labels = tuple(str(label) for label in overrides.labels)
    else:
        labels = _generate_labels(axis_min, axis_max, sections, fraction_digits)

    return AxisSpec(
        min=float(axis_min),
        max=float(axis_max),
        step=float(step),
        sections=sections,
        labels=labels,
    )
