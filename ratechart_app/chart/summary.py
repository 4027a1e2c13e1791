"""Latest-versus-previous change summary for a channel series"""

from dataclasses import dataclass
from typing import Optional

from ..data.models import Channel, ChannelSeries
from ..utils.formatting import format_grouped, format_signed_amount, format_signed_percent


@dataclass(frozen=True)
class ChangeSummary:
    """Most recent rate and its change against the previous distinct date."""
    channel: Channel
    latest_date: str
    latest_value: float
    previous_date: Optional[str] = None
    previous_value: Optional[float] = None

    @property
    def amount(self) -> Optional[float]:
        """Absolute change, None without a previous value."""
        if self.previous_value is None:
            return None
        return self.latest_value - self.previous_value

    @property
    def percent(self) -> Optional[float]:
        """Relative change in percent, None without a usable previous value."""
        if self.previous_value is None or self.previous_value == 0:
            return None
        return (self.latest_value - self.previous_value) / self.previous_value * 100

    def format_latest(self, unit: str = "원", fraction_digits: int = 2) -> str:
        return f"{format_grouped(self.latest_value, fraction_digits)}{unit}"

    def format_amount(self, unit: str = "원", fraction_digits: int = 2) -> str:
        if self.amount is None:
            return f"-{unit}"
        return format_signed_amount(self.amount, unit, fraction_digits)

    def format_percent(self) -> str:
        return format_signed_percent(self.percent)


def summarize_change(series: ChannelSeries) -> Optional[ChangeSummary]:
    """
    Summarize the latest value of a series against the previous distinct date.

    Several records can share the latest date; the comparison point is the
    most recent one dated strictly earlier.

    Returns:
        ChangeSummary, or None for an empty series
    """
    if not series.points:
        return None

    latest = series.points[-1]
    previous = next(
        (point for point in reversed(series.points[:-1]) if point.date != latest.date),
        None,
    )

    return ChangeSummary(
        channel=series.channel,
        latest_date=latest.date,
        latest_value=latest.value,
        previous_date=previous.date if previous else None,
        previous_value=previous.value if previous else None,
    )
