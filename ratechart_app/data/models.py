"""
Canonical data models for normalized rate series.

This module defines immutable data structures that represent clean rate
observations after normalization from drifting backend payloads.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Channel(str, Enum):
    """Tracked currency channels, quoted in won per unit."""
    USD = "USD"
    EUR = "EUR"
    JPY = "JPY"
    CNY = "CNY"

    @property
    def attribute(self) -> str:
        """Name of the matching NormalizedPoint field."""
        return f"{self.value.lower()}_rate"

    @classmethod
    def parse(cls, value: "Channel | str") -> "Channel":
        """Resolve a channel from an enum member or a case-insensitive code."""
        if isinstance(value, Channel):
            return value
        return cls(str(value).strip().upper())


class ParseStrategy(str, Enum):
    """Tier of the fallback chain that produced a channel series."""
    STRICT = "strict"
    LAX = "lax"
    NONE = "none"


@dataclass(frozen=True)
class NormalizedPoint:
    """One observation with a canonical date and up to four channel rates."""
    date: str                          # YYYY-MM-DD, or a raw string in lenient mode
    usd_rate: Optional[float] = None
    eur_rate: Optional[float] = None
    jpy_rate: Optional[float] = None   # Per 100 yen
    cny_rate: Optional[float] = None

    def value_for(self, channel: Channel) -> Optional[float]:
        """Rate for a channel, None if absent."""
        return getattr(self, channel.attribute)

    @property
    def has_any_rate(self) -> bool:
        """True if at least one channel is present."""
        return any(self.value_for(channel) is not None for channel in Channel)


@dataclass(frozen=True)
class ChannelPoint:
    """Single dated value of one channel."""
    date: str
    value: float


@dataclass(frozen=True)
class ChannelSeries:
    """Result of building one channel with the strict/lax fallback chain."""

    channel: Channel
    points: tuple[ChannelPoint, ...] = ()

    # Processing metadata
    strategy: ParseStrategy = ParseStrategy.STRICT
    normalized: tuple[NormalizedPoint, ...] = field(default=(), repr=False)
    record_count: int = 0

    @property
    def has_data(self) -> bool:
        """True if the channel has at least one usable value."""
        return bool(self.points)

    @property
    def values(self) -> list[float]:
        """Channel values in date order."""
        return [point.value for point in self.points]

    @property
    def dates(self) -> list[str]:
        """Dates in order."""
        return [point.date for point in self.points]

    def __len__(self) -> int:
        return len(self.points)

    @classmethod
    def empty(cls, channel: Channel, normalized: tuple[NormalizedPoint, ...] = (),
              record_count: int = 0) -> "ChannelSeries":
        """Create a no-data result carrying the best available normalized points."""
        return cls(
            channel=channel,
            points=(),
            strategy=ParseStrategy.NONE,
            normalized=normalized,
            record_count=record_count,
        )
