"""
Series normalization pipeline for converting raw rate payloads to clean series.

This module provides the strict/lax series building functions and the
SeriesNormalizer class that applies them with configuration and logging.
"""

from collections.abc import Iterable, Mapping
from typing import Any, Optional

from ..config.defaults import ParserParams
from ..logging.config import get_logger, log_fallback_decision
from .aliases import DATE_ALIASES, resolve_channel_value, resolve_field
from .models import Channel, ChannelPoint, ChannelSeries, NormalizedPoint, ParseStrategy
from .parsers import ValueParser, normalize_date, parse_value, parse_value_lax

logger = get_logger(__name__)

# Envelope keys wrapping the record list in backend responses
ENVELOPE_KEYS: tuple[str, ...] = ("data", "history", "items", "rates", "results", "content")

# Envelopes are unwrapped at most this deep
MAX_ENVELOPE_DEPTH = 3


def extract_records(payload: Any) -> list[Any]:
    """
    Locate the record list inside a backend response.

    Accepts a bare list, or a mapping wrapping the list under one of
    ``ENVELOPE_KEYS`` (e.g. ``{"success": true, "data": [...]}`` or
    ``{"data": {"history": [...]}}``).

    Returns:
        The record list, or an empty list if none was found
    """
    current = payload
    for _ in range(MAX_ENVELOPE_DEPTH + 1):
        if isinstance(current, (list, tuple)):
            return list(current)
        if not isinstance(current, Mapping):
            return []

        inner = None
        for key in ENVELOPE_KEYS:
            if isinstance(current.get(key), (list, tuple, Mapping)):
                inner = current[key]
                break
        if inner is None:
            return []
        current = inner
    return []


def _normalize_record(record: Any, value_parser: ValueParser,
                      keep_unparsed_dates: bool) -> Optional[NormalizedPoint]:
    """Normalize one record; None if it has no date or no channel value."""
    if not isinstance(record, Mapping):
        return None

    point_date = normalize_date(resolve_field(record, DATE_ALIASES), keep_unparsed=keep_unparsed_dates)
    if point_date is None:
        return None

    point = NormalizedPoint(date=point_date, **{
        channel.attribute: value_parser(resolve_channel_value(record, channel))
        for channel in Channel
    })
    return point if point.has_any_rate else None


def build_series(records: Iterable[Any],
                 value_parser: ValueParser = parse_value,
                 *,
                 keep_unparsed_dates: bool = True) -> list[NormalizedPoint]:
    """
    Build a date-ordered normalized series from raw records.

    Records without a resolvable date, or with all four channels absent, are
    dropped. Points are sorted by date with a stable sort so equal dates keep
    their input order. The input is not modified.

    Args:
        records: Raw records (mappings; anything else is skipped)
        value_parser: Strategy turning a raw channel value into a float
        keep_unparsed_dates: Keep records whose date string could not be
            normalized, using the trimmed raw string as the date

    Returns:
        Normalized points sorted ascending by date
    """
    points = []
    dropped = 0

    for record in records:
        point = _normalize_record(record, value_parser, keep_unparsed_dates)
        if point is None:
            dropped += 1
            continue
        points.append(point)

    if dropped:
        logger.debug("Dropped unusable records", dropped=dropped, kept=len(points))

    points.sort(key=lambda point: point.date)
    return points


def filter_channel(points: Iterable[NormalizedPoint], channel: Channel) -> list[ChannelPoint]:
    """Channel values that are finite and strictly positive, in input order."""
    result = []
    for point in points:
        value = point.value_for(channel)
        # Rates are never zero or negative; anything else is noise
        if value is not None and value > 0:
            result.append(ChannelPoint(date=point.date, value=value))
    return result


def build_with_fallback(records: Iterable[Any],
                        channel: Channel | str,
                        *,
                        keep_unparsed_dates: bool = True,
                        enable_lax_fallback: bool = True) -> ChannelSeries:
    """
    Build one channel series, retrying with the lax parser if strict yields nothing.

    1. Strict build, filtered to positive values of the channel.
    2. Only when that is empty: lax build, filtered again.
    3. Still empty: a no-data series carrying the best available normalized
       points, so callers can render an explicit empty state.

    Args:
        records: Raw records
        channel: Channel to extract
        keep_unparsed_dates: Passed through to ``build_series``
        enable_lax_fallback: Allow the second, lax tier

    Returns:
        ChannelSeries tagged with the tier that produced it
    """
    channel = Channel.parse(channel)
    records = list(records)

    strict_points = build_series(records, parse_value, keep_unparsed_dates=keep_unparsed_dates)
    channel_points = filter_channel(strict_points, channel)
    if channel_points:
        series = ChannelSeries(
            channel=channel,
            points=tuple(channel_points),
            strategy=ParseStrategy.STRICT,
            normalized=tuple(strict_points),
            record_count=len(records),
        )
        log_fallback_decision(logger, channel.value, series.strategy.value, len(series), len(records))
        return series

    best_points = strict_points
    if enable_lax_fallback:
        lax_points = build_series(records, parse_value_lax, keep_unparsed_dates=keep_unparsed_dates)
        channel_points = filter_channel(lax_points, channel)
        if channel_points:
            series = ChannelSeries(
                channel=channel,
                points=tuple(channel_points),
                strategy=ParseStrategy.LAX,
                normalized=tuple(lax_points),
                record_count=len(records),
            )
            log_fallback_decision(logger, channel.value, series.strategy.value, len(series), len(records))
            return series
        if len(lax_points) > len(best_points):
            best_points = lax_points

    series = ChannelSeries.empty(channel, normalized=tuple(best_points), record_count=len(records))
    log_fallback_decision(logger, channel.value, series.strategy.value, 0, len(records))
    return series


class SeriesNormalizer:
    """
    Configured entry point for the series pipeline.

    Unwraps response envelopes and applies the configured date leniency and
    fallback policy.
    """

    def __init__(self, params: Optional[ParserParams] = None):
        """
        Initialize series normalizer with parser parameters.

        Args:
            params: Parser configuration, defaults if omitted
        """
        self.params = params or ParserParams()

    def normalize(self, payload: Any, value_parser: ValueParser = parse_value) -> list[NormalizedPoint]:
        """Normalize every channel of a payload."""
        return build_series(
            extract_records(payload),
            value_parser,
            keep_unparsed_dates=self.params.keep_unparsed_dates,
        )

    def channel_series(self, payload: Any, channel: Channel | str) -> ChannelSeries:
        """Build one channel of a payload with the fallback chain."""
        return build_with_fallback(
            extract_records(payload),
            channel,
            keep_unparsed_dates=self.params.keep_unparsed_dates,
            enable_lax_fallback=self.params.enable_lax_fallback,
        )
