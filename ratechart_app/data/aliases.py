"""
Field alias tables and case-insensitive field resolution.

Backends have renamed rate fields more than once (``usdRate`` -> ``usd``,
snake_case exports, raw Korea Eximbank rows keyed by ``cur_unit``). Each
logical field is looked up through an ordered list of known spellings.
"""

from collections.abc import Mapping, Sequence
from typing import Any, Optional

from .models import Channel

DATE_ALIASES: tuple[str, ...] = (
    "date",
    "baseDate",
    "base_date",
    "tradeDate",
    "trade_date",
    "searchDate",
    "search_date",
    "recordDate",
    "record_date",
    "day",
    "dt",
    "timestamp",
    "time",
    "createdAt",
    "created_at",
)

CHANNEL_ALIASES: dict[Channel, tuple[str, ...]] = {
    Channel.USD: (
        "usdRate", "usd_rate", "usdKrw", "usd_krw", "usdKrwRate", "usd_krw_rate",
        "usd", "dollarRate", "dollar_rate",
    ),
    Channel.EUR: (
        "eurRate", "eur_rate", "eurKrw", "eur_krw", "eurKrwRate", "eur_krw_rate",
        "eur", "euroRate", "euro_rate",
    ),
    Channel.JPY: (
        "jpyRate", "jpy_rate", "jpy100Rate", "jpy100_rate", "jpy_100_rate",
        "jpyKrw", "jpy_krw", "JPY(100)", "jpy100", "jpy", "yenRate", "yen_rate",
    ),
    Channel.CNY: (
        "cnyRate", "cny_rate", "cnhRate", "cnh_rate", "cnyKrw", "cny_krw",
        "cny", "cnh", "yuanRate", "yuan_rate",
    ),
}

# Long-format rows carry one currency each: {"cur_unit": "USD", "deal_bas_r": "1,350.2"}
UNIT_ALIASES: tuple[str, ...] = (
    "curUnit",
    "cur_unit",
    "currencyCode",
    "currency_code",
    "currency",
    "unit",
)

RATE_VALUE_ALIASES: tuple[str, ...] = (
    "dealBasRate",
    "deal_bas_r",
    "dealBasR",
    "exchangeRate",
    "exchange_rate",
    "rate",
    "value",
)

CHANNEL_UNIT_CODES: dict[Channel, tuple[str, ...]] = {
    Channel.USD: ("USD",),
    Channel.EUR: ("EUR",),
    Channel.JPY: ("JPY(100)", "JPY100", "JPY"),
    Channel.CNY: ("CNH", "CNY"),
}


def resolve_field(record: Any, aliases: Sequence[str], default: Any = None) -> Any:
    """
    Return the raw value of the first alias present in a record.

    Exact key matches are tried first in alias order, then a case-insensitive
    scan. Key presence decides the match: an alias mapped to None still wins
    and None is returned for the parser to reject.

    Args:
        record: Raw record (non-mappings resolve to ``default``)
        aliases: Candidate key names in priority order
        default: Value returned when no alias is present

    Returns:
        The raw value under the first matching alias, or ``default``
    """
    if not isinstance(record, Mapping):
        return default

    for alias in aliases:
        if alias in record:
            return record[alias]

    lowered: dict[str, Any] = {}
    for key in record:
        if isinstance(key, str):
            lowered.setdefault(key.lower(), key)

    for alias in aliases:
        key = lowered.get(alias.lower())
        if key is not None:
            return record[key]

    return default


def has_field(record: Any, aliases: Sequence[str]) -> bool:
    """True if any alias is present in the record (case-insensitive)."""
    marker = object()
    return resolve_field(record, aliases, default=marker) is not marker


def resolve_unit_channel(record: Any) -> Optional[Channel]:
    """Channel named by a long-format row's currency unit field, if any."""
    unit = resolve_field(record, UNIT_ALIASES)
    if not isinstance(unit, str):
        return None

    code = unit.strip().upper().replace(" ", "")
    for channel, codes in CHANNEL_UNIT_CODES.items():
        if code in codes:
            return channel
    return None


def resolve_channel_value(record: Any, channel: Channel) -> Any:
    """
    Raw value for a channel in either wide or long record format.

    Wide records are matched through ``CHANNEL_ALIASES``. When none of those
    keys exist, a long-format row whose unit field names the channel yields
    its rate field instead.
    """
    aliases = CHANNEL_ALIASES[channel]
    if has_field(record, aliases):
        return resolve_field(record, aliases)

    if resolve_unit_channel(record) is channel:
        return resolve_field(record, RATE_VALUE_ALIASES)

    return None
