"""
Tolerant value and date parsers for drifting rate payloads.

Backends deliver rates as numbers, localized strings ("1,350.25", "1.234,56",
"₩1,350.25 (전일대비 +3.2)") or nested objects, and dates as ISO strings,
epoch numbers, Java ``LocalDate`` arrays or ``{year, month, day}`` objects.
Every parser here returns ``None`` instead of raising when it cannot make
sense of its input.
"""

import math
import re
from collections.abc import Callable, Mapping
from datetime import UTC, date, datetime
from decimal import Decimal
from typing import Any, Optional

import orjson
from dateutil import parser as dateutil_parser

from ..errors import MalformedDataError
from .aliases import resolve_field

ValueParser = Callable[[Any], Optional[float]]

# Generic keys holding the actual number inside wrapper objects
NESTED_VALUE_KEYS: tuple[str, ...] = (
    "value",
    "rate",
    "amount",
    "avg",
    "average",
    "dealBasRate",
    "deal_bas_r",
)

# Wrapper objects are unwrapped at most this deep
MAX_NESTING = 4

_NUMERIC_TOKEN = re.compile(r"[-+]?\d[\d,.]*")
_PLAIN_NUMBER = re.compile(r"[-+]?\d*\.?\d+")
_CANONICAL_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_LOOSE_YMD = re.compile(r"^(\d{4})\s*[-./년]\s*(\d{1,2})\s*[-./월]\s*(\d{1,2})(?!\d)")

# Epoch magnitudes at or above this are milliseconds
_EPOCH_MS_THRESHOLD = 1e11
# Two fallback dates differing in every field
_DATEUTIL_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))

# (year key, month key, day key, zero-based month)
_DATE_PART_VARIANTS: tuple[tuple[str, str, str, bool], ...] = (
    ("year", "monthValue", "dayOfMonth", False),
    ("year", "month", "day", False),
    ("yyyy", "mm", "dd", False),
    ("y", "m", "d", False),
    ("year", "monthIndex", "day", True),
)


def _finite_number(raw: Any) -> Optional[float]:
    """Convert a real number to float, None if bool or non-finite."""
    if isinstance(raw, bool) or not isinstance(raw, (int, float, Decimal)):
        return None
    try:
        value = float(raw)
    except (OverflowError, ValueError):
        return None
    return value if math.isfinite(value) else None


def _parse_token(token: str) -> Optional[float]:
    """
    Parse one numeric token, deciding which separator is the decimal point.

    - Both "," and ".": the one occurring last is decimal, the other grouping.
    - Only ",": decimal when it occurs once with 1-3 trailing digits.
    - Only ".": grouping when repeated or followed by 0 or >3 digits.
    """
    has_comma = "," in token
    has_dot = "." in token

    if has_comma and has_dot:
        decimal_sep = "," if token.rfind(",") > token.rfind(".") else "."
        grouping_sep = "." if decimal_sep == "," else ","
        cleaned = token.replace(grouping_sep, "").replace(decimal_sep, ".")
    elif has_comma:
        trailing = len(token) - token.rfind(",") - 1
        if token.count(",") == 1 and 1 <= trailing <= 3:
            cleaned = token.replace(",", ".")
        else:
            cleaned = token.replace(",", "")
    elif has_dot:
        trailing = len(token) - token.rfind(".") - 1
        if token.count(".") > 1 or trailing == 0 or trailing > 3:
            cleaned = token.replace(".", "")
        else:
            cleaned = token
    else:
        cleaned = token

    try:
        value = float(cleaned)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def _parse_nested(raw: Mapping, parser: Callable[[Any, int], Optional[float]],
                  depth: int) -> Optional[float]:
    """Try the generic nested value keys in order; first success wins."""
    if depth >= MAX_NESTING:
        return None
    for key in NESTED_VALUE_KEYS:
        if key in raw:
            value = parser(raw[key], depth + 1)
            if value is not None:
                return value
    return None


def _parse_value_strict(raw: Any, depth: int) -> Optional[float]:
    if raw is None:
        return None

    if isinstance(raw, str):
        best: Optional[float] = None
        for token in _NUMERIC_TOKEN.findall(raw):
            value = _parse_token(token)
            if value is not None and (best is None or abs(value) > abs(best)):
                best = value
        return best

    if isinstance(raw, Mapping):
        return _parse_nested(raw, _parse_value_strict, depth)

    return _finite_number(raw)


def _parse_value_lax(raw: Any, depth: int) -> Optional[float]:
    if raw is None:
        return None

    if isinstance(raw, str):
        tokens = _PLAIN_NUMBER.findall(raw.replace(",", ""))
        for token in reversed(tokens):
            try:
                value = float(token)
            except ValueError:
                continue
            if math.isfinite(value):
                return value
        return None

    if isinstance(raw, Mapping):
        return _parse_nested(raw, _parse_value_lax, depth)

    return _finite_number(raw)


def parse_value(raw: Any) -> Optional[float]:
    """
    Parse a raw rate value into a finite float.

    Strings may contain currency symbols, units and unrelated digits; every
    numeric token is parsed with separator disambiguation and the one with the
    greatest absolute value is returned. Mappings are unwrapped through
    ``NESTED_VALUE_KEYS``.

    Args:
        raw: Number, string, nested mapping, or anything else

    Returns:
        Parsed value, or None if nothing usable was found
    """
    return _parse_value_strict(raw, 0)


def parse_value_lax(raw: Any) -> Optional[float]:
    """
    Last-resort value parser.

    Drops every comma, then returns the last plain numeric token found in a
    string. No separator disambiguation. Numbers and mappings are handled as
    in ``parse_value``.
    """
    return _parse_value_lax(raw, 0)


def _as_int(raw: Any) -> Optional[int]:
    """Whole number from an int-like value or digit string."""
    if isinstance(raw, str):
        text = raw.strip()
        if not text.isdecimal():
            return None
        try:
            return int(text)
        except ValueError:
            # past the interpreter limit on digit string length
            return None
    value = _finite_number(raw)
    if value is None or not value.is_integer():
        return None
    return int(value)


def _format_ymd(year: int, month: int, day: int) -> str:
    return f"{year:04d}-{month:02d}-{day:02d}"


def _normalize_date_string(raw: str, keep_unparsed: bool) -> Optional[str]:
    text = raw.strip()
    if not text:
        return None

    if _CANONICAL_DATE.match(text):
        return text

    match = _LOOSE_YMD.match(text)
    if match:
        try:
            return date(*(int(part) for part in match.groups())).isoformat()
        except ValueError:
            pass

    try:
        return datetime.fromisoformat(text).date().isoformat()
    except ValueError:
        pass

    # dateutil fills missing fields from its default, so parse against two
    # defaults and keep only dates the text fully determines
    try:
        parsed = {
            dateutil_parser.parse(text, default=default).date()
            for default in _DATEUTIL_DEFAULTS
        }
    except (ValueError, OverflowError):
        parsed = set()
    if len(parsed) == 1:
        return parsed.pop().isoformat()

    return text if keep_unparsed else None


def _normalize_date_epoch(raw: float) -> Optional[str]:
    seconds = raw / 1000.0 if abs(raw) >= _EPOCH_MS_THRESHOLD else raw
    try:
        return datetime.fromtimestamp(seconds, tz=UTC).date().isoformat()
    except (OverflowError, OSError, ValueError):
        return None


def _normalize_date_parts(raw: Mapping) -> Optional[str]:
    for year_key, month_key, day_key, zero_based in _DATE_PART_VARIANTS:
        year = _as_int(resolve_field(raw, (year_key,)))
        month = _as_int(resolve_field(raw, (month_key,)))
        day = _as_int(resolve_field(raw, (day_key,)))
        if year is None or month is None or day is None:
            continue
        if zero_based:
            month += 1
        return _format_ymd(year, month, day)
    return None


def _normalize_date(raw: Any, keep_unparsed: bool, depth: int) -> Optional[str]:
    if raw is None or isinstance(raw, bool):
        return None

    if isinstance(raw, str):
        return _normalize_date_string(raw, keep_unparsed)

    if isinstance(raw, (list, tuple)):
        # Java LocalDate / LocalDateTime arrays: [y, m, d] or [y, m, d, h, min, ...]
        if 3 <= len(raw) <= 7:
            parts = [_as_int(part) if not isinstance(part, str) else None for part in raw[:3]]
            if all(part is not None for part in parts):
                return _format_ymd(*parts)
        return None

    if isinstance(raw, Mapping):
        formatted = _normalize_date_parts(raw)
        if formatted is not None:
            return formatted
        if depth >= MAX_NESTING:
            return None
        for key in ("date", "value"):
            if key in raw:
                nested = _normalize_date(raw[key], keep_unparsed, depth + 1)
                if nested is not None:
                    return nested
        return None

    value = _finite_number(raw)
    if value is not None:
        return _normalize_date_epoch(value)

    return None


def normalize_date(raw: Any, keep_unparsed: bool = True) -> Optional[str]:
    """
    Normalize a raw date representation to ``YYYY-MM-DD``.

    Accepts ISO and loosely formatted strings, epoch seconds or milliseconds,
    ``[year, month, day]`` arrays and ``{year, month, day}``-style mappings
    (including ``monthValue``/``dayOfMonth`` and zero-based ``monthIndex``).

    Args:
        raw: Raw date value
        keep_unparsed: Return unrecognized non-empty strings trimmed but
            otherwise unchanged instead of dropping them

    Returns:
        Canonical date string, the raw string in lenient mode, or None
    """
    return _normalize_date(raw, keep_unparsed, 0)


def parse_json_payload(raw_data: str | bytes) -> Any:
    """
    Parse raw JSON text into Python objects using orjson.

    Args:
        raw_data: Raw JSON string or bytes from the backend

    Returns:
        Decoded payload

    Raises:
        MalformedDataError: If the text is not valid JSON
    """
    try:
        return orjson.loads(raw_data)
    except orjson.JSONDecodeError as e:
        preview = raw_data[:100] if isinstance(raw_data, str) else raw_data[:100].decode("utf-8", "replace")
        raise MalformedDataError(f"Invalid JSON: {e}", raw_data=preview, expected_format="json")
