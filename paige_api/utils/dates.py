# paige_api/utils/dates.py
from datetime import date, datetime
from numbers import Number
from typing import Any, Mapping, Optional

from dateutil import parser as date_parser
from dateutil import tz

from paige_api.utils.logger import logger

UTC = tz.UTC

# Zero-argument conversion methods exposed by timestamp wrappers
# (Firestore/Mongo SDK timestamps, pandas, arrow, ...)
_CONVERSION_METHODS = ("to_date", "toDate", "to_datetime", "to_pydatetime")
_EPOCH_SECONDS_KEYS = ("seconds", "_seconds")

UNDECIDED_DATE = "TBD"


def get_utc_now() -> datetime:
    """Timezone-aware current time in UTC, used for record timestamps."""
    return datetime.now(UTC)


def format_canonical(dt: datetime) -> str:
    """Format as YYYY-MM-DDTHH:MM:SS.mmmZ in UTC. Naive values are taken as UTC."""
    if not isinstance(dt, datetime):
        dt = datetime(dt.year, dt.month, dt.day)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    dt = dt.astimezone(UTC)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def _from_epoch_seconds(seconds: float) -> str:
    return format_canonical(datetime.fromtimestamp(seconds, UTC))


def _epoch_seconds_of(value: Any) -> Optional[float]:
    for key in _EPOCH_SECONDS_KEYS:
        if isinstance(value, Mapping):
            candidate = value.get(key)
        else:
            candidate = getattr(value, key, None)
        if isinstance(candidate, Number) and not isinstance(candidate, bool):
            return float(candidate)
    return None


def normalize_wedding_date(value: Any) -> Optional[str]:
    """
    Coerce a wedding date in any of the shapes clients send into a canonical string.

    Strings pass through untouched. Timestamp wrappers are converted through their
    own conversion method, epoch-seconds objects through their `seconds` field, and
    anything else through a generic parse. Returns None when nothing works.
    """
    if value is None or value == "":
        return None

    if isinstance(value, str):
        return value

    try:
        for method_name in _CONVERSION_METHODS:
            method = getattr(value, method_name, None)
            if callable(method):
                converted = method()
                if isinstance(converted, (datetime, date)):
                    return format_canonical(converted)
                return normalize_wedding_date(converted) if isinstance(converted, str) else None

        seconds = _epoch_seconds_of(value)
        if seconds is not None:
            return _from_epoch_seconds(seconds)

        if isinstance(value, (datetime, date)):
            return format_canonical(value)

        if isinstance(value, Number) and not isinstance(value, bool):
            # bare numbers are epoch milliseconds, as browsers serialize them
            return _from_epoch_seconds(float(value) / 1000)

        return format_canonical(date_parser.parse(str(value)))
    except Exception as e:
        logger.warning(f"[DATES] Could not normalize wedding date {value!r}: {e}")
        return None


def has_concrete_wedding_date(normalized_date: Optional[str], undecided: bool = False) -> bool:
    return bool(normalized_date) and normalized_date != UNDECIDED_DATE and not undecided


def parse_canonical(value: str) -> Optional[datetime]:
    """Parse a normalized wedding date back into an aware datetime, or None."""
    try:
        parsed = date_parser.parse(value)
    except (ValueError, OverflowError, TypeError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed
