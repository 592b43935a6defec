"""
Date normalisation
Reading dates arrive either as ISO-8601 strings (extended, or compact
YYYYMMDD) or as epoch numbers (seconds or milliseconds). Everything is
converted to a naive UTC datetime before it is stored or aggregated.
"""

import re
from datetime import date, datetime, timezone

# Anything larger is a millisecond timestamp (1e11 seconds is the year 5138)
EPOCH_MILLIS_THRESHOLD = 10 ** 11

# Epoch strings need at least ten integer digits (2001-09-09 onwards); shorter
# digit runs are not read as timestamps
_EPOCH_RE = re.compile(r'^-?\d{10,}(\.\d+)?$')
_COMPACT_DATE_RE = re.compile(r'^\d{8}$')


def _from_epoch(value: float) -> datetime:
    if abs(value) >= EPOCH_MILLIS_THRESHOLD:
        value = value / 1000.0
    try:
        return datetime.fromtimestamp(value, tz=timezone.utc).replace(tzinfo=None)
    except (OverflowError, OSError, ValueError):
        raise ValueError(f'Not a valid date: {value!r}') from None


def _to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def normalize_datetime(value):
    """
    Convert a stored or submitted date value to a naive UTC datetime.

    Returns None for empty values and raises ValueError for anything that
    cannot be interpreted as a date.
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        return _to_naive_utc(value)

    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)

    if isinstance(value, bool):
        raise ValueError(f'Not a valid date: {value!r}')

    if isinstance(value, (int, float)):
        return _from_epoch(float(value))

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if _EPOCH_RE.match(text):
            return _from_epoch(float(text))
        if _COMPACT_DATE_RE.match(text):
            try:
                return datetime.strptime(text, '%Y%m%d')
            except ValueError:
                raise ValueError(f'Not a valid date: {value!r}') from None
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        try:
            return _to_naive_utc(datetime.fromisoformat(text))
        except ValueError:
            raise ValueError(f'Not a valid date: {value!r}') from None

    raise ValueError(f'Not a valid date: {value!r}')


def normalize_date(value):
    """Same as normalize_datetime but keeps only the calendar date."""
    result = normalize_datetime(value)
    return result.date() if result is not None else None
