from datetime import date, datetime, timezone, timedelta

import pytest

from services.dates import normalize_date, normalize_datetime


def test_iso_strings():
    assert normalize_datetime('2024-03-14') == datetime(2024, 3, 14)
    assert normalize_datetime('2024-03-14T09:30:00') == datetime(2024, 3, 14, 9, 30)
    assert normalize_datetime('2024-03-14T09:30:00Z') == datetime(2024, 3, 14, 9, 30)
    assert normalize_datetime('2024-03-14T12:30:00+03:00') == datetime(2024, 3, 14, 9, 30)


def test_epoch_seconds_and_milliseconds():
    expected = datetime(2024, 1, 1)
    assert normalize_datetime(1704067200) == expected
    assert normalize_datetime(1704067200000) == expected
    assert normalize_datetime('1704067200000') == expected
    assert normalize_datetime(1704067200.5) == expected.replace(microsecond=500000)


def test_date_and_datetime_values():
    aware = datetime(2024, 3, 14, 12, 0, tzinfo=timezone(timedelta(hours=3)))
    assert normalize_datetime(aware) == datetime(2024, 3, 14, 9, 0)
    assert normalize_datetime(date(2024, 3, 14)) == datetime(2024, 3, 14)


def test_empty_values():
    assert normalize_datetime(None) is None
    assert normalize_datetime('   ') is None
    assert normalize_date('') is None


@pytest.mark.parametrize('value', [
    'yesterday', '2024-13-40', '20241340', True, [2024, 1, 1],
    10 ** 20, '100000000000000000000', float('inf'), '1e400',
])
def test_invalid_values(value):
    with pytest.raises(ValueError):
        normalize_datetime(value)


def test_normalize_date():
    assert normalize_date('2024-03-14T23:59:59') == date(2024, 3, 14)
    assert normalize_date(1704067200000) == date(2024, 1, 1)


def test_compact_iso_date_is_not_an_epoch():
    assert normalize_datetime('20240115') == datetime(2024, 1, 15)
    assert normalize_date('20240115') == date(2024, 1, 15)
