import calendar
from datetime import date

import pytest

from crew_attendance.common.datetime_utils import is_wednesday, meeting_dates_of, month_key, previous_month


def test_month_key_pads_month():
    assert month_key(2025, 3) == "2025-03"
    assert month_key(2025, 11) == "2025-11"


def test_meeting_dates_march_2025():
    dates = meeting_dates_of(2025, 3)

    assert dates[0] == "2025-03-03"
    assert dates[-1] == "2025-03-31"
    assert len(dates) == 13
    assert "2025-03-05" in dates
    assert "2025-03-06" in dates
    assert "2025-03-04" not in dates


@pytest.mark.parametrize("year,month", [(2024, m) for m in range(1, 13)] + [(2025, 1), (2025, 2)])
def test_meeting_dates_are_exactly_mon_wed_thu_ascending(year, month):
    dates = meeting_dates_of(year, month)
    parsed = [date.fromisoformat(d) for d in dates]

    assert all(d.weekday() in (calendar.MONDAY, calendar.WEDNESDAY, calendar.THURSDAY) for d in parsed)
    assert parsed == sorted(set(parsed))

    expected = [
        date(year, month, day)
        for day in range(1, calendar.monthrange(year, month)[1] + 1)
        if date(year, month, day).weekday() in (calendar.MONDAY, calendar.WEDNESDAY, calendar.THURSDAY)
    ]
    assert parsed == expected


def test_is_wednesday():
    assert is_wednesday("2025-03-05")
    assert not is_wednesday("2025-03-06")


def test_previous_month_rolls_back_january():
    assert previous_month(2025, 1) == (2024, 12)
    assert previous_month(2025, 7) == (2025, 6)
