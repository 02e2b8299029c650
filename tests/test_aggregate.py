"""Aggregators: rolling window, hourly, day/night, weekday and yearly views."""

from datetime import date, datetime

import pytest
from pydantic import ValidationError

import meterviews as mv
from meterviews.aggregate import (
    best_year,
    day_night_average,
    daily_averages,
    day_profile,
    hourly_average,
    rolling_window,
    weekday_average,
    yearly_calendar,
)
from meterviews.ingest import build_series_frame, empty_series_frame
from meterviews.types import DailyRecord, DateKey, HourlyRecord, Reading


def _series(*pairs):
    return build_series_frame(Reading(timestamp=ts, usage=u) for ts, u in pairs)


def test_hourly_average_full_day(one_day_text):
    df, _ = mv.ingest.from_text(one_day_text)
    out = hourly_average(df)
    assert [r.hour for r in out] == list(range(24))
    assert all(r.average == pytest.approx(1.5) for r in out)
    assert all(r.sample_count == 1 for r in out)


def test_hourly_average_empty_hours_have_no_average():
    df = _series((datetime(2023, 1, 1, 3), 1.0), (datetime(2023, 1, 2, 3), 3.0))
    out = hourly_average(df)
    assert out[3].average == pytest.approx(2.0)
    assert out[3].sample_count == 2
    assert out[4].average is None and out[4].sample_count == 0


def test_rolling_window_inclusive_cutoff():
    df = _series(
        (datetime(2022, 12, 31, 23), 9.0),
        (datetime(2023, 1, 1, 0), 1.0),
        (datetime(2023, 1, 11, 0), 2.0),
    )
    out = rolling_window(df, days=10)
    assert list(out["kwh"]) == [1.0, 2.0]


def test_rolling_window_empty_and_negative():
    assert rolling_window(empty_series_frame(), days=5).empty
    with pytest.raises(ValueError):
        rolling_window(empty_series_frame(), days=-1)


def test_rolling_window_wider_than_data_keeps_everything():
    df = _series((datetime(2023, 1, 1, 0), 1.0), (datetime(2023, 3, 1, 0), 2.0))
    assert list(rolling_window(df, days=200000)["kwh"]) == [1.0, 2.0]
    assert list(rolling_window(df, days=59)["kwh"]) == [1.0, 2.0]
    assert list(rolling_window(df, days=58)["kwh"]) == [2.0]


def test_day_night_boundaries():
    df = _series(
        (datetime(2023, 1, 1, 6), 1.0),
        (datetime(2023, 1, 1, 7), 2.0),
        (datetime(2023, 1, 1, 22), 4.0),
        (datetime(2023, 1, 1, 23), 3.0),
    )
    day, night = day_night_average(df)
    assert (day.period, day.label) == ("day", "Day (7-22)")
    assert day.average == pytest.approx(3.0) and day.sample_count == 2
    assert (night.period, night.label) == ("night", "Night (23-6)")
    assert night.average == pytest.approx(2.0) and night.sample_count == 2


def test_day_night_empty_series():
    out = day_night_average(empty_series_frame())
    assert [r.average for r in out] == [None, None]


def test_weekday_sunday_first():
    df = _series(
        (datetime(2023, 1, 1, 12), 2.0),  # Sunday
        (datetime(2023, 1, 8, 12), 4.0),  # Sunday
        (datetime(2023, 1, 2, 12), 1.0),  # Monday
    )
    out = weekday_average(df)
    assert [r.weekday for r in out] == list(range(7))
    assert out[0].label == "Sunday" and out[0].average == pytest.approx(3.0)
    assert out[1].label == "Monday" and out[1].sample_count == 1
    assert out[6].average is None


def test_daily_average_over_present_hours(make_export, day_rows):
    rows = day_rows(date(2023, 1, 1), hours=range(10), usage="1,0") + day_rows(
        date(2023, 1, 1), hours=range(10, 20), usage="3,0"
    )
    df, _ = mv.ingest.from_text(make_export(rows))
    daily = daily_averages(mv.bucket.bucket_by_day(df))
    assert len(daily) == 1
    assert daily[0].date == date(2023, 1, 1)
    assert daily[0].sample_count == 20
    assert daily[0].average == pytest.approx(2.0)


def test_best_year_tie_goes_to_earliest():
    recs = [
        DailyRecord(date=date(2023, 5, 1), average=1.0, sample_count=24),
        DailyRecord(date=date(2022, 5, 1), average=1.0, sample_count=24),
        DailyRecord(date=date(2023, 5, 2), average=1.0, sample_count=24),
        DailyRecord(date=date(2022, 5, 2), average=1.0, sample_count=24),
    ]
    assert best_year(recs) == 2022
    assert best_year(recs[:3]) == 2023
    assert best_year([]) is None


def test_yearly_calendar_defaults_to_best_year(make_dataset):
    ds = make_dataset(
        "house", [date(2022, 12, 31), date(2023, 1, 1), date(2023, 1, 2)]
    )
    cal = yearly_calendar(ds.by_day)
    assert cal is not None and cal.year == 2023
    assert [r.date for r in cal.days] == [date(2023, 1, 1), date(2023, 1, 2)]
    assert all(r.average == pytest.approx(1.5) for r in cal.days)

    explicit = yearly_calendar(ds.by_day, year=2022)
    assert [r.date for r in explicit.days] == [date(2022, 12, 31)]


def test_yearly_calendar_without_days():
    assert yearly_calendar({}) is None


def test_day_profile_marks_missing_hours(make_export, day_rows):
    df, _ = mv.ingest.from_text(
        make_export(day_rows(date(2023, 1, 1), hours=range(21)))
    )
    b = mv.bucket.bucket_by_day(df)[DateKey(2023, 1, 1)]
    prof = day_profile(b)
    assert [s.hour for s in prof] == list(range(24))
    assert prof[0].usage == 1.5
    assert prof[23].usage is None


def test_average_gated_by_sample_count():
    with pytest.raises(ValidationError):
        HourlyRecord(hour=0, average=1.0, sample_count=0)
    with pytest.raises(ValidationError):
        HourlyRecord(hour=0, average=None, sample_count=3)


def test_aggregators_do_not_mutate_input(one_day_text):
    df, _ = mv.ingest.from_text(one_day_text)
    before = df.copy()
    rolling_window(df, days=0)
    hourly_average(df)
    weekday_average(df)
    assert df.equals(before)
