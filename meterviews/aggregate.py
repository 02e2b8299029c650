from __future__ import annotations
from collections import Counter
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np
import pandas as pd

from . import canon, validate
from .types import (
    DailyRecord,
    DateKey,
    DayBucket,
    HourlyRecord,
    HourSlot,
    PeriodRecord,
    SeriesFrame,
    WeekdayRecord,
    YearlyCalendar,
)


def _bincount(
    keys: np.ndarray, values: np.ndarray, n: int
) -> Tuple[np.ndarray, np.ndarray]:
    keys = np.asarray(keys, dtype=np.int64)
    sums = np.bincount(keys, weights=np.asarray(values, dtype=float), minlength=n)
    counts = np.bincount(keys, minlength=n)
    return sums, counts


def _mean(total: float, count: int) -> Optional[float]:
    return float(total / count) if count else None


def rolling_window(
    df: SeriesFrame, days: int = canon.DEFAULT_ROLLING_DAYS
) -> SeriesFrame:
    """
    Readings within `days` of the latest timestamp.

    cutoff = max(t_start) - days; readings at exactly the cutoff are kept.
    On sparse data this is fewer than `days` complete days.
    """
    if days < 0:
        raise ValueError("days must be non-negative")
    validate.assert_series(df)
    if df.empty:
        return df.copy()
    idx = pd.DatetimeIndex(df.index)
    latest = idx.max()
    # a window wider than the data keeps everything
    if days > (latest - idx.min()).days:
        return df.copy()
    cutoff = latest - pd.Timedelta(days=days)
    return df.loc[idx >= cutoff].copy()


def hourly_average(df: SeriesFrame) -> List[HourlyRecord]:
    """Average kWh per hour of day, one record per hour 0..23."""
    idx = pd.DatetimeIndex(df.index)
    sums, counts = _bincount(
        idx.hour.to_numpy(), df[canon.VALUE_COL].to_numpy(), canon.HOURS_PER_DAY
    )
    return [
        HourlyRecord(
            hour=h, average=_mean(sums[h], int(counts[h])), sample_count=int(counts[h])
        )
        for h in range(canon.HOURS_PER_DAY)
    ]


def day_night_average(df: SeriesFrame) -> List[PeriodRecord]:
    """Day (07:00-22:59) then Night (23:00-06:59)."""
    hours = pd.DatetimeIndex(df.index).hour.to_numpy()
    is_day = (hours >= canon.DAY_START_HOUR) & (hours <= canon.DAY_END_HOUR)
    sums, counts = _bincount(np.where(is_day, 0, 1), df[canon.VALUE_COL].to_numpy(), 2)
    night_start = (canon.DAY_END_HOUR + 1) % canon.HOURS_PER_DAY
    night_end = canon.DAY_START_HOUR - 1
    labels = (
        ("day", f"Day ({canon.DAY_START_HOUR}-{canon.DAY_END_HOUR})"),
        ("night", f"Night ({night_start}-{night_end})"),
    )
    return [
        PeriodRecord(
            period=period,  # type: ignore[arg-type]
            label=label,
            average=_mean(sums[i], int(counts[i])),
            sample_count=int(counts[i]),
        )
        for i, (period, label) in enumerate(labels)
    ]


def weekday_average(df: SeriesFrame) -> List[WeekdayRecord]:
    """Average kWh per day of week, 0 = Sunday .. 6 = Saturday."""
    # pandas dayofweek is Mon=0..Sun=6
    dow = (pd.DatetimeIndex(df.index).dayofweek.to_numpy() + 1) % 7
    sums, counts = _bincount(dow, df[canon.VALUE_COL].to_numpy(), 7)
    return [
        WeekdayRecord(
            weekday=w,
            label=canon.WEEKDAY_LABELS[w],
            average=_mean(sums[w], int(counts[w])),
            sample_count=int(counts[w]),
        )
        for w in range(7)
    ]


def daily_averages(by_day: Dict[DateKey, DayBucket]) -> List[DailyRecord]:
    """Mean of the present hourly readings of each bucket, dates ascending."""
    out: List[DailyRecord] = []
    for key in sorted(by_day):
        bucket = by_day[key]
        vals = bucket.values()
        out.append(
            DailyRecord(
                date=key.to_date(),
                average=_mean(sum(vals), len(vals)),
                sample_count=len(vals),
            )
        )
    return out


def best_year(daily: Iterable[DailyRecord]) -> Optional[int]:
    """Year with the most qualifying days; the earliest year wins a tie."""
    counts = Counter(r.date.year for r in daily if r.sample_count > 0)
    if not counts:
        return None
    return min(counts, key=lambda y: (-counts[y], y))


def yearly_calendar(
    by_day: Dict[DateKey, DayBucket], year: Optional[int] = None
) -> Optional[YearlyCalendar]:
    """
    Per-day averages for one calendar year, the heatmap source.

    With year=None the best_year of the full map is used. Returns None when
    there are no qualifying days at all.
    """
    daily = daily_averages(by_day)
    if year is None:
        year = best_year(daily)
        if year is None:
            return None
    return YearlyCalendar(year=year, days=[r for r in daily if r.date.year == year])


def day_profile(bucket: DayBucket) -> List[HourSlot]:
    """The 24 hourly values of one bucket; missing hours have usage None."""
    return [
        HourSlot(hour=h, usage=(r.usage if r is not None else None))
        for h, r in enumerate(bucket.slots)
    ]
