from __future__ import annotations
import logging
from typing import Dict, List, Optional

import pandas as pd

from . import canon, validate
from .types import DateKey, DayBucket, Reading, SeriesFrame

logger = logging.getLogger(__name__)


def bucket_by_day(df: SeriesFrame) -> Dict[DateKey, DayBucket]:
    """
    Group a series into 24-slot calendar-day buckets.

    - Days are local calendar dates of the (naive) timestamps.
    - A day with fewer than canon.MIN_HOURS_PER_DAY readings is dropped whole.
    - Each reading lands in the slot for its hour; when an hour repeats
      the later reading wins and the hour is listed in duplicate_hours.

    The returned dict is ordered by ascending date.
    """
    validate.assert_series(df)
    if df.empty:
        return {}

    idx = pd.DatetimeIndex(df.index)
    d = pd.DataFrame(
        {
            "ts": idx,
            "hour": idx.hour,
            "kwh": df[canon.VALUE_COL].to_numpy(dtype=float),
            "_date": idx.normalize(),
        }
    )

    out: Dict[DateKey, DayBucket] = {}
    dropped = 0
    for date_val, day_df in d.groupby("_date", sort=True):
        if len(day_df) < canon.MIN_HOURS_PER_DAY:
            dropped += 1
            continue

        day_df = day_df.sort_values("hour", kind="stable")
        slots: List[Optional[Reading]] = [None] * canon.HOURS_PER_DAY
        dupes: set[int] = set()
        for ts, hour, kwh in zip(day_df["ts"], day_df["hour"], day_df["kwh"]):
            h = int(hour)
            if slots[h] is not None:
                dupes.add(h)
            slots[h] = Reading(timestamp=ts.to_pydatetime(), usage=float(kwh))

        key = DateKey.from_datetime(pd.Timestamp(date_val))
        if dupes:
            logger.debug(
                "%s: duplicate readings for hours %s", key.isoformat(), sorted(dupes)
            )
        out[key] = DayBucket(
            date=key, slots=tuple(slots), duplicate_hours=tuple(sorted(dupes))
        )

    logger.debug("bucketed %d days, dropped %d incomplete days", len(out), dropped)
    return out
