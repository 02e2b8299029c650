from __future__ import annotations
import pandas as pd

from . import canon, exceptions


def assert_series(df: pd.DataFrame) -> None:
    if df.index.name != canon.INDEX_NAME:
        raise exceptions.SeriesError(f"Index must be '{canon.INDEX_NAME}'.")
    if not isinstance(df.index, pd.DatetimeIndex):
        raise exceptions.SeriesError("Index must be a DatetimeIndex.")
    if df.index.tz is not None:
        raise exceptions.SeriesError("Index must be tz-naive local time.")
    if canon.VALUE_COL not in df.columns:
        raise exceptions.SeriesError(f"Missing required column '{canon.VALUE_COL}'.")
    if not df.index.is_monotonic_increasing:
        raise exceptions.SeriesError("Index must be sorted ascending.")
    if df[canon.VALUE_COL].isna().any():
        raise exceptions.SeriesError("Missing kWh values detected.")
    if (df[canon.VALUE_COL] < 0).any():
        raise exceptions.SeriesError(
            "Negative kWh values detected; usage should be non-negative."
        )
