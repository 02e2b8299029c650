from __future__ import annotations
import logging
from collections import Counter
from pathlib import Path
from typing import Iterable, Optional, Tuple

import pandas as pd

from . import canon
from .exceptions import EmptyDatasetError
from .rows import parse_row
from .types import ParseReport, Reading, RowRejected, SeriesFrame

logger = logging.getLogger(__name__)


def build_series_frame(readings: Iterable[Reading]) -> SeriesFrame:
    """Stable-sort readings into a SeriesFrame; equal stamps keep input order."""
    readings = list(readings)
    df = pd.DataFrame(
        {
            canon.INDEX_NAME: pd.DatetimeIndex([r.timestamp for r in readings]),
            canon.VALUE_COL: pd.Series([r.usage for r in readings], dtype=float),
        }
    ).set_index(canon.INDEX_NAME)
    df = df.sort_index(kind="stable")
    return SeriesFrame(df)


def empty_series_frame() -> SeriesFrame:
    idx = pd.DatetimeIndex([], name=canon.INDEX_NAME)
    return SeriesFrame(
        pd.DataFrame({canon.VALUE_COL: pd.Series([], dtype=float)}, index=idx)
    )


def to_readings(df: pd.DataFrame) -> list[Reading]:
    idx = pd.DatetimeIndex(df.index)
    return [
        Reading(timestamp=ts, usage=float(v))
        for ts, v in zip(idx.to_pydatetime(), df[canon.VALUE_COL].to_numpy())
    ]


def from_text(
    text: str, *, name: Optional[str] = None
) -> Tuple[SeriesFrame, ParseReport]:
    """
    Parse a whole meter export into a SeriesFrame.

    - Carriage returns are dropped and the text split on newlines.
    - The first canon.HEADER_LINES lines are skipped by position.
    - Remaining lines go through rows.parse_row; rejects are only counted.

    Raises EmptyDatasetError when no line yields a reading.
    """
    label = name or "<text>"
    lines = text.replace("\r", "").split("\n")
    body = lines[canon.HEADER_LINES :]
    logger.info("%s: %d lines, %d after header", label, len(lines), len(body))

    readings: list[Reading] = []
    rejected: Counter[str] = Counter()
    for line in body:
        row = parse_row(line)
        if isinstance(row, RowRejected):
            rejected[row.reason] += 1
        else:
            readings.append(row)

    report = ParseReport(
        lines_total=len(lines),
        header_lines=len(lines) - len(body),
        accepted=len(readings),
        rejected=dict(rejected),
    )
    logger.info(
        "%s: %d readings accepted, %d rows rejected %s",
        label,
        report.accepted,
        report.rejected_total,
        dict(rejected),
    )

    if not readings:
        logger.warning("%s: no valid data found", label)
        raise EmptyDatasetError(f"No valid data found in {label}.")

    return build_series_frame(readings), report


def from_bytes(
    data: bytes, *, name: Optional[str] = None
) -> Tuple[SeriesFrame, ParseReport]:
    # utf-8-sig drops a leading BOM; bad bytes only spoil their own row
    return from_text(data.decode("utf-8-sig", errors="replace"), name=name)


def from_file(path: str | Path) -> Tuple[SeriesFrame, ParseReport]:
    p = Path(path)
    return from_bytes(p.read_bytes(), name=dataset_name(p))


def dataset_name(path: str | Path) -> str:
    """File name without its final extension."""
    return Path(path).stem
