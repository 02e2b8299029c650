from __future__ import annotations
from typing import Final, Tuple

INDEX_NAME: Final[str] = "t_start"
VALUE_COL: Final[str] = "kwh"
REQUIRED_COLS: Final[list[str]] = [VALUE_COL]

# Export layout: a fixed metadata preamble followed by "date;usage;..." rows
HEADER_LINES: Final[int] = 5
FIELD_SEP: Final[str] = ";"
DECIMAL_SEP: Final[str] = ","

HOURS_PER_DAY: Final[int] = 24
# Days with fewer readings than this are dropped (allows for DST-short days)
MIN_HOURS_PER_DAY: Final[int] = 20

# Day period is inclusive on both ends; everything else is night
DAY_START_HOUR: Final[int] = 7
DAY_END_HOUR: Final[int] = 22

# Sunday-first ordinal, 0..6
WEEKDAY_LABELS: Final[Tuple[str, ...]] = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)

DEFAULT_ROLLING_DAYS: Final[int] = 100

PALETTE: Final[Tuple[str, ...]] = (
    "#3b82f6",  # blue
    "#ef4444",  # red
    "#10b981",  # green
    "#f59e0b",  # amber
    "#8b5cf6",  # purple
    "#ec4899",  # pink
    "#6366f1",  # indigo
    "#14b8a6",  # teal
    "#f97316",  # orange
    "#84cc16",  # lime
)
