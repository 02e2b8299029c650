from __future__ import annotations
from typing import Dict, List, Literal, NamedTuple, Optional, Tuple
from dataclasses import dataclass, field
from datetime import date as _date
from datetime import datetime

import pandas as pd
from pydantic import BaseModel, Field, model_validator

RejectReason = Literal["blank", "shape", "date", "usage"]
Period = Literal["day", "night"]
SelectionStatus = Literal["no_data", "no_common_dates", "ok"]


@dataclass(frozen=True)
class Reading:
    timestamp: datetime  # local wall time, tz-naive
    usage: float  # kWh, non-negative


@dataclass(frozen=True)
class RowRejected:
    reason: RejectReason


class DateKey(NamedTuple):
    """Calendar day identifier; orders like the date it names."""

    year: int
    month: int
    day: int

    @classmethod
    def from_datetime(cls, ts: datetime | _date) -> "DateKey":
        return cls(ts.year, ts.month, ts.day)

    @classmethod
    def parse(cls, s: str) -> "DateKey":
        """Parse 'YYYY-MM-DD'."""
        d = _date.fromisoformat(s)
        return cls(d.year, d.month, d.day)

    def to_date(self) -> _date:
        return _date(self.year, self.month, self.day)

    def isoformat(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    def label(self) -> str:
        """Display form used by the date picker, DD/MM/YYYY."""
        return f"{self.day:02d}/{self.month:02d}/{self.year:04d}"


@dataclass(frozen=True)
class DayBucket:
    """
    One calendar day laid out as 24 hourly slots (index = hour of day).

    A slot is None when that hour had no reading. `duplicate_hours` lists
    hours that received more than one reading; the later one was kept.
    """

    date: DateKey
    slots: Tuple[Optional[Reading], ...]
    duplicate_hours: Tuple[int, ...] = ()

    @property
    def present_hours(self) -> List[int]:
        return [h for h, r in enumerate(self.slots) if r is not None]

    @property
    def missing_hours(self) -> List[int]:
        return [h for h, r in enumerate(self.slots) if r is None]

    def values(self) -> List[float]:
        return [r.usage for r in self.slots if r is not None]

    def total(self) -> float:
        return float(sum(self.values()))

    def average(self) -> Optional[float]:
        vals = self.values()
        return (sum(vals) / len(vals)) if vals else None


@dataclass(frozen=True)
class ParseReport:
    lines_total: int
    header_lines: int
    accepted: int
    rejected: Dict[str, int] = field(default_factory=dict)

    @property
    def rejected_total(self) -> int:
        return int(sum(self.rejected.values()))


# Series
class SeriesFrame(pd.DataFrame):
    """
    Time-ordered readings for one dataset.

    Expected:
      - DatetimeIndex named 't_start', tz-naive, ascending (duplicates allowed)
      - Columns: ['kwh']
    """

    @property
    def _constructor(self):
        return SeriesFrame

    @property
    def kwh(self) -> pd.Series:
        return self["kwh"]


@dataclass(frozen=True, eq=False)
class Dataset:
    name: str
    series: SeriesFrame
    by_day: Dict[DateKey, DayBucket]
    color: str
    report: Optional[ParseReport] = None


## Aggregate records
class _AveragedRecord(BaseModel):
    """Average is present exactly when at least one sample contributed."""

    average: Optional[float] = None
    sample_count: int = Field(default=0, ge=0)
    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_average_gated_by_samples(self):
        if (self.sample_count == 0) != (self.average is None):
            raise ValueError("average must be None exactly when sample_count is 0")
        return self


class HourlyRecord(_AveragedRecord):
    hour: int = Field(ge=0, le=23)


class PeriodRecord(_AveragedRecord):
    period: Period
    label: str


class WeekdayRecord(_AveragedRecord):
    weekday: int = Field(ge=0, le=6)  # 0 = Sunday
    label: str


class DailyRecord(_AveragedRecord):
    date: _date


class YearlyCalendar(BaseModel):
    year: int
    days: List[DailyRecord]
    model_config = {"frozen": True}


class HourSlot(BaseModel):
    hour: int = Field(ge=0, le=23)
    usage: Optional[float] = None
    model_config = {"frozen": True}


class ComparisonSeries(BaseModel):
    name: str
    color: str
    date: _date
    slots: List[HourSlot]
    model_config = {"frozen": True}
