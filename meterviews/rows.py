from __future__ import annotations
import math
import re
from typing import Optional, Union

import pandas as pd

from . import canon
from .dates import parse_european_date
from .types import Reading, RowRejected

ParsedRow = Union[Reading, RowRejected]

# Leading decimal number, the part a browser parseFloat would consume
_NUMBER_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

# Timestamps a nanosecond DatetimeIndex can hold, at minute resolution
_MIN_TS = pd.Timestamp.min.ceil("min").to_pydatetime()
_MAX_TS = pd.Timestamp.max.floor("min").to_pydatetime()


def parse_usage(field: str) -> Optional[float]:
    """
    Decode a decimal-comma usage field.

    The first ',' is the decimal separator; anything from a second ',' on is
    discarded, so "1,234,5" reads as 1.234. Trailing non-numeric text after
    the number (a unit, stray quotes) is ignored.
    """
    s = field.replace(canon.DECIMAL_SEP, ".", 1)
    s = s.split(canon.DECIMAL_SEP, 1)[0]
    m = _NUMBER_PREFIX.match(s)
    if m is None:
        return None
    value = float(m.group(1))
    if not math.isfinite(value):
        return None
    return value


def parse_row(line: str) -> ParsedRow:
    """Turn one export line into a Reading, or say why it was skipped."""
    if not line.strip():
        return RowRejected("blank")

    fields = line.split(canon.FIELD_SEP)
    if len(fields) < 2:
        return RowRejected("shape")

    ts = parse_european_date(fields[0])
    if ts is None or not _MIN_TS <= ts <= _MAX_TS:
        return RowRejected("date")

    usage = parse_usage(fields[1])
    if usage is None or usage < 0:
        return RowRejected("usage")

    return Reading(timestamp=ts, usage=usage)
