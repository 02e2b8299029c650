from datetime import date, timedelta

import pytest

from meterviews import coordinator

HEADER = [
    "Verbrauchsdaten",
    "Zählpunkt;AT0000000000000000000000000000001",
    "Zeitraum;01.01.2023 - 31.12.2023",
    "Einheit;kWh",
    "Datum;Verbrauch",
]


def _rows_for(day: date, hours=range(24), usage: str = "1,5") -> list[str]:
    return [f"{day:%d.%m.%Y} {h:02d}:00;{usage}" for h in hours]


@pytest.fixture
def day_rows():
    """Factory: export rows for one day, one per listed hour."""
    return _rows_for


@pytest.fixture
def make_export():
    """Factory: wrap data rows in the five-line export preamble."""

    def _make(rows: list[str]) -> str:
        return "\n".join(HEADER + list(rows)) + "\n"

    return _make


@pytest.fixture
def one_day_text(make_export):
    # 01.01.2023 00:00 .. 23:00, 1,5 kWh each
    return make_export(_rows_for(date(2023, 1, 1)))


@pytest.fixture
def make_dataset(make_export):
    """Factory: a Dataset with full 24-hour days on the given dates."""

    def _make(name: str, days, usage: str = "1,5", color: str = "#3b82f6"):
        rows: list[str] = []
        for d in days:
            rows.extend(_rows_for(d, usage=usage))
        return coordinator.build_dataset(name, make_export(rows), color=color)

    return _make


@pytest.fixture
def d1():
    return date(2023, 3, 1)


@pytest.fixture
def days4(d1):
    return [d1 + timedelta(days=i) for i in range(4)]
