from __future__ import annotations
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Optional, Tuple

from . import aggregate, coordinator, ingest
from .config import PipelineConfig, default_config
from .coordinator import CoordinatorState
from .exceptions import MVError, SourceFetchError
from .types import (
    Dataset,
    HourlyRecord,
    PeriodRecord,
    SeriesFrame,
    WeekdayRecord,
    YearlyCalendar,
)

logger = logging.getLogger(__name__)

# Fetch collaborator: source name in, raw export text out
Fetch = Callable[[str], str]

STAGES: Tuple[str, ...] = (
    "rolling_window",
    "hourly",
    "day_night",
    "weekday",
    "yearly",
)


@dataclass(frozen=True, eq=False)
class DatasetViews:
    name: str
    color: str
    rolling: SeriesFrame
    hourly: List[HourlyRecord]
    day_night: List[PeriodRecord]
    weekday: List[WeekdayRecord]
    yearly: Optional[YearlyCalendar]


@dataclass(frozen=True)
class SourceFailure:
    name: str
    error: MVError


@dataclass(frozen=True, eq=False)
class LoadResult:
    state: CoordinatorState
    loaded: Tuple[str, ...]
    failures: Tuple[SourceFailure, ...]


def iter_views(
    dataset: Dataset, config: Optional[PipelineConfig] = None
) -> Iterator[Tuple[str, object]]:
    """
    Run the aggregators for one dataset, yielding after each stage.

    Order is fixed (see STAGES). Hourly, day/night and weekday use the
    rolling-window subset; yearly uses the full day map. The caller may do
    other work between stages; nothing here is shared with other datasets.
    """
    cfg = config or default_config()

    window = aggregate.rolling_window(dataset.series, cfg.rolling_days)
    logger.debug(
        "%s: rolling window of %d days holds %d readings",
        dataset.name,
        cfg.rolling_days,
        len(window),
    )
    yield "rolling_window", window

    yield "hourly", aggregate.hourly_average(window)
    yield "day_night", aggregate.day_night_average(window)
    yield "weekday", aggregate.weekday_average(window)

    cal = aggregate.yearly_calendar(dataset.by_day)
    logger.debug("%s: yearly view for %s", dataset.name, cal.year if cal else None)
    yield "yearly", cal


def build_views(
    dataset: Dataset, config: Optional[PipelineConfig] = None
) -> DatasetViews:
    results = dict(iter_views(dataset, config))
    return DatasetViews(
        name=dataset.name,
        color=dataset.color,
        rolling=results["rolling_window"],  # type: ignore[arg-type]
        hourly=results["hourly"],  # type: ignore[arg-type]
        day_night=results["day_night"],  # type: ignore[arg-type]
        weekday=results["weekday"],  # type: ignore[arg-type]
        yearly=results["yearly"],  # type: ignore[arg-type]
    )


def read_local(
    root: str | Path,
    extension: Optional[str] = None,
    *,
    config: Optional[PipelineConfig] = None,
) -> Fetch:
    """
    Fetch collaborator reading '<root>/<name>'.

    The extension (config.source_extension unless given) is appended when the
    name does not already end with it, so 'house.2023' reads 'house.2023.csv'.
    """
    base = Path(root)
    ext = extension
    if ext is None:
        ext = (config or default_config()).source_extension

    def _fetch(name: str) -> str:
        path = base / name
        if path.suffix != ext:
            path = path.with_name(path.name + ext)
        try:
            return path.read_bytes().decode("utf-8-sig", errors="replace")
        except OSError as e:
            raise SourceFetchError(f"Failed to load {path}: {e}") from e

    return _fetch


def load_sources(
    state: CoordinatorState,
    names: Iterable[str],
    fetch: Fetch,
    *,
    config: Optional[PipelineConfig] = None,
) -> LoadResult:
    """
    Load sources one after another into the coordinator state.

    A source that cannot be fetched, parses to nothing, or reuses a name is
    logged and skipped; the rest of the sequence still loads.
    """
    names = list(names)
    loaded: List[str] = []
    failures: List[SourceFailure] = []

    for i, source in enumerate(names, start=1):
        name = ingest.dataset_name(source)
        logger.info("loading source (%d/%d): %s", i, len(names), source)
        try:
            coordinator.ensure_unique_name(state, name)
            text = fetch(source)
            state = coordinator.add_source(state, name, text, config=config)
        except MVError as e:
            logger.warning("skipping source %s: %s", source, e)
            failures.append(SourceFailure(name=source, error=e))
            continue
        loaded.append(name)

    logger.info("loaded %d of %d sources", len(loaded), len(names))
    return LoadResult(state=state, loaded=tuple(loaded), failures=tuple(failures))
