from __future__ import annotations
import logging
from dataclasses import dataclass, replace
from datetime import date
from typing import List, Optional, Sequence, Tuple

from . import aggregate, bucket, ingest
from .config import PipelineConfig, default_config
from .exceptions import CoordinatorError, DuplicateNameError, require
from .types import ComparisonSeries, Dataset, DateKey, SelectionStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CoordinatorState:
    """
    The loaded datasets (insertion order) and the date picked for comparison.

    Treated as a value: every operation below returns a new state and leaves
    the one it was given untouched.
    """

    datasets: Tuple[Dataset, ...] = ()
    selected_date: Optional[DateKey] = None

    @property
    def names(self) -> List[str]:
        return [d.name for d in self.datasets]

    def get(self, name: str) -> Optional[Dataset]:
        return next((d for d in self.datasets if d.name == name), None)


def find_common_dates(datasets: Sequence[Dataset]) -> List[DateKey]:
    """Dates with a qualifying bucket in every dataset, ascending."""
    if not datasets:
        return []
    common = set(datasets[0].by_day)
    for ds in datasets[1:]:
        common &= set(ds.by_day)
    return sorted(common)


def reconcile_selection(state: CoordinatorState) -> CoordinatorState:
    """Keep the selected date while it is still common, else take the latest one."""
    common = find_common_dates(state.datasets)
    if state.selected_date is not None and state.selected_date in common:
        return state
    selected = common[-1] if common else None
    if selected != state.selected_date:
        logger.debug(
            "selected date %s -> %s",
            state.selected_date.isoformat() if state.selected_date else None,
            selected.isoformat() if selected else None,
        )
    return replace(state, selected_date=selected)


def selection_status(state: CoordinatorState) -> SelectionStatus:
    if not state.datasets:
        return "no_data"
    if not find_common_dates(state.datasets):
        return "no_common_dates"
    return "ok"


def ensure_unique_name(state: CoordinatorState, name: str) -> None:
    if name in state.names:
        logger.warning("dataset %r already exists", name)
        raise DuplicateNameError(
            f'Dataset "{name}" already exists. Please use a different file.'
        )


def next_color(
    state: CoordinatorState, config: Optional[PipelineConfig] = None
) -> str:
    palette = (config or default_config()).palette
    require(len(palette) > 0, "palette must not be empty", CoordinatorError)
    return palette[len(state.datasets) % len(palette)]


def build_dataset(name: str, text: str, *, color: str) -> Dataset:
    """Parse and bucket one source. Raises EmptyDatasetError if nothing parses."""
    series, report = ingest.from_text(text, name=name)
    by_day = bucket.bucket_by_day(series)
    return Dataset(name=name, series=series, by_day=by_day, color=color, report=report)


def insert(state: CoordinatorState, dataset: Dataset) -> CoordinatorState:
    ensure_unique_name(state, dataset.name)
    logger.info(
        'dataset "%s" added with %d days of data', dataset.name, len(dataset.by_day)
    )
    return reconcile_selection(replace(state, datasets=state.datasets + (dataset,)))


def add_source(
    state: CoordinatorState,
    name: str,
    text: str,
    *,
    config: Optional[PipelineConfig] = None,
) -> CoordinatorState:
    """
    Build a dataset from raw export text and insert it.

    The name is checked before any parsing. On DuplicateNameError or
    EmptyDatasetError the caller keeps its previous state.
    """
    ensure_unique_name(state, name)
    dataset = build_dataset(name, text, color=next_color(state, config))
    return insert(state, dataset)


def remove(state: CoordinatorState, index: int) -> CoordinatorState:
    if not 0 <= index < len(state.datasets):
        raise IndexError(f"No dataset at index {index}.")
    removed = state.datasets[index]
    remaining = state.datasets[:index] + state.datasets[index + 1 :]
    logger.info('removed dataset "%s"', removed.name)
    return reconcile_selection(replace(state, datasets=remaining))


def remove_named(state: CoordinatorState, name: str) -> CoordinatorState:
    names = state.names
    require(name in names, f'No dataset named "{name}".', CoordinatorError)
    return remove(state, names.index(name))


def select_date(
    state: CoordinatorState, day: DateKey | date | str
) -> CoordinatorState:
    if isinstance(day, str):
        key = DateKey.parse(day)
    elif isinstance(day, DateKey):
        key = day
    else:
        key = DateKey.from_datetime(day)
    require(
        key in find_common_dates(state.datasets),
        f"{key.isoformat()} is not a date shared by all datasets.",
        CoordinatorError,
    )
    return replace(state, selected_date=key)


def comparison(state: CoordinatorState) -> List[ComparisonSeries]:
    """Each dataset's 24 hourly values on the selected date, insertion order."""
    sel = state.selected_date
    if sel is None:
        return []
    out: List[ComparisonSeries] = []
    for ds in state.datasets:
        day = ds.by_day.get(sel)
        if day is None:
            continue
        out.append(
            ComparisonSeries(
                name=ds.name,
                color=ds.color,
                date=sel.to_date(),
                slots=aggregate.day_profile(day),
            )
        )
    return out
