from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from . import canon


@dataclass
class PipelineConfig:
    # Rolling window feeding the hourly/day-night/weekday views
    rolling_days: int = canon.DEFAULT_ROLLING_DAYS

    # Colours handed out to datasets in insertion order, cycling
    palette: List[str] = field(default_factory=lambda: list(canon.PALETTE))

    # Appended by pipeline.read_local unless the name already ends with it
    source_extension: str = ".csv"


def default_config() -> PipelineConfig:
    return PipelineConfig()
