from . import (
    canon,
    exceptions,
    types,
    config,
    dates,
    rows,
    validate,
    ingest,
    bucket,
    aggregate,
    coordinator,
    pipeline,
)

__all__ = [
    "canon",
    "exceptions",
    "types",
    "config",
    "dates",
    "rows",
    "validate",
    "ingest",
    "bucket",
    "aggregate",
    "coordinator",
    "pipeline",
]
