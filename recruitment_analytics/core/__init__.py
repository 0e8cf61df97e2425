"""
Core Recruitment Entities

The validated, immutable input snapshot and the loader that builds it.
"""

from .entities import (
    ApplicationRecord,
    StatusAggregate,
    WeeklyPoint,
    JobAggregate,
    Dataset,
    LifecycleField
)
from .loader import load_dataset, parse_dataset

__all__ = [
    "ApplicationRecord",
    "StatusAggregate",
    "WeeklyPoint",
    "JobAggregate",
    "Dataset",
    "LifecycleField",
    "load_dataset",
    "parse_dataset"
]
