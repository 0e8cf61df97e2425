"""
Dataset Loader

Reads the JSON snapshot exported for the dashboard and validates it into
an immutable Dataset. This is the only place raw field labels such as
"Application Date" are interpreted.
"""

import json
import logging
from pathlib import Path
from typing import Union

from pydantic import ValidationError

from ..exceptions import DatasetLoadError
from .entities import Dataset

logger = logging.getLogger("recruitment-analytics.loader")


def parse_dataset(payload: dict) -> Dataset:
    """Validate an already-decoded snapshot."""
    if not isinstance(payload, dict):
        raise DatasetLoadError(
            f"Dataset snapshot must be a JSON object, got {type(payload).__name__}"
        )

    try:
        dataset = Dataset.model_validate(payload)
    except ValidationError as e:
        logger.error("Dataset snapshot failed validation: %d error(s)", e.error_count())
        raise DatasetLoadError(f"Invalid dataset snapshot: {e}") from e

    logger.info(
        "Loaded %d applications, %d statuses, %d weeks, %d jobs",
        len(dataset.applications),
        len(dataset.status_aggregates),
        len(dataset.weekly),
        len(dataset.jobs)
    )
    return dataset


def load_dataset(path: Union[str, Path]) -> Dataset:
    """Load and validate a snapshot from a JSON file."""
    path = Path(path)
    try:
        with path.open(encoding="utf-8") as f:
            payload = json.load(f)
    except OSError as e:
        logger.error("Could not read dataset file %s: %s", path, e)
        raise DatasetLoadError(f"Could not read dataset file {path}") from e
    except json.JSONDecodeError as e:
        logger.error("Dataset file %s is not valid JSON: %s", path, e)
        raise DatasetLoadError(f"Dataset file {path} is not valid JSON") from e

    return parse_dataset(payload)
