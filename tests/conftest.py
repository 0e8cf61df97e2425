"""
Pytest configuration and fixtures for recruitment analytics tests.
"""
import json

import pytest

from recruitment_analytics.config.settings import get_settings

from tests.helpers import raw_snapshot


@pytest.fixture(autouse=True)
def clear_settings_cache(monkeypatch):
    """Isolate each test from ambient configuration."""
    for name in (
        "ALERT_BOTTLENECK_PERCENTAGE",
        "ALERT_VOLUME_DECLINE_RATIO",
        "ALERT_STALE_DAYS_OPEN",
        "RECRUITMENT_DATA_FILE",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def snapshot() -> dict:
    return raw_snapshot()


@pytest.fixture
def snapshot_file(tmp_path, snapshot):
    """The raw snapshot written to a JSON file."""
    path = tmp_path / "recruitment_data.json"
    path.write_text(json.dumps(snapshot), encoding="utf-8")
    return path
