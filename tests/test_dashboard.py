"""
Tests for dashboard generation, settings and the report script.
"""
import json
from datetime import datetime

import pytest
from typer.testing import CliRunner

import main
from recruitment_analytics.config import AlertConfig, Settings, get_settings
from recruitment_analytics.core import parse_dataset
from recruitment_analytics.metrics import DashboardGenerator

from tests.helpers import make_dataset


@pytest.fixture
def generator():
    return DashboardGenerator(Settings())


# ============================================================================
# TEST CLASS: Dashboard generation
# ============================================================================

class TestDashboardGenerator:

    def test_generates_every_section(self, generator, snapshot):
        dashboard = generator.generate_dashboard(parse_dataset(snapshot))

        assert dashboard.date_range == (datetime(2024, 1, 1), datetime(2024, 1, 8))
        assert dashboard.funnel.applications == 3
        assert dashboard.funnel.viewed == 2
        assert dashboard.funnel.offered == 1
        assert dashboard.time_metrics.app_to_view == pytest.approx(1.25)
        assert dashboard.time_metrics.app_to_offer == pytest.approx(10.0)
        assert dashboard.pipeline.total == 3
        assert list(dashboard.recruiters) == ["Alice", "Bob"]
        assert dashboard.recruiters["Alice"].view_rate == 50.0
        assert dashboard.job_titles == {"Care Assistant": 2, "Night Support Worker": 1}
        assert [job.job_name for job in dashboard.jobs] == ["Care Assistant", "Night Support Worker"]
        assert [count for _, count in dashboard.weekly] == [2, 1]

    def test_alerts_for_snapshot(self, generator, snapshot):
        dashboard = generator.generate_dashboard(parse_dataset(snapshot))

        assert [a.rule_name for a in dashboard.alerts] == ["zero_hires", "stale_postings"]

    def test_uses_configured_thresholds(self, snapshot):
        settings = Settings(alerts=AlertConfig(stale_days_open=400))

        dashboard = DashboardGenerator(settings).generate_dashboard(parse_dataset(snapshot))

        assert [a.rule_name for a in dashboard.alerts] == ["zero_hires"]

    def test_empty_dataset(self, generator):
        dashboard = generator.generate_dashboard(make_dataset())

        assert dashboard.alerts == []
        assert dashboard.recruiters == {}
        assert dashboard.date_range == (None, None)
        assert dashboard.funnel.hire_rate == 0

    def test_to_dict_is_json_serializable(self, generator, snapshot):
        dashboard = generator.generate_dashboard(parse_dataset(snapshot))

        data = json.loads(json.dumps(dashboard.to_dict()))

        assert data["date_range"] == {
            "start": "2024-01-01T00:00:00",
            "end": "2024-01-08T00:00:00"
        }
        assert data["pipeline"]["advanced_stage"]["count"] == 1
        assert data["recruiters"]["Bob"]["view_rate"] == 100.0
        assert data["statuses"][0] == {"status": "New", "applicants": 1}
        assert data["weekly"][0] == {"week": "2024-01-01T00:00:00", "applicants": 2}
        assert data["alerts"][0]["severity"] == "CRITICAL"
        assert data["alert_summary"]["all_clear"] is False

    def test_summary_text(self, generator, snapshot):
        dashboard = generator.generate_dashboard(parse_dataset(snapshot))

        summary = generator.format_summary(dashboard)

        assert "Data Period: Jan 01, 2024 - Jan 08, 2024" in summary
        assert "Zero Hires from Offers" in summary
        assert "Total applications: 3" in summary
        assert "Viewed rate: 66.7%" in summary
        assert "Advanced Stage (Documentation Process): 1 (33.3% of pipeline)" in summary

    def test_summary_text_all_clear(self, generator):
        summary = generator.format_summary(generator.generate_dashboard(make_dataset()))

        assert "All Clear" in summary


# ============================================================================
# TEST CLASS: Settings
# ============================================================================

class TestSettings:

    def test_default_thresholds(self):
        config = AlertConfig()

        assert config.bottleneck_percentage == 40.0
        assert config.volume_decline_ratio == 0.5
        assert config.stale_days_open == 300

    def test_thresholds_from_environment(self, monkeypatch):
        monkeypatch.setenv("ALERT_BOTTLENECK_PERCENTAGE", "55")
        monkeypatch.setenv("RECRUITMENT_DATA_FILE", "/data/snapshot.json")

        settings = get_settings()

        assert settings.alerts.bottleneck_percentage == 55.0
        assert settings.data_file == "/data/snapshot.json"

    def test_invalid_threshold_is_rejected(self):
        with pytest.raises(ValueError):
            AlertConfig(volume_decline_ratio=1.5)


# ============================================================================
# TEST CLASS: Report script
# ============================================================================

class TestMain:

    @pytest.fixture
    def runner(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "WARNING")
        return CliRunner()

    def test_prints_summary(self, runner, snapshot_file):
        result = runner.invoke(main.app, [str(snapshot_file)])

        assert result.exit_code == 0
        assert "Total applications: 3" in result.stdout
        assert "Stale Job Postings" in result.stdout

    def test_prints_json(self, runner, snapshot_file):
        result = runner.invoke(main.app, [str(snapshot_file), "--json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout[result.stdout.index("{"):])
        assert data["funnel"]["applications"] == 3

    def test_data_file_from_environment(self, runner, snapshot_file, monkeypatch):
        monkeypatch.setenv("RECRUITMENT_DATA_FILE", str(snapshot_file))

        result = runner.invoke(main.app, [])

        assert result.exit_code == 0
        assert "Total applications: 3" in result.stdout

    def test_help_is_not_treated_as_a_path(self, runner):
        result = runner.invoke(main.app, ["--help"])

        assert result.exit_code == 0
        assert "Error Loading Dashboard" not in result.output

    def test_load_failure_exits_non_zero(self, runner, tmp_path):
        result = runner.invoke(main.app, [str(tmp_path / "missing.json")])

        assert result.exit_code == 1
        assert "Error Loading Dashboard" in result.output
