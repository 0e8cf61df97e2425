"""
Dashboard Data Generation

Assembles every derived structure for one dataset snapshot into a single
serializable object for the presentation layer.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
import logging

from ..config.settings import Settings, get_settings
from ..core.entities import Dataset
from .alerts import Alert, AlertEngine, summarize_alerts
from .calculator import (
    ConversionFunnel,
    PipelineBreakdown,
    PipelineCategory,
    StageDurations,
    compute_conversion_funnel,
    compute_date_range,
    compute_job_performance,
    compute_job_title_distribution,
    compute_pipeline_breakdown,
    compute_recruiter_performance,
    compute_status_distribution,
    compute_time_metrics,
    compute_weekly_series
)

logger = logging.getLogger("recruitment-analytics.dashboard")

PIPELINE_LABELS = {
    PipelineCategory.EARLY_STAGE: ("Early Stage", "New & Contact Attempts"),
    PipelineCategory.ACTIVE_ENGAGEMENT: ("Active Engagement", "Communication & Interviews"),
    PipelineCategory.ADVANCED_STAGE: ("Advanced Stage", "Documentation Process"),
    PipelineCategory.CLOSED: ("Closed", "Disqualified or Rejected")
}


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass
class DashboardData:
    """Complete dashboard data snapshot."""
    generated_at: datetime = field(default_factory=datetime.now)

    # Header
    date_range: tuple = (None, None)

    # Key metrics
    funnel: ConversionFunnel = field(default_factory=ConversionFunnel)
    time_metrics: StageDurations = field(default_factory=StageDurations)

    # Pipeline and tables
    pipeline: PipelineBreakdown = field(default_factory=PipelineBreakdown)
    recruiters: dict = field(default_factory=dict)
    jobs: list = field(default_factory=list)

    # Chart series
    job_titles: dict = field(default_factory=dict)
    statuses: list = field(default_factory=list)
    weekly: list = field(default_factory=list)

    # Alerts, in display order; empty means all clear
    alerts: list = field(default_factory=list)

    def to_dict(self) -> dict:
        """Plain JSON-compatible representation."""
        start, end = self.date_range
        return {
            "generated_at": self.generated_at.isoformat(),
            "date_range": {"start": _iso(start), "end": _iso(end)},
            "funnel": self.funnel.to_dict(),
            "time_metrics": self.time_metrics.to_dict(),
            "pipeline": self.pipeline.to_dict(),
            "recruiters": {
                owner: stats.to_dict() for owner, stats in self.recruiters.items()
            },
            "jobs": [job.to_dict() for job in self.jobs],
            "job_titles": dict(self.job_titles),
            "statuses": [
                {"status": status, "applicants": count} for status, count in self.statuses
            ],
            "weekly": [
                {"week": _iso(week), "applicants": count} for week, count in self.weekly
            ],
            "alerts": [alert.to_dict() for alert in self.alerts],
            "alert_summary": summarize_alerts(self.alerts)
        }


class DashboardGenerator:
    """Generates dashboard data from a dataset snapshot."""

    def __init__(self, settings: Settings = None):
        self._settings = settings or get_settings()
        self._alert_engine = AlertEngine(self._settings.alerts)

    def generate_dashboard(self, dataset: Dataset) -> DashboardData:
        """Generate complete dashboard data."""
        funnel = compute_conversion_funnel(dataset.applications)
        pipeline = compute_pipeline_breakdown(dataset.status_aggregates)

        alerts: list[Alert] = self._alert_engine.evaluate(
            funnel=funnel,
            pipeline=pipeline,
            weekly=dataset.weekly,
            jobs=dataset.jobs
        )

        dashboard = DashboardData(
            date_range=compute_date_range(dataset.applications),
            funnel=funnel,
            time_metrics=compute_time_metrics(dataset.applications),
            pipeline=pipeline,
            recruiters=compute_recruiter_performance(dataset.applications),
            jobs=compute_job_performance(dataset.jobs),
            job_titles=compute_job_title_distribution(dataset.applications),
            statuses=compute_status_distribution(dataset.status_aggregates),
            weekly=compute_weekly_series(dataset.weekly),
            alerts=alerts
        )

        logger.info(
            "Generated dashboard: %d applications, %d alert(s)",
            funnel.applications, len(alerts)
        )
        return dashboard

    def format_summary(self, dashboard: DashboardData) -> str:
        """Format dashboard as text summary."""
        funnel = dashboard.funnel
        start, end = dashboard.date_range

        lines = [
            f"{self._settings.app_name} ({dashboard.generated_at.strftime('%Y-%m-%d %H:%M')})"
        ]
        if start and end:
            lines.append(
                f"Data Period: {start.strftime('%b %d, %Y')} - {end.strftime('%b %d, %Y')}"
            )

        lines.extend(["", "Alerts:"])
        if not dashboard.alerts:
            lines.append("  ✅ All Clear: No critical issues identified in the pipeline.")
        for alert in dashboard.alerts:
            lines.append(f"  {alert.icon} [{alert.severity.value}] {alert.title}: {alert.message}")

        lines.extend([
            "",
            "Key Metrics:",
            f"  Total applications: {funnel.applications}",
            f"  Viewed rate: {funnel.viewed_rate * 100:.1f}%",
            f"  Interview rate: {funnel.interview_rate * 100:.1f}%",
            f"  Offer rate: {funnel.offer_rate * 100:.1f}%",
            f"  Hire rate: {funnel.hire_rate * 100:.1f}%",
            f"  Avg time to offer: {dashboard.time_metrics.app_to_offer:.1f} days",
            "",
            "Pipeline:"
        ])

        for category, (title, description) in PIPELINE_LABELS.items():
            bucket = dashboard.pipeline.get(category)
            lines.append(
                f"  {title} ({description}): {bucket.count} "
                f"({bucket.percentage:.1f}% of pipeline)"
            )

        if dashboard.recruiters:
            lines.extend(["", "Recruiter Performance:"])
            for owner, stats in dashboard.recruiters.items():
                lines.append(
                    f"  {owner or 'Unassigned'}: {stats.applications} applications, "
                    f"view {stats.view_rate:.1f}%, interview {stats.interview_rate:.1f}%, "
                    f"offer {stats.offer_rate:.1f}%"
                )

        if dashboard.jobs:
            lines.extend(["", "Job Performance:"])
            for job in dashboard.jobs:
                lines.append(
                    f"  {job.job_name} ({job.job_owner or 'Unassigned'}): "
                    f"{job.total_applicants} applicants over {job.days_open:g} days "
                    f"({job.applicants_per_day:.2f}/day)"
                )

        return "\n".join(lines)
