"""
Alert Engine

Inspects the computed metrics and raw dataset fields for pipeline anomalies.

Rules run in a fixed order and the returned alerts keep that order, which
is also the display order. An empty result means nothing needs attention.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Optional, Sequence
import logging

from ..config.settings import AlertConfig
from ..core.entities import Dataset, JobAggregate, WeeklyPoint
from .calculator import (
    ConversionFunnel,
    PipelineBreakdown,
    PipelineCategory,
    compute_conversion_funnel,
    compute_pipeline_breakdown
)

logger = logging.getLogger("recruitment-analytics.alerts")


class AlertSeverity(Enum):
    """Alert severity levels."""
    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"

    @property
    def rank(self) -> int:
        """Higher is more severe."""
        return {
            AlertSeverity.CRITICAL: 3,
            AlertSeverity.HIGH: 2,
            AlertSeverity.MEDIUM: 1
        }[self]


@dataclass(frozen=True)
class Alert:
    """A pipeline anomaly found in the current snapshot."""
    rule_name: str
    severity: AlertSeverity
    title: str
    message: str
    icon: str

    def to_dict(self) -> dict:
        return {
            "rule_name": self.rule_name,
            "severity": self.severity.value,
            "title": self.title,
            "message": self.message,
            "icon": self.icon
        }


@dataclass(frozen=True)
class AlertContext:
    """Everything the rules look at during one evaluation pass."""
    funnel: ConversionFunnel
    pipeline: PipelineBreakdown
    weekly: Sequence[WeeklyPoint]
    jobs: Sequence[JobAggregate]
    config: AlertConfig


@dataclass(frozen=True)
class AlertRule:
    """Definition of an alert rule."""
    name: str
    title: str
    severity: AlertSeverity
    icon: str

    # Returns the alert message when the rule fires, None otherwise
    check: Callable[[AlertContext], Optional[str]]


def _zero_hires(ctx: AlertContext) -> Optional[str]:
    if ctx.funnel.offered > 0 and ctx.funnel.hired == 0:
        return (
            f"{ctx.funnel.offered} offers have been extended but 0 hires have been "
            f"completed. Immediate action required to identify and resolve "
            f"onboarding bottlenecks."
        )
    return None


def _pipeline_bottleneck(ctx: AlertContext) -> Optional[str]:
    percentage = ctx.pipeline.get(PipelineCategory.ADVANCED_STAGE).percentage
    if percentage > ctx.config.bottleneck_percentage:
        return (
            f"{percentage:.1f}% of applications are stuck in the documentation stage. "
            f"Review document requirements and candidate support processes."
        )
    return None


def _volume_decline(ctx: AlertContext) -> Optional[str]:
    if len(ctx.weekly) < 2:
        return None

    last_week = ctx.weekly[-1].applicants
    prev_week = ctx.weekly[-2].applicants
    if last_week < prev_week * ctx.config.volume_decline_ratio:
        return (
            f"Most recent week shows {last_week} application(s), down from {prev_week}. "
            f"Consider refreshing job postings or expanding sourcing channels."
        )
    return None


def _stale_postings(ctx: AlertContext) -> Optional[str]:
    stale = [job for job in ctx.jobs if job.days_open > ctx.config.stale_days_open]
    if stale:
        return (
            f"{len(stale)} job posting(s) have been open for over "
            f"{ctx.config.stale_days_open:g} days with minimal traction. "
            f"Consider closing or refreshing these positions."
        )
    return None


DEFAULT_RULES = (
    AlertRule(
        name="zero_hires",
        title="Zero Hires from Offers",
        severity=AlertSeverity.CRITICAL,
        icon="🚨",
        check=_zero_hires
    ),
    AlertRule(
        name="pipeline_bottleneck",
        title="Pipeline Bottleneck Detected",
        severity=AlertSeverity.HIGH,
        icon="⚠️",
        check=_pipeline_bottleneck
    ),
    AlertRule(
        name="volume_decline",
        title="Application Volume Decline",
        severity=AlertSeverity.MEDIUM,
        icon="📉",
        check=_volume_decline
    ),
    AlertRule(
        name="stale_postings",
        title="Stale Job Postings",
        severity=AlertSeverity.MEDIUM,
        icon="📋",
        check=_stale_postings
    )
)


class AlertEngine:
    """
    Evaluates the alert rules against one snapshot's metrics.

    The engine holds no state between passes: alerts are recomputed on
    every call and never stored.
    """

    def __init__(self, config: AlertConfig = None, rules: Sequence[AlertRule] = DEFAULT_RULES):
        self._config = config or AlertConfig()
        self._rules = tuple(rules)

    def evaluate(
        self,
        funnel: ConversionFunnel,
        pipeline: PipelineBreakdown,
        weekly: Iterable[WeeklyPoint],
        jobs: Iterable[JobAggregate]
    ) -> list[Alert]:
        """Run every rule in order and return the alerts that fired."""
        ctx = AlertContext(
            funnel=funnel,
            pipeline=pipeline,
            weekly=tuple(weekly),
            jobs=tuple(jobs),
            config=self._config
        )

        alerts = []
        for rule in self._rules:
            message = rule.check(ctx)
            if message is None:
                continue

            logger.info("Alert fired: %s (%s)", rule.name, rule.severity.value)
            alerts.append(Alert(
                rule_name=rule.name,
                severity=rule.severity,
                title=rule.title,
                message=message,
                icon=rule.icon
            ))

        return alerts


def identify_critical_issues(dataset: Dataset, config: AlertConfig = None) -> list[Alert]:
    """Compute the metrics the rules need from a dataset and evaluate them."""
    return AlertEngine(config).evaluate(
        funnel=compute_conversion_funnel(dataset.applications),
        pipeline=compute_pipeline_breakdown(dataset.status_aggregates),
        weekly=dataset.weekly,
        jobs=dataset.jobs
    )


def summarize_alerts(alerts: Iterable[Alert]) -> dict:
    """Counts per severity; `all_clear` is True when nothing fired."""
    alerts = list(alerts)
    highest = max((a.severity for a in alerts), key=lambda s: s.rank, default=None)
    return {
        "total": len(alerts),
        "all_clear": not alerts,
        "by_severity": {
            severity.value: sum(1 for a in alerts if a.severity == severity)
            for severity in AlertSeverity
        },
        "highest_severity": highest.value if highest else None
    }
