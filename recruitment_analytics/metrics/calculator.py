"""
Metrics Calculator

Calculates the recruitment dashboard metrics from a dataset snapshot:
- Conversion funnel (applications → viewed → interviewed → offered → hired)
- Average time between lifecycle stages
- Pipeline breakdown by status category
- Recruiter and job posting performance

Every function is pure: it reads its inputs, never mutates them, and
returns a fully populated result even for empty collections.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from enum import Enum
from typing import Iterable, Optional, Union
import logging
import statistics

from ..core.entities import (
    ApplicationRecord,
    JobAggregate,
    LifecycleField,
    StatusAggregate,
    WeeklyPoint
)
from ..exceptions import MalformedRecordError

logger = logging.getLogger("recruitment-analytics.metrics")

SECONDS_PER_DAY = 24 * 60 * 60


class PipelineCategory(Enum):
    """Coarse buckets for the current application statuses."""
    EARLY_STAGE = "early_stage"
    ACTIVE_ENGAGEMENT = "active_engagement"
    ADVANCED_STAGE = "advanced_stage"
    CLOSED = "closed"


# Each status label belongs to at most one category
STATUS_CATEGORIES: dict[PipelineCategory, frozenset] = {
    PipelineCategory.EARLY_STAGE: frozenset({
        "New",
        "Initial Contact Attempted",
        "2nd Contact Attempted",
        "3rd Contact Attempted"
    }),
    PipelineCategory.ACTIVE_ENGAGEMENT: frozenset({
        "In Communication",
        "Interview Scheduled",
        "Interview Cancelled"
    }),
    PipelineCategory.ADVANCED_STAGE: frozenset({
        "Sent Documents",
        "Documents Signed"
    }),
    PipelineCategory.CLOSED: frozenset({
        "Not Qualified",
        "No Offer Made",
        "Sent Application"
    })
}


def _ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator > 0 else 0.0


@dataclass(frozen=True)
class ConversionFunnel:
    """Counts and rates (fractions of all applications) at each funnel stage."""
    applications: int = 0
    viewed: int = 0
    interviewed: int = 0
    offered: int = 0
    hired: int = 0
    viewed_rate: float = 0.0
    interview_rate: float = 0.0
    offer_rate: float = 0.0
    hire_rate: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class StageDurations:
    """Average days between lifecycle stages."""
    app_to_view: float = 0.0
    view_to_interview: float = 0.0
    interview_to_offer: float = 0.0
    app_to_offer: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class CategoryBreakdown:
    """Applicant count in a pipeline category and its share of the pipeline."""
    count: int = 0
    percentage: float = 0.0


@dataclass(frozen=True)
class PipelineBreakdown:
    """All four pipeline categories plus the categorized grand total."""
    early_stage: CategoryBreakdown = field(default_factory=CategoryBreakdown)
    active_engagement: CategoryBreakdown = field(default_factory=CategoryBreakdown)
    advanced_stage: CategoryBreakdown = field(default_factory=CategoryBreakdown)
    closed: CategoryBreakdown = field(default_factory=CategoryBreakdown)
    total: int = 0

    def get(self, category: PipelineCategory) -> CategoryBreakdown:
        return getattr(self, category.value)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class RecruiterStats:
    """Per-recruiter funnel counts with rates as percentages."""
    applications: int = 0
    viewed: int = 0
    interviewed: int = 0
    offered: int = 0
    view_rate: float = 0.0
    interview_rate: float = 0.0
    offer_rate: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class JobPerformance:
    """One row of the job performance table."""
    job_name: str
    job_owner: Optional[str]
    total_applicants: int
    days_open: float
    applicants_per_day: float

    def to_dict(self) -> dict:
        return asdict(self)


def compute_conversion_funnel(records: Iterable[ApplicationRecord]) -> ConversionFunnel:
    """
    Count applications reaching each funnel stage.

    A stage is reached when its field is present. Rates are fractions of
    the total application count and are 0 when there are no applications.
    """
    records = list(records)
    total = len(records)
    viewed = sum(1 for r in records if r.is_viewed)
    interviewed = sum(1 for r in records if r.is_interviewed)
    offered = sum(1 for r in records if r.is_offered)
    hired = sum(1 for r in records if r.is_hired)

    return ConversionFunnel(
        applications=total,
        viewed=viewed,
        interviewed=interviewed,
        offered=offered,
        hired=hired,
        viewed_rate=_ratio(viewed, total),
        interview_rate=_ratio(interviewed, total),
        offer_rate=_ratio(offered, total),
        hire_rate=_ratio(hired, total)
    )


def compute_stage_durations(
    records: Iterable[ApplicationRecord],
    start_field: Union[LifecycleField, str],
    end_field: Union[LifecycleField, str]
) -> float:
    """
    Average fractional days from `start_field` to `end_field`.

    Records missing either timestamp are left out. Returns 0 when no
    record has both. A record whose end precedes its start is corrupt and
    raises MalformedRecordError.
    """
    start_field = LifecycleField(start_field)
    end_field = LifecycleField(end_field)

    durations = []
    skipped = 0
    for record in records:
        start = record.timestamp(start_field)
        end = record.timestamp(end_field)
        if start is None or end is None:
            skipped += 1
            continue

        days = (end - start).total_seconds() / SECONDS_PER_DAY
        if days < 0:
            raise MalformedRecordError(
                f"Application {record.applicant_id} has {end_field.value} "
                f"before {start_field.value}",
                applicant_id=record.applicant_id
            )
        durations.append(days)

    if skipped:
        logger.debug(
            "Excluded %d record(s) missing %s or %s",
            skipped, start_field.value, end_field.value
        )

    return statistics.fmean(durations) if durations else 0.0


def compute_time_metrics(records: Iterable[ApplicationRecord]) -> StageDurations:
    """Average durations for the four stage pairs shown on the dashboard."""
    records = list(records)
    return StageDurations(
        app_to_view=compute_stage_durations(
            records, LifecycleField.APPLICATION_DATE, LifecycleField.VIEWED_DATE
        ),
        view_to_interview=compute_stage_durations(
            records, LifecycleField.VIEWED_DATE, LifecycleField.INTERVIEW_DATE
        ),
        interview_to_offer=compute_stage_durations(
            records, LifecycleField.INTERVIEW_DATE, LifecycleField.OFFER_DATE
        ),
        app_to_offer=compute_stage_durations(
            records, LifecycleField.APPLICATION_DATE, LifecycleField.OFFER_DATE
        )
    )


def compute_pipeline_breakdown(
    status_aggregates: Iterable[StatusAggregate]
) -> PipelineBreakdown:
    """
    Bucket status counts into the four pipeline categories.

    Statuses outside STATUS_CATEGORIES count toward neither a category
    nor the total used for percentages.
    """
    counts = {category: 0 for category in STATUS_CATEGORIES}
    uncategorized = []

    for aggregate in status_aggregates:
        for category, statuses in STATUS_CATEGORIES.items():
            if aggregate.status in statuses:
                counts[category] += aggregate.applicants
                break
        else:
            uncategorized.append(aggregate.status)

    if uncategorized:
        logger.debug("Statuses outside every pipeline category: %s", uncategorized)

    total = sum(counts.values())
    buckets = {
        category.value: CategoryBreakdown(
            count=count,
            percentage=_ratio(count, total) * 100
        )
        for category, count in counts.items()
    }

    return PipelineBreakdown(total=total, **buckets)


def compute_recruiter_performance(
    records: Iterable[ApplicationRecord]
) -> dict[Optional[str], RecruiterStats]:
    """Group applications by job owner and derive per-recruiter rates."""
    stats: dict[Optional[str], RecruiterStats] = {}

    for record in records:
        owner = record.job_owner
        if owner not in stats:
            stats[owner] = RecruiterStats()

        entry = stats[owner]
        entry.applications += 1
        if record.is_viewed:
            entry.viewed += 1
        if record.is_interviewed:
            entry.interviewed += 1
        if record.is_offered:
            entry.offered += 1

    # Every group holds at least one application
    for entry in stats.values():
        entry.view_rate = entry.viewed / entry.applications * 100
        entry.interview_rate = entry.interviewed / entry.applications * 100
        entry.offer_rate = entry.offered / entry.applications * 100

    return stats


def compute_job_performance(jobs: Iterable[JobAggregate]) -> list[JobPerformance]:
    """Rows for the job performance table, in posting order."""
    return [
        JobPerformance(
            job_name=job.job_name,
            job_owner=job.job_owner,
            total_applicants=job.total_applicants,
            days_open=job.days_open,
            applicants_per_day=_ratio(job.total_applicants, job.days_open)
        )
        for job in jobs
    ]


def compute_job_title_distribution(records: Iterable[ApplicationRecord]) -> dict[Optional[str], int]:
    """Application count per job title, in order of first appearance."""
    counts: dict[Optional[str], int] = {}
    for record in records:
        counts[record.job_title] = counts.get(record.job_title, 0) + 1
    return counts


def compute_status_distribution(
    status_aggregates: Iterable[StatusAggregate]
) -> list[tuple[str, int]]:
    """(status, applicants) pairs, largest first."""
    return sorted(
        ((a.status, a.applicants) for a in status_aggregates),
        key=lambda pair: pair[1],
        reverse=True
    )


def compute_weekly_series(points: Iterable[WeeklyPoint]) -> list[tuple[datetime, int]]:
    """(week, applicants) pairs in ascending week order."""
    return sorted(
        ((p.week, p.applicants) for p in points),
        key=lambda pair: pair[0]
    )


def compute_date_range(
    records: Iterable[ApplicationRecord]
) -> tuple[Optional[datetime], Optional[datetime]]:
    """Earliest and latest application date."""
    dates = [r.application_date for r in records]
    if not dates:
        return None, None
    return min(dates), max(dates)
