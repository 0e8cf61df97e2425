"""
Recruitment Dataset Entities

The input snapshot exported by the applicant tracking system. Records are
validated once, at the load boundary, and are immutable afterwards.

Entities:
- ApplicationRecord: one application's lifecycle snapshot
- StatusAggregate: applicant count for one pipeline status
- WeeklyPoint: applications received in one week
- JobAggregate: summary of one job posting
- Dataset: the four collections together
"""

from datetime import date, datetime, timezone
from enum import Enum
from typing import Optional, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator


def parse_timestamp(value):
    """Parse an ISO-8601 date or datetime into a naive UTC datetime."""
    if value is None or isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, datetime.min.time())
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    else:
        raise ValueError(f"Expected an ISO date string, got {type(value).__name__}")

    if parsed is not None and parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


class LifecycleField(str, Enum):
    """Timestamps along an application's lifecycle."""
    APPLICATION_DATE = "application_date"
    VIEWED_DATE = "viewed_date"
    INTERVIEW_DATE = "interview_date"
    OFFER_DATE = "offer_date"
    HIRE_DATE = "hire_date"


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class ApplicationRecord(_Record):
    """One application's lifecycle snapshot."""
    applicant_id: str = Field(
        validation_alias=AliasChoices("applicant_id", "Applicant ID", "APPLICANT_ID")
    )
    job_title: Optional[str] = Field(default=None, alias="Job Title")
    job_owner: Optional[str] = Field(default=None, alias="Job Owner")
    application_state: Optional[str] = Field(default=None, alias="Application State")

    application_date: datetime = Field(alias="Application Date")

    # Presence marks the stage as reached, whatever the value
    viewed_by: Optional[str] = Field(default=None, alias="Viewed By")
    viewed_date: Optional[datetime] = Field(default=None, alias="Viewed Date")
    interview_date: Optional[datetime] = Field(default=None, alias="Interview Date")
    offer_date: Optional[datetime] = Field(default=None, alias="Offer Date")
    hire_date: Optional[datetime] = Field(default=None, alias="Hire Date")

    @field_validator("applicant_id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("job_title", "job_owner", "application_state", mode="before")
    @classmethod
    def _normalize_text(cls, value):
        return _blank_to_none(value)

    @field_validator("viewed_by", mode="before")
    @classmethod
    def _normalize_marker(cls, value):
        # Only a missing or empty marker means not viewed
        if value is None or value == "":
            return None
        return value if isinstance(value, str) else str(value)

    @field_validator(
        "application_date", "viewed_date", "interview_date", "offer_date", "hire_date",
        mode="before"
    )
    @classmethod
    def _parse_dates(cls, value):
        return parse_timestamp(value)

    @property
    def is_viewed(self) -> bool:
        return self.viewed_by is not None

    @property
    def is_interviewed(self) -> bool:
        return self.interview_date is not None

    @property
    def is_offered(self) -> bool:
        return self.offer_date is not None

    @property
    def is_hired(self) -> bool:
        return self.hire_date is not None

    def timestamp(self, lifecycle_field: LifecycleField) -> Optional[datetime]:
        """Get the timestamp recorded for a lifecycle field."""
        return getattr(self, LifecycleField(lifecycle_field).value)


class StatusAggregate(_Record):
    """Number of applicants currently in one pipeline status."""
    status: str = Field(alias="Application State")
    applicants: int = Field(default=0, ge=0, alias="Applicants")


class WeeklyPoint(_Record):
    """Distinct applicants in the week starting at `week`."""
    week: datetime = Field(alias="Week of APPLICATION_DATE")
    applicants: int = Field(default=0, ge=0, alias="CountDistinct of APPLICANT_ID")

    @field_validator("week", mode="before")
    @classmethod
    def _parse_week(cls, value):
        return parse_timestamp(value)


class JobAggregate(_Record):
    """Summary of one job posting."""
    job_name: str = Field(alias="Job Name")
    job_owner: Optional[str] = Field(default=None, alias="Job Owner")
    total_applicants: int = Field(default=0, ge=0, alias="Total Applicants")
    days_open: float = Field(default=0, ge=0, alias="Days Open")

    @field_validator("job_owner", mode="before")
    @classmethod
    def _normalize_owner(cls, value):
        return _blank_to_none(value)


class Dataset(_Record):
    """
    Immutable snapshot of the four record collections.

    The weekly series is kept in ascending week order and status labels
    are unique across the status aggregates.
    """
    applications: Tuple[ApplicationRecord, ...] = Field(default=(), alias="applicationDetails")
    status_aggregates: Tuple[StatusAggregate, ...] = Field(default=(), alias="applicantsByStatus")
    weekly: Tuple[WeeklyPoint, ...] = Field(default=(), alias="applicationsOverTime")
    jobs: Tuple[JobAggregate, ...] = Field(default=(), alias="byTeamJob")

    @field_validator("weekly")
    @classmethod
    def _sort_weekly(cls, value):
        return tuple(sorted(value, key=lambda point: point.week))

    @model_validator(mode="after")
    def _check_unique_statuses(self):
        seen = set()
        for aggregate in self.status_aggregates:
            if aggregate.status in seen:
                raise ValueError(f"Status '{aggregate.status}' appears more than once")
            seen.add(aggregate.status)
        return self
