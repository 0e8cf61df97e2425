"""
Shared test utilities for building recruitment datasets.
"""
from itertools import count

from recruitment_analytics.core.entities import (
    ApplicationRecord, StatusAggregate, WeeklyPoint, JobAggregate, Dataset
)

_ids = count(1)


def make_application(
    application_date: str = "2024-01-01",
    job_owner: str = "Alice",
    job_title: str = "Care Assistant",
    **fields
) -> ApplicationRecord:
    """Build an application record; lifecycle fields default to not reached."""
    return ApplicationRecord(
        applicant_id=fields.pop("applicant_id", str(next(_ids))),
        application_date=application_date,
        job_owner=job_owner,
        job_title=job_title,
        **fields
    )


def make_statuses(**counts) -> list:
    """make_statuses(New=3) -> [StatusAggregate(status="New", applicants=3)]"""
    return [StatusAggregate(status=status, applicants=n) for status, n in counts.items()]


def make_weekly(*counts, start_day: int = 1) -> list:
    """Consecutive weekly points starting in January 2024."""
    return [
        WeeklyPoint(week=f"2024-01-{start_day + 7 * i:02d}", applicants=n)
        for i, n in enumerate(counts)
    ]


def make_job(job_name: str = "Care Assistant - Leeds", days_open: float = 30,
             total_applicants: int = 10, job_owner: str = "Alice") -> JobAggregate:
    return JobAggregate(
        job_name=job_name,
        job_owner=job_owner,
        total_applicants=total_applicants,
        days_open=days_open
    )


def make_dataset(applications=(), statuses=(), weekly=(), jobs=()) -> Dataset:
    return Dataset(
        applications=applications,
        status_aggregates=statuses,
        weekly=weekly,
        jobs=jobs
    )


def raw_snapshot() -> dict:
    """A snapshot shaped like the exported recruitment_data.json."""
    return {
        "applicationDetails": [
            {
                "Applicant ID": 101,
                "Job Title": "Care Assistant",
                "Job Owner": "Alice",
                "Application State": "Sent Documents",
                "Application Date": "2024-01-01",
                "Viewed By": "Alice",
                "Viewed Date": "2024-01-02",
                "Interview Date": "2024-01-05",
                "Offer Date": "2024-01-11",
                "Hire Date": ""
            },
            {
                "Applicant ID": 102,
                "Job Title": "Care Assistant",
                "Job Owner": "Alice",
                "Application State": "New",
                "Application Date": "2024-01-03",
                "Viewed By": "",
                "Viewed Date": "",
                "Interview Date": "",
                "Offer Date": "",
                "Hire Date": ""
            },
            {
                "Applicant ID": 103,
                "Job Title": "Night Support Worker",
                "Job Owner": "Bob",
                "Application State": "In Communication",
                "Application Date": "2024-01-08",
                "Viewed By": "Bob",
                "Viewed Date": "2024-01-09T12:00:00Z"
            }
        ],
        "applicantsByStatus": [
            {"Application State": "New", "Applicants": 1},
            {"Application State": "In Communication", "Applicants": 1},
            {"Application State": "Sent Documents", "Applicants": 1}
        ],
        "applicationsOverTime": [
            {"Week of APPLICATION_DATE": "2024-01-08", "CountDistinct of APPLICANT_ID": 1},
            {"Week of APPLICATION_DATE": "2024-01-01", "CountDistinct of APPLICANT_ID": 2}
        ],
        "byTeamJob": [
            {"Job Name": "Care Assistant", "Job Owner": "Alice",
             "Total Applicants": 2, "Days Open": 320},
            {"Job Name": "Night Support Worker", "Job Owner": "Bob",
             "Total Applicants": 1, "Days Open": 10}
        ]
    }
