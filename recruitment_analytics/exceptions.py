"""Errors raised for contract violations in the input snapshot."""


class RecruitmentAnalyticsError(ValueError):
    """Base error for recruitment analytics."""


class DatasetLoadError(RecruitmentAnalyticsError):
    """The dataset snapshot could not be read or did not match the expected shape."""


class MalformedRecordError(RecruitmentAnalyticsError):
    """A record holds values that cannot describe a real application lifecycle."""

    def __init__(self, message: str, applicant_id: str = None):
        super().__init__(message)
        self.applicant_id = applicant_id
