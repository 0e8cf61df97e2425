"""
Recruitment Metrics and Alerts

This module provides:
- Conversion funnel and stage duration calculation
- Pipeline breakdown and recruiter/job performance
- Anomaly alerts
- Dashboard data generation
"""

from .calculator import (
    ConversionFunnel,
    StageDurations,
    CategoryBreakdown,
    PipelineBreakdown,
    PipelineCategory,
    RecruiterStats,
    JobPerformance,
    STATUS_CATEGORIES,
    compute_conversion_funnel,
    compute_stage_durations,
    compute_time_metrics,
    compute_pipeline_breakdown,
    compute_recruiter_performance,
    compute_job_performance,
    compute_job_title_distribution,
    compute_status_distribution,
    compute_weekly_series,
    compute_date_range
)
from .alerts import (
    Alert,
    AlertEngine,
    AlertRule,
    AlertSeverity,
    identify_critical_issues,
    summarize_alerts
)
from .dashboard import DashboardData, DashboardGenerator

__all__ = [
    "ConversionFunnel",
    "StageDurations",
    "CategoryBreakdown",
    "PipelineBreakdown",
    "PipelineCategory",
    "RecruiterStats",
    "JobPerformance",
    "STATUS_CATEGORIES",
    "compute_conversion_funnel",
    "compute_stage_durations",
    "compute_time_metrics",
    "compute_pipeline_breakdown",
    "compute_recruiter_performance",
    "compute_job_performance",
    "compute_job_title_distribution",
    "compute_status_distribution",
    "compute_weekly_series",
    "compute_date_range",
    "Alert",
    "AlertEngine",
    "AlertRule",
    "AlertSeverity",
    "identify_critical_issues",
    "summarize_alerts",
    "DashboardData",
    "DashboardGenerator"
]
