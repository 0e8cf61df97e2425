"""
Recruitment Pipeline Analytics

Computes hiring-funnel metrics, pipeline breakdowns, recruiter performance
and anomaly alerts from a static recruitment dataset snapshot.
"""

__version__ = "0.1.0"
