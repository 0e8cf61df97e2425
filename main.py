#!/usr/bin/env python3
"""
Recruitment Dashboard - Text Report

Loads a recruitment data snapshot and prints the dashboard summary:
alerts, key metrics, pipeline breakdown, recruiter and job performance.

Usage:
    python main.py [path/to/recruitment_data.json] [--json]

The path defaults to RECRUITMENT_DATA_FILE, then recruitment_data.json.
"""

import json
from typing import Optional

import typer

from recruitment_analytics.config import configure_logging, get_settings
from recruitment_analytics.core import load_dataset
from recruitment_analytics.exceptions import RecruitmentAnalyticsError
from recruitment_analytics.metrics import DashboardGenerator

DEFAULT_DATA_FILE = "recruitment_data.json"

app = typer.Typer(help="Recruitment dashboard report", add_completion=False)


@app.command()
def report(
    path: Optional[str] = typer.Argument(None, help="Snapshot JSON file"),
    as_json: bool = typer.Option(False, "--json", help="Print the dashboard as JSON"),
):
    """Print the dashboard for a recruitment data snapshot."""
    settings = get_settings()
    configure_logging(settings.log_level)

    path = path or settings.data_file or DEFAULT_DATA_FILE

    try:
        dataset = load_dataset(path)
        generator = DashboardGenerator(settings)
        dashboard = generator.generate_dashboard(dataset)
    except RecruitmentAnalyticsError as e:
        typer.echo(f"Error Loading Dashboard: {e}", err=True)
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps(dashboard.to_dict(), indent=2, ensure_ascii=False))
    else:
        typer.echo(generator.format_summary(dashboard))


if __name__ == "__main__":
    app()
