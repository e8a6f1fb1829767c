"""Flask CLI commands for organization charts.

Provides ``flask chart show`` and ``flask chart reset-layout`` commands.
"""

import click
from flask.cli import AppGroup

from ..services.chart_service import get_organization_chart, reset_layout
from ..services.school_store import SchoolNotFoundError

chart_cli = AppGroup("chart", help="Organization chart commands.")

POSITION_LABELS = {
    "principal": "Principal",
    "vice_principal": "Vice Principal",
    "department_head": "Department Head",
    "staff": "Staff",
}


def format_forest(forest, indent: int = 0) -> list[str]:
    """Render a forest as indented outline lines."""
    lines = []
    for node in forest:
        label = POSITION_LABELS[node.staff.position.value]
        lines.append(
            f"{'  ' * indent}- {node.staff.name} [{label}] "
            f"{node.staff.department} / {node.staff.contact}"
        )
        lines.extend(format_forest(node.children, indent + 1))
    return lines


@chart_cli.command("show")
@click.option("--school", "school_id", required=True, help="School id.")
@click.option("--reconcile", is_flag=True, default=False,
              help="Align a saved layout with the current roster before printing.")
def show_command(school_id: str, reconcile: bool) -> None:
    """Print a school's chart as an outline."""
    try:
        chart = get_organization_chart(school_id, reconcile=reconcile)
    except SchoolNotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    click.echo(f"Source: {chart.source}")
    if not chart.forest:
        click.echo("No staff to chart.")
    for line in format_forest(chart.forest):
        click.echo(line)

    if chart.orphans:
        click.echo("")
        click.echo("Not placed (no matching department head):")
        for record in chart.orphans:
            click.echo(f"  - {record.name} ({record.department})")


@chart_cli.command("reset-layout")
@click.option("--school", "school_id", required=True, help="School id.")
def reset_layout_command(school_id: str) -> None:
    """Discard a saved layout so the chart is derived from the roster again."""
    try:
        reset_layout(school_id)
    except SchoolNotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)
    click.echo(f"Layout reset for school {school_id}.")
