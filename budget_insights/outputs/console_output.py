# budget_insights/outputs/console_output.py

import click

from budget_insights.analytics import budget_progress, goal_progress
from budget_insights.config import amount_formatter
from budget_insights.outputs.base import BaseOutput

_COLORS = {"danger": "red", "warning": "yellow", "ok": "green", "info": "blue"}


class ConsoleOutput(BaseOutput):
    """Print insights, budget progress and goals to the terminal."""

    def __init__(self, config):
        self.config = config
        self.fmt = amount_formatter(config)

    def write(self, report, goals=None):
        start, end = report.window_start, report.window_end
        click.echo(
            f"Budget insights for {report.evaluated_at:%B %Y} "
            f"({start.isoformat()} to {end.isoformat()}, end exclusive)"
        )

        click.echo("\nInsights:")
        if not report.insights:
            click.echo("  Everything looks good! No budget warnings.")
        for insight in report.insights:
            tag = click.style(insight.severity.value, fg=_COLORS[insight.severity.value])
            click.echo(f"  [{tag}] {insight.message}")

        rows = budget_progress(report.evaluations)
        if rows:
            click.echo("\nBudgets:")
            width = max(len(r["category"]) for r in rows)
            for r in rows:
                status = click.style(r["status"], fg=_COLORS[r["status"]])
                click.echo(
                    f"  {r['category']:<{width}}  {self.fmt(r['spent'])} / "
                    f"{self.fmt(r['limit'])}  {r['percentage']:.0f}%  {status}"
                )

        if goals:
            click.echo("\nSavings goals:")
            for g in goal_progress(goals):
                done = " (completed)" if g["completed"] else ""
                click.echo(
                    f"  {g['title']}: {self.fmt(g['current'])} of "
                    f"{self.fmt(g['target'])}, {g['percentage']:.0f}%{done}"
                )

        if report.alerts:
            click.echo(f"\n{len(report.alerts)} budget(s) exceeded.")
