"""Console styling utilities for consistent Rich output formatting.

This module provides reusable table builders, status indicators and
formatting helpers shared by the CLI commands.

Example:
    >>> from unity_auditor.console_styles import create_summary_table, format_count
    >>> table = create_summary_table("Project Metrics")
    >>> table.add_row("Scripts", format_count(150))
    >>> console.print(table)
"""

from datetime import timedelta
from typing import Iterable, Optional, Tuple

from rich.box import ROUNDED
from rich.panel import Panel
from rich.table import Table

from unity_auditor.models import (
    Insight,
    InsightSeverity,
    Recommendation,
    RecommendationPriority,
    StructureIssue,
    StructureIssueSeverity,
)


def get_status_icon(ok: bool) -> str:
    return StyleGuide.success_icon if ok else "[red]✗[/red]"


def format_count(count: int) -> str:
    """Format a count with thousands separator."""
    return f"{count:,}"


def format_time(seconds: float) -> str:
    return f"{seconds:.3f}s"


def format_duration(duration: timedelta) -> str:
    """Format a duration as hours and minutes, e.g. ``2h 30m`` or ``45m``."""
    total_minutes = int(duration.total_seconds() // 60)
    hours, minutes = divmod(total_minutes, 60)
    if hours and minutes:
        return f"{hours}h {minutes}m"
    if hours:
        return f"{hours}h"
    return f"{minutes}m"


def format_ratio(value: float) -> str:
    return f"{value * 100:.0f}%"


def create_summary_table(title: str, header_style: str = "bold cyan") -> Table:
    """Two-column Metric/Value table used for project summaries."""
    table = Table(
        title=title,
        show_header=True,
        header_style=header_style,
        box=ROUNDED,
    )
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right", style="green")
    return table


def create_data_table(title: str, columns: list[Tuple[str, str, str]]) -> Table:
    """Table with one column per ``(name, justify, style)`` tuple."""
    table = Table(title=title, show_header=True, header_style="bold cyan", box=ROUNDED)
    for name, justify, style in columns:
        table.add_column(name, justify=justify, style=style)
    return table


def create_header_panel(
    title: str,
    subtitle: str = "",
    border_style: str = "cyan"
) -> Panel:
    """Fitted panel with a bold title line and an optional subtitle line."""
    content = f"[bold cyan]{title}[/bold cyan]"
    if subtitle:
        content += f"\n{subtitle}"

    return Panel.fit(
        content,
        border_style=border_style,
        padding=(0, 1),
    )


def create_metrics_panel(
    title: str,
    metrics: dict[str, str],
    border_style: str = "green"
) -> Panel:
    """Run summary panel, one bullet per entry.

    Args:
        title: Panel title, shown after a stopwatch glyph
        metrics: Label to preformatted value
        border_style: Rich style for the border
    """
    lines = [f"  • {key}: {value}" for key, value in metrics.items()]
    return Panel(
        "\n".join(lines),
        border_style=border_style,
        padding=(1, 2),
        title=f"[bold white]⏱  {title}[/bold white]",
    )


class StyleGuide:
    """Icons and per-level styles shared by the CLI tables."""

    success_icon = "[green]✓[/green]"
    warning_icon = "[yellow]⚠[/yellow]"

    # Severity ladders, lowest first
    insight_severity = {
        InsightSeverity.INFO: "dim",
        InsightSeverity.LOW: "cyan",
        InsightSeverity.MEDIUM: "yellow",
        InsightSeverity.HIGH: "red",
        InsightSeverity.CRITICAL: "bold red",
    }
    recommendation_priority = {
        RecommendationPriority.LOW: "dim",
        RecommendationPriority.MEDIUM: "yellow",
        RecommendationPriority.HIGH: "red",
        RecommendationPriority.CRITICAL: "bold red",
    }
    structure_severity = {
        StructureIssueSeverity.INFO: "dim",
        StructureIssueSeverity.WARNING: "yellow",
        StructureIssueSeverity.CRITICAL: "bold red",
    }


def apply_style(text: str, style: str) -> str:
    """Wrap text in Rich markup for the given style."""
    return f"[{style}]{text}[/{style}]"


def create_insights_table(insights: Iterable[Insight], limit: Optional[int] = None) -> Table:
    """Table of insights in the order given.

    Args:
        insights: Ranked insights
        limit: Maximum rows to show (None shows all)

    Returns:
        Table: Configured Rich Table
    """
    table = create_data_table(
        "Insights",
        [
            ("Severity", "left", ""),
            ("Type", "left", "magenta"),
            ("Title", "left", "white"),
            ("Description", "left", "dim"),
        ],
    )
    for index, insight in enumerate(insights):
        if limit is not None and index >= limit:
            break
        table.add_row(
            apply_style(insight.severity.name, StyleGuide.insight_severity[insight.severity]),
            insight.type.value,
            insight.title,
            insight.description,
        )
    return table


def create_recommendations_table(
    recommendations: Iterable[Recommendation], limit: Optional[int] = None
) -> Table:
    """Table of recommendations with their expected effort."""
    table = create_data_table(
        "Recommendations",
        [
            ("Priority", "left", ""),
            ("Type", "left", "magenta"),
            ("Title", "left", "white"),
            ("Effort", "right", "green"),
        ],
    )
    for index, recommendation in enumerate(recommendations):
        if limit is not None and index >= limit:
            break
        if recommendation.effort is not None:
            effort = format_duration(recommendation.effort.expected_time)
        elif recommendation.action_steps:
            effort = format_duration(recommendation.total_action_time)
        else:
            effort = "-"
        table.add_row(
            apply_style(
                recommendation.priority.name,
                StyleGuide.recommendation_priority[recommendation.priority],
            ),
            recommendation.type.value,
            recommendation.title,
            effort,
        )
    return table


def create_issues_table(issues: Iterable[StructureIssue]) -> Table:
    table = create_data_table(
        "Structure Issues",
        [
            ("Severity", "left", ""),
            ("Type", "left", "magenta"),
            ("Path", "left", "yellow"),
            ("Description", "left", "white"),
        ],
    )
    for issue in issues:
        table.add_row(
            apply_style(issue.severity.name, StyleGuide.structure_severity[issue.severity]),
            issue.type.value,
            issue.path,
            issue.description,
        )
    return table
