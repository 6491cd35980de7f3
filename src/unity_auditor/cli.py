#!/usr/bin/env python3
"""
Command-line interface for Unity Auditor.

Provides commands for analyzing Unity projects and tracing type dependencies.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from .console_styles import (
    StyleGuide,
    create_data_table,
    create_header_panel,
    create_insights_table,
    create_issues_table,
    create_metrics_panel,
    create_recommendations_table,
    create_summary_table,
    format_count,
    format_ratio,
    format_time,
    get_status_icon,
)
from .utils import format_bytes

console = Console()


@click.group()
@click.version_option(version="0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Unity Auditor - Unity project quality analysis tool.

    Scan a Unity project to extract class facts from its C# scripts, build a
    type dependency graph, check the folder layout and assets, and produce
    ranked insights and recommendations.

    Examples:
        unity-auditor analyze /path/to/UnityProject
        unity-auditor scripts /path/to/UnityProject/Assets/Scripts
        unity-auditor structure /path/to/UnityProject
        unity-auditor impact /path/to/UnityProject PlayerController
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )


@cli.command()
@click.argument("path", type=click.Path(exists=True, file_okay=False, dir_okay=True))
@click.option(
    "-w",
    "--workers",
    type=int,
    default=None,
    help="Number of worker processes (default: auto-detect CPU count)",
)
@click.option("--sequential", is_flag=True, help="Extract scripts in a single process")
@click.option(
    "--timeout",
    type=float,
    default=None,
    help="Stop the analysis after this many seconds",
)
@click.option(
    "--complexity-threshold",
    type=int,
    default=None,
    help="Method complexity above which an issue is reported (default: 10)",
)
@click.option(
    "--max-depth",
    type=int,
    default=None,
    help="Folder depth allowed before deep nesting is reported (default: 6)",
)
@click.option("--limit", type=int, default=20, show_default=True, help="Rows per table")
def analyze(
    path: str,
    workers: Optional[int],
    sequential: bool,
    timeout: Optional[float],
    complexity_threshold: Optional[int],
    max_depth: Optional[int],
    limit: int,
) -> None:
    """Run the full analysis pipeline over a Unity project.

    PATH: Unity project root (the folder holding Assets and ProjectSettings)

    Examples:
        unity-auditor analyze ./MyGame
        unity-auditor analyze ./MyGame --sequential --timeout 120
    """
    from .analyzer import ProjectAnalyzer
    from .config import DEFAULT_CONFIG

    config = DEFAULT_CONFIG.with_overrides(
        max_workers=workers,
        parallel=False if sequential else None,
        complexity_threshold=complexity_threshold,
        max_folder_depth=max_depth,
        show_progress=True,
    )
    target_path = Path(path).resolve()
    analyzer = ProjectAnalyzer(config)

    if not analyzer.can_analyze(target_path):
        console.print(
            "[red]Error:[/red] Not a Unity project. "
            "Expected Assets and ProjectSettings folders."
        )
        console.print(f"[dim]Path: {target_path}[/dim]")
        sys.exit(1)

    console.print()
    console.print(
        create_header_panel(
            "Unity Project Analysis",
            f"Project: {target_path.name} | Mode: {'sequential' if sequential else 'parallel'}",
        )
    )
    console.print()

    def on_progress(fraction: float, label: str) -> None:
        console.print(f"[dim]{fraction * 100:>3.0f}%[/dim] [cyan]{label}[/cyan]")

    result = analyzer.analyze_project(target_path, progress_callback=on_progress, timeout=timeout)
    console.print()

    if not result.success:
        console.print(f"[red]Error:[/red] {result.error_message}")
        sys.exit(1)

    table = create_summary_table("Project Metrics")
    if result.structure is not None:
        table.add_row("Project type", result.structure.project_type.value)
        if result.structure.unity_version is not None:
            table.add_row("Unity version", str(result.structure.unity_version))
        table.add_row("Standard structure", get_status_icon(result.structure.follows_standard_structure))
    if result.metrics is not None:
        metrics = result.metrics
        table.add_row("Files", format_count(metrics.total_files))
        table.add_row("Folders", format_count(metrics.total_folders))
        table.add_row("Total size", format_bytes(metrics.total_size_bytes))
        table.add_row("Scenes", format_count(metrics.scene_files))
        table.add_row("Scripts", format_count(metrics.script_files))
        table.add_row("Classes", format_count(metrics.total_classes))
        table.add_row("Lines of code", format_count(metrics.total_lines_of_code))
        table.add_row("Assets", format_count(metrics.asset_files))
        table.add_row("Avg complexity", f"{metrics.code_complexity:.1f}")
        table.add_row("Coupling", f"{metrics.coupling:.2f}")
        table.add_row("Technical debt", format_ratio(metrics.technical_debt))
        table.add_row("Maintainability", format_ratio(metrics.maintainability))
    console.print(table)
    console.print()

    if result.insights:
        console.print(create_insights_table(result.insights, limit))
        console.print()
    if result.recommendations:
        console.print(create_recommendations_table(result.recommendations, limit))
        console.print()

    warnings = result.scripts.warnings if result.scripts else []
    console.print(
        create_metrics_panel(
            "Run",
            {
                "Elapsed": format_time(result.elapsed_time),
                "Insights": format_count(len(result.insights)),
                "Recommendations": format_count(len(result.recommendations)),
                "Script warnings": format_count(len(warnings)),
            },
        )
    )


@cli.command()
@click.argument("path", type=click.Path(exists=True, file_okay=True, dir_okay=True))
@click.option("--sequential", is_flag=True, help="Extract scripts in a single process")
def scripts(path: str, sequential: bool) -> None:
    """Extract classes, patterns and dependency cycles from C# scripts.

    PATH: A C# file or a directory of scripts

    Examples:
        unity-auditor scripts ./MyGame/Assets/Scripts
        unity-auditor scripts Player.cs
    """
    from .config import DEFAULT_CONFIG
    from .scripts.script_analyzer import ScriptAnalyzer

    config = DEFAULT_CONFIG.with_overrides(parallel=False if sequential else None)
    try:
        result = ScriptAnalyzer(config).analyze(path)
    except Exception as e:
        console.print(f"[red]Error during script analysis:[/red] {e}")
        sys.exit(1)

    table = create_data_table(
        "Classes",
        [
            ("Name", "left", "yellow"),
            ("Namespace", "left", "cyan"),
            ("Bases", "left", "magenta"),
            ("Methods", "right", "green"),
            ("Lines", "right", "green"),
            ("Complexity", "right", "green"),
        ],
    )
    for cls in result.classes:
        table.add_row(
            cls.name,
            cls.namespace or "-",
            ", ".join(cls.base_classes + cls.interfaces) or "-",
            format_count(len(cls.methods)),
            format_count(cls.lines_of_code),
            str(cls.complexity),
        )
    console.print(table)

    if result.patterns:
        console.print("\n[bold cyan]Design patterns[/bold cyan]")
        for pattern in result.patterns:
            console.print(f"  • {pattern.name} [dim]({pattern.confidence:.0%}) {pattern.evidence}[/dim]")

    cycles = result.dependency_graph.get_circular_dependencies() if result.dependency_graph else []
    if cycles:
        console.print(f"\n{StyleGuide.warning_icon} [bold]Circular dependencies[/bold]")
        for cycle in cycles:
            console.print(f"  • {cycle}")

    for warning in result.warnings:
        console.print(f"{StyleGuide.warning_icon} [dim]{warning}[/dim]")

    console.print(
        f"\n{StyleGuide.success_icon} Found [yellow]{format_count(result.total_classes)}[/yellow] classes "
        f"and [yellow]{format_count(len(result.interfaces))}[/yellow] interfaces "
        f"in {format_count(len(result.files))} files"
    )


@cli.command()
@click.argument("path", type=click.Path(exists=True, file_okay=False, dir_okay=True))
def structure(path: str) -> None:
    """Check the folder layout, assembly definitions and packages.

    PATH: Unity project root
    """
    from .config import DEFAULT_CONFIG
    from .structure import StructureAnalyzer

    result = StructureAnalyzer(DEFAULT_CONFIG).analyze(path)

    console.print(
        create_header_panel(
            "Project Structure",
            f"Type: {result.project_type.value} | Folders: {format_count(len(result.folders))} "
            f"| Files: {format_count(result.total_files)}",
        )
    )
    if not result.issues:
        console.print(f"{StyleGuide.success_icon} No structure issues found")
        return
    console.print(create_issues_table(result.issues))


@cli.command()
@click.argument("path", type=click.Path(exists=True, file_okay=True, dir_okay=True))
@click.argument("type_name")
@click.option(
    "--direction",
    type=click.Choice(["upstream", "downstream", "both"]),
    default="upstream",
    show_default=True,
    help="upstream: types that depend on TYPE_NAME; downstream: types it depends on",
)
@click.option(
    "--max-depth",
    type=int,
    default=5,
    show_default=True,
    help="Maximum traversal depth",
)
def impact(path: str, type_name: str, direction: str, max_depth: int) -> None:
    """Find the types affected by changing a type.

    PATH: A C# file or a directory of scripts

    TYPE_NAME: Simple or namespace-qualified type name

    Examples:
        unity-auditor impact ./MyGame/Assets PlayerController
        unity-auditor impact ./MyGame/Assets Game.Core.Health --direction both
    """
    from .config import DEFAULT_CONFIG
    from .impact import ImpactAnalyzer
    from .scripts.script_analyzer import ScriptAnalyzer

    try:
        result = ScriptAnalyzer(DEFAULT_CONFIG).analyze(path)
    except Exception as e:
        console.print(f"[red]Error during script analysis:[/red] {e}")
        sys.exit(1)

    console.print()
    console.print(
        create_header_panel(
            "Impact Analysis: Type Dependency",
            f"Target: {type_name} | Direction: {direction.title()} | Depth: {max_depth}",
        )
    )
    console.print()

    try:
        analyzer = ImpactAnalyzer(result.dependency_graph)
        results = analyzer.analyze_type_impact(type_name, direction=direction, max_depth=max_depth)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    if not results:
        console.print("[yellow]No impact found.[/yellow]")
        return

    console.print(analyzer.format_as_table(results))
    console.print(
        f"\n{StyleGuide.success_icon} Found [yellow]{format_count(len(results))}[/yellow] impacted types"
    )


if __name__ == "__main__":
    cli()
