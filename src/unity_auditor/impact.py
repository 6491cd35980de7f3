"""
Impact analysis for type dependencies.

This module traces which types are affected by changing a given type, by
walking the dependency graph's reverse index (dependents) and forward index
(dependencies).
"""

from dataclasses import dataclass
from typing import List, Tuple

from rich.table import Table

from .graph import DependencyGraph


@dataclass
class ImpactResult:
    """Result of impact analysis.

    Represents a type reached from the origin, with information about how
    it's connected.
    """

    type_name: str
    file_path: str
    impact_type: str  # "dependent" or "dependency"
    depth: int  # how many hops away from the origin


class ImpactAnalyzer:
    """Analyze impact of type changes using the dependency graph.

    Provides methods to find upstream impact (types that depend on a type)
    and downstream impact (types that a type depends on).
    """

    def __init__(self, graph: DependencyGraph):
        """Initialize impact analyzer.

        Args:
            graph: Dependency graph to analyze
        """
        self.graph = graph

    def analyze_type_impact(
        self,
        type_name: str,
        direction: str = "upstream",
        max_depth: int = 5
    ) -> List[ImpactResult]:
        """Analyze impact of changing a type.

        Args:
            type_name: Fully qualified or simple type name
            direction: "upstream" (dependents), "downstream" (dependencies), or "both"
            max_depth: Maximum depth to traverse (default: 5)

        Returns:
            List of ImpactResult objects sorted by depth, then type name

        Raises:
            ValueError: If direction is not valid or the type is unknown
        """
        if direction not in ("upstream", "downstream", "both"):
            raise ValueError(
                f"Invalid direction: {direction}. "
                "Must be 'upstream', 'downstream', or 'both'"
            )

        node = self.graph.find_node(type_name)
        if node is None:
            raise ValueError(f"Unknown type: {type_name}")

        results: List[ImpactResult] = []

        if direction in ("upstream", "both"):
            results.extend(self._walk(node.id, max_depth, upstream=True))

        if direction in ("downstream", "both"):
            results.extend(self._walk(node.id, max_depth, upstream=False))

        results.sort(key=lambda r: (r.depth, r.type_name, r.impact_type))

        return results

    def _walk(self, origin: str, max_depth: int, upstream: bool) -> List[ImpactResult]:
        """Breadth-first walk over one index, reporting each type once.

        Args:
            origin: Node id to start from
            max_depth: Maximum depth to traverse
            upstream: Follow dependents when True, dependencies otherwise

        Returns:
            List of ImpactResult objects
        """
        impact_type = "dependent" if upstream else "dependency"
        neighbours = self.graph.get_dependents if upstream else self.graph.get_dependencies

        results: List[ImpactResult] = []
        visited = {origin}
        queue: List[Tuple[str, int]] = [(origin, 0)]

        while queue:
            current, depth = queue.pop(0)
            if depth >= max_depth:
                continue

            for name in neighbours(current):
                if name in visited:
                    continue
                visited.add(name)

                node = self.graph.nodes.get(name)
                results.append(ImpactResult(
                    type_name=name,
                    file_path=node.file_path if node else "",
                    impact_type=impact_type,
                    depth=depth + 1
                ))
                queue.append((name, depth + 1))

        return results

    def format_as_table(self, results: List[ImpactResult]) -> Table:
        """Format impact results as a Rich table for CLI display.

        Args:
            results: List of ImpactResult objects

        Returns:
            Rich Table object ready for display
        """
        table = Table(title="Impact Analysis Results", show_header=True)

        table.add_column("Depth", style="cyan", justify="right")
        table.add_column("Type", style="magenta")
        table.add_column("Name", style="yellow")
        table.add_column("File", style="green")

        for result in results:
            impact_type_colored = (
                f"[red]←[/red] {result.impact_type}"
                if result.impact_type == "dependent"
                else f"[green]→[/green] {result.impact_type}"
            )

            table.add_row(
                str(result.depth),
                impact_type_colored,
                result.type_name,
                result.file_path or "(external)"
            )

        return table
