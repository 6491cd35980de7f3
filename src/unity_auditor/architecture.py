"""
Architecture derivation from extracted class facts.

Components, categories, layers, the overall architectural pattern, the
inheritance connections between project classes, and the issues and metrics
derived from them.
"""

import logging
from typing import List, Optional, Sequence, Tuple, assert_never

from unity_auditor.config import DEFAULT_CONFIG, AnalysisConfig
from unity_auditor.graph import DependencyGraph
from unity_auditor.models import (
    ArchitectureAnalysis,
    ArchitectureIssue,
    ArchitectureIssueSeverity,
    ArchitectureIssueType,
    ArchitectureMetrics,
    ArchitecturePattern,
    ComponentCategory,
    ComponentInfo,
    ConnectionType,
    LayerInfo,
    SystemConnection,
)
from unity_auditor.scripts.models import ClassDefinition, ScriptAnalysisResult

logger = logging.getLogger(__name__)


def categorize(cls: ClassDefinition) -> ComponentCategory:
    """Category of a class; MonoBehaviours are always gameplay components."""
    if cls.is_monobehaviour:
        return ComponentCategory.GAMEPLAY
    if "UI" in cls.name or "Canvas" in cls.name:
        return ComponentCategory.UI
    if "Manager" in cls.name or "Service" in cls.name:
        return ComponentCategory.CORE
    if "Util" in cls.name or "Helper" in cls.name:
        return ComponentCategory.UTILITY
    return ComponentCategory.CORE


def layer_for(category: ComponentCategory) -> Tuple[str, int]:
    """Layer name and level (1 is the outermost) for a component category."""
    match category:
        case ComponentCategory.UI:
            return "Presentation", 1
        case ComponentCategory.GAMEPLAY:
            return "Gameplay", 2
        case ComponentCategory.CORE:
            return "Core", 3
        case ComponentCategory.UTILITY:
            return "Utility", 4
        case _:
            assert_never(category)


class ArchitectureAnalyzer:
    """Derives an ArchitectureAnalysis from a script stage result."""

    def __init__(self, config: AnalysisConfig = DEFAULT_CONFIG):
        self.config = config

    def analyze(self, scripts: ScriptAnalysisResult) -> ArchitectureAnalysis:
        """Derive components, pattern, connections, layers, issues and metrics.

        Args:
            scripts: Script stage result

        Returns:
            ArchitectureAnalysis; empty when there are no classes
        """
        analysis = ArchitectureAnalysis()
        classes = scripts.classes
        if not classes:
            return analysis

        analysis.components = [
            ComponentInfo(
                name=cls.name,
                kind=cls.kind.value,
                category=categorize(cls),
                file_path=cls.file_path,
                method_count=len(cls.methods),
                dependencies=cls.base_classes + cls.interfaces,
            )
            for cls in classes
        ]
        analysis.pattern = self.detect_pattern(classes)
        analysis.connections = self.build_connections(classes)
        analysis.layers = self.identify_layers(analysis.components)
        analysis.issues = self.detect_issues(analysis.components, scripts.dependency_graph)
        analysis.metrics = self.calculate_metrics(analysis)

        logger.info(
            f"Architecture: {len(analysis.components)} components, "
            f"pattern {analysis.pattern.value}, {len(analysis.issues)} issues"
        )
        return analysis

    def detect_pattern(self, classes: Sequence[ClassDefinition]) -> ArchitecturePattern:
        has_controllers = any("Controller" in c.name for c in classes)
        has_views = any("View" in c.name or c.is_monobehaviour for c in classes)
        has_models = any("Model" in c.name or c.is_scriptable_object for c in classes)
        if has_controllers and has_views and has_models:
            return ArchitecturePattern.MVC

        has_managers = any("Manager" in c.name for c in classes)
        has_services = any("Service" in c.name for c in classes)
        if has_managers and has_services:
            return ArchitecturePattern.SERVICE_ORIENTED

        monobehaviours = sum(1 for c in classes if c.is_monobehaviour)
        if monobehaviours > len(classes) * self.config.component_based_ratio:
            return ArchitecturePattern.COMPONENT_BASED

        return ArchitecturePattern.NONE

    def build_connections(self, classes: Sequence[ClassDefinition]) -> List[SystemConnection]:
        """Inheritance and interface links to other project classes."""
        known = {c.name for c in classes}
        connections = []
        for cls in classes:
            for target in cls.base_classes + cls.interfaces:
                if target in known:
                    connections.append(
                        SystemConnection(
                            source=cls.name, target=target, type=ConnectionType.INHERITANCE
                        )
                    )
        return connections

    def identify_layers(self, components: Sequence[ComponentInfo]) -> List[LayerInfo]:
        """One layer per category that has components, ordered by level."""
        layers = {}
        for component in components:
            name, level = layer_for(component.category)
            layer = layers.setdefault(level, LayerInfo(name=name, level=level))
            layer.components.append(component.name)
        return [layers[level] for level in sorted(layers)]

    def detect_issues(
        self, components: Sequence[ComponentInfo], graph: Optional[DependencyGraph]
    ) -> List[ArchitectureIssue]:
        """God classes, then mutually dependent class pairs."""
        issues = []
        for component in components:
            if component.method_count > self.config.god_class_methods:
                issues.append(
                    ArchitectureIssue(
                        type=ArchitectureIssueType.GOD_CLASS,
                        description=f"Class {component.name} has too many methods and responsibilities",
                        severity=ArchitectureIssueSeverity.MAJOR,
                        affected_components=[component.name],
                    )
                )

        if graph is not None:
            for source, target in self.mutual_dependencies(graph):
                issues.append(
                    ArchitectureIssue(
                        type=ArchitectureIssueType.TIGHT_COUPLING,
                        description=f"{source} and {target} depend on each other",
                        severity=ArchitectureIssueSeverity.MINOR,
                        affected_components=[source, target],
                    )
                )
        return issues

    def mutual_dependencies(self, graph: DependencyGraph) -> List[Tuple[str, str]]:
        """Pairs of project classes with edges in both directions, each once."""
        pairs = []
        adjacency = graph.adjacency()
        for source in sorted(adjacency):
            for target in adjacency[source]:
                if source < target and source in adjacency.get(target, ()):
                    pairs.append((source, target))
        return pairs

    def calculate_metrics(self, analysis: ArchitectureAnalysis) -> ArchitectureMetrics:
        components = len(analysis.components)
        return ArchitectureMetrics(
            total_components=components,
            total_connections=len(analysis.connections),
            average_coupling=len(analysis.connections) / components if components else 0.0,
            average_cohesion=self.config.cohesion_placeholder,
            instability=self.config.instability_placeholder,
            abstractness=self.config.abstractness_placeholder,
        )
