"""
Metrics aggregation.

Pure functions of already-computed results: nothing here touches the file
system.
"""

import logging
from typing import Optional

from unity_auditor.config import DEFAULT_CONFIG, AnalysisConfig
from unity_auditor.graph import DependencyGraph
from unity_auditor.models import (
    AnalysisResult,
    ArchitectureIssueSeverity,
    FileType,
    ProjectMetrics,
)
from unity_auditor.scripts.models import CodeIssueSeverity, CodeMetrics, ScriptAnalysisResult

logger = logging.getLogger(__name__)

CODE_MAJOR_WEIGHT = 0.3
CODE_CRITICAL_WEIGHT = 0.5
ARCHITECTURE_MAJOR_WEIGHT = 0.4
ARCHITECTURE_CRITICAL_WEIGHT = 0.6


class MetricsCalculator:
    """Computes code, graph and project level metrics."""

    def __init__(self, config: AnalysisConfig = DEFAULT_CONFIG):
        self.config = config

    def code_metrics(self, scripts: ScriptAnalysisResult) -> CodeMetrics:
        """Aggregate per-file and per-class facts into CodeMetrics.

        Args:
            scripts: Script stage result (metrics field is ignored)

        Returns:
            CodeMetrics with totals, complexity and ratios
        """
        methods = scripts.methods
        complexities = [m.cyclomatic_complexity for m in methods]
        total_lines = sum(f.line_count for f in scripts.files)
        comment_lines = sum(f.comment_line_count for f in scripts.files)

        return CodeMetrics(
            total_files=len(scripts.files),
            total_classes=len(scripts.classes),
            total_interfaces=len(scripts.interfaces),
            total_methods=len(methods),
            total_lines_of_code=scripts.total_lines_of_code,
            total_lines=total_lines,
            comment_lines=comment_lines,
            average_cyclomatic_complexity=(
                sum(complexities) / len(complexities) if complexities else 0.0
            ),
            max_cyclomatic_complexity=max(complexities, default=0),
            comment_ratio=comment_lines / total_lines if total_lines else 0.0,
            methods_per_class=len(methods) / len(scripts.classes) if scripts.classes else 0.0,
            metrics_by_type={
                "MonoBehaviour": sum(1 for c in scripts.classes if c.is_monobehaviour),
                "ScriptableObject": sum(1 for c in scripts.classes if c.is_scriptable_object),
                "Interface": len(scripts.interfaces),
            },
        )

    def graph_coupling(self, graph: Optional[DependencyGraph]) -> float:
        """Average number of outgoing edges per node."""
        if graph is None or graph.total_nodes == 0:
            return 0.0
        return graph.total_edges / graph.total_nodes

    def cohesion(self) -> float:
        # Placeholder until an intra-class cohesion metric exists.
        return self.config.cohesion_placeholder

    def technical_debt(self, result: AnalysisResult) -> float:
        """Weighted issue score averaged over the factors that are present.

        Returns:
            Debt in [0, 1]; 0.0 when neither code nor architecture results exist
        """
        factors = []
        if result.scripts is not None:
            major = sum(1 for i in result.scripts.issues if i.severity == CodeIssueSeverity.MAJOR)
            critical = sum(
                1 for i in result.scripts.issues if i.severity == CodeIssueSeverity.CRITICAL
            )
            factors.append(major * CODE_MAJOR_WEIGHT + critical * CODE_CRITICAL_WEIGHT)

        if result.architecture is not None:
            issues = result.architecture.issues
            major = sum(1 for i in issues if i.severity == ArchitectureIssueSeverity.MAJOR)
            critical = sum(1 for i in issues if i.severity == ArchitectureIssueSeverity.CRITICAL)
            factors.append(
                major * ARCHITECTURE_MAJOR_WEIGHT + critical * ARCHITECTURE_CRITICAL_WEIGHT
            )

        if not factors:
            return 0.0
        return min(sum(factors) / len(factors), 1.0)

    def maintainability(self, average_complexity: float, technical_debt: float) -> float:
        score = 1.0 - min(average_complexity / 20.0, 0.4) - min(technical_debt, 0.3)
        return max(0.0, min(score, 1.0))

    def project_metrics(self, result: AnalysisResult) -> ProjectMetrics:
        """Aggregate every available sub-result into ProjectMetrics.

        Args:
            result: Pipeline result; any sub-result may be None

        Returns:
            ProjectMetrics
        """
        metrics = ProjectMetrics()

        if result.structure is not None:
            files = result.structure.files
            metrics.total_files = len(files)
            metrics.total_folders = len(result.structure.folders)
            metrics.total_size_bytes = result.structure.total_size_bytes
            metrics.scene_files = sum(1 for f in files if f.file_type == FileType.SCENE)
            metrics.script_files = sum(1 for f in files if f.file_type == FileType.SCRIPT)

        if result.scripts is not None:
            scripts = result.scripts
            code = scripts.metrics or self.code_metrics(scripts)
            if result.structure is None:
                metrics.script_files = len(scripts.files)
            metrics.total_classes = code.total_classes
            metrics.total_lines_of_code = code.total_lines_of_code
            metrics.code_complexity = code.average_cyclomatic_complexity
            metrics.max_complexity = code.max_cyclomatic_complexity
            metrics.coupling = self.graph_coupling(scripts.dependency_graph)
            metrics.cohesion = self.cohesion()

        if result.assets is not None:
            metrics.asset_files = result.assets.total_assets

        metrics.technical_debt = self.technical_debt(result)
        metrics.maintainability = self.maintainability(
            metrics.code_complexity, metrics.technical_debt
        )
        logger.debug(f"Project metrics: {metrics}")
        return metrics
