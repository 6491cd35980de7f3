"""
Insight generation.

Turns an AnalysisResult into ranked, evidence-backed observations. Each
category generator is independent and tolerates missing sub-results.
"""

import logging
from enum import Enum
from typing import Callable, List, assert_never

from unity_auditor.config import DEFAULT_CONFIG, AnalysisConfig
from unity_auditor.generators import GeneratorResult, run_generator
from unity_auditor.models import (
    AnalysisResult,
    ArchitectureIssueType,
    ArchitecturePattern,
    Insight,
    InsightSeverity,
    InsightType,
    PerformanceImpact,
    ProjectType,
    StructureIssueType,
)
from unity_auditor.scripts.models import CodeIssueSeverity

logger = logging.getLogger(__name__)


class InsightCategory(str, Enum):
    """Insight categories, in the order their generators run."""

    STRUCTURE = "structure"
    CODE_QUALITY = "code_quality"
    PERFORMANCE = "performance"
    ARCHITECTURE = "architecture"
    DEPENDENCIES = "dependencies"
    MAINTAINABILITY = "maintainability"
    TESTING = "testing"


def error_insight(message: str) -> Insight:
    return Insight(
        type=InsightType.PROJECT_STRUCTURE,
        title="Analysis Error",
        description=f"Failed to generate complete insights: {message}",
        severity=InsightSeverity.CRITICAL,
        confidence=1.0,
    )


def rank_insights(insights: List[Insight]) -> List[Insight]:
    """Severity descending, then confidence descending; ties keep input order."""
    return sorted(insights, key=lambda i: (-i.severity, -i.confidence))


class InsightGenerator:
    """Generates insights from a project analysis result.

    Each InsightCategory maps to one ``<category>_insights`` method. They
    run one by one through ``run_generator``; a failing category contributes
    one "Analysis Error" insight and nothing else.
    """

    def __init__(self, config: AnalysisConfig = DEFAULT_CONFIG):
        self.config = config

    def generate(self, result: AnalysisResult) -> List[Insight]:
        """Generate the ranked insight list.

        Args:
            result: Analysis result; any sub-result may be None

        Returns:
            Insights sorted by severity then confidence, highest first
        """
        outcomes: List[GeneratorResult[Insight]] = [
            run_generator(category.value, self.category_generator(category), result)
            for category in InsightCategory
        ]

        insights: List[Insight] = []
        for outcome in outcomes:
            if outcome.success:
                insights.extend(outcome.items)
            else:
                insights.append(error_insight(outcome.error))

        logger.debug(f"Generated {len(insights)} insights")
        return rank_insights(insights)

    def category_generator(
        self, category: InsightCategory
    ) -> Callable[[AnalysisResult], List[Insight]]:
        match category:
            case InsightCategory.STRUCTURE:
                return self.structure_insights
            case InsightCategory.CODE_QUALITY:
                return self.code_quality_insights
            case InsightCategory.PERFORMANCE:
                return self.performance_insights
            case InsightCategory.ARCHITECTURE:
                return self.architecture_insights
            case InsightCategory.DEPENDENCIES:
                return self.dependencies_insights
            case InsightCategory.MAINTAINABILITY:
                return self.maintainability_insights
            case InsightCategory.TESTING:
                return self.testing_insights
            case _:
                assert_never(category)

    def structure_insights(self, result: AnalysisResult) -> List[Insight]:
        structure = result.structure
        if structure is None:
            return []

        insights = []
        if not structure.follows_standard_structure:
            insights.append(
                Insight(
                    type=InsightType.PROJECT_STRUCTURE,
                    title="Non-standard Project Structure",
                    description="Your project doesn't follow Unity's recommended folder structure",
                    severity=InsightSeverity.MEDIUM,
                    confidence=0.9,
                    context="Project Organization",
                    evidence=("Missing standard folders like Scripts, Prefabs, or Materials",),
                )
            )

        deep = structure.issues_of_type(StructureIssueType.DEEP_NESTING)
        if deep:
            insights.append(
                Insight(
                    type=InsightType.PROJECT_STRUCTURE,
                    title="Deep Folder Nesting Detected",
                    description=f"Found {len(deep)} folders with excessive nesting depth",
                    severity=InsightSeverity.LOW,
                    confidence=0.8,
                    context="Folder Structure",
                    evidence=tuple(i.path for i in deep[:3]),
                )
            )

        large = structure.issues_of_type(StructureIssueType.LARGE_FILE)
        if large:
            insights.append(
                Insight(
                    type=InsightType.PROJECT_STRUCTURE,
                    title="Large Files Detected",
                    description=(
                        f"Found {len(large)} unusually large files that may impact performance"
                    ),
                    severity=InsightSeverity.MEDIUM,
                    confidence=0.7,
                    context="File Management",
                    evidence=tuple(f"{i.path} - {i.description}" for i in large[:3]),
                )
            )

        if structure.project_type != ProjectType.GENERAL:
            project_type = structure.project_type.value
            insights.append(
                Insight(
                    type=InsightType.PROJECT_STRUCTURE,
                    title=f"Project Type Identified: {project_type}",
                    description=f"Your project appears to be a {project_type} project",
                    severity=InsightSeverity.INFO,
                    confidence=0.8,
                    context="Project Classification",
                    data={"ProjectType": project_type},
                )
            )
        return insights

    def code_quality_insights(self, result: AnalysisResult) -> List[Insight]:
        scripts = result.scripts
        if scripts is None:
            return []

        insights = []
        critical = [i for i in scripts.issues if i.severity == CodeIssueSeverity.CRITICAL]
        if critical:
            insights.append(
                Insight(
                    type=InsightType.CODE_QUALITY,
                    title="Critical Code Issues Found",
                    description=(
                        f"Detected {len(critical)} critical code issues "
                        "that need immediate attention"
                    ),
                    severity=InsightSeverity.CRITICAL,
                    confidence=0.95,
                    context="Code Quality",
                    evidence=tuple(f"{i.description} in {i.file_path}" for i in critical[:5]),
                )
            )

        major = [i for i in scripts.issues if i.severity == CodeIssueSeverity.MAJOR]
        if len(major) > self.config.major_issue_limit:
            counts = {}
            for issue in major:
                counts[issue.type.value] = counts.get(issue.type.value, 0) + 1
            insights.append(
                Insight(
                    type=InsightType.CODE_QUALITY,
                    title="High Number of Code Issues",
                    description=f"Found {len(major)} major code issues that should be addressed",
                    severity=InsightSeverity.HIGH,
                    confidence=0.9,
                    context="Code Quality",
                    evidence=tuple(f"{t}: {n} issues" for t, n in list(counts.items())[:5]),
                )
            )

        metrics = scripts.metrics
        if metrics is not None:
            avg = metrics.average_cyclomatic_complexity
            if avg > self.config.complexity_threshold:
                insights.append(
                    Insight(
                        type=InsightType.CODE_QUALITY,
                        title="High Code Complexity",
                        description=(
                            f"Average cyclomatic complexity is {avg:.1f}, "
                            "which is above recommended levels"
                        ),
                        severity=InsightSeverity.MEDIUM,
                        confidence=0.85,
                        context="Code Complexity",
                        evidence=(
                            "Recommended complexity is below "
                            f"{self.config.complexity_threshold} per method",
                        ),
                        data={"AverageComplexity": avg},
                    )
                )

            # An empty tree has nothing to document.
            low_comments = metrics.comment_ratio < self.config.comment_ratio_min
            if metrics.total_lines > 0 and low_comments:
                insights.append(
                    Insight(
                        type=InsightType.CODE_QUALITY,
                        title="Low Documentation Coverage",
                        description=(
                            f"Only {metrics.comment_ratio * 100:.1f}% of your code contains comments"
                        ),
                        severity=InsightSeverity.LOW,
                        confidence=0.7,
                        context="Documentation",
                        evidence=("Recommended comment ratio is at least 15-20%",),
                        data={"CommentRatio": metrics.comment_ratio},
                    )
                )

        strong_confidence = self.config.strong_pattern_confidence
        strong = [p for p in scripts.patterns if p.confidence > strong_confidence]
        if strong:
            insights.append(
                Insight(
                    type=InsightType.CODE_QUALITY,
                    title="Design Patterns Detected",
                    description=(
                        f"Found {len(strong)} well-implemented design patterns in your code"
                    ),
                    severity=InsightSeverity.INFO,
                    confidence=0.8,
                    context="Code Architecture",
                    evidence=tuple(
                        f"{p.name} pattern in {', '.join(p.involved_classes)}" for p in strong
                    ),
                )
            )
        return insights

    def performance_insights(self, result: AnalysisResult) -> List[Insight]:
        performance = result.performance
        if performance is None:
            return []

        insights = []
        critical = [i for i in performance.issues if i.impact == PerformanceImpact.CRITICAL]
        if critical:
            insights.append(
                Insight(
                    type=InsightType.PERFORMANCE,
                    title="Critical Performance Issues",
                    description=f"Detected {len(critical)} critical performance bottlenecks",
                    severity=InsightSeverity.CRITICAL,
                    confidence=0.9,
                    context="Performance Optimization",
                    evidence=tuple(f"{i.description} at {i.location}" for i in critical[:3]),
                )
            )

        metrics = performance.metrics
        if metrics is None:
            return insights

        if metrics.texture_memory_mb > self.config.texture_memory_limit_mb:
            insights.append(
                Insight(
                    type=InsightType.PERFORMANCE,
                    title="High Texture Memory Usage",
                    description=f"Textures are using {metrics.texture_memory_mb}MB of memory",
                    severity=InsightSeverity.MEDIUM,
                    confidence=0.8,
                    context="Memory Usage",
                    evidence=("Consider texture compression and resolution optimization",),
                    data={"TextureMemoryMB": metrics.texture_memory_mb},
                )
            )
        if metrics.audio_memory_mb > self.config.audio_memory_limit_mb:
            insights.append(
                Insight(
                    type=InsightType.PERFORMANCE,
                    title="High Audio Memory Usage",
                    description=f"Audio clips are using {metrics.audio_memory_mb}MB of memory",
                    severity=InsightSeverity.LOW,
                    confidence=0.7,
                    context="Memory Usage",
                    evidence=("Consider audio compression and streaming for large files",),
                    data={"AudioMemoryMB": metrics.audio_memory_mb},
                )
            )
        return insights

    def architecture_insights(self, result: AnalysisResult) -> List[Insight]:
        architecture = result.architecture
        if architecture is None:
            return []

        insights = []
        if architecture.pattern != ArchitecturePattern.NONE:
            pattern = architecture.pattern.value
            insights.append(
                Insight(
                    type=InsightType.ARCHITECTURE,
                    title=f"Architecture Pattern: {pattern}",
                    description=f"Your project follows the {pattern} architectural pattern",
                    severity=InsightSeverity.INFO,
                    confidence=0.8,
                    context="Project Architecture",
                    data={"ArchitecturePattern": pattern},
                )
            )

        god_classes = [i for i in architecture.issues if i.type == ArchitectureIssueType.GOD_CLASS]
        if god_classes:
            insights.append(
                Insight(
                    type=InsightType.ARCHITECTURE,
                    title="God Classes Detected",
                    description=(
                        f"Found {len(god_classes)} classes with too many responsibilities"
                    ),
                    severity=InsightSeverity.HIGH,
                    confidence=0.85,
                    context="Code Architecture",
                    evidence=tuple(i.description for i in god_classes[:3]),
                )
            )

        coupled = [i for i in architecture.issues if i.type == ArchitectureIssueType.TIGHT_COUPLING]
        if coupled:
            insights.append(
                Insight(
                    type=InsightType.ARCHITECTURE,
                    title="Tight Coupling Detected",
                    description=(
                        f"Found {len(coupled)} instances of tight coupling between components"
                    ),
                    severity=InsightSeverity.MEDIUM,
                    confidence=0.8,
                    context="Component Coupling",
                    evidence=tuple(i.description for i in coupled[:3]),
                )
            )

        metrics = architecture.metrics
        if metrics is not None:
            if metrics.average_coupling > self.config.coupling_limit:
                insights.append(
                    Insight(
                        type=InsightType.ARCHITECTURE,
                        title="High Component Coupling",
                        description=(
                            f"Average coupling is {metrics.average_coupling:.1f}, "
                            "which may indicate overly dependent components"
                        ),
                        severity=InsightSeverity.MEDIUM,
                        confidence=0.7,
                        context="Architecture Metrics",
                        evidence=("Lower coupling leads to more maintainable code",),
                        data={"AverageCoupling": metrics.average_coupling},
                    )
                )
            if metrics.average_cohesion < self.config.cohesion_min:
                insights.append(
                    Insight(
                        type=InsightType.ARCHITECTURE,
                        title="Low Component Cohesion",
                        description=(
                            f"Average cohesion is {metrics.average_cohesion:.1f}, "
                            "suggesting components may lack focus"
                        ),
                        severity=InsightSeverity.MEDIUM,
                        confidence=0.7,
                        context="Architecture Metrics",
                        evidence=("Higher cohesion indicates well-focused components",),
                        data={"AverageCohesion": metrics.average_cohesion},
                    )
                )
        return insights

    def dependencies_insights(self, result: AnalysisResult) -> List[Insight]:
        graph = result.scripts.dependency_graph if result.scripts else None
        if graph is None:
            return []

        insights = []
        cycles = graph.get_circular_dependencies()
        if cycles:
            insights.append(
                Insight(
                    type=InsightType.DEPENDENCIES,
                    title="Circular Dependencies Found",
                    description=f"Detected {len(cycles)} circular dependency chains",
                    severity=InsightSeverity.HIGH,
                    confidence=0.95,
                    context="Dependency Management",
                    evidence=tuple(cycles[:3]),
                )
            )

        if graph.total_nodes > 0:
            density = graph.total_edges / graph.total_nodes
            if density > self.config.dependency_density_limit:
                insights.append(
                    Insight(
                        type=InsightType.DEPENDENCIES,
                        title="High Dependency Density",
                        description=f"Classes have an average of {density:.1f} dependencies each",
                        severity=InsightSeverity.MEDIUM,
                        confidence=0.8,
                        context="Dependency Analysis",
                        evidence=(
                            "High dependency counts can make code harder to maintain and test",
                        ),
                        data={"AverageDependencies": density},
                    )
                )
        return insights

    def maintainability_insights(self, result: AnalysisResult) -> List[Insight]:
        metrics = result.metrics
        if metrics is None:
            return []

        insights = []
        if metrics.maintainability < self.config.maintainability_min:
            insights.append(
                Insight(
                    type=InsightType.MAINTAINABILITY,
                    title="Low Maintainability Score",
                    description=(
                        f"Project maintainability score is {metrics.maintainability * 100:.0f}%, "
                        "indicating potential maintenance challenges"
                    ),
                    severity=InsightSeverity.HIGH,
                    confidence=0.8,
                    context="Code Maintainability",
                    evidence=(
                        "Score is calculated from complexity, technical debt, "
                        "and code quality metrics",
                    ),
                    data={"MaintainabilityScore": metrics.maintainability},
                )
            )

        if metrics.technical_debt > self.config.technical_debt_limit:
            insights.append(
                Insight(
                    type=InsightType.MAINTAINABILITY,
                    title="High Technical Debt",
                    description=(
                        f"Technical debt level is {metrics.technical_debt * 100:.0f}%, "
                        "suggesting accumulated code issues"
                    ),
                    severity=InsightSeverity.HIGH,
                    confidence=0.85,
                    context="Technical Debt",
                    evidence=("High technical debt increases development time and bug risk",),
                    data={"TechnicalDebt": metrics.technical_debt},
                )
            )

        scripts = result.scripts
        if scripts is not None and scripts.total_classes > 0:
            per_class = scripts.total_methods / scripts.total_classes
            if per_class > self.config.methods_per_class_limit:
                insights.append(
                    Insight(
                        type=InsightType.MAINTAINABILITY,
                        title="Large Class Sizes",
                        description=(
                            f"Classes average {per_class:.1f} methods each, "
                            "which may indicate oversized classes"
                        ),
                        severity=InsightSeverity.MEDIUM,
                        confidence=0.7,
                        context="Class Size Analysis",
                        evidence=("Smaller, focused classes are generally easier to maintain",),
                        data={"MethodsPerClass": per_class},
                    )
                )
        return insights

    def testing_insights(self, result: AnalysisResult) -> List[Insight]:
        """Test infrastructure and the test-to-script file ratio.

        A tree without any .cs file says nothing about testing, so no
        insight is produced for it.
        """
        structure = result.structure
        if structure is None:
            return []

        scripts = [f for f in structure.files if f.extension.lower() == ".cs"]
        if not scripts:
            return []

        test_files = [f for f in scripts if "test" in f.name.lower()]
        has_test_folders = any("test" in f.name.lower() for f in structure.folders)

        if not has_test_folders and not test_files:
            return [
                Insight(
                    type=InsightType.TESTING,
                    title="No Test Infrastructure Found",
                    description=(
                        "Your project doesn't appear to have any unit tests "
                        "or testing infrastructure"
                    ),
                    severity=InsightSeverity.MEDIUM,
                    confidence=0.8,
                    context="Quality Assurance",
                    evidence=("No test folders or test files detected in the project structure",),
                )
            ]

        script_count = len(scripts) - len(test_files)
        if script_count == 0:
            return []

        ratio = len(test_files) / script_count
        evidence = (f"{len(test_files)} test files for {script_count} script files",)
        if ratio < self.config.low_test_ratio:
            return [
                Insight(
                    type=InsightType.TESTING,
                    title="Low Test Coverage",
                    description=(
                        f"Only {ratio * 100:.0f}% of your scripts have corresponding tests"
                    ),
                    severity=InsightSeverity.MEDIUM,
                    confidence=0.7,
                    context="Test Coverage",
                    evidence=evidence,
                    data={"TestCoverageRatio": ratio},
                )
            ]
        if ratio > self.config.good_test_ratio:
            return [
                Insight(
                    type=InsightType.TESTING,
                    title="Good Test Coverage",
                    description=(
                        f"Your project has {ratio * 100:.0f}% test coverage, which is excellent"
                    ),
                    severity=InsightSeverity.INFO,
                    confidence=0.8,
                    context="Test Coverage",
                    evidence=evidence,
                    data={"TestCoverageRatio": ratio},
                )
            ]
        return []
