"""
Recommendation generation.

Turns an AnalysisResult into actionable, effort-estimated remediation items,
ranked by priority.
"""

import logging
from datetime import timedelta
from enum import Enum
from typing import Callable, List, assert_never

from unity_auditor.config import DEFAULT_CONFIG, AnalysisConfig
from unity_auditor.generators import GeneratorResult, run_generator
from unity_auditor.models import (
    ActionStep,
    AnalysisResult,
    ArchitectureIssueType,
    ArchitecturePattern,
    EstimatedEffort,
    PerformanceImpact,
    Recommendation,
    RecommendationPriority,
    RecommendationType,
    StructureIssueSeverity,
    StructureIssueType,
)
from unity_auditor.scripts.models import CodeIssueSeverity, CodeIssueType

logger = logging.getLogger(__name__)


class RecommendationCategory(str, Enum):
    """Recommendation categories, in the order their generators run."""

    STRUCTURE = "structure"
    PERFORMANCE = "performance"
    ARCHITECTURE = "architecture"
    CODE_QUALITY = "code_quality"
    DEPENDENCIES = "dependencies"
    SECURITY = "security"
    DOCUMENTATION = "documentation"
    TESTING = "testing"


def minutes(n: float) -> timedelta:
    return timedelta(minutes=n)


def hours(n: float) -> timedelta:
    return timedelta(hours=n)


def error_recommendation(message: str) -> Recommendation:
    return Recommendation(
        type=RecommendationType.STRUCTURE,
        title="Analysis Error",
        priority=RecommendationPriority.CRITICAL,
        description=f"Failed to generate complete recommendations: {message}",
        rationale="Recommendation generation encountered an error",
    )


def rank_recommendations(recommendations: List[Recommendation]) -> List[Recommendation]:
    """Priority descending; ties keep input order."""
    return sorted(recommendations, key=lambda r: -r.priority)


class RecommendationEngine:
    """Generates recommendations from a project analysis result.

    Each RecommendationCategory maps to one ``<category>_recommendations``
    method run through ``run_generator``. A failing category is replaced by
    one "Analysis Error" entry.
    """

    def __init__(self, config: AnalysisConfig = DEFAULT_CONFIG):
        self.config = config

    def generate(self, result: AnalysisResult) -> List[Recommendation]:
        """Generate the ranked recommendation list.

        Args:
            result: Analysis result; any sub-result may be None

        Returns:
            Recommendations sorted by priority, highest first
        """
        outcomes: List[GeneratorResult[Recommendation]] = [
            run_generator(category.value, self.category_generator(category), result)
            for category in RecommendationCategory
        ]

        recommendations: List[Recommendation] = []
        for outcome in outcomes:
            if outcome.success:
                recommendations.extend(outcome.items)
            else:
                recommendations.append(error_recommendation(outcome.error))

        logger.debug(f"Generated {len(recommendations)} recommendations")
        return rank_recommendations(recommendations)

    def category_generator(
        self, category: RecommendationCategory
    ) -> Callable[[AnalysisResult], List[Recommendation]]:
        match category:
            case RecommendationCategory.STRUCTURE:
                return self.structure_recommendations
            case RecommendationCategory.PERFORMANCE:
                return self.performance_recommendations
            case RecommendationCategory.ARCHITECTURE:
                return self.architecture_recommendations
            case RecommendationCategory.CODE_QUALITY:
                return self.code_quality_recommendations
            case RecommendationCategory.DEPENDENCIES:
                return self.dependencies_recommendations
            case RecommendationCategory.SECURITY:
                return self.security_recommendations
            case RecommendationCategory.DOCUMENTATION:
                return self.documentation_recommendations
            case RecommendationCategory.TESTING:
                return self.testing_recommendations
            case _:
                assert_never(category)

    def structure_recommendations(self, result: AnalysisResult) -> List[Recommendation]:
        structure = result.structure
        if structure is None:
            return []

        recommendations = []
        if not structure.follows_standard_structure:
            recommendations.append(
                Recommendation(
                    type=RecommendationType.STRUCTURE,
                    title="Implement Standard Unity Folder Structure",
                    priority=RecommendationPriority.MEDIUM,
                    description=(
                        "Reorganize your project to follow Unity's recommended folder structure"
                    ),
                    rationale=(
                        "Standard folder structure improves navigation, collaboration, "
                        "and asset management"
                    ),
                    action_steps=(
                        ActionStep(
                            "Create standard folders: Scripts, Prefabs, Materials, Textures",
                            minutes(15),
                        ),
                        ActionStep("Move existing assets to appropriate folders", hours(1)),
                        ActionStep("Update any hardcoded paths in scripts", minutes(30)),
                        ActionStep(
                            "Verify all references are maintained after reorganization",
                            minutes(20),
                        ),
                    ),
                    benefits=(
                        "Better organization",
                        "Easier asset discovery",
                        "Improved team collaboration",
                        "Faster onboarding",
                    ),
                    risks=(
                        "Temporary broken references during migration",
                        "Time investment required",
                    ),
                    effort=EstimatedEffort(
                        min_time=hours(1),
                        max_time=hours(4),
                        most_likely_time=hours(2),
                        complexity=3,
                        required_skills=("Unity Editor knowledge", "Asset management"),
                    ),
                )
            )

        missing = [
            i
            for i in structure.issues_of_type(StructureIssueType.MISSING_FOLDER)
            if i.severity >= StructureIssueSeverity.WARNING
        ]
        if missing:
            recommendations.append(
                Recommendation(
                    type=RecommendationType.STRUCTURE,
                    title="Create Missing Essential Folders",
                    priority=RecommendationPriority.MEDIUM,
                    description=(
                        f"Create {len(missing)} missing essential folders for better organization"
                    ),
                    rationale=(
                        "Missing essential folders can lead to disorganized assets "
                        "and difficult maintenance"
                    ),
                    action_steps=tuple(
                        ActionStep(f"Create {i.path} folder", minutes(2)) for i in missing
                    ),
                    benefits=(
                        "Better asset organization",
                        "Clearer project structure",
                        "Easier asset location",
                    ),
                    effort=EstimatedEffort(
                        min_time=minutes(10),
                        max_time=minutes(30),
                        most_likely_time=minutes(15),
                        complexity=1,
                    ),
                )
            )

        large = structure.issues_of_type(StructureIssueType.LARGE_FILE)
        if large:
            recommendations.append(
                Recommendation(
                    type=RecommendationType.PERFORMANCE,
                    title="Optimize Large Files",
                    priority=RecommendationPriority.HIGH,
                    description=(
                        f"Optimize or split {len(large)} large files to improve performance"
                    ),
                    rationale=(
                        "Large files can slow down Unity Editor and build times, "
                        "and may indicate oversized assets"
                    ),
                    action_steps=(
                        ActionStep(
                            "Review each large file to determine optimization strategy",
                            minutes(30),
                        ),
                        ActionStep("Compress textures and audio files where appropriate", hours(1)),
                        ActionStep("Split large scripts into smaller, focused classes", hours(2)),
                        ActionStep("Consider streaming for very large assets", hours(1)),
                    ),
                    benefits=(
                        "Faster Editor performance",
                        "Reduced build times",
                        "Better memory usage",
                        "Improved loading times",
                    ),
                    risks=(
                        "Potential quality loss from compression",
                        "Refactoring effort for large scripts",
                    ),
                )
            )
        return recommendations

    def performance_recommendations(self, result: AnalysisResult) -> List[Recommendation]:
        performance = result.performance
        if performance is None:
            return []

        recommendations = []
        critical = [i for i in performance.issues if i.impact == PerformanceImpact.CRITICAL]
        if critical:
            recommendations.append(
                Recommendation(
                    type=RecommendationType.PERFORMANCE,
                    title="Address Critical Performance Issues",
                    priority=RecommendationPriority.CRITICAL,
                    description=(
                        f"Immediately address {len(critical)} critical performance bottlenecks"
                    ),
                    rationale=(
                        "Critical performance issues can make your game unplayable "
                        "or cause frequent crashes"
                    ),
                    action_steps=tuple(
                        ActionStep(f"Fix: {i.description}", hours(2)) for i in critical[:5]
                    ),
                    benefits=(
                        "Stable frame rate",
                        "Better user experience",
                        "Reduced crashes",
                        "Improved responsiveness",
                    ),
                    effort=EstimatedEffort(
                        min_time=hours(4),
                        max_time=hours(16),
                        most_likely_time=hours(8),
                        complexity=4,
                        required_skills=(
                            "Unity optimization",
                            "Performance profiling",
                            "Rendering knowledge",
                        ),
                    ),
                )
            )

        metrics = performance.metrics
        if metrics is None:
            return recommendations

        if metrics.texture_memory_mb > self.config.texture_memory_limit_mb:
            recommendations.append(
                Recommendation(
                    type=RecommendationType.PERFORMANCE,
                    title="Optimize Texture Memory Usage",
                    priority=RecommendationPriority.HIGH,
                    description=(
                        f"Reduce texture memory usage from {metrics.texture_memory_mb}MB "
                        "to improve performance"
                    ),
                    rationale=(
                        "High texture memory usage can cause performance issues, "
                        "especially on mobile devices"
                    ),
                    action_steps=(
                        ActionStep("Audit all textures for appropriate resolution", hours(2)),
                        ActionStep("Apply texture compression where suitable", hours(1)),
                        ActionStep(
                            "Remove or downscale unused high-resolution textures", minutes(30)
                        ),
                        ActionStep("Implement texture streaming for large environments", hours(4)),
                    ),
                    benefits=(
                        "Reduced memory usage",
                        "Better performance on mobile",
                        "Faster loading times",
                        "Smaller build size",
                    ),
                    risks=(
                        "Potential visual quality reduction",
                        "Additional implementation complexity for streaming",
                    ),
                )
            )

        if metrics.draw_calls > self.config.draw_call_limit:
            recommendations.append(
                Recommendation(
                    type=RecommendationType.PERFORMANCE,
                    title="Reduce Draw Calls",
                    priority=RecommendationPriority.HIGH,
                    description=(
                        f"Optimize rendering to reduce draw calls from {metrics.draw_calls} "
                        "to improve frame rate"
                    ),
                    rationale="High draw call counts can severely impact rendering performance",
                    action_steps=(
                        ActionStep("Implement texture atlasing for UI and sprites", hours(3)),
                        ActionStep("Use GPU instancing for repeated objects", hours(2)),
                        ActionStep("Combine meshes where appropriate", hours(2)),
                        ActionStep("Optimize material usage and sharing", hours(1)),
                    ),
                    benefits=(
                        "Higher frame rates",
                        "Better GPU performance",
                        "Smoother gameplay",
                        "Extended battery life on mobile",
                    ),
                )
            )

        # Quick wins computed by the performance stage itself.
        for quick in performance.recommendations:
            recommendations.append(
                Recommendation(
                    type=RecommendationType.PERFORMANCE,
                    title=quick.title,
                    priority=RecommendationPriority(min(quick.expected_impact, 3)),
                    description=quick.description,
                    rationale="Derived from measured asset memory usage",
                    effort=EstimatedEffort(
                        min_time=hours(quick.implementation_effort),
                        max_time=hours(quick.implementation_effort * 3),
                        most_likely_time=hours(quick.implementation_effort * 2),
                        complexity=quick.implementation_effort,
                    ),
                )
            )
        return recommendations

    def architecture_recommendations(self, result: AnalysisResult) -> List[Recommendation]:
        architecture = result.architecture
        if architecture is None:
            return []

        recommendations = []
        god_classes = [i for i in architecture.issues if i.type == ArchitectureIssueType.GOD_CLASS]
        if god_classes:
            recommendations.append(
                Recommendation(
                    type=RecommendationType.ARCHITECTURE,
                    title="Refactor God Classes",
                    priority=RecommendationPriority.HIGH,
                    description=(
                        f"Break down {len(god_classes)} oversized classes "
                        "into smaller, focused components"
                    ),
                    rationale=(
                        "God classes violate single responsibility principle "
                        "and are difficult to maintain and test"
                    ),
                    action_steps=(
                        ActionStep("Identify distinct responsibilities in each god class", hours(2)),
                        ActionStep("Extract related methods into new focused classes", hours(4)),
                        ActionStep("Update references and dependencies", hours(1)),
                        ActionStep("Add unit tests for new smaller classes", hours(2)),
                    ),
                    benefits=(
                        "Better code maintainability",
                        "Easier testing",
                        "Improved code reusability",
                        "Clearer responsibilities",
                    ),
                    risks=(
                        "Temporary increase in complexity during refactoring",
                        "Potential introduction of bugs",
                    ),
                    effort=EstimatedEffort(
                        min_time=hours(6),
                        max_time=hours(20),
                        most_likely_time=hours(12),
                        complexity=4,
                        required_skills=("Refactoring", "Object-oriented design", "Unit testing"),
                    ),
                )
            )

        coupled = [i for i in architecture.issues if i.type == ArchitectureIssueType.TIGHT_COUPLING]
        if coupled:
            recommendations.append(
                Recommendation(
                    type=RecommendationType.ARCHITECTURE,
                    title="Reduce Component Coupling",
                    priority=RecommendationPriority.MEDIUM,
                    description=f"Reduce tight coupling between {len(coupled)} component pairs",
                    rationale="Tight coupling makes code harder to modify, test, and reuse",
                    action_steps=(
                        ActionStep("Introduce interfaces to decouple dependencies", hours(3)),
                        ActionStep(
                            "Implement dependency injection or service locator pattern", hours(4)
                        ),
                        ActionStep("Use events or observers for loose communication", hours(2)),
                        ActionStep(
                            "Refactor direct class references to use abstractions", hours(3)
                        ),
                    ),
                    benefits=(
                        "More flexible architecture",
                        "Easier unit testing",
                        "Better code reusability",
                        "Simplified modifications",
                    ),
                )
            )

        if architecture.components and architecture.pattern == ArchitecturePattern.NONE:
            recommendations.append(
                Recommendation(
                    type=RecommendationType.ARCHITECTURE,
                    title="Implement Architectural Pattern",
                    priority=RecommendationPriority.MEDIUM,
                    description=(
                        "Consider implementing a clear architectural pattern "
                        "for better code organization"
                    ),
                    rationale=(
                        "Well-defined architecture patterns improve code organization "
                        "and team understanding"
                    ),
                    action_steps=(
                        ActionStep(
                            "Choose appropriate pattern (MVC, MVP, or Service-oriented)", hours(1)
                        ),
                        ActionStep("Create architectural guidelines document", hours(2)),
                        ActionStep("Gradually refactor existing code to follow pattern", hours(8)),
                        ActionStep("Train team members on the chosen pattern", hours(2)),
                    ),
                    benefits=(
                        "Clearer code organization",
                        "Better team understanding",
                        "Easier onboarding",
                        "Consistent development approach",
                    ),
                )
            )
        return recommendations

    def code_quality_recommendations(self, result: AnalysisResult) -> List[Recommendation]:
        scripts = result.scripts
        if scripts is None:
            return []

        recommendations = []
        critical = [i for i in scripts.issues if i.severity == CodeIssueSeverity.CRITICAL]
        if critical:
            recommendations.append(
                Recommendation(
                    type=RecommendationType.CODE_QUALITY,
                    title="Fix Critical Code Issues",
                    priority=RecommendationPriority.CRITICAL,
                    description=f"Immediately address {len(critical)} critical code issues",
                    rationale=(
                        "Critical code issues can cause runtime errors, "
                        "security vulnerabilities, or data loss"
                    ),
                    action_steps=tuple(
                        ActionStep(f"Fix: {i.description}", minutes(30)) for i in critical[:10]
                    ),
                    benefits=(
                        "Prevent runtime errors",
                        "Improve code stability",
                        "Reduce security risks",
                        "Better user experience",
                    ),
                    effort=EstimatedEffort(
                        min_time=hours(2),
                        max_time=hours(8),
                        most_likely_time=hours(4),
                        complexity=3,
                    ),
                )
            )

        metrics = scripts.metrics
        if metrics is None:
            return recommendations

        threshold = self.config.complexity_threshold
        if metrics.average_cyclomatic_complexity > threshold:
            recommendations.append(
                Recommendation(
                    type=RecommendationType.CODE_QUALITY,
                    title="Reduce Code Complexity",
                    priority=RecommendationPriority.HIGH,
                    description=(
                        "Simplify overly complex methods "
                        f"(current average: {metrics.average_cyclomatic_complexity:.1f})"
                    ),
                    rationale="High complexity makes code harder to understand, test, and maintain",
                    action_steps=(
                        ActionStep(f"Identify methods with complexity > {threshold}", minutes(30)),
                        ActionStep("Break complex methods into smaller functions", hours(4)),
                        ActionStep(
                            "Extract complex conditionals into meaningful method names", hours(2)
                        ),
                        ActionStep("Add unit tests for refactored methods", hours(2)),
                    ),
                    benefits=(
                        "Easier code understanding",
                        "Better testability",
                        "Reduced bug risk",
                        "Improved maintainability",
                    ),
                )
            )

        low_comments = metrics.comment_ratio < self.config.comment_ratio_min
        if metrics.total_lines > 0 and low_comments:
            recommendations.append(
                Recommendation(
                    type=RecommendationType.DOCUMENTATION,
                    title="Improve Code Documentation",
                    priority=RecommendationPriority.LOW,
                    description=(
                        f"Increase code documentation from {metrics.comment_ratio * 100:.0f}% "
                        "to at least 15%"
                    ),
                    rationale=(
                        "Good documentation helps with code understanding and team collaboration"
                    ),
                    action_steps=(
                        ActionStep("Add XML documentation to public methods and classes", hours(3)),
                        ActionStep("Document complex algorithms and business logic", hours(2)),
                        ActionStep("Create architectural decision records", hours(1)),
                        ActionStep("Set up documentation standards for the team", minutes(30)),
                    ),
                    benefits=(
                        "Better code understanding",
                        "Easier onboarding",
                        "Improved maintenance",
                        "Better IDE support",
                    ),
                )
            )
        return recommendations

    def dependencies_recommendations(self, result: AnalysisResult) -> List[Recommendation]:
        graph = result.scripts.dependency_graph if result.scripts else None
        if graph is None:
            return []

        cycles = graph.get_circular_dependencies()
        if not cycles:
            return []
        return [
            Recommendation(
                type=RecommendationType.DEPENDENCIES,
                title="Resolve Circular Dependencies",
                priority=RecommendationPriority.CRITICAL,
                description=f"Break {len(cycles)} circular dependency chains",
                rationale=(
                    "Circular dependencies can cause compilation issues "
                    "and make code harder to understand"
                ),
                action_steps=(
                    ActionStep("Map out all circular dependency chains", hours(1)),
                    ActionStep("Introduce interfaces to break direct dependencies", hours(3)),
                    ActionStep("Extract shared functionality into separate modules", hours(2)),
                    ActionStep(
                        "Verify no new circular dependencies were introduced", minutes(30)
                    ),
                ),
                benefits=(
                    "Cleaner architecture",
                    "Easier compilation",
                    "Better testability",
                    "Improved code organization",
                ),
                risks=(
                    "Temporary complexity during refactoring",
                    "Potential for new dependencies",
                ),
                effort=EstimatedEffort(
                    min_time=hours(4),
                    max_time=hours(12),
                    most_likely_time=hours(7),
                    complexity=4,
                    required_skills=("Dependency analysis", "Refactoring", "Interface design"),
                ),
            )
        ]

    def security_recommendations(self, result: AnalysisResult) -> List[Recommendation]:
        scripts = result.scripts
        if scripts is None:
            return []

        recommendations = []
        security = [i for i in scripts.issues if i.type == CodeIssueType.SECURITY_ISSUE]
        if security:
            recommendations.append(
                Recommendation(
                    type=RecommendationType.SECURITY,
                    title="Address Security Vulnerabilities",
                    priority=RecommendationPriority.CRITICAL,
                    description=f"Fix {len(security)} identified security issues",
                    rationale=(
                        "Security vulnerabilities can expose user data or allow malicious attacks"
                    ),
                    action_steps=tuple(
                        ActionStep(f"Secure: {i.description}", hours(1)) for i in security[:5]
                    ),
                    benefits=(
                        "Protected user data",
                        "Reduced attack surface",
                        "Compliance with security standards",
                        "User trust",
                    ),
                    effort=EstimatedEffort(
                        min_time=hours(2),
                        max_time=hours(10),
                        most_likely_time=hours(5),
                        complexity=4,
                        required_skills=(
                            "Security knowledge",
                            "Encryption",
                            "Secure coding practices",
                        ),
                    ),
                )
            )

        recommendations.append(
            Recommendation(
                type=RecommendationType.SECURITY,
                title="Implement Security Best Practices",
                priority=RecommendationPriority.LOW,
                description=(
                    "Proactively implement security best practices for your Unity project"
                ),
                rationale=(
                    "Prevention is better than cure when it comes to security vulnerabilities"
                ),
                action_steps=(
                    ActionStep("Validate all user inputs and external data", hours(2)),
                    ActionStep(
                        "Implement proper error handling without exposing sensitive information",
                        hours(1),
                    ),
                    ActionStep("Use secure communication protocols for networking", hours(1)),
                    ActionStep("Regular security code reviews", hours(1)),
                ),
                benefits=(
                    "Proactive security",
                    "User data protection",
                    "Regulatory compliance",
                    "Reduced security incidents",
                ),
            )
        )
        return recommendations

    def documentation_recommendations(self, result: AnalysisResult) -> List[Recommendation]:
        if result.scripts is None and result.structure is None:
            return []
        return [
            Recommendation(
                type=RecommendationType.DOCUMENTATION,
                title="Create Comprehensive Project Documentation",
                priority=RecommendationPriority.MEDIUM,
                description=(
                    "Establish comprehensive documentation for better project maintenance "
                    "and team collaboration"
                ),
                rationale=(
                    "Good documentation reduces onboarding time and improves code maintainability"
                ),
                action_steps=(
                    ActionStep(
                        "Create README with project overview and setup instructions", hours(1)
                    ),
                    ActionStep("Document architecture decisions and patterns used", hours(2)),
                    ActionStep("Create coding standards and style guide", hours(1)),
                    ActionStep("Document build and deployment processes", minutes(30)),
                    ActionStep("Set up automated documentation generation", hours(1)),
                ),
                benefits=(
                    "Faster onboarding",
                    "Better team collaboration",
                    "Reduced knowledge silos",
                    "Easier maintenance",
                ),
                effort=EstimatedEffort(
                    min_time=hours(3),
                    max_time=hours(8),
                    most_likely_time=hours(5),
                    complexity=2,
                    required_skills=("Technical writing", "Documentation tools"),
                ),
            )
        ]

    def testing_recommendations(self, result: AnalysisResult) -> List[Recommendation]:
        structure = result.structure
        if structure is None:
            return []

        scripts = [f for f in structure.files if f.extension.lower() == ".cs"]
        if not scripts:
            return []

        test_files = [f for f in scripts if "test" in f.name.lower()]
        has_infrastructure = bool(test_files) or any(
            "test" in f.name.lower() for f in structure.folders
        )

        if not has_infrastructure:
            return [
                Recommendation(
                    type=RecommendationType.TESTING,
                    title="Establish Testing Infrastructure",
                    priority=RecommendationPriority.MEDIUM,
                    description="Set up unit testing framework and create initial test suite",
                    rationale=(
                        "Automated testing catches bugs early and ensures code quality "
                        "during development"
                    ),
                    action_steps=(
                        ActionStep("Install Unity Test Framework package", minutes(10)),
                        ActionStep("Create Tests folder structure", minutes(5)),
                        ActionStep("Write tests for critical business logic", hours(4)),
                        ActionStep("Set up continuous integration to run tests", hours(2)),
                        ActionStep("Establish testing guidelines for the team", minutes(30)),
                    ),
                    benefits=(
                        "Early bug detection",
                        "Regression prevention",
                        "Code quality assurance",
                        "Confident refactoring",
                    ),
                    effort=EstimatedEffort(
                        min_time=hours(4),
                        max_time=hours(12),
                        most_likely_time=hours(7),
                        complexity=3,
                        required_skills=("Unit testing", "Unity Test Framework", "CI/CD"),
                    ),
                )
            ]

        script_count = len(scripts) - len(test_files)
        if script_count == 0:
            return []
        coverage = len(test_files) / script_count
        target = self.config.test_coverage_target
        if coverage >= target:
            return []
        return [
            Recommendation(
                type=RecommendationType.TESTING,
                title="Improve Test Coverage",
                priority=RecommendationPriority.MEDIUM,
                description=(
                    f"Increase test coverage from {coverage * 100:.0f}% "
                    f"to at least {target * 100:.0f}%"
                ),
                rationale=(
                    "Higher test coverage provides better confidence in code changes "
                    "and refactoring"
                ),
                action_steps=(
                    ActionStep("Identify critical components lacking tests", hours(1)),
                    ActionStep("Write unit tests for core business logic", hours(6)),
                    ActionStep("Add integration tests for key workflows", hours(3)),
                    ActionStep("Set up code coverage reporting", hours(1)),
                ),
                benefits=(
                    "Higher confidence in changes",
                    "Better regression prevention",
                    "Easier refactoring",
                    "Quality assurance",
                ),
            )
        ]
