"""
Tests for insight generation.
"""

import pytest

from unity_auditor.config import DEFAULT_CONFIG
from unity_auditor.graph import build_dependency_graph
from unity_auditor.insights import InsightCategory, InsightGenerator, rank_insights
from unity_auditor.models import (
    AnalysisResult,
    ArchitectureAnalysis,
    ArchitectureMetrics,
    FileInfo,
    FileType,
    FolderInfo,
    Insight,
    InsightSeverity,
    InsightType,
    PerformanceAnalysis,
    PerformanceMetrics,
    ProjectMetrics,
    ProjectStructure,
    ProjectType,
    StructureIssue,
    StructureIssueType,
)
from unity_auditor.scripts.models import (
    ClassDefinition,
    CodeMetrics,
    DesignPattern,
    DesignPatternType,
    ScriptAnalysisResult,
)


def script_file(name):
    return FileInfo(f"p/Assets/Scripts/{name}", name, f"Assets/Scripts/{name}", ".cs", 10, FileType.SCRIPT)


def standard_structure(**kwargs):
    return ProjectStructure(root="p", follows_standard_structure=True, **kwargs)


def titles(insights):
    return [i.title for i in insights]


def test_empty_result_has_no_insights():
    assert InsightGenerator().generate(AnalysisResult(project_path="p")) == []


def test_structure_insights():
    structure = ProjectStructure(
        root="p",
        project_type=ProjectType.MOBILE,
        issues=[
            StructureIssue(StructureIssueType.DEEP_NESTING, "too deep", "Assets/A/B/C/D/E/F/G"),
            StructureIssue(StructureIssueType.LARGE_FILE, "Large file (60.0 MB)", "Assets/Big.psd"),
        ],
    )

    insights = InsightGenerator().generate(AnalysisResult(project_path="p", structure=structure))

    assert titles(insights) == [
        "Non-standard Project Structure",
        "Large Files Detected",
        "Deep Folder Nesting Detected",
        "Project Type Identified: Mobile",
    ]
    large = insights[1]
    assert large.evidence == ("Assets/Big.psd - Large file (60.0 MB)",)
    assert insights[3].data == {"ProjectType": "Mobile"}


def test_failing_category_becomes_single_error(monkeypatch):
    generator = InsightGenerator()

    def broken(result):
        raise RuntimeError("boom")

    monkeypatch.setattr(generator, "structure_insights", broken)
    metrics = ProjectMetrics(maintainability=0.5)
    result = AnalysisResult(project_path="p", structure=standard_structure(), metrics=metrics)

    insights = generator.generate(result)

    assert titles(insights) == ["Analysis Error", "Low Maintainability Score"]
    error = insights[0]
    assert error.type == InsightType.PROJECT_STRUCTURE
    assert error.severity == InsightSeverity.CRITICAL
    assert error.confidence == 1.0
    assert error.description == "Failed to generate complete insights: boom"


def test_rank_by_severity_then_confidence_keeps_ties_stable():
    a = Insight(InsightType.TESTING, "a", "", InsightSeverity.LOW, 0.5)
    b = Insight(InsightType.TESTING, "b", "", InsightSeverity.HIGH, 0.7)
    c = Insight(InsightType.TESTING, "c", "", InsightSeverity.HIGH, 0.9)
    d = Insight(InsightType.TESTING, "d", "", InsightSeverity.LOW, 0.5)

    assert titles(rank_insights([a, b, c, d])) == ["c", "b", "a", "d"]


def test_documentation_requires_lines():
    generator = InsightGenerator()
    empty = ScriptAnalysisResult(metrics=CodeMetrics())
    assert generator.code_quality_insights(AnalysisResult(project_path="p", scripts=empty)) == []

    sparse = ScriptAnalysisResult(metrics=CodeMetrics(total_lines=100, comment_lines=5, comment_ratio=0.05))
    insights = generator.code_quality_insights(AnalysisResult(project_path="p", scripts=sparse))

    assert titles(insights) == ["Low Documentation Coverage"]
    assert insights[0].description == "Only 5.0% of your code contains comments"


def test_strong_patterns_are_reported():
    scripts = ScriptAnalysisResult(
        patterns=[
            DesignPattern(DesignPatternType.SINGLETON, "Singleton", 0.9, ["GameManager"]),
            DesignPattern(DesignPatternType.OBSERVER, "Observer", 0.7, ["GameManager"]),
        ]
    )
    insights = InsightGenerator().code_quality_insights(AnalysisResult(project_path="p", scripts=scripts))

    assert titles(insights) == ["Design Patterns Detected"]
    assert insights[0].evidence == ("Singleton pattern in GameManager",)


def test_circular_dependencies():
    classes = [
        ClassDefinition(name="A", namespace="", file_path="A.cs", base_classes=["B"]),
        ClassDefinition(name="B", namespace="", file_path="B.cs", base_classes=["A"]),
    ]
    scripts = ScriptAnalysisResult(classes=classes, dependency_graph=build_dependency_graph(classes))

    insights = InsightGenerator().dependencies_insights(AnalysisResult(project_path="p", scripts=scripts))

    assert titles(insights) == ["Circular Dependencies Found"]
    assert insights[0].evidence == ("A -> B -> A",)
    assert insights[0].severity == InsightSeverity.HIGH


def test_maintainability_insights():
    metrics = ProjectMetrics(maintainability=0.5, technical_debt=0.8)

    insights = InsightGenerator().maintainability_insights(AnalysisResult(project_path="p", metrics=metrics))

    assert [i.description for i in insights] == [
        "Project maintainability score is 50%, indicating potential maintenance challenges",
        "Technical debt level is 80%, suggesting accumulated code issues",
    ]


def test_testing_requires_scripts():
    structure = standard_structure(
        files=[FileInfo("p/Assets/Tex.png", "Tex.png", "Assets/Tex.png", ".png", 1, FileType.TEXTURE)]
    )
    assert InsightGenerator().testing_insights(AnalysisResult(project_path="p", structure=structure)) == []


def test_missing_test_infrastructure():
    structure = standard_structure(files=[script_file("Player.cs"), script_file("Enemy.cs")])

    insights = InsightGenerator().testing_insights(AnalysisResult(project_path="p", structure=structure))

    assert titles(insights) == ["No Test Infrastructure Found"]


def test_good_test_coverage():
    structure = standard_structure(
        files=[script_file("Player.cs"), script_file("Enemy.cs"), script_file("PlayerTests.cs")],
        folders=[FolderInfo(path="p/Assets/Tests", name="Tests", relative_path="Assets/Tests")],
    )

    insights = InsightGenerator().testing_insights(AnalysisResult(project_path="p", structure=structure))

    assert titles(insights) == ["Good Test Coverage"]
    assert insights[0].evidence == ("1 test files for 2 script files",)
    assert insights[0].data == {"TestCoverageRatio": 0.5}


def test_complexity_threshold_comes_from_config():
    scripts = ScriptAnalysisResult(metrics=CodeMetrics(average_cyclomatic_complexity=6.0))
    result = AnalysisResult(project_path="p", scripts=scripts)

    assert InsightGenerator().code_quality_insights(result) == []

    strict = InsightGenerator(DEFAULT_CONFIG.with_overrides(complexity_threshold=3))
    insights = strict.code_quality_insights(result)

    assert titles(insights) == ["High Code Complexity"]
    assert insights[0].evidence == ("Recommended complexity is below 3 per method",)


def test_memory_and_coupling_limits_come_from_config():
    result = AnalysisResult(
        project_path="p",
        performance=PerformanceAnalysis(
            metrics=PerformanceMetrics(texture_memory_mb=200, audio_memory_mb=50)
        ),
        architecture=ArchitectureAnalysis(
            metrics=ArchitectureMetrics(average_coupling=3.0, average_cohesion=0.9)
        ),
    )
    assert InsightGenerator().generate(result) == []

    config = DEFAULT_CONFIG.with_overrides(
        texture_memory_limit_mb=100, audio_memory_limit_mb=40, coupling_limit=2.0
    )
    insights = InsightGenerator(config).generate(result)

    assert titles(insights) == [
        "High Texture Memory Usage",
        "High Component Coupling",
        "High Audio Memory Usage",
    ]


def test_every_category_has_a_generator():
    generator = InsightGenerator()

    assert [c.value for c in InsightCategory] == [
        "structure",
        "code_quality",
        "performance",
        "architecture",
        "dependencies",
        "maintainability",
        "testing",
    ]
    for category in InsightCategory:
        assert generator.category_generator(category)(AnalysisResult(project_path="p")) == []


def test_insight_data_is_read_only():
    source = {"AverageComplexity": 12.0}
    insight = Insight(InsightType.CODE_QUALITY, "t", "", data=source)
    source["AverageComplexity"] = 1.0

    with pytest.raises(TypeError):
        insight.data["AverageComplexity"] = 0.0
    assert insight.data == {"AverageComplexity": 12.0}
    assert hash(insight) == hash(Insight(InsightType.CODE_QUALITY, "t", "", data=source))
