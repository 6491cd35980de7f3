"""
Tests for the top-level analysis pipeline.
"""

from pathlib import Path

import pytest

from unity_auditor.analyzer import ProjectAnalyzer
from unity_auditor.cancellation import CancellationToken
from unity_auditor.models import AnalysisErrorKind, ProjectType

STAGES = [
    (0.0, "Starting project analysis"),
    (0.1, "Project structure analyzed"),
    (0.3, "Scripts analyzed"),
    (0.5, "Assets analyzed"),
    (0.7, "Architecture analyzed"),
    (0.8, "Performance analyzed"),
    (0.85, "Metrics calculated"),
    (0.9, "Insights generated"),
    (0.95, "Recommendations generated"),
    (1.0, "Analysis complete"),
]


@pytest.fixture
def project(make_unity_project, sample_cs_file) -> Path:
    source = sample_cs_file.read_text(encoding="utf-8")
    return make_unity_project({"Assets/Scripts/GameManager.cs": source})


@pytest.fixture
def analyzer(sequential_config) -> ProjectAnalyzer:
    return ProjectAnalyzer(sequential_config)


def test_can_analyze(analyzer, project, temp_dir):
    assert analyzer.can_analyze(project)
    assert not analyzer.can_analyze(temp_dir)
    assert not analyzer.can_analyze(temp_dir / "missing")


def test_not_a_unity_project(analyzer, temp_dir):
    calls = []
    result = analyzer.analyze_project(
        temp_dir, progress_callback=lambda fraction, label: calls.append(fraction)
    )

    assert not result.success
    assert result.error.kind == AnalysisErrorKind.PRECONDITION
    assert result.error_message.startswith("Not a Unity project (missing Assets or ProjectSettings)")
    assert result.structure is None
    assert calls == []


def test_full_analysis(analyzer, project):
    calls = []
    result = analyzer.analyze_project(
        project, progress_callback=lambda fraction, label: calls.append((fraction, label))
    )

    assert result.success
    assert result.error is None
    assert calls == STAGES
    assert result.elapsed_time >= 0.0

    assert result.structure.project_type == ProjectType.GENERAL
    assert str(result.structure.unity_version) == "2022.3.10"
    assert [c.name for c in result.scripts.classes] == ["GameManager", "DamageInfo"]
    assert result.architecture is not None
    assert result.performance is not None
    assert result.metrics.script_files == 1
    assert result.metrics.total_classes == 2

    assert "No Test Infrastructure Found" in [i.title for i in result.insights]
    assert "Establish Testing Infrastructure" in [r.title for r in result.recommendations]


def test_analysis_is_deterministic(analyzer, project):
    first = analyzer.analyze_project(project)
    second = analyzer.analyze_project(project)

    assert first.insights == second.insights
    assert first.recommendations == second.recommendations
    assert first.metrics == second.metrics


def test_regenerating_insights_and_recommendations(analyzer, project):
    result = analyzer.analyze_project(project)

    assert analyzer.get_insights(result) == result.insights
    assert analyzer.get_recommendations(result) == result.recommendations


def test_cancelled_before_start(analyzer, project):
    token = CancellationToken()
    token.cancel()
    calls = []

    result = analyzer.analyze_project(
        project, progress_callback=lambda fraction, label: calls.append(fraction), cancellation=token
    )

    assert not result.success
    assert result.error.kind == AnalysisErrorKind.CANCELLED
    assert result.error_message == "Analysis was cancelled"
    assert calls == [0.0]
    assert result.structure is None


def test_zero_timeout(analyzer, project):
    result = analyzer.analyze_project(project, timeout=0)

    assert not result.success
    assert result.error.kind == AnalysisErrorKind.TIMEOUT
    assert result.error_message == "Analysis timed out"


def test_cancel_during_a_stage(analyzer, project, monkeypatch):
    token = CancellationToken()
    original = analyzer.structure_analyzer.analyze

    def cancel_after_structure(root):
        structure = original(root)
        token.cancel()
        return structure

    monkeypatch.setattr(analyzer.structure_analyzer, "analyze", cancel_after_structure)

    result = analyzer.analyze_project(project, cancellation=token)

    assert result.error.kind == AnalysisErrorKind.CANCELLED
    assert result.structure is not None
    assert result.scripts is None


def test_unexpected_stage_failure(analyzer, project, monkeypatch):
    def broken(root):
        raise OSError("disk gone")

    monkeypatch.setattr(analyzer.asset_analyzer, "analyze", broken)

    result = analyzer.analyze_project(project)

    assert not result.success
    assert result.error.kind == AnalysisErrorKind.UNEXPECTED
    assert result.error_message == "Analysis failed: disk gone"
    assert result.scripts is not None
    assert result.assets is None
