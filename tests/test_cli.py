"""
Tests for the command-line interface.
"""

from pathlib import Path

import pytest
from click.testing import CliRunner

from unity_auditor.cli import cli


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def project(make_unity_project, sample_cs_file) -> Path:
    source = sample_cs_file.read_text(encoding="utf-8")
    return make_unity_project({"Assets/Scripts/GameManager.cs": source})


def test_version(runner):
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert "0.1.0" in result.output


def test_analyze_rejects_non_unity_directory(runner, temp_dir):
    result = runner.invoke(cli, ["analyze", str(temp_dir)])

    assert result.exit_code == 1
    assert "Not a Unity project" in result.output


def test_analyze_project(runner, project):
    result = runner.invoke(cli, ["analyze", str(project), "--sequential", "--limit", "5"])

    assert result.exit_code == 0, result.output
    assert "Analysis complete" in result.output
    assert "Project Metrics" in result.output


def test_analyze_timeout(runner, project):
    result = runner.invoke(cli, ["analyze", str(project), "--sequential", "--timeout", "0"])

    assert result.exit_code == 1
    assert "Analysis timed out" in result.output


def test_scripts_command(runner, sample_cs_file):
    result = runner.invoke(cli, ["scripts", str(sample_cs_file), "--sequential"])

    assert result.exit_code == 0, result.output
    assert "GameManager" in result.output
    assert "Found 2 classes and 1 interfaces in 1 files" in result.output


def test_structure_without_issues(runner, make_unity_project):
    folders = [f"Assets/{name}" for name in ("Scripts", "Scenes", "Prefabs", "Materials", "Textures")]
    root = make_unity_project(folders=tuple(folders))

    result = runner.invoke(cli, ["structure", str(root)])

    assert result.exit_code == 0, result.output
    assert "No structure issues found" in result.output


def test_structure_with_issues(runner, make_unity_project):
    result = runner.invoke(cli, ["structure", str(make_unity_project())])

    assert result.exit_code == 0, result.output
    assert "No structure issues found" not in result.output


def test_impact_command(runner, sample_cs_file):
    result = runner.invoke(
        cli, ["impact", str(sample_cs_file), "GameManager", "--direction", "downstream"]
    )

    assert result.exit_code == 0, result.output
    assert "Impact Analysis Results" in result.output
    assert "MonoBehaviour" in result.output


def test_impact_with_no_dependents(runner, sample_cs_file):
    result = runner.invoke(cli, ["impact", str(sample_cs_file), "GameManager"])

    assert result.exit_code == 0, result.output
    assert "No impact found." in result.output


def test_impact_unknown_type(runner, sample_cs_file):
    result = runner.invoke(cli, ["impact", str(sample_cs_file), "Dragon"])

    assert result.exit_code == 1
    assert "Unknown type: Dragon" in result.output
