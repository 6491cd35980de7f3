"""
Tests for category generator plumbing.
"""

from unity_auditor.generators import GeneratorResult, run_generator
from unity_auditor.models import AnalysisResult


def test_successful_generator():
    outcome = run_generator("structure", lambda result: [result.project_path], AnalysisResult("p"))

    assert outcome.success
    assert outcome.category == "structure"
    assert outcome.items == ("p",)
    assert outcome.error is None


def test_failing_generator_is_captured():
    def broken(result):
        raise KeyError("metrics")

    outcome = run_generator("maintainability", broken, AnalysisResult("p"))

    assert not outcome.success
    assert outcome.items == ()
    assert outcome.error == "'metrics'"


def test_constructors():
    assert GeneratorResult.ok("testing", [1, 2]).items == (1, 2)
    assert GeneratorResult.failure("testing", "nope") == GeneratorResult("testing", (), "nope")
