"""
C# script analysis.

This package provides lexical extraction of C# sources:
- models: Data classes for extracted facts
- source: Masking, brace scanning and other lexical helpers
- extractors: Specialized extraction classes
- script_analyzer: ScriptAnalyzer orchestrator
- patterns, issues: Rules over the extracted facts

Only the models are re-exported here; import ScriptAnalyzer from
``unity_auditor.scripts.script_analyzer``.
"""

from unity_auditor.scripts.models import (
    AccessModifier,
    ClassDefinition,
    CodeIssue,
    CodeIssueSeverity,
    CodeIssueType,
    CodeMetrics,
    DesignPattern,
    DesignPatternType,
    FieldDefinition,
    InterfaceDefinition,
    MethodDefinition,
    ParameterDefinition,
    PropertyDefinition,
    ScriptAnalysisResult,
    ScriptFile,
)

__all__ = [
    "AccessModifier",
    "ClassDefinition",
    "CodeIssue",
    "CodeIssueSeverity",
    "CodeIssueType",
    "CodeMetrics",
    "DesignPattern",
    "DesignPatternType",
    "FieldDefinition",
    "InterfaceDefinition",
    "MethodDefinition",
    "ParameterDefinition",
    "PropertyDefinition",
    "ScriptAnalysisResult",
    "ScriptFile",
]
