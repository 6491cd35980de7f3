"""
Code issue detection over extracted class facts.
"""

from typing import List, Sequence

from unity_auditor.config import DEFAULT_CONFIG, AnalysisConfig
from unity_auditor.scripts.models import (
    ClassDefinition,
    CodeIssue,
    CodeIssueSeverity,
    CodeIssueType,
)


def detect_code_issues(
    classes: Sequence[ClassDefinition], config: AnalysisConfig = DEFAULT_CONFIG
) -> List[CodeIssue]:
    """Flag classes with too many methods or lines and overly complex methods.

    Args:
        classes: Extracted class definitions
        config: Thresholds to apply

    Returns:
        Issues in class order; per class: method count, size, then methods
    """
    issues: List[CodeIssue] = []
    for cls in classes:
        if len(cls.methods) > config.max_methods_per_class:
            issues.append(
                CodeIssue(
                    type=CodeIssueType.CODE_SMELL,
                    description=f"Class {cls.name} has too many methods ({len(cls.methods)})",
                    file_path=cls.file_path,
                    severity=CodeIssueSeverity.MAJOR,
                    line_number=cls.start_line,
                    class_name=cls.name,
                    suggestion="Consider breaking this class into smaller, more focused classes",
                )
            )

        if cls.lines_of_code > config.max_class_lines:
            issues.append(
                CodeIssue(
                    type=CodeIssueType.CODE_SMELL,
                    description=f"Class {cls.name} is very large ({cls.lines_of_code} lines)",
                    file_path=cls.file_path,
                    severity=CodeIssueSeverity.MAJOR,
                    line_number=cls.start_line,
                    class_name=cls.name,
                    suggestion="Consider refactoring this class to reduce its size",
                )
            )

        for method in cls.methods:
            if method.cyclomatic_complexity > config.complexity_threshold:
                issues.append(
                    CodeIssue(
                        type=CodeIssueType.CODE_SMELL,
                        description=(
                            f"Method {method.name} has high cyclomatic complexity "
                            f"({method.cyclomatic_complexity})"
                        ),
                        file_path=cls.file_path,
                        severity=CodeIssueSeverity.MAJOR,
                        line_number=method.start_line,
                        class_name=cls.name,
                        suggestion="Consider breaking this method into smaller, simpler methods",
                    )
                )
    return issues
