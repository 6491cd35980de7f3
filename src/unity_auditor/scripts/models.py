"""
Data models for C# source analysis results.

These models are the abstract fact layer between the lexical extractors and
every downstream consumer (graph builder, pattern rules, metrics, insights).
Consumers depend only on these types, never on how they were extracted.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import TYPE_CHECKING, Dict, List, Optional

if TYPE_CHECKING:
    from unity_auditor.graph import DependencyGraph


class AccessModifier(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"
    PROTECTED = "protected"
    INTERNAL = "internal"


class ClassKind(str, Enum):
    CLASS = "class"
    STRUCT = "struct"


@dataclass
class ParameterDefinition:
    """A single method parameter."""

    name: str
    type: str
    default_value: Optional[str] = None
    is_out: bool = False
    is_ref: bool = False
    is_params: bool = False


@dataclass
class MethodDefinition:
    """Information about a method or constructor."""

    name: str
    return_type: str
    parameters: List[ParameterDefinition] = field(default_factory=list)
    access_modifier: AccessModifier = AccessModifier.PRIVATE
    is_static: bool = False
    is_virtual: bool = False
    is_override: bool = False
    is_abstract: bool = False
    is_async: bool = False
    is_constructor: bool = False
    start_line: int = 0
    lines_of_code: int = 0
    cyclomatic_complexity: int = 1


@dataclass
class FieldDefinition:
    """Information about a field or event field."""

    name: str
    type: str
    access_modifier: AccessModifier = AccessModifier.PRIVATE
    is_static: bool = False
    is_readonly: bool = False
    is_const: bool = False
    is_event: bool = False
    default_value: Optional[str] = None


@dataclass
class PropertyDefinition:
    """Information about a property."""

    name: str
    type: str
    access_modifier: AccessModifier = AccessModifier.PRIVATE
    is_static: bool = False
    has_getter: bool = False
    has_setter: bool = False
    is_auto_property: bool = False


@dataclass
class ClassDefinition:
    """Structural facts for one class or struct declaration."""

    name: str
    namespace: str
    file_path: str
    access_modifier: AccessModifier = AccessModifier.PRIVATE
    kind: ClassKind = ClassKind.CLASS
    is_abstract: bool = False
    is_static: bool = False
    is_sealed: bool = False
    base_classes: List[str] = field(default_factory=list)
    interfaces: List[str] = field(default_factory=list)
    methods: List[MethodDefinition] = field(default_factory=list)
    fields: List[FieldDefinition] = field(default_factory=list)
    properties: List[PropertyDefinition] = field(default_factory=list)
    attributes: List[str] = field(default_factory=list)
    start_line: int = 0
    lines_of_code: int = 0
    complexity: int = 1

    @property
    def full_name(self) -> str:
        return f"{self.namespace}.{self.name}" if self.namespace else self.name

    @property
    def is_monobehaviour(self) -> bool:
        return "MonoBehaviour" in self.base_classes

    @property
    def is_scriptable_object(self) -> bool:
        return "ScriptableObject" in self.base_classes

    @property
    def constructors(self) -> List[MethodDefinition]:
        return [m for m in self.methods if m.is_constructor]


@dataclass
class MethodSignature:
    """A method declared by an interface."""

    name: str
    return_type: str
    parameters: List[ParameterDefinition] = field(default_factory=list)


@dataclass
class PropertySignature:
    """A property declared by an interface."""

    name: str
    type: str
    has_getter: bool = False
    has_setter: bool = False


@dataclass
class InterfaceDefinition:
    """Structural facts for one interface declaration."""

    name: str
    namespace: str
    file_path: str
    access_modifier: AccessModifier = AccessModifier.PRIVATE
    base_interfaces: List[str] = field(default_factory=list)
    methods: List[MethodSignature] = field(default_factory=list)
    properties: List[PropertySignature] = field(default_factory=list)
    start_line: int = 0
    lines_of_code: int = 0

    @property
    def full_name(self) -> str:
        return f"{self.namespace}.{self.name}" if self.namespace else self.name


@dataclass
class ScriptFile:
    """Complete extraction result for a single source file.

    Produced in isolation per file (possibly in a worker process) and merged
    by the caller.
    """

    file_path: str
    namespace: str = ""
    usings: List[str] = field(default_factory=list)
    classes: List[ClassDefinition] = field(default_factory=list)
    interfaces: List[InterfaceDefinition] = field(default_factory=list)
    line_count: int = 0
    comment_line_count: int = 0
    errors: List[str] = field(default_factory=list)


class DesignPatternType(str, Enum):
    SINGLETON = "Singleton"
    FACTORY = "Factory"
    OBSERVER = "Observer"


@dataclass
class DesignPattern:
    """Heuristic evidence that a design pattern is implemented."""

    type: DesignPatternType
    name: str
    confidence: float
    involved_classes: List[str] = field(default_factory=list)
    evidence: str = ""


class CodeIssueType(str, Enum):
    CODE_SMELL = "CodeSmell"
    BEST_PRACTICE_VIOLATION = "BestPracticeViolation"
    POTENTIAL_BUG = "PotentialBug"
    PERFORMANCE_ISSUE = "PerformanceIssue"
    SECURITY_ISSUE = "SecurityIssue"
    STYLE_VIOLATION = "StyleViolation"


class CodeIssueSeverity(IntEnum):
    INFO = 0
    MINOR = 1
    MAJOR = 2
    CRITICAL = 3


@dataclass
class CodeIssue:
    """A problem detected in the extracted code facts."""

    type: CodeIssueType
    description: str
    file_path: str
    severity: CodeIssueSeverity = CodeIssueSeverity.MINOR
    line_number: int = 0
    class_name: Optional[str] = None
    suggestion: str = ""


@dataclass
class CodeMetrics:
    """Aggregate code metrics for a set of scripts."""

    total_files: int = 0
    total_classes: int = 0
    total_interfaces: int = 0
    total_methods: int = 0
    total_lines_of_code: int = 0
    total_lines: int = 0
    comment_lines: int = 0
    average_cyclomatic_complexity: float = 0.0
    max_cyclomatic_complexity: int = 0
    comment_ratio: float = 0.0
    methods_per_class: float = 0.0
    metrics_by_type: Dict[str, int] = field(default_factory=dict)


@dataclass
class ScriptAnalysisResult:
    """Everything the script stage knows about a source tree."""

    files: List[ScriptFile] = field(default_factory=list)
    classes: List[ClassDefinition] = field(default_factory=list)
    interfaces: List[InterfaceDefinition] = field(default_factory=list)
    dependency_graph: Optional["DependencyGraph"] = None
    patterns: List[DesignPattern] = field(default_factory=list)
    issues: List[CodeIssue] = field(default_factory=list)
    metrics: Optional[CodeMetrics] = None
    warnings: List[str] = field(default_factory=list)

    @property
    def methods(self) -> List[MethodDefinition]:
        return [m for c in self.classes for m in c.methods]

    @property
    def total_classes(self) -> int:
        return len(self.classes)

    @property
    def total_methods(self) -> int:
        return sum(len(c.methods) for c in self.classes)

    @property
    def total_lines_of_code(self) -> int:
        return sum(c.lines_of_code for c in self.classes)
