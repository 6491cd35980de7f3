"""
Data models for project-level analysis results.

Covers the project structure, asset, architecture and performance results,
the aggregated metrics, insights, recommendations and the AnalysisResult
that carries all of them across the public boundary.
"""

from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum, IntEnum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from unity_auditor.scripts.models import ScriptAnalysisResult


# Project structure


class FileType(str, Enum):
    SCRIPT = "Script"
    SCENE = "Scene"
    PREFAB = "Prefab"
    MATERIAL = "Material"
    TEXTURE = "Texture"
    AUDIO = "Audio"
    MESH = "Mesh"
    ANIMATION = "Animation"
    SHADER = "Shader"
    FONT = "Font"
    OTHER = "Other"


class ProjectType(str, Enum):
    GAME_2D = "2D"
    GAME_3D = "3D"
    VR = "VR"
    AR = "AR"
    MOBILE = "Mobile"
    TOOL = "Tool"
    TEMPLATE = "Template"
    GENERAL = "General"


class StructureIssueType(str, Enum):
    MISSING_FOLDER = "MissingFolder"
    UNCONVENTIONAL_NAMING = "UnconventionalNaming"
    DEEP_NESTING = "DeepNesting"
    LARGE_FILE = "LargeFile"
    MISPLACED_FILE = "MisplacedFile"
    DUPLICATE_ASSEMBLY = "DuplicateAssembly"
    ASSEMBLY_CYCLE = "AssemblyCycle"
    MISSING_PACKAGE = "MissingPackage"
    ANALYSIS_FAILURE = "AnalysisFailure"


class StructureIssueSeverity(IntEnum):
    INFO = 0
    WARNING = 1
    CRITICAL = 2


@dataclass
class StructureIssue:
    """A deviation from expected folder/file organization."""

    type: StructureIssueType
    description: str
    path: str
    severity: StructureIssueSeverity = StructureIssueSeverity.INFO
    suggestion: str = ""


@dataclass
class FolderInfo:
    """A folder under the asset tree."""

    path: str
    name: str
    relative_path: str
    file_count: int = 0
    subfolder_count: int = 0
    size_bytes: int = 0
    tags: List[str] = field(default_factory=list)


@dataclass
class FileInfo:
    """A non-meta file under the asset tree."""

    path: str
    name: str
    relative_path: str
    extension: str
    size_bytes: int = 0
    file_type: FileType = FileType.OTHER
    line_count: int = 0
    dependencies: List[str] = field(default_factory=list)

    @property
    def stem(self) -> str:
        return self.name[: -len(self.extension)] if self.extension else self.name


@dataclass
class SceneInfo:
    """Summary of one scene file."""

    path: str
    name: str
    size_bytes: int = 0
    game_object_count: int = 0
    renderer_count: int = 0
    component_types: List[str] = field(default_factory=list)


@dataclass
class AssemblyDefinition:
    """Parsed content of an assembly definition file."""

    path: str
    name: str
    references: List[str] = field(default_factory=list)
    define_constraints: List[str] = field(default_factory=list)
    version_defines: List[str] = field(default_factory=list)
    auto_referenced: bool = True
    no_engine_references: bool = False
    include_platforms: List[str] = field(default_factory=list)
    exclude_platforms: List[str] = field(default_factory=list)

    @property
    def includes_any_platform(self) -> bool:
        return not self.include_platforms


@dataclass
class PackageManifest:
    """Package dependencies declared by the project manifest."""

    path: str
    dependencies: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class UnityVersion:
    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


@dataclass
class ProjectStructure:
    """Result of the structure stage."""

    root: str
    folders: List[FolderInfo] = field(default_factory=list)
    files: List[FileInfo] = field(default_factory=list)
    scenes: List[SceneInfo] = field(default_factory=list)
    assembly_definitions: List[AssemblyDefinition] = field(default_factory=list)
    manifest: Optional[PackageManifest] = None
    project_type: ProjectType = ProjectType.GENERAL
    unity_version: Optional[UnityVersion] = None
    follows_standard_structure: bool = False
    issues: List[StructureIssue] = field(default_factory=list)

    @property
    def total_files(self) -> int:
        return len(self.files)

    @property
    def total_size_bytes(self) -> int:
        return sum(f.size_bytes for f in self.files)

    def issues_of_type(self, issue_type: StructureIssueType) -> List[StructureIssue]:
        return [i for i in self.issues if i.type == issue_type]


# Assets


class AssetIssueType(str, Enum):
    LARGE_ASSET = "LargeAsset"
    UNOPTIMIZED_ASSET = "UnoptimizedAsset"
    UNUSED_ASSET = "UnusedAsset"


class AssetIssueSeverity(IntEnum):
    INFO = 0
    WARNING = 1
    CRITICAL = 2


@dataclass
class AssetInfo:
    """A classified asset file and its importer metadata."""

    path: str
    name: str
    relative_path: str
    asset_type: str
    size_bytes: int = 0
    guid: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    labels: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class AssetDependency:
    """A GUID reference from one asset to another."""

    source: str
    guid: str
    target: Optional[str] = None


@dataclass
class AssetUsage:
    path: str
    usage_count: int = 0
    used_by: List[str] = field(default_factory=list)
    used_by_scenes: List[str] = field(default_factory=list)


@dataclass
class AssetUsageReport:
    usages: List[AssetUsage] = field(default_factory=list)
    unused_assets: List[str] = field(default_factory=list)
    usage_by_type: Dict[str, int] = field(default_factory=dict)


@dataclass
class AssetIssue:
    type: AssetIssueType
    description: str
    path: str
    severity: AssetIssueSeverity = AssetIssueSeverity.INFO
    suggestion: str = ""


@dataclass
class AssetMetrics:
    total_assets: int = 0
    total_size_bytes: int = 0
    count_by_type: Dict[str, int] = field(default_factory=dict)
    size_by_type: Dict[str, int] = field(default_factory=dict)
    unused_assets: int = 0
    average_asset_size: float = 0.0


@dataclass
class AssetAnalysisResult:
    """Result of the asset stage."""

    assets: List[AssetInfo] = field(default_factory=list)
    dependencies: List[AssetDependency] = field(default_factory=list)
    usage_report: Optional[AssetUsageReport] = None
    issues: List[AssetIssue] = field(default_factory=list)
    metrics: Optional[AssetMetrics] = None

    @property
    def total_assets(self) -> int:
        return len(self.assets)

    def assets_of_type(self, asset_type: str) -> List[AssetInfo]:
        return [a for a in self.assets if a.asset_type == asset_type]


# Architecture


class ComponentCategory(str, Enum):
    UI = "UI"
    GAMEPLAY = "Gameplay"
    CORE = "Core"
    UTILITY = "Utility"


class ArchitecturePattern(str, Enum):
    MVC = "MVC"
    SERVICE_ORIENTED = "ServiceOriented"
    COMPONENT_BASED = "ComponentBased"
    NONE = "None"


class ConnectionType(str, Enum):
    INHERITANCE = "Inheritance"
    USAGE = "Usage"


@dataclass
class ComponentInfo:
    name: str
    kind: str
    category: ComponentCategory
    file_path: str = ""
    method_count: int = 0
    dependencies: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class SystemConnection:
    source: str
    target: str
    type: ConnectionType


@dataclass
class LayerInfo:
    name: str
    level: int
    components: List[str] = field(default_factory=list)


class ArchitectureIssueType(str, Enum):
    GOD_CLASS = "GodClass"
    TIGHT_COUPLING = "TightCoupling"


class ArchitectureIssueSeverity(IntEnum):
    MINOR = 0
    MAJOR = 1
    CRITICAL = 2


@dataclass
class ArchitectureIssue:
    type: ArchitectureIssueType
    description: str
    severity: ArchitectureIssueSeverity = ArchitectureIssueSeverity.MINOR
    affected_components: List[str] = field(default_factory=list)


@dataclass
class ArchitectureMetrics:
    total_components: int = 0
    total_connections: int = 0
    average_coupling: float = 0.0
    average_cohesion: float = 0.0
    instability: float = 0.0
    abstractness: float = 0.0


@dataclass
class ArchitectureAnalysis:
    """Architecture derived from the extracted class facts."""

    components: List[ComponentInfo] = field(default_factory=list)
    connections: List[SystemConnection] = field(default_factory=list)
    layers: List[LayerInfo] = field(default_factory=list)
    pattern: ArchitecturePattern = ArchitecturePattern.NONE
    issues: List[ArchitectureIssue] = field(default_factory=list)
    metrics: Optional[ArchitectureMetrics] = None


# Performance


class PerformanceIssueType(str, Enum):
    LARGE_TEXTURE_SIZE = "LargeTextureSize"


class PerformanceImpact(IntEnum):
    LOW = 0
    MEDIUM = 1
    HIGH = 2
    CRITICAL = 3


@dataclass
class PerformanceIssue:
    type: PerformanceIssueType
    description: str
    location: str
    impact: PerformanceImpact = PerformanceImpact.LOW


@dataclass
class PerformanceMetrics:
    texture_memory_mb: int = 0
    mesh_memory_mb: int = 0
    audio_clips: int = 0
    audio_memory_mb: int = 0
    draw_calls: int = 0


@dataclass
class PerformanceRecommendation:
    title: str
    description: str
    expected_impact: PerformanceImpact = PerformanceImpact.MEDIUM
    implementation_effort: int = 1


@dataclass
class PerformanceAnalysis:
    """Performance findings derived from the asset and scene results."""

    issues: List[PerformanceIssue] = field(default_factory=list)
    metrics: Optional[PerformanceMetrics] = None
    recommendations: List[PerformanceRecommendation] = field(default_factory=list)


# Aggregates


@dataclass
class ProjectMetrics:
    """Project-wide scores produced by the metrics calculator."""

    total_files: int = 0
    total_folders: int = 0
    total_size_bytes: int = 0
    scene_files: int = 0
    script_files: int = 0
    asset_files: int = 0
    total_classes: int = 0
    total_lines_of_code: int = 0
    code_complexity: float = 0.0
    max_complexity: int = 0
    coupling: float = 0.0
    cohesion: float = 0.0
    technical_debt: float = 0.0
    maintainability: float = 1.0


# Insights


class InsightType(str, Enum):
    PROJECT_STRUCTURE = "ProjectStructure"
    CODE_QUALITY = "CodeQuality"
    PERFORMANCE = "Performance"
    ARCHITECTURE = "Architecture"
    DEPENDENCIES = "Dependencies"
    MAINTAINABILITY = "Maintainability"
    TESTING = "Testing"


class InsightSeverity(IntEnum):
    INFO = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3
    CRITICAL = 4


@dataclass(frozen=True)
class Insight:
    """A ranked, evidence-backed observation about project quality."""

    type: InsightType
    title: str
    description: str
    severity: InsightSeverity = InsightSeverity.INFO
    confidence: float = 0.0
    context: str = ""
    evidence: Tuple[str, ...] = ()
    data: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        object.__setattr__(self, "data", MappingProxyType(dict(self.data)))


# Recommendations


class RecommendationType(str, Enum):
    STRUCTURE = "Structure"
    PERFORMANCE = "Performance"
    ARCHITECTURE = "Architecture"
    CODE_QUALITY = "CodeQuality"
    DEPENDENCIES = "Dependencies"
    SECURITY = "Security"
    DOCUMENTATION = "Documentation"
    TESTING = "Testing"


class RecommendationPriority(IntEnum):
    LOW = 0
    MEDIUM = 1
    HIGH = 2
    CRITICAL = 3


@dataclass(frozen=True)
class ActionStep:
    description: str
    estimated_time: timedelta


@dataclass(frozen=True)
class EstimatedEffort:
    """Three-point effort estimate for a recommendation."""

    min_time: timedelta
    max_time: timedelta
    most_likely_time: timedelta
    complexity: int = 1
    required_skills: Tuple[str, ...] = ()

    @property
    def expected_time(self) -> timedelta:
        """PERT estimate: (min + 4 * most likely + max) / 6."""
        return (self.min_time + 4 * self.most_likely_time + self.max_time) / 6


@dataclass(frozen=True)
class Recommendation:
    """An actionable, effort-estimated remediation item."""

    type: RecommendationType
    title: str
    priority: RecommendationPriority = RecommendationPriority.MEDIUM
    description: str = ""
    rationale: str = ""
    action_steps: Tuple[ActionStep, ...] = ()
    benefits: Tuple[str, ...] = ()
    risks: Tuple[str, ...] = ()
    effort: Optional[EstimatedEffort] = None

    @property
    def total_action_time(self) -> timedelta:
        return sum((s.estimated_time for s in self.action_steps), timedelta())


# Pipeline result


class AnalysisErrorKind(str, Enum):
    PRECONDITION = "precondition"
    CANCELLED = "cancelled"
    TIMEOUT = "timeout"
    UNEXPECTED = "unexpected"


@dataclass(frozen=True)
class AnalysisError:
    kind: AnalysisErrorKind
    message: str


@dataclass
class AnalysisResult:
    """The single object handed to downstream consumers.

    Any sub-result may be None; every consumer must tolerate that.
    """

    project_path: str
    structure: Optional[ProjectStructure] = None
    scripts: Optional[ScriptAnalysisResult] = None
    assets: Optional[AssetAnalysisResult] = None
    architecture: Optional[ArchitectureAnalysis] = None
    performance: Optional[PerformanceAnalysis] = None
    metrics: Optional[ProjectMetrics] = None
    insights: List[Insight] = field(default_factory=list)
    recommendations: List[Recommendation] = field(default_factory=list)
    success: bool = False
    error: Optional[AnalysisError] = None
    elapsed_time: float = 0.0

    @property
    def error_message(self) -> Optional[str]:
        return self.error.message if self.error else None
