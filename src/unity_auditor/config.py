"""
Analysis configuration.

All heuristic tables and thresholds live in one immutable AnalysisConfig that
is built once and passed by reference into every component. Override fields
with ``dataclasses.replace`` or ``AnalysisConfig.with_overrides``.
"""

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from unity_auditor.models import FileType

MB = 1024 * 1024

STANDARD_FOLDERS = (
    "Scripts",
    "Prefabs",
    "Materials",
    "Textures",
    "Audio",
    "Animations",
    "Scenes",
    "Fonts",
    "Resources",
    "StreamingAssets",
    "Editor",
    "Plugins",
)

FILE_TYPES = {
    ".cs": FileType.SCRIPT,
    ".unity": FileType.SCENE,
    ".prefab": FileType.PREFAB,
    ".mat": FileType.MATERIAL,
    ".png": FileType.TEXTURE,
    ".jpg": FileType.TEXTURE,
    ".jpeg": FileType.TEXTURE,
    ".tga": FileType.TEXTURE,
    ".bmp": FileType.TEXTURE,
    ".wav": FileType.AUDIO,
    ".mp3": FileType.AUDIO,
    ".ogg": FileType.AUDIO,
    ".aiff": FileType.AUDIO,
    ".fbx": FileType.MESH,
    ".obj": FileType.MESH,
    ".dae": FileType.MESH,
    ".3ds": FileType.MESH,
    ".anim": FileType.ANIMATION,
    ".shader": FileType.SHADER,
    ".compute": FileType.SHADER,
    ".ttf": FileType.FONT,
    ".otf": FileType.FONT,
}

EXPECTED_FOLDERS = {
    FileType.SCRIPT: "Scripts",
    FileType.SCENE: "Scenes",
    FileType.PREFAB: "Prefabs",
    FileType.MATERIAL: "Materials",
    FileType.TEXTURE: "Textures",
    FileType.AUDIO: "Audio",
    FileType.MESH: "Models",
    FileType.ANIMATION: "Animations",
    FileType.SHADER: "Shaders",
    FileType.FONT: "Fonts",
}

ASSET_TYPES = {
    ".png": "Texture2D",
    ".jpg": "Texture2D",
    ".jpeg": "Texture2D",
    ".tga": "Texture2D",
    ".psd": "Texture2D",
    ".mat": "Material",
    ".fbx": "Mesh",
    ".obj": "Mesh",
    ".dae": "Mesh",
    ".3ds": "Mesh",
    ".wav": "AudioClip",
    ".mp3": "AudioClip",
    ".ogg": "AudioClip",
    ".aiff": "AudioClip",
    ".anim": "AnimationClip",
    ".shader": "Shader",
    ".compute": "ComputeShader",
    ".ttf": "Font",
    ".otf": "Font",
    ".prefab": "Prefab",
    ".unity": "Scene",
    ".asset": "ScriptableObject",
    ".mp4": "Video",
    ".mov": "Video",
    ".avi": "Video",
}

PRIMITIVE_TYPES = frozenset(
    {
        "int",
        "float",
        "double",
        "bool",
        "string",
        "char",
        "byte",
        "short",
        "long",
        "decimal",
        "void",
        "object",
        "uint",
        "ulong",
        "ushort",
        "sbyte",
        "var",
        "dynamic",
    }
)


def _frozen(mapping: dict) -> Mapping:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class AnalysisConfig:
    """Immutable thresholds and lookup tables shared by all analyzers.

    Attributes:
        script_extensions: Source file extensions handed to the extractor
        complexity_threshold: Method complexity above which an issue is raised
        max_methods_per_class: Method count above which a class is flagged
        max_class_lines: Class body line count above which a class is flagged
        max_brace_depth: Nesting bound for the brace-balancing body scan
        primitive_types: Type names never treated as dependencies
        large_file_bytes: File size above which a structure issue is raised
        max_folder_depth: Folder depth (relative to the project root) allowed
        standard_structure_ratio: Share of standard folders needed to count
            as following the standard structure
        cohesion_placeholder: Fixed cohesion value reported until a real
            intra-class cohesion metric exists
        major_issue_limit: Major code issue count above which an insight is raised
        comment_ratio_min: Comment ratio below which documentation is flagged
        strong_pattern_confidence: Confidence above which a detected pattern
            is reported as well implemented
        texture_memory_limit_mb: Texture memory above which textures are flagged
        audio_memory_limit_mb: Audio memory above which audio is flagged
        draw_call_limit: Estimated draw calls above which rendering is flagged
        coupling_limit: Average component coupling above which an insight is raised
        cohesion_min: Average component cohesion below which an insight is raised
        dependency_density_limit: Edges per graph node above which dependencies
            are flagged as dense
        maintainability_min: Maintainability score below which an insight is raised
        technical_debt_limit: Technical debt above which an insight is raised
        methods_per_class_limit: Average methods per class above which classes
            are flagged as oversized
        low_test_ratio: Test-to-script file ratio below which coverage is low
        good_test_ratio: Test-to-script file ratio above which coverage is good
        test_coverage_target: Test-to-script file ratio a project should reach
        parallel: Extract scripts in a process pool
        max_workers: Worker count for the process pool (None means CPU count)
        show_progress: Render rich progress bars while scanning
    """

    script_extensions: Tuple[str, ...] = (".cs",)
    complexity_threshold: int = 10
    max_methods_per_class: int = 20
    max_class_lines: int = 500
    max_brace_depth: int = 64
    primitive_types: frozenset = PRIMITIVE_TYPES

    standard_folders: Tuple[str, ...] = STANDARD_FOLDERS
    critical_folders: Tuple[str, ...] = ("Scripts", "Scenes")
    recommended_folders: Tuple[str, ...] = ("Prefabs", "Materials", "Textures")
    standard_structure_ratio: float = 0.6
    large_file_bytes: int = 50 * MB
    max_folder_depth: int = 6
    file_types: Mapping[str, FileType] = field(default_factory=lambda: _frozen(FILE_TYPES))
    expected_folders: Mapping[FileType, str] = field(
        default_factory=lambda: _frozen(EXPECTED_FOLDERS)
    )

    asset_types: Mapping[str, str] = field(default_factory=lambda: _frozen(ASSET_TYPES))
    large_asset_bytes: int = 10 * MB
    max_texture_size: int = 2048
    large_texture_bytes: int = 4 * MB
    texture_compression_mb: int = 100

    god_class_methods: int = 20
    component_based_ratio: float = 0.6
    cohesion_placeholder: float = 0.8
    instability_placeholder: float = 0.3
    abstractness_placeholder: float = 0.5

    major_issue_limit: int = 10
    comment_ratio_min: float = 0.1
    strong_pattern_confidence: float = 0.8
    texture_memory_limit_mb: int = 500
    audio_memory_limit_mb: int = 100
    draw_call_limit: int = 1000
    coupling_limit: float = 5.0
    cohesion_min: float = 0.6
    dependency_density_limit: float = 8.0
    maintainability_min: float = 0.6
    technical_debt_limit: float = 0.7
    methods_per_class_limit: int = 15
    low_test_ratio: float = 0.1
    good_test_ratio: float = 0.3
    test_coverage_target: float = 0.3

    exclude_patterns: Tuple[str, ...] = (".git", "Library", "Temp", "obj")
    parallel: bool = True
    max_workers: Optional[int] = None
    show_progress: bool = False

    def with_overrides(self, **overrides) -> "AnalysisConfig":
        """Return a copy with the given fields replaced, ignoring None values."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self


DEFAULT_CONFIG = AnalysisConfig()
