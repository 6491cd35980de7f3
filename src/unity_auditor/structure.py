"""
Project structure analysis.

Walks the ``Assets`` tree once to build the folder and file inventory, then
applies the structure rules over that inventory. Scene files, assembly
definitions, the package manifest and the editor version are read along the
way.
"""

import logging
import os
import re
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from unity_auditor.assemblies import (
    check_assemblies,
    check_packages,
    find_assembly_definitions,
    load_package_manifest,
)
from unity_auditor.cancellation import AnalysisCancelled
from unity_auditor.config import DEFAULT_CONFIG, AnalysisConfig
from unity_auditor.models import (
    FileInfo,
    FileType,
    FolderInfo,
    ProjectStructure,
    ProjectType,
    SceneInfo,
    StructureIssue,
    StructureIssueSeverity,
    StructureIssueType,
    UnityVersion,
)
from unity_auditor.scripts.source import find_usings, mask_source
from unity_auditor.utils import format_bytes, relative_posix

logger = logging.getLogger(__name__)

VALID_NAME = re.compile(r"^[A-Za-z0-9_]+$")
UNITY_VERSION_PATTERN = re.compile(r"m_EditorVersion:\s*(\d+)\.(\d+)\.(\d+)")
GAME_OBJECT_PATTERN = re.compile(r"^GameObject:", re.MULTILINE)
RENDERER_PATTERN = re.compile(r"^(?:Skinned)?MeshRenderer:", re.MULTILINE)

BUILTIN_COMPONENTS = (
    "Transform",
    "Camera",
    "Light",
    "MeshRenderer",
    "Collider",
    "Rigidbody",
    "AudioSource",
)

PROJECT_NAME_PATTERNS = (
    ("2d", ProjectType.GAME_2D),
    ("3d", ProjectType.GAME_3D),
    ("vr", ProjectType.VR),
    ("ar", ProjectType.AR),
    ("mobile", ProjectType.MOBILE),
    ("tool", ProjectType.TOOL),
    ("template", ProjectType.TEMPLATE),
)
MODEL_EXTENSIONS = (".fbx", ".obj")
SPRITE_EXTENSIONS = (".png", ".jpg")


def is_conventional_name(name: str) -> bool:
    """PascalCase-compatible: letters, digits and underscores, not lowercase-first."""
    return bool(VALID_NAME.match(name)) and not name[0].islower()


def read_unity_version(root: Path) -> Optional[UnityVersion]:
    """Editor version from ``ProjectSettings/ProjectVersion.txt``."""
    path = root / "ProjectSettings" / "ProjectVersion.txt"
    try:
        content = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.debug(f"No readable project version at {path}: {e}")
        return None

    match = UNITY_VERSION_PATTERN.search(content)
    if not match:
        logger.warning(f"Unrecognized editor version in {path}")
        return None
    return UnityVersion(*(int(part) for part in match.groups()))


def analyze_scene(path: Path, size_bytes: int = 0) -> SceneInfo:
    """Count GameObjects and renderers in a text-serialized scene.

    Binary scenes yield zero counts.
    """
    scene = SceneInfo(path=str(path), name=path.stem, size_bytes=size_bytes)
    try:
        content = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.warning(f"Could not read scene {path}: {e}")
        return scene

    scene.game_object_count = len(GAME_OBJECT_PATTERN.findall(content))
    scene.renderer_count = len(RENDERER_PATTERN.findall(content))
    scene.component_types = [c for c in BUILTIN_COMPONENTS if f"{c}:" in content]
    if "MonoBehaviour:" in content:
        scene.component_types.append("MonoBehaviour")
    return scene


class StructureAnalyzer:
    """Builds a ProjectStructure and applies the structure rules."""

    def __init__(self, config: AnalysisConfig = DEFAULT_CONFIG):
        self.config = config

    def analyze(self, project_root: Union[str, Path]) -> ProjectStructure:
        """Analyze the project layout.

        A failure while scanning is recorded as one critical issue rather
        than raised.

        Args:
            project_root: Directory holding ``Assets`` and ``ProjectSettings``

        Returns:
            ProjectStructure
        """
        root = Path(project_root)
        structure = ProjectStructure(root=str(root))

        try:
            assets_dir = root / "Assets"
            scan_root = assets_dir if assets_dir.is_dir() else root
            structure.folders, structure.files = self.scan(root, scan_root)
            structure.follows_standard_structure = self.follows_standard_structure(assets_dir)
            structure.project_type = self.detect_project_type(root, structure)
            structure.unity_version = read_unity_version(root)
            structure.scenes = [
                analyze_scene(Path(f.path), f.size_bytes)
                for f in structure.files
                if f.file_type == FileType.SCENE
            ]
            structure.assembly_definitions = find_assembly_definitions(
                scan_root, self.config.exclude_patterns
            )
            structure.manifest = load_package_manifest(root)

            structure.issues = self.detect_issues(root, structure)
            structure.issues.extend(check_assemblies(structure.assembly_definitions, root))
            structure.issues.extend(check_packages(structure.manifest, root))
        except AnalysisCancelled:
            raise
        except Exception as e:
            logger.exception(f"Structure analysis failed for {root}")
            structure.issues.append(
                StructureIssue(
                    type=StructureIssueType.ANALYSIS_FAILURE,
                    description=f"Structure analysis failed: {e}",
                    path=str(root),
                    severity=StructureIssueSeverity.CRITICAL,
                    suggestion="Check that the project directory is readable",
                )
            )

        logger.info(
            f"Structure: {len(structure.folders)} folders, {len(structure.files)} files, "
            f"{len(structure.issues)} issues"
        )
        return structure

    def scan(self, root: Path, scan_root: Path) -> Tuple[List[FolderInfo], List[FileInfo]]:
        """Walk ``scan_root`` and build the folder and file inventory.

        ``.meta`` files and excluded directories are skipped. Folder sizes
        are recursive.

        Args:
            root: Project root, for relative paths
            scan_root: Directory to walk (normally ``Assets``)

        Returns:
            Tuple of (folders, files), both in walk order
        """
        excluded = set(self.config.exclude_patterns)
        folders: List[FolderInfo] = []
        files: List[FileInfo] = []
        folder_by_path: Dict[str, FolderInfo] = {}

        for dirpath, dirnames, filenames in os.walk(scan_root):
            dirnames[:] = sorted(d for d in dirnames if d not in excluded)
            current = Path(dirpath)
            folder = FolderInfo(
                path=str(current),
                name=current.name,
                relative_path=relative_posix(current, root),
                subfolder_count=len(dirnames),
                tags=self.folder_tags(current, scan_root),
            )
            folders.append(folder)
            folder_by_path[str(current)] = folder

            for filename in sorted(filenames):
                if filename.endswith(".meta"):
                    continue
                file_info = self._file_info(current / filename, root)
                files.append(file_info)
                folder.file_count += 1

                # Recursive size: credit every enclosing folder up to the scan root.
                parent = current
                while True:
                    enclosing = folder_by_path.get(str(parent))
                    if enclosing is not None:
                        enclosing.size_bytes += file_info.size_bytes
                    if parent == scan_root or parent == parent.parent:
                        break
                    parent = parent.parent

        return folders, files

    def _file_info(self, path: Path, root: Path) -> FileInfo:
        extension = path.suffix.lower()
        try:
            size = path.stat().st_size
        except OSError as e:
            logger.warning(f"Could not stat {path}: {e}")
            size = 0

        info = FileInfo(
            path=str(path),
            name=path.name,
            relative_path=relative_posix(path, root),
            extension=extension,
            size_bytes=size,
            file_type=self.config.file_types.get(extension, FileType.OTHER),
        )

        if info.file_type == FileType.SCRIPT:
            try:
                content = path.read_text(encoding="utf-8-sig", errors="replace")
                info.line_count = len(content.splitlines())
                info.dependencies = find_usings(mask_source(content)[0])
            except OSError as e:
                logger.warning(f"Could not read {path}: {e}")
        return info

    def folder_tags(self, folder: Path, scan_root: Path) -> List[str]:
        tags = []
        name = folder.name
        if folder == scan_root and name == "Assets":
            tags.append("Root")
        if name in self.config.standard_folders:
            tags.append("Standard")
        if name == "Editor":
            tags.append("Editor")
        if name == "Resources":
            tags.append("Resources")
        if name == "StreamingAssets":
            tags.append("StreamingAssets")
        if "Plugins" in folder.relative_to(scan_root).parts:
            tags.append("Plugin")
        return tags

    def follows_standard_structure(self, assets_dir: Path) -> bool:
        """True when enough of the standard folders exist directly under Assets."""
        standard = self.config.standard_folders
        if not standard:
            return False
        present = sum(1 for name in standard if (assets_dir / name).is_dir())
        return present / len(standard) >= self.config.standard_structure_ratio

    def detect_project_type(self, root: Path, structure: ProjectStructure) -> ProjectType:
        """Guess the project type from its name, folders and assets."""
        project_name = root.resolve().name.lower()
        for pattern, project_type in PROJECT_NAME_PATTERNS:
            if pattern in project_name:
                return project_type

        folder_names = [f.name.lower() for f in structure.folders]
        if any(name in ("vr", "xr") for name in folder_names):
            return ProjectType.VR
        if "ar" in folder_names:
            return ProjectType.AR
        if any("mobile" in name for name in folder_names):
            return ProjectType.MOBILE

        extensions = {f.extension for f in structure.files}
        if extensions.intersection(MODEL_EXTENSIONS):
            return ProjectType.GAME_3D
        if extensions.intersection(SPRITE_EXTENSIONS):
            return ProjectType.GAME_2D
        return ProjectType.GENERAL

    def detect_issues(self, root: Path, structure: ProjectStructure) -> List[StructureIssue]:
        """Apply the structure rules in order.

        Missing critical folders, missing recommended folders, naming, deep
        nesting, large files, then misplaced files.
        """
        assets_dir = root / "Assets"
        issues: List[StructureIssue] = []

        for name in self.config.critical_folders:
            if not (assets_dir / name).is_dir():
                issues.append(
                    StructureIssue(
                        type=StructureIssueType.MISSING_FOLDER,
                        description=f"Missing critical folder: {name}",
                        path=f"Assets/{name}",
                        severity=StructureIssueSeverity.WARNING,
                        suggestion=f"Create a {name} folder to organize your {name.lower()}",
                    )
                )

        for name in self.config.recommended_folders:
            if not (assets_dir / name).is_dir():
                issues.append(
                    StructureIssue(
                        type=StructureIssueType.MISSING_FOLDER,
                        description=f"Missing recommended folder: {name}",
                        path=f"Assets/{name}",
                        severity=StructureIssueSeverity.INFO,
                        suggestion=f"Consider creating a {name} folder for better organization",
                    )
                )

        issues.extend(self._naming_issues(structure))

        for folder in structure.folders:
            depth = len(Path(folder.relative_path).parts)
            if depth > self.config.max_folder_depth:
                issues.append(
                    StructureIssue(
                        type=StructureIssueType.DEEP_NESTING,
                        description=f"Folder is nested too deeply (depth: {depth})",
                        path=folder.relative_path,
                        severity=StructureIssueSeverity.WARNING,
                        suggestion="Consider flattening the folder structure for better maintainability",
                    )
                )

        for file_info in structure.files:
            if file_info.size_bytes > self.config.large_file_bytes:
                issues.append(
                    StructureIssue(
                        type=StructureIssueType.LARGE_FILE,
                        description=f"File is very large ({format_bytes(file_info.size_bytes)})",
                        path=file_info.relative_path,
                        severity=StructureIssueSeverity.WARNING,
                        suggestion="Consider optimizing or splitting this large file",
                    )
                )

        for file_info in structure.files:
            expected = self.config.expected_folders.get(file_info.file_type)
            if expected is None:
                continue
            directory = Path(file_info.relative_path).parent.as_posix().lower()
            if expected.lower() in directory:
                continue
            issues.append(
                StructureIssue(
                    type=StructureIssueType.MISPLACED_FILE,
                    description=(
                        f"{file_info.file_type.value} file might be better placed "
                        f"in a {expected} folder"
                    ),
                    path=file_info.relative_path,
                    severity=StructureIssueSeverity.INFO,
                    suggestion=f"Consider moving this file to a {expected} folder for better organization",
                )
            )

        return issues

    def _naming_issues(self, structure: ProjectStructure) -> List[StructureIssue]:
        issues = []
        for folder in structure.folders:
            if "Root" in folder.tags or folder.relative_path == ".":
                continue
            if is_conventional_name(folder.name):
                continue
            issues.append(
                StructureIssue(
                    type=StructureIssueType.UNCONVENTIONAL_NAMING,
                    description=f"Folder name '{folder.name}' doesn't follow naming conventions",
                    path=folder.relative_path,
                    severity=StructureIssueSeverity.INFO,
                    suggestion="Use PascalCase for folder names without spaces or special characters",
                )
            )
        for file_info in structure.files:
            if not file_info.stem or is_conventional_name(file_info.stem):
                continue
            issues.append(
                StructureIssue(
                    type=StructureIssueType.UNCONVENTIONAL_NAMING,
                    description=f"File name '{file_info.name}' doesn't follow naming conventions",
                    path=file_info.relative_path,
                    severity=StructureIssueSeverity.INFO,
                    suggestion="Use PascalCase for file names without spaces or special characters",
                )
            )
        return issues
