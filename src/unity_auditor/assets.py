"""
Asset analysis.

Classifies asset files by extension, reads importer settings and labels from
their ``.meta`` side files, and resolves the GUID references that text
serialized assets (scenes, prefabs, materials) hold to each other.
"""

import logging
import re
from collections import Counter, defaultdict
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from unity_auditor.config import DEFAULT_CONFIG, AnalysisConfig
from unity_auditor.models import (
    AssetAnalysisResult,
    AssetDependency,
    AssetInfo,
    AssetIssue,
    AssetIssueSeverity,
    AssetIssueType,
    AssetMetrics,
    AssetUsage,
    AssetUsageReport,
)
from unity_auditor.utils import format_bytes, read_meta, relative_posix
from unity_auditor.utils.meta import GUID_PATTERN

logger = logging.getLogger(__name__)

# Text-serialized assets that can reference other assets by GUID.
YAML_EXTENSIONS = (
    ".unity",
    ".prefab",
    ".mat",
    ".asset",
    ".anim",
    ".controller",
    ".overridecontroller",
)
REFERENCE_GUID = re.compile(r"guid:\s*([^,}\s]+)")
INLINE_LABELS = re.compile(r"labels:\s*\[(.*?)\]")
BLOCK_LABELS = re.compile(r"^labels:\s*\n((?:-\s*.+\n?)+)", re.MULTILINE)

# Folders whose assets are loaded by path at runtime and never referenced by GUID.
PATH_LOADED_FOLDERS = ("Resources", "StreamingAssets", "Editor")


def _int_setting(content: str, key: str) -> Optional[int]:
    match = re.search(rf"\b{key}:\s*(-?\d+)", content)
    return int(match.group(1)) if match else None


def _flag_setting(content: str, key: str) -> bool:
    return re.search(rf"\b{key}:\s*1\b", content) is not None


def parse_importer_settings(asset_type: str, content: str) -> Dict[str, Any]:
    """Importer settings of interest for the given asset type.

    Args:
        asset_type: Asset type name (Texture2D, AudioClip, Mesh, ...)
        content: Text of the .meta file

    Returns:
        Dictionary of settings; empty for types without tracked settings
    """
    match asset_type:
        case "Texture2D":
            return {
                "maxTextureSize": _int_setting(content, "maxTextureSize"),
                "textureFormat": _int_setting(content, "textureFormat"),
                "mipmaps": _flag_setting(content, "enableMipMap")
                or _flag_setting(content, "generateMipMaps"),
                "isReadable": _flag_setting(content, "isReadable"),
            }
        case "AudioClip":
            return {
                "loadType": _int_setting(content, "loadType"),
                "is3D": _flag_setting(content, "3D"),
                "loop": _flag_setting(content, "loopTime"),
            }
        case "Mesh":
            return {
                "importAnimation": _flag_setting(content, "importAnimation"),
                "optimizeMesh": _flag_setting(content, "optimizeMesh"),
                "addCollider": _flag_setting(content, "addCollider"),
            }
        case _:
            return {}


def parse_labels(content: str) -> List[str]:
    """Asset labels, from either an inline or a block YAML list."""
    inline = INLINE_LABELS.search(content)
    if inline:
        items = inline.group(1).split(",")
    else:
        block = BLOCK_LABELS.search(content)
        items = [line.lstrip("- ") for line in block.group(1).splitlines()] if block else []
    labels = []
    for item in items:
        label = item.strip().strip("'\"")
        if label and label not in labels:
            labels.append(label)
    return labels


def find_references(content: str) -> List[str]:
    """GUIDs referenced from a text-serialized asset, in first-seen order."""
    guids = []
    for line in content.splitlines():
        if "fileID:" not in line or "guid:" not in line:
            continue
        for guid in REFERENCE_GUID.findall(line):
            guid = guid.lower()
            if guid == "0" or guid in guids:
                continue
            guids.append(guid)
    return guids


class AssetAnalyzer:
    """Inventories assets and reports asset issues and metrics."""

    def __init__(self, config: AnalysisConfig = DEFAULT_CONFIG):
        self.config = config

    def analyze(self, project_root: Union[str, Path]) -> AssetAnalysisResult:
        """Analyze every asset under ``Assets``.

        Args:
            project_root: Unity project root

        Returns:
            AssetAnalysisResult
        """
        root = Path(project_root)
        assets_dir = root / "Assets"
        scan_root = assets_dir if assets_dir.is_dir() else root

        result = AssetAnalysisResult(assets=self.find_assets(scan_root, root))
        result.dependencies = self.resolve_dependencies(result.assets)
        result.usage_report = self.build_usage_report(result.assets, result.dependencies)
        result.issues = self.detect_issues(result.assets, result.usage_report)
        result.metrics = self.calculate_metrics(result.assets, result.usage_report)

        logger.info(f"Assets: {result.total_assets} assets, {len(result.issues)} issues")
        return result

    def find_assets(self, scan_root: Path, root: Path) -> List[AssetInfo]:
        excluded = set(self.config.exclude_patterns)
        assets = []
        for path in sorted(scan_root.rglob("*")):
            if not path.is_file() or excluded.intersection(path.relative_to(scan_root).parts):
                continue
            asset_type = self.config.asset_types.get(path.suffix.lower())
            if asset_type is None:
                continue
            assets.append(self.load_asset(path, root, asset_type))
        return assets

    def load_asset(self, path: Path, root: Path, asset_type: str) -> AssetInfo:
        """Build an AssetInfo, reading the side .meta file when present."""
        try:
            size = path.stat().st_size
        except OSError as e:
            logger.warning(f"Could not stat {path}: {e}")
            size = 0

        asset = AssetInfo(
            path=str(path),
            name=path.name,
            relative_path=relative_posix(path, root),
            asset_type=asset_type,
            size_bytes=size,
        )

        meta = read_meta(path)
        if meta is not None:
            guid = GUID_PATTERN.search(meta)
            asset.guid = guid.group(1).lower() if guid else None
            asset.metadata = parse_importer_settings(asset_type, meta)
            asset.labels = parse_labels(meta)
        return asset

    def resolve_dependencies(self, assets: List[AssetInfo]) -> List[AssetDependency]:
        """Read GUID references from text-serialized assets.

        References to GUIDs outside the project (built-in resources,
        packages) keep ``target`` as None.
        """
        path_by_guid = {a.guid: a.relative_path for a in assets if a.guid}
        dependencies = []
        for asset in assets:
            if Path(asset.name).suffix.lower() not in YAML_EXTENSIONS:
                continue
            try:
                content = Path(asset.path).read_text(encoding="utf-8", errors="replace")
            except OSError as e:
                logger.warning(f"Could not read {asset.path}: {e}")
                continue

            for guid in find_references(content):
                if guid == asset.guid:
                    continue
                dependencies.append(
                    AssetDependency(
                        source=asset.relative_path,
                        guid=guid,
                        target=path_by_guid.get(guid),
                    )
                )
        return dependencies

    def build_usage_report(
        self, assets: List[AssetInfo], dependencies: List[AssetDependency]
    ) -> AssetUsageReport:
        type_by_path = {a.relative_path: a.asset_type for a in assets}
        users = defaultdict(list)
        for dependency in dependencies:
            if dependency.target is not None and dependency.source not in users[dependency.target]:
                users[dependency.target].append(dependency.source)

        report = AssetUsageReport()
        usage_by_type: Counter = Counter()
        for asset in assets:
            used_by = users.get(asset.relative_path, [])
            report.usages.append(
                AssetUsage(
                    path=asset.relative_path,
                    usage_count=len(used_by),
                    used_by=list(used_by),
                    used_by_scenes=[u for u in used_by if type_by_path.get(u) == "Scene"],
                )
            )
            usage_by_type[asset.asset_type] += len(used_by)
            if not used_by and self._can_be_unused(asset):
                report.unused_assets.append(asset.relative_path)

        report.usage_by_type = dict(usage_by_type)
        return report

    def _can_be_unused(self, asset: AssetInfo) -> bool:
        if asset.asset_type == "Scene":
            return False
        parts = Path(asset.relative_path).parts
        return not any(folder in parts for folder in PATH_LOADED_FOLDERS)

    def detect_issues(
        self, assets: List[AssetInfo], usage_report: Optional[AssetUsageReport]
    ) -> List[AssetIssue]:
        """Large assets, oversized textures, then unused assets."""
        issues = []
        for asset in assets:
            if asset.size_bytes > self.config.large_asset_bytes:
                issues.append(
                    AssetIssue(
                        type=AssetIssueType.LARGE_ASSET,
                        description=(
                            f"Asset {asset.name} is very large ({format_bytes(asset.size_bytes)})"
                        ),
                        path=asset.relative_path,
                        severity=AssetIssueSeverity.WARNING,
                        suggestion="Consider optimizing this asset to reduce file size",
                    )
                )

            max_size = asset.metadata.get("maxTextureSize")
            if (
                asset.asset_type == "Texture2D"
                and max_size is not None
                and max_size > self.config.max_texture_size
            ):
                issues.append(
                    AssetIssue(
                        type=AssetIssueType.UNOPTIMIZED_ASSET,
                        description=(
                            f"Texture {asset.name} has very high resolution ({max_size}x{max_size})"
                        ),
                        path=asset.relative_path,
                        severity=AssetIssueSeverity.WARNING,
                        suggestion="Consider reducing texture resolution if not needed",
                    )
                )

        if usage_report is not None:
            for path in usage_report.unused_assets:
                issues.append(
                    AssetIssue(
                        type=AssetIssueType.UNUSED_ASSET,
                        description="Asset is not used anywhere in the project",
                        path=path,
                        severity=AssetIssueSeverity.INFO,
                        suggestion="Consider removing this asset if it's not needed",
                    )
                )
        return issues

    def calculate_metrics(
        self, assets: List[AssetInfo], usage_report: Optional[AssetUsageReport]
    ) -> AssetMetrics:
        count_by_type: Counter = Counter()
        size_by_type: Counter = Counter()
        for asset in assets:
            count_by_type[asset.asset_type] += 1
            size_by_type[asset.asset_type] += asset.size_bytes

        total_size = sum(a.size_bytes for a in assets)
        return AssetMetrics(
            total_assets=len(assets),
            total_size_bytes=total_size,
            count_by_type=dict(count_by_type),
            size_by_type=dict(size_by_type),
            unused_assets=len(usage_report.unused_assets) if usage_report else 0,
            average_asset_size=total_size / len(assets) if assets else 0.0,
        )
