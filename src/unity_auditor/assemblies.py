"""
Assembly definition and package manifest checks.

Both file kinds are JSON written by the Unity editor, but they are also
hand-edited, so every field is read defensively: a file that cannot be parsed
is logged and skipped, a field of the wrong type falls back to its default.
"""

import json
import logging
from collections import Counter
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from unity_auditor.graph import find_cycles, format_cycle
from unity_auditor.models import (
    AssemblyDefinition,
    PackageManifest,
    StructureIssue,
    StructureIssueSeverity,
    StructureIssueType,
)
from unity_auditor.utils import read_meta_guid, relative_posix

logger = logging.getLogger(__name__)

GUID_REFERENCE_PREFIX = "GUID:"
LOCAL_PACKAGE_PREFIX = "file:"


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def _load_json(path: Path) -> Optional[Any]:
    try:
        with open(path, "r", encoding="utf-8-sig") as f:
            return json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning(f"Could not parse {path}: {e}")
        return None


def load_assembly_definition(path: Path) -> Optional[AssemblyDefinition]:
    """Parse one ``.asmdef`` file.

    Args:
        path: Path to the assembly definition

    Returns:
        AssemblyDefinition, or None if the file is malformed or has no name
    """
    data = _load_json(path)
    if not isinstance(data, dict):
        if data is not None:
            logger.warning(f"Skipping {path}: top-level value is not an object")
        return None

    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        logger.warning(f"Skipping {path}: missing assembly name")
        return None

    version_defines = []
    for entry in data.get("versionDefines") or []:
        if isinstance(entry, dict) and isinstance(entry.get("define"), str):
            version_defines.append(entry["define"])

    auto_referenced = data.get("autoReferenced", True)
    no_engine_references = data.get("noEngineReferences", False)

    return AssemblyDefinition(
        path=str(path),
        name=name.strip(),
        references=_string_list(data.get("references")),
        define_constraints=_string_list(data.get("defineConstraints")),
        version_defines=version_defines,
        auto_referenced=auto_referenced if isinstance(auto_referenced, bool) else True,
        no_engine_references=(
            no_engine_references if isinstance(no_engine_references, bool) else False
        ),
        include_platforms=_string_list(data.get("includePlatforms")),
        exclude_platforms=_string_list(data.get("excludePlatforms")),
    )


def find_assembly_definitions(
    root: Path, exclude_patterns: Sequence[str] = ()
) -> List[AssemblyDefinition]:
    """Load every ``.asmdef`` under ``root`` in path order.

    ``GUID:`` references are rewritten to assembly names when the GUID
    matches one of the project's own assembly definitions.
    """
    excluded = set(exclude_patterns)
    paths = sorted(
        p
        for p in root.rglob("*.asmdef")
        if p.is_file() and not excluded.intersection(p.relative_to(root).parts)
    )

    definitions = []
    names_by_guid: Dict[str, str] = {}
    for path in paths:
        definition = load_assembly_definition(path)
        if definition is None:
            continue
        definitions.append(definition)
        guid = read_meta_guid(path)
        if guid:
            names_by_guid[guid] = definition.name

    for definition in definitions:
        definition.references = [
            names_by_guid.get(ref[len(GUID_REFERENCE_PREFIX):].lower(), ref)
            if ref.startswith(GUID_REFERENCE_PREFIX)
            else ref
            for ref in definition.references
        ]
    return definitions


def check_assemblies(
    definitions: Sequence[AssemblyDefinition], root: Path
) -> List[StructureIssue]:
    """Report duplicate assembly names and reference cycles.

    Args:
        definitions: Parsed assembly definitions
        root: Project root, for relative issue paths

    Returns:
        Duplicate-name warnings followed by critical cycle issues
    """
    issues: List[StructureIssue] = []

    counts = Counter(d.name for d in definitions)
    for name in sorted(n for n, count in counts.items() if count > 1):
        paths = [relative_posix(d.path, root) for d in definitions if d.name == name]
        issues.append(
            StructureIssue(
                type=StructureIssueType.DUPLICATE_ASSEMBLY,
                description=f"Assembly name '{name}' is defined {counts[name]} times",
                path=paths[0],
                severity=StructureIssueSeverity.WARNING,
                suggestion="Give each assembly definition a unique name",
            )
        )

    path_by_name: Dict[str, str] = {}
    adjacency: Dict[str, List[str]] = {}
    for definition in definitions:
        path_by_name.setdefault(definition.name, relative_posix(definition.path, root))
        targets = adjacency.setdefault(definition.name, [])
        targets.extend(r for r in definition.references if r not in targets)

    for cycle in find_cycles(adjacency):
        issues.append(
            StructureIssue(
                type=StructureIssueType.ASSEMBLY_CYCLE,
                description=f"Assembly reference cycle: {format_cycle(cycle)}",
                path=path_by_name[cycle[0]],
                severity=StructureIssueSeverity.CRITICAL,
                suggestion="Move shared code into a separate assembly referenced by both",
            )
        )
    return issues


def load_package_manifest(root: Path) -> Optional[PackageManifest]:
    """Read ``Packages/manifest.json``; None when missing or malformed."""
    path = root / "Packages" / "manifest.json"
    if not path.is_file():
        logger.debug(f"No package manifest at {path}")
        return None

    data = _load_json(path)
    if not isinstance(data, dict):
        return None
    dependencies = data.get("dependencies")
    if not isinstance(dependencies, dict):
        logger.warning(f"Package manifest {path} has no dependencies object")
        return None

    return PackageManifest(
        path=str(path),
        dependencies={
            name: version
            for name, version in dependencies.items()
            if isinstance(name, str) and isinstance(version, str)
        },
    )


def check_packages(manifest: Optional[PackageManifest], root: Path) -> List[StructureIssue]:
    """Report local ``file:`` packages whose target does not exist."""
    if manifest is None:
        return []

    issues = []
    packages_dir = root / "Packages"
    for name, version in sorted(manifest.dependencies.items()):
        if not version.startswith(LOCAL_PACKAGE_PREFIX):
            continue
        target = packages_dir / version[len(LOCAL_PACKAGE_PREFIX):]
        if target.exists():
            continue
        issues.append(
            StructureIssue(
                type=StructureIssueType.MISSING_PACKAGE,
                description=f"Local package {name} not found at {version[len(LOCAL_PACKAGE_PREFIX):]}",
                path="Packages/manifest.json",
                severity=StructureIssueSeverity.WARNING,
                suggestion="Fix the file: path in the package manifest or restore the package",
            )
        )
    return issues
