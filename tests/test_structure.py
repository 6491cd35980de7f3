"""
Tests for project structure analysis.
"""

from unity_auditor.config import DEFAULT_CONFIG, STANDARD_FOLDERS
from unity_auditor.models import (
    FileType,
    ProjectType,
    StructureIssueSeverity,
    StructureIssueType,
    UnityVersion,
)
from unity_auditor.structure import (
    StructureAnalyzer,
    analyze_scene,
    is_conventional_name,
    read_unity_version,
)

SCENE_YAML = """%YAML 1.1
--- !u!1 &100
GameObject:
  m_Name: Player
--- !u!4 &101
Transform:
  m_GameObject: {fileID: 100}
--- !u!23 &102
MeshRenderer:
  m_Enabled: 1
--- !u!1 &103
GameObject:
  m_Name: Ground
--- !u!114 &104
MonoBehaviour:
  m_Enabled: 1
"""


def descriptions(structure, issue_type):
    return [i.description for i in structure.issues_of_type(issue_type)]


def test_missing_folders_on_empty_project(make_unity_project):
    """Critical folders are warnings, recommended folders are info."""
    structure = StructureAnalyzer().analyze(make_unity_project())

    missing = structure.issues_of_type(StructureIssueType.MISSING_FOLDER)
    by_path = {i.path: i for i in missing}

    assert by_path["Assets/Scripts"].severity == StructureIssueSeverity.WARNING
    assert by_path["Assets/Scenes"].severity == StructureIssueSeverity.WARNING
    assert by_path["Assets/Scripts"].description == "Missing critical folder: Scripts"
    for name in ("Prefabs", "Materials", "Textures"):
        issue = by_path[f"Assets/{name}"]
        assert issue.severity == StructureIssueSeverity.INFO
        assert issue.description == f"Missing recommended folder: {name}"
    assert len(missing) == 5


def test_present_folders_are_not_reported(make_unity_project):
    root = make_unity_project(folders=("Assets/Scripts", "Assets/Scenes", "Assets/Prefabs"))
    structure = StructureAnalyzer().analyze(root)

    assert descriptions(structure, StructureIssueType.MISSING_FOLDER) == [
        "Missing recommended folder: Materials",
        "Missing recommended folder: Textures",
    ]


def test_standard_structure_ratio(make_unity_project):
    few = StructureAnalyzer().analyze(make_unity_project(folders=("Assets/Scripts",)))
    assert not few.follows_standard_structure

    root = make_unity_project(
        name="StandardProject", folders=tuple(f"Assets/{n}" for n in STANDARD_FOLDERS[:8])
    )
    assert StructureAnalyzer().analyze(root).follows_standard_structure


def test_inventory_skips_meta_files(make_unity_project):
    root = make_unity_project(
        {
            "Assets/Scripts/Player.cs": "using UnityEngine;\nclass Player { }\n",
            "Assets/Scripts/Player.cs.meta": "guid: 1234\n",
            "Assets/Textures/Hero.png": b"\x89PNG" + b"\0" * 96,
        }
    )
    structure = StructureAnalyzer().analyze(root)

    names = [f.name for f in structure.files]
    assert names == ["Player.cs", "Hero.png"]

    script = structure.files[0]
    assert script.file_type == FileType.SCRIPT
    assert script.relative_path == "Assets/Scripts/Player.cs"
    assert script.line_count == 2
    assert script.dependencies == ["UnityEngine"]
    assert structure.files[1].file_type == FileType.TEXTURE


def test_folder_sizes_are_recursive(make_unity_project):
    root = make_unity_project({"Assets/Art/Textures/Hero.png": b"\0" * 100})
    structure = StructureAnalyzer().analyze(root)

    folders = {f.relative_path: f for f in structure.folders}
    assert folders["Assets/Art/Textures"].size_bytes == 100
    assert folders["Assets/Art"].size_bytes == 100
    assert folders["Assets"].size_bytes == 100
    assert folders["Assets/Art"].file_count == 0
    assert folders["Assets/Art"].subfolder_count == 1


def test_folder_tags(make_unity_project):
    root = make_unity_project(folders=("Assets/Editor", "Assets/Plugins/Native", "Assets/Resources"))
    structure = StructureAnalyzer().analyze(root)

    tags = {f.relative_path: f.tags for f in structure.folders}
    assert tags["Assets"] == ["Root"]
    assert tags["Assets/Editor"] == ["Standard", "Editor"]
    assert tags["Assets/Plugins/Native"] == ["Plugin"]
    assert "Resources" in tags["Assets/Resources"]


def test_naming_conventions(make_unity_project):
    root = make_unity_project(
        {
            "Assets/my stuff/Readme.txt": "x",
            "Assets/Scripts/lowercase.cs": "class Lower { }",
            "Assets/Scripts/Good_Name2.cs": "class Good { }",
        }
    )
    structure = StructureAnalyzer().analyze(root)

    assert descriptions(structure, StructureIssueType.UNCONVENTIONAL_NAMING) == [
        "Folder name 'my stuff' doesn't follow naming conventions",
        "File name 'lowercase.cs' doesn't follow naming conventions",
    ]


def test_is_conventional_name():
    assert is_conventional_name("PlayerController")
    assert is_conventional_name("Level_01")
    assert not is_conventional_name("player")
    assert not is_conventional_name("My Folder")
    assert not is_conventional_name("Bad-Name")


def test_deep_nesting(make_unity_project):
    """Depth counts path components from the project root."""
    root = make_unity_project(folders=("Assets/A/B/C/D/E/F",))
    structure = StructureAnalyzer().analyze(root)

    deep = structure.issues_of_type(StructureIssueType.DEEP_NESTING)
    assert [(i.path, i.description) for i in deep] == [
        ("Assets/A/B/C/D/E/F", "Folder is nested too deeply (depth: 7)")
    ]
    assert deep[0].severity == StructureIssueSeverity.WARNING


def test_deep_nesting_threshold_from_config(make_unity_project):
    root = make_unity_project(folders=("Assets/A/B",))
    structure = StructureAnalyzer(DEFAULT_CONFIG.with_overrides(max_folder_depth=2)).analyze(root)

    assert [i.path for i in structure.issues_of_type(StructureIssueType.DEEP_NESTING)] == [
        "Assets/A/B"
    ]


def test_large_file(make_unity_project):
    root = make_unity_project({"Assets/Audio/Theme.ogg": b"\0" * 2048})
    config = DEFAULT_CONFIG.with_overrides(large_file_bytes=1024)
    structure = StructureAnalyzer(config).analyze(root)

    large = structure.issues_of_type(StructureIssueType.LARGE_FILE)
    assert [(i.path, i.description) for i in large] == [
        ("Assets/Audio/Theme.ogg", "File is very large (2.0 KB)")
    ]


def test_misplaced_files(make_unity_project):
    root = make_unity_project(
        {
            "Assets/Player.cs": "class Player { }",
            "Assets/Scripts/Enemy.cs": "class Enemy { }",
            "Assets/Game/Scripts/AI/Brain.cs": "class Brain { }",
        }
    )
    structure = StructureAnalyzer().analyze(root)

    misplaced = structure.issues_of_type(StructureIssueType.MISPLACED_FILE)
    assert [(i.path, i.description) for i in misplaced] == [
        ("Assets/Player.cs", "Script file might be better placed in a Scripts folder")
    ]
    assert misplaced[0].severity == StructureIssueSeverity.INFO


def test_unity_version(make_unity_project, temp_dir):
    root = make_unity_project(version="2021.3.5f1")
    assert read_unity_version(root) == UnityVersion(2021, 3, 5)
    assert str(read_unity_version(root)) == "2021.3.5"

    assert read_unity_version(temp_dir / "nowhere") is None

    (root / "ProjectSettings" / "ProjectVersion.txt").write_text("garbage", encoding="utf-8")
    assert read_unity_version(root) is None


def test_project_type_from_name(make_unity_project):
    assert StructureAnalyzer().analyze(make_unity_project(name="Space2DShooter")).project_type == (
        ProjectType.GAME_2D
    )
    assert StructureAnalyzer().analyze(make_unity_project(name="LevelTools")).project_type == (
        ProjectType.TOOL
    )


def test_project_type_from_contents(make_unity_project):
    general = StructureAnalyzer().analyze(make_unity_project())
    assert general.project_type == ProjectType.GENERAL

    meshes = make_unity_project({"Assets/Models/Ship.fbx": b"fbx"}, name="MeshProject")
    assert StructureAnalyzer().analyze(meshes).project_type == ProjectType.GAME_3D

    headset = make_unity_project(folders=("Assets/XR",), name="HeadsetProject")
    assert StructureAnalyzer().analyze(headset).project_type == ProjectType.VR


def test_scene_summary(make_unity_project):
    root = make_unity_project({"Assets/Scenes/Main.unity": SCENE_YAML})
    structure = StructureAnalyzer().analyze(root)

    assert len(structure.scenes) == 1
    scene = structure.scenes[0]
    assert scene.name == "Main"
    assert scene.game_object_count == 2
    assert scene.renderer_count == 1
    assert scene.component_types == ["Transform", "MeshRenderer", "MonoBehaviour"]


def test_analyze_scene_unreadable(temp_dir):
    scene = analyze_scene(temp_dir / "Missing.unity")
    assert scene.game_object_count == 0
    assert scene.component_types == []
