"""
Tests for performance derivation.
"""

from unity_auditor.config import MB, DEFAULT_CONFIG
from unity_auditor.models import (
    AssetAnalysisResult,
    AssetInfo,
    PerformanceImpact,
    PerformanceIssueType,
    ProjectStructure,
    SceneInfo,
)
from unity_auditor.performance import PerformanceAnalyzer


def asset(name, asset_type, size):
    return AssetInfo(
        path=f"/project/Assets/{name}",
        name=name,
        relative_path=f"Assets/{name}",
        asset_type=asset_type,
        size_bytes=size,
    )


def test_memory_metrics_in_whole_megabytes():
    assets = AssetAnalysisResult(
        assets=[
            asset("Sky.png", "Texture2D", 3 * MB + 10),
            asset("Ground.png", "Texture2D", 2 * MB),
            asset("Ship.fbx", "Mesh", MB // 2),
            asset("Theme.ogg", "AudioClip", 7 * MB),
            asset("Click.wav", "AudioClip", 1000),
        ]
    )

    metrics = PerformanceAnalyzer().calculate_metrics(assets)

    assert metrics.texture_memory_mb == 5
    assert metrics.mesh_memory_mb == 0
    assert metrics.audio_clips == 2
    assert metrics.audio_memory_mb == 7
    assert metrics.draw_calls == 0


def test_draw_calls_from_scene_renderers():
    structure = ProjectStructure(
        root="/project",
        scenes=[
            SceneInfo(path="a.unity", name="A", renderer_count=12),
            SceneInfo(path="b.unity", name="B", renderer_count=30),
        ],
    )
    metrics = PerformanceAnalyzer().calculate_metrics(AssetAnalysisResult(), structure)
    assert metrics.draw_calls == 42


def test_large_texture_issue():
    assets = AssetAnalysisResult(
        assets=[
            asset("Huge.png", "Texture2D", 5 * MB),
            asset("Small.png", "Texture2D", MB),
            asset("Huge.wav", "AudioClip", 50 * MB),
        ]
    )

    issues = PerformanceAnalyzer().detect_issues(assets)

    assert len(issues) == 1
    assert issues[0].type == PerformanceIssueType.LARGE_TEXTURE_SIZE
    assert issues[0].description == "Texture Huge.png is very large (5.0 MB)"
    assert issues[0].location == "/project/Assets/Huge.png"
    assert issues[0].impact == PerformanceImpact.MEDIUM


def test_texture_compression_quick_win():
    assets = AssetAnalysisResult(assets=[asset("Atlas.png", "Texture2D", 101 * MB)])

    analysis = PerformanceAnalyzer().analyze(assets)

    assert [r.title for r in analysis.recommendations] == ["Optimize Texture Compression"]
    quick = analysis.recommendations[0]
    assert quick.expected_impact == PerformanceImpact.HIGH
    assert quick.implementation_effort == 3


def test_no_quick_win_under_threshold():
    assets = AssetAnalysisResult(assets=[asset("Atlas.png", "Texture2D", 100 * MB)])
    assert PerformanceAnalyzer().analyze(assets).recommendations == []


def test_thresholds_from_config():
    config = DEFAULT_CONFIG.with_overrides(large_texture_bytes=10, texture_compression_mb=0)
    assets = AssetAnalysisResult(assets=[asset("Tiny.png", "Texture2D", 2 * MB)])

    analysis = PerformanceAnalyzer(config).analyze(assets)

    assert len(analysis.issues) == 1
    assert len(analysis.recommendations) == 1
