"""
Performance derivation from asset and scene facts.
"""

import logging
from typing import List, Optional

from unity_auditor.config import DEFAULT_CONFIG, MB, AnalysisConfig
from unity_auditor.models import (
    AssetAnalysisResult,
    PerformanceAnalysis,
    PerformanceImpact,
    PerformanceIssue,
    PerformanceIssueType,
    PerformanceMetrics,
    PerformanceRecommendation,
    ProjectStructure,
)
from unity_auditor.utils import format_bytes

logger = logging.getLogger(__name__)


class PerformanceAnalyzer:
    """Derives performance issues, memory metrics and quick recommendations."""

    def __init__(self, config: AnalysisConfig = DEFAULT_CONFIG):
        self.config = config

    def analyze(
        self, assets: AssetAnalysisResult, structure: Optional[ProjectStructure] = None
    ) -> PerformanceAnalysis:
        """Analyze asset memory use and scene renderer counts.

        Args:
            assets: Asset stage result
            structure: Structure stage result, for scene renderer counts

        Returns:
            PerformanceAnalysis
        """
        analysis = PerformanceAnalysis()
        analysis.issues = self.detect_issues(assets)
        analysis.metrics = self.calculate_metrics(assets, structure)
        analysis.recommendations = self.recommend(analysis.metrics)
        logger.info(
            f"Performance: {len(analysis.issues)} issues, "
            f"{analysis.metrics.texture_memory_mb}MB textures"
        )
        return analysis

    def detect_issues(self, assets: AssetAnalysisResult) -> List[PerformanceIssue]:
        issues = []
        for texture in assets.assets_of_type("Texture2D"):
            if texture.size_bytes > self.config.large_texture_bytes:
                issues.append(
                    PerformanceIssue(
                        type=PerformanceIssueType.LARGE_TEXTURE_SIZE,
                        description=(
                            f"Texture {texture.name} is very large "
                            f"({format_bytes(texture.size_bytes)})"
                        ),
                        location=texture.path,
                        impact=PerformanceImpact.MEDIUM,
                    )
                )
        return issues

    def calculate_metrics(
        self, assets: AssetAnalysisResult, structure: Optional[ProjectStructure] = None
    ) -> PerformanceMetrics:
        """Memory totals in whole megabytes, audio clip count and draw calls.

        Draw calls are approximated by the number of mesh renderers
        serialized in the project's scenes.
        """
        textures = assets.assets_of_type("Texture2D")
        meshes = assets.assets_of_type("Mesh")
        audio = assets.assets_of_type("AudioClip")
        return PerformanceMetrics(
            texture_memory_mb=sum(a.size_bytes for a in textures) // MB,
            mesh_memory_mb=sum(a.size_bytes for a in meshes) // MB,
            audio_clips=len(audio),
            audio_memory_mb=sum(a.size_bytes for a in audio) // MB,
            draw_calls=sum(s.renderer_count for s in structure.scenes) if structure else 0,
        )

    def recommend(self, metrics: PerformanceMetrics) -> List[PerformanceRecommendation]:
        recommendations = []
        if metrics.texture_memory_mb > self.config.texture_compression_mb:
            recommendations.append(
                PerformanceRecommendation(
                    title="Optimize Texture Compression",
                    description="Consider using compressed texture formats to reduce memory usage",
                    expected_impact=PerformanceImpact.HIGH,
                    implementation_effort=3,
                )
            )
        return recommendations
