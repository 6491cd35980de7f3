"""
Top-level analysis pipeline.

Runs the analysis stages in order over a Unity project, reporting progress
after each one, and packs everything into a single AnalysisResult. Errors
never escape ``analyze_project``; they are stored on the result.
"""

import logging
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Union

from codetiming import Timer

from unity_auditor.architecture import ArchitectureAnalyzer
from unity_auditor.assets import AssetAnalyzer
from unity_auditor.cancellation import AnalysisCancelled, AnalysisTimeout, CancellationToken
from unity_auditor.config import DEFAULT_CONFIG, AnalysisConfig
from unity_auditor.insights import InsightGenerator
from unity_auditor.metrics import MetricsCalculator
from unity_auditor.models import (
    AnalysisError,
    AnalysisErrorKind,
    AnalysisResult,
    Insight,
    Recommendation,
)
from unity_auditor.performance import PerformanceAnalyzer
from unity_auditor.recommendations import RecommendationEngine
from unity_auditor.scripts.models import ScriptAnalysisResult
from unity_auditor.scripts.script_analyzer import ScriptAnalyzer
from unity_auditor.structure import StructureAnalyzer

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[float, str], None]

# Folders that mark a directory as a Unity project.
REQUIRED_FOLDERS = ("Assets", "ProjectSettings")


class ProjectAnalyzer:
    """Runs the full analysis pipeline over a Unity project."""

    def __init__(self, config: AnalysisConfig = DEFAULT_CONFIG):
        self.config = config
        self.structure_analyzer = StructureAnalyzer(config)
        self.script_analyzer = ScriptAnalyzer(config)
        self.asset_analyzer = AssetAnalyzer(config)
        self.architecture_analyzer = ArchitectureAnalyzer(config)
        self.performance_analyzer = PerformanceAnalyzer(config)
        self.metrics_calculator = MetricsCalculator(config)
        self.insight_generator = InsightGenerator(config)
        self.recommendation_engine = RecommendationEngine(config)

    def can_analyze(self, project_path: Union[str, Path]) -> bool:
        """True if the path is a directory holding Assets and ProjectSettings."""
        root = Path(project_path)
        return root.is_dir() and all((root / name).is_dir() for name in REQUIRED_FOLDERS)

    def analyze_project(
        self,
        project_path: Union[str, Path],
        progress_callback: Optional[ProgressCallback] = None,
        cancellation: Optional[CancellationToken] = None,
        timeout: Optional[float] = None,
    ) -> AnalysisResult:
        """Analyze a Unity project.

        Stages run sequentially: structure, scripts, assets, architecture,
        performance, metrics, insights, recommendations. The token is checked
        between stages and between script files.

        Args:
            project_path: Unity project root
            progress_callback: Called as ``(fraction, label)`` at start, after
                each stage and at the end
            cancellation: Token the caller may cancel from another thread
            timeout: Seconds before the run stops with a timeout error

        Returns:
            AnalysisResult; ``success`` is False when the run did not complete
        """
        root = Path(project_path)
        result = AnalysisResult(project_path=str(root))

        total_timer = Timer(logger=None)
        total_timer.start()

        if not self.can_analyze(root):
            message = f"Not a Unity project (missing {' or '.join(REQUIRED_FOLDERS)}): {root}"
            logger.error(message)
            result.error = AnalysisError(AnalysisErrorKind.PRECONDITION, message)
            result.elapsed_time = total_timer.stop()
            return result

        if cancellation is None:
            cancellation = CancellationToken(timeout)
        elif timeout is not None:
            cancellation.start_timer(timeout)

        def report(fraction: float, label: str) -> None:
            if progress_callback is not None:
                progress_callback(fraction, label)

        try:
            report(0.0, "Starting project analysis")
            for fraction, label, stage in self._stages(root, cancellation):
                cancellation.raise_if_cancelled()
                timer = Timer(logger=None)
                timer.start()
                stage(result)
                logger.info(f"{label} in {timer.stop():.3f}s")
                report(fraction, label)
            result.success = True
            report(1.0, "Analysis complete")
        except AnalysisTimeout as e:
            logger.warning(f"Analysis of {root} timed out")
            result.error = AnalysisError(AnalysisErrorKind.TIMEOUT, str(e))
        except AnalysisCancelled as e:
            logger.warning(f"Analysis of {root} was cancelled")
            result.error = AnalysisError(AnalysisErrorKind.CANCELLED, str(e))
        except Exception as e:
            logger.exception(f"Analysis of {root} failed")
            result.error = AnalysisError(AnalysisErrorKind.UNEXPECTED, f"Analysis failed: {e}")

        result.elapsed_time = total_timer.stop()
        logger.info(f"Analysis finished in {result.elapsed_time:.3f}s (success={result.success})")
        return result

    def _stages(
        self, root: Path, cancellation: CancellationToken
    ) -> List[Tuple[float, str, Callable[[AnalysisResult], None]]]:
        def structure(result: AnalysisResult) -> None:
            result.structure = self.structure_analyzer.analyze(root)

        def scripts(result: AnalysisResult) -> None:
            result.scripts = self._analyze_scripts(root / "Assets", cancellation)

        def assets(result: AnalysisResult) -> None:
            result.assets = self.asset_analyzer.analyze(root)

        def architecture(result: AnalysisResult) -> None:
            result.architecture = self.architecture_analyzer.analyze(result.scripts)

        def performance(result: AnalysisResult) -> None:
            result.performance = self.performance_analyzer.analyze(result.assets, result.structure)

        def metrics(result: AnalysisResult) -> None:
            result.metrics = self.metrics_calculator.project_metrics(result)

        def insights(result: AnalysisResult) -> None:
            result.insights = self.get_insights(result)

        def recommendations(result: AnalysisResult) -> None:
            result.recommendations = self.get_recommendations(result)

        return [
            (0.1, "Project structure analyzed", structure),
            (0.3, "Scripts analyzed", scripts),
            (0.5, "Assets analyzed", assets),
            (0.7, "Architecture analyzed", architecture),
            (0.8, "Performance analyzed", performance),
            (0.85, "Metrics calculated", metrics),
            (0.9, "Insights generated", insights),
            (0.95, "Recommendations generated", recommendations),
        ]

    def _analyze_scripts(
        self, assets_dir: Path, cancellation: CancellationToken
    ) -> ScriptAnalysisResult:
        files = self.script_analyzer.analyze_directory(assets_dir, cancellation)
        return self.script_analyzer.build_result(files)

    def get_insights(self, result: AnalysisResult) -> List[Insight]:
        """Regenerate insights for an existing result without rescanning."""
        return self.insight_generator.generate(result)

    def get_recommendations(self, result: AnalysisResult) -> List[Recommendation]:
        """Regenerate recommendations for an existing result without rescanning."""
        return self.recommendation_engine.generate(result)
