"""
C# script analysis orchestrator.

Reads each source file once, masks it, and delegates extraction to the
specialized extractor classes. Directory scans can fan out over a process
pool; results are merged in file path order so the output is independent of
scheduling.
"""

import logging
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path
from typing import List, Optional, Union

from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)

from unity_auditor.cancellation import CancellationToken
from unity_auditor.config import DEFAULT_CONFIG, AnalysisConfig
from unity_auditor.graph import build_dependency_graph
from unity_auditor.metrics import MetricsCalculator
from unity_auditor.scripts.extractors.classes import ClassExtractor
from unity_auditor.scripts.extractors.interfaces import InterfaceExtractor
from unity_auditor.scripts.issues import detect_code_issues
from unity_auditor.scripts.models import (
    ClassDefinition,
    InterfaceDefinition,
    ScriptAnalysisResult,
    ScriptFile,
)
from unity_auditor.scripts.patterns import detect_patterns
from unity_auditor.scripts.source import SourceUnit, find_usings

logger = logging.getLogger(__name__)


def extract_script_file(file_path: Union[str, Path], max_brace_depth: int = 64) -> ScriptFile:
    """Extract every declaration from one C# file.

    Module-level so it can be submitted to a process pool. Never raises:
    read, decode and extraction failures are recorded in ``errors``.

    Args:
        file_path: Path to the .cs file
        max_brace_depth: Nesting bound for the body scan

    Returns:
        ScriptFile with the extracted facts
    """
    result = ScriptFile(file_path=str(file_path))

    try:
        with open(file_path, "r", encoding="utf-8-sig") as f:
            content = f.read()
    except UnicodeDecodeError as e:
        result.errors.append(f"Encoding error: {e}")
        logger.warning(f"Could not decode {file_path}: {e}")
        return result
    except OSError as e:
        result.errors.append(f"Read error: {e}")
        logger.warning(f"Could not read {file_path}: {e}")
        return result

    try:
        unit = SourceUnit.from_text(str(file_path), content)
        result.namespace = unit.namespace
        result.usings = find_usings(unit.masked)
        result.line_count = unit.line_count
        result.comment_line_count = unit.comment_lines
    except Exception as e:
        result.errors.append(f"Unexpected error: {e}")
        logger.exception(f"Error preparing {file_path}")
        return result

    try:
        ClassExtractor(max_brace_depth).extract(unit, result)
    except Exception as e:
        result.errors.append(f"Class extraction failed: {e}")
        logger.error(f"Class extraction failed for {file_path}: {e}")

    try:
        InterfaceExtractor(max_brace_depth).extract(unit, result)
    except Exception as e:
        result.errors.append(f"Interface extraction failed: {e}")
        logger.error(f"Interface extraction failed for {file_path}: {e}")

    return result


class ScriptAnalyzer:
    """
    Orchestrates C# script analysis.

    Extraction, dependency graph building, pattern detection, code issue
    detection and code metrics for a file or a directory tree.
    """

    def __init__(self, config: AnalysisConfig = DEFAULT_CONFIG):
        self.config = config
        self.metrics_calculator = MetricsCalculator(config)

    def analyze_file(self, file_path: Union[str, Path]) -> ScriptFile:
        """Analyze a single C# file.

        Args:
            file_path: Path to the C# file

        Returns:
            ScriptFile containing all extracted information
        """
        return extract_script_file(file_path, self.config.max_brace_depth)

    def find_script_files(self, root_path: Union[str, Path]) -> List[Path]:
        """List script files under ``root_path`` in path order.

        A path component equal to one of the exclusion patterns removes the
        file from the scan.
        """
        root_path = Path(root_path)
        if root_path.is_file():
            return [root_path] if root_path.suffix in self.config.script_extensions else []

        excluded = set(self.config.exclude_patterns)
        script_files = []
        for extension in self.config.script_extensions:
            for path in root_path.rglob(f"*{extension}"):
                if not path.is_file():
                    continue
                if excluded.intersection(path.relative_to(root_path).parts):
                    continue
                script_files.append(path)
        return sorted(set(script_files))

    def analyze_directory(
        self,
        root_path: Union[str, Path],
        cancellation: Optional[CancellationToken] = None,
    ) -> List[ScriptFile]:
        """Analyze all script files in a directory recursively.

        Args:
            root_path: Root directory to analyze
            cancellation: Token checked between files

        Returns:
            List of ScriptFile results sorted by file path

        Raises:
            AnalysisCancelled: If the token fires during the scan
        """
        script_files = self.find_script_files(root_path)
        if not script_files:
            logger.warning(f"No script files found in {root_path}")
            return []

        results: List[ScriptFile] = []
        parallel = self.config.parallel and len(script_files) > 1

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            disable=not self.config.show_progress,
        ) as progress:
            task = progress.add_task(
                f"Analyzing {len(script_files)} scripts...", total=len(script_files)
            )

            if parallel:
                with ProcessPoolExecutor(max_workers=self.config.max_workers) as executor:
                    future_to_file = {
                        executor.submit(
                            extract_script_file, str(path), self.config.max_brace_depth
                        ): path
                        for path in script_files
                    }

                    for future in as_completed(future_to_file):
                        path = future_to_file[future]
                        if cancellation is not None and cancellation.is_cancelled:
                            executor.shutdown(wait=False, cancel_futures=True)
                            cancellation.raise_if_cancelled()
                        try:
                            results.append(future.result())
                        except Exception as e:
                            logger.error(f"Failed to analyze {path}: {e}")
                            results.append(
                                ScriptFile(file_path=str(path), errors=[f"Worker error: {e}"])
                            )
                        finally:
                            progress.update(task, advance=1)
            else:
                for path in script_files:
                    if cancellation is not None:
                        cancellation.raise_if_cancelled()
                    results.append(self.analyze_file(path))
                    progress.update(task, advance=1)

        results.sort(key=lambda r: r.file_path)
        return results

    def _collect_files(self, path: Union[str, Path]) -> List[ScriptFile]:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Path does not exist: {path}")
        if path.is_file():
            return [self.analyze_file(path)]
        return self.analyze_directory(path)

    def extract_classes(self, path: Union[str, Path]) -> List[ClassDefinition]:
        """Extract class definitions from a file or a directory tree."""
        return [c for f in self._collect_files(path) for c in f.classes]

    def extract_interfaces(self, path: Union[str, Path]) -> List[InterfaceDefinition]:
        """Extract interface definitions from a file or a directory tree."""
        return [i for f in self._collect_files(path) for i in f.interfaces]

    def analyze(
        self,
        path: Union[str, Path],
        cancellation: Optional[CancellationToken] = None,
    ) -> ScriptAnalysisResult:
        """Run the full script stage over a file or directory.

        Args:
            path: C# file or directory
            cancellation: Token checked between files

        Returns:
            ScriptAnalysisResult

        Raises:
            FileNotFoundError: If ``path`` does not exist
            AnalysisCancelled: If the token fires during the scan
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Path does not exist: {path}")

        if path.is_file():
            files = [self.analyze_file(path)]
        else:
            files = self.analyze_directory(path, cancellation)
        return self.build_result(files)

    def build_result(self, files: List[ScriptFile]) -> ScriptAnalysisResult:
        """Derive graph, patterns, issues and metrics from extracted files."""
        classes = [c for f in files for c in f.classes]
        interfaces = [i for f in files for i in f.interfaces]

        result = ScriptAnalysisResult(
            files=files,
            classes=classes,
            interfaces=interfaces,
            dependency_graph=build_dependency_graph(classes, self.config.primitive_types),
            patterns=detect_patterns(classes),
            issues=detect_code_issues(classes, self.config),
            warnings=[f"{f.file_path}: {error}" for f in files for error in f.errors],
        )
        result.metrics = self.metrics_calculator.code_metrics(result)

        logger.info(
            f"Analyzed {len(files)} scripts: {len(classes)} classes, "
            f"{len(interfaces)} interfaces, {len(result.issues)} issues"
        )
        return result
