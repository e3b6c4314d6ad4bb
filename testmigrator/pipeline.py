"""Analysis and generation orchestration."""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path
from typing import Callable

from testmigrator.analyzers import resolve_analyzer
from testmigrator.config import AnalysisConfig, GenerationConfig
from testmigrator.errors import InputNotFoundError
from testmigrator.generators import get_generator
from testmigrator.models import MethodMetadata
from testmigrator.output import write_analysis

logger = logging.getLogger(__name__)

TEST_FILE_SUFFIX = "Tests"


def _analyze_path(
    path: str,
    analyzer,
    recursive: bool,
    cancel_event: threading.Event | None,
    progress_callback: Callable[[str], None] | None,
) -> list[MethodMetadata]:
    if os.path.isdir(path):
        return analyzer.analyze_directory(
            path, recursive, cancel_event=cancel_event, progress_callback=progress_callback
        )
    if not analyzer.can_analyze(path):
        logger.warning(f"{path} does not match {analyzer.name} file patterns, analysing anyway")
    if progress_callback:
        progress_callback(path)
    return analyzer.analyze_file(path)


def run_analysis(
    config: AnalysisConfig,
    progress_callback: Callable[[str], None] | None = None,
    cancel_event: threading.Event | None = None,
) -> list[MethodMetadata]:
    """Analyse a file or directory and optionally write the JSON result.

    Args:
        config: Analysis configuration.
        progress_callback: Optional callable(file_path) invoked before each
            file is analysed. Used by the CLI for Rich progress.
        cancel_event: Checked once per file; when set the pass is aborted.
    """
    if not os.path.exists(config.path):
        raise InputNotFoundError(config.path)

    analyzer = resolve_analyzer(config.path, config.project_type, config.dependency_filter)
    logger.info(f"Analysing {config.path} with {analyzer.name}")

    methods = _analyze_path(
        config.path, analyzer, config.recursive, cancel_event, progress_callback
    )

    if config.output_path:
        write_analysis(methods, config.output_path)
        logger.info(f"Wrote {len(methods)} methods to {config.output_path}")

    return methods


def group_by_type(methods: list[MethodMetadata]) -> dict[str, list[MethodMetadata]]:
    """Group methods by containing type, keeping first-seen order."""
    groups: dict[str, list[MethodMetadata]] = {}
    for method in methods:
        groups.setdefault(method.containing_type, []).append(method)
    return groups


def generate_tests(
    config: GenerationConfig,
    progress_callback: Callable[[str], None] | None = None,
    cancel_event: threading.Event | None = None,
) -> list[Path]:
    """Analyse the source path and write one test file per containing type.

    Returns the paths of the written files.
    """
    if not os.path.exists(config.source_path):
        raise InputNotFoundError(config.source_path)

    analyzer = resolve_analyzer(
        config.source_path, config.project_type, config.dependency_filter
    )
    generator = get_generator(config.framework)
    logger.info(f"Generating tests for {config.source_path} with {analyzer.name} and {generator.name}")

    methods = _analyze_path(
        config.source_path, analyzer, True, cancel_event, progress_callback
    )

    if not methods:
        logger.warning(f"No methods found in {config.source_path}, no tests written")

    out_dir = Path(config.output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    written: list[Path] = []
    for class_name, class_methods in group_by_type(methods).items():
        code = generator.generate_test_class(class_name, class_methods)
        test_path = out_dir / f"{class_name}{TEST_FILE_SUFFIX}.cs"
        test_path.write_text(code, encoding="utf-8")
        logger.debug(f"Generated {test_path}")
        written.append(test_path)

    return written
