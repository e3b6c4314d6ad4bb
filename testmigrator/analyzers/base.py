"""Analyser contract and the file/directory plumbing shared by all variants."""

from __future__ import annotations

import logging
import os
import threading
from typing import Callable, Protocol, runtime_checkable

import tree_sitter

from testmigrator.analyzers import syntax
from testmigrator.config import DependencyFilter
from testmigrator.discovery import find_source_files, read_source
from testmigrator.errors import AnalysisCancelledError, InputNotFoundError
from testmigrator.models import MethodMetadata

logger = logging.getLogger(__name__)


def prefix_documentation(documentation: str | None, tag: str) -> str:
    """Prepend a [tag] marker to a method's documentation text."""
    if documentation:
        return f"[{tag}] {documentation}"
    return f"[{tag}]"


@runtime_checkable
class CodeAnalyzer(Protocol):
    """Protocol that all project analysers must implement."""

    name: str
    file_patterns: tuple[str, ...]

    def can_analyze(self, file_path: str) -> bool:
        """Return True if this analyser handles the given file."""
        ...

    def analyze_file(self, file_path: str) -> list[MethodMetadata]:
        """Read and analyse a single source file."""
        ...

    def analyze_directory(
        self,
        directory_path: str,
        recursive: bool = True,
        cancel_event: threading.Event | None = None,
        progress_callback: Callable[[str], None] | None = None,
    ) -> list[MethodMetadata]:
        """Analyse every matching source file below a directory."""
        ...

    def analyze_content(
        self, content: str, file_name: str = "source.cs"
    ) -> list[MethodMetadata]:
        """Analyse source text directly; file_name is recorded on each method."""
        ...


class BaseAnalyzer:
    """Shared reading, walking and cancellation for the C# analysers.

    Subclasses set name/file_patterns and implement extract_methods.
    """

    name = "Base Analyzer"
    file_patterns: tuple[str, ...] = ("*.cs",)

    def __init__(self, dependency_filter: DependencyFilter | None = None) -> None:
        self.dependency_filter = dependency_filter or DependencyFilter()

    def can_analyze(self, file_path: str) -> bool:
        return file_path.lower().endswith(".cs")

    def analyze_file(self, file_path: str) -> list[MethodMetadata]:
        if not os.path.isfile(file_path):
            raise InputNotFoundError(file_path)
        content = read_source(file_path)
        return self.analyze_content(content, file_path)

    def analyze_directory(
        self,
        directory_path: str,
        recursive: bool = True,
        cancel_event: threading.Event | None = None,
        progress_callback: Callable[[str], None] | None = None,
    ) -> list[MethodMetadata]:
        if not os.path.isdir(directory_path):
            raise InputNotFoundError(directory_path)

        files = find_source_files(directory_path, self.file_patterns, recursive)
        logger.debug(f"{self.name}: {len(files)} candidate files in {directory_path}")

        methods: list[MethodMetadata] = []
        for file_path in files:
            if cancel_event is not None and cancel_event.is_set():
                raise AnalysisCancelledError(
                    f"Analysis of {directory_path} cancelled before {file_path}"
                )
            if progress_callback:
                progress_callback(file_path)
            file_methods = self.analyze_file(file_path)
            logger.debug(f"{file_path}: {len(file_methods)} methods")
            methods.extend(file_methods)

        logger.info(f"{self.name}: {len(methods)} methods from {len(files)} files")
        return methods

    def analyze_content(
        self, content: str, file_name: str = "source.cs"
    ) -> list[MethodMetadata]:
        tree = syntax.parse(content)
        if tree.root_node.has_error:
            logger.debug(f"{file_name}: syntax errors, extracting what parsed")
        return self.extract_methods(tree, file_name)

    def extract_methods(
        self, tree: tree_sitter.Tree, file_path: str
    ) -> list[MethodMetadata]:
        raise NotImplementedError
