"""Analyser registry and project-type detection."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

from testmigrator.config import DependencyFilter, ProjectType
from testmigrator.discovery import find_source_files, read_source
from testmigrator.errors import InputNotFoundError, UnknownProjectTypeError

if TYPE_CHECKING:
    from testmigrator.analyzers.base import CodeAnalyzer

logger = logging.getLogger(__name__)


def _analyzer_classes() -> dict[ProjectType, type]:
    from testmigrator.analyzers.desktop import DesktopAppAnalyzer
    from testmigrator.analyzers.logicapp import LogicAppAnalyzer
    from testmigrator.analyzers.webapi import WebApiAnalyzer
    from testmigrator.analyzers.webforms import WebFormsAnalyzer

    return {
        ProjectType.WEBFORMS: WebFormsAnalyzer,
        ProjectType.WEBAPI: WebApiAnalyzer,
        ProjectType.DESKTOP: DesktopAppAnalyzer,
        ProjectType.LOGICAPP: LogicAppAnalyzer,
    }


def coerce_project_type(value: ProjectType | str) -> ProjectType:
    if isinstance(value, ProjectType):
        return value
    try:
        return ProjectType((value or "auto").lower())
    except ValueError:
        raise UnknownProjectTypeError(value) from None


def get_analyzer(
    project_type: ProjectType | str,
    dependency_filter: DependencyFilter | None = None,
) -> CodeAnalyzer:
    """Create the analyser for an explicit (non-auto) project type."""
    project_type = coerce_project_type(project_type)
    classes = _analyzer_classes()
    if project_type not in classes:
        raise UnknownProjectTypeError(project_type.value)
    return classes[project_type](dependency_filter)


def _directory_has_function_marker(path: str) -> bool:
    for file_path in find_source_files(path, ("*.cs",)):
        if _file_has_function_marker(file_path):
            return True
    return False


def _file_has_function_marker(file_path: str) -> bool:
    from testmigrator.analyzers.logicapp import has_function_marker
    return has_function_marker(read_source(file_path))


def detect_project_type(path: str) -> ProjectType:
    """Pick the project type for a file or directory.

    Precedence: Web Forms code-behind, then controllers, then Azure
    Functions (host.json or function attributes), then desktop. A
    controller file would also pass the desktop fallback, so the order
    must not change.
    """
    from testmigrator.analyzers.logicapp import HOST_FILE
    from testmigrator.analyzers.webapi import is_controller_file
    from testmigrator.analyzers.webforms import CODE_BEHIND_SUFFIXES, is_code_behind

    if os.path.isdir(path):
        code_behind = tuple(f"*{suffix}" for suffix in CODE_BEHIND_SUFFIXES)
        if find_source_files(path, code_behind):
            return ProjectType.WEBFORMS
        if find_source_files(path, ("*Controller.cs",)):
            return ProjectType.WEBAPI
        if os.path.isfile(os.path.join(path, HOST_FILE)) or _directory_has_function_marker(path):
            return ProjectType.LOGICAPP
        return ProjectType.DESKTOP

    if os.path.isfile(path):
        if is_code_behind(path):
            return ProjectType.WEBFORMS
        if is_controller_file(path):
            return ProjectType.WEBAPI
        if _file_has_function_marker(path):
            return ProjectType.LOGICAPP
        return ProjectType.DESKTOP

    raise InputNotFoundError(path)


def resolve_analyzer(
    path: str,
    project_type: ProjectType | str = ProjectType.AUTO,
    dependency_filter: DependencyFilter | None = None,
) -> CodeAnalyzer:
    """Return the analyser for an explicit type, or detect one from the path."""
    project_type = coerce_project_type(project_type)
    if project_type == ProjectType.AUTO:
        project_type = detect_project_type(path)
        logger.debug(f"Detected project type '{project_type.value}' for {path}")
    return get_analyzer(project_type, dependency_filter)
