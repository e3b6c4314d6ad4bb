"""Exceptions raised by the analysis and generation pipeline."""

from __future__ import annotations


class TestMigratorError(Exception):
    """Base class for all errors raised by testmigrator."""
    __test__ = False


class InputNotFoundError(TestMigratorError, FileNotFoundError):
    """The requested path is neither an existing file nor a directory."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Path not found: {path}")
        self.path = path


class AnalysisCancelledError(TestMigratorError):
    """A directory pass was cancelled between two files."""


class UnknownProjectTypeError(TestMigratorError, ValueError):
    def __init__(self, value: str) -> None:
        super().__init__(f"Unknown project type: {value}")
        self.value = value


class UnknownFrameworkError(TestMigratorError, ValueError):
    def __init__(self, value: str) -> None:
        super().__init__(f"Unknown test framework: {value}")
        self.value = value
