"""Configuration types for analysis and test generation runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ProjectType(str, Enum):
    AUTO = "auto"
    WEBFORMS = "webforms"
    WEBAPI = "webapi"
    DESKTOP = "desktop"
    LOGICAPP = "logicapp"


class Framework(str, Enum):
    NUNIT = "nunit"
    XUNIT = "xunit"


DEFAULT_EXCLUDED_TYPES = frozenset({
    # Primitives
    "string", "int", "bool", "double", "float", "decimal",
    # WinForms controls
    "Button", "Label", "TextBox", "ComboBox", "ListBox",
    "Panel", "GroupBox", "TabControl", "DataGridView",
    "Timer", "ToolTip", "ContextMenuStrip",
})

DEFAULT_EXCLUDED_NAMESPACES = (
    "System.Windows.Forms.",
    "System.Windows.Controls.",
)


@dataclass(frozen=True)
class DependencyFilter:
    """Type names and namespace prefixes never treated as dependencies."""
    excluded_types: frozenset[str] = DEFAULT_EXCLUDED_TYPES
    excluded_namespace_prefixes: tuple[str, ...] = DEFAULT_EXCLUDED_NAMESPACES

    def extended(
        self,
        types: tuple[str, ...] | list[str] = (),
        namespace_prefixes: tuple[str, ...] | list[str] = (),
    ) -> DependencyFilter:
        """Return a copy of this filter with additional exclusions."""
        prefixes = tuple(
            p if p.endswith(".") else p + "." for p in namespace_prefixes
        )
        return DependencyFilter(
            excluded_types=self.excluded_types | frozenset(types),
            excluded_namespace_prefixes=self.excluded_namespace_prefixes + prefixes,
        )


@dataclass
class AnalysisConfig:
    path: str = ""
    project_type: ProjectType = ProjectType.AUTO
    output_path: str | None = None
    recursive: bool = True
    dependency_filter: DependencyFilter = field(default_factory=DependencyFilter)


@dataclass
class GenerationConfig:
    source_path: str = ""
    framework: Framework = Framework.XUNIT
    output_dir: str = "GeneratedTests"
    project_type: ProjectType = ProjectType.AUTO
    dependency_filter: DependencyFilter = field(default_factory=DependencyFilter)
