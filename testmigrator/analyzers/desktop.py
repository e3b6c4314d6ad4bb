"""Windows Forms and WPF analyser; also the fallback for plain C# code."""

from __future__ import annotations

from dataclasses import replace
from enum import Enum

import tree_sitter

from testmigrator.analyzers import syntax
from testmigrator.analyzers.base import BaseAnalyzer, prefix_documentation
from testmigrator.analyzers.dependencies import constructor_dependencies, field_dependencies
from testmigrator.models import MethodMetadata, ParameterInfo

EVENT_HANDLER_TAG = "EventHandler"


class DesktopClassType(str, Enum):
    REGULAR = "Regular"
    WIN_FORM = "WinForm"
    WPF_WINDOW = "WpfWindow"
    WPF_USER_CONTROL = "WpfUserControl"
    WPF_PAGE = "WpfPage"


# Base-type substring -> class kind, checked in order
_CLASS_MARKERS = (
    ("Form", DesktopClassType.WIN_FORM),
    ("Window", DesktopClassType.WPF_WINDOW),
    ("UserControl", DesktopClassType.WPF_USER_CONTROL),
    ("Page", DesktopClassType.WPF_PAGE),
)


def determine_class_type(base_types: list[str]) -> DesktopClassType:
    for marker, class_type in _CLASS_MARKERS:
        if any(marker in base for base in base_types):
            return class_type
    return DesktopClassType.REGULAR


def is_event_handler(parameters: tuple[ParameterInfo, ...]) -> bool:
    """Matches the (object sender, XxxEventArgs e) handler shape."""
    if len(parameters) != 2:
        return False
    sender, args = parameters
    return sender.type in ("object", "object?") and args.type.endswith("EventArgs")


class DesktopAppAnalyzer(BaseAnalyzer):
    """Every method of every type, with form/window and event-handler tags."""

    name = "Desktop Application Analyzer"
    file_patterns = ("*.cs",)

    def extract_methods(
        self, tree: tree_sitter.Tree, file_path: str
    ) -> list[MethodMetadata]:
        methods: list[MethodMetadata] = []
        for type_node in syntax.iter_type_declarations(tree.root_node):
            class_name = syntax.type_name(type_node)
            namespace = syntax.namespace_of(type_node)
            class_type = determine_class_type(syntax.base_types(type_node))
            deps = tuple(
                field_dependencies(type_node, self.dependency_filter)
                + constructor_dependencies(type_node, self.dependency_filter, filtered=True)
            )

            for method in syntax.members(type_node, "method_declaration"):
                meta = syntax.method_metadata(method, class_name, namespace, file_path)
                doc = meta.documentation
                if class_type != DesktopClassType.REGULAR:
                    doc = prefix_documentation(doc, class_type.value)
                if is_event_handler(meta.parameters):
                    doc = prefix_documentation(doc, EVENT_HANDLER_TAG)
                methods.append(replace(meta, documentation=doc, dependencies=deps))
        return methods
