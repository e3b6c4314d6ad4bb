"""ASP.NET Web API / MVC controller analyser."""

from __future__ import annotations

from dataclasses import replace

import tree_sitter

from testmigrator.analyzers import syntax
from testmigrator.analyzers.base import BaseAnalyzer, prefix_documentation
from testmigrator.analyzers.dependencies import constructor_dependencies
from testmigrator.models import MethodMetadata

CONTROLLER_SUFFIX = "controller.cs"

# Checked in order; the first attribute match wins
_HTTP_VERBS = (
    ("HttpGet", "GET"),
    ("HttpPost", "POST"),
    ("HttpPut", "PUT"),
    ("HttpDelete", "DELETE"),
    ("HttpPatch", "PATCH"),
)


def is_controller_file(file_path: str) -> bool:
    return file_path.lower().endswith(CONTROLLER_SUFFIX)


def is_api_controller(class_node: tree_sitter.Node) -> bool:
    """Controller, ControllerBase and ApiController all contain 'Controller'."""
    return any("Controller" in base for base in syntax.base_types(class_node))


def http_method(method: tree_sitter.Node) -> str | None:
    names = syntax.attribute_names(method)
    for marker, verb in _HTTP_VERBS:
        if any(marker in name for name in names):
            return verb
    return None


class WebApiAnalyzer(BaseAnalyzer):
    """Public actions of controller classes, tagged with their HTTP verb."""

    name = "Web API Analyzer"
    file_patterns = ("*Controller.cs",)

    def can_analyze(self, file_path: str) -> bool:
        return is_controller_file(file_path)

    def extract_methods(
        self, tree: tree_sitter.Tree, file_path: str
    ) -> list[MethodMetadata]:
        methods: list[MethodMetadata] = []
        for class_node in syntax.iter_type_declarations(tree.root_node, syntax.CLASS_TYPES):
            if not is_api_controller(class_node):
                continue

            class_name = syntax.type_name(class_node)
            namespace = syntax.namespace_of(class_node)
            deps = tuple(constructor_dependencies(class_node, self.dependency_filter))

            for method in syntax.members(class_node, "method_declaration"):
                if "public" not in syntax.modifiers(method):
                    continue
                meta = syntax.method_metadata(method, class_name, namespace, file_path)
                verb = http_method(method)
                if verb:
                    meta = replace(meta, documentation=prefix_documentation(meta.documentation, verb))
                methods.append(replace(meta, dependencies=deps))
        return methods
