"""Azure Functions / Logic Apps Standard analyser.

Only public methods carrying a ``[FunctionName]`` (in-process) or
``[Function]`` (isolated worker) attribute are reported. The trigger and the
Durable Functions role are read from the parameter attributes and written
into the documentation field, e.g.::

    [Orchestrator] [OrchestrationTrigger] FunctionName: RunOrder
"""

from __future__ import annotations

from dataclasses import replace

import tree_sitter

from testmigrator.analyzers import syntax
from testmigrator.analyzers.base import BaseAnalyzer
from testmigrator.analyzers.dependencies import constructor_dependencies
from testmigrator.models import MethodMetadata

FUNCTION_ATTRIBUTES = ("FunctionName", "Function")

# Source markers used when detecting a functions project from file content
FUNCTION_MARKERS = ("[FunctionName", "[Function(")

HOST_FILE = "host.json"

TRIGGERS = (
    "HttpTrigger",
    "ServiceBusTrigger",
    "TimerTrigger",
    "BlobTrigger",
    "QueueTrigger",
    "EventGridTrigger",
    "EventHubTrigger",
    "CosmosDBTrigger",
    "OrchestrationTrigger",
    "ActivityTrigger",
    "EntityTrigger",
)

_FUNCTION_TYPES = (
    ("OrchestrationTrigger", "Orchestrator"),
    ("ActivityTrigger", "Activity"),
    ("EntityTrigger", "Entity"),
)


def function_name(method: tree_sitter.Node) -> str | None:
    """Registered function name, or None when the method is not a function."""
    for attr in syntax.attributes(method):
        if syntax.text(attr.child_by_field_name("name")) in FUNCTION_ATTRIBUTES:
            arg = syntax.first_attribute_argument(attr)
            if arg is not None:
                # [FunctionName(nameof(Run))] registers "Run"
                if arg.startswith("nameof(") and arg.endswith(")"):
                    return arg[len("nameof("):-1].split(".")[-1].strip()
                return arg
            return syntax.text(method.child_by_field_name("name"))
    return None


def _parameter_attribute_names(method: tree_sitter.Node) -> list[str]:
    names = []
    for param in syntax.parameter_nodes(method):
        names.extend(syntax.attribute_names(param))
    return names


def trigger_type(attribute_names: list[str]) -> str | None:
    for trigger in TRIGGERS:
        if any(trigger in name for name in attribute_names):
            return trigger
    return None


def function_type(attribute_names: list[str]) -> str | None:
    for trigger, kind in _FUNCTION_TYPES:
        if any(trigger in name for name in attribute_names):
            return kind
    return None


def has_function_marker(content: str) -> bool:
    return any(marker in content for marker in FUNCTION_MARKERS)


class LogicAppAnalyzer(BaseAnalyzer):
    name = "Logic App Analyzer"
    file_patterns = ("*.cs",)

    def extract_methods(
        self, tree: tree_sitter.Tree, file_path: str
    ) -> list[MethodMetadata]:
        methods: list[MethodMetadata] = []
        for class_node in syntax.iter_type_declarations(tree.root_node, syntax.CLASS_TYPES):
            class_name = syntax.type_name(class_node)
            namespace = syntax.namespace_of(class_node)
            deps = None

            for method in syntax.members(class_node, "method_declaration"):
                if "public" not in syntax.modifiers(method):
                    continue
                registered = function_name(method)
                if registered is None:
                    continue

                meta = syntax.method_metadata(method, class_name, namespace, file_path)
                param_attrs = _parameter_attribute_names(method)
                trigger = trigger_type(param_attrs)
                kind = function_type(param_attrs)

                parts = []
                if kind:
                    parts.append(f"[{kind}]")
                if trigger:
                    parts.append(f"[{trigger}]")
                parts.append(f"FunctionName: {registered}")
                if meta.documentation:
                    parts.append(meta.documentation)

                if deps is None:
                    deps = tuple(constructor_dependencies(class_node, self.dependency_filter))
                methods.append(replace(meta, documentation=" ".join(parts), dependencies=deps))
        return methods
