"""ASP.NET Web Forms code-behind analyser."""

from __future__ import annotations

from dataclasses import replace

import tree_sitter

from testmigrator.analyzers import syntax
from testmigrator.analyzers.base import BaseAnalyzer, prefix_documentation
from testmigrator.models import MethodMetadata

LIFECYCLE_TAG = "Web Forms Lifecycle"

_LIFECYCLE_METHODS = {
    name.lower() for name in (
        "Page_PreInit", "Page_Init", "Page_InitComplete",
        "Page_PreLoad", "Page_Load", "Page_LoadComplete",
        "Page_PreRender", "Page_PreRenderComplete",
        "Page_SaveStateComplete", "Page_Render", "Page_Unload",
        "OnInit", "OnLoad", "OnPreRender", "OnUnload",
    )
}

CODE_BEHIND_SUFFIXES = (".aspx.cs", ".ascx.cs", ".master.cs")


def is_lifecycle_method(name: str) -> bool:
    return name.lower() in _LIFECYCLE_METHODS


def is_code_behind(file_path: str) -> bool:
    return file_path.lower().endswith(CODE_BEHIND_SUFFIXES)


class WebFormsAnalyzer(BaseAnalyzer):
    """Pages, user controls and master pages. Every method is reported."""

    name = "Web Forms Analyzer"
    file_patterns = ("*.aspx.cs", "*.ascx.cs", "*.master.cs")

    def can_analyze(self, file_path: str) -> bool:
        return is_code_behind(file_path)

    def extract_methods(
        self, tree: tree_sitter.Tree, file_path: str
    ) -> list[MethodMetadata]:
        methods: list[MethodMetadata] = []
        for type_node in syntax.iter_type_declarations(tree.root_node):
            class_name = syntax.type_name(type_node)
            namespace = syntax.namespace_of(type_node)

            for method in syntax.members(type_node, "method_declaration"):
                meta = syntax.method_metadata(method, class_name, namespace, file_path)
                if is_lifecycle_method(meta.name):
                    meta = replace(
                        meta,
                        documentation=prefix_documentation(meta.documentation, LIFECYCLE_TAG),
                    )
                methods.append(meta)
        return methods
