"""Dependency extraction shared by every analyser."""

from __future__ import annotations

import tree_sitter

from testmigrator.analyzers import syntax
from testmigrator.config import DependencyFilter
from testmigrator.models import DependencyInfo, DependencyKind, ParameterInfo

_DEFAULT_FILTER = DependencyFilter()


def is_interface_name(type_name: str) -> bool:
    """True for names following the IName convention (IUserService, ILogger<T>)."""
    return len(type_name) > 1 and type_name[0] == "I" and type_name[1].isupper()


def should_include_as_dependency(
    type_name: str, dependency_filter: DependencyFilter | None = None
) -> bool:
    """Exclude primitives, UI controls and UI framework namespaces."""
    flt = dependency_filter or _DEFAULT_FILTER
    if type_name in flt.excluded_types:
        return False
    return not type_name.startswith(flt.excluded_namespace_prefixes)


def make_dependency(
    type_name: str, variable_name: str, kind: DependencyKind
) -> DependencyInfo:
    mockable = is_interface_name(type_name)
    return DependencyInfo(
        type_name=type_name,
        full_type_name=type_name,
        variable_name=variable_name,
        kind=kind,
        is_interface=mockable,
        can_be_mocked=mockable,
    )


def _constructor_parameters(class_node: tree_sitter.Node) -> list[ParameterInfo]:
    """Parameters of the first constructor, or of a primary constructor."""
    constructors = syntax.members(class_node, "constructor_declaration")
    if constructors:
        return syntax.parameters(constructors[0])
    return syntax.parameters(class_node)


def constructor_dependencies(
    class_node: tree_sitter.Node,
    dependency_filter: DependencyFilter | None = None,
    filtered: bool = False,
) -> list[DependencyInfo]:
    """Constructor-injected dependencies of a class.

    With filtered=True, parameters rejected by should_include_as_dependency
    are dropped.
    """
    deps = []
    for info in _constructor_parameters(class_node):
        if filtered and not should_include_as_dependency(info.type, dependency_filter):
            continue
        deps.append(make_dependency(info.type, info.name, DependencyKind.CONSTRUCTOR_INJECTED))
    return deps


def field_dependencies(
    class_node: tree_sitter.Node,
    dependency_filter: DependencyFilter | None = None,
) -> list[DependencyInfo]:
    """One dependency per declared field variable whose type passes the filter."""
    deps = []
    for field_node in syntax.members(class_node, "field_declaration"):
        type_name, names = syntax.variable_names(field_node)
        if not type_name or not should_include_as_dependency(type_name, dependency_filter):
            continue
        for name in names:
            deps.append(make_dependency(type_name, name, DependencyKind.FIELD_DEPENDENCY))
    return deps
