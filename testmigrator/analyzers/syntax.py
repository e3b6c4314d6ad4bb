"""Tree-sitter helpers for reading C# declarations."""

from __future__ import annotations

from typing import Iterator

import tree_sitter
import tree_sitter_c_sharp as ts_csharp

from testmigrator.models import MethodMetadata, ParameterInfo

# Declarations whose methods the analysers inspect
CLASS_TYPES = ("class_declaration",)
TYPE_DECLARATIONS = (
    "class_declaration", "struct_declaration",
    "record_declaration", "record_struct_declaration",
)

_NAMESPACE_TYPES = ("namespace_declaration", "file_scoped_namespace_declaration")

_parser: tree_sitter.Parser | None = None


def get_parser() -> tree_sitter.Parser:
    """Get or create the shared C# parser."""
    global _parser
    if _parser is None:
        _parser = tree_sitter.Parser(tree_sitter.Language(ts_csharp.language()))
    return _parser


def parse(content: str) -> tree_sitter.Tree:
    """Parse C# source text. Malformed input yields a tree with ERROR nodes."""
    return get_parser().parse(content.encode("utf-8"))


def text(node: tree_sitter.Node | None) -> str:
    if node is None:
        return ""
    return node.text.decode("utf-8", errors="replace")


def is_broken_declaration(node: tree_sitter.Node) -> bool:
    """An ERROR node that still carries a type name, left by an unclosed type."""
    return node.type == "ERROR" and node.child_by_field_name("name") is not None


def iter_type_declarations(
    node: tree_sitter.Node, kinds: tuple[str, ...] = TYPE_DECLARATIONS
) -> Iterator[tree_sitter.Node]:
    """Yield every type declaration of the given kinds, nested ones included.

    A type whose closing brace is missing parses as an ERROR node holding
    its members directly; it is yielded too so the members that did parse
    are still reported.
    """
    for child in node.children:
        if child.type in kinds or is_broken_declaration(child):
            yield child
        yield from iter_type_declarations(child, kinds)


def _body(node: tree_sitter.Node) -> tree_sitter.Node | None:
    body = node.child_by_field_name("body")
    if body is None:
        for c in node.children:
            if c.type == "declaration_list":
                return c
    return body


def members(type_node: tree_sitter.Node, kind: str) -> list[tree_sitter.Node]:
    """Direct members of a type declaration with the given node type."""
    body = _body(type_node)
    if body is None:
        if is_broken_declaration(type_node):
            return [c for c in type_node.named_children if c.type == kind]
        return []
    return [c for c in body.named_children if c.type == kind]


def type_name(type_node: tree_sitter.Node) -> str:
    name_node = type_node.child_by_field_name("name")
    if name_node:
        return text(name_node)
    for child in type_node.children:
        if child.type == "identifier":
            return text(child)
    return ""


def base_types(type_node: tree_sitter.Node) -> list[str]:
    """Return the type names listed after ':' in a type declaration."""
    for child in type_node.children:
        if child.type == "base_list":
            return [
                text(c) for c in child.named_children
                if c.type != "argument_list"
            ]
    return []


def namespace_of(node: tree_sitter.Node) -> str:
    """Name of the nearest enclosing namespace, block or file-scoped."""
    current = node.parent
    while current:
        if current.type in _NAMESPACE_TYPES:
            return text(current.child_by_field_name("name"))
        current = current.parent

    # Older grammars leave file-scoped namespaces as a sibling of the types
    root = node
    while root.parent:
        root = root.parent
    for child in root.children:
        if child.type == "file_scoped_namespace_declaration":
            return text(child.child_by_field_name("name"))
    return ""


def modifiers(node: tree_sitter.Node) -> list[str]:
    return [text(c) for c in node.children if c.type == "modifier"]


def attribute_names(node: tree_sitter.Node) -> list[str]:
    """Names of the attributes applied directly to a declaration or parameter."""
    return [text(attr.child_by_field_name("name")) for attr in attributes(node)]


def attributes(node: tree_sitter.Node) -> list[tree_sitter.Node]:
    found = []
    for child in node.children:
        if child.type == "attribute_list":
            found.extend(c for c in child.named_children if c.type == "attribute")
    return found


def first_attribute_argument(attr: tree_sitter.Node) -> str | None:
    """Text of the first argument of an attribute, without string quotes."""
    for child in attr.children:
        if child.type != "attribute_argument_list":
            continue
        for arg in child.named_children:
            if arg.type == "attribute_argument" and arg.named_children:
                return text(arg.named_children[-1]).strip('"')
    return None


def _parameter_list(node: tree_sitter.Node) -> tree_sitter.Node | None:
    param_list = node.child_by_field_name("parameters")
    if param_list is None:
        for c in node.children:
            if c.type == "parameter_list":
                return c
    return param_list


def parameter_nodes(node: tree_sitter.Node) -> list[tree_sitter.Node]:
    """Parameter nodes of a method, constructor or primary constructor.

    A `params` array is not wrapped in a parameter node; see parameters().
    """
    param_list = _parameter_list(node)
    if param_list is None:
        return []
    return [c for c in param_list.named_children if c.type == "parameter"]


def _params_array(tokens: list[tree_sitter.Node]) -> ParameterInfo | None:
    # params T[] name: the type and name sit directly in the parameter_list
    named = [t for t in tokens if t.is_named and t.type not in ("attribute_list", "comment")]
    if len(named) < 2:
        return None
    return ParameterInfo(name=text(named[-1]), type=text(named[0]))


def parameters(node: tree_sitter.Node) -> list[ParameterInfo]:
    """All parameters of a method or constructor in declaration order."""
    param_list = _parameter_list(node)
    if param_list is None:
        return []

    result: list[ParameterInfo] = []
    children = param_list.children
    for i, child in enumerate(children):
        if child.type == "parameter":
            result.append(parameter_info(child))
        elif child.type == "params":
            rest = []
            for c in children[i + 1:]:
                if c.type in (",", ")"):
                    break
                rest.append(c)
            info = _params_array(rest)
            if info is not None:
                result.append(info)
    return result


def _default_value(param: tree_sitter.Node) -> str | None:
    children = param.children
    for i, child in enumerate(children):
        if child.type == "equals_value_clause":
            value = child.named_children
            return text(value[-1]) if value else None
        if child.type == "=":
            rest = [c for c in children[i + 1:] if c.is_named]
            return text(rest[0]) if rest else None
    return None


def parameter_info(param: tree_sitter.Node) -> ParameterInfo:
    type_node = param.child_by_field_name("type")
    default = _default_value(param)
    return ParameterInfo(
        name=text(param.child_by_field_name("name")),
        type=text(type_node) if type_node else "object",
        has_default_value=default is not None,
        default_value=default,
    )


def variable_names(field_node: tree_sitter.Node) -> tuple[str, list[str]]:
    """Return (type, [names]) for a field declaration."""
    for child in field_node.children:
        if child.type != "variable_declaration":
            continue
        type_text = text(child.child_by_field_name("type"))
        names = []
        for decl in child.named_children:
            if decl.type != "variable_declarator":
                continue
            name_node = decl.child_by_field_name("name")
            if name_node is None:
                name_node = next(
                    (c for c in decl.children if c.type == "identifier"), None
                )
            if name_node is not None:
                names.append(text(name_node))
        return type_text, names
    return "", []


def doc_comment(node: tree_sitter.Node) -> str | None:
    """The contiguous /// comment block directly above a declaration."""
    lines = []
    prev = node.prev_sibling
    while prev is not None and prev.type == "comment":
        comment = text(prev).strip()
        if not comment.startswith("///"):
            break
        lines.insert(0, comment)
        prev = prev.prev_sibling
    return "\n".join(lines).strip() if lines else None


def method_metadata(
    method: tree_sitter.Node,
    containing_type: str,
    namespace: str,
    file_path: str,
) -> MethodMetadata:
    """Build the common metadata for a method_declaration node.

    Analysers derive their variant-specific record from this one with
    dataclasses.replace.
    """
    returns = method.child_by_field_name("returns") or method.child_by_field_name("type")
    return MethodMetadata(
        name=text(method.child_by_field_name("name")),
        containing_type=containing_type,
        namespace=namespace,
        return_type=text(returns) or "void",
        parameters=tuple(parameters(method)),
        modifiers=tuple(modifiers(method)),
        documentation=doc_comment(method),
        source_file_path=file_path,
        start_line=method.start_point[0] + 1,
        end_line=method.end_point[0] + 1,
    )
