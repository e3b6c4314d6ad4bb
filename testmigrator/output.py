"""JSON serialisation of analysis results."""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any, Iterable

from testmigrator.models import DependencyInfo, DependencyKind, MethodMetadata, ParameterInfo


def method_to_dict(method: MethodMetadata) -> dict[str, Any]:
    data = asdict(method)
    data["is_async"] = method.is_async
    data["is_static"] = method.is_static
    for dep in data["dependencies"]:
        dep["kind"] = DependencyKind(dep["kind"]).value
    return data


def method_from_dict(data: dict[str, Any]) -> MethodMetadata:
    """Rebuild a MethodMetadata from method_to_dict output.

    Derived keys (is_async, is_static) are ignored; they follow from the
    modifiers.
    """
    return MethodMetadata(
        name=data["name"],
        containing_type=data["containing_type"],
        namespace=data.get("namespace", ""),
        return_type=data.get("return_type", "void"),
        parameters=tuple(
            ParameterInfo(
                name=p["name"],
                type=p["type"],
                has_default_value=p.get("has_default_value", False),
                default_value=p.get("default_value"),
            )
            for p in data.get("parameters", [])
        ),
        modifiers=tuple(data.get("modifiers", [])),
        documentation=data.get("documentation"),
        dependencies=tuple(
            DependencyInfo(
                type_name=d["type_name"],
                full_type_name=d.get("full_type_name", d["type_name"]),
                variable_name=d["variable_name"],
                kind=DependencyKind(d["kind"]),
                used_methods=tuple(d.get("used_methods", [])),
                is_interface=d.get("is_interface", False),
                can_be_mocked=d.get("can_be_mocked", False),
            )
            for d in data.get("dependencies", [])
        ),
        source_file_path=data.get("source_file_path", ""),
        start_line=data.get("start_line", 0),
        end_line=data.get("end_line", 0),
    )


def write_analysis(methods: Iterable[MethodMetadata], output_path: str) -> None:
    """Write the analysis result to an indented JSON file."""
    data = [method_to_dict(m) for m in methods]
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def read_analysis(input_path: str) -> list[MethodMetadata]:
    with open(input_path, encoding="utf-8") as f:
        return [method_from_dict(item) for item in json.load(f)]
