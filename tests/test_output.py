"""Tests for JSON serialisation of analysis results."""

from __future__ import annotations

import json
from pathlib import Path

from testmigrator.analyzers.webapi import WebApiAnalyzer
from testmigrator.models import DependencyInfo, DependencyKind, MethodMetadata, ParameterInfo
from testmigrator.output import method_to_dict, read_analysis, write_analysis

FIXTURES = Path(__file__).parent / "fixtures"


def _method() -> MethodMetadata:
    return MethodMetadata(
        name="LoadAsync",
        containing_type="InventoryService",
        namespace="Inventory.Services",
        return_type="Task<int>",
        parameters=(ParameterInfo("sku", "string"), ParameterInfo("limit", "int", True, "10")),
        modifiers=("public", "async"),
        documentation="Loads stock.",
        dependencies=(
            DependencyInfo(
                type_name="IInventoryStore",
                full_type_name="IInventoryStore",
                variable_name="store",
                kind=DependencyKind.CONSTRUCTOR_INJECTED,
                is_interface=True,
                can_be_mocked=True,
            ),
        ),
        source_file_path="Services/InventoryService.cs",
        start_line=12,
        end_line=20,
    )


class TestMethodToDict:
    def test_keys(self):
        data = method_to_dict(_method())
        assert data["name"] == "LoadAsync"
        assert data["is_async"] is True
        assert data["is_static"] is False
        assert data["parameters"][1] == {
            "name": "limit", "type": "int", "has_default_value": True, "default_value": "10",
        }
        assert data["dependencies"][0]["kind"] == "ConstructorInjected"

    def test_json_serialisable(self):
        text = json.dumps(method_to_dict(_method()))
        assert '"kind": "ConstructorInjected"' in text


class TestWriteRead:
    def test_round_trip(self, tmp_path):
        out = tmp_path / "nested" / "analysis.json"
        write_analysis([_method()], str(out))
        assert out.exists()
        assert read_analysis(str(out)) == [_method()]

    def test_indented_array(self, tmp_path):
        out = tmp_path / "analysis.json"
        write_analysis([], str(out))
        assert json.loads(out.read_text()) == []

    def test_analysed_controller_round_trip(self, tmp_path):
        methods = WebApiAnalyzer().analyze_directory(str(FIXTURES / "webapi_app"))
        out = tmp_path / "api.json"
        write_analysis(methods, str(out))
        assert read_analysis(str(out)) == methods
