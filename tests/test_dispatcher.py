"""Tests for analyser selection."""

from __future__ import annotations

from pathlib import Path

import pytest

from testmigrator.analyzers import detect_project_type, get_analyzer, resolve_analyzer
from testmigrator.analyzers.base import CodeAnalyzer
from testmigrator.analyzers.desktop import DesktopAppAnalyzer
from testmigrator.analyzers.logicapp import LogicAppAnalyzer
from testmigrator.analyzers.webapi import WebApiAnalyzer
from testmigrator.analyzers.webforms import WebFormsAnalyzer
from testmigrator.config import ProjectType
from testmigrator.errors import InputNotFoundError, UnknownProjectTypeError

FIXTURES = Path(__file__).parent / "fixtures"


def _write(path: Path, content: str = "class C { }") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


class TestDetectDirectory:
    def test_fixture_projects(self):
        assert detect_project_type(str(FIXTURES / "webforms_site")) == ProjectType.WEBFORMS
        assert detect_project_type(str(FIXTURES / "webapi_app")) == ProjectType.WEBAPI
        assert detect_project_type(str(FIXTURES / "functions_app")) == ProjectType.LOGICAPP
        assert detect_project_type(str(FIXTURES / "desktop_app")) == ProjectType.DESKTOP

    def test_controller_beats_host_json(self, tmp_path):
        _write(tmp_path / "host.json", "{}")
        _write(tmp_path / "Api" / "OrdersController.cs")
        assert detect_project_type(str(tmp_path)) == ProjectType.WEBAPI

    def test_code_behind_beats_controller(self, tmp_path):
        _write(tmp_path / "HomeController.cs")
        _write(tmp_path / "Pages" / "Home.aspx.cs")
        assert detect_project_type(str(tmp_path)) == ProjectType.WEBFORMS

    def test_master_page_counts_as_code_behind(self, tmp_path):
        _write(tmp_path / "Site.master.cs")
        assert detect_project_type(str(tmp_path)) == ProjectType.WEBFORMS

    def test_function_marker_in_content(self, tmp_path):
        _write(tmp_path / "Jobs.cs", '[Function("Nightly")] public void Run() { }')
        assert detect_project_type(str(tmp_path)) == ProjectType.LOGICAPP

    def test_function_name_marker_in_content(self, tmp_path):
        _write(tmp_path / "deep" / "Jobs.cs", '[FunctionName("Nightly")] public void Run() { }')
        assert detect_project_type(str(tmp_path)) == ProjectType.LOGICAPP

    def test_host_json_only(self, tmp_path):
        _write(tmp_path / "host.json", "{}")
        assert detect_project_type(str(tmp_path)) == ProjectType.LOGICAPP

    def test_controller_in_build_output_ignored(self, tmp_path):
        _write(tmp_path / "bin" / "Debug" / "OldController.cs")
        _write(tmp_path / "Program.cs")
        assert detect_project_type(str(tmp_path)) == ProjectType.DESKTOP

    def test_empty_directory_defaults_to_desktop(self, tmp_path):
        assert detect_project_type(str(tmp_path)) == ProjectType.DESKTOP


class TestDetectFile:
    def test_code_behind(self, tmp_path):
        assert detect_project_type(str(_write(tmp_path / "Default.aspx.cs"))) == ProjectType.WEBFORMS
        assert detect_project_type(str(_write(tmp_path / "Nav.ascx.cs"))) == ProjectType.WEBFORMS

    def test_controller(self, tmp_path):
        path = _write(tmp_path / "UsersController.cs", '[Function("X")] public void Run() { }')
        assert detect_project_type(str(path)) == ProjectType.WEBAPI

    def test_function(self):
        path = FIXTURES / "functions_app" / "Functions" / "OrderFunctions.cs"
        assert detect_project_type(str(path)) == ProjectType.LOGICAPP

    def test_fallback(self):
        path = FIXTURES / "desktop_app" / "MainForm.cs"
        assert detect_project_type(str(path)) == ProjectType.DESKTOP

    def test_missing(self, tmp_path):
        with pytest.raises(InputNotFoundError):
            detect_project_type(str(tmp_path / "missing.cs"))


class TestRegistry:
    @pytest.mark.parametrize("project_type,cls", [
        ("webforms", WebFormsAnalyzer),
        ("webapi", WebApiAnalyzer),
        ("desktop", DesktopAppAnalyzer),
        ("logicapp", LogicAppAnalyzer),
        ("WebAPI", WebApiAnalyzer),
        (ProjectType.DESKTOP, DesktopAppAnalyzer),
    ])
    def test_get_analyzer(self, project_type, cls):
        analyzer = get_analyzer(project_type)
        assert isinstance(analyzer, cls)
        assert isinstance(analyzer, CodeAnalyzer)

    def test_unknown_type(self):
        with pytest.raises(UnknownProjectTypeError):
            get_analyzer("winui")

    def test_auto_is_not_an_analyzer(self):
        with pytest.raises(UnknownProjectTypeError):
            get_analyzer("auto")

    def test_explicit_type_skips_detection(self):
        analyzer = resolve_analyzer(str(FIXTURES / "webapi_app"), "desktop")
        assert isinstance(analyzer, DesktopAppAnalyzer)

    def test_auto_detects(self):
        analyzer = resolve_analyzer(str(FIXTURES / "webapi_app"))
        assert isinstance(analyzer, WebApiAnalyzer)
