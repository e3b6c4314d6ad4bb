"""Tests for the four project analysers."""

from __future__ import annotations

import threading
from pathlib import Path

import pytest

from testmigrator.analyzers.desktop import (
    DesktopAppAnalyzer,
    DesktopClassType,
    determine_class_type,
    is_event_handler,
)
from testmigrator.analyzers.logicapp import LogicAppAnalyzer, function_type, trigger_type
from testmigrator.analyzers.webapi import WebApiAnalyzer
from testmigrator.analyzers.webforms import WebFormsAnalyzer, is_lifecycle_method
from testmigrator.errors import AnalysisCancelledError, InputNotFoundError
from testmigrator.models import DependencyKind, ParameterInfo

FIXTURES = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _by_name(methods):
    return {m.name: m for m in methods}


def _names(methods):
    return {m.name for m in methods}


ALL_ANALYZERS = [WebFormsAnalyzer, WebApiAnalyzer, DesktopAppAnalyzer, LogicAppAnalyzer]


# ===========================================================================
# Web Forms
# ===========================================================================


class TestWebFormsAnalyzer:
    @pytest.fixture()
    def analyzer(self):
        return WebFormsAnalyzer()

    def test_can_analyze_code_behind_only(self, analyzer):
        assert analyzer.can_analyze("Default.aspx.cs")
        assert analyzer.can_analyze("Controls/Header.ASCX.CS")
        assert analyzer.can_analyze("Site.master.cs")
        assert not analyzer.can_analyze("Default.aspx")
        assert not analyzer.can_analyze("UsersController.cs")

    def test_extracts_methods_of_every_visibility(self, analyzer):
        methods = analyzer.analyze_file(str(FIXTURES / "webforms_site" / "Default.aspx.cs"))
        assert _names(methods) == {"Page_Load", "Page_PreRender", "BindGrid", "FormatTitle"}

    def test_lifecycle_methods_tagged(self, analyzer):
        methods = _by_name(analyzer.analyze_file(str(FIXTURES / "webforms_site" / "Default.aspx.cs")))
        assert methods["Page_Load"].documentation == (
            "[Web Forms Lifecycle] /// <summary>Loads the landing page.</summary>"
        )
        assert methods["Page_PreRender"].documentation == "[Web Forms Lifecycle]"
        assert methods["BindGrid"].documentation is None

    def test_override_lifecycle_method_tagged(self, analyzer):
        methods = _by_name(analyzer.analyze_file(str(FIXTURES / "webforms_site" / "Controls" / "Header.ascx.cs")))
        assert methods["OnInit"].documentation == "[Web Forms Lifecycle]"
        assert methods["SetUserName"].documentation is None
        assert methods["OnInit"].namespace == "LegacySite.Controls"

    def test_lifecycle_names_case_insensitive(self):
        assert is_lifecycle_method("page_load")
        assert is_lifecycle_method("OnPreRender")
        assert not is_lifecycle_method("Page_Loaded")

    def test_no_dependencies(self, analyzer):
        methods = analyzer.analyze_file(str(FIXTURES / "webforms_site" / "Default.aspx.cs"))
        assert all(m.dependencies == () for m in methods)

    def test_parameters_and_defaults(self, analyzer):
        methods = _by_name(analyzer.analyze_file(str(FIXTURES / "webforms_site" / "Default.aspx.cs")))
        params = methods["FormatTitle"].parameters
        assert params[0] == ParameterInfo(name="title", type="string")
        assert params[1].name == "maxLength"
        assert params[1].type == "int"
        assert params[1].has_default_value is True
        assert params[1].default_value == "40"

    def test_directory_covers_pages_controls_and_masters(self, analyzer):
        methods = analyzer.analyze_directory(str(FIXTURES / "webforms_site"))
        assert {m.containing_type for m in methods} == {"Default", "Header", "SiteMaster"}
        # The designer file is generated code
        assert "GeneratedHelper" not in _names(methods)
        assert len(methods) == 7


# ===========================================================================
# Web API
# ===========================================================================


class TestWebApiAnalyzer:
    @pytest.fixture()
    def analyzer(self):
        return WebApiAnalyzer()

    @pytest.fixture()
    def methods(self, analyzer):
        path = FIXTURES / "webapi_app" / "Controllers" / "UsersController.cs"
        return analyzer.analyze_file(str(path))

    def test_can_analyze_controller_files(self, analyzer):
        assert analyzer.can_analyze("UsersController.cs")
        assert analyzer.can_analyze("Api/ordersCONTROLLER.cs")
        assert not analyzer.can_analyze("UserService.cs")

    def test_public_methods_of_controllers_only(self, methods):
        assert _names(methods) == {
            "GetAll", "GetById", "Create", "Rename", "Delete", "Toggle", "Version",
        }
        # UserMapper does not derive from a controller
        assert all(m.containing_type == "UsersController" for m in methods)

    def test_http_verbs(self, methods):
        by_name = _by_name(methods)
        assert by_name["GetById"].documentation == "[GET]"
        assert by_name["Create"].documentation == "[POST]"
        assert by_name["Rename"].documentation == "[PUT]"
        assert by_name["Delete"].documentation == "[DELETE]"
        assert by_name["Toggle"].documentation == "[PATCH]"
        assert by_name["Version"].documentation is None

    def test_verb_prefixed_onto_doc_comment(self, methods):
        doc = _by_name(methods)["GetAll"].documentation
        assert doc.startswith("[GET] /// <summary>")
        assert "Returns every user." in doc

    def test_constructor_dependencies(self, methods):
        deps = _by_name(methods)["GetAll"].dependencies
        assert [d.type_name for d in deps] == [
            "IUserService", "ILogger<UsersController>", "string",
        ]
        assert [d.variable_name for d in deps] == ["userService", "logger", "connectionName"]
        assert all(d.kind == DependencyKind.CONSTRUCTOR_INJECTED for d in deps)
        assert [d.can_be_mocked for d in deps] == [True, True, False]

    def test_signature_details(self, methods):
        by_name = _by_name(methods)
        get_all = by_name["GetAll"]
        assert get_all.namespace == "UserApi.Controllers"
        assert get_all.return_type == "Task<IActionResult>"
        assert get_all.is_async
        assert get_all.modifiers == ("public", "async")
        assert by_name["Version"].is_static
        assert by_name["Create"].parameters[0].type == "CreateUserRequest"

    def test_line_numbers(self, methods):
        get_all = _by_name(methods)["GetAll"]
        assert get_all.start_line < get_all.end_line
        assert get_all.source_file_path.endswith("UsersController.cs")

    def test_directory_skips_build_output(self, analyzer):
        methods = analyzer.analyze_directory(str(FIXTURES / "webapi_app"))
        types = {m.containing_type for m in methods}
        assert types == {"UsersController", "HealthController"}
        assert len(methods) == 8

    def test_non_recursive(self, analyzer):
        methods = analyzer.analyze_directory(str(FIXTURES / "webapi_app"), recursive=False)
        assert methods == []


# ===========================================================================
# Desktop
# ===========================================================================


class TestDesktopAppAnalyzer:
    @pytest.fixture()
    def analyzer(self):
        return DesktopAppAnalyzer()

    def test_class_type_detection(self):
        assert determine_class_type(["Form"]) == DesktopClassType.WIN_FORM
        assert determine_class_type(["System.Windows.Window"]) == DesktopClassType.WPF_WINDOW
        assert determine_class_type(["UserControl"]) == DesktopClassType.WPF_USER_CONTROL
        assert determine_class_type(["Page"]) == DesktopClassType.WPF_PAGE
        assert determine_class_type(["IDisposable"]) == DesktopClassType.REGULAR
        assert determine_class_type([]) == DesktopClassType.REGULAR

    def test_event_handler_shape(self):
        sender = ParameterInfo(name="sender", type="object")
        assert is_event_handler((sender, ParameterInfo(name="e", type="EventArgs")))
        assert is_event_handler((
            ParameterInfo(name="sender", type="object?"),
            ParameterInfo(name="e", type="MouseEventArgs"),
        ))
        assert not is_event_handler((sender,))
        assert not is_event_handler((
            ParameterInfo(name="sender", type="Control"),
            ParameterInfo(name="e", type="EventArgs"),
        ))

    def test_form_methods_tagged(self, analyzer):
        methods = _by_name(analyzer.analyze_file(str(FIXTURES / "desktop_app" / "MainForm.cs")))
        assert set(methods) == {"saveButton_Click", "grid_CellClick", "Refresh"}
        assert methods["saveButton_Click"].documentation == "[EventHandler] [WinForm]"
        assert methods["grid_CellClick"].documentation == "[EventHandler] [WinForm]"
        assert methods["Refresh"].documentation == "[WinForm]"

    def test_field_and_constructor_dependencies(self, analyzer):
        methods = analyzer.analyze_file(str(FIXTURES / "desktop_app" / "MainForm.cs"))
        deps = methods[0].dependencies
        assert [(d.type_name, d.variable_name, d.kind) for d in deps] == [
            ("IInventoryService", "_inventoryService", DependencyKind.FIELD_DEPENDENCY),
            ("ReportBuilder", "_reportBuilder", DependencyKind.FIELD_DEPENDENCY),
            ("ReportBuilder", "_backupBuilder", DependencyKind.FIELD_DEPENDENCY),
            ("IInventoryService", "inventoryService", DependencyKind.CONSTRUCTOR_INJECTED),
        ]

    def test_wpf_window_with_file_scoped_namespace(self, analyzer):
        methods = _by_name(analyzer.analyze_file(str(FIXTURES / "desktop_app" / "MainWindow.xaml.cs")))
        assert methods["OnLoaded"].documentation == "[EventHandler] [WpfWindow]"
        assert methods["Reset"].documentation == "[WpfWindow]"
        assert methods["Reset"].namespace == "Inventory.Wpf"

    def test_regular_class_and_nested_struct(self, analyzer):
        path = FIXTURES / "desktop_app" / "Services" / "InventoryService.cs"
        methods = analyzer.analyze_file(str(path))
        assert {(m.containing_type, m.name) for m in methods} == {
            ("InventoryService", "Save"),
            ("InventoryService", "LoadAsync"),
            ("InventoryService", "ApplyDiscount"),
            ("Totals", "Sum"),
        }
        assert all(m.documentation is None for m in methods)

    def test_directory_skips_designer_files(self, analyzer):
        methods = analyzer.analyze_directory(str(FIXTURES / "desktop_app"))
        assert "InitializeComponent" not in _names(methods)
        assert len(methods) == 9

    def test_custom_dependency_filter(self):
        from testmigrator.config import DependencyFilter

        analyzer = DesktopAppAnalyzer(DependencyFilter().extended(["ReportBuilder"]))
        methods = analyzer.analyze_file(str(FIXTURES / "desktop_app" / "MainForm.cs"))
        assert [d.type_name for d in methods[0].dependencies] == [
            "IInventoryService", "IInventoryService",
        ]


# ===========================================================================
# Logic Apps / Azure Functions
# ===========================================================================


class TestLogicAppAnalyzer:
    @pytest.fixture()
    def methods(self):
        path = FIXTURES / "functions_app" / "Functions" / "OrderFunctions.cs"
        return _by_name(LogicAppAnalyzer().analyze_file(str(path)))

    def test_only_public_functions(self, methods):
        assert set(methods) == {"Create", "RunOrchestrator", "Ship", "Cleanup"}

    def test_http_function(self, methods):
        assert methods["Create"].documentation == (
            "[HttpTrigger] FunctionName: CreateOrder /// <summary>Creates an order.</summary>"
        )

    def test_durable_functions(self, methods):
        assert methods["RunOrchestrator"].documentation == (
            "[Orchestrator] [OrchestrationTrigger] FunctionName: RunOrchestrator"
        )
        assert methods["Ship"].documentation == "[Activity] [ActivityTrigger] FunctionName: Ship"

    def test_name_falls_back_to_method_name(self, methods):
        assert methods["Cleanup"].documentation == "[TimerTrigger] FunctionName: Cleanup"

    def test_constructor_dependencies(self, methods):
        deps = methods["Ship"].dependencies
        assert [d.type_name for d in deps] == ["IOrderService", "ILogger<OrderFunctions>"]
        assert all(d.can_be_mocked for d in deps)

    def test_trigger_order_first_match_wins(self):
        assert trigger_type(["HttpTrigger", "BlobTrigger"]) == "HttpTrigger"
        assert trigger_type(["BlobTrigger", "ServiceBusTrigger"]) == "ServiceBusTrigger"
        assert trigger_type(["FromBody"]) is None

    def test_function_type(self):
        assert function_type(["EntityTrigger"]) == "Entity"
        assert function_type(["HttpTrigger"]) is None

    def test_content_without_marker(self):
        source = "public class Plain { public void Run() { } }"
        assert LogicAppAnalyzer().analyze_content(source) == []

    def test_directory_skips_obj(self):
        methods = LogicAppAnalyzer().analyze_directory(str(FIXTURES / "functions_app"))
        assert {m.containing_type for m in methods} == {"OrderFunctions"}
        assert len(methods) == 4


# ===========================================================================
# Cross-cutting properties
# ===========================================================================


class TestAnalyzerContract:
    @pytest.mark.parametrize("analyzer_cls", ALL_ANALYZERS)
    @pytest.mark.parametrize("fixture", ["webapi_app", "desktop_app", "functions_app", "webforms_site"])
    def test_can_be_mocked_tracks_is_interface(self, analyzer_cls, fixture):
        methods = analyzer_cls().analyze_directory(str(FIXTURES / fixture))
        for method in methods:
            for dep in method.dependencies:
                assert dep.can_be_mocked == dep.is_interface

    @pytest.mark.parametrize("analyzer_cls", ALL_ANALYZERS)
    def test_analysis_is_idempotent(self, analyzer_cls):
        path = str(FIXTURES / "functions_app" / "Functions" / "OrderFunctions.cs")
        analyzer = analyzer_cls()
        assert analyzer.analyze_file(path) == analyzer.analyze_file(path)

    def test_content_records_display_name(self):
        source = "namespace N { class C { void M() { } } }"
        methods = DesktopAppAnalyzer().analyze_content(source, "Memory.cs")
        assert methods[0].source_file_path == "Memory.cs"
        assert methods[0].namespace == "N"
        assert methods[0].return_type == "void"

    def test_malformed_source_does_not_raise(self):
        source = "class Broken { public void Ok() { } public void Bad() {"
        methods = DesktopAppAnalyzer().analyze_content(source)
        assert "Ok" in _names(methods)
        assert _by_name(methods)["Ok"].containing_type == "Broken"

    def test_params_array_parameter(self):
        source = "class C { public void Log(string fmt, params object[] args) { } }"
        method = DesktopAppAnalyzer().analyze_content(source)[0]
        assert method.parameters == (
            ParameterInfo(name="fmt", type="string"),
            ParameterInfo(name="args", type="object[]"),
        )

    def test_missing_file(self):
        with pytest.raises(InputNotFoundError):
            DesktopAppAnalyzer().analyze_file(str(FIXTURES / "nope.cs"))

    def test_missing_directory(self):
        with pytest.raises(InputNotFoundError):
            DesktopAppAnalyzer().analyze_directory(str(FIXTURES / "nope"))

    def test_cancellation_checked_per_file(self):
        cancel = threading.Event()
        cancel.set()
        with pytest.raises(AnalysisCancelledError):
            DesktopAppAnalyzer().analyze_directory(str(FIXTURES / "desktop_app"), cancel_event=cancel)

    def test_progress_callback_called_per_file(self):
        seen = []
        DesktopAppAnalyzer().analyze_directory(
            str(FIXTURES / "desktop_app"), progress_callback=seen.append
        )
        assert len(seen) == 3
