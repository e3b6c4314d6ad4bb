"""Test generator contract and the scenario logic shared by all frameworks."""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import replace
from typing import Iterable, Protocol, runtime_checkable

from testmigrator.models import (
    ActStep,
    ArrangeStep,
    AssertionType,
    AssertStep,
    DependencyInfo,
    MethodMetadata,
    MockSetup,
    Scenario,
    TestCase,
)

INDENT = "    "

# Prefixes of C# value types that can never hold null
_VALUE_TYPE_PREFIXES = (
    "int", "bool", "double", "float", "decimal",
    "long", "short", "byte", "char",
)

_NO_RESULT_TYPES = {"void", "Task", "ValueTask"}

_DEFAULT_VALUES = {
    "string": '"test"',
    "int": "1",
    "long": "1L",
    "bool": "true",
    "double": "1.0",
    "float": "1.0f",
    "decimal": "1.0m",
    "Guid": "Guid.NewGuid()",
    "DateTime": "DateTime.UtcNow",
}


@runtime_checkable
class ScaffoldGenerator(Protocol):
    """Protocol that all test framework generators must implement."""

    name: str
    framework: str

    def generate_test_cases(self, method: MethodMetadata) -> list[TestCase]:
        ...

    def generate_test_class(
        self, class_name: str, methods: Iterable[MethodMetadata]
    ) -> str:
        ...

    def generate_test_method(self, test_case: TestCase) -> str:
        ...

    def generate_mock_setups(self, dependencies: Iterable[DependencyInfo]) -> str:
        ...

    def get_required_imports(self) -> list[str]:
        ...


def is_nullable_type(type_name: str) -> bool:
    """Reference types and T? can be null; built-in value types cannot."""
    if type_name.endswith("?"):
        return True
    return not type_name.startswith(_VALUE_TYPE_PREFIXES) and type_name != "void"


def default_value(type_name: str) -> str:
    """A C# literal usable as an Arrange value for the given type."""
    if type_name in _DEFAULT_VALUES:
        return _DEFAULT_VALUES[type_name]
    if type_name.endswith("?"):
        return "null"
    if type_name.startswith("List<"):
        return f"new {type_name}()"
    if type_name.startswith("IEnumerable<") and type_name.endswith(">"):
        return f"Array.Empty<{type_name[len('IEnumerable<'):-1]}>()"
    return f"default({type_name})"


def mock_field_base(type_name: str) -> str:
    """IUserRepository -> userRepository, ILogger<Foo> -> loggerFoo."""
    name = type_name
    if len(name) > 1 and name[0] == "I" and name[1].isupper():
        name = name[1:]
    name = re.sub(r"\W", "", name)
    if not name:
        return name
    return name[0].lower() + name[1:]


def mock_field_name(type_name: str) -> str:
    return f"_{mock_field_base(type_name)}Mock"


def unique_name(name: str, taken: set[str]) -> str:
    """Return name, or name2, name3, ... when already taken; records the result."""
    candidate = name
    n = 2
    while candidate in taken:
        candidate = f"{name}{n}"
        n += 1
    taken.add(candidate)
    return candidate


def mock_field_names(dependencies: Iterable[DependencyInfo]) -> dict[str, str]:
    """Map dependency type names to distinct mock field names.

    ILogger<Svc> and ILoggerSvc share a base name; the later one is numbered.
    """
    taken: set[str] = set()
    return {
        dep.type_name: unique_name(mock_field_name(dep.type_name), taken)
        for dep in dependencies
    }


def distinct_mockable(methods: Iterable[MethodMetadata]) -> list[DependencyInfo]:
    """Mockable dependencies across methods, first occurrence of each type name."""
    seen: dict[str, DependencyInfo] = {}
    for method in methods:
        for dep in method.dependencies:
            if dep.can_be_mocked and dep.type_name not in seen:
                seen[dep.type_name] = dep
    return list(seen.values())


class BaseTestGenerator:
    """Scenario derivation shared by the NUnit and xUnit generators.

    Subclasses render the test cases; they differ only in attributes,
    setup style and assertion syntax.
    """

    name = "Base Test Generator"
    framework = ""
    required_imports: tuple[str, ...] = ()

    def get_required_imports(self) -> list[str]:
        return list(self.required_imports)

    # --- Test case model ---

    def generate_test_cases(self, method: MethodMetadata) -> list[TestCase]:
        cases = [
            self._create_test_case(
                method, Scenario.HAPPY_PATH,
                f"{method.name}_WithValidInput_ReturnsExpectedResult",
                f"{method.name} returns a result for valid input",
            )
        ]

        for param in method.parameters:
            if is_nullable_type(param.type):
                cases.append(self._create_test_case(
                    method, Scenario.NULL_INPUT,
                    f"{method.name}_When{param.name}IsNull_ThrowsArgumentNullException",
                    f"{method.name} rejects a null {param.name}",
                ))

        # String parameters also get a null case above; both are kept
        for param in method.parameters:
            if param.type == "string":
                cases.append(self._create_test_case(
                    method, Scenario.EMPTY_INPUT,
                    f"{method.name}_When{param.name}IsEmpty_HandlesGracefully",
                    f"{method.name} handles an empty {param.name}",
                ))

        return cases

    def _create_test_case(
        self, method: MethodMetadata, scenario: Scenario, name: str, description: str
    ) -> TestCase:
        mocks = tuple(
            MockSetup(dependency=dep, method_name="Setup", return_value="default")
            for dep in method.dependencies
            if dep.can_be_mocked
        )
        arrange = tuple(
            ArrangeStep(variable_name=p.name, type=p.type, value=default_value(p.type))
            for p in method.parameters
        )
        act = self._create_act_step(method)
        asserts: tuple[AssertStep, ...] = ()
        if act.result_variable:
            asserts = (AssertStep(type=AssertionType.NOT_NULL, actual=act.result_variable),)

        return TestCase(
            name=name,
            description=description,
            target_method=method,
            scenario=scenario,
            act=act,
            mock_setups=mocks,
            arrange_steps=arrange,
            assert_steps=asserts,
        )

    @staticmethod
    def _create_act_step(method: MethodMetadata) -> ActStep:
        target = method.containing_type if method.is_static else "_sut"
        args = ", ".join(p.name for p in method.parameters)
        return ActStep(
            method_call=f"{target}.{method.name}({args})",
            result_variable=None if method.return_type in _NO_RESULT_TYPES else "result",
            is_async=method.is_async,
        )

    # --- Rendering ---

    def generate_mock_setups(self, dependencies: Iterable[DependencyInfo]) -> str:
        lines = [
            f"var {mock_field_base(dep.type_name)}Mock = new Mock<{dep.type_name}>();"
            for dep in dependencies
            if dep.can_be_mocked
        ]
        return "".join(line + "\n" for line in lines)

    def generate_test_class(
        self, class_name: str, methods: Iterable[MethodMetadata]
    ) -> str:
        methods = list(methods)
        namespace = methods[0].namespace if methods else ""
        dependencies = distinct_mockable(methods)
        fields = mock_field_names(dependencies)
        overloaded = {name for name, count in Counter(m.name for m in methods).items() if count > 1}

        lines = [f"using {ns};" for ns in self.get_required_imports()]
        if namespace:
            lines.append(f"using {namespace};")
        lines.append("")
        lines.append(f"namespace {namespace or 'Tests'}.Tests;")
        lines.append("")
        lines.extend(self._class_header(class_name))
        lines.append("{")

        for dep in dependencies:
            lines.append(INDENT + self._field(f"Mock<{dep.type_name}>", fields[dep.type_name]))
        lines.append(INDENT + self._field(class_name, "_sut"))
        lines.append("")

        ctor_args = ", ".join(f"{fields[d.type_name]}.Object" for d in dependencies)
        lines.extend(INDENT + line for line in self._setup_header(class_name))
        lines.append(f"{INDENT}{{")
        for dep in dependencies:
            lines.append(f"{INDENT * 2}{fields[dep.type_name]} = new Mock<{dep.type_name}>();")
        lines.append(f"{INDENT * 2}_sut = new {class_name}({ctor_args});")
        lines.append(f"{INDENT}}}")
        lines.append("")

        test_names: set[str] = set()
        for method in methods:
            for test_case in self.generate_test_cases(method):
                name = test_case.name
                if method.name in overloaded:
                    # Add(int) and Add(int, int) -> Add_1Args_..., Add_2Args_...
                    name = name.replace(
                        f"{method.name}_", f"{method.name}_{len(method.parameters)}Args_", 1
                    )
                name = unique_name(name, test_names)
                if name != test_case.name:
                    test_case = replace(test_case, name=name)
                lines.append(self.generate_test_method(test_case))
                lines.append("")

        lines.append("}")
        return "\n".join(lines) + "\n"

    def generate_test_method(self, test_case: TestCase) -> str:
        act = test_case.act
        body = [f"{INDENT}{attr}" for attr in self._test_attributes()]
        return_type = "async Task" if act.is_async else "void"
        body.append(f"{INDENT}public {return_type} {test_case.name}()")
        body.append(f"{INDENT}{{")

        inner = INDENT * 2
        body.append(f"{inner}// Arrange")
        for step in test_case.arrange_steps:
            comment = f" // {step.comment}" if step.comment else ""
            body.append(f"{inner}var {step.variable_name} = {step.value};{comment}")
        for mock in test_case.mock_setups:
            body.append(f"{inner}// Setup for {mock.dependency.type_name}")

        body.append("")
        body.append(f"{inner}// Act")
        call = f"await {act.method_call}" if act.is_async else act.method_call
        if act.result_variable:
            body.append(f"{inner}var {act.result_variable} = {call};")
        else:
            body.append(f"{inner}{call};")

        body.append("")
        body.append(f"{inner}// Assert")
        if test_case.assert_steps:
            for step in test_case.assert_steps:
                body.append(f"{inner}{self._render_assert(step)}")
        else:
            body.append(f"{inner}// Add assertions here")

        body.append(f"{INDENT}}}")
        return "\n".join(body)

    # --- Framework hooks ---

    def _class_header(self, class_name: str) -> list[str]:
        return [f"public class {class_name}Tests"]

    def _field(self, type_name: str, field_name: str) -> str:
        raise NotImplementedError

    def _setup_header(self, class_name: str) -> list[str]:
        raise NotImplementedError

    def _test_attributes(self) -> list[str]:
        raise NotImplementedError

    def _render_assert(self, step: AssertStep) -> str:
        raise NotImplementedError
