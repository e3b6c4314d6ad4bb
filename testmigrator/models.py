"""Metadata records produced by the analysers and consumed by the generators."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class DependencyKind(str, Enum):
    CONSTRUCTOR_INJECTED = "ConstructorInjected"
    METHOD_PARAMETER = "MethodParameter"
    PROPERTY_INJECTED = "PropertyInjected"
    STATIC_DEPENDENCY = "StaticDependency"
    FIELD_DEPENDENCY = "FieldDependency"
    SERVICE_LOCATOR = "ServiceLocator"


class Scenario(str, Enum):
    HAPPY_PATH = "HappyPath"
    NULL_INPUT = "NullInput"
    EMPTY_INPUT = "EmptyInput"
    INVALID_INPUT = "InvalidInput"
    EXCEPTION_THROWN = "ExceptionThrown"
    EDGE_CASE = "EdgeCase"
    BOUNDARY_CONDITION = "BoundaryCondition"


class AssertionType(str, Enum):
    EQUAL = "Equal"
    NOT_EQUAL = "NotEqual"
    TRUE = "True"
    FALSE = "False"
    NULL = "Null"
    NOT_NULL = "NotNull"
    THROWS = "Throws"
    CONTAINS = "Contains"
    EMPTY = "Empty"
    NOT_EMPTY = "NotEmpty"


@dataclass(frozen=True)
class ParameterInfo:
    name: str
    type: str
    has_default_value: bool = False
    default_value: str | None = None


@dataclass(frozen=True)
class DependencyInfo:
    """A collaborator of the class under test that may need a test double."""
    type_name: str
    full_type_name: str
    variable_name: str
    kind: DependencyKind
    used_methods: tuple[str, ...] = ()
    is_interface: bool = False
    can_be_mocked: bool = False


@dataclass(frozen=True)
class MethodMetadata:
    """One method discovered in a source file."""
    name: str
    containing_type: str
    namespace: str = ""
    return_type: str = "void"
    parameters: tuple[ParameterInfo, ...] = ()
    modifiers: tuple[str, ...] = ()
    documentation: str | None = None
    dependencies: tuple[DependencyInfo, ...] = ()
    source_file_path: str = ""
    start_line: int = 0
    end_line: int = 0

    @property
    def is_async(self) -> bool:
        return "async" in self.modifiers

    @property
    def is_static(self) -> bool:
        return "static" in self.modifiers


@dataclass(frozen=True)
class MockSetup:
    dependency: DependencyInfo
    method_name: str
    return_value: str
    parameter_matchers: tuple[str, ...] = ()


@dataclass(frozen=True)
class ArrangeStep:
    variable_name: str
    type: str
    value: str
    comment: str | None = None


@dataclass(frozen=True)
class ActStep:
    method_call: str
    result_variable: str | None = None
    is_async: bool = False
    expects_exception: bool = False
    expected_exception_type: str | None = None


@dataclass(frozen=True)
class AssertStep:
    type: AssertionType
    expected: str = ""
    actual: str = ""
    message: str | None = None


@dataclass(frozen=True)
class TestCase:
    """A single generated test, ready to be rendered by a generator."""
    __test__ = False

    name: str
    description: str
    target_method: MethodMetadata
    scenario: Scenario
    act: ActStep
    mock_setups: tuple[MockSetup, ...] = ()
    arrange_steps: tuple[ArrangeStep, ...] = ()
    assert_steps: tuple[AssertStep, ...] = ()
