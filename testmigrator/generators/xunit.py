"""xUnit test generator (xUnit + Moq)."""

from __future__ import annotations

from testmigrator.generators.base import BaseTestGenerator
from testmigrator.models import AssertionType, AssertStep

_ASSERTIONS = {
    AssertionType.EQUAL: "Assert.Equal({expected}, {actual});",
    AssertionType.NOT_EQUAL: "Assert.NotEqual({expected}, {actual});",
    AssertionType.TRUE: "Assert.True({actual});",
    AssertionType.FALSE: "Assert.False({actual});",
    AssertionType.NULL: "Assert.Null({actual});",
    AssertionType.NOT_NULL: "Assert.NotNull({actual});",
    AssertionType.THROWS: "Assert.Throws<{expected}>(() => {actual});",
    AssertionType.CONTAINS: "Assert.Contains({expected}, {actual});",
    AssertionType.EMPTY: "Assert.Empty({actual});",
    AssertionType.NOT_EMPTY: "Assert.NotEmpty({actual});",
}


class XUnitTestGenerator(BaseTestGenerator):
    """xUnit creates a new class instance per test, so setup is the constructor."""

    name = "xUnit Test Generator"
    framework = "xUnit"
    required_imports = ("Xunit", "Moq")

    def _field(self, type_name: str, field_name: str) -> str:
        return f"private readonly {type_name} {field_name};"

    def _setup_header(self, class_name: str) -> list[str]:
        return [f"public {class_name}Tests()"]

    def _test_attributes(self) -> list[str]:
        return ["[Fact]"]

    def _render_assert(self, step: AssertStep) -> str:
        return _ASSERTIONS[step.type].format(actual=step.actual, expected=step.expected)
