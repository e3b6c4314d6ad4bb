"""NUnit test generator (NUnit + Moq + FluentAssertions)."""

from __future__ import annotations

from testmigrator.generators.base import BaseTestGenerator
from testmigrator.models import AssertionType, AssertStep

_ASSERTIONS = {
    AssertionType.EQUAL: "{actual}.Should().Be({expected});",
    AssertionType.NOT_EQUAL: "{actual}.Should().NotBe({expected});",
    AssertionType.TRUE: "{actual}.Should().BeTrue();",
    AssertionType.FALSE: "{actual}.Should().BeFalse();",
    AssertionType.NULL: "{actual}.Should().BeNull();",
    AssertionType.NOT_NULL: "{actual}.Should().NotBeNull();",
    AssertionType.THROWS: "{actual}.Should().Throw<{expected}>();",
    AssertionType.CONTAINS: "{actual}.Should().Contain({expected});",
    AssertionType.EMPTY: "{actual}.Should().BeEmpty();",
    AssertionType.NOT_EMPTY: "{actual}.Should().NotBeEmpty();",
}


class NUnitTestGenerator(BaseTestGenerator):
    name = "NUnit Test Generator"
    framework = "NUnit"
    required_imports = ("NUnit.Framework", "Moq", "FluentAssertions")

    def _class_header(self, class_name: str) -> list[str]:
        return ["[TestFixture]", f"public class {class_name}Tests"]

    def _field(self, type_name: str, field_name: str) -> str:
        # Assigned in [SetUp], so the field cannot be readonly
        return f"private {type_name} {field_name} = null!;"

    def _setup_header(self, class_name: str) -> list[str]:
        return ["[SetUp]", "public void Setup()"]

    def _test_attributes(self) -> list[str]:
        return ["[Test]"]

    def _render_assert(self, step: AssertStep) -> str:
        return _ASSERTIONS[step.type].format(actual=step.actual, expected=step.expected)
