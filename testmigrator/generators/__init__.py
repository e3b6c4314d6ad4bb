"""Test generator registry."""

from __future__ import annotations

from typing import TYPE_CHECKING

from testmigrator.config import Framework
from testmigrator.errors import UnknownFrameworkError

if TYPE_CHECKING:
    from testmigrator.generators.base import ScaffoldGenerator


def get_generator(framework: Framework | str) -> ScaffoldGenerator:
    """Get the test generator for a framework name ('nunit' or 'xunit')."""
    from testmigrator.generators.nunit import NUnitTestGenerator
    from testmigrator.generators.xunit import XUnitTestGenerator

    if not isinstance(framework, Framework):
        try:
            framework = Framework((framework or "xunit").lower())
        except ValueError:
            raise UnknownFrameworkError(framework) from None

    if framework == Framework.NUNIT:
        return NUnitTestGenerator()
    return XUnitTestGenerator()
