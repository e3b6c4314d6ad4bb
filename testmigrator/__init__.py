"""TestMigrator - Analyse legacy C# code and scaffold unit tests for it."""

from testmigrator.pipeline import generate_tests, run_analysis

__version__ = "0.1.0"
__all__ = ["run_analysis", "generate_tests", "__version__"]
