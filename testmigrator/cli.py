"""TestMigrator CLI - analyse legacy .NET code and scaffold unit tests."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from testmigrator.config import (
    AnalysisConfig,
    DependencyFilter,
    Framework,
    GenerationConfig,
    ProjectType,
)
from testmigrator.models import MethodMetadata
from testmigrator.pipeline import generate_tests, run_analysis

_PROJECT_TYPES = [t.value for t in ProjectType]
_FRAMEWORKS = [f.value for f in Framework]

console = Console()
err_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _dependency_filter(exclude_types: tuple[str, ...], exclude_namespaces: tuple[str, ...]) -> DependencyFilter:
    return DependencyFilter().extended(exclude_types, exclude_namespaces)


def _progress() -> Progress:
    return Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]{task.description}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )


def _print_methods(methods: list[MethodMetadata], title: str) -> None:
    table = Table(title=title, show_edge=False)
    table.add_column("Type", style="bold")
    table.add_column("Method")
    table.add_column("Parameters")
    table.add_column("Dependencies")

    for m in methods:
        params = ", ".join(p.type for p in m.parameters)
        deps = ", ".join(d.type_name for d in m.dependencies)
        table.add_row(m.containing_type, m.name, params, deps)

    console.print(table)
    console.print(f"Found [bold]{len(methods)}[/bold] methods")


@click.group()
@click.option("--verbose", is_flag=True, help="Show debug logging")
def cli(verbose: bool) -> None:
    """TestMigrator - Analyze legacy .NET code and generate unit tests."""
    _configure_logging(verbose)


@cli.command("analyze")
@click.argument("path")
@click.option(
    "-t", "--type", "project_type", default="auto",
    type=click.Choice(_PROJECT_TYPES, case_sensitive=False),
    help="Project type (default: auto)",
)
@click.option("-o", "--output", "output_path", default=None, help="Output JSON file for analysis results")
@click.option("--no-recursive", is_flag=True, help="Do not analyze directories recursively")
@click.option("--exclude-type", multiple=True, help="Additional type name never treated as a dependency")
@click.option("--exclude-namespace", multiple=True, help="Additional namespace prefix never treated as a dependency")
@click.option("--quiet", is_flag=True, help="Suppress all output except errors")
def analyze_cmd(
    path: str,
    project_type: str,
    output_path: str | None,
    no_recursive: bool,
    exclude_type: tuple[str, ...],
    exclude_namespace: tuple[str, ...],
    quiet: bool,
) -> None:
    """Analyze source code and extract method metadata."""
    config = AnalysisConfig(
        path=path,
        project_type=ProjectType(project_type.lower()),
        output_path=output_path,
        recursive=not no_recursive,
        dependency_filter=_dependency_filter(exclude_type, exclude_namespace),
    )

    try:
        if quiet:
            methods = run_analysis(config)
        else:
            with _progress() as progress:
                task = progress.add_task(f"Analyzing {path}", total=None)
                methods = run_analysis(
                    config,
                    progress_callback=lambda f: progress.update(task, description=f"Analyzing {Path(f).name}"),
                )
    except Exception as e:
        err_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    if not quiet:
        _print_methods(methods, f"Analysis: {Path(path).name}")
        if output_path:
            console.print(f"[green]Results saved to:[/green] {output_path}")


@cli.command("generate")
@click.argument("source")
@click.option(
    "-f", "--framework", default="xunit",
    type=click.Choice(_FRAMEWORKS, case_sensitive=False),
    help="Test framework (default: xunit)",
)
@click.option("-o", "--output", "output_dir", default=None, help="Output directory for generated tests")
@click.option(
    "-t", "--type", "project_type", default="auto",
    type=click.Choice(_PROJECT_TYPES, case_sensitive=False),
    help="Project type (default: auto)",
)
@click.option("--exclude-type", multiple=True, help="Additional type name never treated as a dependency")
@click.option("--exclude-namespace", multiple=True, help="Additional namespace prefix never treated as a dependency")
@click.option("--quiet", is_flag=True, help="Suppress all output except errors")
def generate_cmd(
    source: str,
    framework: str,
    output_dir: str | None,
    project_type: str,
    exclude_type: tuple[str, ...],
    exclude_namespace: tuple[str, ...],
    quiet: bool,
) -> None:
    """Generate unit tests from analyzed code."""
    if output_dir is None:
        output_dir = str(Path.cwd() / "GeneratedTests")

    config = GenerationConfig(
        source_path=source,
        framework=Framework(framework.lower()),
        output_dir=output_dir,
        project_type=ProjectType(project_type.lower()),
        dependency_filter=_dependency_filter(exclude_type, exclude_namespace),
    )

    try:
        if quiet:
            written = generate_tests(config)
        else:
            with _progress() as progress:
                task = progress.add_task(f"Analyzing {source}", total=None)
                written = generate_tests(
                    config,
                    progress_callback=lambda f: progress.update(task, description=f"Analyzing {Path(f).name}"),
                )
    except Exception as e:
        err_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    if not quiet:
        for test_path in written:
            console.print(f"[green]Generated:[/green] {test_path}")
        console.print(f"Test generation complete! ({len(written)} files)")


if __name__ == "__main__":
    cli()
