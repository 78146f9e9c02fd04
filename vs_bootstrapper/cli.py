"""Command-line interface for the Visual Studio bootstrapper."""

import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from vs_bootstrapper import __version__
from vs_bootstrapper.config import AnalysisProperties, configure_settings, get_settings
from vs_bootstrapper.core.exceptions import BootstrapError
from vs_bootstrapper.core.model_builder import FXCOP_ASSEMBLY_PROPERTIES, ModelBuilder
from vs_bootstrapper.core.module_definition import ModuleDefinition
from vs_bootstrapper.utils.json_utils import JsonHandler
from vs_bootstrapper.utils.logging import get_logger, setup_logging

console = Console()
logger = get_logger(__name__)


def print_modules(root: ModuleDefinition) -> None:
    """Print a summary table of the modules built for the root."""
    table = Table(title=f"Modules of {root.key}", show_header=True)
    table.add_column("Key", style="cyan")
    table.add_column("Sources", justify="right")
    table.add_column("Tests", justify="right")
    table.add_column("Assembly", style="white")

    for module in root.sub_modules:
        table.add_row(
            module.key,
            str(len(module.source_files)),
            str(len(module.test_files)),
            module.properties.get(FXCOP_ASSEMBLY_PROPERTIES[0], "-"),
        )

    console.print(table)


@click.group()
@click.version_option(version=__version__)
def main():
    """Visual Studio solution bootstrapper for static analysis."""
    pass


@main.command()
@click.argument("path", type=click.Path(exists=True, file_okay=False))
@click.option(
    "--key",
    default=None,
    help="Key of the root module (defaults to the directory name)",
)
@click.option(
    "--work-dir",
    default=None,
    type=click.Path(file_okay=False),
    help="Work directory of the root module (defaults to PATH/.sonar)",
)
@click.option(
    "--property",
    "-D",
    "properties",
    multiple=True,
    help="Analysis property as key=value, may be repeated",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    help="Write the module tree as JSON to this file",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose output",
)
def analyze(
    path: str,
    key: str | None,
    work_dir: str | None,
    properties: tuple[str, ...],
    output: str | None,
    verbose: bool,
):
    """
    Build the module tree of a Visual Studio solution.

    PATH: Directory containing the solution file
    """
    settings = get_settings()
    if verbose:
        settings = settings.model_copy(
            update={"logging": settings.logging.model_copy(update={"level": "DEBUG"})}
        )
        configure_settings(settings)
    setup_logging(
        level=settings.logging.level,
        log_format=settings.logging.format,
        log_file=settings.logging.file,
        rich_console=settings.logging.rich_console,
    )

    base_dir = Path(path)
    try:
        analysis_properties = AnalysisProperties.from_pairs(properties)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--property") from e

    for unknown in analysis_properties.unknown_keys():
        logger.warning(f"Unknown property ignored: {unknown}")

    root = ModuleDefinition(
        key=key or base_dir.resolve().name,
        name=base_dir.resolve().name,
        base_dir=base_dir,
        work_dir=Path(work_dir) if work_dir else base_dir / ".sonar",
    )

    try:
        ModelBuilder(analysis_properties).build(root)
    except BootstrapError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        sys.exit(1)

    if root.sub_modules:
        print_modules(root)
    else:
        console.print("[yellow]No modules created[/yellow]")

    if output:
        output_path = Path(output)
        JsonHandler.dump_file(root.to_dict(), output_path)
        console.print(f"[green][OK][/green] Saved module tree to {output_path}")


if __name__ == "__main__":
    main()
