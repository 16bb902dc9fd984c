"""
Command-line interface for type generation.

Loads the schema index and enumeration corpus, runs the generator and
writes the rendered files.
"""

import argparse
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .codegen import (
    ConfigError,
    GenerationResult,
    RegistryError,
    create_default_registry,
    generate_code,
    get_generator,
    get_language_info,
    list_supported_languages,
    load_config,
)
from .logging_config import get_logger, setup_logging
from .utils import JSONLoaderError, load_schema_index, load_value_sets, write_units

logger = get_logger(__name__)

console = Console()


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="schema-typegen",
        description="Generate type declarations from a normalized schema index",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  schema-typegen --schema types.json --value-sets valuesets.json -o dist
  schema-typegen --schema types.json --schema extra.json --dry-run
  schema-typegen --list-languages
        """.strip(),
    )

    input_group = parser.add_argument_group("input")
    input_group.add_argument(
        "--schema",
        metavar="FILE",
        action="append",
        default=[],
        help="Schema index JSON file (repeatable; later files win)",
    )
    input_group.add_argument(
        "--value-sets",
        metavar="FILE",
        action="append",
        default=[],
        help="Enumeration corpus JSON file (repeatable)",
    )

    output_group = parser.add_argument_group("output")
    output_group.add_argument(
        "--output-dir", "-o", metavar="DIR", help="Directory for generated files"
    )
    output_group.add_argument(
        "--dry-run",
        action="store_true",
        help="Render everything but don't write files",
    )

    gen_group = parser.add_argument_group("generation")
    gen_group.add_argument(
        "--language", "-l", default="typescript", help="Target language (default: typescript)"
    )
    gen_group.add_argument("--config", metavar="FILE", help="JSON configuration file")
    gen_group.add_argument(
        "--no-comments", action="store_true", help="Don't emit doc comments"
    )
    gen_group.add_argument(
        "--wrap-width", type=int, metavar="N", help="Doc comment wrap column"
    )

    info_group = parser.add_argument_group("information")
    info_group.add_argument(
        "--list-languages",
        action="store_true",
        help="List supported languages and exit",
    )
    info_group.add_argument(
        "--verbose", action="store_true", help="Show generation result metadata"
    )
    info_group.add_argument(
        "--log-level",
        default="warning",
        choices=["debug", "info", "warning", "error"],
        help="Logging verbosity (default: warning)",
    )
    info_group.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the command line interface.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    parser = create_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    try:
        if args.list_languages:
            return _list_languages()

        if not args.schema:
            raise CLIError("At least one --schema file is required")

        return _run(args)

    except (CLIError, ConfigError, RegistryError, JSONLoaderError, FileNotFoundError) as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        logger.error("Generation aborted: %s", e)
        return 1
    except OSError as e:
        console.print(f"[red]✗ Write failed:[/red] {e}")
        logger.error("Write failed: %s", e)
        return 1


def _run(args: argparse.Namespace) -> int:
    """Load inputs, generate, and write."""
    config = _build_config(args)
    generator = get_generator(args.language, config)

    schema_index = load_schema_index(args.schema)
    value_sets = load_value_sets(args.value_sets)
    logger.info(
        "Loaded %d schema entries and %d enumerations",
        len(schema_index),
        len(value_sets),
    )

    result = generate_code(generator, schema_index, value_sets)
    if not result.success:
        console.print(f"[red]✗ {result.error_message}[/red]")
        return 1

    for warning in result.warnings:
        logger.warning(warning)

    if args.dry_run:
        _print_summary(result)
        console.print(
            f"[yellow]Dry run:[/yellow] {len(result.units)} files not written"
        )
    else:
        written = write_units(result.units, config.output_dir)
        console.print(
            f"[green]✓[/green] Wrote {len(written)} files to {config.output_dir}"
        )

    if args.verbose:
        _print_metadata(result)

    return 0


def _build_config(args: argparse.Namespace):
    """Merge defaults, the config file and command-line overrides."""
    overrides = {}
    if args.output_dir:
        overrides["output_dir"] = args.output_dir
    if args.no_comments:
        overrides["add_comments"] = False
    if args.wrap_width:
        overrides["wrap_width"] = args.wrap_width

    config = load_config(
        _primary_language(args.language),
        custom_config=overrides,
        config_file=args.config,
    )
    return config


def _primary_language(language: str) -> str:
    """Map an alias onto its primary language name."""
    return create_default_registry().resolve_language(language)


def _list_languages() -> int:
    """List supported languages with details."""
    table = Table(title="📋 Supported Languages", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Language", style="bold green", no_wrap=True)
    table.add_column("Extension", style="cyan")
    table.add_column("Generator Class", style="dim")
    table.add_column("Aliases", style="blue")

    for name in list_supported_languages():
        info = get_language_info(name)
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(f"🔧 {name}", info["file_extension"], info["class"], aliases)

    console.print()
    console.print(table)
    console.print()
    console.print(
        Panel(
            "[bold]Usage:[/bold] schema-typegen --schema [dim]types.json[/dim] "
            "--language [cyan]LANGUAGE[/cyan]",
            title="💡 Quick Start",
            border_style="blue",
        )
    )
    return 0


def _print_summary(result: GenerationResult) -> None:
    """Show the files a run would write."""
    table = Table(title="Generated files", box=box.SIMPLE, header_style="bold cyan")
    table.add_column("File", style="bold")
    table.add_column("Imports", justify="right")
    table.add_column("Declares", style="green")

    for unit in result.units:
        table.add_row(unit.file_name, str(len(unit.imports)), ", ".join(unit.declared))

    console.print(table)


def _print_metadata(result: GenerationResult) -> None:
    """Show generation metadata and warnings."""
    table = Table(title="⚙️  Generation Metadata", box=box.SIMPLE, header_style="bold cyan")
    table.add_column("Key", style="bold")
    table.add_column("Value", style="green")

    for key, value in sorted(result.metadata.items()):
        if isinstance(value, list):
            value = ", ".join(str(item) for item in value)
        table.add_row(key, str(value))

    console.print(table)

    if result.warnings:
        console.print(
            Panel(
                "\n".join(result.warnings),
                title=f"⚠️  {len(result.warnings)} warnings",
                border_style="yellow",
            )
        )
