"""
Command-line interface for binding generation.

Loads a schema document, generates bindings for the requested languages
and writes them under an output directory.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from . import __version__
from .core.errors import ConfigError, GeneratorError, NamingConfigurationError
from .core.generator import CodeGenerator, GenerationResult, generate_bindings
from .logging_config import get_logger, setup_logging
from .registry import (
    RegistryError,
    get_generator,
    get_language_info,
    is_language_supported,
    list_all_language_info,
    list_supported_languages,
)
from .utils import SchemaLoaderError, load_schema

logger = get_logger(__name__)

# Syntax highlighting lexers per language
LEXERS = {"dotnet": "csharp", "python": "python", "go": "go"}


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


console = Console()


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="sdkgen",
        description="Generate resource bindings from a provider schema",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  sdkgen schema.json --language dotnet --output sdk/
  sdkgen schema.json -l python -l go -o sdk/ --show-renames
  sdkgen --url https://example.com/schema.json -l csharp --dry-run
  sdkgen --list-languages
  sdkgen --language-info go
        """.strip(),
    )

    input_group = parser.add_mutually_exclusive_group(required=False)
    input_group.add_argument("schema", nargs="?", help="JSON schema document")
    input_group.add_argument("--url", help="URL to fetch the schema document from")

    parser.add_argument(
        "--language",
        "-l",
        action="append",
        dest="languages",
        metavar="LANGUAGE",
        help="Target language (repeatable; default: every supported language)",
    )
    parser.add_argument(
        "--output",
        "-o",
        metavar="DIR",
        help="Directory to write generated files to (default: print to stdout)",
    )
    parser.add_argument("--config", metavar="FILE", help="JSON configuration file")
    parser.add_argument(
        "--package-name", "--package", metavar="NAME", help="Package/namespace name"
    )
    parser.add_argument(
        "--sdk-version",
        metavar="VERSION",
        help="Version stamped into default resource options (default: schema version)",
    )
    parser.add_argument(
        "--no-comments",
        action="store_true",
        help="Don't carry schema descriptions into generated code",
    )
    parser.add_argument(
        "--workers", type=int, metavar="N", help="Number of generation threads"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Generate and report, but don't write any files",
    )
    parser.add_argument(
        "--show-renames",
        action="store_true",
        help="Show every name that was disambiguated",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    info_group = parser.add_argument_group("information")
    info_group.add_argument(
        "--list-languages",
        action="store_true",
        help="List supported languages and exit",
    )
    info_group.add_argument(
        "--language-info",
        metavar="LANGUAGE",
        help="Show detailed info about a language and exit",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Entry point of the ``sdkgen`` command.

    Returns:
        Exit code: 0 on success, 1 when any resource failed or input was
        invalid, 2 when the naming configuration is unusable
    """
    args = create_parser().parse_args(argv)
    setup_logging(logging.INFO if args.verbose else logging.WARNING)

    if args.list_languages:
        return _list_languages()

    if args.language_info:
        return _show_language_info(args.language_info)

    try:
        return _run(args)
    except NamingConfigurationError as e:
        console.print(f"[red]✗ Naming configuration error:[/red] {e}")
        return 2
    except CLIError as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        return 1
    except GeneratorError as e:
        console.print(f"[red]✗[/red] {e}")
        return 1


def _run(args: argparse.Namespace) -> int:
    if not (args.schema or args.url):
        raise CLIError("Input source required (schema file or --url)")

    languages = args.languages or list_supported_languages()
    for language in languages:
        if not is_language_supported(language):
            raise CLIError(
                f"Unsupported language '{language}'. "
                f"Supported languages: {', '.join(list_supported_languages())}"
            )

    generators = _build_generators(args, languages)

    try:
        source, resources, schema_errors = load_schema(args.schema, args.url)
    except (SchemaLoaderError, FileNotFoundError) as e:
        raise CLIError(f"Failed to load schema: {e}") from e

    console.print(
        f"[cyan]Loaded {len(resources)} resource type(s) from[/cyan] {source}"
    )

    results = generate_bindings(resources, generators, max_workers=args.workers)

    if args.output and not args.dry_run:
        _write_results(results, Path(args.output))
    elif not args.output and not args.dry_run:
        _print_code(results)

    _print_summary(results, schema_errors, args.dry_run)

    if args.show_renames:
        _print_renames(results)

    if args.verbose:
        _print_warnings(results)

    failed = [r for r in results if not r.success]
    return 1 if failed or schema_errors else 0


def _build_generators(args: argparse.Namespace, languages: List[str]) -> List[CodeGenerator]:
    """Instantiate one emitter per distinct canonical language."""
    overrides = {}
    if args.package_name:
        overrides["package_name"] = args.package_name
    if args.sdk_version:
        overrides["version"] = args.sdk_version
    if args.no_comments:
        overrides["add_comments"] = False

    generators = []
    seen = set()
    for language in languages:
        try:
            generator = get_generator(language, overrides or None, config_file=args.config)
        except (RegistryError, ConfigError) as e:
            if isinstance(e, NamingConfigurationError):
                raise
            raise CLIError(f"Configuration error for {language}: {e}") from e

        if generator.language_name in seen:
            continue
        seen.add(generator.language_name)
        generators.append(generator)
    return generators


def _write_results(results: List[GenerationResult], output_dir: Path):
    """Write each successful result beneath ``output_dir``."""
    for result in results:
        if not result.success:
            continue
        target = output_dir / result.path
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(result.code, encoding="utf-8")
        except OSError as e:
            raise CLIError(f"Failed to write {target}: {e}") from e
        logger.info("Wrote %s", target)

    console.print(f"[green]✓[/green] Bindings written to [cyan]{output_dir}[/cyan]")


def _print_code(results: List[GenerationResult]):
    for result in results:
        if not result.success:
            continue
        console.print()
        console.print(
            Panel(
                Syntax(result.code, LEXERS.get(result.language, "text"), theme="monokai"),
                title=str(result.path),
                border_style="green",
            )
        )


def _print_summary(results: List[GenerationResult], schema_errors, dry_run: bool):
    table = Table(
        title="📦 Generated Bindings" + (" (dry run)" if dry_run else ""),
        box=box.ROUNDED,
        title_style="bold cyan",
    )
    table.add_column("Resource", style="bold")
    table.add_column("Language", style="cyan")
    table.add_column("Path / Error")
    table.add_column("Renames", justify="right")

    for result in results:
        if result.success:
            table.add_row(
                result.resource_token,
                result.language,
                f"[green]{result.path}[/green]",
                str(len(result.binding.renames)),
            )
        else:
            table.add_row(
                result.resource_token,
                result.language,
                f"[red]{result.error_message}[/red]",
                "-",
            )

    for error in schema_errors:
        table.add_row(error.path or "?", "-", f"[red]{error.message}[/red]", "-")

    console.print()
    console.print(table)


def _print_renames(results: List[GenerationResult]):
    table = Table(
        title="🔀 Disambiguated Names",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Scope", style="dim")
    table.add_column("Desired", style="bold")
    table.add_column("Resolved", style="green")
    table.add_column("Reason")

    for result in results:
        if not result.success:
            continue
        for event in result.binding.renames:
            table.add_row(
                event.scope,
                event.desired,
                event.resolved,
                f"{event.reason.value} '{event.conflicts_with}'",
            )

    console.print()
    if table.row_count:
        console.print(table)
    else:
        console.print("[dim]No names needed disambiguation[/dim]")


def _print_warnings(results: List[GenerationResult]):
    warnings = [(r, w) for r in results for w in r.warnings]
    if not warnings:
        return

    console.print("\n[yellow]⚠️  Warnings:[/yellow]")
    for result, warning in warnings:
        console.print(
            f"  [yellow]•[/yellow] [dim]{result.resource_token} ({result.language})[/dim] {warning}"
        )
    console.print()


def _list_languages() -> int:
    """List supported languages with details."""
    table = Table(
        title="📋 Supported Languages", box=box.ROUNDED, title_style="bold cyan"
    )

    table.add_column("Language", style="bold green", no_wrap=True)
    table.add_column("Extension", style="cyan")
    table.add_column("Generator Class", style="dim")
    table.add_column("Aliases", style="blue")

    for lang_name, info in sorted(list_all_language_info().items()):
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(f"🔧 {lang_name}", info["file_extension"], info["class"], aliases)

    console.print()
    console.print(table)
    console.print()
    console.print(
        Panel(
            "[bold]Usage:[/bold] sdkgen [dim]schema.json[/dim] --language [cyan]LANGUAGE[/cyan] -o [dim]DIR[/dim]\n"
            "[bold]Info:[/bold] sdkgen --language-info [cyan]LANGUAGE[/cyan]",
            title="💡 Quick Start",
            border_style="blue",
        )
    )
    return 0


def _show_language_info(language: str) -> int:
    """Show detailed information about a specific language."""
    if not is_language_supported(language):
        console.print(f"[red]✗ Language '{language}' is not supported[/red]")
        console.print("[dim]Use --list-languages to see available options[/dim]")
        return 1

    try:
        info = get_language_info(language)
    except GeneratorError as e:
        console.print(f"[red]✗ Error getting language info:[/red] {e}")
        return 1

    info_text = f"""[bold]Language:[/bold] {info['name']}
[bold]File Extension:[/bold] {info['file_extension']}
[bold]Generator Class:[/bold] {info['class']}
[bold]Module:[/bold] {info['module']}"""

    if info["aliases"]:
        info_text += f"\n[bold]Aliases:[/bold] {', '.join(info['aliases'])}"

    console.print()
    console.print(
        Panel(info_text, title=f"🔧 {info['name']} Generator", border_style="green")
    )

    rules_table = Table(
        title="⚙️  Naming Rules",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )
    rules_table.add_column("Setting", style="bold")
    rules_table.add_column("Value", style="green")
    rules_table.add_row("Case Equality", info["case_equality"])
    rules_table.add_row("Disambiguation", info["disambiguation"])
    rules_table.add_row("Reserved Words", str(info["reserved_words"]))
    rules_table.add_row("Structural Members", ", ".join(info["structural_members"]))

    console.print()
    console.print(rules_table)
    return 0


if __name__ == "__main__":
    sys.exit(main())
