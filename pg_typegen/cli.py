"""
Command-line interface for pg-typegen.

    pg-typegen generate schema.json -o schema.ts -C -S
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Sequence

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from . import __version__
from .codegen import generate_code
from .codegen.core.config import DEFAULT_CONFIG_FILE, ConfigError, GeneratorConfig, load_config
from .codegen.core.schema import SchemaError
from .codegen.languages.typescript import create_typescript_generator
from .logging_config import configure_logging, get_logger
from .utils import SchemaLoaderError, load_schema

logger = get_logger(__name__)

# Generated code goes to stdout, status messages to stderr
console = Console()
err_console = Console(stderr=True)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="pg-typegen",
        description="Generate TypeScript declarations from a PostgreSQL schema dump",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)
    generate = subparsers.add_parser(
        "generate",
        help="Generate TypeScript matching a schema dump",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  pg-typegen generate schema.json -o schema.ts
  pg-typegen generate schema.json -t users -t comments -C -S
  pg-typegen generate --url https://example.com/schema.json -x migrations
        """.strip(),
    )

    # Input options (mutually exclusive)
    input_group = generate.add_mutually_exclusive_group(required=True)
    input_group.add_argument("file", nargs="?", help="Schema dump (JSON) to read")
    input_group.add_argument("--url", help="URL to fetch the schema dump from")

    generate.add_argument("--output", "-o", help="Output file (default: stdout)")
    generate.add_argument(
        "--config",
        help=f"Configuration file (JSON, default: {DEFAULT_CONFIG_FILE} if present)",
    )
    generate.add_argument("--schema", "-s", help="Schema name (overrides the dump's)")
    generate.add_argument(
        "--table",
        "-t",
        action="append",
        help="Table name (may specify multiple times for multiple tables)",
    )
    generate.add_argument(
        "--excluded-table",
        "-x",
        action="append",
        help="Excluded table name (may specify multiple times)",
    )

    options_group = generate.add_argument_group("generation options")
    options_group.add_argument(
        "--camel-case",
        "-C",
        action="store_true",
        default=None,
        help="Camel-case columns (e.g. user_id --> userId)",
    )
    options_group.add_argument(
        "--singularize",
        "-S",
        action="store_true",
        default=None,
        help="Singularize table names (e.g. Companies --> Company)",
    )
    options_group.add_argument(
        "--dates-as-strings",
        action="store_true",
        default=None,
        help="Treat date, timestamp and timestamptz as strings, not Dates",
    )
    options_group.add_argument(
        "--prefix-with-schema-names",
        action="store_true",
        default=None,
        help="Prefix the schema name to every table name",
    )
    options_group.add_argument(
        "--json-types-file",
        help="Import @type-annotated JSON column types from this module path",
    )
    options_group.add_argument(
        "--no-header",
        action="store_true",
        help="Do not write the file header",
    )
    options_group.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show debug logging and generation metadata",
    )

    generate.set_defaults(func=_handle_generate)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point; returns the process exit code."""
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        return args.func(args)
    except (CLIError, ConfigError, SchemaError, SchemaLoaderError) as e:
        logger.debug("Command failed", exc_info=True)
        err_console.print(f"[red]✗ Error:[/red] {escape(str(e))}")
        return 1


def _build_config(args: argparse.Namespace) -> GeneratorConfig:
    """Merge defaults, the config file and command-line flags."""
    config_file = args.config
    if config_file is None and Path(DEFAULT_CONFIG_FILE).exists():
        config_file = DEFAULT_CONFIG_FILE
        logger.info("Using configuration file %s", config_file)

    overrides: dict[str, Any] = {
        "camel_case": args.camel_case,
        "singularize": args.singularize,
        "dates_as_strings": args.dates_as_strings,
        "prefix_with_schema_names": args.prefix_with_schema_names,
        "json_types_file": args.json_types_file,
        "tables": args.table,
        "excluded_tables": args.excluded_table,
    }
    if args.no_header:
        overrides["write_header"] = False

    return load_config(custom_config=overrides, config_file=config_file)


def _handle_generate(args: argparse.Namespace) -> int:
    """Handle the generate subcommand."""
    config = _build_config(args)

    _source, schema = load_schema(file_path=args.file, url=args.url, schema_name=args.schema)

    generator = create_typescript_generator(config)
    result = generate_code(generator, schema, config.tables, config.excluded_tables)

    if not result.success:
        raise CLIError(result.error_message)

    # Output is only written once generation has fully succeeded
    if args.output:
        output_path = Path(args.output)
        try:
            output_path.write_text(result.code, encoding="utf-8")
        except OSError as e:
            raise CLIError(f"Failed to write to {output_path}: {e}") from e
        err_console.print(
            f"[green]✓[/green] Generated TypeScript saved to [cyan]{escape(str(output_path))}[/cyan]"
        )
    elif sys.stdout.isatty():
        console.print(Syntax(result.code, "typescript", theme="monokai"))
    else:
        sys.stdout.write(result.code)

    if args.verbose and result.metadata:
        _print_metadata(result.metadata)

    if result.warnings:
        err_console.print("\n[yellow]⚠️  Warnings:[/yellow]")
        for warning in result.warnings:
            err_console.print(f"  [yellow]•[/yellow] {escape(warning)}")

    return 0


def _print_metadata(metadata: dict[str, Any]) -> None:
    metadata_table = Table(
        title="📊 Generation Metadata",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )
    metadata_table.add_column("Property", style="bold")
    metadata_table.add_column("Value", style="green")

    for key, value in metadata.items():
        if isinstance(value, list):
            value = ", ".join(value) or "-"
        metadata_table.add_row(key.replace("_", " ").title(), str(value))

    err_console.print()
    err_console.print(metadata_table)
