"""Command-line interface for bibstream.

Provides CLI commands for parsing BibTeX files.
"""

import importlib.metadata
import json
import sys
import time
from contextlib import nullcontext
from pathlib import Path

import click

from bibstream.models import UnitContext

__all__ = ["cli"]

try:
    __version__ = importlib.metadata.version("bibstream")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.1.0"  # Fallback for development


@click.group()
@click.version_option(version=__version__, prog_name="bibstream")
def cli() -> None:
    """Streaming BibTeX parser.

    Use 'bibstream COMMAND --help' for command-specific help.
    """


@cli.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    required=True,
    help="Output JSONL file path",
)
@click.option(
    "--case",
    "tag_name_case",
    type=click.Choice(["none", "lower", "upper"], case_sensitive=False),
    default="none",
    show_default=True,
    help="Rewrite tag names to this case",
)
@click.option(
    "--strip",
    is_flag=True,
    help="Strip surrounding whitespace from values",
)
@click.option(
    "--collapse",
    is_flag=True,
    help="Collapse whitespace runs (including newlines) in values",
)
@click.option(
    "--log",
    "log_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Append JSONL audit events to this file",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)
def parse(
    input_path: str,
    output: str,
    tag_name_case: str,
    strip: bool,
    collapse: bool,
    log_path: str | None,
    verbose: bool,
) -> None:
    """Parse the BibTeX file INPUT_PATH into JSONL, one entry per line.

    Examples
    --------
        bibstream parse references.bib -o references.jsonl
        bibstream parse references.bib -o out.jsonl --case lower --strip
    """
    from bibstream import ParserConfig, write_jsonl
    from bibstream.assemble import collapse_whitespace, strip_whitespace
    from bibstream.audit import AuditLogger, generate_run_id
    from bibstream.parse import ingest_file

    processors = []
    if strip:
        processors.append(strip_whitespace)
    if collapse:
        processors.append(collapse_whitespace)

    config = ParserConfig(tag_name_case=tag_name_case, tag_value_processors=processors)

    if verbose:
        click.echo(f"Parsing file: {input_path}", err=True)

    start = time.monotonic()
    logger_cm = (
        AuditLogger(run_id=generate_run_id(), log_path=Path(log_path))
        if log_path
        else nullcontext()
    )

    with logger_cm as audit_logger:
        if audit_logger is not None:
            audit_logger.set_stage("parse")
            audit_logger.run_started(command=sys.argv, parameters=config.to_dict())

        entries, result = ingest_file(Path(input_path), config=config, audit_logger=audit_logger)

        if result.errors:
            if audit_logger is not None:
                audit_logger.run_finished("failed", time.monotonic() - start)
            for error in result.errors:
                click.secho(f"Error: {error}", fg="red", err=True)
            sys.exit(1)

        if verbose:
            click.echo(f"Detected encoding: {result.encoding_used}", err=True)
            click.echo(f"Found {len(entries)} entries", err=True)
            click.echo(f"Writing to: {output}", err=True)

        write_jsonl(entries, output)

        if audit_logger is not None:
            audit_logger.run_finished("success", time.monotonic() - start, len(entries))

    click.secho(f"✓ Successfully wrote {len(entries)} entries to {output}", fg="green")


class _UnitPrinter:
    def on_unit(self, text: str | None, context: UnitContext) -> None:
        click.echo(f"{context.state}\t{json.dumps(text, ensure_ascii=False)}")


@cli.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
def units(input_path: str) -> None:
    """Print every unit the grammar engine emits for INPUT_PATH.

    Each line is the unit state, a tab, and the unit text as JSON.
    """
    from bibstream import BibSyntaxError, Parser

    parser = Parser()
    parser.add_listener(_UnitPrinter())

    try:
        parser.parse_file(input_path)
    except BibSyntaxError as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)


if __name__ == "__main__":
    cli()
