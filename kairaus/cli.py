"""Click-based CLI entry point for kairaus."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from kairaus.config import DEFAULT_FILE_PATTERN, DEFAULT_WORKERS


@click.group()
@click.version_option(version="0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Log parser warnings and progress.")
def cli(verbose: bool):
    """Reader for Infra-format ground investigation files."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--strict", is_flag=True, help="Fail on data rows or lab lines without a valid target.")
def parse(file: Path, strict: bool):
    """Parse one file and print a summary of its investigations."""
    from kairaus.errors import InfraParseError
    from kairaus.parsers.file_reader import parse_file
    from kairaus.storage.report import render_file

    try:
        infra = parse_file(file, strict=strict)
    except InfraParseError as e:
        raise click.ClickException(str(e)) from e
    click.echo(render_file(infra))


@cli.command()
@click.argument("raw_dir", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--pattern", default=DEFAULT_FILE_PATTERN, help="Glob for investigation files.")
@click.option("--workers", default=DEFAULT_WORKERS, help="Parallel parser processes.")
def count(raw_dir: Path, pattern: str, workers: int):
    """Count investigations per method across a directory of files."""
    from kairaus.errors import InfraFileError
    from kairaus.storage.collection import parse_folder
    from kairaus.storage.report import render_counts

    try:
        collection = parse_folder(raw_dir, pattern=pattern, workers=workers)
    except InfraFileError as e:
        raise click.ClickException(str(e)) from e
    click.echo(render_counts(collection.count_investigations()))
    if collection.errors:
        click.echo(f"Files with errors: {len(collection.errors)}")


@cli.command()
@click.argument("raw_dir", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.argument("output_dir", type=click.Path(path_type=Path))
@click.option("--pattern", default=DEFAULT_FILE_PATTERN, help="Glob for investigation files.")
@click.option("--workers", default=DEFAULT_WORKERS, help="Parallel parser processes.")
@click.option("--strict", is_flag=True, help="Skip files with structural errors instead of their bad lines.")
def convert(raw_dir: Path, output_dir: Path, pattern: str, workers: int, strict: bool):
    """Convert raw investigation files to Parquet."""
    from kairaus.errors import InfraFileError
    from kairaus.storage.writer import run_conversion

    try:
        run_conversion(raw_dir, output_dir, pattern=pattern, workers=workers, strict=strict)
    except InfraFileError as e:
        raise click.ClickException(str(e)) from e


@cli.command()
@click.argument("output_dir", type=click.Path(exists=True, path_type=Path))
def info(output_dir: Path):
    """Show dataset summary statistics."""
    from kairaus.storage.catalog import dataset_info

    click.echo(dataset_info(output_dir))


if __name__ == "__main__":
    cli()
