"""Command-line interface for mkvfix."""

import sys
from pathlib import Path

import click
from pydantic import ValidationError

from mkvfix import __version__
from mkvfix.config import Config, load_config
from mkvfix.core.executor import check_requirements
from mkvfix.core.pipeline import ProcessingPipeline
from mkvfix.core.scanner import FileScanner
from mkvfix.exceptions import MissingToolError
from mkvfix.models.file import ProcessResult
from mkvfix.utils.logger import get_logger, setup_logging

STATUS_COLORS = {
    "success": "green",
    "skipped": "yellow",
    "dry_run": "cyan",
    "failed": "red",
    "error": "red",
}


def processing_options(func):
    """Options shared by the commands that process files."""
    func = click.option(
        "--dry-run",
        is_flag=True,
        default=False,
        help="Show the ffmpeg command without running it",
    )(func)
    func = click.option(
        "--prune",
        is_flag=True,
        default=False,
        help="Remove audio/subtitle tracks not in the default language (requires --lang)",
    )(func)
    func = click.option(
        "--lang",
        "-l",
        default=None,
        metavar="CODE",
        help="Default language for audio and subtitle tracks (e.g. 'eng'); empty disables",
    )(func)
    return func


def _effective_config(ctx, lang, prune, dry_run) -> Config:
    """Apply command-line overrides to the loaded configuration."""
    try:
        return ctx.obj["config"].with_overrides(
            language=lang, prune=prune or None, dry_run=dry_run or None
        )
    except ValidationError as e:
        messages = "; ".join(err["msg"] for err in e.errors())
        raise click.UsageError(messages, ctx=ctx)


def _run(config: Config, files: list[Path]) -> dict[str, int]:
    """Process files one after the other, never stopping on a failure."""
    logger = get_logger(__name__)

    try:
        check_requirements(config.tools.mkvmerge, config.tools.ffmpeg)
    except MissingToolError as e:
        logger.error("Missing requirements", error=e.message)
        click.secho(f"✗ Missing requirements: {e.message}", fg="red", err=True)
        sys.exit(1)

    pipeline = ProcessingPipeline(config)
    results = {status: 0 for status in STATUS_COLORS}

    for idx, file in enumerate(files, 1):
        click.echo(f"[{idx}/{len(files)}] {file.name}")
        result: ProcessResult = pipeline.process(file)
        click.secho(f"  {result}", fg=STATUS_COLORS[result.status])
        results[result.status] += 1

    return results


def _summary(results: dict[str, int], total: int) -> None:
    click.echo("=" * 60)
    click.echo("Summary:")
    click.secho(f"  ✓ Success:  {results['success']}", fg="green")
    click.secho(f"  ⊙ Dry run:  {results['dry_run']}", fg="cyan")
    click.secho(f"  ⊘ Skipped:  {results['skipped']}", fg="yellow")
    click.secho(f"  ✗ Failed:   {results['failed']}", fg="red")
    click.secho(f"  ✗ Errors:   {results['error']}", fg="red")
    click.echo(f"  Total:      {total}")


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (defaults to built-in defaults)",
)
@click.pass_context
def cli(ctx, config):
    """mkvfix - Fix common problems in MKV files.

    E-AC-3 audio is converted to AAC; all other tracks and metadata are
    copied from the original file.
    """
    try:
        cfg = load_config(config)
        ctx.ensure_object(dict)
        ctx.obj["config"] = cfg

        setup_logging(cfg.logging)

    except Exception as e:
        click.echo(f"Error loading configuration: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(path_type=Path))
@processing_options
@click.pass_context
def fix(ctx, files, lang, prune, dry_run):
    """Fix one or more MKV files in place.

    Files are processed in order; a failure on one file is reported and
    processing continues with the next.
    """
    config = _effective_config(ctx, lang, prune, dry_run)
    results = _run(config, list(files))
    _summary(results, len(files))


@cli.command()
@click.argument("path", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--recursive/--no-recursive",
    "-r/-R",
    default=True,
    help="Scan subdirectories recursively (default: True)",
)
@processing_options
@click.pass_context
def scan(ctx, path, recursive, lang, prune, dry_run):
    """Scan a directory and fix all MKV files found."""
    config = _effective_config(ctx, lang, prune, dry_run)

    click.echo(f"Scanning: {path}")
    click.echo(f"Recursive: {recursive}")

    try:
        files = FileScanner().scan(path, recursive=recursive)
    except (OSError, ValueError) as e:
        click.secho(f"✗ Error scanning: {e}", fg="red", err=True)
        sys.exit(1)

    if not files:
        click.secho("⊘ No MKV files found", fg="yellow")
        return

    click.echo(f"Found {len(files)} file(s)")
    results = _run(config, files)
    _summary(results, len(files))


@cli.command()
def version():
    """Show version information."""
    click.echo(f"mkvfix v{__version__}")


def main():
    """Entry point for the CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
