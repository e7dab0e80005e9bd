"""Main CLI application."""

import os
import sys
from enum import Enum
from pathlib import Path
from typing import List, Optional

import typer

from ..common.exceptions import DupScanError, UsageError
from ..common.logging import get_logger, setup_logging
from ..config.settings import get_settings
from ..detector.models import ScanReport
from ..detector.pipeline import DetectionPipeline
from ..reporting.exporter import ReportExporter
from .formatters import print_error, print_report

logger = get_logger(__name__)

USAGE = "Usage: dupscan [OPTIONS] [ROOT]  (ROOT defaults to the current directory)"


class OutputFormat(str, Enum):
    text = "text"
    json = "json"
    csv = "csv"


app = typer.Typer(
    name="dupscan",
    help="Find files with identical content under a directory tree",
    add_completion=False,
)


@app.command(context_settings={"allow_extra_args": True})
def scan(
    ctx: typer.Context,
    root: Optional[Path] = typer.Argument(
        None, help="Directory to scan (default: current directory)", show_default=False
    ),
    workers: Optional[int] = typer.Option(
        None, "--workers", "-w", min=1, help="Maximum files hashed concurrently"
    ),
    exclude: Optional[List[str]] = typer.Option(
        None, "--exclude", "-x", help="Extra directory name pattern to skip (repeatable)"
    ),
    no_default_excludes: bool = typer.Option(
        False, "--no-default-excludes", help="Do not skip the built-in directory list"
    ),
    verify: Optional[bool] = typer.Option(
        None, "--verify/--no-verify", help="Confirm hash matches byte by byte"
    ),
    algorithm: Optional[str] = typer.Option(
        None, "--algorithm", "-a", help="hashlib digest algorithm (default: sha256)"
    ),
    min_size: Optional[int] = typer.Option(
        None, "--min-size", min=1, help="Minimum file size in bytes"
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.text, "--format", "-f", case_sensitive=False, help="Report format"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """Scan a directory tree and report groups of duplicate files."""
    try:
        if ctx.args:
            raise UsageError(f"Unexpected extra arguments: {' '.join(ctx.args)}")

        settings = get_settings()
        ignore_dirs = [] if no_default_excludes else list(settings.ignore_dirs)
        ignore_dirs.extend(exclude or [])
        settings = settings.with_overrides(
            max_workers=workers,
            hash_algorithm=algorithm,
            min_file_size=min_size,
            byte_compare=verify,
            ignore_dirs=ignore_dirs,
            log_level="DEBUG" if verbose else None,
        )
        setup_logging(level=settings.log_level, log_file=settings.log_file)

        scan_root = str(root) if root is not None else os.getcwd()
        report = DetectionPipeline.from_settings(settings).run(scan_root)

    except UsageError as e:
        print_error(f"{e}\n{USAGE}")
        raise typer.Exit(1)
    except DupScanError as e:
        print_error(str(e))
        raise typer.Exit(1)
    except Exception as e:
        logger.debug("Unexpected error", exc_info=True)
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(1)

    render(report, output_format)


def render(report: ScanReport, output_format: OutputFormat) -> None:
    """Write a completed report to stdout in the requested format."""
    exporter = ReportExporter()

    if output_format is OutputFormat.json:
        exporter.export_json(report, sys.stdout)
    elif output_format is OutputFormat.csv:
        exporter.export_csv(report, sys.stdout)
    else:
        print_report(report)
