"""Typer-based CLI application for update-reporter."""

import logging
import sys
from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import typer

from update_reporter import __version__
from update_reporter.core.backends import DEFAULT_TIMEOUT_S
from update_reporter.core.errors import ReporterError
from update_reporter.core.family import classify_family, require_supported_family
from update_reporter.core.osrelease import DEFAULT_OS_RELEASE, read_os_release
from update_reporter.core.pipeline import run

app = typer.Typer(
    name="update-reporter",
    help="Report pending package updates as one canonical document",
    add_completion=False,
)

logger = logging.getLogger(__name__)


class OutputFormat(str, Enum):
    """Report output encodings."""

    JSON = "json"
    YAML = "yaml"


def version_callback(value: bool):
    """Display version and exit."""
    if value:
        typer.echo(f"update-reporter v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, is_eager=True),
    ] = None,
):
    """update-reporter - Pending update collection for a single host.

    Detects the host distribution, asks its native package manager for
    pending upgrades and prints one normalized report on stdout.
    """
    pass


def configure_logging(log_level: str) -> None:
    """Send diagnostics to stderr at the requested level.

    Raises:
        typer.Exit: If the level name is not recognised
    """
    log_level_upper = log_level.upper()
    if log_level_upper not in ["DEBUG", "INFO", "WARN", "WARNING", "ERROR"]:
        typer.echo(
            f"❌ Invalid log level: {log_level}. "
            "Must be debug, info, warn, or error.",
            err=True,
        )
        raise typer.Exit(1)

    # Map WARN to WARNING for Python logging
    if log_level_upper == "WARN":
        log_level_upper = "WARNING"

    logging.basicConfig(
        level=getattr(logging, log_level_upper),
        format="%(message)s",
        stream=sys.stderr,
    )


def fail(error: ReporterError) -> typer.Exit:
    """Report a pipeline failure on stderr and build the matching exit."""
    typer.echo(f"❌ {error.category}: {error}", err=True)
    return typer.Exit(error.exit_code)


OsReleaseOption = Annotated[
    Path,
    typer.Option("--os-release", help="Path to the OS release descriptor"),
]

LogLevelOption = Annotated[
    str,
    typer.Option(
        help="Logging level (debug, info, warn, error)",
        case_sensitive=False,
        hidden=True,
    ),
]


@app.command()
def report(
    os_release: OsReleaseOption = DEFAULT_OS_RELEASE,
    timeout: Annotated[
        float,
        typer.Option(min=1, help="Seconds allowed for the package manager query"),
    ] = DEFAULT_TIMEOUT_S,
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", help="Report encoding written to stdout"),
    ] = OutputFormat.JSON,
    log_level: LogLevelOption = "warn",
):
    """Collect pending updates and print the report on stdout.

    Exit codes: 0 success, 2 unreadable OS release file, 3 unsupported
    platform, 4 package manager or parse failure, 5 incomplete report.
    """
    configure_logging(log_level)

    try:
        run(
            os_release_path=os_release,
            timeout_s=timeout,
            output_format=output_format.value,
        )
    except ReporterError as e:
        raise fail(e) from e
    except Exception as e:
        typer.echo(f"❌ Unexpected error: {e}", err=True)
        logger.exception("Update collection failed")
        raise typer.Exit(1) from e


@app.command()
def detect(
    os_release: OsReleaseOption = DEFAULT_OS_RELEASE,
    log_level: LogLevelOption = "warn",
):
    """Show the detected OS identity and package manager family."""
    configure_logging(log_level)

    try:
        identity = read_os_release(os_release)
        typer.echo(f"osId:      {identity.id}")
        typer.echo(f"osVersion: {identity.version}")
        typer.echo(f"family:    {classify_family(identity).value}")
        require_supported_family(identity)
    except ReporterError as e:
        raise fail(e) from e


if __name__ == "__main__":
    app()
