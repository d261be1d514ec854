"""Core CLI app definition and global state."""

import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

app = typer.Typer(
    name="pysampling",
    help="Run sampling-distribution experiments on a population file.",
    no_args_is_help=True,
)

console = Console()
# Log records go to stderr so --json output stays parseable
log_console = Console(stderr=True)

# Global state for JSON mode (set by callback)
_json_mode = False


class ExitCode:
    """Exit codes for CLI commands.

        0 = Success
        1 = Library error (invalid input, impossible sample size, ...)
        2 = File not found
    """

    SUCCESS = 0
    SAMPLING_ERROR = 1
    FILE_NOT_FOUND = 2


def get_json_mode() -> bool:
    """Get current JSON mode state."""
    return _json_mode


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Route pysampling's loggers through Rich."""
    level = logging.WARNING
    if verbose:
        level = logging.INFO
    if debug:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=log_console, show_path=False, markup=False)],
        force=True,
    )
    logging.getLogger("pysampling").setLevel(level)


def _version_callback(value: bool) -> None:
    if value:
        from .. import __version__

        print(f"pysampling {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output machine-readable JSON instead of tables",
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log progress")
    ] = False,
    debug: Annotated[
        bool, typer.Option("--debug", help="Log backend details")
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            help="Show version and exit",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = False,
):
    """pysampling: empirical sampling distributions and interval coverage.

    Use --json for machine-readable output suitable for scripting.
    """
    global _json_mode
    _json_mode = json_output
    setup_logging(verbose=verbose, debug=debug)


# Import commands to register them with the app
from .commands import run, coverage  # noqa: E402, F401
