"""Population loading shared by the CLI commands."""

import json
from pathlib import Path

import typer
from rich.markup import escape

from ..core.exceptions import PySamplingError
from ..core.population import Population
from .app import ExitCode, console, get_json_mode


def fail(message: str, exit_code: int) -> typer.Exit:
    """Report an error in the active output mode and build the Exit to raise."""
    if get_json_mode():
        emit_json({"error": message, "exit_code": exit_code})
    else:
        console.print(f"[red]✗[/red] {escape(message)}")
    return typer.Exit(exit_code)


def load_population(path: Path, column: str | None) -> Population:
    """Load a population file, turning failures into CLI exits."""
    if not path.exists():
        raise fail(f"File not found: {path}", ExitCode.FILE_NOT_FOUND)
    try:
        return Population.from_file(path, column)
    except PySamplingError as e:
        raise fail(f"Failed to load population: {e}", ExitCode.SAMPLING_ERROR)


def population_block(pop: Population) -> dict:
    meta = pop.metadata
    return {
        "name": pop.name,
        "size": pop.size,
        "n_missing": meta.get("n_missing", 0),
        "mean": pop.mean(),
        "std": pop.std(),
    }


def emit_json(data: dict) -> None:
    """Print a JSON document to stdout, unwrapped."""
    print(json.dumps(data, indent=2, default=str))
