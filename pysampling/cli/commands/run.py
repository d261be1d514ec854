"""Run command: sampling distribution of a statistic."""

from pathlib import Path

import typer
from rich.table import Table

from ...core.exceptions import PySamplingError
from ...montecarlo import run as run_experiment
from ..app import app, console, get_json_mode, ExitCode
from ..loading import emit_json, fail, load_population, population_block


@app.command("run")
def run_command(
    population_file: Path = typer.Argument(..., help="CSV, TSV or NPY file"),
    column: str = typer.Option(None, "--column", "-c", help="Variable to sample (CSV/TSV)"),
    size: int = typer.Option(..., "--size", "-n", help="Sample size"),
    trials: int = typer.Option(1000, "--trials", "-t", help="Number of samples"),
    statistic: str = typer.Option("mean", "--statistic", "-s", help="mean, sd, var, se or median"),
    replace: bool = typer.Option(False, "--replace", help="Sample with replacement"),
    seed: int = typer.Option(None, "--seed", help="Random seed"),
    backend: str = typer.Option("cpu", "--backend", help="cpu, gpu or auto"),
):
    """
    Draw repeated samples and summarise the sampling distribution.

    EXAMPLES:
        pysampling run nhanes.csv -c Height -n 50 -t 5000 --seed 42
        pysampling --json run heights.npy -n 100 -t 2500
    """
    pop = load_population(population_file, column)

    try:
        result = run_experiment(
            pop, size, trials, replace, statistic, seed=seed, backend=backend,
        )
    except (PySamplingError, RuntimeError) as e:
        raise fail(str(e), ExitCode.SAMPLING_ERROR)

    block = {
        "population": population_block(pop),
        "sample_size": result.sample_size,
        "trials": result.trials,
        "replace": result.replace,
        "statistic": result.statistic,
        "backend": result.backend_name,
        "warnings": list(result.warnings),
    }
    if result.trials > 0:
        block["mean"] = result.mean
        block["std_dev"] = result.std_dev
    if result.statistic == "mean":
        block["theoretical_standard_error"] = result.theoretical_standard_error()

    if get_json_mode():
        emit_json(block)
        return

    table = Table(title=f"Sampling distribution of the {result.statistic}")
    table.add_column("Quantity")
    table.add_column("Value", justify="right")
    pop_info = block["population"]
    table.add_row("population size", str(pop_info["size"]))
    if pop_info["n_missing"]:
        table.add_row("missing values dropped", str(pop_info["n_missing"]))
    table.add_row("population mean", f"{pop_info['mean']:.6g}")
    table.add_row("population sd", f"{pop_info['std']:.6g}")
    table.add_row("samples", f"{result.trials} × n={result.sample_size}")
    if "mean" in block:
        table.add_row(f"mean of {result.statistic}", f"{block['mean']:.6g}")
        table.add_row(f"sd of {result.statistic}", f"{block['std_dev']:.6g}")
    if "theoretical_standard_error" in block:
        table.add_row("sigma / sqrt(n)", f"{block['theoretical_standard_error']:.6g}")
    console.print(table)
    for w in result.warnings:
        console.print(f"[yellow]⚠[/yellow] {w}")
