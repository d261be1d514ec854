"""Coverage command: how often confidence intervals capture the mean."""

import warnings
from pathlib import Path

import typer

from ...core.exceptions import PySamplingError, SmallSampleWarning
from ...montecarlo import coverage_experiment
from ..app import app, console, get_json_mode, ExitCode
from ..loading import emit_json, fail, load_population, population_block


@app.command("coverage")
def coverage_command(
    population_file: Path = typer.Argument(..., help="CSV, TSV or NPY file"),
    column: str = typer.Option(None, "--column", "-c", help="Variable to sample (CSV/TSV)"),
    size: int = typer.Option(..., "--size", "-n", help="Sample size"),
    trials: int = typer.Option(1000, "--trials", "-t", help="Number of intervals"),
    conf_level: float = typer.Option(0.95, "--conf-level", help="Nominal coverage"),
    method: str = typer.Option("z", "--method", "-m", help="z, t or auto"),
    replace: bool = typer.Option(False, "--replace", help="Sample with replacement"),
    seed: int = typer.Option(None, "--seed", help="Random seed"),
):
    """
    Build one interval per sample and report the fraction containing the mean.

    EXAMPLES:
        pysampling coverage nhanes.csv -c Height -n 250 -t 2500 --seed 1
        pysampling coverage heights.npy -n 10 -t 2000 --method t
    """
    pop = load_population(population_file, column)

    # Small-sample warnings are reported through result.warnings below.
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", SmallSampleWarning)
        try:
            result = coverage_experiment(
                pop, size, trials, conf_level, method, replace=replace, seed=seed,
            )
        except PySamplingError as e:
            raise fail(str(e), ExitCode.SAMPLING_ERROR)

    if get_json_mode():
        emit_json({
            "population": population_block(pop),
            "sample_size": result.sample_size,
            "trials": result.trials,
            "conf_level": result.nominal,
            "method": result.method,
            "critical_value": result.critical_value,
            "coverage": result.coverage if result.trials else None,
            "monte_carlo_error": result.monte_carlo_error() if result.trials else None,
            "warnings": list(result.warnings),
        })
        return

    console.print(result.describe(), markup=False, highlight=False)
