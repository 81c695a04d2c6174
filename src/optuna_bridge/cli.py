"""optuna-bridge CLI: drive an optuna study from the command line.

Every command is a thin front end over :class:`optuna_bridge.study.Study`.
"""

from __future__ import annotations

import json
import logging
import math
import sys
from typing import Annotated, Any, Iterable, NoReturn, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from .config import BridgeConfig, StudyDirection, load_config
from .runner import CommandRunner
from .search_space import SearchSpace, load_search_space_yaml
from .study import Study, list_studies
from .trial import FrozenTrial

app = typer.Typer(help="optuna-bridge: drive optuna studies through the optuna CLI")
console = Console()
error_console = Console(stderr=True, style="bold red")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Raised when optuna prints nothing, or something other than the expected JSON
OUTPUT_ERRORS = (ValueError, KeyError, TypeError)


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )


@app.callback()
def context_callback(
    ctx: typer.Context,
    config_path: Annotated[Optional[str], typer.Option("--config", "-c", help="YAML config file")] = None,
    storage: Annotated[Optional[str], typer.Option("--storage", "-s", help="Storage URI")] = None,
    study_name: Annotated[Optional[str], typer.Option("--study-name", "-n", help="Study name")] = None,
    direction: Annotated[Optional[StudyDirection], typer.Option("--direction", "-d", help="Optimization direction")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Verbose output")] = False,
):
    """Record global options; the config is loaded when a command runs."""
    setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["options"] = {
        "path": config_path,
        "storage": storage,
        "study_name": study_name,
        "direction": direction,
    }


def _config(ctx: typer.Context) -> BridgeConfig:
    if "config" not in ctx.obj:
        options = dict(ctx.obj["options"])
        try:
            ctx.obj["config"] = load_config(options.pop("path"), **options)
        except (FileNotFoundError, ValidationError) as e:
            error_console.print(f"Invalid configuration: {e}")
            raise typer.Exit(code=1)
    return ctx.obj["config"]


def _study(ctx: typer.Context, create: bool = False, skip_if_exists: Optional[bool] = None) -> Study:
    config = _config(ctx)
    if skip_if_exists is not None:
        config = config.model_copy(update={"skip_if_exists": skip_if_exists})
    try:
        return Study.from_config(config, create=create)
    except ValueError as e:
        error_console.print(str(e))
        raise typer.Exit(code=1)


def _bad_output(e: Exception) -> NoReturn:
    error_console.print(f"Unexpected output from optuna: {e}")
    raise typer.Exit(code=1)


def _format_value(value: float) -> str:
    return "-" if math.isnan(value) else f"{value:.6g}"


def _trials_table(trials: Iterable[FrozenTrial], title: Optional[str] = None) -> Table:
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("Number", justify="right")
    table.add_column("State")
    table.add_column("Value", justify="right")
    table.add_column("Params")

    state_styles = {"COMPLETE": "green", "RUNNING": "blue", "PRUNED": "yellow", "FAIL": "red"}
    for trial in trials:
        params = ", ".join(f"{k}={v}" for k, v in trial.params.items())
        table.add_row(
            str(trial.number),
            f"[{state_styles.get(trial.state, 'white')}]{trial.state}[/]",
            _format_value(trial.value),
            params,
        )
    return table


@app.command()
def create(
    ctx: typer.Context,
    skip_if_exists: Annotated[bool, typer.Option("--skip-if-exists", help="Reuse an existing study")] = False,
):
    """Create the study."""
    study = _study(ctx, create=True, skip_if_exists=skip_if_exists or None)
    console.print(f"✓ Study [bold]{study.study_name}[/] ({study.direction.value})", style="green")


@app.command()
def ask(
    ctx: typer.Context,
    search_space: Annotated[Optional[str], typer.Option("--search-space", "-f", help="YAML search space file")] = None,
):
    """Sample a new trial and print it as JSON."""
    config = _config(ctx)
    path = search_space or config.search_space
    if not path:
        error_console.print("No search space given (--search-space or config 'search_space')")
        raise typer.Exit(code=1)

    try:
        space = SearchSpace.from_config(load_search_space_yaml(path))
    except (FileNotFoundError, ValueError) as e:
        error_console.print(f"Invalid search space: {e}")
        raise typer.Exit(code=1)

    study = _study(ctx)
    try:
        trial = study.ask(space)
    except OUTPUT_ERRORS as e:
        _bad_output(e)
    console.print_json(json.dumps({"number": trial.number, "params": dict(trial.params)}))


# Unknown options are kept as arguments so negative values like -1.5 parse
@app.command(context_settings={"ignore_unknown_options": True})
def tell(
    ctx: typer.Context,
    number: Annotated[int, typer.Argument(help="Trial number")],
    value: Annotated[Optional[float], typer.Argument(help="Objective value")] = None,
    state: Annotated[Optional[str], typer.Option("--state", help="Final state: complete, fail or pruned")] = None,
    skip_if_finished: Annotated[bool, typer.Option("--skip-if-finished", help="Ignore finished trials")] = False,
):
    """Report the result of a trial."""
    if value is None and state is None:
        error_console.print("Give a value or a --state")
        raise typer.Exit(code=1)
    _study(ctx).tell(number, value, state=state, skip_if_finished=skip_if_finished)
    console.print(f"✓ Told trial {number}", style="green")


@app.command()
def trials(ctx: typer.Context):
    """List all trials of the study."""
    study = _study(ctx)
    try:
        all_trials = study.trials()
    except OUTPUT_ERRORS as e:
        _bad_output(e)
    if not all_trials:
        console.print("No trials yet.", style="yellow")
        return
    console.print(_trials_table(all_trials, title=study.study_name))


@app.command()
def best(ctx: typer.Context):
    """Show the best trial."""
    study = _study(ctx)
    try:
        trial = study.best_trial()
    except OUTPUT_ERRORS as e:
        _bad_output(e)
    console.print(_trials_table([trial], title="Best trial"))


@app.command()
def studies(ctx: typer.Context):
    """List studies in the storage."""
    config = _config(ctx)
    try:
        rows: list[dict[str, Any]] = list_studies(
            config.storage,
            runner=CommandRunner(timeout=config.timeout),
            executable=config.executable,
        )
    except OUTPUT_ERRORS as e:
        _bad_output(e)
    if not rows:
        console.print("No studies found.", style="yellow")
        return

    table = Table(show_header=True, header_style="bold magenta")
    columns = list(rows[0].keys())
    for column in columns:
        table.add_column(column)
    for row in rows:
        table.add_row(*(str(row.get(column, "")) for column in columns))
    console.print(table)


@app.command()
def delete(
    ctx: typer.Context,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Do not ask for confirmation")] = False,
):
    """Delete the study and all of its trials."""
    study = _study(ctx)
    if not yes:
        typer.confirm(f"Delete study '{study.study_name}'?", abort=True)
    study.delete()
    console.print(f"✓ Deleted {study.study_name}", style="green")


def main():
    app()


if __name__ == "__main__":
    main()
