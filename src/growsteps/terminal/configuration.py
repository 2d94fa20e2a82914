# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from growsteps import configuration
from growsteps.repository.configuration import CONFIGURATION_REPO
from growsteps.terminal.custom_typer import AliasedTyperGroup

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("view, v")
def view() -> None:
    """Display current configuration settings."""
    config = CONFIGURATION_REPO.get_config()

    console = Console()
    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("data_path", str(configuration.DATA_PATH))
    table.add_row("storage_key", config["storage_key"])
    table.add_row(
        "show_header",
        "✓ Enabled" if config["show_header"] else "✗ Disabled",
    )
    table.add_row("log_level", config["log_level"])
    feedback_seed = config.get("feedback_seed")
    table.add_row(
        "feedback_seed", "random" if feedback_seed is None else str(feedback_seed)
    )
    table.add_row("config_path", str(configuration.APP_CONFIG_PATH))

    console.print(table)


@app.command("set, s")
def set(
    data_path: Annotated[
        Optional[str],
        typer.Option(
            "--data-path",
            help="Directory for the entry data file",
        ),
    ] = None,
    remove_data_path: Annotated[
        bool,
        typer.Option(
            "--remove-data-path",
            help="Reset data path to the platform default",
        ),
    ] = False,
    storage_key: Annotated[
        Optional[str],
        typer.Option(
            "--storage-key",
            help="Name of the storage slot holding the entries",
        ),
    ] = None,
    show_header: Annotated[
        Optional[bool],
        typer.Option(
            "--show-header/--no-show-header",
            help="Enable/disable the header above each screen",
        ),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option(
            "--log-level",
            help="One of DEBUG, INFO, WARNING, ERROR",
        ),
    ] = None,
    feedback_seed: Annotated[
        Optional[int],
        typer.Option(
            "--feedback-seed",
            help="Seed for feedback template selection",
        ),
    ] = None,
    remove_feedback_seed: Annotated[
        bool,
        typer.Option(
            "--remove-feedback-seed",
            help="Pick feedback templates at random again",
        ),
    ] = False,
) -> None:
    """Update configuration settings."""
    if log_level is not None and log_level.upper() not in configuration.LOG_LEVELS:
        raise typer.BadParameter(
            f"log level must be one of {', '.join(configuration.LOG_LEVELS)}",
            param_hint="--log-level",
        )

    CONFIGURATION_REPO.update_config(
        data_path=data_path,
        remove_data_path=remove_data_path,
        storage_key=storage_key,
        show_header=show_header,
        log_level=log_level,
        feedback_seed=feedback_seed,
        remove_feedback_seed=remove_feedback_seed,
    )
    CONFIGURATION_REPO.flush()

    view()
