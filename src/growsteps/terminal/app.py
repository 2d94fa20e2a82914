# SPDX-License-Identifier: MIT

from typing import Annotated

import typer

from growsteps.logger import configure_logging
from growsteps.repository.configuration import CONFIGURATION_REPO
from growsteps.terminal import configuration
from growsteps.terminal.custom_typer import AliasedTyperGroup
from growsteps.terminal.history import delete, history, list_entries, reflect, show
from growsteps.terminal.wizard import new
from growsteps.view import state as view_state

app = typer.Typer(
    cls=AliasedTyperGroup,
    help="Grow Steps - record the smallest next step, then reflect on it",
    no_args_is_help=True,
)
app.command(name="new, n")(new)
app.command(name="history, h")(history)
app.command(name="list, l")(list_entries)
app.command(name="show, s", no_args_is_help=True)(show)
app.command(name="reflect, r", no_args_is_help=True)(reflect)
app.command(name="delete, d", no_args_is_help=True)(delete)
app.add_typer(configuration.app, name="config, c")


@app.callback()
def main_callback(
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress the header above each screen",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Log debug output to stderr",
        ),
    ] = False,
) -> None:
    """
    Grow Steps - record the smallest next step, then reflect on it

    Global options that apply to all commands.
    """
    config = CONFIGURATION_REPO.get_config()
    configure_logging("DEBUG" if verbose else config["log_level"])
    view_state.set_show_header(config["show_header"] and not no_header)


def run() -> None:
    app()
