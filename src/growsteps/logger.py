# SPDX-License-Identifier: MIT

import logging

from rich.console import Console
from rich.logging import RichHandler

from growsteps.configuration import DEFAULT_LOG_LEVEL, LOG_LEVELS


def configure_logging(level: object = DEFAULT_LOG_LEVEL) -> str:
    """
    Send log records for the whole app to stderr through Rich.

    A level outside LOG_LEVELS (a hand-edited config file) falls back to
    the default and is reported once the handler is in place.

    Returns:
        The level actually applied
    """
    requested = str(level).upper()
    applied = requested if requested in LOG_LEVELS else DEFAULT_LOG_LEVEL
    logging.basicConfig(
        level=applied,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    if applied != requested:
        logging.getLogger(__name__).warning(
            "unknown log level %r, using %s", level, DEFAULT_LOG_LEVEL
        )
    return applied
