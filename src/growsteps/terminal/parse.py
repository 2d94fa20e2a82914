# SPDX-License-Identifier: MIT

import re
from typing import Optional

import typer

from growsteps.model.entry import STATUS_OPTIONS, Entry
from growsteps.model.entry_id import EntryId


def resolve_entry_id(reference: str, entries: list[Entry]) -> EntryId:
    """
    Resolve a history reference to an entry id.

    Accepts the 1-based display number shown by ``list`` or a full entry id.

    Raises:
        typer.BadParameter: If nothing matches
    """
    reference = reference.strip()
    if re.match(r"^\d+$", reference):
        number = int(reference)
        if 1 <= number <= len(entries):
            return entries[number - 1]["id"]
        raise typer.BadParameter(
            f"No entry number {number} (there are {len(entries)} entries)"
        )
    for entry in entries:
        if entry["id"] == reference:
            return entry["id"]
    raise typer.BadParameter(f"No entry with id {reference}")


def parse_status(value: str) -> str:
    """
    Map a status option number (1-5) to its label; other input is kept.
    """
    stripped = value.strip()
    if re.match(r"^\d$", stripped):
        index = int(stripped)
        if 1 <= index <= len(STATUS_OPTIONS):
            return STATUS_OPTIONS[index - 1][0]
    return value


def parse_history_command(command: str) -> tuple[str, Optional[str]]:
    """
    Split an interactive history command into an action and an argument.

    ``"3"`` toggles entry 3, ``"d 3"`` arms deletion, ``"r 3"`` opens a
    reflection, ``"q"`` quits.

    Raises:
        typer.BadParameter: If the command is not recognised
    """
    parts = command.strip().split()
    if len(parts) == 0 or parts[0] in ("q", "quit"):
        return ("quit", None)
    if len(parts) == 1 and re.match(r"^\d+$", parts[0]):
        return ("toggle", parts[0])
    if len(parts) == 2 and parts[0] in ("d", "delete"):
        return ("delete", parts[1])
    if len(parts) == 2 and parts[0] in ("r", "reflect"):
        return ("reflect", parts[1])
    raise typer.BadParameter(f"Unknown command: {command}")
