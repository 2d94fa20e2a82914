# SPDX-License-Identifier: MIT

from typing import Optional

from rich import print
from rich.padding import Padding

from growsteps.view.state import get_show_header


def header(entry_count: int, sub_header: Optional[str] = None) -> None:
    """Print the application header with the live entry count.

    Args:
        entry_count: Number of stored entries
        sub_header: Optional sub-header text to display
    """
    if not get_show_header():
        return

    additional = ""
    if sub_header is not None:
        additional = f"[sandy_brown]{sub_header}[/sandy_brown]"
    count = f"[plum1]履歴 {entry_count}[/plum1]"

    print(Padding("[dark_orange]Grow Steps[/dark_orange]", (1, 0, 0, 1)))
    print(Padding(additional, (0, 1)))
    print(Padding(count, (0, 1)))
