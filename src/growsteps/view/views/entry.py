# SPDX-License-Identifier: MIT

from typing import Optional

from rich import box
from rich.console import Console, Group
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from growsteps.model.entry import Entry, visible_micro_steps
from growsteps.time import date_age_for_humans, date_str_to_display
from growsteps.view.views.header import header

EMPTY = "—"


def _text(value: Optional[str]) -> str:
    if value is None or value == "":
        return EMPTY
    return escape(value)


def reflection_state(entry: Entry) -> str:
    if entry["reflection"]["completed"]:
        return "[green]✓[/green]"
    return " "


def entries_view(
    entries: list[Entry],
    selected_id: Optional[str] = None,
    console: Optional[Console] = None,
) -> None:
    console = console or Console()
    header(len(entries), "履歴")

    if len(entries) == 0:
        console.print("まだ記録がありません。最初の一歩を記しましょう！")
        return

    entries_table = Table(box=box.SIMPLE)
    entries_table.add_column("#")
    entries_table.add_column("date")
    entries_table.add_column("age")
    entries_table.add_column("category")
    entries_table.add_column("title")
    entries_table.add_column("reflected")

    for number, entry in enumerate(entries, start=1):
        style = "bold" if entry["id"] == selected_id else None
        entries_table.add_row(
            str(number),
            date_str_to_display(entry["date"]),
            date_age_for_humans(entry["date"]),
            _text(entry["category"]),
            _text(entry["title"]),
            reflection_state(entry),
            style=style,
        )

    console.print(entries_table)

    if selected_id is not None:
        for entry in entries:
            if entry["id"] == selected_id:
                entry_detail(entry, console)


def entry_detail(entry: Entry, console: Optional[Console] = None) -> None:
    console = console or Console()

    entry_table = Table(box=box.SIMPLE, show_header=False)
    entry_table.add_column("property", style="cyan")
    entry_table.add_column("value")

    entry_table.add_row("date", date_str_to_display(entry["date"]))
    entry_table.add_row("category", _text(entry["category"]))
    entry_table.add_row("title", _text(entry["title"]))
    entry_table.add_row("最優先タスク", _text(entry["priority_task"]))
    entry_table.add_row(
        "進み具合 · 時間",
        f"{_text(entry['status'])} · {_text(entry['available_time'])}",
    )
    entry_table.add_row(
        "内的障害 → 対策",
        f"{_text(entry['obstacles']['internal'])} → {_text(entry['actions']['internal'])}",
    )
    entry_table.add_row(
        "外的障害 → 対策",
        f"{_text(entry['obstacles']['external'])} → {_text(entry['actions']['external'])}",
    )
    steps = visible_micro_steps(entry)
    entry_table.add_row(
        "行動手順",
        "\n".join(f"{i}. {escape(step)}" for i, step in enumerate(steps, 1))
        if steps
        else EMPTY,
    )
    entry_table.add_row("SMART計画", _text(entry["smart_plan"]))

    console.print(entry_table)

    reflection = entry["reflection"]
    if reflection["completed"]:
        console.print(
            Panel(
                Group(
                    f"[bold]気づき・学び[/bold]\n{_text(reflection['learnings'])}\n",
                    f"[bold]率直な感想[/bold]\n{_text(reflection['feelings'])}\n",
                    f"[bold]今後のアクション[/bold]\n{_text(reflection['next_steps'])}",
                ),
                title="振り返り",
                border_style="green",
            )
        )
        if reflection.get("ai_feedback"):
            feedback_panel(reflection["ai_feedback"], console)


def feedback_panel(feedback: str, console: Optional[Console] = None) -> None:
    console = console or Console()
    console.print(Panel(escape(feedback), title="AI フィードバック", border_style="blue"))


def delete_prompt_text(entry: Entry) -> str:
    title = entry["title"] or EMPTY
    return f"「{escape(title)}」を完全に削除します。この操作は元に戻せません。"
