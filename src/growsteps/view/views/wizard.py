# SPDX-License-Identifier: MIT

from typing import Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.padding import Padding
from rich.table import Table

from growsteps.model.entry import Entry, visible_micro_steps
from growsteps.model.stage import INPUT_STAGES, Stage

INTRO_ITEMS = [
    ("①", "基本情報", "カテゴリ・タイトル"),
    ("②", "現状把握", "最優先タスク・進捗"),
    ("③", "障害と対策", "内的・外的ブロッカー"),
    ("④", "行動手順", "最大5つのアクション"),
    ("⑤", "SMART計画", "具体的な今日の計画"),
    ("⑥", "確認・修正", "内容確認後に保存"),
]

SMART_HINTS = ["S：具体的", "M：測定可能", "A：達成可能", "R：関連性", "T：期限付き"]


def progress_bar(stage: Stage) -> str:
    """One marker per input/review stage: done, active or pending."""
    markers = []
    for candidate in [*INPUT_STAGES, Stage.REVIEW]:
        if stage > candidate:
            markers.append(f"[green]✓ {candidate.label}[/green]")
        elif stage == candidate:
            markers.append(f"[bold cyan]● {candidate.label}[/bold cyan]")
        else:
            markers.append(f"[bright_black]○ {candidate.label}[/bright_black]")
    return "  ".join(markers)


def intro_view(console: Optional[Console] = None) -> None:
    console = console or Console()
    console.print(Padding("[bold]最速最小の一歩を。[/bold]", (1, 0, 0, 1)))
    console.print(
        Padding("今日の成長を記録して、明確な行動計画を立てましょう。", (0, 1))
    )

    intro_table = Table(box=box.SIMPLE, show_header=False, title="記録の流れ")
    intro_table.add_column("n")
    intro_table.add_column("label", style="bold")
    intro_table.add_column("description", style="bright_black")
    for item in INTRO_ITEMS:
        intro_table.add_row(*item)
    console.print(intro_table)


def stage_header(stage: Stage, console: Optional[Console] = None) -> None:
    console = console or Console()
    if not Stage.BASIC_INFO <= stage <= Stage.REVIEW:
        return
    console.print()
    console.print(Padding(progress_bar(stage), (0, 1)))
    if stage.is_input:
        console.print(
            Padding(
                f"[bright_black]Step {int(stage)} / {len(INPUT_STAGES)}[/bright_black]"
                f"  [bold]{stage.label}[/bold]",
                (1, 1, 0, 1),
            )
        )


def review_view(draft: Entry, console: Optional[Console] = None) -> None:
    console = console or Console()

    def text(value: str) -> str:
        return escape(value) if value else "—"

    review_table = Table(box=box.ROUNDED, show_header=False, title="入力内容を確認する")
    review_table.add_column("stage", style="cyan")
    review_table.add_column("content")

    review_table.add_row(
        f"1 {Stage.BASIC_INFO.label}",
        f"{text(draft['category'])}\n{text(draft['title'])}",
    )
    review_table.add_row(
        f"2 {Stage.CURRENT_STATE.label}",
        f"{text(draft['priority_task'])}\n"
        f"{text(draft['status'])} · {text(draft['available_time'])}",
    )
    review_table.add_row(
        f"3 {Stage.OBSTACLES_AND_ACTIONS.label}",
        f"内的: {text(draft['obstacles']['internal'])} → {text(draft['actions']['internal'])}\n"
        f"外的: {text(draft['obstacles']['external'])} → {text(draft['actions']['external'])}",
    )
    steps = visible_micro_steps(draft)
    review_table.add_row(
        f"4 {Stage.MICRO_STEPS.label}",
        "\n".join(f"{i}. {escape(step)}" for i, step in enumerate(steps, 1))
        if steps
        else "—",
    )
    review_table.add_row(f"5 {Stage.SMART_PLAN.label}", text(draft["smart_plan"]))

    console.print(review_table)


def done_view(entry: Entry, console: Optional[Console] = None) -> None:
    console = console or Console()
    console.print()
    console.print(Padding("[bold green]記録完了！[/bold green]", (0, 1)))
    console.print(
        Padding(
            f"[bright_black]{escape(entry['title'] or '—')} を履歴に保存しました。[/bright_black]",
            (0, 1),
        )
    )
