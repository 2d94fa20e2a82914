# SPDX-License-Identifier: MIT

from typing import Optional

import typer
from rich.console import Console

from growsteps.model.entry import MAX_MICRO_STEPS, STATUS_OPTIONS
from growsteps.model.stage import INPUT_STAGES, Stage
from growsteps.repository.entry import ENTRY_REPO
from growsteps.service.wizard import EntryWizard
from growsteps.terminal.history import history
from growsteps.terminal.parse import parse_status
from growsteps.view.views.header import header
from growsteps.view.views.wizard import (
    SMART_HINTS,
    done_view,
    intro_view,
    review_view,
    stage_header,
)

REQUIRED_MARK = " *"


def _ask(label: str, current: str, required: bool = False) -> str:
    return typer.prompt(
        label + (REQUIRED_MARK if required else ""),
        default=current,
        show_default=False,
    )


def prompt_basic_info(wizard: EntryWizard) -> None:
    draft = wizard.draft
    wizard.set_field(
        "category", _ask("カテゴリ (例: 仕事、自己啓発、健康、趣味)", draft["category"], True)
    )
    wizard.set_field("title", _ask("今日取り組む内容", draft["title"], True))


def prompt_current_state(wizard: EntryWizard, console: Console) -> None:
    draft = wizard.draft
    wizard.set_field(
        "priority_task",
        _ask("最優先タスク (今日、最も前に進めたいことは？)", draft["priority_task"], True),
    )
    for number, (label, percent) in enumerate(STATUS_OPTIONS, start=1):
        console.print(f"  {number}. {label} ({percent})")
    wizard.set_field(
        "status", parse_status(_ask("現在の進み具合 (番号または自由入力)", draft["status"]))
    )
    wizard.set_field(
        "available_time", _ask("使える時間 (例: 45分)", draft["available_time"])
    )


def prompt_obstacles_and_actions(wizard: EntryWizard) -> None:
    draft = wizard.draft
    wizard.set_obstacle(
        "internal", _ask("内的な障害 (例: 不安感)", draft["obstacles"]["internal"])
    )
    wizard.set_action(
        "internal", _ask("その対策 (例: まず5分だけ手を動かす)", draft["actions"]["internal"])
    )
    wizard.set_obstacle(
        "external", _ask("外的な障害 (例: 通知)", draft["obstacles"]["external"])
    )
    wizard.set_action(
        "external", _ask("その対策 (例: 通知をオフにする)", draft["actions"]["external"])
    )


def prompt_micro_steps(wizard: EntryWizard, console: Console) -> None:
    index = 0
    while index < len(wizard.draft["micro_steps"]):
        wizard.update_micro_step(
            index,
            _ask(f"アクション {index + 1}", wizard.draft["micro_steps"][index]),
        )
        index += 1

    while True:
        steps = wizard.draft["micro_steps"]
        choice = typer.prompt(
            f"[a]追加 ({len(steps)}/{MAX_MICRO_STEPS}) / [r 番号]削除 / [Enter]完了",
            default="",
            show_default=False,
        ).strip()
        if choice == "":
            return
        if choice == "a":
            if wizard.append_micro_step():
                new_index = len(wizard.draft["micro_steps"]) - 1
                wizard.update_micro_step(
                    new_index, _ask(f"アクション {new_index + 1}", "")
                )
            else:
                console.print(f"[yellow]アクションは最大{MAX_MICRO_STEPS}つまでです[/yellow]")
        elif choice.startswith("r") and choice[1:].strip().isdigit():
            number = int(choice[1:].strip())
            try:
                wizard.remove_micro_step(number - 1)
            except (ValueError, IndexError) as error:
                console.print(f"[red]{error}[/red]")
        else:
            console.print(f"[red]Unknown choice: {choice}[/red]")


def prompt_smart_plan(wizard: EntryWizard) -> None:
    wizard.set_field(
        "smart_plan",
        _ask("SMARTな行動計画 (いつ・どこで・何を・完了の基準)", wizard.draft["smart_plan"], True),
    )


def prompt_stage(wizard: EntryWizard, console: Console) -> None:
    if wizard.stage == Stage.BASIC_INFO:
        prompt_basic_info(wizard)
    elif wizard.stage == Stage.CURRENT_STATE:
        prompt_current_state(wizard, console)
    elif wizard.stage == Stage.OBSTACLES_AND_ACTIONS:
        prompt_obstacles_and_actions(wizard)
    elif wizard.stage == Stage.MICRO_STEPS:
        prompt_micro_steps(wizard, console)
    elif wizard.stage == Stage.SMART_PLAN:
        console.print(f"[bright_black]{'  '.join(SMART_HINTS)}[/bright_black]")
        prompt_smart_plan(wizard)


def _input_stage(choice: str) -> Optional[Stage]:
    if choice.isdigit() and int(choice) in [int(stage) for stage in INPUT_STAGES]:
        return Stage(int(choice))
    return None


def run_wizard(wizard: EntryWizard, console: Console) -> bool:
    """
    Drive the wizard from the terminal until it is submitted or abandoned.

    Returns:
        True if an entry was saved
    """
    while wizard.stage != Stage.DONE:
        stage_header(wizard.stage, console)

        if wizard.stage == Stage.INTRO:
            intro_view(console)
            if not typer.confirm("はじめますか？", default=True):
                return False
            wizard.next()

        elif wizard.stage.is_input:
            prompt_stage(wizard, console)
            choice = typer.prompt(
                "[n]次へ / [p]戻る / [q]中断", default="n", show_default=False
            ).strip()
            if choice == "q":
                return False
            if choice == "p":
                wizard.prev()
            else:
                wizard.next()

        elif wizard.stage == Stage.REVIEW:
            review_view(wizard.draft, console)
            missing = wizard.missing_required_fields()
            if missing:
                console.print(
                    f"[yellow]未入力の必須項目: {', '.join(missing)}[/yellow]"
                )
            choice = typer.prompt(
                "[s]保存 / [1-5]修正 / [p]戻る / [q]中断",
                default="s",
                show_default=False,
            ).strip()
            jump_stage = _input_stage(choice)
            if choice == "q":
                return False
            if choice == "p":
                wizard.prev()
            elif jump_stage is not None:
                wizard.jump_to(jump_stage)
            elif choice == "s":
                entry = wizard.submit()
                done_view(entry, console)
            else:
                console.print(f"[red]Unknown choice: {choice}[/red]")

    return True


def new() -> None:
    """
    Record today's action plan with the guided wizard.
    """
    console = Console()

    wizard = EntryWizard(ENTRY_REPO)

    while True:
        header(ENTRY_REPO.count(), "新しい記録")
        if not run_wizard(wizard, console):
            console.print("[bright_black]保存せずに終了しました[/bright_black]")
            raise typer.Exit(0)
        choice = typer.prompt(
            "[h]履歴を見る / [a]もう一つ記録 / [Enter]終了",
            default="",
            show_default=False,
        ).strip()
        if choice == "h":
            history()
            return
        if choice != "a":
            return
        wizard.reset()
