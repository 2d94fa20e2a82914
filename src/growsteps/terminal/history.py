# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape

from growsteps.model.entry import visible_micro_steps
from growsteps.repository.configuration import CONFIGURATION_REPO
from growsteps.repository.entry import ENTRY_REPO
from growsteps.service.feedback import FeedbackGenerator, generate_feedback
from growsteps.service.history import (
    FeedbackFunction,
    HistoryBrowser,
    ReflectionIncompleteError,
)
from growsteps.terminal.parse import parse_history_command, resolve_entry_id
from growsteps.view.views.entry import (
    delete_prompt_text,
    entries_view,
    entry_detail,
    feedback_panel,
)
from growsteps.view.views.header import header


def get_feedback_function() -> FeedbackFunction:
    seed = CONFIGURATION_REPO.get_config().get("feedback_seed")
    if seed is None:
        return generate_feedback
    return FeedbackGenerator(seed)


def get_browser() -> HistoryBrowser:
    return HistoryBrowser(ENTRY_REPO, get_feedback_function())


def run_delete(
    browser: HistoryBrowser, reference: str, console: Console, yes: bool
) -> bool:
    browser.arm_delete(resolve_entry_id(reference, browser.entries))
    target = browser.delete_target
    if target is not None:
        console.print(f"[bold]記録を削除しますか？[/bold] {delete_prompt_text(target)}")
    if yes or typer.confirm("削除する", default=False):
        browser.confirm_delete()
        console.print("[green]削除しました[/green]")
        return True
    browser.cancel_delete()
    console.print("[bright_black]キャンセルしました[/bright_black]")
    return False


def run_reflection(
    browser: HistoryBrowser,
    reference: str,
    console: Console,
    learnings: Optional[str] = None,
    feelings: Optional[str] = None,
    next_steps: Optional[str] = None,
    interactive: bool = True,
) -> Optional[str]:
    """
    Open the reflection dialog for an entry, collect the three fields and
    submit them.

    Returns:
        The generated feedback, or None if the dialog was closed
    """
    entry_id = resolve_entry_id(reference, browser.entries)
    try:
        entry = browser.open_reflection(entry_id)
    except ValueError as error:
        console.print(f"[red]{error}[/red]")
        return None

    console.print(f"[bold]振り返り[/bold] {escape(entry['title'] or '—')}")
    console.print(
        f"[bright_black]最優先タスク: {escape(entry['priority_task'] or '—')}[/bright_black]"
    )
    for number, step in enumerate(visible_micro_steps(entry), start=1):
        console.print(f"[bright_black]  {number}. {escape(step)}[/bright_black]")

    while True:
        browser.learnings = learnings if learnings is not None else typer.prompt(
            "気づき・学び", default=browser.learnings, show_default=False
        )
        browser.feelings = feelings if feelings is not None else typer.prompt(
            "率直な感想", default=browser.feelings, show_default=False
        )
        browser.next_steps = next_steps if next_steps is not None else typer.prompt(
            "今後のアクション", default=browser.next_steps, show_default=False
        )
        try:
            feedback = browser.submit_reflection()
        except ReflectionIncompleteError as error:
            console.print(f"[red]{error}[/red]")
            if interactive and typer.confirm("入力し直しますか？", default=True):
                learnings = feelings = next_steps = None
                continue
            browser.close_reflection()
            return None
        feedback_panel(feedback, console)
        return feedback


def history() -> None:
    """
    Browse saved entries: expand one, delete with confirmation, or reflect.
    """
    console = Console()
    browser = get_browser()

    while True:
        entries_view(browser.entries, browser.selected_id, console)
        command = typer.prompt(
            "[番号]展開 / [d 番号]削除 / [r 番号]振り返り / [q]終了",
            default="q",
            show_default=False,
        )
        try:
            action, reference = parse_history_command(command)
            if action == "quit":
                return
            if reference is None:
                continue
            if action == "toggle":
                browser.toggle(resolve_entry_id(reference, browser.entries))
            elif action == "delete":
                run_delete(browser, reference, console, yes=False)
            elif action == "reflect":
                run_reflection(browser, reference, console)
        except typer.BadParameter as error:
            console.print(f"[red]{error.message}[/red]")


def list_entries() -> None:
    """
    List saved entries, newest first.
    """
    entries_view(ENTRY_REPO.get_all_entries())


def show(
    entry: Annotated[str, typer.Argument(help="entry number from list, or id")],
) -> None:
    """
    Show a single entry with its reflection.
    """
    entries = ENTRY_REPO.get_all_entries()
    found = ENTRY_REPO.get_entry(resolve_entry_id(entry, entries))
    if found is None:
        raise typer.Exit(1)
    header(len(entries), "記録")
    entry_detail(found)


def delete(
    entry: Annotated[str, typer.Argument(help="entry number from list, or id")],
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="Skip the confirmation")
    ] = False,
) -> None:
    """
    Delete an entry after confirmation.
    """
    run_delete(get_browser(), entry, Console(), yes)


def reflect(
    entry: Annotated[str, typer.Argument(help="entry number from list, or id")],
    learnings: Annotated[
        Optional[str], typer.Option("--learnings", "-l", help="気づき・学び")
    ] = None,
    feelings: Annotated[
        Optional[str], typer.Option("--feelings", "-f", help="率直な感想")
    ] = None,
    next_steps: Annotated[
        Optional[str], typer.Option("--next-steps", "-n", help="今後のアクション")
    ] = None,
) -> None:
    """
    Attach a reflection to an entry and get feedback on it.
    """
    all_given = None not in (learnings, feelings, next_steps)
    feedback = run_reflection(
        get_browser(),
        entry,
        Console(),
        learnings=learnings,
        feelings=feelings,
        next_steps=next_steps,
        interactive=not all_given,
    )
    if feedback is None:
        raise typer.Exit(1)
