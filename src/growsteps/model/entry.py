# SPDX-License-Identifier: MIT

from typing import Literal, NotRequired, TypeAlias, TypedDict

from growsteps.model.entry_id import EntryId

Side: TypeAlias = Literal["internal", "external"]

MAX_MICRO_STEPS = 5

# Progress labels offered by the wizard; any string is accepted for status
STATUS_OPTIONS: list[tuple[str, str]] = [
    ("未着手", "0%"),
    ("初期段階", "1–20%"),
    ("進捗中", "21–50%"),
    ("後半", "51–80%"),
    ("最終調整", "81–99%"),
]


class SidePair(TypedDict):
    internal: str
    external: str


class Reflection(TypedDict):
    completed: bool
    learnings: str
    feelings: str
    next_steps: str
    ai_feedback: NotRequired[str]


class ReflectionInput(TypedDict):
    learnings: str
    feelings: str
    next_steps: str


class Entry(TypedDict):
    id: EntryId
    date: str  # YYYY-MM-DD, local date at wizard start
    category: str
    title: str
    priority_task: str
    status: str
    available_time: str
    obstacles: SidePair
    actions: SidePair
    micro_steps: list[str]  # 1-5 items, execution order
    smart_plan: str
    reflection: Reflection


# Fields a user types straight into the draft
TEXT_FIELDS = (
    "category",
    "title",
    "priority_task",
    "status",
    "available_time",
    "smart_plan",
)

# Advisory only; nothing blocks on these
REQUIRED_FIELDS = ("category", "title", "priority_task")

IMMUTABLE_FIELDS = ("id", "date")


def visible_micro_steps(entry: Entry) -> list[str]:
    """Micro-steps with empty strings dropped, for rendering only."""
    return [step for step in entry["micro_steps"] if step]
