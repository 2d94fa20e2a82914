# SPDX-License-Identifier: MIT

from growsteps.model.entry import Entry, Reflection
from growsteps.model.entry_id import generate_entry_id
from growsteps.time import today_local_date_str


def get_reflection_template() -> Reflection:
    return {
        "completed": False,
        "learnings": "",
        "feelings": "",
        "next_steps": "",
    }


def get_entry_template() -> Entry:
    return {
        "id": generate_entry_id(),
        "date": today_local_date_str(),
        "category": "",
        "title": "",
        "priority_task": "",
        "status": "",
        "available_time": "",
        "obstacles": {"internal": "", "external": ""},
        "actions": {"internal": "", "external": ""},
        "micro_steps": [""],
        "smart_plan": "",
        "reflection": get_reflection_template(),
    }
