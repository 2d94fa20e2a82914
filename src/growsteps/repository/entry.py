# SPDX-License-Identifier: MIT

import logging
from collections.abc import Mapping
from copy import deepcopy
from typing import Any, Callable, Optional, cast

from yaml import YAMLError, dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from growsteps import configuration
from growsteps.model.entry import (
    IMMUTABLE_FIELDS,
    MAX_MICRO_STEPS,
    Entry,
    Reflection,
)
from growsteps.model.entry_id import EntryId
from growsteps.repository.configuration import CONFIGURATION_REPO
from growsteps.repository.storage import FileKeyValueStorage, KeyValueStorage
from growsteps.template.entry import get_entry_template

logger = logging.getLogger(__name__)


def serialize_entries(entries: list[Entry]) -> str:
    return dump(entries, Dumper=Dumper, allow_unicode=True, sort_keys=False)


# Keys written by the browser version of the journal
LEGACY_ENTRY_KEYS = {
    "priorityTask": "priority_task",
    "availableTime": "available_time",
    "microSteps": "micro_steps",
    "smartPlan": "smart_plan",
}
LEGACY_REFLECTION_KEYS = {
    "nextSteps": "next_steps",
    "aiFeedback": "ai_feedback",
}


def _rename_keys(raw: dict[str, Any], renames: dict[str, str]) -> dict[str, Any]:
    renamed: dict[str, Any] = {}
    for key, value in raw.items():
        new_key = renames.get(key, key)
        if new_key in renamed and key != new_key:
            # a snake_case key already present wins
            continue
        renamed[new_key] = value
    return renamed


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def convert_entry_for_deserialization(raw_entry: Any) -> Optional[Entry]:
    """
    Turn one stored record into an entry, or None if it has no usable id.

    Legacy camelCase keys are renamed and missing or mistyped fields are
    filled from the entry template.
    """
    if not isinstance(raw_entry, dict):
        return None
    raw = _rename_keys(raw_entry, LEGACY_ENTRY_KEYS)
    if not isinstance(raw.get("id"), str) or raw["id"] == "":
        return None

    entry = cast(dict[str, Any], get_entry_template())
    entry["date"] = ""
    for key, value in raw.items():
        if key not in entry:
            # unknown keys are carried along untouched
            entry[key] = value
        elif key in ("obstacles", "actions"):
            if isinstance(value, dict):
                entry[key] = {
                    side: _text(value.get(side)) for side in ("internal", "external")
                }
        elif key == "micro_steps":
            if isinstance(value, list) and len(value) > 0:
                entry[key] = [_text(step) for step in value[:MAX_MICRO_STEPS]]
        elif key == "reflection":
            if isinstance(value, dict):
                reflection = _rename_keys(value, LEGACY_REFLECTION_KEYS)
                entry[key] = {
                    "completed": bool(reflection.get("completed", False)),
                    "learnings": _text(reflection.get("learnings")),
                    "feelings": _text(reflection.get("feelings")),
                    "next_steps": _text(reflection.get("next_steps")),
                }
                if reflection.get("ai_feedback") is not None:
                    entry[key]["ai_feedback"] = _text(reflection["ai_feedback"])
        else:
            entry[key] = _text(value)
    return cast(Entry, entry)


def deserialize_entries(blob: Optional[str]) -> list[Entry]:
    """
    Parse a stored blob into entries.

    A missing blob, one that does not parse, or one that is not a list
    yields an empty list. Records without an id are dropped.
    """
    if blob is None:
        return []
    try:
        raw_entries = load(blob, Loader=Loader)
    except YAMLError as error:
        logger.warning("discarding unreadable entry data: %s", error)
        return []
    if raw_entries is None:
        return []
    if not isinstance(raw_entries, list):
        logger.warning(
            "discarding entry data of unexpected shape: %s",
            type(raw_entries).__name__,
        )
        return []

    entries: list[Entry] = []
    for position, raw_entry in enumerate(raw_entries):
        entry = convert_entry_for_deserialization(raw_entry)
        if entry is None:
            logger.warning(
                "discarding unusable entry record at position %d", position
            )
            continue
        entries.append(entry)
    return entries


class EntryRepository:
    def __init__(
        self,
        storage: Optional[KeyValueStorage] = None,
        key: Optional[str | Callable[[], str]] = None,
    ) -> None:
        self.storage: KeyValueStorage = storage or FileKeyValueStorage()
        self._key = key or configuration.DEFAULT_STORAGE_KEY
        self._entries: Optional[list[Entry]] = None

    @property
    def key(self) -> str:
        if callable(self._key):
            return self._key()
        return self._key

    @property
    def entries(self) -> list[Entry]:
        if self._entries is None:
            self.load()
        if self._entries is None:
            raise ValueError()
        return self._entries

    def load(self) -> None:
        try:
            blob = self.storage.get_item(self.key)
        except UnicodeDecodeError as error:
            logger.warning("discarding undecodable entry data: %s", error)
            blob = None
        self._entries = deserialize_entries(blob)
        logger.debug("loaded %d entries from '%s'", len(self._entries), self.key)

    def __save_data(self) -> None:
        self.storage.set_item(self.key, serialize_entries(self.entries))

    def add(self, entry: Entry) -> EntryId:
        self.entries.insert(0, deepcopy(entry))
        self.__save_data()
        return entry["id"]

    def update(self, id: EntryId, fields: Mapping[str, Any]) -> None:
        """
        Merge ``fields`` into the entry with ``id`` and persist.

        Top-level keys replace the stored value, except ``reflection`` which
        is merged key by key so a partial reflection never erases the rest.
        Unknown ids are ignored.
        """
        for immutable_field in IMMUTABLE_FIELDS:
            if immutable_field in fields:
                raise ValueError(f"'{immutable_field}' cannot be modified")

        entry = self.__find(id)
        if entry is None:
            logger.debug("update ignored, no entry with id %s", id)
            return

        for field, value in deepcopy(dict(fields)).items():
            if field == "reflection":
                reflection = cast(dict[str, Any], deepcopy(entry["reflection"]))
                reflection.update(value)
                entry["reflection"] = cast(Reflection, reflection)
            else:
                entry[field] = value  # type: ignore[literal-required]

        self.__save_data()

    def delete(self, id: EntryId) -> None:
        remaining = [entry for entry in self.entries if entry["id"] != id]
        if len(remaining) == len(self.entries):
            logger.debug("delete ignored, no entry with id %s", id)
        self._entries = remaining
        self.__save_data()

    def __find(self, id: EntryId) -> Optional[Entry]:
        for entry in self.entries:
            if entry["id"] == id:
                return entry
        return None

    def get_all_entries(self) -> list[Entry]:
        return deepcopy(self.entries)

    def get_entry(self, id: EntryId) -> Optional[Entry]:
        return deepcopy(self.__find(id))

    def count(self) -> int:
        return len(self.entries)


def _configured_storage_key() -> str:
    return CONFIGURATION_REPO.get_config()["storage_key"]


ENTRY_REPO = EntryRepository(key=_configured_storage_key)
