# SPDX-License-Identifier: MIT

import logging
from typing import Callable, Optional, TypeAlias

from growsteps.model.entry import Entry, ReflectionInput
from growsteps.model.entry_id import EntryId
from growsteps.repository.entry import EntryRepository
from growsteps.service.feedback import generate_feedback

logger = logging.getLogger(__name__)

REFLECTION_INCOMPLETE_NOTICE = "全ての項目を入力してください"

FeedbackFunction: TypeAlias = Callable[[Entry, ReflectionInput], str]


class ReflectionIncompleteError(ValueError):
    def __init__(self, missing: list[str]) -> None:
        super().__init__(REFLECTION_INCOMPLETE_NOTICE)
        self.missing = missing


class HistoryBrowser:
    """
    Transient state for browsing entries: which entry is expanded, which
    one is armed for deletion, and the reflection dialog scratch fields.
    """

    def __init__(
        self,
        repository: EntryRepository,
        feedback: Optional[FeedbackFunction] = None,
    ) -> None:
        self.repository = repository
        self.feedback: FeedbackFunction = feedback or generate_feedback
        self.selected_id: Optional[EntryId] = None
        self.delete_confirm_id: Optional[EntryId] = None
        self.reflection_id: Optional[EntryId] = None
        self.learnings = ""
        self.feelings = ""
        self.next_steps = ""

    @property
    def entries(self) -> list[Entry]:
        return self.repository.get_all_entries()

    # Selection

    def toggle(self, id: EntryId) -> Optional[EntryId]:
        self.selected_id = None if self.selected_id == id else id
        return self.selected_id

    def is_expanded(self, id: EntryId) -> bool:
        return self.selected_id == id

    # Deletion

    def arm_delete(self, id: EntryId) -> None:
        self.delete_confirm_id = id

    def cancel_delete(self) -> None:
        self.delete_confirm_id = None

    def confirm_delete(self) -> Optional[EntryId]:
        deleted_id = self.delete_confirm_id
        if deleted_id is None:
            return None
        self.repository.delete(deleted_id)
        if self.selected_id == deleted_id:
            self.selected_id = None
        self.delete_confirm_id = None
        logger.debug("deleted entry %s", deleted_id)
        return deleted_id

    @property
    def delete_target(self) -> Optional[Entry]:
        if self.delete_confirm_id is None:
            return None
        return self.repository.get_entry(self.delete_confirm_id)

    # Reflection

    def open_reflection(self, id: EntryId) -> Entry:
        entry = self.repository.get_entry(id)
        if entry is None:
            raise ValueError(f"no entry with id {id}")
        if entry["reflection"]["completed"]:
            raise ValueError("this entry has already been reflected on")
        self.reflection_id = id
        self.learnings = ""
        self.feelings = ""
        self.next_steps = ""
        return entry

    def close_reflection(self) -> None:
        self.reflection_id = None

    def submit_reflection(self) -> str:
        """
        Validate the scratch fields, generate feedback and store the
        completed reflection.

        Raises:
            ReflectionIncompleteError: If any field is empty after trimming
            ValueError: If no reflection dialog is open
        """
        if self.reflection_id is None:
            raise ValueError("no reflection is open")

        reflection: ReflectionInput = {
            "learnings": self.learnings.strip(),
            "feelings": self.feelings.strip(),
            "next_steps": self.next_steps.strip(),
        }
        missing = [field for field, value in reflection.items() if not value]
        if missing:
            raise ReflectionIncompleteError(missing)

        entry = self.repository.get_entry(self.reflection_id)
        if entry is None:
            # Deleted while the dialog was open
            self.close_reflection()
            raise ValueError(f"no entry with id {self.reflection_id}")

        ai_feedback = self.feedback(entry, reflection)
        self.repository.update(
            self.reflection_id,
            {
                "reflection": {
                    "completed": True,
                    **reflection,
                    "ai_feedback": ai_feedback,
                }
            },
        )
        self.close_reflection()
        return ai_feedback
