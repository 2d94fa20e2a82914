# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from typing import Optional

from growsteps.model.entry import (
    MAX_MICRO_STEPS,
    REQUIRED_FIELDS,
    TEXT_FIELDS,
    Entry,
    Side,
)
from growsteps.model.stage import Stage
from growsteps.repository.entry import EntryRepository
from growsteps.template.entry import get_entry_template

logger = logging.getLogger(__name__)


class WizardTransitionError(ValueError):
    pass


class EntryWizard:
    """
    Walks a draft entry through the fixed stages and hands it to the
    repository on submit.

    The draft's id and date are fixed when the wizard is created (or reset),
    not when it is submitted.
    """

    def __init__(self, repository: EntryRepository) -> None:
        self.repository = repository
        self.stage = Stage.INTRO
        self.draft: Entry = get_entry_template()
        self.submitted: Optional[Entry] = None

    def reset(self) -> None:
        self.stage = Stage.INTRO
        self.draft = get_entry_template()
        self.submitted = None

    # Navigation

    def next(self) -> Stage:
        if self.stage >= Stage.REVIEW:
            raise WizardTransitionError(f"cannot advance from {self.stage.name}")
        self.stage = Stage(self.stage + 1)
        return self.stage

    def prev(self) -> Stage:
        if self.stage == Stage.DONE:
            raise WizardTransitionError("wizard is already done")
        self.stage = Stage(max(Stage.INTRO, self.stage - 1))
        return self.stage

    def jump_to(self, stage: Stage) -> Stage:
        if self.stage != Stage.REVIEW:
            raise WizardTransitionError("jumping is only possible from REVIEW")
        if not stage.is_input:
            raise WizardTransitionError(f"cannot jump to {stage.name}")
        self.stage = stage
        return self.stage

    def submit(self) -> Entry:
        if self.stage != Stage.REVIEW:
            raise WizardTransitionError("submit is only possible from REVIEW")
        entry = deepcopy(self.draft)
        self.repository.add(entry)
        logger.debug("submitted entry %s", entry["id"])
        self.submitted = entry
        self.stage = Stage.DONE
        return deepcopy(entry)

    # Draft mutation

    def set_field(self, field: str, value: str) -> None:
        if field not in TEXT_FIELDS:
            raise ValueError(f"'{field}' is not a text field")
        self.draft[field] = value  # type: ignore[literal-required]

    def set_obstacle(self, side: Side, value: str) -> None:
        self.draft["obstacles"][side] = value

    def set_action(self, side: Side, value: str) -> None:
        self.draft["actions"][side] = value

    def append_micro_step(self, value: str = "") -> bool:
        if len(self.draft["micro_steps"]) >= MAX_MICRO_STEPS:
            return False
        self.draft["micro_steps"].append(value)
        return True

    def update_micro_step(self, index: int, value: str) -> None:
        if not 0 <= index < len(self.draft["micro_steps"]):
            raise IndexError(f"no micro-step at index {index}")
        self.draft["micro_steps"][index] = value

    def remove_micro_step(self, index: int) -> None:
        if index == 0:
            raise ValueError("the first micro-step cannot be removed")
        if not 0 < index < len(self.draft["micro_steps"]):
            raise IndexError(f"no micro-step at index {index}")
        del self.draft["micro_steps"][index]

    def missing_required_fields(self) -> list[str]:
        """Required markers are advisory; this only reports them."""
        return [field for field in REQUIRED_FIELDS if not self.draft[field].strip()]  # type: ignore[literal-required]

    def is_complete(self) -> bool:
        return not self.missing_required_fields()
