# SPDX-License-Identifier: MIT

from enum import IntEnum


class Stage(IntEnum):
    INTRO = 0
    BASIC_INFO = 1
    CURRENT_STATE = 2
    OBSTACLES_AND_ACTIONS = 3
    MICRO_STEPS = 4
    SMART_PLAN = 5
    REVIEW = 6
    DONE = 7

    @property
    def label(self) -> str:
        return STAGE_LABELS[self]

    @property
    def is_input(self) -> bool:
        return Stage.BASIC_INFO <= self <= Stage.SMART_PLAN


STAGE_LABELS: dict[Stage, str] = {
    Stage.INTRO: "準備",
    Stage.BASIC_INFO: "基本情報",
    Stage.CURRENT_STATE: "現状",
    Stage.OBSTACLES_AND_ACTIONS: "障害と対策",
    Stage.MICRO_STEPS: "行動手順",
    Stage.SMART_PLAN: "行動計画",
    Stage.REVIEW: "確認・修正",
    Stage.DONE: "記録完了",
}

INPUT_STAGES: list[Stage] = [stage for stage in Stage if stage.is_input]
