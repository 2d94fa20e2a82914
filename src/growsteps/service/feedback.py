# SPDX-License-Identifier: MIT

import random
from typing import Optional, Protocol

from growsteps.model.entry import Entry, ReflectionInput

FEEDBACK_TEMPLATES: tuple[str, ...] = (
    "「{learnings}」という気づきは非常に価値があります。"
    "「{feelings}」という感情は成長の証です。"
    "次のステップ「{next_steps}」を実行することで、さらなる飛躍が期待できます。",
    "「{learnings}」という学びを得られたこと自体が大きな前進です。"
    "感情面では「{feelings}」と感じているとのこと、"
    "そのリアルな手応えを次回の計画「{next_steps}」に活かしましょう。",
    "あなたの振り返りから一つ核心を言うと：「{learnings}」という洞察は、"
    "まさに成長の本質です。「{next_steps}」という次の一手を、迷わず実行してください。",
    "「{feelings}」という感想は正直で良いですね。"
    "「{learnings}」という学びを武器に、次の行動「{next_steps}」に向けて、"
    "また最速最小の一歩を踏み出しましょう。",
)


class Chooser(Protocol):
    def choice(self, seq: tuple[str, ...]) -> str: ...


def generate_feedback(
    entry: Entry,
    reflection: ReflectionInput,
    rng: Optional[Chooser] = None,
) -> str:
    """
    Pick one feedback template at random and fill in the reflection text.

    The text is inserted verbatim. ``entry`` is accepted for parity with
    the reflection flow but does not influence the result.

    Args:
        entry: The entry being reflected on
        reflection: The trimmed learnings/feelings/next_steps triple
        rng: Anything with a ``choice`` method; defaults to the random module

    Returns:
        A single feedback sentence
    """
    template = (rng or random).choice(FEEDBACK_TEMPLATES)
    return template.format(
        learnings=reflection["learnings"],
        feelings=reflection["feelings"],
        next_steps=reflection["next_steps"],
    )


class FeedbackGenerator:
    def __init__(self, seed: Optional[int] = None) -> None:
        self.rng = random.Random(seed)

    def __call__(self, entry: Entry, reflection: ReflectionInput) -> str:
        return generate_feedback(entry, reflection, self.rng)
