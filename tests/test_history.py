"""Tests for the history browser: selection, deletion and reflection."""

import pytest

from growsteps.model.stage import Stage
from growsteps.repository.entry import EntryRepository
from growsteps.service.feedback import FeedbackGenerator
from growsteps.service.history import (
    REFLECTION_INCOMPLETE_NOTICE,
    HistoryBrowser,
    ReflectionIncompleteError,
)
from growsteps.service.wizard import EntryWizard


@pytest.fixture
def browser(repository: EntryRepository) -> HistoryBrowser:
    return HistoryBrowser(repository, FeedbackGenerator(seed=0))


@pytest.fixture
def stored(repository: EntryRepository, make_entry):
    entries = [make_entry(title=f"entry {i}") for i in range(3)]
    for entry in entries:
        repository.add(entry)
    return entries


def fill_reflection(
    browser: HistoryBrowser, learnings: str, feelings: str, next_steps: str
) -> None:
    browser.learnings = learnings
    browser.feelings = feelings
    browser.next_steps = next_steps


class TestSelection:
    def test_toggle_expands_and_collapses(self, browser, stored):
        first, second = stored[0]["id"], stored[1]["id"]

        assert browser.toggle(first) == first
        assert browser.toggle(second) == second
        assert not browser.is_expanded(first)
        assert browser.toggle(second) is None


class TestDeleteConfirmation:
    def test_arm_then_cancel_leaves_store(self, browser, repository, stored):
        before = repository.get_all_entries()

        browser.arm_delete(stored[1]["id"])
        browser.cancel_delete()

        assert repository.get_all_entries() == before
        assert browser.delete_confirm_id is None

    def test_arm_then_confirm_removes_exactly_one(self, browser, repository, stored):
        browser.arm_delete(stored[1]["id"])

        assert browser.confirm_delete() == stored[1]["id"]
        remaining = [e["id"] for e in repository.get_all_entries()]
        assert remaining == [stored[2]["id"], stored[0]["id"]]

    def test_only_one_armed(self, browser, repository, stored):
        browser.arm_delete(stored[0]["id"])
        browser.arm_delete(stored[2]["id"])

        browser.confirm_delete()

        assert repository.get_entry(stored[0]["id"]) is not None
        assert repository.get_entry(stored[2]["id"]) is None

    def test_deleting_expanded_clears_selection(self, browser, stored):
        browser.toggle(stored[0]["id"])
        browser.arm_delete(stored[0]["id"])

        browser.confirm_delete()

        assert browser.selected_id is None

    def test_deleting_other_keeps_selection(self, browser, stored):
        browser.toggle(stored[0]["id"])
        browser.arm_delete(stored[1]["id"])

        browser.confirm_delete()

        assert browser.selected_id == stored[0]["id"]

    def test_confirm_without_arming(self, browser, repository, stored):
        assert browser.confirm_delete() is None
        assert repository.count() == 3

    def test_delete_target(self, browser, stored):
        browser.arm_delete(stored[2]["id"])

        assert browser.delete_target["title"] == "entry 2"


class TestReflection:
    def test_open_resets_scratch_fields(self, browser, stored):
        fill_reflection(browser, "a", "b", "c")

        browser.open_reflection(stored[0]["id"])

        assert (browser.learnings, browser.feelings, browser.next_steps) == ("", "", "")

    def test_open_unknown_entry(self, browser):
        with pytest.raises(ValueError):
            browser.open_reflection("missing")

    @pytest.mark.parametrize(
        "fields",
        [
            ("", "満足", "距離を伸ばす"),
            ("楽だった", "   ", "距離を伸ばす"),
            ("楽だった", "満足", "\n\t"),
        ],
    )
    def test_incomplete_reflection_rejected(self, browser, repository, stored, fields):
        entry_id = stored[0]["id"]
        browser.open_reflection(entry_id)
        fill_reflection(browser, *fields)

        with pytest.raises(ReflectionIncompleteError) as error:
            browser.submit_reflection()

        assert str(error.value) == REFLECTION_INCOMPLETE_NOTICE
        assert repository.get_entry(entry_id)["reflection"]["completed"] is False
        assert browser.reflection_id == entry_id

    def test_submit_trims_and_stores(self, browser, repository, stored):
        entry_id = stored[0]["id"]
        browser.open_reflection(entry_id)
        fill_reflection(browser, "  楽だった ", "満足\n", " 伸ばす")

        feedback = browser.submit_reflection()

        reflection = repository.get_entry(entry_id)["reflection"]
        assert reflection == {
            "completed": True,
            "learnings": "楽だった",
            "feelings": "満足",
            "next_steps": "伸ばす",
            "ai_feedback": feedback,
        }
        assert browser.reflection_id is None

    def test_completed_entry_cannot_reopen(self, browser, stored):
        entry_id = stored[0]["id"]
        browser.open_reflection(entry_id)
        fill_reflection(browser, "a", "b", "c")
        browser.submit_reflection()

        with pytest.raises(ValueError):
            browser.open_reflection(entry_id)

    def test_submit_without_open(self, browser):
        with pytest.raises(ValueError):
            browser.submit_reflection()

    def test_close_discards(self, browser, stored):
        browser.open_reflection(stored[0]["id"])
        browser.close_reflection()

        assert browser.reflection_id is None

    def test_feedback_receives_entry_and_trimmed_triple(self, repository, stored):
        calls = []

        def feedback(entry, reflection):
            calls.append((entry["id"], dict(reflection)))
            return "ok"

        browser = HistoryBrowser(repository, feedback)
        browser.open_reflection(stored[1]["id"])
        fill_reflection(browser, " a ", "b", "c ")

        assert browser.submit_reflection() == "ok"
        assert calls == [
            (stored[1]["id"], {"learnings": "a", "feelings": "b", "next_steps": "c"})
        ]


class TestWalkingScenario:
    """Create an entry through the wizard, then reflect on it."""

    def test_create_and_reflect(self, repository: EntryRepository):
        wizard = EntryWizard(repository)
        wizard.next()
        wizard.set_field("category", "健康")
        wizard.set_field("title", "30分歩く")
        wizard.next()
        wizard.next()
        wizard.next()
        wizard.update_micro_step(0, "靴を履く")
        wizard.append_micro_step("外に出る")
        wizard.next()
        wizard.set_field("smart_plan", "19:00に近所を一周する")
        wizard.next()
        assert wizard.stage == Stage.REVIEW

        entry = wizard.submit()

        assert repository.count() == 1
        assert repository.get_entry(entry["id"])["title"] == "30分歩く"

        browser = HistoryBrowser(repository)
        browser.open_reflection(entry["id"])
        fill_reflection(browser, "思ったより楽だった", "満足", "距離を伸ばす")
        browser.submit_reflection()

        reflection = repository.get_entry(entry["id"])["reflection"]
        assert reflection["completed"] is True
        assert reflection["ai_feedback"]
        assert "距離を伸ばす" in reflection["ai_feedback"]
