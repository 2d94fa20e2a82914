"""Tests for the entry repository and its storage slot."""

import json

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from growsteps.repository.entry import (
    EntryRepository,
    deserialize_entries,
    serialize_entries,
)
from growsteps.repository.storage import (
    FileKeyValueStorage,
    InMemoryKeyValueStorage,
)


LEGACY_RECORD = {
    "id": "3f1c",
    "date": "2024-05-01",
    "category": "健康",
    "title": "30分歩く",
    "priorityTask": "近所を歩く",
    "status": "未着手",
    "availableTime": "30分",
    "obstacles": {"internal": "面倒", "external": "雨"},
    "actions": {"internal": "5分だけ", "external": "傘を持つ"},
    "microSteps": ["靴を履く", "外に出る"],
    "smartPlan": "19:00に近所を一周する",
    "reflection": {
        "completed": True,
        "learnings": "思ったより楽だった",
        "feelings": "満足",
        "nextSteps": "距離を伸ばす",
        "aiFeedback": "良いですね",
    },
}


class TestLoad:
    def test_missing_slot_loads_empty(self, repository: EntryRepository):
        assert repository.get_all_entries() == []

    @pytest.mark.parametrize(
        "blob",
        [
            "{not: [valid",
            "just a string",
            "42",
            "- 1\n- 2\n",
            '{"id": "abc"}',
        ],
    )
    def test_malformed_data_is_discarded(self, blob: str):
        storage = InMemoryKeyValueStorage({"grow_entries": blob})
        repository = EntryRepository(storage, key="grow_entries")

        assert repository.get_all_entries() == []

    def test_json_blob_loads(self, make_entry):
        entry = make_entry()
        storage = InMemoryKeyValueStorage(
            {"grow_entries": json.dumps([entry], ensure_ascii=False)}
        )
        repository = EntryRepository(storage, key="grow_entries")

        assert repository.get_all_entries() == [entry]

    def test_add_then_restart(self, storage, make_entry):
        """A fresh repository over the same slot sees the entry first."""
        repository = EntryRepository(storage, key="grow_entries")
        repository.add(make_entry(title="older"))
        entry = make_entry(title="newer")
        repository.add(entry)

        restarted = EntryRepository(storage, key="grow_entries")
        restarted.load()

        assert restarted.get_all_entries()[0] == entry

    def test_undecodable_file_loads_empty(self, tmp_path):
        (tmp_path / "grow_entries.yaml").write_bytes(b"- id: \xff\xfe broken\n")
        repository = EntryRepository(
            FileKeyValueStorage(lambda: tmp_path), key="grow_entries"
        )

        assert repository.get_all_entries() == []

    def test_undecodable_file_is_overwritten_on_add(self, tmp_path, make_entry):
        (tmp_path / "grow_entries.yaml").write_bytes(b"\xff\xfe")
        repository = EntryRepository(
            FileKeyValueStorage(lambda: tmp_path), key="grow_entries"
        )
        entry = make_entry()

        repository.add(entry)

        restarted = EntryRepository(
            FileKeyValueStorage(lambda: tmp_path), key="grow_entries"
        )
        assert restarted.get_all_entries() == [entry]

    def test_browser_format_blob_loads(self):
        storage = InMemoryKeyValueStorage(
            {"grow_entries": json.dumps([LEGACY_RECORD], ensure_ascii=False)}
        )
        repository = EntryRepository(storage, key="grow_entries")

        [entry] = repository.get_all_entries()

        assert entry["id"] == "3f1c"
        assert entry["priority_task"] == "近所を歩く"
        assert entry["available_time"] == "30分"
        assert entry["micro_steps"] == ["靴を履く", "外に出る"]
        assert entry["smart_plan"] == "19:00に近所を一周する"
        assert entry["reflection"] == {
            "completed": True,
            "learnings": "思ったより楽だった",
            "feelings": "満足",
            "next_steps": "距離を伸ばす",
            "ai_feedback": "良いですね",
        }
        assert "priorityTask" not in entry

    def test_incomplete_record_is_backfilled(self):
        storage = InMemoryKeyValueStorage(
            {"grow_entries": "- id: abc\n  title: 歩く\n  obstacles: nope\n"}
        )
        repository = EntryRepository(storage, key="grow_entries")

        [entry] = repository.get_all_entries()

        assert entry["title"] == "歩く"
        assert entry["date"] == ""
        assert entry["priority_task"] == ""
        assert entry["obstacles"] == {"internal": "", "external": ""}
        assert entry["micro_steps"] == [""]
        assert entry["reflection"]["completed"] is False

    def test_records_without_id_are_dropped(self, make_entry):
        good = make_entry()
        storage = InMemoryKeyValueStorage(
            {
                "grow_entries": json.dumps(
                    [{"title": "no id"}, good, "text", {"id": 5}],
                    ensure_ascii=False,
                )
            }
        )
        repository = EntryRepository(storage, key="grow_entries")

        assert repository.get_all_entries() == [good]



class TestAdd:
    def test_add_prepends(self, repository: EntryRepository, make_entry):
        first = make_entry(title="first")
        second = make_entry(title="second")

        repository.add(first)
        repository.add(second)

        assert [e["title"] for e in repository.get_all_entries()] == [
            "second",
            "first",
        ]

    def test_add_does_not_check_uniqueness(self, repository, make_entry):
        entry = make_entry()
        repository.add(entry)
        repository.add(entry)

        assert repository.count() == 2

    def test_add_copies_entry(self, repository, make_entry):
        entry = make_entry()
        repository.add(entry)
        entry["title"] = "changed afterwards"

        assert repository.get_entry(entry["id"])["title"] == "30分歩く"


class TestUpdate:
    def test_reflection_update_leaves_rest_unchanged(self, repository, make_entry):
        target = make_entry(title="target")
        other = make_entry(title="other")
        repository.add(target)
        repository.add(other)

        repository.update(
            target["id"],
            {
                "reflection": {
                    "completed": True,
                    "learnings": "a",
                    "feelings": "b",
                    "next_steps": "c",
                    "ai_feedback": "d",
                }
            },
        )

        updated = repository.get_entry(target["id"])
        assert updated["reflection"]["completed"] is True
        assert {k: v for k, v in updated.items() if k != "reflection"} == {
            k: v for k, v in target.items() if k != "reflection"
        }
        assert repository.get_entry(other["id"]) == other

    def test_partial_reflection_merges_fields(self, repository, make_entry):
        entry = make_entry()
        entry["reflection"]["learnings"] = "kept"
        repository.add(entry)

        repository.update(entry["id"], {"reflection": {"completed": True}})

        reflection = repository.get_entry(entry["id"])["reflection"]
        assert reflection["completed"] is True
        assert reflection["learnings"] == "kept"

    def test_top_level_fields_are_replaced(self, repository, make_entry):
        entry = make_entry()
        repository.add(entry)

        repository.update(entry["id"], {"micro_steps": ["only"]})

        assert repository.get_entry(entry["id"])["micro_steps"] == ["only"]

    def test_unknown_id_is_noop(self, repository, storage, make_entry):
        repository.add(make_entry())
        before = storage.get_item("grow_entries")

        repository.update("missing", {"title": "x"})

        assert storage.get_item("grow_entries") == before

    @pytest.mark.parametrize("field", ["id", "date"])
    def test_immutable_fields_rejected(self, repository, make_entry, field):
        entry = make_entry()
        repository.add(entry)

        with pytest.raises(ValueError):
            repository.update(entry["id"], {field: "x"})


class TestDelete:
    def test_delete_removes_exactly_one(self, repository, make_entry):
        entries = [make_entry(title=str(i)) for i in range(4)]
        for entry in entries:
            repository.add(entry)

        repository.delete(entries[1]["id"])

        assert [e["title"] for e in repository.get_all_entries()] == ["3", "2", "0"]

    def test_unknown_id_is_noop(self, repository, make_entry):
        repository.add(make_entry())

        repository.delete("missing")

        assert repository.count() == 1


class TestDurability:
    """
    *For any* sequence of add/update/delete, the persisted blob equals the
    serialization of the in-memory list.
    """

    @given(
        operations=st.lists(
            st.tuples(
                st.sampled_from(["add", "update", "delete"]),
                st.integers(min_value=0, max_value=5),
                st.text(
                    alphabet=st.characters(whitelist_categories=("Lu", "Ll", "Nd", "Lo")),
                    max_size=10,
                ),
            ),
            max_size=20,
        )
    )
    @settings(
        max_examples=50,
        suppress_health_check=[HealthCheck.function_scoped_fixture],
    )
    def test_persisted_matches_memory(self, operations, make_entry):
        storage = InMemoryKeyValueStorage()
        repository = EntryRepository(storage, key="grow_entries")

        for operation, index, text in operations:
            existing = repository.get_all_entries()
            if operation == "add":
                repository.add(make_entry(title=text))
            elif existing:
                target = existing[index % len(existing)]["id"]
                if operation == "update":
                    repository.update(target, {"smart_plan": text})
                else:
                    repository.delete(target)

            if storage.get_item("grow_entries") is not None:
                assert storage.get_item("grow_entries") == serialize_entries(
                    repository.get_all_entries()
                )
                assert deserialize_entries(
                    storage.get_item("grow_entries")
                ) == repository.get_all_entries()


class TestFileStorage:
    def test_round_trip_through_file(self, tmp_path, make_entry):
        storage = FileKeyValueStorage(lambda: tmp_path)
        repository = EntryRepository(storage, key="grow_entries")
        entry = make_entry()

        repository.add(entry)

        assert (tmp_path / "grow_entries.yaml").is_file()
        assert "30分歩く" in (tmp_path / "grow_entries.yaml").read_text(encoding="utf-8")
        restarted = EntryRepository(FileKeyValueStorage(lambda: tmp_path), key="grow_entries")
        assert restarted.get_all_entries() == [entry]

    def test_missing_file_reads_none(self, tmp_path):
        assert FileKeyValueStorage(lambda: tmp_path).get_item("absent") is None
