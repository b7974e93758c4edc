import json

from errexplain.checklist import CHECKLIST_KEY, DEFAULT_CHECKLIST, Checklist, ChecklistItem
from errexplain.store import MemoryStore, StorageError


class FailingStore(MemoryStore):
    def set(self, key: str, value: str) -> None:
        raise StorageError("quota exceeded")


def _stored(storage: MemoryStore) -> list:
    return json.loads(storage.get(CHECKLIST_KEY))


def test_missing_slot_seeds_default_items() -> None:
    checklist = Checklist.load(MemoryStore())

    assert [item.text for item in checklist.items()] == list(DEFAULT_CHECKLIST)
    assert not any(item.done for item in checklist.items())
    assert checklist.progress_percent() == 0


def test_corrupt_slot_seeds_default_items() -> None:
    storage = MemoryStore({CHECKLIST_KEY: "{not json"})
    assert len(Checklist.load(storage)) == len(DEFAULT_CHECKLIST)

    storage = MemoryStore({CHECKLIST_KEY: json.dumps([{"text": 3, "done": "yes"}])})
    assert len(Checklist.load(storage)) == len(DEFAULT_CHECKLIST)

    storage = MemoryStore({CHECKLIST_KEY: json.dumps({"text": "a"})})
    assert len(Checklist.load(storage)) == len(DEFAULT_CHECKLIST)


def test_stored_empty_list_stays_empty() -> None:
    checklist = Checklist.load(MemoryStore({CHECKLIST_KEY: "[]"}))

    assert len(checklist) == 0
    assert checklist.progress_percent() == 0


def test_add_trims_and_persists() -> None:
    storage = MemoryStore()
    checklist = Checklist(storage, [])

    item = checklist.add("  Read the stack trace  ")

    assert item == ChecklistItem(text="Read the stack trace", done=False)
    assert _stored(storage) == [{"text": "Read the stack trace", "done": False}]


def test_add_blank_label_is_a_no_op() -> None:
    storage = MemoryStore()
    checklist = Checklist(storage, [])

    assert checklist.add("   ") is None
    assert checklist.add("") is None
    assert len(checklist) == 0
    assert storage.get(CHECKLIST_KEY) is None


def test_toggle_flips_and_ignores_bad_indices() -> None:
    storage = MemoryStore()
    checklist = Checklist(storage, [ChecklistItem("a"), ChecklistItem("b")])

    assert checklist.toggle(1).done is True
    assert checklist.toggle(1).done is False
    assert checklist.toggle(2) is None
    assert checklist.toggle(-1) is None
    assert [item.done for item in checklist.items()] == [False, False]


def test_delete_shifts_later_items() -> None:
    storage = MemoryStore()
    checklist = Checklist(storage, [ChecklistItem("a"), ChecklistItem("b"), ChecklistItem("c", done=True)])

    removed = checklist.delete(1)

    assert removed.text == "b"
    assert [item.text for item in checklist.items()] == ["a", "c"]
    assert checklist.items()[1].done is True
    assert checklist.delete(5) is None
    assert [entry["text"] for entry in _stored(storage)] == ["a", "c"]


def test_progress_percent_rounds_like_math_round() -> None:
    checklist = Checklist(MemoryStore(), [ChecklistItem(str(i)) for i in range(8)])
    checklist.toggle(0)
    assert checklist.progress_percent() == 13  # 12.5

    checklist = Checklist(MemoryStore(), [ChecklistItem(str(i)) for i in range(3)])
    checklist.toggle(0)
    assert checklist.progress_percent() == 33
    checklist.toggle(1)
    assert checklist.progress_percent() == 67
    checklist.toggle(2)
    assert checklist.progress_percent() == 100


def test_reset_progress_keeps_items_and_is_idempotent() -> None:
    storage = MemoryStore()
    checklist = Checklist(storage, [ChecklistItem("a", done=True), ChecklistItem("b", done=True)])

    checklist.reset_progress()
    once = _stored(storage)
    checklist.reset_progress()

    assert checklist.progress_percent() == 0
    assert len(checklist) == 2
    assert _stored(storage) == once


def test_filter_is_case_insensitive_and_keeps_positions() -> None:
    storage = MemoryStore()
    checklist = Checklist(storage, [ChecklistItem("Check CSS"), ChecklistItem("Fix JS"), ChecklistItem("css again")])

    matches = list(checklist.filter("css"))

    assert [index for index, _ in matches] == [0, 2]
    assert [item.text for _, item in matches] == ["Check CSS", "css again"]
    assert [index for index, _ in checklist.filter("")] == [0, 1, 2]
    assert storage.get(CHECKLIST_KEY) is None


def test_round_trip_through_storage() -> None:
    storage = MemoryStore()
    checklist = Checklist.load(storage)
    checklist.toggle(0)
    checklist.delete(3)
    checklist.add("Custom step")

    reloaded = Checklist.load(storage)

    assert reloaded.items() == checklist.items()


def test_write_failure_keeps_memory_state(caplog) -> None:
    checklist = Checklist(FailingStore(), [ChecklistItem("a")])

    with caplog.at_level("WARNING"):
        item = checklist.toggle(0)

    assert item.done is True
    assert checklist.progress_percent() == 100
    assert "not saved" in caplog.text
