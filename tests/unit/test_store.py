from __future__ import annotations

import pytest

from student_records.domain.errors import DuplicateIdError, InvalidInputError, NotFoundError
from student_records.domain.models import Record
from student_records.store import RecordStore


def test_add_then_find_returns_each_record(store: RecordStore) -> None:
    records = [Record(id=i, name=f"Student {i}", marks=float(i)) for i in range(1, 21)]
    for count, record in enumerate(records, start=1):
        store.add(record)
        assert store.find(record.id) == record
        assert len(store) == count
    assert store.ids() == list(range(1, 21))


def test_add_duplicate_leaves_store_unchanged(store: RecordStore, alice: Record) -> None:
    store.add(alice)
    with pytest.raises(DuplicateIdError):
        store.add(Record(id=1, name="Impostor", marks=10.0))
    assert store.snapshot() == [alice]


def test_remove_missing_leaves_store_unchanged(store: RecordStore, alice: Record) -> None:
    store.add(alice)
    with pytest.raises(NotFoundError):
        store.remove(99)
    assert store.snapshot() == [alice]


def test_remove_preserves_order(store: RecordStore) -> None:
    for i in (5, 3, 9, 1):
        store.add(Record(id=i, name=f"S{i}", marks=50.0))
    removed = store.remove(3)
    assert removed.id == 3
    assert store.ids() == [5, 9, 1]


def test_scenario_add_list_remove_find(store: RecordStore, alice: Record, bob: Record) -> None:
    store.add(alice)
    store.add(bob)
    assert [r.name for r in store.snapshot()] == ["Alice", "Bob"]

    store.remove(1)
    assert [r.name for r in store.snapshot()] == ["Bob"]
    assert store.find(1) is None
    with pytest.raises(NotFoundError):
        store.get(1)


def test_reads_hand_out_copies(store: RecordStore, alice: Record) -> None:
    store.add(alice)
    alice.name = "Changed outside"

    found = store.find(1)
    assert found is not None and found.name == "Alice"
    found.marks = 0.0

    snapshot = store.snapshot()
    snapshot[0].name = "Mutated snapshot"
    snapshot.clear()

    assert store.get(1) == Record(id=1, name="Alice", marks=92.5)


def test_update_changes_fields_in_place(store: RecordStore, alice: Record, bob: Record) -> None:
    store.add(alice)
    store.add(bob)

    updated = store.update(1, marks="95")
    assert updated == Record(id=1, name="Alice", marks=95.0)
    assert store.update(2, name=" Robert ").name == "Robert"
    assert [r.name for r in store.snapshot()] == ["Alice", "Robert"]


def test_update_rejects_invalid_values(store: RecordStore, alice: Record) -> None:
    store.add(alice)
    with pytest.raises(InvalidInputError):
        store.update(1, marks=120)
    with pytest.raises(InvalidInputError):
        store.update(1, name="  ")
    with pytest.raises(NotFoundError):
        store.update(7, name="Nobody")
    assert store.get(1) == alice


def test_replace_all_swaps_contents(store: RecordStore, alice: Record, bob: Record) -> None:
    store.add(alice)
    store.replace_all([bob])
    assert store.snapshot() == [bob]

    store.replace_all([])
    assert len(store) == 0


def test_replace_all_rejects_duplicates(store: RecordStore, alice: Record) -> None:
    store.add(alice)
    with pytest.raises(DuplicateIdError):
        store.replace_all([Record(id=4, name="A", marks=1.0), Record(id=4, name="B", marks=2.0)])
    assert store.snapshot() == [alice]


def test_contains(alice: Record) -> None:
    store = RecordStore([alice])
    assert 1 in store
    assert 2 not in store
    assert "1" not in store
