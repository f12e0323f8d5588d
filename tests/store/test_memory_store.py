"""
Unit Tests for InMemoryMarkStore

Tests for upsert uniqueness, ordering and lookups.
"""

import pytest
from datetime import date

from marks_toolkit.core.models import Student, TestConfig
from marks_toolkit.store import ConstraintViolation, InMemoryMarkStore, StoreError
from marks_toolkit.store.base import MarkRecordStore


class TestInMemoryMarkStore:
    """Tests for the dict-backed store."""

    def test_store_when_created_then_satisfies_protocol(self, store):
        def accepts(s: MarkRecordStore) -> MarkRecordStore:
            return s

        assert accepts(store) is store

    def test_upsert_when_new_then_stamps_clock_and_actor(self, store):
        record = store.upsert("S1", "T1", 40, 12.0, None, added_by="faculty-7")

        assert record.updated_at.year == 2025
        assert record.added_by == "faculty-7"

    def test_upsert_when_existing_then_overwrites_one_record(self, store):
        store.upsert("S1", "T1", 40, 12.0, None)
        store.upsert("S1", "T1", 35, 10.5, "recheck")

        roster = store.list_by_test("T1")
        assert len(roster) == 1
        assert roster[0].record.raw_score == 35
        assert roster[0].record.remarks == "recheck"

    def test_upsert_when_unknown_student_then_raises_constraint(self, store):
        with pytest.raises(ConstraintViolation, match="Unknown student: GHOST"):
            store.upsert("GHOST", "T1", 40, 12.0, None)

    def test_upsert_when_unknown_test_then_raises_store_error(self, store):
        """ConstraintViolation is a StoreError."""
        with pytest.raises(StoreError, match="Unknown test: T9"):
            store.upsert("S1", "T9", 40, 12.0, None)

    def test_list_by_test_when_inserted_out_of_order_then_sorted_by_roll(self, store):
        for sid in ("S3", "S1", "S2"):
            store.upsert(sid, "T1", 30, 9.0, None)

        assert [e.student.roll_no for e in store.list_by_test("T1")] == ["RA001", "RA002", "RA003"]

    def test_list_by_student_when_several_tests_then_ordered_by_date(self, store):
        store.add_test(TestConfig("T0", 20, 5, test_date=date(2025, 1, 5)))
        store.add_test(TestConfig("T2", 100, 40))
        for tid in ("T1", "T0", "T2"):
            store.upsert("S1", tid, 10, 1.0, None)

        assert [t.id for t, _ in store.list_by_student("S1")] == ["T2", "T0", "T1"]

    def test_delete_when_present_then_true_once(self, store):
        store.upsert("S1", "T1", 40, 12.0, None)

        assert store.delete("S1", "T1") is True
        assert store.delete("S1", "T1") is False
        assert store.list_by_test("T1") == []

    def test_students_without_marks_when_some_marked_then_rest_listed(self, store):
        store.upsert("S2", "T1", 40, 12.0, None)

        assert [s.id for s in store.students_without_marks("T1")] == ["S1", "S3", "S4"]

    def test_document_when_round_tripped_then_equivalent(self, store, fixed_clock):
        store.upsert("S1", "T1", 40, 12.0, "good", added_by="faculty-7")

        copy = InMemoryMarkStore.from_document(store.to_document(), clock=fixed_clock)

        assert copy.list_by_test("T1") == store.list_by_test("T1")
        assert copy.get_test("T1") == store.get_test("T1")

    def test_get_student_when_missing_then_none(self, store):
        assert store.get_student("NOPE") is None
        assert store.get_student("S4") == Student("S4", "RB001", "Dinesh Raj", "CSE-B")
