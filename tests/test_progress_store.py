"""
Tests for the SQLite-backed progress store.
"""

import sqlite3

import pytest
from datetime import date

from algebro.classroom import ProgressStore
from algebro.config import API_KEY_ENV, PROGRESS_KEY
from algebro.schemas import LessonRecord, Mistake, UserProgress


def make_record(day=date(2024, 5, 20), topic="Ratios (Math)") -> LessonRecord:
    return LessonRecord(
        date=day,
        topic=topic,
        quiz_score=4,
        quiz_total=5,
        quiz_time_taken=80,
        problems_score=2,
        problems_total=3,
        problems_time_taken=300,
        mistakes=[Mistake(question_text="6:9?", user_answer="3:2", correct_answer="2:3")],
    )


@pytest.fixture
def store(tmp_path):
    return ProgressStore(tmp_path / "progress.db")


class TestProgressStore:
    """Test lesson history persistence."""

    def test_creates_database(self, tmp_path):
        db_path = tmp_path / "nested" / "progress.db"
        ProgressStore(db_path)
        assert db_path.exists()

    def test_missing_progress_is_empty(self, store):
        assert store.load_progress() == UserProgress(records=[])

    def test_save_and_load(self, store):
        progress = UserProgress(records=[make_record()])
        assert store.save_progress(progress) is True
        assert store.load_progress() == progress

    def test_stored_as_camel_case_json(self, store):
        store.save_progress(UserProgress(records=[make_record()]))
        raw = store.get_item(PROGRESS_KEY)
        assert '"quizScore":4' in raw
        assert '"date":"2024-05-20"' in raw

    def test_malformed_json_degrades_to_empty(self, store):
        store.set_item(PROGRESS_KEY, "{not json")
        assert store.load_progress().records == []

    def test_invalid_shape_degrades_to_empty(self, store):
        store.set_item(PROGRESS_KEY, '{"records": [{"topic": 3}]}')
        assert store.load_progress().records == []

    def test_append_record(self, store):
        store.append_record(make_record(date(2024, 5, 19), "A (Math)"))
        progress = store.append_record(make_record(date(2024, 5, 20), "B (Science)"))

        assert [r.topic for r in progress.records] == ["A (Math)", "B (Science)"]
        assert store.load_progress() == progress

    def test_persists_across_instances(self, tmp_path):
        db_path = tmp_path / "progress.db"
        ProgressStore(db_path).append_record(make_record())
        assert len(ProgressStore(db_path).load_progress().records) == 1

    def test_set_item_replaces(self, store):
        store.set_item("k", "1")
        store.set_item("k", "2")
        assert store.get_item("k") == "2"
        store.remove_item("k")
        assert store.get_item("k") is None


class TestApiKeyStorage:
    """Test API key persistence."""

    def test_save_and_load(self, store, monkeypatch):
        monkeypatch.delenv(API_KEY_ENV, raising=False)
        assert store.load_api_key() is None
        assert store.save_api_key("  abc123  ") is True
        assert store.load_api_key() == "abc123"

    def test_blank_key_rejected(self, store):
        with pytest.raises(ValueError):
            store.save_api_key("   ")

    def test_clear(self, store, monkeypatch):
        monkeypatch.delenv(API_KEY_ENV, raising=False)
        store.save_api_key("abc123")
        store.clear_api_key()
        assert store.load_api_key() is None

    def test_environment_fallback(self, store, monkeypatch):
        monkeypatch.setenv(API_KEY_ENV, "from-env")
        assert store.load_api_key() == "from-env"
        store.save_api_key("stored")
        assert store.load_api_key() == "stored"

    def test_key_not_in_progress(self, store):
        store.save_api_key("secret-key")
        store.append_record(make_record())
        assert "secret-key" not in store.get_item(PROGRESS_KEY)


class TestStorageFaults:
    """Test that storage errors are logged and replaced by defaults."""

    @pytest.fixture
    def broken_store(self, tmp_path):
        # A directory where the database file should be
        db_path = tmp_path / "progress.db"
        db_path.mkdir()
        return ProgressStore(db_path)

    def test_load_progress_defaults_to_empty(self, broken_store):
        assert broken_store.load_progress() == UserProgress(records=[])

    def test_save_progress_returns_false(self, broken_store):
        assert broken_store.save_progress(UserProgress(records=[make_record()])) is False

    def test_append_record_keeps_in_memory_history(self, broken_store):
        progress = UserProgress(records=[make_record(date(2024, 5, 19), "A (Math)")])
        updated = broken_store.append_record(make_record(), progress)
        assert [r.topic for r in updated.records] == ["A (Math)", "Ratios (Math)"]

    def test_api_key_faults(self, broken_store, monkeypatch):
        monkeypatch.delenv(API_KEY_ENV, raising=False)
        assert broken_store.load_api_key() is None
        assert broken_store.save_api_key("abc123") is False
        broken_store.clear_api_key()

    def test_api_key_fault_falls_back_to_environment(self, broken_store, monkeypatch):
        monkeypatch.setenv(API_KEY_ENV, "from-env")
        assert broken_store.load_api_key() == "from-env"

    def test_locked_read_does_not_drop_history(self, store, monkeypatch):
        store.append_record(make_record(date(2024, 5, 18), "A (Math)"))
        progress = store.append_record(make_record(date(2024, 5, 19), "B (Math)"))

        def locked(key):
            raise sqlite3.OperationalError("database is locked")

        monkeypatch.setattr(store, "get_item", locked)
        assert store.load_progress().records == []
        store.append_record(make_record(), progress)
        monkeypatch.undo()

        assert [r.topic for r in store.load_progress().records] == ["A (Math)", "B (Math)", "Ratios (Math)"]
