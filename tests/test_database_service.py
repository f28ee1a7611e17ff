# /tests/test_database_service.py

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from gradetracker.db.database import init_db
from gradetracker.models.grade_model import Grade
from gradetracker.services.database_helpers.store_base import StorageKey
from gradetracker.services.database_helpers.store_memory import InMemoryStore
from gradetracker.services.database_helpers.store_sql import SQLKeyValueStore
from gradetracker.services.database_service import DatabaseService


@pytest.fixture
def sql_store(tmp_path):
    """
    A SQLKeyValueStore backed by a throwaway SQLite file, so each test starts
    from an empty `store_entries` table.
    """
    engine = create_engine(f"sqlite:///{tmp_path / 'store.db'}", connect_args={"check_same_thread": False})
    init_db(bind=engine)
    session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield SQLKeyValueStore(session_factory)
    engine.dispose()

@pytest.fixture(params=["memory", "sql"])
def any_store(request, sql_store):
    """Runs a test once against each Store implementation."""
    if request.param == "memory":
        return InMemoryStore()
    return sql_store


# --- Store contract ---

def test_load_of_unwritten_key_returns_default_without_writing(any_store):
    assert any_store.load(StorageKey.STUDENTS) == []
    assert any_store.load(StorageKey.SYNC_ENABLED, True) is True
    assert not any_store.contains(StorageKey.STUDENTS)
    assert any_store.keys() == []

def test_load_returns_a_copy_of_the_default(any_store):
    default = [{"id": 1}]
    loaded = any_store.load("missing", default)
    loaded.append({"id": 2})
    assert default == [{"id": 1}]

def test_save_then_load_preserves_empty_score_and_zero(any_store):
    grades = [
        {"id": "g1", "studentId": 1, "assessmentId": 501, "score": ""},
        {"id": "g2", "studentId": 1, "assessmentId": 502, "score": 0},
        {"id": "g3", "studentId": 1, "assessmentId": 503, "score": 17.5},
    ]
    any_store.save(StorageKey.GRADES, grades)
    assert any_store.load(StorageKey.GRADES) == grades
    assert any_store.load(StorageKey.GRADES)[0]["score"] == ""
    assert any_store.load(StorageKey.GRADES)[1]["score"] == 0

def test_save_overwrites_and_delete_removes(any_store):
    any_store.save("nlac_courses", [{"id": 101}])
    any_store.save("nlac_courses", [{"id": 102}])
    assert any_store.load("nlac_courses") == [{"id": 102}]
    assert any_store.keys() == ["nlac_courses"]

    assert any_store.delete("nlac_courses") is True
    assert any_store.delete("nlac_courses") is False
    assert any_store.load("nlac_courses") == []

def test_storage_keys_use_their_string_values(any_store):
    any_store.save(StorageKey.LAST_SYNC, "2024-02-15T00:00:00+00:00")
    assert any_store.contains("nlac_last_sync")


# --- DatabaseService write-through ---

def test_changes_survive_a_new_service_instance(any_store):
    db = DatabaseService(any_store)
    db.grades.append(Grade(id="g-x", studentId=1, assessmentId=501, score=""))
    db.commit("grades")

    reopened = DatabaseService(any_store)
    assert len(reopened.grades) == 1
    assert reopened.grades[0].score == ""

def test_replace_all_writes_every_collection(seeded_db, store):
    assert len(store.load(StorageKey.STUDENTS)) == 3
    assert len(store.load(StorageKey.COURSES)) == 2
    assert len(store.load(StorageKey.ENROLLMENTS)) == 4
    assert len(store.load(StorageKey.ASSESSMENTS)) == 5
    assert len(store.load(StorageKey.GRADES)) == 5

def test_snapshot_is_detached_from_live_state(seeded_db):
    snapshot = seeded_db.snapshot()
    seeded_db.students[0].name = "Changed"
    assert snapshot.students[0].name == "Garcia, Maria S."

def test_lookups(seeded_db):
    assert seeded_db.get_student_by_id_num("2024-0002").name == "Wilson, James K."
    assert seeded_db.get_enrollment(1, 102).id == "en-2"
    assert seeded_db.get_enrollment(2, 102) is None
    assert [a.id for a in seeded_db.get_assessments_for_course(102)] == [504, 505]
    assert seeded_db.get_grade(1, 503).score == 18
    assert seeded_db.get_student_by_id(999) is None

def test_sync_metadata_defaults_and_persistence(empty_db, store):
    assert empty_db.is_sync_enabled() is True
    assert empty_db.get_last_sync() is None

    empty_db.set_sync_enabled(False)
    stamp = empty_db.stamp_last_sync()

    reopened = DatabaseService(store)
    assert reopened.is_sync_enabled() is False
    assert reopened.get_last_sync() == stamp
