# /tests/test_roster_service.py

import pytest

from gradetracker.core.exceptions import DuplicateError, NotFoundError, ValidationError
from gradetracker.services import roster_service
from gradetracker.services.database_helpers.store_base import StorageKey
from gradetracker.services.database_service import DatabaseService


# --- Students ---

def test_add_student_generates_next_id_and_pin(seeded_db, store):
    student = roster_service.add_student(seeded_db, "Doe, Jane A.", "BSIT", year=2024)

    assert student.id == 4
    assert student.studentIdNum == "2024-0004"
    assert len(student.pinCode) == 4 and student.pinCode.isdigit()
    # Written through immediately.
    assert [s["studentIdNum"] for s in store.load(StorageKey.STUDENTS)][-1] == "2024-0004"
    print("\n✅ SUCCESS: test_add_student_generates_next_id_and_pin passed.")

def test_sequence_restarts_per_year(seeded_db):
    student = roster_service.add_student(seeded_db, "Doe, Jane A.", "BSIT", year=2025)
    assert student.studentIdNum == "2025-0001"

def test_sequence_follows_highest_issued_number(seeded_db):
    roster_service.delete_student(seeded_db, 2)
    student = roster_service.add_student(seeded_db, "Doe, Jane A.", "BSBA", year=2024)
    # 2024-0002 was freed but never reissued.
    assert student.studentIdNum == "2024-0004"

def test_first_student_in_empty_store(empty_db):
    student = roster_service.add_student(empty_db, "Solo, Han", "BSED", year=2030)
    assert student.id == 1
    assert student.studentIdNum == "2030-0001"

@pytest.mark.parametrize("name, program, year", [
    ("", "BSCS", 2024),
    ("   ", "BSCS", 2024),
    ("Doe, Jane", "", 2024),
    ("Doe, Jane", "BSN", 2024),
    ("Doe, Jane", "BSCS", 24),
])
def test_add_student_rejects_invalid_input(seeded_db, name, program, year):
    with pytest.raises(ValidationError):
        roster_service.add_student(seeded_db, name, program, year=year)
    assert len(seeded_db.students) == 3

def test_update_student_changes_pin_and_profile(seeded_db, store):
    updated = roster_service.update_student(seeded_db, 1, {"pinCode": "1234", "yearLevel": "2nd Year"})
    assert updated.pinCode == "1234"
    assert updated.studentIdNum == "2024-0001"
    assert DatabaseService(store).get_student_by_id(1).yearLevel == "2nd Year"

def test_update_student_rejects_bad_pin(seeded_db):
    with pytest.raises(ValidationError):
        roster_service.update_student(seeded_db, 1, {"pinCode": "12a4"})
    with pytest.raises(ValidationError):
        roster_service.update_student(seeded_db, 1, {"pinCode": "12345"})
    assert seeded_db.get_student_by_id(1).pinCode == "4521"

def test_update_unknown_student(seeded_db):
    with pytest.raises(NotFoundError):
        roster_service.update_student(seeded_db, 999, {"name": "Nobody"})

def test_delete_student_cascades(seeded_db):
    assert roster_service.delete_student(seeded_db, 1) is True

    assert seeded_db.get_student_by_id(1) is None
    assert seeded_db.get_enrollments_for_student(1) == []
    assert seeded_db.get_grades_for_student(1) == []
    # Other students are untouched.
    assert seeded_db.get_grade(2, 501).score == 88

def test_delete_unknown_student_is_a_noop(seeded_db):
    assert roster_service.delete_student(seeded_db, 999) is False
    assert len(seeded_db.students) == 3


# --- Courses ---

def test_add_course_assigns_next_id(seeded_db):
    course = roster_service.add_course(seeded_db, "PHYS101", "Physics", "Room 12", course_type="Lab", day="MWF")
    assert course.id == 103
    assert course.type.value == "Lab"

def test_add_course_requires_code_title_and_room(seeded_db):
    with pytest.raises(ValidationError):
        roster_service.add_course(seeded_db, "", "Physics", "Room 12")
    with pytest.raises(ValidationError):
        roster_service.add_course(seeded_db, "PHYS101", "Physics", "Room 12", course_type="Seminar")

def test_update_course(seeded_db):
    course = roster_service.update_course(seeded_db, 101, {"room": "Room 400"})
    assert course.room == "Room 400"
    with pytest.raises(NotFoundError):
        roster_service.update_course(seeded_db, 999, {"room": "Room 400"})

def test_delete_course_removes_enrollments_only(seeded_db):
    assert roster_service.delete_course(seeded_db, 102) is True

    assert seeded_db.get_course_by_id(102) is None
    assert seeded_db.get_enrollments_for_course(102) == []
    assert [a.id for a in seeded_db.get_assessments_for_course(102)] == [504, 505]
    assert seeded_db.get_grade(2, 504).score == 92


# --- Enrollments ---

def test_add_enrollment_seeds_placeholders_for_missing_grades(seeded_db):
    enrollment = roster_service.add_enrollment(seeded_db, 2, 102)

    assert enrollment.id.startswith("en-")
    # 504 was already graded for this student and keeps its score.
    assert seeded_db.get_grade(2, 504).score == 92
    assert seeded_db.get_grade(2, 505).score == ""

def test_add_enrollment_on_a_fresh_pair_creates_one_empty_grade_per_assessment(seeded_db):
    before = len(seeded_db.grades)
    roster_service.add_enrollment(seeded_db, 3, 102)

    assert len(seeded_db.grades) == before + 2
    new_grades = [g for g in seeded_db.grades if g.studentId == 3 and g.assessmentId in (504, 505)]
    assert sorted(g.assessmentId for g in new_grades) == [504, 505]
    assert all(g.score == "" for g in new_grades)

def test_add_enrollment_rejects_duplicates(seeded_db):
    with pytest.raises(DuplicateError):
        roster_service.add_enrollment(seeded_db, 1, 101)
    assert len(seeded_db.enrollments) == 4

def test_add_enrollment_requires_existing_student_and_course(seeded_db):
    with pytest.raises(NotFoundError):
        roster_service.add_enrollment(seeded_db, 999, 101)
    with pytest.raises(NotFoundError):
        roster_service.add_enrollment(seeded_db, 1, 999)

def test_remove_enrollment_drops_that_course_grades(seeded_db):
    roster_service.add_enrollment(seeded_db, 2, 102)
    enrollment = seeded_db.get_enrollment(2, 102)

    assert roster_service.remove_enrollment(seeded_db, enrollment.id) is True
    assert seeded_db.get_enrollment(2, 102) is None
    assert seeded_db.get_grade(2, 504) is None
    assert seeded_db.get_grade(2, 505) is None
    assert seeded_db.get_grade(2, 501).score == 88

    assert roster_service.remove_enrollment(seeded_db, "en-missing") is False

def test_roster_queries(seeded_db):
    assert [s.id for s in roster_service.get_students_in_course(seeded_db, 101)] == [1, 2, 3]
    assert [c.id for c in roster_service.get_courses_for_student(seeded_db, 1)] == [101, 102]
    assert [e.id for e in roster_service.get_enrollments(seeded_db, course_id=101)] == ["en-1", "en-3", "en-4"]
