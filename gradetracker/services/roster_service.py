# /gradetracker/services/roster_service.py

"""
This service module is the business logic layer for students, courses and
enrollments.

It enforces the roster rules: generated student ID numbers are unique
and sequential per year, a student can be enrolled in a course only once, and
deleting a student or course removes its enrollments. Every change
is written through to the store by the `DatabaseService`.
"""

import logging
import random
import re
import uuid
from datetime import date
from typing import Any, Dict, List, Optional

from ..core.exceptions import DuplicateError, NotFoundError, ValidationError
from ..models.course_model import Course, CourseType
from ..models.enrollment_model import Enrollment
from ..models.student_model import Program, Student
from . import grading_service
from .database_service import DatabaseService

logger = logging.getLogger(__name__)

FIRST_STUDENT_ID = 1
FIRST_COURSE_ID = 101
PIN_PATTERN = re.compile(r"^\d{4}$")


# --- Shared helpers ---

def _require_text(value: Optional[str], field: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field} is required.")
    return str(value).strip()


def _to_program(value: Optional[str]) -> str:
    program = _require_text(value, "Program")
    if program not in {p.value for p in Program}:
        allowed = ", ".join(p.value for p in Program)
        raise ValidationError(f"Invalid program '{program}'. Expected one of: {allowed}.")
    return program


def _to_course_type(value: Any) -> CourseType:
    try:
        return CourseType(value)
    except ValueError:
        raise ValidationError(f"Invalid course type '{value}'.")


# --- Student ID and PIN generation ---

def format_student_id_num(year: int, sequence: int) -> str:
    return f"{year}-{sequence:04d}"


def next_sequence_number(db: DatabaseService, year: int) -> int:
    """1 + the highest sequence already issued for `year`, or 1 if none."""
    prefix = f"{year}-"
    sequences = []
    for student in db.students:
        if not student.studentIdNum.startswith(prefix):
            continue
        try:
            sequences.append(int(student.studentIdNum[len(prefix):]))
        except ValueError:
            logger.warning("Ignoring malformed studentIdNum %r", student.studentIdNum)
    return max(sequences, default=0) + 1


def generate_pin_code() -> str:
    # Not checked for uniqueness across students.
    return str(random.randint(1000, 9999))


# --- Students ---

def add_student(
    db: DatabaseService,
    name: Optional[str],
    program: Optional[str],
    year: Optional[int] = None,
    year_level: str = "",
    email: str = "",
) -> Student:
    name = _require_text(name, "Name")
    program = _to_program(program)
    if year is None:
        year = date.today().year
    if isinstance(year, bool) or not isinstance(year, int) or not 1000 <= year <= 9999:
        raise ValidationError("Year must be a four-digit number.")

    student = Student(
        id=max((s.id for s in db.students), default=FIRST_STUDENT_ID - 1) + 1,
        studentIdNum=format_student_id_num(year, next_sequence_number(db, year)),
        name=name,
        program=program,
        pinCode=generate_pin_code(),
        yearLevel=year_level or "",
        email=email or "",
    )
    db.students.append(student)
    db.commit("students")
    logger.info("Added student %s (%s)", student.studentIdNum, student.name)
    return student


def update_student(db: DatabaseService, student_id: int, changes: Dict[str, Any]) -> Student:
    """Profile edit. The ID number is fixed once issued and cannot be changed here."""
    student = db.get_student_by_id(student_id)
    if not student:
        raise NotFoundError(f"Student with ID {student_id} not found")
    if not changes:
        raise ValidationError("No update data provided.")

    updates: Dict[str, Any] = {}
    if "name" in changes:
        updates["name"] = _require_text(changes["name"], "Name")
    if "program" in changes:
        updates["program"] = _to_program(changes["program"])
    if "pinCode" in changes:
        pin = str(changes["pinCode"] or "").strip()
        if not PIN_PATTERN.match(pin):
            raise ValidationError("PIN code must be exactly 4 digits.")
        updates["pinCode"] = pin
    if "yearLevel" in changes:
        updates["yearLevel"] = changes["yearLevel"] or ""
    if "email" in changes:
        updates["email"] = changes["email"] or ""

    for key, value in updates.items():
        setattr(student, key, value)
    db.commit("students")
    return student


def delete_student(db: DatabaseService, student_id: int) -> bool:
    """Removes a student and every enrollment and grade that references them."""
    if not db.get_student_by_id(student_id):
        return False
    db.set_collection("students", [s for s in db.students if s.id != student_id])
    db.set_collection("enrollments", [e for e in db.enrollments if e.studentId != student_id])
    db.set_collection("grades", [g for g in db.grades if g.studentId != student_id])
    logger.info("Deleted student %s with their enrollments and grades", student_id)
    return True


# --- Courses ---

def add_course(
    db: DatabaseService,
    code: Optional[str],
    title: Optional[str],
    room: Optional[str],
    course_type: Any = CourseType.LECTURE,
    day: str = "",
    time: str = "",
) -> Course:
    course = Course(
        id=max((c.id for c in db.courses), default=FIRST_COURSE_ID - 1) + 1,
        code=_require_text(code, "Course code"),
        title=_require_text(title, "Course title"),
        room=_require_text(room, "Room"),
        type=_to_course_type(course_type),
        day=day or "",
        time=time or "",
    )
    db.courses.append(course)
    db.commit("courses")
    logger.info("Added course %s (%s)", course.id, course.code)
    return course


def update_course(db: DatabaseService, course_id: int, changes: Dict[str, Any]) -> Course:
    course = db.get_course_by_id(course_id)
    if not course:
        raise NotFoundError(f"Course with ID {course_id} not found")
    if not changes:
        raise ValidationError("No update data provided.")

    updates: Dict[str, Any] = {}
    for field, label in (("code", "Course code"), ("title", "Course title"), ("room", "Room")):
        if field in changes:
            updates[field] = _require_text(changes[field], label)
    if "type" in changes:
        updates["type"] = _to_course_type(changes["type"])
    for field in ("day", "time"):
        if field in changes:
            updates[field] = changes[field] or ""

    for key, value in updates.items():
        setattr(course, key, value)
    db.commit("courses")
    return course


def delete_course(db: DatabaseService, course_id: int) -> bool:
    """
    Removes a course and its enrollments. Assessments and grades of the course
    are left in place.
    """
    if not db.get_course_by_id(course_id):
        return False
    db.set_collection("courses", [c for c in db.courses if c.id != course_id])
    db.set_collection("enrollments", [e for e in db.enrollments if e.courseId != course_id])
    return True


# --- Enrollments ---

def add_enrollment(db: DatabaseService, student_id: int, course_id: int) -> Enrollment:
    """
    Enrolls a student and seeds one empty grade per assessment of the course.

    The enrollment and the placeholder grades are two separate saves.
    """
    if db.get_enrollment(student_id, course_id):
        raise DuplicateError(f"Student {student_id} is already enrolled in course {course_id}.")
    if not db.get_student_by_id(student_id):
        raise NotFoundError(f"Student with ID {student_id} not found")
    if not db.get_course_by_id(course_id):
        raise NotFoundError(f"Course with ID {course_id} not found")

    enrollment = Enrollment(id=f"en-{uuid.uuid4().hex[:12]}", studentId=student_id, courseId=course_id)
    db.enrollments.append(enrollment)
    db.commit("enrollments")

    placeholders = grading_service.seed_placeholder_grades(db, student_id, course_id)
    logger.info(
        "Enrolled student %s in course %s (%d placeholder grades)", student_id, course_id, len(placeholders)
    )
    return enrollment


def remove_enrollment(db: DatabaseService, enrollment_id: str) -> bool:
    """Removes the enrollment and the student's grades for that course."""
    enrollment = db.get_enrollment_by_id(enrollment_id)
    if not enrollment:
        return False
    db.set_collection("enrollments", [e for e in db.enrollments if e.id != enrollment_id])
    grading_service.remove_grades_for_course(db, enrollment.studentId, enrollment.courseId)
    return True


def get_enrollments(
    db: DatabaseService,
    student_id: Optional[int] = None,
    course_id: Optional[int] = None,
) -> List[Enrollment]:
    enrollments = db.get_all_enrollments()
    if student_id is not None:
        enrollments = [e for e in enrollments if e.studentId == student_id]
    if course_id is not None:
        enrollments = [e for e in enrollments if e.courseId == course_id]
    return enrollments


def get_students_in_course(db: DatabaseService, course_id: int) -> List[Student]:
    enrolled_ids = {e.studentId for e in db.get_enrollments_for_course(course_id)}
    return [s for s in db.students if s.id in enrolled_ids]


def get_courses_for_student(db: DatabaseService, student_id: int) -> List[Course]:
    course_ids = {e.courseId for e in db.get_enrollments_for_student(student_id)}
    return [c for c in db.courses if c.id in course_ids]
