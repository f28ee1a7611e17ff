# /gradetracker/services/grading_service.py

"""
Business logic for assessments and grades.

Grades are keyed by (studentId, assessmentId); every write goes through
`upsert_grade` so that pair never appears twice. The empty string is the
only accepted "ungraded" value and is checked here, at the write boundary.
"""

import logging
import math
import uuid
from typing import Any, Dict, List, Optional

from ..core.exceptions import NotFoundError, ValidationError
from ..models.assessment_model import Assessment, AssessmentCategory, Month
from ..models.grade_model import Grade, Score, EMPTY_SCORE
from .database_service import DatabaseService

logger = logging.getLogger(__name__)

FIRST_ASSESSMENT_ID = 501


def new_grade_id() -> str:
    return f"g-{uuid.uuid4().hex[:12]}"


def _next_assessment_id(db: DatabaseService) -> int:
    return max((a.id for a in db.assessments), default=FIRST_ASSESSMENT_ID - 1) + 1


# --- Field validation helpers ---

def _require_text(value: Optional[str], field: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field} is required.")
    return str(value).strip()


def _to_category(value: Any) -> AssessmentCategory:
    try:
        return AssessmentCategory(value)
    except ValueError:
        allowed = ", ".join(c.value for c in AssessmentCategory)
        raise ValidationError(f"Invalid category '{value}'. Expected one of: {allowed}.")


def _to_month(value: Any) -> Month:
    try:
        return Month(value)
    except ValueError:
        raise ValidationError(f"Invalid month '{value}'.")


def _to_hps(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValidationError("HPS must be a positive whole number.")
    return value


def validate_score(score: Any) -> Score:
    """
    Accepts a non-negative finite number or the empty sentinel. Anything else,
    including None and numeric strings, is rejected.
    """
    if isinstance(score, str):
        if score == EMPTY_SCORE:
            return EMPTY_SCORE
        raise ValidationError(f"Score must be a number or empty, got '{score}'.")
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        raise ValidationError("Score must be a number or empty.")
    if math.isnan(score) or math.isinf(score) or score < 0:
        raise ValidationError("Score must be a non-negative number.")
    return score


# --- Assessments ---

def add_assessment(
    db: DatabaseService,
    course_id: Optional[int],
    category: Any,
    title: Optional[str],
    month: Any,
    hps: Any,
    date: str = "",
    instructor_comments: str = "",
) -> Assessment:
    """
    Creates an assessment for a course.

    Students already enrolled in the course do not get placeholder grades for
    it; placeholders are only created when a student enrolls.
    """
    title = _require_text(title, "Assessment title")
    if course_id is None:
        raise ValidationError("Course is required.")
    if not db.get_course_by_id(course_id):
        raise NotFoundError(f"Course with ID {course_id} not found")

    assessment = Assessment(
        id=_next_assessment_id(db),
        courseId=course_id,
        category=_to_category(category),
        title=title,
        month=_to_month(month),
        hps=_to_hps(hps),
        date=date or "",
        instructorComments=instructor_comments or "",
    )
    db.assessments.append(assessment)
    db.commit("assessments")
    logger.info("Added assessment %s '%s' to course %s", assessment.id, assessment.title, course_id)
    return assessment


def update_assessment(db: DatabaseService, assessment_id: int, changes: Dict[str, Any]) -> Assessment:
    assessment = db.get_assessment_by_id(assessment_id)
    if not assessment:
        raise NotFoundError(f"Assessment with ID {assessment_id} not found")
    if not changes:
        raise ValidationError("No update data provided.")

    # Validate everything before touching the record.
    updates: Dict[str, Any] = {}
    if "title" in changes:
        updates["title"] = _require_text(changes["title"], "Assessment title")
    if "category" in changes:
        updates["category"] = _to_category(changes["category"])
    if "month" in changes:
        updates["month"] = _to_month(changes["month"])
    if "hps" in changes:
        updates["hps"] = _to_hps(changes["hps"])
    if "date" in changes:
        updates["date"] = changes["date"] or ""
    if "instructorComments" in changes:
        updates["instructorComments"] = changes["instructorComments"] or ""

    for key, value in updates.items():
        setattr(assessment, key, value)
    db.commit("assessments")
    return assessment


def delete_assessment(db: DatabaseService, assessment_id: int) -> bool:
    """Removes an assessment together with every grade recorded against it."""
    if not db.get_assessment_by_id(assessment_id):
        return False
    db.set_collection("assessments", [a for a in db.assessments if a.id != assessment_id])
    db.set_collection("grades", [g for g in db.grades if g.assessmentId != assessment_id])
    return True


# --- Grades ---

def upsert_grade(db: DatabaseService, student_id: int, assessment_id: int, score: Any) -> Grade:
    """
    Records a score for (student, assessment). An existing row has its score
    replaced; otherwise a new row is inserted. This is an implicit edit: it is
    written to the store immediately but not pushed to any mirror.
    """
    score = validate_score(score)
    if not db.get_student_by_id(student_id):
        raise NotFoundError(f"Student with ID {student_id} not found")
    if not db.get_assessment_by_id(assessment_id):
        raise NotFoundError(f"Assessment with ID {assessment_id} not found")

    grade = db.get_grade(student_id, assessment_id)
    if grade:
        grade.score = score
    else:
        grade = Grade(id=new_grade_id(), studentId=student_id, assessmentId=assessment_id, score=score)
        db.grades.append(grade)
    db.commit("grades")
    return grade


def seed_placeholder_grades(db: DatabaseService, student_id: int, course_id: int) -> List[Grade]:
    """
    Creates an empty grade for every assessment of the course that the student
    has no grade for yet. Returns the rows that were created.
    """
    created = []
    for assessment in db.get_assessments_for_course(course_id):
        if db.get_grade(student_id, assessment.id):
            continue
        grade = Grade(id=new_grade_id(), studentId=student_id, assessmentId=assessment.id, score=EMPTY_SCORE)
        db.grades.append(grade)
        created.append(grade)
    if created:
        db.commit("grades")
    return created


def remove_grades_for_course(db: DatabaseService, student_id: int, course_id: int) -> int:
    """Deletes the student's grades for every assessment of one course."""
    assessment_ids = {a.id for a in db.get_assessments_for_course(course_id)}
    kept = [g for g in db.grades if not (g.studentId == student_id and g.assessmentId in assessment_ids)]
    removed = len(db.grades) - len(kept)
    if removed:
        db.set_collection("grades", kept)
    return removed


def get_grades(
    db: DatabaseService,
    student_id: Optional[int] = None,
    assessment_id: Optional[int] = None,
) -> List[Grade]:
    grades = db.get_all_grades()
    if student_id is not None:
        grades = [g for g in grades if g.studentId == student_id]
    if assessment_id is not None:
        grades = [g for g in grades if g.assessmentId == assessment_id]
    return grades


def get_assessments(
    db: DatabaseService,
    course_id: Optional[int] = None,
    month: Optional[str] = None,
    category: Optional[str] = None,
) -> List[Assessment]:
    assessments = db.get_all_assessments()
    if course_id is not None:
        assessments = [a for a in assessments if a.courseId == course_id]
    if month:
        assessments = [a for a in assessments if a.month.value == month]
    if category:
        assessments = [a for a in assessments if a.category.value == category]
    return assessments
