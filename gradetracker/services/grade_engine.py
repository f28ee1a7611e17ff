# /gradetracker/services/grade_engine.py

"""
Pure grade computation: percentages, letter grades, numeric equivalents and
course/overall averages.

Nothing in this module touches the store. Callers pass in the collections they
already hold, which keeps every function deterministic and trivially testable.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..models.assessment_model import Assessment, MONTH_ORDER
from ..models.enrollment_model import Enrollment
from ..models.grade_model import Grade, Score, EMPTY_SCORE
from ..models.report_model import AssessmentRow

# --- Breakpoint tables (descending, inclusive lower bounds) ---

LETTER_BREAKPOINTS: List[Tuple[int, str]] = [
    (97, "A+"), (93, "A"), (90, "A-"),
    (87, "B+"), (84, "B"), (81, "B-"),
    (78, "C+"), (75, "C"), (72, "C-"),
    (69, "D+"), (66, "D"), (60, "D-"),
]
FAILING_LETTER = "F"

NUMERIC_BREAKPOINTS: List[Tuple[int, float]] = [
    (97, 1.00), (93, 1.25), (90, 1.50),
    (87, 1.75), (84, 2.00), (81, 2.25),
    (78, 2.50), (75, 2.75), (72, 3.00),
    (69, 3.25), (66, 3.50), (63, 3.75),
    (60, 4.00),
]
FAILING_NUMERIC = 5.00

UNGRADED_LETTER = "-"


def round_half_up(value: float) -> int:
    """Rounds .5 away from zero, unlike Python's banker's rounding."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def is_graded(score: Score) -> bool:
    return score != EMPTY_SCORE and score is not None


def percentage(score: Score, hps: float) -> int:
    if not is_graded(score) or hps <= 0:
        return 0
    return round_half_up(100 * score / hps)


def letter_grade(pct: float) -> str:
    for floor, letter in LETTER_BREAKPOINTS:
        if pct >= floor:
            return letter
    return FAILING_LETTER


def numeric_equivalent(pct: float) -> float:
    for floor, value in NUMERIC_BREAKPOINTS:
        if pct >= floor:
            return value
    return FAILING_NUMERIC


# --- Aggregation ---

def _matches(assessment: Assessment, category: Optional[str], month: Optional[str]) -> bool:
    if category and assessment.category.value != category:
        return False
    if month and assessment.month.value != month:
        return False
    return True


def course_average(
    student_id: int,
    course_id: int,
    assessments: Iterable[Assessment],
    grades: Iterable[Grade],
    category: Optional[str] = None,
    month: Optional[str] = None,
) -> Optional[int]:
    """
    Pooled percentage over the student's graded items in one course.

    Earned points and HPS are summed across every graded assessment that passes
    the optional category/month filters. Returns None when nothing is graded,
    which is different from an average of 0.
    """
    course_assessments: Dict[int, Assessment] = {
        a.id: a for a in assessments if a.courseId == course_id and _matches(a, category, month)
    }
    total_earned = 0.0
    total_hps = 0
    for grade in grades:
        if grade.studentId != student_id or grade.assessmentId not in course_assessments:
            continue
        if not is_graded(grade.score):
            continue
        total_earned += grade.score
        total_hps += course_assessments[grade.assessmentId].hps

    if total_hps == 0:
        return None
    return round_half_up(100 * total_earned / total_hps)


def overall_average(
    student_id: int,
    enrollments: Iterable[Enrollment],
    assessments: Sequence[Assessment],
    grades: Sequence[Grade],
) -> Optional[int]:
    """
    Equal-weight mean of the per-course averages. Courses without any graded
    item are left out; None if no course qualifies.
    """
    course_ids = []
    for e in enrollments:
        if e.studentId == student_id and e.courseId not in course_ids:
            course_ids.append(e.courseId)

    averages = [course_average(student_id, cid, assessments, grades) for cid in course_ids]
    averages = [a for a in averages if a is not None]
    if not averages:
        return None
    return round_half_up(sum(averages) / len(averages))


# --- Per-assessment rows for the student dashboard ---

def assessment_rows(
    student_id: int,
    course_id: int,
    assessments: Iterable[Assessment],
    grades: Iterable[Grade],
    category: Optional[str] = None,
    month: Optional[str] = None,
) -> List[AssessmentRow]:
    scores = {g.assessmentId: g.score for g in grades if g.studentId == student_id}
    rows = []
    for a in assessments:
        if a.courseId != course_id or not _matches(a, category, month):
            continue
        score = scores.get(a.id, EMPTY_SCORE)
        graded = is_graded(score)
        pct = percentage(score, a.hps) if graded else None
        rows.append(AssessmentRow(
            assessmentId=a.id,
            courseId=a.courseId,
            title=a.title,
            category=a.category.value,
            month=a.month.value,
            date=a.date,
            hps=a.hps,
            instructorComments=a.instructorComments,
            score=score,
            percentage=pct,
            letterGrade=letter_grade(pct) if pct is not None else UNGRADED_LETTER,
        ))
    return rows


def group_rows_by_month(rows: Iterable[AssessmentRow]) -> Dict[str, List[AssessmentRow]]:
    """Groups rows by month, months in calendar order."""
    grouped: Dict[str, List[AssessmentRow]] = {}
    for row in sorted(rows, key=lambda r: MONTH_ORDER.index(r.month)):
        grouped.setdefault(row.month, []).append(row)
    return grouped
