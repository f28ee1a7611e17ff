# /gradetracker/models/report_model.py

"""
Read-only view models assembled by the report service: the student dashboard
report and the admin grade-entry sheet.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .assessment_model import Assessment
from .grade_model import Score, EMPTY_SCORE
from .student_model import Student


class AssessmentRow(BaseModel):
    """One assessment as seen by one student."""
    assessmentId: int
    courseId: int
    title: str
    category: str
    month: str
    date: str = ""
    hps: int
    instructorComments: str = ""
    score: Score = EMPTY_SCORE
    percentage: Optional[int] = None
    letterGrade: str = "-"


class CourseReport(BaseModel):
    courseId: int
    code: str
    title: str
    type: str
    average: Optional[int] = None
    letterGrade: Optional[str] = None
    numericEquivalent: Optional[float] = None
    assessments: List[AssessmentRow] = Field(default_factory=list)
    byMonth: Dict[str, List[AssessmentRow]] = Field(default_factory=dict)


class StudentReport(BaseModel):
    student: Student
    overallAverage: Optional[int] = None
    letterGrade: Optional[str] = None
    numericEquivalent: Optional[float] = None
    courses: List[CourseReport] = Field(default_factory=list)


class GradebookRow(BaseModel):
    student: Student
    # Keyed by assessment id; missing grade rows are reported as "".
    scores: Dict[int, Score] = Field(default_factory=dict)
    average: Optional[int] = None


class GradebookSheet(BaseModel):
    courseId: int
    month: Optional[str] = None
    assessments: List[Assessment] = Field(default_factory=list)
    rows: List[GradebookRow] = Field(default_factory=list)
