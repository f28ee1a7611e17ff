# /gradetracker/services/dashboard_service.py

from ..models.dashboard_model import DashboardSummary
from .database_service import DatabaseService
from .grade_engine import is_graded


def get_summary_data(db: DatabaseService) -> DashboardSummary:
    """
    Calculates the admin dashboard counts from the in-memory collections.
    A grade row counts as pending while its score is still empty.
    """
    grades = db.get_all_grades()
    graded = sum(1 for g in grades if is_graded(g.score))
    return DashboardSummary(
        studentCount=len(db.get_all_students()),
        courseCount=len(db.get_all_courses()),
        enrollmentCount=len(db.get_all_enrollments()),
        assessmentCount=len(db.get_all_assessments()),
        gradedCount=graded,
        pendingCount=len(grades) - graded,
    )
