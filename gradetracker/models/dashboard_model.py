# /gradetracker/models/dashboard_model.py

from pydantic import BaseModel


class DashboardSummary(BaseModel):
    """Defines the data shape for the admin dashboard summary statistics."""
    studentCount: int
    courseCount: int
    enrollmentCount: int
    assessmentCount: int
    gradedCount: int
    pendingCount: int
