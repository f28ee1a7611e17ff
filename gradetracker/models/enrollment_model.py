# /gradetracker/models/enrollment_model.py

from pydantic import BaseModel, ConfigDict


class EnrollmentCreate(BaseModel):
    studentId: int
    courseId: int


class Enrollment(EnrollmentCreate):
    """Links one student to one course. At most one row exists per pair."""
    model_config = ConfigDict(from_attributes=True)

    id: str
