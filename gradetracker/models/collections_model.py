# /gradetracker/models/collections_model.py

"""
The full dataset as one document: the unit exchanged with remote mirrors and
used for backups. Every collection is always present, even when empty.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from .student_model import Student
from .course_model import Course
from .enrollment_model import Enrollment
from .assessment_model import Assessment
from .grade_model import Grade


class Collections(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    students: List[Student] = Field(default_factory=list)
    courses: List[Course] = Field(default_factory=list)
    enrollments: List[Enrollment] = Field(default_factory=list)
    assessments: List[Assessment] = Field(default_factory=list)
    grades: List[Grade] = Field(default_factory=list)

    def is_empty(self) -> bool:
        """A dataset counts as empty when it holds no students."""
        return len(self.students) == 0
