# /gradetracker/models/grade_model.py

from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt

# The empty string is the one and only "not yet graded" marker. It is kept
# distinct from a real score of 0 everywhere, including on disk.
EMPTY_SCORE = ""

# Strict members: numeric strings ("95") and booleans are rejected, never coerced.
Score = Union[Literal[""], StrictInt, StrictFloat]


class GradeUpsert(BaseModel):
    studentId: int
    assessmentId: int
    score: Score = Field(..., description='A number, or "" to mark the item ungraded.')


class Grade(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    studentId: int
    assessmentId: int
    score: Score = EMPTY_SCORE
