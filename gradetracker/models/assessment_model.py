# /gradetracker/models/assessment_model.py

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# --- Core Enumerations ---
class AssessmentCategory(str, Enum):
    WRITTEN_EXAM = "Written Exam"
    PERFORMANCE_TASK = "Performance Task"
    QUARTERLY_EXAM = "Quarterly Exam"
    PROJECT = "Project"
    LAB_EXERCISE = "Lab Exercise"


class Month(str, Enum):
    JANUARY = "January"; FEBRUARY = "February"; MARCH = "March"
    APRIL = "April"; MAY = "May"; JUNE = "June"
    JULY = "July"; AUGUST = "August"; SEPTEMBER = "September"
    OCTOBER = "October"; NOVEMBER = "November"; DECEMBER = "December"


MONTH_ORDER = [m.value for m in Month]


# --- API Contract Models ---

class AssessmentBase(BaseModel):
    courseId: int
    category: AssessmentCategory
    title: str
    month: Month
    hps: int = Field(..., description="Highest possible score; the denominator for percentages.")
    date: str = Field(default="", description="Calendar date, YYYY-MM-DD.")
    instructorComments: str = ""


class AssessmentCreate(AssessmentBase):
    pass


class AssessmentUpdate(BaseModel):
    category: Optional[AssessmentCategory] = None
    title: Optional[str] = None
    month: Optional[Month] = None
    hps: Optional[int] = None
    date: Optional[str] = None
    instructorComments: Optional[str] = None


class Assessment(AssessmentBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
