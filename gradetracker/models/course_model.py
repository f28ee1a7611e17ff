# /gradetracker/models/course_model.py

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CourseType(str, Enum):
    LECTURE = "Lecture"
    LAB = "Lab"


class CourseBase(BaseModel):
    code: str = Field(..., description="Short course code, e.g. MATH101.")
    title: str
    type: CourseType = CourseType.LECTURE
    day: str = Field(default="", description="Meeting days, e.g. MWF.")
    time: str = Field(default="", description="Meeting time range, e.g. 09:00 - 10:00.")
    room: str


class CourseCreate(CourseBase):
    pass


class CourseUpdate(BaseModel):
    code: Optional[str] = None
    title: Optional[str] = None
    type: Optional[CourseType] = None
    day: Optional[str] = None
    time: Optional[str] = None
    room: Optional[str] = None


class Course(CourseBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
