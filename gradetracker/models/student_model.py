# /gradetracker/models/student_model.py

# --- Core Imports ---
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Program(str, Enum):
    BSCS = "BSCS"
    BSIT = "BSIT"
    BS_MATH = "BS MATH"
    BSBA = "BSBA"
    BSED = "BSED"


# --- Model Definitions ---

class StudentCreate(BaseModel):
    """
    Payload for the admin "Add Student" action. The ID number and PIN are
    generated server-side; `year` selects the ID prefix and defaults to the
    current calendar year.
    """
    name: str = Field(..., description="Full name, conventionally 'Last, First M.'")
    program: str = Field(..., description="One of the offered degree programs.")
    year: Optional[int] = Field(default=None, description="Prefix year for the generated studentIdNum.")
    yearLevel: str = Field(default="")
    email: str = Field(default="")


class StudentUpdate(BaseModel):
    """
    The model for updating a student profile. All fields are optional to allow
    for partial updates.
    """
    name: Optional[str] = None
    program: Optional[str] = None
    pinCode: Optional[str] = None
    yearLevel: Optional[str] = None
    email: Optional[str] = None


class Student(BaseModel):
    """
    The full representation of a Student as it is stored and returned by the API.
    """
    model_config = ConfigDict(from_attributes=True)

    id: int
    studentIdNum: str = Field(..., description="Official ID number, formatted YYYY-NNNN.")
    name: str
    program: str
    pinCode: str = Field(..., description="4-digit PIN usable as an alternate login key.")
    yearLevel: str = ""
    email: str = ""
