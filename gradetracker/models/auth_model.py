# /gradetracker/models/auth_model.py

from typing import Optional

from pydantic import BaseModel, Field

from .student_model import Student


class StudentLoginRequest(BaseModel):
    login: str = Field(..., description="A studentIdNum or a PIN code.")
    pin: Optional[str] = Field(default=None, description="When given, `login` must be the ID and this the PIN.")


class StudentSession(BaseModel):
    """A successful student login. The client ends the session once `expiresAt` passes without activity."""
    student: Student
    startedAt: str
    expiresAt: str
    timeoutMinutes: int
