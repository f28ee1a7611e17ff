# /gradetracker/services/auth_service.py

"""
Student login lookup.

A single input is matched against every student's ID number or PIN code
(exact match after trimming). PINs are not unique, so a bare PIN resolves to
the first student holding it; when a PIN is supplied separately the ID is
resolved first and the PIN checked against that student only.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional

from ..core.config import SESSION_TIMEOUT_MINUTES
from ..core.exceptions import LoginError, ValidationError
from ..models.auth_model import StudentSession
from ..models.student_model import Student

logger = logging.getLogger(__name__)


def find_student_for_login(students: Iterable[Student], login: str, pin: Optional[str] = None) -> Student:
    login = (login or "").strip()
    if not login:
        raise ValidationError("Please enter your Student ID or PIN.")
    students = list(students)

    if pin is not None:
        student = next((s for s in students if str(s.studentIdNum) == login), None)
        if not student:
            raise LoginError(LoginError.ID_NOT_FOUND, "Student ID not found.")
        if str(student.pinCode) != pin.strip():
            raise LoginError(LoginError.PIN_MISMATCH, "Student ID found but the PIN does not match.")
        return student

    student = next(
        (s for s in students if str(s.studentIdNum) == login or str(s.pinCode) == login),
        None,
    )
    if not student:
        logger.info("Login failed: no student matches the given ID or PIN")
        raise LoginError(LoginError.ID_NOT_FOUND, "Student ID or PIN not found.")
    return student


def start_session(
    student: Student,
    timeout_minutes: int = SESSION_TIMEOUT_MINUTES,
    now: Optional[datetime] = None,
) -> StudentSession:
    """Opens a student session that expires after `timeout_minutes` of inactivity."""
    started = now or datetime.now(timezone.utc)
    return StudentSession(
        student=student,
        startedAt=started.isoformat(),
        expiresAt=(started + timedelta(minutes=timeout_minutes)).isoformat(),
        timeoutMinutes=timeout_minutes,
    )
