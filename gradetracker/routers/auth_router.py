# /gradetracker/routers/auth_router.py

"""
Student login. A match opens a session that expires after SESSION_TIMEOUT_MINUTES
of inactivity. The student list is resolved through the sync tiers (mirrors,
then the local store, then the default dataset) before matching.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from ..core.exceptions import LoginError, ValidationError
from ..models.auth_model import StudentLoginRequest, StudentSession
from ..services import auth_service
from ..services.sync_service import SyncService, get_sync_service

router = APIRouter()


@router.post("/student-login", response_model=StudentSession, summary="Log a Student In by ID or PIN")
async def student_login(login_in: StudentLoginRequest, sync: SyncService = Depends(get_sync_service)):
    students = await sync.lookup_students()
    try:
        student = auth_service.find_student_for_login(students, login_in.login, login_in.pin)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except LoginError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"reason": e.reason, "message": str(e)},
        )
    return auth_service.start_session(student)
