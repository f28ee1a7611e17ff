# /gradetracker/routers/enrollments_router.py

from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Response, status

from ..core.exceptions import DuplicateError, NotFoundError
from ..models import enrollment_model
from ..services import roster_service
from ..services.database_service import DatabaseService, get_db_service
from ..services.sync_service import SyncService, get_sync_service

router = APIRouter()


@router.get("", response_model=List[enrollment_model.Enrollment], summary="Get Enrollments")
def get_enrollments(
    studentId: Optional[int] = None,
    courseId: Optional[int] = None,
    db: DatabaseService = Depends(get_db_service),
):
    return roster_service.get_enrollments(db, student_id=studentId, course_id=courseId)

@router.post("", response_model=enrollment_model.Enrollment, status_code=status.HTTP_201_CREATED, summary="Enroll a Student in a Course")
def create_enrollment(
    enrollment_create: enrollment_model.EnrollmentCreate,
    background_tasks: BackgroundTasks,
    db: DatabaseService = Depends(get_db_service),
    sync: SyncService = Depends(get_sync_service),
):
    try:
        enrollment = roster_service.add_enrollment(db, enrollment_create.studentId, enrollment_create.courseId)
    except DuplicateError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    background_tasks.add_task(sync.push_all)
    return enrollment

@router.delete("/{enrollment_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Remove an Enrollment")
def delete_enrollment(
    enrollment_id: str,
    background_tasks: BackgroundTasks,
    db: DatabaseService = Depends(get_db_service),
    sync: SyncService = Depends(get_sync_service),
):
    if roster_service.remove_enrollment(db, enrollment_id):
        background_tasks.add_task(sync.push_all)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
