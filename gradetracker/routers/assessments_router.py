# /gradetracker/routers/assessments_router.py

from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Response, status

from ..core.exceptions import NotFoundError, ValidationError
from ..models import assessment_model
from ..services import grading_service
from ..services.database_service import DatabaseService, get_db_service
from ..services.sync_service import SyncService, get_sync_service

router = APIRouter()


@router.get("", response_model=List[assessment_model.Assessment], summary="Get Assessments")
def get_assessments(
    courseId: Optional[int] = None,
    month: Optional[str] = None,
    category: Optional[str] = None,
    db: DatabaseService = Depends(get_db_service),
):
    return grading_service.get_assessments(db, course_id=courseId, month=month, category=category)

@router.post("", response_model=assessment_model.Assessment, status_code=status.HTTP_201_CREATED, summary="Create an Assessment")
def create_assessment(
    assessment_create: assessment_model.AssessmentCreate,
    background_tasks: BackgroundTasks,
    db: DatabaseService = Depends(get_db_service),
    sync: SyncService = Depends(get_sync_service),
):
    try:
        assessment = grading_service.add_assessment(
            db,
            course_id=assessment_create.courseId,
            category=assessment_create.category,
            title=assessment_create.title,
            month=assessment_create.month,
            hps=assessment_create.hps,
            date=assessment_create.date,
            instructor_comments=assessment_create.instructorComments,
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    background_tasks.add_task(sync.push_all)
    return assessment

@router.put("/{assessment_id}", response_model=assessment_model.Assessment, summary="Update an Assessment")
def update_assessment(
    assessment_id: int,
    assessment_update: assessment_model.AssessmentUpdate,
    background_tasks: BackgroundTasks,
    db: DatabaseService = Depends(get_db_service),
    sync: SyncService = Depends(get_sync_service),
):
    try:
        assessment = grading_service.update_assessment(
            db, assessment_id, assessment_update.model_dump(exclude_unset=True)
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    background_tasks.add_task(sync.push_all)
    return assessment

@router.delete("/{assessment_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete an Assessment")
def delete_assessment(
    assessment_id: int,
    background_tasks: BackgroundTasks,
    db: DatabaseService = Depends(get_db_service),
    sync: SyncService = Depends(get_sync_service),
):
    if grading_service.delete_assessment(db, assessment_id):
        background_tasks.add_task(sync.push_all)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
