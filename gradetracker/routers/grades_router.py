# /gradetracker/routers/grades_router.py

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from ..core.exceptions import NotFoundError, ValidationError
from ..models import grade_model
from ..services import grading_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


@router.get("", response_model=List[grade_model.Grade], summary="Get Grades")
def get_grades(
    studentId: Optional[int] = None,
    assessmentId: Optional[int] = None,
    db: DatabaseService = Depends(get_db_service),
):
    return grading_service.get_grades(db, student_id=studentId, assessment_id=assessmentId)

@router.put("", response_model=grade_model.Grade, summary="Enter or Change a Score")
def upsert_grade(grade_upsert: grade_model.GradeUpsert, db: DatabaseService = Depends(get_db_service)):
    """
    Grade cell edit. The score is stored locally right away; mirrors only
    receive it on the next explicit save (POST /api/sync/save or any admin save).
    """
    try:
        return grading_service.upsert_grade(db, grade_upsert.studentId, grade_upsert.assessmentId, grade_upsert.score)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
