# /gradetracker/routers/reports_router.py

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status

from ..core.exceptions import NotFoundError
from ..models.report_model import StudentReport
from ..services import report_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


@router.get(
    "/students/{student_id}",
    response_model=StudentReport,
    summary="Get a Student's Grade Report",
    description="Per-course assessment rows and averages, optionally narrowed by category and month.",
)
def get_student_report(
    student_id: int,
    category: Optional[str] = None,
    month: Optional[str] = None,
    db: DatabaseService = Depends(get_db_service),
):
    try:
        return report_service.get_student_report(db, student_id, category=category, month=month)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
