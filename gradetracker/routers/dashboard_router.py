# /gradetracker/routers/dashboard_router.py

from fastapi import APIRouter, Depends

from ..models.dashboard_model import DashboardSummary
from ..services import dashboard_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


@router.get(
    "/summary",
    response_model=DashboardSummary,
    summary="Get Dashboard Summary",
    description="Retrieves record counts for the admin dashboard view."
)
def get_dashboard_summary(db: DatabaseService = Depends(get_db_service)):
    return dashboard_service.get_summary_data(db=db)
