# /gradetracker/routers/courses_router.py

from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Response, status
from fastapi.responses import StreamingResponse

from ..core.exceptions import NotFoundError, ValidationError
from ..models import course_model, report_model, student_model
from ..services import report_service, roster_service
from ..services.database_service import DatabaseService, get_db_service
from ..services.sync_service import SyncService, get_sync_service

router = APIRouter()

# --- COURSE COLLECTION ENDPOINTS (/api/courses) ---

@router.get("", response_model=List[course_model.Course], summary="Get All Courses")
def get_all_courses(db: DatabaseService = Depends(get_db_service)):
    return db.get_all_courses()

@router.post("", response_model=course_model.Course, status_code=status.HTTP_201_CREATED, summary="Create a Course")
def create_course(
    course_create: course_model.CourseCreate,
    background_tasks: BackgroundTasks,
    db: DatabaseService = Depends(get_db_service),
    sync: SyncService = Depends(get_sync_service),
):
    try:
        course = roster_service.add_course(
            db,
            code=course_create.code,
            title=course_create.title,
            room=course_create.room,
            course_type=course_create.type,
            day=course_create.day,
            time=course_create.time,
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    background_tasks.add_task(sync.push_all)
    return course

# --- INDIVIDUAL COURSE ENDPOINTS (/api/courses/{course_id}) ---

@router.get("/{course_id}", response_model=course_model.Course, summary="Get a Single Course")
def get_course(course_id: int, db: DatabaseService = Depends(get_db_service)):
    course = db.get_course_by_id(course_id)
    if course is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Course with ID {course_id} not found")
    return course

@router.put("/{course_id}", response_model=course_model.Course, summary="Update a Course")
def update_course(
    course_id: int,
    course_update: course_model.CourseUpdate,
    background_tasks: BackgroundTasks,
    db: DatabaseService = Depends(get_db_service),
    sync: SyncService = Depends(get_sync_service),
):
    try:
        course = roster_service.update_course(db, course_id, course_update.model_dump(exclude_unset=True))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    background_tasks.add_task(sync.push_all)
    return course

@router.delete("/{course_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Course")
def delete_course(
    course_id: int,
    background_tasks: BackgroundTasks,
    db: DatabaseService = Depends(get_db_service),
    sync: SyncService = Depends(get_sync_service),
):
    if roster_service.delete_course(db, course_id):
        background_tasks.add_task(sync.push_all)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.get("/{course_id}/students", response_model=List[student_model.Student], summary="Get Students Enrolled in a Course")
def get_course_students(course_id: int, db: DatabaseService = Depends(get_db_service)):
    if db.get_course_by_id(course_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Course with ID {course_id} not found")
    return roster_service.get_students_in_course(db, course_id)

@router.get("/{course_id}/gradebook", response_model=report_model.GradebookSheet, summary="Get the Grade Entry Sheet")
def get_gradebook(course_id: int, month: Optional[str] = None, db: DatabaseService = Depends(get_db_service)):
    try:
        return report_service.get_gradebook_sheet(db, course_id, month)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

@router.get("/{course_id}/export", summary="Export Course Gradebook as CSV", response_class=StreamingResponse)
def export_gradebook_csv(course_id: int, month: Optional[str] = None, db: DatabaseService = Depends(get_db_service)):
    try:
        csv_string = report_service.export_gradebook_as_csv(db, course_id, month)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    course = db.get_course_by_id(course_id)
    file_name = f"gradebook_{course.code.replace(' ', '_').lower()}.csv"
    return StreamingResponse(iter([csv_string]), media_type="text/csv", headers={"Content-Disposition": f"attachment; filename={file_name}"})
