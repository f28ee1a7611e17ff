# /gradetracker/routers/students_router.py

from typing import List

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Response, status

from ..core.exceptions import NotFoundError, ValidationError
from ..models import student_model
from ..services import roster_service
from ..services.database_service import DatabaseService, get_db_service
from ..services.sync_service import SyncService, get_sync_service

router = APIRouter()

# --- STUDENT COLLECTION ENDPOINTS (/api/students) ---

@router.get("", response_model=List[student_model.Student], summary="Get All Students")
def get_all_students(db: DatabaseService = Depends(get_db_service)):
    return db.get_all_students()

@router.post("", response_model=student_model.Student, status_code=status.HTTP_201_CREATED, summary="Add a Student")
def create_student(
    student_create: student_model.StudentCreate,
    background_tasks: BackgroundTasks,
    db: DatabaseService = Depends(get_db_service),
    sync: SyncService = Depends(get_sync_service),
):
    try:
        new_student = roster_service.add_student(
            db,
            name=student_create.name,
            program=student_create.program,
            year=student_create.year,
            year_level=student_create.yearLevel,
            email=student_create.email,
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    background_tasks.add_task(sync.push_all)
    return new_student

# --- INDIVIDUAL STUDENT ENDPOINTS (/api/students/{student_id}) ---

@router.get("/{student_id}", response_model=student_model.Student, summary="Get a Single Student")
def get_student(student_id: int, db: DatabaseService = Depends(get_db_service)):
    student = db.get_student_by_id(student_id)
    if student is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Student with ID {student_id} not found")
    return student

@router.put("/{student_id}", response_model=student_model.Student, summary="Update a Student Profile")
def update_student(
    student_id: int,
    student_update: student_model.StudentUpdate,
    background_tasks: BackgroundTasks,
    db: DatabaseService = Depends(get_db_service),
    sync: SyncService = Depends(get_sync_service),
):
    try:
        updated = roster_service.update_student(db, student_id, student_update.model_dump(exclude_unset=True))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    background_tasks.add_task(sync.push_all)
    return updated

@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Student")
def delete_student(
    student_id: int,
    background_tasks: BackgroundTasks,
    db: DatabaseService = Depends(get_db_service),
    sync: SyncService = Depends(get_sync_service),
):
    # Deleting an unknown student removes nothing and is not an error.
    if roster_service.delete_student(db, student_id):
        background_tasks.add_task(sync.push_all)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
