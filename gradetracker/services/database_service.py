# /gradetracker/services/database_service.py

"""
The data access facade used by every service module.

`DatabaseService` keeps the five collections in memory as lists of pydantic
entities and writes a collection back to its `Store` every time it changes.
Each collection is saved on its own; there is no transaction spanning two
collections.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional

from fastapi import Request

from ..models.collections_model import Collections
from ..models.student_model import Student
from ..models.course_model import Course
from ..models.enrollment_model import Enrollment
from ..models.assessment_model import Assessment
from ..models.grade_model import Grade
from .database_helpers.store_base import Store, StorageKey, COLLECTION_KEYS

logger = logging.getLogger(__name__)

_ENTITY_TYPES = {
    "students": Student,
    "courses": Course,
    "enrollments": Enrollment,
    "assessments": Assessment,
    "grades": Grade,
}


class DatabaseService:
    def __init__(self, store: Store):
        self.store = store
        self.students: List[Student] = []
        self.courses: List[Course] = []
        self.enrollments: List[Enrollment] = []
        self.assessments: List[Assessment] = []
        self.grades: List[Grade] = []
        self.reload()

    # --- LOAD / SAVE ---

    def reload(self) -> None:
        """Re-reads every collection from the store."""
        for name, entity_type in _ENTITY_TYPES.items():
            raw = self.store.load(COLLECTION_KEYS[name], [])
            setattr(self, name, [entity_type.model_validate(r) for r in raw])

    def commit(self, name: str) -> None:
        """Writes one in-memory collection through to the store."""
        records = getattr(self, name)
        self.store.save(COLLECTION_KEYS[name], [r.model_dump(mode="json") for r in records])

    def set_collection(self, name: str, records: List) -> None:
        setattr(self, name, list(records))
        self.commit(name)

    def snapshot(self) -> Collections:
        """A deep copy of the current state, safe to hand to a mirror."""
        return Collections.model_validate(self.to_dict())

    def to_dict(self) -> Dict[str, List[Dict]]:
        return {name: [r.model_dump(mode="json") for r in getattr(self, name)] for name in _ENTITY_TYPES}

    def replace_all(self, data: Collections) -> None:
        """Overwrites all five collections (one save per collection)."""
        for name in _ENTITY_TYPES:
            self.set_collection(name, [r.model_copy(deep=True) for r in getattr(data, name)])
        logger.info(
            "Store overwritten: %d students, %d courses, %d enrollments, %d assessments, %d grades",
            len(self.students), len(self.courses), len(self.enrollments), len(self.assessments), len(self.grades),
        )

    def has_students(self) -> bool:
        return len(self.students) > 0

    # --- STUDENT LOOKUPS ---
    def get_all_students(self) -> List[Student]: return list(self.students)
    def get_student_by_id(self, student_id: int) -> Optional[Student]: return next((s for s in self.students if s.id == student_id), None)
    def get_student_by_id_num(self, id_num: str) -> Optional[Student]: return next((s for s in self.students if s.studentIdNum == id_num), None)

    # --- COURSE LOOKUPS ---
    def get_all_courses(self) -> List[Course]: return list(self.courses)
    def get_course_by_id(self, course_id: int) -> Optional[Course]: return next((c for c in self.courses if c.id == course_id), None)

    # --- ENROLLMENT LOOKUPS ---
    def get_all_enrollments(self) -> List[Enrollment]: return list(self.enrollments)
    def get_enrollment_by_id(self, enrollment_id: str) -> Optional[Enrollment]: return next((e for e in self.enrollments if e.id == enrollment_id), None)
    def get_enrollment(self, student_id: int, course_id: int) -> Optional[Enrollment]:
        return next((e for e in self.enrollments if e.studentId == student_id and e.courseId == course_id), None)
    def get_enrollments_for_student(self, student_id: int) -> List[Enrollment]: return [e for e in self.enrollments if e.studentId == student_id]
    def get_enrollments_for_course(self, course_id: int) -> List[Enrollment]: return [e for e in self.enrollments if e.courseId == course_id]

    # --- ASSESSMENT LOOKUPS ---
    def get_all_assessments(self) -> List[Assessment]: return list(self.assessments)
    def get_assessment_by_id(self, assessment_id: int) -> Optional[Assessment]: return next((a for a in self.assessments if a.id == assessment_id), None)
    def get_assessments_for_course(self, course_id: int) -> List[Assessment]: return [a for a in self.assessments if a.courseId == course_id]

    # --- GRADE LOOKUPS ---
    def get_all_grades(self) -> List[Grade]: return list(self.grades)
    def get_grade(self, student_id: int, assessment_id: int) -> Optional[Grade]:
        return next((g for g in self.grades if g.studentId == student_id and g.assessmentId == assessment_id), None)
    def get_grades_for_student(self, student_id: int) -> List[Grade]: return [g for g in self.grades if g.studentId == student_id]

    # --- SYNC METADATA ---

    def get_last_sync(self) -> Optional[str]:
        return self.store.load(StorageKey.LAST_SYNC, "") or None

    def stamp_last_sync(self) -> str:
        stamp = datetime.now(timezone.utc).isoformat()
        self.store.save(StorageKey.LAST_SYNC, stamp)
        return stamp

    def is_sync_enabled(self) -> bool:
        # Sync is on unless it has been explicitly switched off.
        return bool(self.store.load(StorageKey.SYNC_ENABLED, True))

    def set_sync_enabled(self, enabled: bool) -> None:
        self.store.save(StorageKey.SYNC_ENABLED, bool(enabled))


# --- DEPENDENCY PROVIDER ---
def get_db_service(request: Request) -> DatabaseService:
    """
    FastAPI dependency that provides the process-wide DatabaseService built at
    startup (see `gradetracker.main`).
    """
    return request.app.state.db_service
