# /gradetracker/services/report_service.py

"""
Assembles read-only views from the stored collections: the student dashboard
report, the admin grade-entry sheet and the CSV export of a course gradebook.
All grade math is delegated to `grade_engine`.
"""

from typing import Optional

import pandas as pd

from ..core.exceptions import NotFoundError
from ..models.report_model import CourseReport, GradebookRow, GradebookSheet, StudentReport
from ..models.grade_model import EMPTY_SCORE
from . import grade_engine, roster_service
from .database_service import DatabaseService


def get_student_report(
    db: DatabaseService,
    student_id: int,
    category: Optional[str] = None,
    month: Optional[str] = None,
) -> StudentReport:
    """
    Builds the student dashboard: one section per enrolled course with its
    assessment rows and (filtered) average, plus the overall average.

    Filters narrow the rows and the course averages. The overall average is
    always computed over everything graded.
    """
    student = db.get_student_by_id(student_id)
    if not student:
        raise NotFoundError(f"Student with ID {student_id} not found")

    assessments = db.get_all_assessments()
    grades = db.get_grades_for_student(student_id)

    course_reports = []
    for course in roster_service.get_courses_for_student(db, student_id):
        rows = grade_engine.assessment_rows(student_id, course.id, assessments, grades, category, month)
        average = grade_engine.course_average(student_id, course.id, assessments, grades, category, month)
        course_reports.append(CourseReport(
            courseId=course.id,
            code=course.code,
            title=course.title,
            type=course.type.value,
            average=average,
            letterGrade=grade_engine.letter_grade(average) if average is not None else None,
            numericEquivalent=grade_engine.numeric_equivalent(average) if average is not None else None,
            assessments=rows,
            byMonth=grade_engine.group_rows_by_month(rows),
        ))

    overall = grade_engine.overall_average(student_id, db.get_all_enrollments(), assessments, grades)
    return StudentReport(
        student=student,
        overallAverage=overall,
        letterGrade=grade_engine.letter_grade(overall) if overall is not None else None,
        numericEquivalent=grade_engine.numeric_equivalent(overall) if overall is not None else None,
        courses=course_reports,
    )


def get_gradebook_sheet(db: DatabaseService, course_id: int, month: Optional[str] = None) -> GradebookSheet:
    """The grade-entry grid: enrolled students by the course's assessments for a month."""
    if not db.get_course_by_id(course_id):
        raise NotFoundError(f"Course with ID {course_id} not found")

    all_assessments = db.get_all_assessments()
    sheet_assessments = [
        a for a in all_assessments if a.courseId == course_id and (not month or a.month.value == month)
    ]

    rows = []
    for student in roster_service.get_students_in_course(db, course_id):
        grades = db.get_grades_for_student(student.id)
        by_assessment = {g.assessmentId: g.score for g in grades}
        rows.append(GradebookRow(
            student=student,
            scores={a.id: by_assessment.get(a.id, EMPTY_SCORE) for a in sheet_assessments},
            average=grade_engine.course_average(student.id, course_id, all_assessments, grades, month=month),
        ))
    return GradebookSheet(courseId=course_id, month=month, assessments=sheet_assessments, rows=rows)


def export_gradebook_as_csv(db: DatabaseService, course_id: int, month: Optional[str] = None) -> str:
    """
    Business logic to generate a CSV export of a course gradebook. Ungraded
    cells are left blank.
    """
    sheet = get_gradebook_sheet(db, course_id, month)
    base_columns = ['Student ID', 'Student Name', 'Program']
    assessment_columns = [f"{a.title} ({a.hps})" for a in sheet.assessments]
    summary_columns = ['Average', 'Letter Grade', 'Numeric Equivalent']

    export_data = []
    for row in sheet.rows:
        record = {
            'Student ID': row.student.studentIdNum,
            'Student Name': row.student.name,
            'Program': row.student.program,
        }
        for column, assessment in zip(assessment_columns, sheet.assessments):
            record[column] = row.scores.get(assessment.id, EMPTY_SCORE)
        record['Average'] = row.average if row.average is not None else "N/A"
        record['Letter Grade'] = grade_engine.letter_grade(row.average) if row.average is not None else "N/A"
        record['Numeric Equivalent'] = (
            f"{grade_engine.numeric_equivalent(row.average):.2f}" if row.average is not None else "N/A"
        )
        export_data.append(record)

    columns = base_columns + assessment_columns + summary_columns
    df = pd.DataFrame(export_data, columns=columns) if export_data else pd.DataFrame(columns=columns)
    return df.to_csv(index=False)
