"""Report rows and their spreadsheet/CSV serialisation."""
import csv
import datetime
import io
from typing import List, Optional

import openpyxl
from openpyxl.utils import get_column_letter

from grading import (
    compute_category_subtotal,
    compute_final_grade,
    REMARKS,
    compute_midterm_grade,
    get_remark,
)
from models import (
    CLASS_PARTICIPATION,
    EXAM,
    GradeStructure,
    RemarkCount,
    Report,
    ReportRow,
    Student,
    StudentGrade,
)
from state import GradebookState

SHEET_TITLE = "Grades Report"
MIN_COLUMN_WIDTH = 10
MAX_COLUMN_WIDTH = 20
DISPLAY_DECIMALS = 2


def report_headers(structure: GradeStructure) -> List[str]:
    return (
        ["Student ID", "Last Name", "First Name"]
        + [c.name for c in structure.class_participation.components]
        + ["Class Participation Total"]
        + [c.name for c in structure.exam.components]
        + ["Exam Total", "Midterm Grade", "Final Grade", "Remarks"]
    )


def build_report_row(student: Student, structure: GradeStructure,
                     grades: Optional[StudentGrade]) -> ReportRow:
    """Flatten one student's scores into a report row.

    Raw scores are reported as entered (missing ones as 0). Totals and grades
    are rounded for display; the remark is taken from the unrounded final grade.
    """
    def raw_scores(category: str) -> List[float]:
        scores = grades.scores_for(category) if grades is not None else {}
        return [scores.get(c.id, 0) for c in structure.category(category).components]

    final_grade = compute_final_grade(structure, grades)
    return ReportRow(
        student_id=student.student_id,
        last_name=student.last_name,
        first_name=student.first_name,
        class_participation_scores=raw_scores(CLASS_PARTICIPATION),
        class_participation_total=round(
            compute_category_subtotal(structure, CLASS_PARTICIPATION, grades), DISPLAY_DECIMALS),
        exam_scores=raw_scores(EXAM),
        exam_total=round(compute_category_subtotal(structure, EXAM, grades), DISPLAY_DECIMALS),
        midterm_grade=round(compute_midterm_grade(structure, grades), DISPLAY_DECIMALS),
        final_grade=round(final_grade, DISPLAY_DECIMALS),
        remark=get_remark(final_grade),
    )


def build_report_rows(state: GradebookState) -> List[ReportRow]:
    structure = state.structure()
    return [
        build_report_row(student, structure, state.grades.get(student.id))
        for student in state.students
    ]


def remark_distribution(rows: List[ReportRow]) -> List[RemarkCount]:
    """Number of students in each remark band, Excellent first; empty bands count 0."""
    return [
        RemarkCount(remark=remark, count=sum(1 for row in rows if row.remark == remark))
        for remark in REMARKS
    ]


def build_report(state: GradebookState, today: Optional[datetime.date] = None) -> Report:
    rows = build_report_rows(state)
    return Report(
        headers=report_headers(state.structure()),
        rows=rows,
        distribution=remark_distribution(rows),
        filename=export_filename("xlsx", today),
    )


def export_filename(extension: str, today: Optional[datetime.date] = None) -> str:
    today = today or datetime.date.today()
    return f"Grades_Report_{today.isoformat()}.{extension}"


def export_xlsx(state: GradebookState) -> bytes:
    headers = report_headers(state.structure())

    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = SHEET_TITLE

    ws.append(headers)
    for row in build_report_rows(state):
        ws.append(row.cells())

    for index, header in enumerate(headers, start=1):
        width = min(max(len(header), MIN_COLUMN_WIDTH), MAX_COLUMN_WIDTH)
        ws.column_dimensions[get_column_letter(index)].width = width

    output = io.BytesIO()
    wb.save(output)
    return output.getvalue()


def export_csv(state: GradebookState) -> str:
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(report_headers(state.structure()))
    for row in build_report_rows(state):
        writer.writerow(row.cells())
    return output.getvalue()
