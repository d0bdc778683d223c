from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from typing import List
import csv
import io
import logging
import openpyxl

from gradebook_api import operations
from gradebook_api.models import Student
from gradebook_api.storage import Store, get_store

logger = logging.getLogger(__name__)

router = APIRouter()


def _build_rows(students: List[Student]):
    """One row per (student, subject); students without subjects get a single blank-subject row."""
    width = max(
        (len(sub.grades) for st in students for sub in st.subjects),
        default=0,
    )
    grade_columns = [f"grade_{i + 1}" for i in range(width)]

    rows = []
    for student in students:
        subjects = student.subjects or [None]
        for subject in subjects:
            row = {"id": student.id, "name": student.name, "subject": "", "average": ""}
            grades = []
            if subject is not None:
                row["subject"] = subject.name
                grades = subject.grades
                if grades:
                    row["average"] = round(sum(grades) / len(grades), 2)
            for i, col in enumerate(grade_columns):
                row[col] = grades[i] if i < len(grades) else ""
            rows.append(row)

    return rows, grade_columns


def _grade_table(store: Store):
    """Header plus one list of cell values per row, for both export formats."""
    rows, grade_columns = _build_rows(operations.list_students(store))
    headers = ["id", "name", "subject", "average"] + grade_columns
    return headers, [[row[h] for h in headers] for row in rows]


def _attachment(content, media_type: str, filename: str) -> StreamingResponse:
    return StreamingResponse(
        iter([content]),
        media_type=media_type,
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@router.get("/export/grades/csv")
def export_grades_csv(store: Store = Depends(get_store)):
    headers, table = _grade_table(store)
    logger.info("GET /export/grades/csv: %d rows", len(table))

    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(headers)
    writer.writerows(table)
    return _attachment(output.getvalue(), "text/csv", "grades.csv")


@router.get("/export/grades/xlsx")
def export_grades_xlsx(store: Store = Depends(get_store)):
    headers, table = _grade_table(store)
    logger.info("GET /export/grades/xlsx: %d rows", len(table))

    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "Grades"
    for values in [headers] + table:
        ws.append(values)

    output = io.BytesIO()
    wb.save(output)
    return _attachment(
        output.getvalue(),
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        "grades.xlsx",
    )
