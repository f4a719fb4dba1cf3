from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse
from routes.deps import current_user
from routes.summary import load_class_summary
import storage
import csv
import io
import logging
import openpyxl

logger = logging.getLogger(__name__)

router = APIRouter()

GRADE_COLUMNS = ["title", "category", "points_earned", "points_possible", "due_date"]
SUMMARY_COLUMNS = ["category", "weight_percent", "earned", "possible", "percent"]


def _build_rows(grades: list, summary) -> tuple:
    """Return (grade rows, summary rows) as lists of plain cell values."""
    grade_rows = [[g.get(col) if g.get(col) is not None else "" for col in GRADE_COLUMNS] for g in grades]

    summary_rows = []
    for row in summary.categories:
        summary_rows.append([
            row.name,
            row.weight_percent,
            row.earned,
            row.possible,
            round(row.percent, 2) if row.percent is not None else "",
        ])
    overall = summary.overall_percent
    summary_rows.append(["Overall", summary.sum_weights, "", "", round(overall, 2) if overall is not None else ""])
    return grade_rows, summary_rows


def _load(user_id: str, class_id: str):
    try:
        klass = storage.get_class(user_id, class_id)
        summary = load_class_summary(user_id, class_id)
    except storage.NotFoundError as e:
        logger.warning("export — %s", e)
        raise HTTPException(status_code=404, detail="Class not found.")
    grades = storage.list_grades(user_id, class_id)
    return klass, grades, summary


def _filename(klass: dict, ext: str) -> str:
    safe = "".join(ch if (ch.isascii() and ch.isalnum()) or ch in "-_" else "_" for ch in klass["name"]) or "class"
    return f"{safe}_grades.{ext}"


@router.get("/me/classes/{class_id}/export/csv")
def export_class_csv(class_id: str, user_id: str = Depends(current_user)):
    klass, grades, summary = _load(user_id, class_id)
    grade_rows, summary_rows = _build_rows(grades, summary)

    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(GRADE_COLUMNS)
    writer.writerows(grade_rows)
    writer.writerow([])
    writer.writerow(SUMMARY_COLUMNS)
    writer.writerows(summary_rows)
    output.seek(0)

    logger.info("export csv — class %s: %d grades, %d summary rows", class_id, len(grade_rows), len(summary_rows))
    return StreamingResponse(
        iter([output.getvalue()]),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={_filename(klass, 'csv')}"},
    )


@router.get("/me/classes/{class_id}/export/xlsx")
def export_class_xlsx(class_id: str, user_id: str = Depends(current_user)):
    klass, grades, summary = _load(user_id, class_id)
    grade_rows, summary_rows = _build_rows(grades, summary)

    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "Grades"
    ws.append(GRADE_COLUMNS)
    for row in grade_rows:
        ws.append(row)

    ws_summary = wb.create_sheet("Summary")
    ws_summary.append(SUMMARY_COLUMNS)
    for row in summary_rows:
        ws_summary.append(row)

    output = io.BytesIO()
    wb.save(output)
    output.seek(0)

    logger.info("export xlsx — class %s: %d grades, %d summary rows", class_id, len(grade_rows), len(summary_rows))
    return StreamingResponse(
        iter([output.getvalue()]),
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f"attachment; filename={_filename(klass, 'xlsx')}"},
    )
