from __future__ import annotations
from collections import OrderedDict
from typing import Iterable, List, Dict, Any
from io import BytesIO
from datetime import datetime

from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.styles import Font, Alignment
from openpyxl.worksheet.worksheet import Worksheet

# excel_import.read_class_rows reads these same headers back
HEADERS = (
    "Room Number",
    "Course Code",
    "Course Number",
    "Section",
    "Instructor",
    "Class Name",
    "Class Code",
    "Student Count",
    "Start Time",
    "End Time",
    "Days",
)

MAX_COLUMN_WIDTH = 40


def schedule_rows(classes: Iterable) -> List[Dict[str, Any]]:
    """One row per class, sorted by room then insertion order."""
    rows = []
    for c in sorted(classes, key=lambda c: ((c.room_number or "").lower(), c.id)):
        rows.append(OrderedDict(zip(HEADERS, [
            c.room_number or "",
            c.course_code,
            c.course_number,
            c.section,
            c.instructor,
            c.class_name or "",
            c.class_code or "",
            c.student_count,
            c.start_time,
            c.end_time,
            ", ".join(c.days),
        ])))
    return rows


def _fit_columns(ws: Worksheet):
    for col_idx, column in enumerate(ws.iter_cols(values_only=True), start=1):
        longest = max((len(str(v)) for v in column if v is not None), default=0)
        ws.column_dimensions[get_column_letter(col_idx)].width = min(longest + 2, MAX_COLUMN_WIDTH)


def rows_to_xlsx_bytes(rows: List[Dict[str, Any]], sheet_name: str = "Schedule") -> bytes:
    """
    rows: list of dict keyed by HEADERS; an empty list still gets the header row
    """
    wb = Workbook()
    ws = wb.active
    ws.title = sheet_name[:31]

    ws.append(list(HEADERS))
    for cell in ws[1]:
        cell.font = Font(bold=True)
        cell.alignment = Alignment(horizontal="center", vertical="center")
    ws.freeze_panes = "A2"

    for r in rows:
        ws.append([r.get(h) for h in HEADERS])

    _fit_columns(ws)

    buf = BytesIO()
    wb.save(buf)
    return buf.getvalue()


def make_filename(prefix: str = "schedule") -> str:
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"{prefix}_{ts}.xlsx"
