from typing import Dict, List, Optional

import pandas as pd

REQUIRED_HEADERS = (
    "Room Number",
    "Course Code",
    "Course Number",
    "Section",
    "Instructor",
    "Start Time",
    "End Time",
    "Days",
)


def to_str(v) -> Optional[str]:
    if v is None or pd.isna(v):
        return None
    s = str(v).strip()
    return None if s == "" or s.lower() == "nan" else s


def to_int(v) -> Optional[int]:
    if v is None or pd.isna(v):
        return None
    try:
        return int(float(v))
    except (TypeError, ValueError):
        return None


def parse_days(text: Optional[str]) -> List[str]:
    # "monday, Wednesday" -> ["Monday", "Wednesday"]
    if not text:
        return []
    return [d.strip().capitalize() for d in text.split(",") if d.strip()]


def read_class_rows(file) -> List[Dict]:
    """
    One dict per non-blank sheet row; `room_number` still needs resolving
    to a room id by the caller.
    """
    df = pd.read_excel(file, dtype=str)
    df.columns = [str(c).strip() for c in df.columns]

    missing = [h for h in REQUIRED_HEADERS if h not in df.columns]
    if missing:
        raise ValueError(f"Missing columns: {', '.join(missing)}")

    rows = []
    for _, row in df.iterrows():
        if all(to_str(row.get(h)) is None for h in df.columns):
            continue
        rows.append({
            "room_number": to_str(row.get("Room Number")),
            "course_code": to_str(row.get("Course Code")) or "",
            "course_number": to_str(row.get("Course Number")) or "",
            "section": to_str(row.get("Section")) or "",
            "instructor": to_str(row.get("Instructor")) or "",
            "class_name": to_str(row.get("Class Name")),
            "class_code": to_str(row.get("Class Code")),
            "student_count": to_int(row.get("Student Count")),
            "start_time": to_str(row.get("Start Time")) or "",
            "end_time": to_str(row.get("End Time")) or "",
            "days": parse_days(to_str(row.get("Days"))),
        })
    return rows
