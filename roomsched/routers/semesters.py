from typing import List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from fastapi.responses import StreamingResponse

from roomsched.config import settings
from roomsched.routers.deps import get_store
from roomsched.services.schedule_store import ScheduleStore
from roomsched.schemas.semester import SemesterCreate, SemesterDatesUpdate, SemesterOut, SemesterListOut
from roomsched.schemas.room import RoomOut
from roomsched.schemas.class_section import ClassSectionOut, ImportResultOut, Weekday
from roomsched.utils.excel_export import schedule_rows, rows_to_xlsx_bytes, make_filename
from roomsched.utils.excel_import import read_class_rows

import logging
logger = logging.getLogger("roomsched.http")


router = APIRouter(prefix="/semesters", tags=["Semesters"])


@router.get("", response_model=SemesterListOut)
def list_semesters(
    store: ScheduleStore = Depends(get_store),
    starred: Optional[bool] = Query(None, description="只看(不看)加星號的學期"),
):
    items = store.list_semesters(starred=starred)
    return SemesterListOut(
        items=[SemesterOut.model_validate(s) for s in items],
        total=len(items),
        starred=store.starred_count(),
        max_starred=settings.MAX_STARRED_SEMESTERS,
    )


@router.post("", response_model=SemesterOut, status_code=201)
def create_semester(body: SemesterCreate, store: ScheduleStore = Depends(get_store)):
    s = store.add_semester(body.name, body.year, body.source_semester_id)
    return SemesterOut.model_validate(s)


@router.get("/{semester_id}", response_model=SemesterOut)
def get_semester(semester_id: int, store: ScheduleStore = Depends(get_store)):
    return SemesterOut.model_validate(store.get_semester(semester_id))


@router.delete("/{semester_id}")
def delete_semester(semester_id: int, store: ScheduleStore = Depends(get_store)):
    store.delete_semester(semester_id)
    return {"detail": "deleted"}


@router.post("/{semester_id}/star", response_model=SemesterOut)
def toggle_star(semester_id: int, store: ScheduleStore = Depends(get_store)):
    return SemesterOut.model_validate(store.toggle_semester_star(semester_id))


@router.put("/{semester_id}/dates", response_model=SemesterOut)
def edit_dates(semester_id: int, body: SemesterDatesUpdate, store: ScheduleStore = Depends(get_store)):
    s = store.edit_semester_dates(semester_id, body.start_date, body.end_date)
    return SemesterOut.model_validate(s)


#新增課程時可選的教室
@router.get("/{semester_id}/available-rooms", response_model=List[RoomOut])
def available_rooms(
    semester_id: int,
    store: ScheduleStore = Depends(get_store),
    start_time: str = Query(..., description="例如 9:00AM"),
    end_time: str = Query(..., description="例如 10:15AM"),
    days: List[Weekday] = Query(..., description="多選: Monday, Wednesday..."),
    exclude_class_id: Optional[int] = Query(None, description="編輯中的課程，不跟自己衝突"),
):
    rooms = store.available_rooms(semester_id, start_time, end_time, days, exclude_class_id)
    return [RoomOut.model_validate(r) for r in rooms]


@router.get("/{semester_id}/export")
def export_schedule_excel(semester_id: int, store: ScheduleStore = Depends(get_store)):
    """
    匯出學期課表成 Excel（.xlsx），欄位與匯入相同
    """
    semester = store.get_semester(semester_id)
    classes = store.list_classes(semester_id=semester_id)

    xlsx_bytes = rows_to_xlsx_bytes(schedule_rows(classes), sheet_name=f"{semester.name} {semester.year}")
    filename = make_filename(f"schedule_{semester.name.replace(' ', '_')}_{semester.year}")

    return StreamingResponse(
        iter([xlsx_bytes]),
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


#匯入課程 (全部成功或全部不寫入)
@router.post("/{semester_id}/classes/import", response_model=ImportResultOut)
def import_classes_excel(
    semester_id: int,
    file: UploadFile = File(...),
    store: ScheduleStore = Depends(get_store),
):
    store.get_semester(semester_id)
    try:
        rows = read_class_rows(file.file)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if not rows:
        raise HTTPException(status_code=400, detail="No classes found in file")

    rooms_by_number = {r.room_number.lower(): r.id for r in store.list_rooms(semester_id)}

    batch = []
    for i, row in enumerate(rows, start=1):
        room_number = row.pop("room_number")
        room_id = rooms_by_number.get((room_number or "").lower())
        if room_id is None:
            raise HTTPException(status_code=400, detail=f"Class {i}: unknown room {room_number!r}")
        batch.append({**row, "semester_id": semester_id, "room_id": room_id})

    added = store.add_classes(batch)
    logger.info("imported %d classes into semester %s from %s", len(added), semester_id, file.filename)
    return ImportResultOut(
        message="Import completed!",
        inserted=len(added),
        items=[ClassSectionOut.model_validate(c) for c in added],
    )
