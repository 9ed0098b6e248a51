from typing import Optional

from fastapi import APIRouter, Depends, Query

from roomsched.routers.deps import get_store
from roomsched.services.schedule_store import ScheduleStore
from roomsched.schemas.class_section import (
    ClassSectionIn, ClassSectionOut, ClassSectionListOut,
    BulkClassIn, ScheduleConflictOut,
)



router = APIRouter(prefix="/classes", tags=["Classes"])


@router.get("", response_model=ClassSectionListOut)
def list_classes(
    store: ScheduleStore = Depends(get_store),
    semester_id: Optional[int] = Query(None, description="學期 id"),
    room_id: Optional[int] = Query(None, description="教室 id"),
):
    items = store.list_classes(semester_id=semester_id, room_id=room_id)
    return ClassSectionListOut(
        items=[ClassSectionOut.model_validate(c) for c in items],
        total=len(items),
    )


@router.post("", response_model=ClassSectionOut, status_code=201)
def create_class(body: ClassSectionIn, store: ScheduleStore = Depends(get_store)):
    return ClassSectionOut.model_validate(store.add_class(body))


# 一次新增多筆，任一筆失敗就全部不寫入
@router.post("/bulk", response_model=ClassSectionListOut, status_code=201)
def create_classes_bulk(body: BulkClassIn, store: ScheduleStore = Depends(get_store)):
    added = store.add_classes(body.classes)
    return ClassSectionListOut(
        items=[ClassSectionOut.model_validate(c) for c in added],
        total=len(added),
    )


@router.post("/conflicts", response_model=ScheduleConflictOut)
def check_schedule_conflict(
    body: ClassSectionIn,
    store: ScheduleStore = Depends(get_store),
    exclude_class_id: Optional[int] = Query(None),
):
    r = store.check_schedule_conflict(body, exclude_class_id=exclude_class_id)
    return ScheduleConflictOut(conflict=r.conflict, conflicting_class=r.conflicting_class)


@router.get("/{class_id}", response_model=ClassSectionOut)
def get_class(class_id: int, store: ScheduleStore = Depends(get_store)):
    return ClassSectionOut.model_validate(store.get_class(class_id))


@router.put("/{class_id}", response_model=ClassSectionOut)
def update_class(class_id: int, body: ClassSectionIn, store: ScheduleStore = Depends(get_store)):
    return ClassSectionOut.model_validate(store.edit_class(class_id, body))


@router.delete("/{class_id}")
def delete_class(class_id: int, store: ScheduleStore = Depends(get_store)):
    store.delete_class(class_id)
    return {"detail": "deleted"}
