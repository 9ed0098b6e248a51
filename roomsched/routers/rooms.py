from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from roomsched.routers.deps import get_store
from roomsched.services.schedule_store import ScheduleStore
from roomsched.schemas.room import (
    RoomCreate, RoomUpdate, RoomOut,
    AvailabilityQuery, AvailabilityOut, RoomScheduleOut,
)
from roomsched.schemas.class_section import ClassSectionOut


router = APIRouter(prefix="/rooms", tags=["Rooms"])


@router.get("", response_model=List[RoomOut])
def list_rooms(
    store: ScheduleStore = Depends(get_store),
    semester_id: Optional[int] = Query(None, description="學期 id"),
):
    return [RoomOut.model_validate(r) for r in store.list_rooms(semester_id)]


@router.post("", response_model=RoomOut, status_code=201)
def create_room(body: RoomCreate, store: ScheduleStore = Depends(get_store)):
    r = store.add_room(body.semester_id, body.room_number, body.capacity)
    return RoomOut.model_validate(r)


@router.get("/{room_id}", response_model=RoomOut)
def get_room(room_id: int, store: ScheduleStore = Depends(get_store)):
    return RoomOut.model_validate(store.get_room(room_id))


@router.put("/{room_id}", response_model=RoomOut)
def update_room(room_id: int, body: RoomUpdate, store: ScheduleStore = Depends(get_store)):
    r = store.edit_room(room_id, body.room_number, body.capacity)
    return RoomOut.model_validate(r)


@router.delete("/{room_id}")
def delete_room(room_id: int, store: ScheduleStore = Depends(get_store)):
    store.delete_room(room_id)
    return {"detail": "deleted"}


@router.get("/{room_id}/schedule", response_model=RoomScheduleOut)
def room_schedule(room_id: int, store: ScheduleStore = Depends(get_store)):
    room = store.get_room(room_id)
    grid = store.room_schedule(room_id)
    return RoomScheduleOut(
        room=RoomOut.model_validate(room),
        grid={d: [ClassSectionOut.model_validate(c) for c in items] for d, items in grid.items()},
    )


@router.post("/{room_id}/availability", response_model=AvailabilityOut)
def room_availability(room_id: int, body: AvailabilityQuery, store: ScheduleStore = Depends(get_store)):
    store.get_room(room_id)
    a = store.check_room_availability(room_id, body.start_time, body.end_time, body.days, body.exclude_class_id)
    return AvailabilityOut(available=a.available, conflict=a.conflict)
