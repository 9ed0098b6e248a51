from fastapi import APIRouter, Depends

from roomsched.routers.deps import get_store
from roomsched.services.schedule_store import ScheduleStore
from roomsched.schemas.snapshot import SnapshotOut

router = APIRouter(prefix="/snapshot", tags=["Snapshot"])


@router.get("", response_model=SnapshotOut)
def get_snapshot(store: ScheduleStore = Depends(get_store)):
    return SnapshotOut(**store.snapshot())
