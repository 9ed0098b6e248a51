from fastapi import Depends
from sqlalchemy.orm import Session

from roomsched.database import get_db
from roomsched.services.schedule_store import ScheduleStore, log_persisted


def get_store(db: Session = Depends(get_db)) -> ScheduleStore:
    return ScheduleStore(db, on_change=log_persisted)
