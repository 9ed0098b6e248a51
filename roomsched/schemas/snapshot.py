from typing import List
from pydantic import BaseModel

from roomsched.schemas.semester import SemesterOut
from roomsched.schemas.room import RoomOut
from roomsched.schemas.class_section import ClassSectionRecord


class SnapshotOut(BaseModel):
    semesters: List[SemesterOut] = []
    rooms: List[RoomOut] = []
    classes: List[ClassSectionRecord] = []
