from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field

from roomsched.schemas.class_section import ClassSectionOut, Weekday


class RoomCreate(BaseModel):
    semester_id: int
    room_number: str = Field(min_length=1, max_length=50)
    capacity: int = Field(gt=0)


class RoomUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    room_number: str = Field(min_length=1, max_length=50)
    capacity: int = Field(gt=0)


class RoomOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    semester_id: int
    room_number: str
    capacity: int


class AvailabilityQuery(BaseModel):
    start_time: str
    end_time: str
    days: List[Weekday] = Field(min_length=1)
    exclude_class_id: Optional[int] = None


class AvailabilityOut(BaseModel):
    available: bool
    conflict: Optional[str] = None


class RoomScheduleOut(BaseModel):
    room: RoomOut
    grid: Dict[str, List[ClassSectionOut]]  # "Monday".."Friday"
