from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


Weekday = Literal["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]


class ClassSectionIn(BaseModel):
    semester_id: int
    room_id: int
    course_code: str
    course_number: str
    section: str
    instructor: str
    class_name: Optional[str] = None
    class_code: Optional[str] = None
    student_count: Optional[int] = Field(default=None, ge=0)
    start_time: str = Field(description="例如 9:00AM / 2:30PM")
    end_time: str = Field(description="例如 10:15AM")
    days: List[Weekday] = Field(default_factory=list)

    @field_validator("course_code", "course_number", "section", "instructor")
    @classmethod
    def _strip(cls, v: str) -> str:
        return v.strip()


class ClassSectionRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    semester_id: int
    room_id: int
    course_code: str
    course_number: str
    section: str
    instructor: str
    class_name: Optional[str] = None
    class_code: Optional[str] = None
    student_count: Optional[int] = None
    start_time: str
    end_time: str
    days: List[str]


class ClassSectionOut(ClassSectionRecord):
    room_number: Optional[str] = None
    label: str


class ClassSectionListOut(BaseModel):
    items: List[ClassSectionOut]
    total: int


class BulkClassIn(BaseModel):
    classes: List[ClassSectionIn] = Field(min_length=1)


class ScheduleConflictOut(BaseModel):
    conflict: bool
    conflicting_class: Optional[str] = None


class ImportResultOut(BaseModel):
    message: str
    inserted: int
    items: List[ClassSectionOut]
