from datetime import date
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from roomsched.utils.semester_dates import MAX_YEAR, MIN_YEAR


SemesterName = Literal["Spring", "Summer I", "Summer II", "Fall"]


class SemesterCreate(BaseModel):
    name: SemesterName
    year: int = Field(ge=MIN_YEAR, le=MAX_YEAR)
    # 從既有學期複製教室與課程
    source_semester_id: Optional[int] = None


class SemesterDatesUpdate(BaseModel):
    start_date: date
    end_date: date

    @model_validator(mode="after")
    def _validate_range(self):
        if self.end_date < self.start_date:
            raise ValueError("End date cannot be before start date")
        return self


class SemesterOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: SemesterName
    year: int
    start_date: date
    end_date: date
    is_starred: bool


class SemesterListOut(BaseModel):
    items: List[SemesterOut]
    total: int
    starred: int
    max_starred: int
