from sqlalchemy import Column, Integer, String, Date, Boolean, UniqueConstraint
from sqlalchemy.orm import relationship
from roomsched.database import Base


# Spring / Summer I / Summer II / Fall
SEMESTER_NAMES = ("Spring", "Summer I", "Summer II", "Fall")


class Semester(Base):
    __tablename__ = "semesters"
    __table_args__ = (
        UniqueConstraint("name", "year", name="uq_semester_name_year"),
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(20), nullable=False)
    year = Column(Integer, nullable=False)

    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)

    is_starred = Column(Boolean, nullable=False, default=False)

    # relationship
    rooms = relationship("Room", back_populates="semester", order_by="Room.id", passive_deletes=True)
    classes = relationship("ClassSection", back_populates="semester", order_by="ClassSection.id", passive_deletes=True)
