from sqlalchemy import Column, Integer, String, ForeignKey, JSON
from sqlalchemy.orm import relationship
from roomsched.database import Base
from roomsched.utils.conflict import conflict_label


class ClassSection(Base):
    __tablename__ = "classes"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    semester_id = Column(Integer, ForeignKey("semesters.id", ondelete="CASCADE"), nullable=False, index=True)
    # no cascade: a room can't be deleted while classes point at it
    room_id = Column(Integer, ForeignKey("rooms.id"), nullable=False, index=True)

    course_code = Column(String(20), nullable=False)
    course_number = Column(String(20), nullable=False)
    section = Column(String(20), nullable=False)
    instructor = Column(String(100), nullable=False)

    class_name = Column(String(255))
    class_code = Column(String(50))
    student_count = Column(Integer)

    # canonical "9:05AM" strings
    start_time = Column(String(8), nullable=False)
    end_time = Column(String(8), nullable=False)
    # ["Monday", "Wednesday"]
    days = Column(JSON, nullable=False)

    semester = relationship("Semester", back_populates="classes")
    room = relationship("Room", back_populates="classes")

    @property
    def label(self) -> str:
        return conflict_label(self)

    @property
    def room_number(self):
        return self.room.room_number if self.room else None
