from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from roomsched.database import Base


class Room(Base):
    __tablename__ = "rooms"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    semester_id = Column(Integer, ForeignKey("semesters.id", ondelete="CASCADE"), nullable=False, index=True)

    room_number = Column(String(50), nullable=False)
    capacity = Column(Integer, nullable=False)

    semester = relationship("Semester", back_populates="rooms")
    classes = relationship("ClassSection", back_populates="room", order_by="ClassSection.id", passive_deletes=True)
