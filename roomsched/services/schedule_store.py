# roomsched/services/schedule_store.py
"""
Semesters, rooms and classes, with every write-time invariant:

- semester (name, year) unique, at most MAX_STARRED_SEMESTERS starred
- room number unique per semester (case-insensitive)
- (course code, course number, section) unique per semester
- a room with classes can't be deleted, a semester takes its rooms/classes with it
- a class never overlaps another class in the same room on a shared day

Each mutating call is all-or-nothing: checks run first, then one commit.
`on_change` is called after the commit with the collections that changed.
"""
import logging
import threading
from contextlib import contextmanager
from datetime import date
from typing import Callable, Dict, Iterable, List, NamedTuple, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from roomsched.config import settings
from roomsched.errors import (
    AvailabilityConflictError,
    DuplicateError,
    NotFoundError,
    ReferentialIntegrityError,
    SchedulingError,
    StarLimitError,
    ValidationError,
)
from roomsched.models.semester import Semester, SEMESTER_NAMES
from roomsched.models.room import Room
from roomsched.models.class_section import ClassSection
from roomsched.utils.conflict import conflict_label, find_first_conflict
from roomsched.utils.days import WEEKDAYS, normalize_days
from roomsched.utils.rules import TIME_FORMAT_MESSAGE, check_restriction
from roomsched.utils.semester_dates import MAX_YEAR, MIN_YEAR, START_MONTH, default_dates
from roomsched.utils.timefmt import InvalidTimeError, canonical_time, parse_time

logger = logging.getLogger("roomsched.store")

SEMESTERS = "semesters"
ROOMS = "rooms"
CLASSES = "classes"

REQUIRED_CLASS_FIELDS = (
    "semester_id", "room_id",
    "course_code", "course_number", "section", "instructor",
    "start_time", "end_time",
)
OPTIONAL_CLASS_FIELDS = ("class_name", "class_code", "student_count")

# check-then-write must not interleave between requests
_write_lock = threading.RLock()


class Availability(NamedTuple):
    available: bool
    conflict: Optional[str] = None


class ScheduleConflict(NamedTuple):
    conflict: bool
    conflicting_class: Optional[str] = None


def log_persisted(collections: Tuple[str, ...]):
    logger.info("persisted %s", ", ".join(collections))


def _as_dict(class_data) -> dict:
    if hasattr(class_data, "model_dump"):
        return class_data.model_dump()
    return dict(class_data)


def _record(obj) -> dict:
    return {c.key: getattr(obj, c.key) for c in obj.__table__.columns}


def _parse_times(start_time: str, end_time: str) -> Tuple[int, int]:
    try:
        return parse_time(start_time), parse_time(end_time)
    except InvalidTimeError:
        raise ValidationError(TIME_FORMAT_MESSAGE)


def _clean_class(class_data) -> dict:
    """
    Required fields -> day set -> time format / blackout rule -> end after start.
    Returns the row to store, with canonical times and ordered days.
    """
    data = _as_dict(class_data)

    for field in REQUIRED_CLASS_FIELDS:
        v = data.get(field)
        if v is None or (isinstance(v, str) and v.strip() == ""):
            raise ValidationError(f"{field} is required")

    try:
        days = normalize_days(data.get("days"))
    except ValueError as e:
        raise ValidationError(str(e))

    # no stripping: " 9:00AM" is a format error, not a 9:00AM class
    start_time = data["start_time"]
    end_time = data["end_time"]
    rule = check_restriction(days, start_time, end_time)
    if not rule.valid:
        raise ValidationError(rule.message)

    start, end = _parse_times(start_time, end_time)
    if end <= start:
        raise ValidationError("end_time must be after start_time")

    student_count = data.get("student_count")
    if student_count is not None and student_count < 0:
        raise ValidationError("student_count cannot be negative")

    out = {
        "semester_id": data["semester_id"],
        "room_id": data["room_id"],
        "course_code": data["course_code"].strip(),
        "course_number": data["course_number"].strip(),
        "section": data["section"].strip(),
        "instructor": data["instructor"].strip(),
        "start_time": canonical_time(start_time),
        "end_time": canonical_time(end_time),
        "days": days,
    }
    for field in OPTIONAL_CLASS_FIELDS:
        out[field] = data.get(field)
    return out


class ScheduleStore:
    def __init__(self, db: Session, on_change: Optional[Callable[[Tuple[str, ...]], None]] = None):
        self.db = db
        self.on_change = on_change

    @contextmanager
    def _writing(self, *collections: str):
        with _write_lock:
            try:
                yield
                self.db.commit()
            except Exception:
                self.db.rollback()
                raise
        if self.on_change:
            self.on_change(collections)

    # ------------------------------------------------------------------ reads

    def get_semester(self, semester_id: int) -> Semester:
        s = self.db.query(Semester).filter(Semester.id == semester_id).first()
        if not s:
            raise NotFoundError("Semester not found")
        return s

    def list_semesters(self, starred: Optional[bool] = None) -> List[Semester]:
        q = self.db.query(Semester)
        if starred is not None:
            q = q.filter(Semester.is_starred.is_(starred))
        # starred first, then chronological
        return sorted(q.all(), key=lambda s: (not s.is_starred, s.year, START_MONTH.get(s.name, 0)))

    def starred_count(self) -> int:
        return self.db.query(Semester).filter(Semester.is_starred.is_(True)).count()

    def get_room(self, room_id: int) -> Room:
        r = self.db.query(Room).filter(Room.id == room_id).first()
        if not r:
            raise NotFoundError("Room not found")
        return r

    def list_rooms(self, semester_id: Optional[int] = None) -> List[Room]:
        q = self.db.query(Room)
        if semester_id is not None:
            q = q.filter(Room.semester_id == semester_id)
        return q.order_by(Room.id.asc()).all()

    def get_class(self, class_id: int) -> ClassSection:
        c = self.db.query(ClassSection).filter(ClassSection.id == class_id).first()
        if not c:
            raise NotFoundError("Class not found")
        return c

    def list_classes(self, semester_id: Optional[int] = None, room_id: Optional[int] = None) -> List[ClassSection]:
        q = self.db.query(ClassSection)
        if semester_id is not None:
            q = q.filter(ClassSection.semester_id == semester_id)
        if room_id is not None:
            q = q.filter(ClassSection.room_id == room_id)
        return q.order_by(ClassSection.id.asc()).all()

    def snapshot(self) -> Dict[str, List[dict]]:
        """Every collection as plain records, in insertion order."""
        return {
            SEMESTERS: [_record(s) for s in self.db.query(Semester).order_by(Semester.id).all()],
            ROOMS: [_record(r) for r in self.db.query(Room).order_by(Room.id).all()],
            CLASSES: [_record(c) for c in self.db.query(ClassSection).order_by(ClassSection.id).all()],
        }

    # -------------------------------------------------------------- semesters

    def add_semester(self, name: str, year: int, source_semester_id: Optional[int] = None) -> Semester:
        if name not in SEMESTER_NAMES:
            raise ValidationError(f"Semester name must be one of: {', '.join(SEMESTER_NAMES)}")
        if isinstance(year, bool) or not isinstance(year, int):
            raise ValidationError("year must be an integer")
        if not MIN_YEAR <= year <= MAX_YEAR:
            raise ValidationError(f"year must be between {MIN_YEAR} and {MAX_YEAR}")

        collections = (SEMESTERS,) if source_semester_id is None else (SEMESTERS, ROOMS, CLASSES)
        with self._writing(*collections):
            exists = (
                self.db.query(Semester.id)
                .filter(Semester.name == name, Semester.year == year)
                .first()
            )
            if exists:
                raise DuplicateError("A semester with this name and year already exists")

            source = self.get_semester(source_semester_id) if source_semester_id is not None else None

            start_date, end_date = default_dates(name, year)
            semester = Semester(name=name, year=year, start_date=start_date, end_date=end_date, is_starred=False)
            self.db.add(semester)
            self.db.flush()

            if source is not None:
                self._clone_into(source, semester)

        logger.info("semester %s created: %s %s", semester.id, name, year)
        return semester

    def _clone_into(self, source: Semester, target: Semester):
        source_rooms = self.list_rooms(source.id)
        cloned_rooms = [
            Room(semester_id=target.id, room_number=r.room_number, capacity=r.capacity)
            for r in source_rooms
        ]
        self.db.add_all(cloned_rooms)
        self.db.flush()

        # old room id -> new room id, matched by room number
        new_by_number = {r.room_number: r.id for r in cloned_rooms}
        room_map = {r.id: new_by_number[r.room_number] for r in source_rooms}

        source_classes = self.list_classes(semester_id=source.id)
        for c in source_classes:
            self.db.add(ClassSection(
                semester_id=target.id,
                room_id=room_map[c.room_id],
                course_code=c.course_code,
                course_number=c.course_number,
                section=c.section,
                instructor=c.instructor,
                class_name=c.class_name,
                class_code=c.class_code,
                student_count=c.student_count,
                start_time=c.start_time,
                end_time=c.end_time,
                days=list(c.days),
            ))
        self.db.flush()

        logger.info(
            "cloned %d rooms, %d classes from semester %s into %s",
            len(cloned_rooms), len(source_classes), source.id, target.id,
        )

    def delete_semester(self, semester_id: int):
        with self._writing(SEMESTERS, ROOMS, CLASSES):
            semester = self.get_semester(semester_id)
            # 先刪課程再刪教室 (classes -> rooms FK)
            n_classes = (
                self.db.query(ClassSection)
                .filter(ClassSection.semester_id == semester_id)
                .delete(synchronize_session=False)
            )
            n_rooms = (
                self.db.query(Room)
                .filter(Room.semester_id == semester_id)
                .delete(synchronize_session=False)
            )
            self.db.delete(semester)
        logger.info("semester %s deleted with %d rooms, %d classes", semester_id, n_rooms, n_classes)

    def toggle_semester_star(self, semester_id: int) -> Semester:
        with self._writing(SEMESTERS):
            semester = self.get_semester(semester_id)
            if not semester.is_starred and self.starred_count() >= settings.MAX_STARRED_SEMESTERS:
                raise StarLimitError(f"Cannot star more than {settings.MAX_STARRED_SEMESTERS} semesters")
            semester.is_starred = not semester.is_starred
        return semester

    def edit_semester_dates(self, semester_id: int, start_date, end_date) -> Semester:
        try:
            if isinstance(start_date, str):
                start_date = date.fromisoformat(start_date)
            if isinstance(end_date, str):
                end_date = date.fromisoformat(end_date)
        except ValueError:
            raise ValidationError("Dates must be in YYYY-MM-DD format")
        if end_date < start_date:
            raise ValidationError("End date cannot be before start date")

        with self._writing(SEMESTERS):
            semester = self.get_semester(semester_id)
            semester.start_date = start_date
            semester.end_date = end_date
        return semester

    # ------------------------------------------------------------------ rooms

    @staticmethod
    def _clean_room(room_number: str, capacity: int) -> Tuple[str, int]:
        room_number = (room_number or "").strip()
        if not room_number:
            raise ValidationError("room_number is required")
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
            raise ValidationError("capacity must be a positive integer")
        return room_number, capacity

    def _check_room_unique(self, semester_id: int, room_number: str, exclude_room_id: Optional[int] = None):
        q = self.db.query(Room.id).filter(
            Room.semester_id == semester_id,
            func.lower(Room.room_number) == room_number.lower(),
        )
        if exclude_room_id is not None:
            q = q.filter(Room.id != exclude_room_id)
        if q.first():
            raise DuplicateError("A room with this number already exists in this semester")

    def add_room(self, semester_id: int, room_number: str, capacity: int) -> Room:
        room_number, capacity = self._clean_room(room_number, capacity)
        with self._writing(ROOMS):
            self.get_semester(semester_id)
            self._check_room_unique(semester_id, room_number)
            room = Room(semester_id=semester_id, room_number=room_number, capacity=capacity)
            self.db.add(room)
        return room

    def edit_room(self, room_id: int, room_number: str, capacity: int) -> Room:
        room_number, capacity = self._clean_room(room_number, capacity)
        with self._writing(ROOMS):
            room = self.get_room(room_id)
            self._check_room_unique(room.semester_id, room_number, exclude_room_id=room_id)
            room.room_number = room_number
            room.capacity = capacity
        return room

    def delete_room(self, room_id: int):
        with self._writing(ROOMS):
            room = self.get_room(room_id)
            in_use = self.db.query(ClassSection.id).filter(ClassSection.room_id == room_id).first()
            if in_use:
                raise ReferentialIntegrityError("Cannot delete room - there are classes assigned to it")
            self.db.delete(room)

    # --------------------------------------------------------------- classes

    def _check_class_refs(self, data: dict) -> Room:
        self.get_semester(data["semester_id"])
        room = self.get_room(data["room_id"])
        if room.semester_id != data["semester_id"]:
            raise ValidationError("Room does not belong to this semester")
        return room

    def _check_class_unique(self, data: dict, exclude_class_id: Optional[int] = None):
        q = self.db.query(ClassSection.id).filter(
            ClassSection.semester_id == data["semester_id"],
            func.lower(ClassSection.course_code) == data["course_code"].lower(),
            ClassSection.course_number == data["course_number"],
            func.lower(ClassSection.section) == data["section"].lower(),
        )
        if exclude_class_id is not None:
            q = q.filter(ClassSection.id != exclude_class_id)
        if q.first():
            raise DuplicateError(
                "A class with this course code, number, and section already exists in this semester"
            )

    def _place_class(self, data: dict, exclude_class_id: Optional[int] = None):
        self._check_class_refs(data)
        self._check_class_unique(data, exclude_class_id)
        availability = self.check_room_availability(
            data["room_id"], data["start_time"], data["end_time"], data["days"], exclude_class_id,
        )
        if not availability.available:
            raise AvailabilityConflictError(availability.conflict)

    def add_class(self, class_data) -> ClassSection:
        data = _clean_class(class_data)
        with self._writing(CLASSES):
            self._place_class(data)
            c = ClassSection(**data)
            self.db.add(c)
            label = c.label
        logger.info("class %s added to room %s", label, data["room_id"])
        return c

    def add_classes(self, batch: Iterable) -> List[ClassSection]:
        """
        All or nothing. Each class is checked against what is stored plus
        the earlier members of the batch.
        """
        added = []
        with self._writing(CLASSES):
            for i, class_data in enumerate(batch, start=1):
                try:
                    data = _clean_class(class_data)
                    self._place_class(data)
                except SchedulingError as e:
                    e.message = f"Class {i}: {e.message}"
                    e.args = (e.message,)
                    raise
                c = ClassSection(**data)
                self.db.add(c)
                self.db.flush()
                added.append(c)
        logger.info("%d classes added", len(added))
        return added

    def edit_class(self, class_id: int, class_data) -> ClassSection:
        data = _clean_class(class_data)
        with self._writing(CLASSES):
            c = self.get_class(class_id)
            self._place_class(data, exclude_class_id=class_id)
            for k, v in data.items():
                setattr(c, k, v)
        return c

    def delete_class(self, class_id: int):
        with self._writing(CLASSES):
            c = self.get_class(class_id)
            self.db.delete(c)

    # ----------------------------------------------------------- availability

    def check_room_availability(
        self,
        room_id: int,
        start_time: str,
        end_time: str,
        days: Iterable[str],
        exclude_class_id: Optional[int] = None,
    ) -> Availability:
        """
        Not filtered by semester: room ids are never shared between
        semesters, so the room already pins it down.
        """
        start, end = _parse_times(start_time, end_time)

        q = self.db.query(ClassSection).filter(ClassSection.room_id == room_id)
        if exclude_class_id is not None:
            q = q.filter(ClassSection.id != exclude_class_id)

        hit = find_first_conflict(q.order_by(ClassSection.id.asc()).all(), start, end, days)
        if hit is not None:
            return Availability(False, conflict_label(hit))
        return Availability(True)

    def check_schedule_conflict(self, class_data, exclude_class_id: Optional[int] = None) -> ScheduleConflict:
        """Same overlap rule, scoped to the whole semester instead of one room."""
        data = _as_dict(class_data)
        start, end = _parse_times(data.get("start_time"), data.get("end_time"))

        q = self.db.query(ClassSection).filter(ClassSection.semester_id == data.get("semester_id"))
        if exclude_class_id is not None:
            q = q.filter(ClassSection.id != exclude_class_id)

        hit = find_first_conflict(q.order_by(ClassSection.id.asc()).all(), start, end, data.get("days") or [])
        if hit is not None:
            return ScheduleConflict(True, conflict_label(hit))
        return ScheduleConflict(False)

    def available_rooms(
        self,
        semester_id: int,
        start_time: str,
        end_time: str,
        days: Iterable[str],
        exclude_class_id: Optional[int] = None,
    ) -> List[Room]:
        self.get_semester(semester_id)
        days = list(days)
        return [
            r for r in self.list_rooms(semester_id)
            if self.check_room_availability(r.id, start_time, end_time, days, exclude_class_id).available
        ]

    def room_schedule(self, room_id: int) -> Dict[str, List[ClassSection]]:
        """
        {"Monday": [...], ..., "Friday": [...]}, each day sorted by start time.
        """
        self.get_room(room_id)
        grid: Dict[str, List[ClassSection]] = {d: [] for d in WEEKDAYS}
        classes = sorted(self.list_classes(room_id=room_id), key=lambda c: parse_time(c.start_time))
        for c in classes:
            for d in c.days:
                grid.setdefault(d, []).append(c)
        return grid
