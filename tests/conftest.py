import os
import tempfile

# must be set before roomsched.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="roomsched-logs-"))

import pytest
from fastapi.testclient import TestClient

from roomsched.database import Base, SessionLocal, engine
from roomsched.main import app
from roomsched.services.schedule_store import ScheduleStore


@pytest.fixture(autouse=True)
def _tables():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def store(db):
    return ScheduleStore(db)


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


def class_data(semester_id, room_id, **overrides):
    data = {
        "semester_id": semester_id,
        "room_id": room_id,
        "course_code": "CS",
        "course_number": "101",
        "section": "A",
        "instructor": "Smith",
        "start_time": "9:00AM",
        "end_time": "10:00AM",
        "days": ["Monday"],
    }
    data.update(overrides)
    return data
