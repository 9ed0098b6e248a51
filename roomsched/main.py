# roomsched/main.py
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from roomsched.config import settings
from roomsched.database import Base, engine
from roomsched.errors import SchedulingError
from roomsched.models import semester, room, class_section  # noqa: F401  register tables
from roomsched.routers import semesters, rooms, classes, snapshot

import time
import logging
from roomsched.logging_config import setup_logging


setup_logging()
logger = logging.getLogger("roomsched.http")


# 建立資料表（若不存在）
Base.metadata.create_all(bind=engine)

app = FastAPI(title="Room Scheduler", version="1.0.0")


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    try:
        response = await call_next(request)
        ms = int((time.time() - start) * 1000)
        logger.info("%s %s -> %s (%dms)", request.method, request.url.path, response.status_code, ms)
        return response
    except Exception:
        ms = int((time.time() - start) * 1000)
        logger.exception("Unhandled error %s %s (%dms)", request.method, request.url.path, ms)
        raise


@app.exception_handler(SchedulingError)
async def scheduling_error_handler(request: Request, exc: SchedulingError):
    logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(semesters.router)
app.include_router(rooms.router)
app.include_router(classes.router)
app.include_router(snapshot.router)

@app.get("/")
def root():
    return {"message": "Room scheduler is running!"}
