"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from request_tracker.config import settings
from request_tracker.database import Base, create_db_engine, create_session_factory
from request_tracker.errors import TrackerError

# Import routers
from request_tracker.routers import requests, status, students, users

# Import all models so Base.metadata knows about them
from request_tracker.models.user import User, StudentProfile  # noqa: F401
from request_tracker.models.request import Request as EnrollmentRequest, SubjectLine  # noqa: F401
from request_tracker.models.status_history import StatusHistoryEntry  # noqa: F401

logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the database engine at startup and dispose it at shutdown."""
    engine = create_db_engine(settings.DATABASE_URL)
    if settings.DATABASE_URL.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    logger.info("Database engine opened (%s)", engine.url.render_as_string(hide_password=True))
    try:
        yield
    finally:
        engine.dispose()
        logger.info("Database engine disposed")


app = FastAPI(
    title="Enrollment Request Tracker",
    description="Overload, override and manual-tagging requests with a reviewed status workflow",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TrackerError)
async def tracker_error_handler(request: Request, exc: TrackerError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed input is a 400, not FastAPI's default 422."""
    return JSONResponse(status_code=400, content={"detail": "Invalid request", "errors": jsonable_encoder(exc.errors())})


# Register routers
app.include_router(users.router, prefix="/api/users", tags=["Users"])
app.include_router(requests.router, prefix="/api/requests", tags=["Requests"])
app.include_router(status.router, prefix="/api/status", tags=["Status"])
app.include_router(students.router, prefix="/api/students", tags=["Students"])


@app.get("/api/health")
def health_check():
    return {"status": "ok"}
