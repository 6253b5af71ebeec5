# backend/reservations/main.py

import logging
import time

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from sqlalchemy.exc import SQLAlchemyError

from . import models  # noqa: F401  registers the tables on Base.metadata
from .api import api_booking, api_calendar, api_option
from .core.config import settings
from .core.observability import setup_logging, setup_tracer
from .database import Base, engine, get_db_session
from .db_utils import ping_database, seed_default_options
from .services.validation import issues_from_errors
from .utils.errors import (
    VALIDATION_MESSAGE,
    ReservationError,
    UnknownError,
    error_response,
)

# Configure logging before creating any loggers
setup_logging()
logger = logging.getLogger(__name__)

_BOOT_TS = time.time()

Base.metadata.create_all(bind=engine)

app = FastAPI(title=settings.PROJECT_NAME, default_response_class=ORJSONResponse)
setup_tracer(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials="*" not in settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)
logger.info("CORS origins set to: %s", settings.CORS_ORIGINS)


@app.middleware("http")
async def catch_exceptions(request: Request, call_next):
    """Return the JSON error envelope for anything the handlers did not map."""
    try:
        return await call_next(request)
    except Exception as exc:
        logger.exception(
            "Unhandled error at %s: %s",
            request.url.path,
            exc,
            extra={"request_method": request.method, "request_url": str(request.url)},
        )
        unknown = UnknownError()
        return error_response(unknown.message, code=unknown.status_code)


@app.exception_handler(ReservationError)
async def reservation_exception_handler(request: Request, exc: ReservationError):
    return error_response(exc.message, exc.details, exc.status_code)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed JSON, non-object bodies and bad query values share the 400 envelope."""
    issues = issues_from_errors(exc.errors())
    logger.warning("Validation error at %s: %s", request.url.path, issues)
    return error_response(VALIDATION_MESSAGE, issues, status.HTTP_400_BAD_REQUEST)


@app.get("/healthz", tags=["health"])
async def healthz():
    """Readiness probe: database ping."""
    try:
        ping_database(engine)
    except SQLAlchemyError as exc:
        logger.warning("Health check failed: %s", exc)
        return ORJSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "error"},
            headers={"Cache-Control": "no-store"},
        )
    return ORJSONResponse(
        content={"status": "ok", "uptime_s": round(time.time() - _BOOT_TS, 1)},
        headers={"Cache-Control": "no-store"},
    )


api_prefix = settings.API_PREFIX  # usually "/api"

app.include_router(api_booking.router, prefix=f"{api_prefix}/bookings", tags=["bookings"])
app.include_router(api_option.router, prefix=f"{api_prefix}/options", tags=["options"])
app.include_router(api_calendar.router, prefix=f"{api_prefix}/calendar", tags=["calendar"])


@app.on_event("startup")
def seed_options_on_startup() -> None:
    if not settings.SEED_DEFAULT_OPTIONS:
        return
    with get_db_session() as db:
        seed_default_options(db)


@app.get("/")
async def root():
    return {"message": f"Welcome to {settings.PROJECT_NAME}"}
