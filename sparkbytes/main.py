"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from sparkbytes.config import settings
from sparkbytes.database import Base, engine
from sparkbytes.logging_config import setup_logging

# Import routers
from sparkbytes.routers import events, guests, profiles, favorites, comments, alerts, auth

# Import all models so Base.metadata knows about them
from sparkbytes.models.event import Event                          # noqa: F401
from sparkbytes.models.guest import Guest                          # noqa: F401
from sparkbytes.models.profile import Profile                      # noqa: F401
from sparkbytes.models.favorite import Favorite                    # noqa: F401
from sparkbytes.models.comment import Comment                      # noqa: F401
from sparkbytes.models.alert import Alert                          # noqa: F401
from sparkbytes.models.verification_code import VerificationCode   # noqa: F401

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    setup_logging()
    # Create database tables on startup (for SQLite dev mode).
    if settings.DATABASE_URL.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)
    yield


app = FastAPI(
    title="Spark! Bytes",
    description="Campus free-food event discovery and RSVP API",
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


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({"success": False, "message": message}, status_code=status_code)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render every HTTP error (domain errors included) as a failure envelope."""
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, message)
    return _error(exc.status_code, message)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"Invalid {location}: {first.get('msg')}" if location else str(first.get("msg"))
    else:
        message = "Invalid request"
    return _error(400, message)


@app.exception_handler(OperationalError)
async def operational_error_handler(request: Request, exc: OperationalError):
    raw = str(exc.orig) if getattr(exc, "orig", None) else str(exc)
    if "database is locked" in raw.lower():
        logger.error("SQLite database is locked while handling %s %s", request.method, request.url.path)
        return _error(503, "The database is busy, please try again shortly")
    logger.error("Operational database error on %s %s: %s", request.method, request.url.path, raw)
    return _error(500, "A database error occurred, please try again")


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Database error while processing %s %s", request.method, request.url.path)
    return _error(500, "A database error occurred, please try again")


# Register routers
app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
app.include_router(profiles.router, prefix="/api/profiles", tags=["Profiles"])
app.include_router(events.router, prefix="/api/events", tags=["Events"])
app.include_router(comments.router, prefix="/api/events", tags=["Comments"])
app.include_router(guests.router, prefix="/api/guests", tags=["Guests"])
app.include_router(favorites.router, prefix="/api/favorites", tags=["Favorites"])
app.include_router(alerts.router, prefix="/api/alerts", tags=["Alerts"])


@app.get("/api/health")
def health_check():
    return {"status": "ok", "message": "Server is running"}
