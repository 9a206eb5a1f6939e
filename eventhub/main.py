from contextlib import asynccontextmanager
import logging
import sys

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from eventhub.core.config import Settings, get_settings
from eventhub.core.errors import (
    AuthError,
    EventHubError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from eventhub.db.database import create_engine, create_session_factory
from eventhub.routers import auth, events, health, venues

logger = logging.getLogger("uvicorn")


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    settings: Settings = app.state.settings
    engine = create_engine(settings)
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    logger.info("Database engine ready")

    yield

    # Shutdown
    await engine.dispose()
    logger.info("Database engine disposed")


def _status_for(exc: EventHubError) -> int:
    if isinstance(exc, ValidationError):
        return 422
    if isinstance(exc, AuthError):
        return 403 if exc.permission_denied else 401
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, PersistenceError):
        return 400
    return 500


async def eventhub_error_handler(request: Request, exc: EventHubError) -> JSONResponse:
    body = {"success": False, "error": exc.message, "code": exc.code.value}
    if isinstance(exc, ValidationError):
        body["fields"] = exc.fields
    headers = None
    if isinstance(exc, AuthError) and not exc.permission_denied:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(status_code=_status_for(exc), content=body, headers=headers)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="EventHub API",
        version="0.1.0",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )
    app.add_exception_handler(EventHubError, eventhub_error_handler)

    app.include_router(health.router, prefix="/health", tags=["Health"])
    app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
    app.include_router(events.router, prefix="/api/events", tags=["Events"])
    app.include_router(venues.router, prefix="/api/venues", tags=["Venues"])
    return app


app = create_app()
