from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse

from .. import __version__
from ..application.services.activity_service import ActivityService
from ..application.services.auth_service import AuthService
from ..domain.carbon import CarbonEstimator
from ..domain.errors import CarbonTrackerError
from ..infrastructure.persistence.sqlite import SQLitePersistence
from ..presentation.api.routers import activities as activities_router
from ..presentation.api.routers import auth as auth_router
from ..presentation.api.routers import insights as insights_router
from .config import Settings
from .container import ApplicationContainer
from .logging import configure_logging

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent.parent / "static"


def create_application(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()

    app = FastAPI(
        title="Carbon Footprint Tracker",
        version=__version__,
        lifespan=_create_lifespan(settings),
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s %s -> %s (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response

    _register_error_handlers(app)

    app.include_router(auth_router.router)
    app.include_router(activities_router.router)
    app.include_router(insights_router.router)

    @app.get("/", include_in_schema=False)
    async def landing_page() -> FileResponse:
        return FileResponse(STATIC_DIR / "index.html")

    @app.get("/health")
    async def health() -> Dict[str, Any]:
        return {"ok": True}

    return app


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(CarbonTrackerError)
    async def carbon_tracker_error_handler(request: Request, exc: CarbonTrackerError):
        logger.info("%s on %s", exc.code, request.url.path)
        return JSONResponse(status_code=exc.http_status, content=exc.to_response())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        fields = sorted(
            {".".join(str(loc) for loc in error["loc"][1:]) for error in exc.errors()} - {""}
        )
        logger.info("Validation error on %s: %s", request.url.path, fields)
        if fields:
            message = f"Invalid or missing fields: {', '.join(fields)}"
        else:
            message = "Invalid request body"
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": message, "code": "VALIDATION_ERROR"},
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error("Unhandled exception on %s", request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal server error", "code": "INTERNAL_ERROR"},
        )


def _create_lifespan(settings: Settings):
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        configure_logging()
        persistence = SQLitePersistence(settings.database_path)
        estimator = CarbonEstimator()
        auth_service = AuthService(
            users=persistence,
            secret_key=settings.token_secret,
            token_exp_minutes=settings.token_exp_minutes,
            bcrypt_rounds=settings.bcrypt_rounds,
        )
        activity_service = ActivityService(persistence, estimator)

        container = ApplicationContainer(
            settings=settings,
            persistence=persistence,
            estimator=estimator,
            auth_service=auth_service,
            activity_service=activity_service,
        )
        app.state.container = container  # type: ignore[attr-defined]
        logger.info("Carbon tracker started (database: %s)", settings.database_path)

        try:
            yield
        finally:
            persistence.close()
            logger.info("Carbon tracker stopped")

    return lifespan
