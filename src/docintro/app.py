"""
FastAPI application factory and main app configuration.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from .api.errors import APIError, domain_error_status
from .api.routers import doctors, health, videos
from .api.utils.responses import fail
from .core.config import Settings, get_settings
from .core.container import ServiceContainer, build_service_container
from .core.structured_logger import configure_logging
from .core.utils import ensure_directory
from .domain.errors import DomainError
from .middleware.performance_middleware import PerformanceMiddleware
from .middleware.request_id_middleware import RequestIDMiddleware

logger = logging.getLogger("docintro")


async def connect_database(settings: Settings):
    """Connect Motor and register the Beanie document models."""
    import certifi
    from beanie import init_beanie
    from motor.motor_asyncio import AsyncIOMotorClient

    from .adapters.db.mongo.models.doctor_m import DoctorMongo

    mongo_uri = settings.database.uri

    # Enable TLS only for Atlas SRV URIs
    if mongo_uri.startswith("mongodb+srv://"):
        client = AsyncIOMotorClient(
            mongo_uri,
            serverSelectionTimeoutMS=15000,
            tls=True,
            tlsCAFile=certifi.where(),
            tlsAllowInvalidCertificates=False,
        )
    else:
        client = AsyncIOMotorClient(mongo_uri, serverSelectionTimeoutMS=15000)

    await init_beanie(database=client[settings.database.db_name], document_models=[DoctorMongo])
    return client


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    settings: Settings = app.state.settings
    owns_services = getattr(app.state, "services", None) is None

    logger.info(f"Starting {settings.app_name} v{settings.app_version} (env={settings.app_env})")

    if owns_services:
        try:
            client = await connect_database(settings)
            logger.info("Database connection established")
        except Exception as e:
            logger.error(f"Database connection failed: {e}", exc_info=True)
            raise

        services = build_service_container(settings, mongo_client=client)

        if services.hosting_service is not None:
            if not await services.hosting_service.ensure_container_exists():
                logger.error("Azure Blob Storage container is not available; finalize will fail")
            else:
                logger.info("Azure Blob Storage initialized")

        app.state.services = services

    services = app.state.services
    logger.info(
        f"Video storage: mode={services.storage_mode}, dir={services.local_store.root}, "
        f"email={'configured' if services.email_service.is_configured else 'not configured'}"
    )

    yield

    logger.info(f"Shutting down {settings.app_name}")
    if owns_services:
        services.close()
        app.state.services = None


def create_app(settings: Optional[Settings] = None, services: Optional[ServiceContainer] = None) -> FastAPI:
    """Create and configure FastAPI application.

    Passing ``services`` skips every external connection in the lifespan.
    """
    if settings is None:
        settings = services.settings if services is not None else get_settings()

    configure_logging(settings.logging.level, settings.logging.format)

    app = FastAPI(
        title=settings.app_name,
        description="Doctor directory with recorded introduction videos",
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.services = services

    app.add_middleware(PerformanceMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=False,
        allow_methods=settings.cors.allowed_methods,
        allow_headers=settings.cors.allowed_headers,
        expose_headers=["X-Request-ID", "X-Process-Time"],
        max_age=600,
    )
    # Added last so it runs first and every log line can carry the id
    app.add_middleware(RequestIDMiddleware)

    app.include_router(health.router)
    app.include_router(doctors.router)
    app.include_router(videos.router)

    video_root = ensure_directory(settings.video_root)
    app.mount("/videos", StaticFiles(directory=str(video_root)), name="videos")

    @app.get("/", tags=["health"])
    async def root():
        """Root endpoint with API information."""
        return {
            "service": settings.app_name,
            "version": settings.app_version,
            "environment": settings.app_env,
            "status": "running",
            "docs": "/docs",
        }

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        status_code = domain_error_status(exc)
        log = logger.error if status_code >= 500 else logger.warning
        log(f"DomainError: {exc.error_code} ({status_code}) {exc.message}")
        return JSONResponse(
            status_code=status_code,
            content=fail(request, exc.error_code or "DOMAIN_ERROR", exc.message, exc.details).model_dump(),
        )

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError):
        logger.error(f"APIError: {exc.code} ({exc.http_status}) {exc.message}")
        return JSONResponse(
            status_code=exc.http_status,
            content=fail(request, exc.code, exc.message, exc.details).model_dump(),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        logger.warning(f"ValidationError on {request.method} {request.url.path}: {errors}")

        # Report the first problem, like the frontend expects
        first = errors[0] if errors else {}
        loc = [str(x) for x in first.get("loc", ()) if x not in ("body", "form", "query", "path")]
        msg = first.get("msg", "Invalid input")
        message = f"{'.'.join(loc)}: {msg}" if loc else msg

        return JSONResponse(
            status_code=400,
            content=fail(
                request,
                "INVALID_INPUT",
                message,
                {"errors": [{"loc": list(e.get("loc", ())), "msg": e.get("msg")} for e in errors]},
            ).model_dump(),
        )

    @app.exception_handler(Exception)
    async def internal_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error: {type(exc).__name__}: {exc}", exc_info=exc)
        return JSONResponse(
            status_code=500,
            content=fail(request, "INTERNAL_ERROR", "Server error", {"error": str(exc)}).model_dump(),
        )

    return app
