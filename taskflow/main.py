"""
TaskFlow - main application module.
Authentication and task CRUD over a single storage adapter.
"""
import logging
import time
from typing import Any, Dict, Optional
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core import errors
from .core.config import Settings, get_settings
from .core.database import Database
from .core.storage import SqlAlchemyStorage, StorageAdapter
from .routers import auth, tasks

logger = logging.getLogger(__name__)

QUIET_PATHS = {"/health"}


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def error_body(request: Request, error_type: str, status_code: int, message: Any) -> Dict[str, Any]:
    return {
        "error": {
            "type": error_type,
            "status_code": status_code,
            "message": message,
            "path": str(request.url.path),
            "timestamp": time.time()
        }
    }


def create_app(settings: Optional[Settings] = None, storage: Optional[StorageAdapter] = None) -> FastAPI:
    """
    Build the TaskFlow application.

    Args:
        settings: Settings to use, defaults to the environment-driven settings
        storage: Storage adapter override; when omitted a SQLAlchemy adapter
            over ``settings.database_url`` is created and owned by the app

    Returns:
        FastAPI: Configured application
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="TaskFlow",
        description="Task management service with username/password authentication",
        version=settings.service_version
    )

    database = None
    if storage is None:
        database = Database(settings.database_url, echo=settings.debug)
        storage = SqlAlchemyStorage(database)

    app.state.settings = settings
    app.state.database = database
    app.state.storage = storage

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_logging_middleware(request: Request, call_next):
        """Log all requests with timing"""
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)

        if request.url.path not in QUIET_PATHS:
            logger.info(f"{request.method} {request.url.path} - {response.status_code} ({process_time:.3f}s)")

        return response

    @app.exception_handler(errors.AppError)
    async def app_error_handler(request: Request, exc: errors.AppError):
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(request, exc.error_type, exc.status_code, exc.message)
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        details = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body(request, errors.ValidationError.error_type, status.HTTP_400_BAD_REQUEST, details)
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(request, "http_error", exc.status_code, exc.detail)
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled exception: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body(
                request,
                errors.InternalError.error_type,
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                str(exc) if settings.debug else errors.InternalError.default_message
            )
        )

    @app.on_event("startup")
    async def startup_event():
        """Initialize database on startup"""
        logger.info(f"Starting {settings.service_name}...")
        if database is not None:
            database.init(
                max_retries=settings.db_connect_retries,
                delay=settings.db_connect_retry_delay
            )
        logger.info(f"{settings.service_name} startup completed")

    @app.on_event("shutdown")
    async def shutdown_event():
        """Cleanup on shutdown"""
        logger.info(f"Shutting down {settings.service_name}...")
        if database is not None:
            database.dispose()

    app.include_router(auth.router, prefix=settings.api_prefix + "/auth", tags=["auth"])
    app.include_router(tasks.router, prefix=settings.api_prefix + "/tasks", tags=["tasks"])

    @app.get("/")
    async def root():
        """Root endpoint"""
        return {
            "service": settings.service_name,
            "version": settings.service_version,
            "status": "running",
            "message": "TaskFlow is operational"
        }

    @app.get("/health")
    def health_check():
        """Health check endpoint"""
        db_healthy = app.state.storage.ping()
        return {
            "service": settings.service_name,
            "version": settings.service_version,
            "status": "healthy" if db_healthy else "unhealthy",
            "database": "connected" if db_healthy else "disconnected",
            "timestamp": time.time()
        }

    return app


def main():
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "taskflow.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        log_level=settings.log_level.lower()
    )


if __name__ == "__main__":
    main()
