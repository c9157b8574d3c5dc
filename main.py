from fastapi import Depends, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from app.core import config
from app.core.config import validate_settings
from app.core.logging_config import setup_logging, get_logger
from app.core.dependencies import get_record_store
from app.core.exceptions import (
    PortalException,
    ConfigurationError,
    AuthorizationError,
    NotFoundError,
    QueryError,
    UploadError,
    sanitize_error_message
)
from app.core.record_store import PAPERS_TABLE, RecordStore
from app.api.v1.router import api_router

# Setup logging first (before settings validation)
setup_logging()
logger = get_logger(__name__)


def _debug() -> bool:
    return bool(config.settings and config.settings.DEBUG)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    try:
        logger.info("Validating configuration...")
        validate_settings()
        logger.info("✅ Configuration validated successfully")

        logger.info(f"Starting {config.settings.APP_NAME} v{config.settings.APP_VERSION}")
        logger.info(f"Debug mode: {'ON' if config.settings.DEBUG else 'OFF'}")

        logger.info(f"Admission state directory: {config.settings.ADMISSION_STATE_DIR}")
    except ConfigurationError as e:
        logger.error(f"❌ Configuration error: {e.message}")
        logger.error("Application startup failed due to configuration issues.")
        raise

    yield

    # Shutdown
    logger.info("Shutting down application")


app = FastAPI(
    title=config.settings.APP_NAME if config.settings else "MU Papers Portal",
    version=config.settings.APP_VERSION if config.settings else "1.0.0",
    description="Question papers and mock tests portal API",
    lifespan=lifespan,
    docs_url="/api/docs" if _debug() else None,
    redoc_url="/api/redoc" if _debug() else None,
    openapi_url="/api/openapi.json" if _debug() else None,
)


@app.exception_handler(PortalException)
async def custom_exception_handler(request: Request, exc: PortalException):
    """Handle custom application exceptions."""
    logger.error(
        f"Application error: {exc.message}",
        extra={
            "error_code": exc.error_code,
            "details": exc.details,
            "path": str(request.url),
            "method": request.method,
        }
    )

    status_code = status.HTTP_400_BAD_REQUEST
    if isinstance(exc, AuthorizationError):
        status_code = status.HTTP_403_FORBIDDEN
    elif isinstance(exc, NotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, QueryError):
        status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    elif isinstance(exc, UploadError):
        status_code = status.HTTP_502_BAD_GATEWAY
    elif isinstance(exc, ConfigurationError):
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    return JSONResponse(
        status_code=status_code,
        content={
            "error": True,
            "message": exc.message,
            "error_code": exc.error_code,
            "details": exc.details if _debug() or status_code == status.HTTP_400_BAD_REQUEST else None,
        }
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle all other exceptions."""
    logger.exception(
        f"Unhandled exception: {type(exc).__name__}",
        extra={
            "path": str(request.url),
            "method": request.method,
        }
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": True,
            "message": sanitize_error_message(exc),
            "error_code": "INTERNAL_ERROR",
            "details": {
                "type": type(exc).__name__,
                "message": str(exc),
            } if _debug() else None,
        }
    )


allowed_origins = [
    config.settings.FRONTEND_URL if config.settings else "http://localhost:5173",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]

# Remove duplicates while preserving order
seen = set()
allowed_origins = [x for x in allowed_origins if not (x in seen or seen.add(x))]

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins if not _debug() else ["*"],
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api/v1")


@app.get("/")
async def root():
    return {
        "message": f"Welcome to {app.title}",
        "version": app.version,
        "docs": "/api/docs",
    }


@app.get("/health")
async def health_check(store: RecordStore = Depends(get_record_store)):
    """Health check including record store connectivity."""
    health_status = {
        "status": "healthy",
        "service": app.title,
        "version": app.version,
    }

    try:
        store.count(PAPERS_TABLE)
        health_status["database"] = "connected"
    except Exception as e:
        logger.error(f"Database health check failed: {str(e)}")
        health_status["database"] = "disconnected"
        health_status["status"] = "degraded"

    status_code = status.HTTP_200_OK if health_status["status"] == "healthy" else status.HTTP_503_SERVICE_UNAVAILABLE

    return JSONResponse(content=health_status, status_code=status_code)
