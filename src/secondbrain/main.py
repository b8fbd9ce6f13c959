# Main application entry point
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from .api import auth_router, brain_router, content_router, health_router, tags_router
from .config import get_settings
from .core.exceptions import SecondBrainError
from .core.logging import LoggingMiddleware, get_logger, setup_logging
from .core.redis_client import get_redis_client
from .core.schemas.common import ErrorResponse
from .core.services import TagService
from .database import AsyncSessionLocal, create_tables

# Setup logging first
setup_logging()
logger = get_logger("main")

settings = get_settings()


async def seed_global_tags() -> None:
    async with AsyncSessionLocal() as session:
        await TagService(session).seed_global_tags(settings.global_tags)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    logger.info(
        "Starting Second Brain application",
        extra={
            "version": settings.app_version,
            "environment": settings.environment,
            "debug": settings.debug,
        },
    )

    # Redis only backs the logout blacklist
    redis_client = get_redis_client()
    try:
        await redis_client.connect()
        logger.info("Redis connection established")
    except Exception as e:
        logger.warning(f"Redis connection failed: {e}. Continuing without Redis...")

    # Allow tests to skip touching the real DB (e.g., when using SQLite in-memory)
    if os.getenv("SECONDBRAIN_SKIP_LIFESPAN_DB") == "1":
        logger.info("Skipping DB table creation due to SECONDBRAIN_SKIP_LIFESPAN_DB=1")
    else:
        try:
            await create_tables()
            await seed_global_tags()
            logger.info("Database tables created/verified")
        except Exception as e:
            logger.error("Failed to initialise database", exc_info=e)
            raise

    yield

    # Shutdown
    logger.info("Shutting down Second Brain application")
    await redis_client.disconnect()


app = FastAPI(
    title=settings.app_name,
    description="Bookmarks with notes and tags, and a shareable public brain",
    version=settings.app_version,
    lifespan=lifespan,
)


def _error_response(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


@app.exception_handler(SecondBrainError)
async def handle_app_error(request: Request, exc: SecondBrainError):
    if exc.status_code >= 500:
        logger.error(f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}")
    return _error_response(exc.status_code, ErrorResponse(**exc.to_dict()))


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    errors = [
        {"field": ".".join(str(p) for p in err["loc"] if p != "body"), "message": err["msg"]}
        for err in exc.errors()
    ]
    return _error_response(
        422,
        ErrorResponse(error="INVALID_INPUT", message="Invalid input", details={"errors": errors}),
    )


@app.exception_handler(SQLAlchemyError)
async def handle_database_error(request: Request, exc: SQLAlchemyError):
    logger.error(f"Database error on {request.method} {request.url.path}", exc_info=exc)
    return _error_response(
        500, ErrorResponse(error="INTERNAL_ERROR", message="Internal server error")
    )


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return _error_response(
        500, ErrorResponse(error="INTERNAL_ERROR", message="Internal server error")
    )


# Add logging middleware
app.add_middleware(LoggingMiddleware)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth_router, prefix=settings.api_prefix)
app.include_router(tags_router, prefix=settings.api_prefix)
app.include_router(content_router, prefix=settings.api_prefix)
app.include_router(brain_router, prefix=settings.api_prefix)
app.include_router(health_router, prefix=settings.api_prefix)


# Root endpoint
@app.get("/")
async def root():
    return {
        "message": settings.app_name,
        "version": settings.app_version,
        "documentation": {"swagger_ui": "/docs", "redoc": "/redoc"},
        "api": settings.api_prefix,
    }


# Basic unprefixed health endpoint for load balancers
@app.get("/health")
async def basic_health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "secondbrain.main:app", host=settings.host, port=settings.port, reload=settings.reload
    )
