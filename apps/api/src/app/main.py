"""
School Locator API - Main Application Entry Point

This module initializes and configures the FastAPI application including:
- Database connection pool (created at startup, disposed at shutdown)
- Request validation error rendering
- CORS middleware
- API routing
- Health check endpoints
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api import api_router
from app.core.config import settings
from app.core.database import close_db, create_database, init_db

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Builds the Database once, exposes it on app.state for the get_db
    dependency, and drains its pool on shutdown.
    """
    # Startup
    logger.info(f"Starting School Locator API in {settings.python_env} mode...")

    database = create_database(settings)
    app.state.db = database

    try:
        await init_db(database, settings)
        logger.info("[OK] Database connected")
    except Exception as e:
        logger.error(f"[FAIL] Database connection failed: {e}")
        if settings.is_production:
            await close_db(database)
            raise

    yield  # Application runs here

    # Shutdown
    logger.info("Shutting down School Locator API...")
    await close_db(database)
    app.state.db = None
    logger.info("[OK] Cleanup complete")


app = FastAPI(
    title="School Locator API",
    description="Register schools and list them by distance from a point",
    version="0.1.0",
    docs_url="/docs" if settings.is_development else None,
    redoc_url="/redoc" if settings.is_development else None,
    lifespan=lifespan,
)

app.include_router(api_router)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def format_validation_errors(exc: RequestValidationError) -> list[dict]:
    """Flatten pydantic errors into field-level entries."""
    errors = []
    for error in exc.errors():
        loc = error.get("loc", ())
        errors.append(
            {
                "type": error.get("type"),
                "msg": error.get("msg"),
                "path": str(loc[-1]) if len(loc) > 1 else "",
                "location": str(loc[0]) if loc else "",
                "value": error.get("input"),
            }
        )
    return errors


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(_request: Request, exc: RequestValidationError):
    """Render request validation failures as 400 {"errors": [...]}."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder({"errors": format_validation_errors(exc)}),
    )


@app.get("/", tags=["Root"])
async def root() -> dict[str, str]:
    """Root endpoint - API welcome message."""
    return {
        "message": "Welcome to School Locator API",
        "status": "running",
        "environment": settings.python_env,
    }


@app.get("/health", tags=["Health"])
async def health_check() -> dict[str, str]:
    """Health check endpoint for container orchestration."""
    return {"status": "healthy"}


@app.get("/ready", tags=["Health"])
async def readiness_check(request: Request):
    """Readiness check endpoint. Ready once the database answers."""
    database = getattr(request.app.state, "db", None)
    try:
        if database is not None and await database.ping():
            return {"status": "ready"}
    except Exception as e:
        logger.warning(f"Readiness check failed: {e}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "unavailable"},
    )


def run() -> None:
    """Serve the application with uvicorn on the configured port."""
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
