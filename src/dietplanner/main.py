"""FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dietplanner.config import get_settings
from dietplanner.logging_config import configure_logging, get_logger
from dietplanner.routers import catalog_router, optimizations_router

settings = get_settings()

configure_logging(log_level=settings.log_level, log_file=settings.log_file)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup and shutdown events."""
    logger.info(
        f"Starting Dietplanner API (environment: {settings.environment}, "
        f"data dir: {settings.usda_data_dir})"
    )
    yield
    logger.info("Shutting down Dietplanner API")


app = FastAPI(
    title="Dietplanner API",
    description="Search for food quantities meeting daily nutrient targets",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(catalog_router)
app.include_router(optimizations_router)


@app.get("/health")
async def health_check() -> dict:
    """Basic health check endpoint."""
    return {"status": "ok", "service": "dietplanner-api"}


@app.get("/")
async def root() -> dict:
    """Root endpoint with API information."""
    return {
        "name": "Dietplanner API",
        "version": "0.1.0",
        "docs": "/docs",
        "health": "/health",
    }
