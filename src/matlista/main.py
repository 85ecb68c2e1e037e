"""FastAPI application entry point."""

import uuid
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from matlista import __version__
from matlista.config import get_settings
from matlista.logging_config import LoggingContext, configure_logging, get_logger
from matlista.routers import grocery_router, ingredients_router

settings = get_settings()

# Configure logging on module load
configure_logging(settings.log_level, json_format=not settings.is_development)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup and shutdown events."""
    logger.info(f"Starting Matlista API ({settings.environment})")
    yield
    logger.info("Shutting down Matlista API")


app = FastAPI(
    title="Matlista API",
    description="Weekly meal plans turned into deduplicated grocery lists",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_context(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Tag every log line of a request with its request id."""
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    with LoggingContext(request_id=request_id):
        response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


app.include_router(ingredients_router)
app.include_router(grocery_router)


@app.get("/health")
async def health_check() -> dict:
    """Basic health check endpoint."""
    return {"status": "ok", "service": "matlista-api"}


@app.get("/")
async def root() -> dict:
    """Root endpoint with API information."""
    return {
        "name": "Matlista API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
    }
