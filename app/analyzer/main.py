"""
FastAPI application for contract analysis.

Provides endpoints for:
- Contract review of uploaded PDFs (Gemini)
- PDF text extraction and law comparison (Groq)
- Free-text legal queries (Groq)
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .config import get_settings
from .models import HealthResponse
from .routers import analysis
from .services.ai import get_gemini_service, get_groq_service
from .services.pdf_service import get_pdf_service

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    logger.info("Starting Contract Analyzer Service...")
    # Initialize services on startup; SDK clients connect lazily on first use
    get_pdf_service()
    get_gemini_service()
    get_groq_service()
    logger.info("Services initialized successfully")
    yield
    logger.info("Shutting down Contract Analyzer Service...")


# Create FastAPI application
app = FastAPI(
    title="Contract Analyzer API",
    description="Contract and legal document analysis with Gemini and Groq",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Health Endpoints
# =============================================================================


@app.get("/", response_model=HealthResponse)
async def root() -> HealthResponse:
    """Root endpoint - health check."""
    return HealthResponse(status="healthy", version=__version__)


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="healthy", version=__version__)


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(analysis.router)


# =============================================================================
# Exception Handlers
# =============================================================================


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors as ``{"error": message}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Handle malformed request bodies."""
    logger.warning("Rejected malformed request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request body."},
    )


def run() -> None:
    """Serve the application with uvicorn on the configured host and port."""
    logger.info("Server running on port %d", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
