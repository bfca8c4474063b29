"""
Feedback Scoring Service - Backend
FastAPI application entry point
"""

import sys
import logging
from pathlib import Path
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Add project root to Python path to fix imports when running directly
# This allows the script to work whether run as: python app/main.py or python -m app.main
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.config.settings import get_cors_origins, settings
from app.routers import feedback
from app.utils.exceptions import AppException

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log scoring configuration on startup"""
    logger.info(
        f"[STARTUP] Action item threshold: {settings.action_item_threshold}, "
        f"high priority below: {settings.high_priority_cutoff}, "
        f"trend period: {settings.default_trend_period}"
    )
    logger.info("[STARTUP] Application startup complete.")

    yield

    logger.info("[SHUTDOWN] Application shutting down...")


app = FastAPI(
    title="Feedback Scoring Service",
    description="Scoring and aggregation API for interview and mentor feedback",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """
    Standardize HTTPException responses to {'error': 'message'} format
    """
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail}
    )


@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException):
    """
    Scoring failures name the offending field, category or scale in details
    """
    logger.warning(f"[{request.url.path}] {exc.__class__.__name__}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, "details": exc.details}
    )


@app.get("/api/health")
async def health_check():
    """
    Health check endpoint for monitoring
    Time Complexity: O(1)
    Space Complexity: O(1)
    """
    return {
        "status": "healthy",
        "service": "Feedback Scoring Service"
    }


cors_origins = get_cors_origins()
use_wildcard = "*" in cors_origins

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if use_wildcard else cors_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
    max_age=3600,
)

app.include_router(feedback.router)


@app.get("/")
async def root():
    """
    Root endpoint - API information
    """
    return {
        "message": "Feedback Scoring Service API",
        "status": "running",
        "version": "1.0.0",
        "docs": "/docs",
        "api_base": "/api/feedback"
    }


if __name__ == "__main__":
    import uvicorn

    server_host = "127.0.0.1" if settings.environment == "development" else "0.0.0.0"
    logger.info(f"Server binding to: {server_host}:{settings.backend_port}")

    if settings.environment == "development":
        uvicorn.run(
            "app.main:app",  # Use import string for reload to work
            host=server_host,
            port=settings.backend_port,
            reload=True,
            log_level="info"
        )
    else:
        uvicorn.run(
            app,
            host=server_host,
            port=settings.backend_port,
            reload=False,
            log_level="info"
        )
