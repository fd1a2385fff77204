from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from contextlib import asynccontextmanager
from datetime import datetime

from screener.routers import analysis, training
from screener.utils.logging_config import configure_for_environment, get_logger
from screener.utils.settings import get_gateway_settings
from screener.middleware.cors import ALLOWED_HEADERS, PreflightCORSMiddleware
from screener.middleware.error_handlers import (
    ExceptionHandlerMiddleware,
    RequestLoggingMiddleware,
    PerformanceMiddleware,
    request_validation_exception_handler,
)

# Configure logging first
configure_for_environment()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan context manager"""
    logger.info("Screening API starting up...")

    # A missing gateway key is a startup failure, not a per-request one
    settings = get_gateway_settings()
    logger.info(f"LLM gateway configured: {settings.base_url} model={settings.model} fallback={settings.fallback_enabled}")

    try:
        from screener.services.db import init_indexes
        await init_indexes()
    except Exception as e:
        logger.warning(f"Database index initialization had issues: {e}")
        logger.info("Application will continue - training rules may be unavailable")

    logger.info("Screening API startup completed")

    yield

    logger.info("Screening API shutting down...")


app = FastAPI(title="Resume Screening Trainer API", version="1.0.0", lifespan=lifespan)
app.add_exception_handler(RequestValidationError, request_validation_exception_handler)

# Add middleware in order (LIFO - Last In, First Out)
# Exception handler should be the outermost of our middleware
app.add_middleware(PerformanceMiddleware, slow_request_threshold=10.0)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(ExceptionHandlerMiddleware)

app.add_middleware(
    PreflightCORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=ALLOWED_HEADERS,
)


@app.get("/health")
@app.head("/health")
async def health_check():
    """Health check endpoint - handles both GET and HEAD requests"""
    return {"status": "healthy", "timestamp": datetime.utcnow().isoformat() + "Z"}


app.include_router(analysis.router)
app.include_router(training.router, prefix="/api")

logger.info("Screening API initialized successfully")
