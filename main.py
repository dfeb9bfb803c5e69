"""
SEA Catering API - Main Application.

FastAPI app for meal subscriptions with a relational backend.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from datetime import datetime, timezone
import logging
import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration
from slowapi.errors import RateLimitExceeded
from sqlalchemy import text

from settings import settings
from app.database import get_engine, init_db
from app.middleware.rate_limit import limiter, rate_limit_exceeded_handler
from app.middleware.security_headers import SecurityHeadersMiddleware
from app.utils.errors import SeaCateringException

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Initialize Sentry for error tracking
if settings.SENTRY_DSN:
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.SENTRY_ENVIRONMENT,
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
        integrations=[
            FastApiIntegration(),
            LoggingIntegration(
                level=logging.INFO,
                event_level=logging.ERROR
            ),
        ],
    )
    logger.info(f"Sentry initialized ({settings.SENTRY_ENVIRONMENT})")
else:
    logger.warning("Sentry DSN not configured - error tracking disabled")

# Import routers
from app.routes import auth, meal_plans, subscriptions, testimonials, admin


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info("Starting SEA Catering API...")
    # Tables are managed by migrations in production
    if settings.ENV != "production":
        try:
            init_db()
            logger.info("Database tables ready")
        except Exception as e:
            logger.warning(f"Failed to initialize database at startup: {e}")

    yield

    if settings.ENV != "testing":
        get_engine().dispose()
    logger.info("SEA Catering API shutdown complete")


# Create FastAPI app
app = FastAPI(
    title="SEA Catering API",
    version="1.0.0",
    description="Healthy meal subscriptions: plans, pricing, pauses and cancellations",
    lifespan=lifespan
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

app.add_middleware(SecurityHeadersMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "X-CSRF-Token"],
)


@app.exception_handler(SeaCateringException)
async def sea_catering_exception_handler(request: Request, exc: SeaCateringException):
    """Render application errors as the standard error envelope."""
    if exc.status_code >= 500:
        logger.error(f"{exc.kind} on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.info(f"{exc.kind}/{exc.code} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies and parameters are plain validation errors (400)."""
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path"))
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    return JSONResponse(
        status_code=400,
        content={
            "error": {
                "kind": "validation_error",
                "code": "invalid_request",
                "message": message,
            }
        },
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "kind": "internal_error",
                "code": "internal_error",
                "message": "An unexpected error occurred",
            }
        },
    )


# Health check
@app.get("/health")
def health_check():
    """Health check with database connectivity test."""
    try:
        with get_engine().connect() as connection:
            connection.execute(text("SELECT 1"))
        database_connected = True
    except Exception as e:
        logger.error(f"Health check failed: {str(e)}")
        database_connected = False

    return {
        "status": "ok" if database_connected else "degraded",
        "database_connected": database_connected,
        "environment": settings.ENV,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": "1.0.0"
    }


# Include routers
app.include_router(auth.router, prefix="/auth", tags=["Authentication"])
app.include_router(meal_plans.router, prefix="/meal-plans", tags=["Meal Plans"])
app.include_router(subscriptions.router, prefix="/subscriptions", tags=["Subscriptions"])
app.include_router(testimonials.router, prefix="/testimonials", tags=["Testimonials"])
app.include_router(admin.router, prefix="/admin", tags=["Admin"])


# Root endpoint
@app.get("/")
def root():
    """API root endpoint."""
    return {
        "message": "SEA Catering API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }
