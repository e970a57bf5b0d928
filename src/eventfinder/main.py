"""
FastAPI application entry point
"""
import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from eventfinder.api import auth, bookings, events
from eventfinder.core import metrics
from eventfinder.core.config import settings
from eventfinder.core.database import dispose_engine, get_engine, get_session_factory, init_db
from eventfinder.core.exceptions import DomainError, ErrorCode, ValidationError
from eventfinder.core.logging_config import setup_logging
from eventfinder.data.seed_events import seed_stores
from eventfinder.middleware.rate_limiter import limiter
from eventfinder.middleware.tracing import TracingMiddleware
from eventfinder.services import AuthService, BookingService, EventService, ExpiryWorker, PaymentGateway
from eventfinder.stores import Stores, build_memory_stores, build_sql_stores

logger = logging.getLogger(__name__)


def _error_body(message: str, code: str, errors: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": False, "error": message, "code": code}
    if errors:
        body["errors"] = errors
    return body


def _build_stores() -> Stores:
    if settings.STORAGE_BACKEND == "sql":
        return build_sql_stores(get_session_factory())
    return build_memory_stores(seed=settings.SEED_DEMO_DATA)


def create_app(stores: Optional[Stores] = None) -> FastAPI:
    """
    Build the application around a set of stores.

    Without `stores` the backend follows settings.STORAGE_BACKEND. Tests
    pass fresh in-memory stores.
    """
    uses_sql = stores is None and settings.STORAGE_BACKEND == "sql"
    stores = stores or _build_stores()

    booking_service = BookingService(stores.events, stores.bookings, PaymentGateway())
    expiry_worker = ExpiryWorker(booking_service)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan events for startup and shutdown"""
        setup_logging()
        logger.info(f"🚀 Starting up {settings.APP_NAME} ({settings.STORAGE_BACKEND} storage)...")

        if uses_sql:
            try:
                await init_db(get_engine())
            except Exception as e:
                logger.error(f"❌ Database initialization failed: {e}")
                raise
            logger.info("✅ Database tables ready")
            if settings.SEED_DEMO_DATA:
                await seed_stores(stores.events, stores.users)

        if settings.BOOKING_EXPIRY_ENABLED:
            await expiry_worker.start()

        yield

        logger.info("🛑 Shutting down...")
        await expiry_worker.stop()
        if uses_sql:
            await dispose_engine()
        logger.info("✅ Cleanup complete")

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Event discovery, organizer tools and ticket registration",
        lifespan=lifespan,
    )

    app.state.stores = stores
    app.state.event_service = EventService(stores.events)
    app.state.booking_service = booking_service
    app.state.auth_service = AuthService(stores.users, stores.sessions)
    app.state.expiry_worker = expiry_worker
    app.state.limiter = limiter

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        errors = exc.errors if isinstance(exc, ValidationError) else None
        if exc.status_code >= 500:
            logger.error(f"❌ {exc}", exc_info=True)
        else:
            logger.info(f"⚠️ {request.method} {request.url.path} -> {exc.code.value}")
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.message, exc.code.value, errors),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = {}
        for error in exc.errors():
            # Drop the "body"/"query" prefix so keys match form field names
            loc = [str(part) for part in error.get("loc", ())[1:]] or ["request"]
            errors[".".join(loc)] = error.get("msg", "Invalid value")
        return JSONResponse(
            status_code=400,
            content=_error_body("Validation failed", ErrorCode.VALIDATION_ERROR.value, errors),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(str(exc.detail), f"HTTP_{exc.status_code}"),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RateLimitExceeded)
    async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
        """Handle rate limit exceeded errors"""
        logger.warning(f"⚠️ Rate limit exceeded for {request.url.path}")
        metrics.rate_limit_hits_total.labels(endpoint=request.url.path).inc()
        return JSONResponse(
            status_code=429,
            content=_error_body("Too many requests. Please slow down.", "RATE_LIMIT_EXCEEDED"),
            headers={"Retry-After": "60"},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(f"❌ Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content=_error_body("Internal server error", ErrorCode.INTERNAL_ERROR.value),
        )

    app.add_middleware(TracingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "service": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "storage": settings.STORAGE_BACKEND,
        }

    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint"""
        return {
            "message": f"Welcome to {settings.APP_NAME} API",
            "version": settings.APP_VERSION,
            "docs": "/docs",
            "health": "/health",
            "metrics": "/metrics",
        }

    @app.get("/metrics", tags=["Health"], include_in_schema=False)
    async def prometheus_metrics():
        """Prometheus scrape endpoint"""
        return Response(content=metrics.get_metrics(), media_type=metrics.CONTENT_TYPE_LATEST)

    app.include_router(events.router, prefix="/api/v1", tags=["Events"])
    app.include_router(bookings.router, prefix="/api/v1", tags=["Bookings"])
    app.include_router(auth.router, prefix="/api/v1", tags=["Auth"])

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "eventfinder.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level="info"
    )
