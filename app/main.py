"""TierEvents API - tier-gated event listings."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from app.config import Settings, get_settings
from app.core.rate_limiting import limiter
from app.database import init_db
from app.api.v1.router import router as api_v1_router

logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the API application for the given settings."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan - startup and shutdown."""
        logger.info("Starting %s (%s)", settings.app_name, settings.environment.value)
        if settings.is_development:
            await init_db()  # Only auto-create tables in dev
        yield

    app = FastAPI(
        title=settings.app_name,
        description="Event listings gated by membership tier",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,  # Disable docs in production
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
    )

    # Rate limiting - limits are attached per route in app/api/v1
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # CORS - strict in production
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list if settings.is_production else ["*"],
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
        max_age=600,  # Cache preflight for 10 minutes
    )

    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        """Add security headers to all responses."""
        response = await call_next(request)

        if settings.is_production:
            response.headers["X-Content-Type-Options"] = "nosniff"
            response.headers["X-Frame-Options"] = "DENY"
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
            response.headers["Content-Security-Policy"] = "default-src 'self'"

        return response

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log requests in development."""
        response = await call_next(request)
        if settings.is_development:
            logger.debug("[%s] %s -> %s", request.method, request.url.path, response.status_code)
        return response

    # Include API routes
    app.include_router(api_v1_router, prefix=settings.api_v1_prefix)

    @app.get("/")
    async def root():
        """Root endpoint - health check."""
        return {
            "name": settings.app_name,
            "version": "0.1.0",
            "status": "healthy",
            "environment": settings.environment.value,
        }

    @app.get("/health")
    async def health():
        """Detailed health check for monitoring."""
        return {
            "status": "healthy",
            "service": "tierevents-api",
            "version": "0.1.0",
        }

    return app


app = create_app()
