"""FastAPI application entry point with security configuration."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from tprm_wizard.api.routes import decisions, export, scenarios, sessions, treatments, vendor
from tprm_wizard.config import settings
from tprm_wizard.services.session_registry import session_registry

logger = logging.getLogger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if settings.environment == "production":
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains"
            )
        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("%s starting (%s)", settings.app_name, settings.environment)
    yield
    logger.info("Shutting down, discarding %d wizard sessions", len(session_registry))


app = FastAPI(
    title=settings.app_name,
    description="Guided FAIR TPRM vendor profile capture with Excel and PDF export",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)

# Security middleware
app.add_middleware(SecurityHeadersMiddleware)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["GET", "POST", "PATCH", "DELETE"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)

# Include API routes
app.include_router(sessions.router, prefix=settings.api_prefix, tags=["sessions"])
app.include_router(vendor.router, prefix=settings.api_prefix, tags=["vendor"])
app.include_router(scenarios.router, prefix=settings.api_prefix, tags=["scenarios"])
app.include_router(treatments.router, prefix=settings.api_prefix, tags=["treatments"])
app.include_router(decisions.router, prefix=settings.api_prefix, tags=["decisions"])
app.include_router(export.router, prefix=settings.api_prefix, tags=["export"])


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": "1.0.0"}


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler - don't expose internals in production."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    if settings.debug:
        return JSONResponse(
            status_code=500,
            content={"error": str(exc), "type": type(exc).__name__},
        )
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error"},
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "tprm_wizard.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
