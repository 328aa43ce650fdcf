"""
XXML CMS API.

FastAPI application serving the XXML language site: the standard library
reference, the community forum, and the staff blog.
"""

import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from xxml_cms.config import settings, validate_security_settings
from xxml_cms.database import init_db
from xxml_cms.errors import ServiceError, ValidationFailed
from xxml_cms.logging_config import configure_logging
from xxml_cms.middleware.rate_limit import limiter
from xxml_cms.routers.admin import router as admin_router
from xxml_cms.routers.blog import router as blog_router
from xxml_cms.routers.docs import router as docs_router
from xxml_cms.routers.downloads import router as downloads_router
from xxml_cms.routers.forum import router as forum_router
from xxml_cms.schemas.common import ActionResult, ErrorInfo
from xxml_cms.services.cache import PathRevalidator

# Import models to register them with Base.metadata
from xxml_cms.models import APIKey, DocModule, Download, Post, User  # noqa: F401

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

# Location segments FastAPI puts before the field name
_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie"}


@asynccontextmanager
async def lifespan(app: FastAPI):  # noqa: ARG001
    """Application lifespan handler for startup/shutdown."""
    validate_security_settings()
    await init_db()
    logger.info("XXML CMS API started (%s)", settings.environment)
    yield


app = FastAPI(
    title="XXML CMS API",
    description="Documentation, forum and blog content for the XXML language site",
    version="0.1.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

# Add rate limiter state
app.state.limiter = limiter
app.state.revalidator = PathRevalidator()

# Rate limit exceeded handler
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    allow_headers=["*"],
)

# Include routers
app.include_router(docs_router)
app.include_router(forum_router)
app.include_router(blog_router)
app.include_router(downloads_router)
app.include_router(admin_router)


# --- Middleware ---


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Add a unique request ID to each request."""
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


# --- Exception Handlers ---


def _error_response(request: Request, exc: ServiceError) -> JSONResponse:
    request_id = getattr(request.state, "request_id", None)
    return JSONResponse(
        status_code=exc.status_code,
        content=ActionResult.failure(exc, request_id).model_dump(mode="json"),
    )


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Render service errors into the result envelope."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return _error_response(request, exc)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request validation errors with the same envelope as service validation."""
    errors = exc.errors()
    if not errors:
        return _error_response(request, ValidationFailed(None, "Validation error"))

    first_error = errors[0]
    loc = [str(part) for part in first_error.get("loc", [])]
    if loc and loc[0] in _LOCATION_PREFIXES:
        loc = loc[1:]
    field = ".".join(loc) or None
    ctx = first_error.get("ctx") or {}
    if first_error.get("type") == "value_error" and "error" in ctx:
        reason = str(ctx["error"])
    else:
        reason = first_error.get("msg", "Validation error")
    return _error_response(request, ValidationFailed(field, reason))


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle uncaught exceptions with consistent error format."""
    request_id = getattr(request.state, "request_id", None)
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ActionResult(
            error=ErrorInfo(
                code="INTERNAL_ERROR",
                message="An unexpected error occurred",
                request_id=request_id,
            )
        ).model_dump(mode="json"),
    )


# --- Health Check ---


@app.get("/api/v1/health", tags=["System"])
async def health_check() -> dict[str, str]:
    """
    Health check endpoint.

    Returns 200 OK if the API is running.
    """
    return {"status": "healthy"}
