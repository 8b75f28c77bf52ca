# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Converse API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.exceptions import (
    ConverseException,
    converse_exception_handler,
    validation_exception_handler,
)
from app.routers import health, chat, admin, pricing
from app.auth import routes as auth_routes
from core.providers.env_validation import get_validation_summary
from lib.supabase_client import SupabaseClientError

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    On startup, reports which AI providers are usable. A deployment with
    no provider still starts so the admin console stays reachable.
    """
    logger.info(f"Starting Converse API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    summary = get_validation_summary(settings.provider_environment)
    if summary.has_valid_provider:
        logger.info(
            "Configured AI providers: "
            + ", ".join(p.value for p in summary.configured_providers)
        )
    else:
        logger.error("No AI provider is properly configured; chat requests will fail")

    for result in summary.details.results():
        for warning in result.warnings:
            logger.warning(f"{result.provider.value}: {warning}")

    yield

    logger.info("Shutting down Converse API")


# Create FastAPI application
app = FastAPI(
    title="Converse API",
    description="""
## Multi-Provider Chat API

Converse serves chat completions from Groq, Google Vertex AI or Azure OpenAI.
Clients ask for a logical model role; the server picks the vendor model.

### Model Roles

| Role | Purpose |
|------|---------|
| **chat-model** | Default chat |
| **chat-model-small** / **chat-model-large** | Cheaper / stronger chat |
| **chat-model-reasoning** | Chat with `<think>` reasoning split out |
| **title-model** | Conversation titles |
| **artifact-model** | Document and code artifacts |

### Provider Selection

1. The admin-selected default provider is tried first
2. Otherwise Groq, then Vertex AI, then Azure OpenAI
3. Per-role model overrides replace the built-in model ids
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Auth",
            "description": "Token verification",
        },
        {
            "name": "Chat",
            "description": "Chat completions over the resolved provider model",
        },
        {
            "name": "Admin",
            "description": "Provider health, validation and settings (admin only)",
        },
        {
            "name": "Pricing",
            "description": "Public subscription plans",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(ConverseException)
async def handle_converse_exception(request: Request, exc: ConverseException):
    """Handle custom Converse exceptions."""
    if exc.status_code >= 500:
        logger.error(f"{exc.code}: {exc.message}")
    return await converse_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    """Handle request body validation errors."""
    return await validation_exception_handler(request, exc)


@app.exception_handler(SupabaseClientError)
async def handle_supabase_error(request: Request, exc: SupabaseClientError):
    """Settings store unavailable."""
    logger.error(f"Settings store error: {exc}")
    content = {"detail": exc.message, "code": exc.code}
    if exc.suggestion:
        content["suggestion"] = exc.suggestion
    return JSONResponse(status_code=503, content=content)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

# Authentication endpoints
app.include_router(
    auth_routes.router,
    prefix="/api/v1/auth",
    tags=["Auth"]
)

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api/v1",
    tags=["Health"]
)

# Chat completion endpoint
app.include_router(
    chat.router,
    prefix="/api/v1/chat",
    tags=["Chat"]
)

# Admin console endpoints
app.include_router(
    admin.router,
    prefix="/api/v1/admin",
    tags=["Admin"]
)

# Public pricing plans
app.include_router(
    pricing.router,
    prefix="/api/v1/pricing",
    tags=["Pricing"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "Converse API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/v1/health",
    }
