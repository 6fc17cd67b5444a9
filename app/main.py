# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Business Directory API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.exceptions import DirectoryException, directory_exception_handler
from app.routers import directory, health, listings
from app.auth import routes as auth_routes

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log startup and shutdown; the Supabase client is created lazily."""
    logger.info(f"Starting Business Directory API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    yield

    logger.info("Shutting down Business Directory API")


# Create FastAPI application
app = FastAPI(
    title="Business Directory API",
    description="""
## Local Business Directory

Merchants list their business (with a logo and up to three product images);
visitors browse the public directory.

### How It Works

1. **Sign in** with Supabase Auth on the client and send the access token as a Bearer token
2. **Fetch the form** - `GET /api/v1/listings/form`
3. **Submit a listing** - `POST /api/v1/listings` (multipart form)
4. **Browse** - `GET /api/v1/businesses/popular`

Submission responses describe the outcome (toast + redirect) rather than
failing with HTTP errors, so the client can keep the form filled in.
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Auth",
            "description": "Current identity as seen by the API",
        },
        {
            "name": "Listings",
            "description": "List a business with images",
        },
        {
            "name": "Directory",
            "description": "Public business gallery",
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

@app.exception_handler(DirectoryException)
async def handle_directory_exception(request: Request, exc: DirectoryException):
    """Handle custom directory exceptions."""
    return await directory_exception_handler(request, exc)


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

app.include_router(
    auth_routes.router,
    prefix="/api/v1/auth",
    tags=["Auth"]
)

app.include_router(
    health.router,
    prefix="/api/v1",
    tags=["Health"]
)

app.include_router(
    listings.router,
    prefix="/api/v1/listings",
    tags=["Listings"]
)

app.include_router(
    directory.router,
    prefix="/api/v1/businesses",
    tags=["Directory"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """Root endpoint - returns API info."""
    return {
        "name": "Business Directory API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/v1/health",
    }
