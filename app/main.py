# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the WeatherChat API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload --port 3000
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.dependencies import close_clients
from app.exceptions import (
    WeatherChatException,
    weatherchat_exception_handler,
    validation_exception_handler,
)
from app.routers import health, cities, weather, chat
from app.auth import routes as auth_routes

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
# httpx logs full request URLs at INFO, which would include the weather API key
logging.getLogger("httpx").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: log configuration summary
    - Shutdown: close pooled upstream connections
    """
    logger.info(f"Starting WeatherChat API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")
    if not settings.OPENWEATHER_API_KEY:
        logger.warning("OPENWEATHER_API_KEY is not set; /api/weather will answer 500")

    yield

    logger.info("Shutting down WeatherChat API")
    close_clients()


# Create FastAPI application
app = FastAPI(
    title="WeatherChat API",
    description="""
## Weather dashboard backend

- **Accounts** - register, log in (session cookie), log out
- **Saved cities** - each user keeps their own list of cities
- **Weather** - current conditions relayed from OpenWeatherMap
- **Chat** - ask the assistant anything; every exchange is logged

### Quick Start

```bash
# 1. Register and log in
curl -X POST http://localhost:3000/register -H "Content-Type: application/json" \\
  -d '{"username": "alice", "password": "s3cret"}'
curl -c cookies.txt -X POST http://localhost:3000/login -H "Content-Type: application/json" \\
  -d '{"username": "alice", "password": "s3cret"}'

# 2. Save a city
curl -b cookies.txt -X POST http://localhost:3000/cities -H "Content-Type: application/json" \\
  -d '{"city": "London"}'

# 3. Weather
curl "http://localhost:3000/api/weather?city=London"
```
""",
    version=health.API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Auth", "description": "Registration, login and sessions"},
        {"name": "Cities", "description": "Per-user saved cities"},
        {"name": "Weather", "description": "OpenWeatherMap proxy"},
        {"name": "Chat", "description": "Assistant chat relay"},
        {"name": "Health", "description": "API health and readiness checks"},
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests
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

@app.exception_handler(WeatherChatException)
async def handle_weatherchat_exception(request: Request, exc: WeatherChatException):
    """Handle custom WeatherChat exceptions."""
    return await weatherchat_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_exception(request: Request, exc: RequestValidationError):
    """Handle malformed request bodies and query strings."""
    return await validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "Something went wrong",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

# Authentication endpoints (/register, /login, /logout, /me)
app.include_router(
    auth_routes.router,
    tags=["Auth"]
)

# Saved cities
app.include_router(
    cities.router,
    prefix="/cities",
    tags=["Cities"]
)

# Weather proxy
app.include_router(
    weather.router,
    prefix="/api",
    tags=["Weather"]
)

# Chat relay
app.include_router(
    chat.router,
    tags=["Chat"]
)

# API status and health checks
app.include_router(
    health.router,
    prefix="/api",
    tags=["Health"]
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
        "name": "WeatherChat API",
        "version": health.API_VERSION,
        "docs": "/docs",
        "health": "/api/health",
    }
