# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every failure a handler can produce is one of the classes below; the
# handlers at the bottom turn them into JSON error bodies.
#
# Taxonomy:
#   ValidationError  400  missing or malformed input
#   AuthError        401  missing/invalid credentials or session
#   ConflictError    400  duplicate resource
#   ConfigError      500  missing server configuration
#   UpstreamError    500  third-party API failure
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class WeatherChatException(Exception):
    """
    Base exception for the WeatherChat API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "WEATHERCHAT_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "error": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Category Exceptions
# =============================================================================

class ValidationError(WeatherChatException):
    """Raised when request input is missing or malformed."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("code", "VALIDATION_ERROR")
        super().__init__(message, status_code=400, **kwargs)


class AuthError(WeatherChatException):
    """Raised when credentials or the session are missing or invalid."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("code", "AUTH_ERROR")
        super().__init__(message, status_code=401, **kwargs)


class ConflictError(WeatherChatException):
    """Raised when a resource already exists."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("code", "CONFLICT")
        super().__init__(message, status_code=400, **kwargs)


class ConfigError(WeatherChatException):
    """Raised when required server configuration is missing."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("code", "CONFIG_ERROR")
        super().__init__(message, status_code=500, **kwargs)


class UpstreamError(WeatherChatException):
    """Raised when a third-party API call fails."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("code", "UPSTREAM_ERROR")
        super().__init__(message, status_code=500, **kwargs)


# =============================================================================
# Validation Exceptions
# =============================================================================

class MissingFieldError(ValidationError):
    """Raised when a required request field is absent or blank."""

    def __init__(self, message: str, fields: list[str]):
        super().__init__(
            message,
            code="MISSING_FIELDS",
            details={"fields": fields},
        )


class PasswordTooLongError(ValidationError):
    """Raised when a password exceeds what bcrypt can hash."""

    def __init__(self, max_bytes: int):
        super().__init__(
            f"Password too long (max {max_bytes} bytes)",
            code="PASSWORD_TOO_LONG",
            suggestion="Choose a shorter password",
            details={"max_bytes": max_bytes},
        )


# =============================================================================
# Auth Exceptions
# =============================================================================

class InvalidCredentialsError(AuthError):
    """Raised when the username is unknown or the password does not match."""

    def __init__(self):
        super().__init__("Invalid credentials", code="INVALID_CREDENTIALS")


class NotAuthenticatedError(AuthError):
    """Raised when a route needs a session and the request has none."""

    def __init__(self, message: str = "You must be logged in"):
        super().__init__(
            message,
            code="NOT_AUTHENTICATED",
            suggestion="Log in with POST /login first",
        )


# =============================================================================
# Conflict Exceptions
# =============================================================================

class UsernameTakenError(ConflictError):
    """Raised when registering a username that already exists."""

    def __init__(self, username: str):
        super().__init__(
            "Username already taken",
            code="USERNAME_TAKEN",
            suggestion="Pick a different username or log in",
            details={"username": username},
        )


class CityAlreadySavedError(ConflictError):
    """Raised when a user saves the same city twice."""

    def __init__(self, city: str):
        super().__init__(
            "City already saved",
            code="CITY_ALREADY_SAVED",
            details={"city": city},
        )


# =============================================================================
# Config / Upstream Exceptions
# =============================================================================

class MissingApiKeyError(ConfigError):
    """Raised when an upstream API key is not configured."""

    def __init__(self, setting: str):
        super().__init__(
            "API key is missing",
            suggestion=f"Set {setting} in the environment or .env file",
            details={"setting": setting},
        )


class WeatherUpstreamError(UpstreamError):
    """Raised when the weather API cannot be reached or answers badly."""

    def __init__(self, city: str, error: str, upstream_status: int | None = None):
        details: dict[str, Any] = {"city": city, "error": error}
        if upstream_status is not None:
            details["upstream_status"] = upstream_status
        super().__init__(
            "Failed to fetch weather data",
            code="WEATHER_UPSTREAM_ERROR",
            suggestion="Check the city name and try again later",
            details=details,
        )


class CompletionUpstreamError(UpstreamError):
    """Raised when the completion API fails or returns an unusable reply."""

    def __init__(self, error: str, model: str | None = None):
        details: dict[str, Any] = {"error": error}
        if model:
            details["model"] = model
        super().__init__(
            "Invalid AI response",
            code="COMPLETION_UPSTREAM_ERROR",
            suggestion="Check your OPENAI_API_KEY and network connection",
            details=details,
        )


class DatabaseError(WeatherChatException):
    """Raised when a Supabase query fails."""

    def __init__(self, message: str, code: str = "DATABASE_ERROR", details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=code,
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
            details=details,
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def weatherchat_exception_handler(
    request: Request,
    exc: WeatherChatException
) -> JSONResponse:
    """
    Convert WeatherChatException to JSON response.

    Returns structured error with:
    - error: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: [{exc.code}] {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle request body/query validation errors.

    Malformed input is reported as 400 like every other validation failure.
    """
    return JSONResponse(
        status_code=400,
        content={
            "error": "Invalid request",
            "code": "VALIDATION_ERROR",
            "details": {"errors": str(exc)},
        }
    )
