import logging
import traceback
from typing import Any, Dict, List

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from jiji.core.config import settings


logger = logging.getLogger(__name__)


class AppError(Exception):
    """
    Expected, operational failure with a client-safe message.
    Anything else reaching the handlers is treated as an internal error.
    """

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.is_operational = True


# Client-facing messages for the ask payload, keyed by (field, pydantic error type)
VALIDATION_MESSAGES = {
    ("query", "missing"): "Query is required",
    ("query", "string_type"): "Query must be a string",
    ("query", "string_too_short"): "Query must be at least 3 characters long",
    ("query", "string_too_long"): "Query must not exceed 500 characters",
    ("userId", "uuid_parsing"): "User ID must be a valid UUID",
    ("userId", "uuid_type"): "User ID must be a valid UUID",
}


def _field_name(loc) -> str:
    parts = [str(p) for p in loc]
    if len(parts) > 1 and parts[0] in ("body", "query", "path", "header"):
        parts = parts[1:]
    return ".".join(parts)


def format_validation_errors(errors) -> List[Dict[str, str]]:
    details = []
    for error in errors:
        field = _field_name(error.get("loc", ()))
        error_type = error.get("type", "")
        value = error.get("input")

        if field == "query" and isinstance(value, str) and not value.strip():
            message = "Query cannot be empty"
        elif error_type == "value_error" and field == "query":
            message = str(error.get("ctx", {}).get("error", error.get("msg")))
        else:
            message = VALIDATION_MESSAGES.get((field, error_type), error.get("msg", ""))

        details.append({"field": field, "message": message})
    return details


def _is_production() -> bool:
    return settings.ENVIRONMENT.lower() == "production"


async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "success": False,
            "error": "Validation failed",
            "details": format_validation_errors(exc.errors()),
        },
    )


async def app_error_handler(request: Request, exc: AppError):
    if not _is_production():
        logger.error(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.message},
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={
                "success": False,
                "error": "Route not found",
                "path": request.url.path,
            },
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")

    content: Dict[str, Any] = {"success": False}
    if _is_production():
        content["error"] = "Something went wrong"
    else:
        content["error"] = str(exc) or "Internal server error"
        content["stack"] = "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__)
        )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
