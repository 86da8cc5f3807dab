"""Error types and the handlers that turn them into the response envelope."""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)


class GeocodingError(Exception):
    """A location could not be resolved to coordinates."""


class UpstreamServiceError(Exception):
    """A third-party HTTP service failed or was unreachable."""


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


def _describe_validation_error(err: dict) -> str:
    loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
    field = loc[-1] if loc else "body"
    err_type = err.get("type", "")

    if err_type in ("missing", "blank_string"):
        return f"Missing required field: {field}"
    if err_type == "extra_forbidden":
        return f"Unknown field: {field}"
    if err_type == "value_error":
        # Custom validator messages are passed through verbatim
        ctx_error = err.get("ctx", {}).get("error")
        if ctx_error is not None:
            return str(ctx_error)
    if err_type == "json_invalid":
        return "Request body is not valid JSON"
    return f"{field}: {err.get('msg', 'invalid value')}"


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    messages = []
    for err in exc.errors():
        message = _describe_validation_error(err)
        if message not in messages:
            messages.append(message)
    return error_response(status.HTTP_400_BAD_REQUEST, "; ".join(messages) or "Invalid request")


async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
    return error_response(status.HTTP_409_CONFLICT, "A record with these unique values already exists")


async def geocoding_error_handler(request: Request, exc: GeocodingError):
    return error_response(422, str(exc))


async def upstream_error_handler(request: Request, exc: UpstreamServiceError):
    logger.error("Upstream service error on %s: %s", request.url.path, exc)
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Failed to fetch weather data. Please try again later.",
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error.")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(GeocodingError, geocoding_error_handler)
    app.add_exception_handler(UpstreamServiceError, upstream_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
