"""
Error responses.

- Request validation failures: 400 ``{"errors": [{"msg", "param", "location"}]}``
- Every other error: ``{"detail", "status_code"}``; unexpected ones become a
  bare 500 "Server Error" and are logged with their traceback
"""

from typing import Any

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from devconnect.logging import get_logger

logger = get_logger("errors")

SERVER_ERROR_DETAIL = "Server Error"


def error_response(status_code: int, detail: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": detail, "status_code": status_code},
        headers=headers,
    )


def _error_message(error: dict[str, Any]) -> str:
    # Field validators raise ValueError with the exact client-facing text
    ctx = error.get("ctx") or {}
    if error.get("type") == "value_error" and "error" in ctx:
        return str(ctx["error"])
    return str(error.get("msg", "Invalid value"))


def format_validation_errors(errors: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """
    Flatten pydantic errors into ``{"msg", "param", "location"}`` items.

    ``param`` is the last element of the error location (the field name,
    or its alias), ``location`` the first (``body``, ``path``, ``query``).
    """
    formatted = []
    for error in errors:
        loc = list(error.get("loc") or [])
        formatted.append(
            {
                "msg": _error_message(error),
                "param": str(loc[-1]) if len(loc) > 1 else None,
                "location": str(loc[0]) if loc else None,
            }
        )
    return formatted


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(HTTPException)
    async def on_http_exception(request: Request, exc: HTTPException):
        logger.info("request_rejected", path=request.url.path, status_code=exc.status_code, detail=exc.detail)
        return error_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def on_invalid_request(request: Request, exc: RequestValidationError):
        errors = format_validation_errors(list(exc.errors()))
        logger.info("request_invalid", path=request.url.path, params=[error["param"] for error in errors])
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"errors": errors})

    @app.exception_handler(ValidationError)
    async def on_model_error(request: Request, exc: ValidationError):
        # Raised while building a response from stored data
        logger.error("stored_data_invalid", path=request.url.path, errors=exc.errors(include_url=False))
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, SERVER_ERROR_DETAIL)

    @app.exception_handler(Exception)
    async def on_unexpected(request: Request, exc: Exception):
        logger.exception("unhandled_exception", path=request.url.path, error_type=type(exc).__name__)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, SERVER_ERROR_DETAIL)
