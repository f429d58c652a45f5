"""
handlers/error_handler.py
-------------------------
Converts every exception that reaches the HTTP boundary into a JSON
``{"message": ...}`` response. Nothing propagates out of a request.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from utils.errors import FinanceError, PartialOperationError
from utils.logger import get_logger

logger = get_logger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again."


def _describe(errors: list[dict]) -> str:
    """Turn pydantic's first error into a one-line form message."""
    if not errors:
        return "Invalid request"
    first = errors[0]
    field = next((str(part) for part in reversed(first.get("loc", ())) if part != "body"), None)
    message = first.get("msg", "Invalid value")
    return f"{field}: {message}" if field else message


def register_error_handlers(app: FastAPI) -> None:
    """Attach the exception handlers to `app`."""

    @app.exception_handler(FinanceError)
    async def handle_finance_error(request: Request, exc: FinanceError) -> JSONResponse:
        body = {"message": exc.message}
        if isinstance(exc, PartialOperationError):
            body["completed"] = exc.completed
            body["failed"] = exc.failed
            logger.error(f"{request.method} {request.url.path} partially completed: {exc.message}")
        else:
            logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=body)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        message = _describe(exc.errors())
        logger.warning(f"{request.method} {request.url.path} -> 400: {message}")
        return JSONResponse(status_code=400, content={"message": message})

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=500, content={"message": GENERIC_ERROR_MESSAGE})
