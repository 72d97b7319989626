"""Exception handlers that render every failure as the JSON envelope."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from recipe_hub.errors import AppError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI, expose_details: bool) -> None:
    """Install handlers; ``expose_details`` adds an ``error`` field for debugging."""

    def envelope(status_code: int, message: str, detail: str | None) -> JSONResponse:
        body: dict[str, object] = {"success": False, "message": message}
        if expose_details and detail:
            body["error"] = detail
        return JSONResponse(status_code=status_code, content=body)

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return envelope(exc.status_code, exc.message, exc.detail)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        messages = [_format_validation_error(error) for error in exc.errors()]
        return envelope(
            status.HTTP_400_BAD_REQUEST,
            "Validation error: " + ", ".join(messages),
            None,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            message = f"Route not found: {request.method} {request.url.path}"
        else:
            message = str(exc.detail)
        return envelope(exc.status_code, message, None)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return envelope(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal server error",
            f"{type(exc).__name__}: {exc}",
        )


def _format_validation_error(error: dict[str, object]) -> str:
    location = [
        str(part) for part in error.get("loc", ()) if part not in {"body", "query", "path"}
    ]
    message = str(error.get("msg", "Invalid value"))
    if location:
        return f"{'.'.join(location)}: {message}"
    return message
