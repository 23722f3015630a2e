from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from analyzer.analysis.exceptions import AnalyzerError, InvalidInputError
from analyzer.config.settings import Settings
from analyzer.logging.logger import Log


def error_body(exc: AnalyzerError, settings: Settings) -> dict[str, Any]:
    """Render an error for the caller. Internal detail only in development."""
    show_detail = exc.expose_message or settings.is_development
    body: dict[str, Any] = {
        "error": exc.kind,
        "message": exc.message if show_detail else exc.safe_message,
    }
    if isinstance(exc, InvalidInputError) and exc.errors:
        body["errors"] = exc.errors
    return body


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    @app.exception_handler(AnalyzerError)
    async def analyzer_error_handler(request: Request, exc: AnalyzerError) -> JSONResponse:
        if exc.status_code >= 500:
            Log.error(f"{request.method} {request.url.path} failed: {exc.kind}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=error_body(exc, settings))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = [
            {
                "field": ".".join(str(part) for part in error["loc"][1:]),
                "msg": error["msg"],
            }
            for error in exc.errors()
        ]
        return JSONResponse(
            status_code=400,
            content=error_body(InvalidInputError("Invalid input.", errors=errors), settings),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        Log.exception(f"Unhandled error on {request.method} {request.url.path}: {exc!r}")
        return JSONResponse(
            status_code=500,
            content={"error": "InternalError", "message": "An unexpected error occurred."},
        )
