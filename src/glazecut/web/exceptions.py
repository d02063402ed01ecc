"""Custom exceptions and error handlers for the REST API."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from glazecut.application.config import ConfigError
from glazecut.domain import LayoutError
from glazecut.infrastructure.exporters import ExportIOError


class UnsupportedFormatError(Exception):
    """Raised when requested export format is not supported."""

    def __init__(self, format_name: str, available: list[str]) -> None:
        self.format_name = format_name
        self.available = available
        super().__init__(
            f"Unsupported format: {format_name}. Available: {', '.join(available)}"
        )


class ExportTimeoutError(Exception):
    """Raised when rendering an export takes longer than the configured limit."""

    def __init__(self, format_name: str, timeout_seconds: float) -> None:
        self.format_name = format_name
        self.timeout_seconds = timeout_seconds
        super().__init__(
            f"Export to {format_name} did not finish within {timeout_seconds:g}s"
        )


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers with the FastAPI app."""

    @app.exception_handler(ConfigError)
    async def config_error_handler(request: Request, exc: ConfigError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": exc.message,
                "error_type": exc.error_type,
                "details": exc.details or None,
            },
        )

    @app.exception_handler(LayoutError)
    async def layout_error_handler(request: Request, exc: LayoutError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": str(exc),
                "error_type": exc.kind,
                "details": {"subject": exc.subject},
            },
        )

    @app.exception_handler(UnsupportedFormatError)
    async def unsupported_format_handler(
        request: Request, exc: UnsupportedFormatError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={
                "error": str(exc),
                "error_type": "unsupported_format",
                "details": {"format": exc.format_name, "available": exc.available},
            },
        )

    @app.exception_handler(ExportIOError)
    async def export_io_error_handler(request: Request, exc: ExportIOError) -> JSONResponse:
        return JSONResponse(
            status_code=503,
            content={
                "error": exc.message,
                "error_type": "export_io",
                "details": {"format": exc.format_name},
            },
        )

    @app.exception_handler(ExportTimeoutError)
    async def export_timeout_handler(
        request: Request, exc: ExportTimeoutError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=504,
            content={
                "error": str(exc),
                "error_type": "export_timeout",
                "details": {
                    "format": exc.format_name,
                    "timeout_seconds": exc.timeout_seconds,
                },
            },
        )
