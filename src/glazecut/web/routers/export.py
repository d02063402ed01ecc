"""Export format endpoints."""

import logging
from urllib.parse import quote

import anyio
import anyio.to_thread
from fastapi import APIRouter
from fastapi.responses import Response

from glazecut.infrastructure.exporters import ExporterRegistry
from glazecut.web.dependencies import SolvedRequestDep
from glazecut.web.exceptions import ExportTimeoutError, UnsupportedFormatError
from glazecut.web.schemas.responses import ExportFormatsSchema

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/export", tags=["export"])


def content_disposition(filename: str) -> str:
    """Attachment header value that survives non-Latin-1 file names.

    Plain ASCII names are sent as a quoted ``filename``. Other names get an
    ASCII fallback plus the RFC 5987 ``filename*`` form.
    """
    if filename.isascii():
        return f'attachment; filename="{filename}"'
    fallback = "".join(ch if ch.isascii() else "_" for ch in filename)
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"


@router.get("/formats", response_model=ExportFormatsSchema)
async def list_export_formats() -> ExportFormatsSchema:
    """List all available export formats."""
    return ExportFormatsSchema(formats=ExporterRegistry.available_formats())


@router.post("/{format_name}")
async def export_solution(format_name: str, solved: SolvedRequestDep) -> Response:
    """Render the cutting list in the requested format.

    Rendering runs in a worker thread and is abandoned after the
    configured ``export_timeout_seconds``.

    Args:
        format_name: Registered export format (pdf, xlsx, svg, text).
        solved: Injected solution built from the request body.

    Returns:
        The document as an attachment named after the project.
    """
    if not ExporterRegistry.is_registered(format_name):
        raise UnsupportedFormatError(format_name, ExporterRegistry.available_formats())

    solution, config = solved.solution, solved.config
    exporter = ExporterRegistry.create(format_name, config)
    timeout = config.export_timeout_seconds

    try:
        with anyio.fail_after(timeout):
            data = await anyio.to_thread.run_sync(
                exporter.render, solution, abandon_on_cancel=True
            )
    except TimeoutError as e:
        logger.warning(f"Export to {format_name} timed out after {timeout:g}s")
        raise ExportTimeoutError(format_name, timeout) from e

    filename = f"{solution.meta.filename_stem}.{exporter.file_extension}"
    return Response(
        content=data,
        media_type=exporter.media_type,
        headers={
            "Content-Disposition": content_disposition(filename),
            "X-Skipped-Items": str(len(solution.failures)),
        },
    )
