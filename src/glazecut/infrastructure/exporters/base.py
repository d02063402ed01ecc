"""Base exporter framework with Protocol, Registry, and Manager."""

from __future__ import annotations

import logging
from abc import abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar, Protocol, runtime_checkable

if TYPE_CHECKING:
    from glazecut.application.config import ExportConfiguration
    from glazecut.application.dtos import SolutionOutput


logger = logging.getLogger(__name__)


class ExportIOError(Exception):
    """Raised when an export artifact cannot be written.

    Rendering is pure, so retrying the export is always safe.

    Attributes:
        format_name: Format that was being exported.
        path: Destination that could not be written.
    """

    def __init__(self, message: str, format_name: str, path: Path | None = None) -> None:
        self.message = message
        self.format_name = format_name
        self.path = path
        super().__init__(message)


@runtime_checkable
class Exporter(Protocol):
    """Protocol for all exporters.

    Exporters serialize a SolutionOutput into one document format. The
    document is built in memory by ``render``; ``export`` writes it to
    disk.

    Attributes:
        format_name: Identifier for the export format (e.g., "pdf", "xlsx").
        file_extension: File extension without leading dot.
        media_type: MIME type used when the artifact is served over HTTP.
    """

    format_name: ClassVar[str]
    file_extension: ClassVar[str]
    media_type: ClassVar[str]

    @abstractmethod
    def render(self, output: SolutionOutput) -> bytes:
        """Render the output as an in-memory document."""
        ...

    @abstractmethod
    def export(self, output: SolutionOutput, path: Path) -> None:
        """Render the output and write it to ``path``.

        Raises:
            ExportIOError: If the file cannot be written.
        """
        ...


def write_artifact(format_name: str, path: Path, data: bytes) -> None:
    """Write rendered bytes to disk, wrapping file system errors."""
    try:
        path.write_bytes(data)
    except OSError as e:
        raise ExportIOError(
            f"Could not write {format_name} export to {path}: {e.strerror or e}",
            format_name=format_name,
            path=path,
        ) from e
    logger.info(f"Wrote {format_name} export: {path} ({len(data)} bytes)")


class BaseExporter:
    """Shared ``export`` implementation for exporters that render bytes."""

    format_name: ClassVar[str]
    file_extension: ClassVar[str]
    media_type: ClassVar[str] = "application/octet-stream"

    def render(self, output: SolutionOutput) -> bytes:
        raise NotImplementedError

    def export(self, output: SolutionOutput, path: Path) -> None:
        write_artifact(self.format_name, path, self.render(output))


class ExporterRegistry:
    """Registry for exporter classes.

    Provides a central registry for all available exporters. Exporters
    register themselves using the @ExporterRegistry.register decorator.

    Example:
        @ExporterRegistry.register("text")
        class ShareTextExporter(BaseExporter):
            format_name = "text"
            file_extension = "txt"
            ...
    """

    _exporters: ClassVar[dict[str, type[Exporter]]] = {}

    @classmethod
    def register(cls, format_name: str) -> type:
        """Decorator to register an exporter class.

        Args:
            format_name: The format name to register (e.g., "pdf", "xlsx").

        Returns:
            Decorator function that registers the class.
        """

        def decorator(exporter_class: type[Exporter]) -> type[Exporter]:
            if format_name in cls._exporters:
                logger.warning(
                    f"Overwriting existing exporter for format '{format_name}'"
                )
            cls._exporters[format_name] = exporter_class
            logger.debug(f"Registered exporter '{format_name}': {exporter_class.__name__}")
            return exporter_class

        return decorator

    @classmethod
    def get(cls, format_name: str) -> type[Exporter]:
        """Get an exporter class by format name.

        Raises:
            KeyError: If no exporter is registered for the format.
        """
        if format_name not in cls._exporters:
            available = ", ".join(sorted(cls._exporters.keys()))
            raise KeyError(
                f"No exporter registered for format '{format_name}'. "
                f"Available formats: {available or 'none'}"
            )
        return cls._exporters[format_name]

    @classmethod
    def create(
        cls, format_name: str, config: ExportConfiguration | None = None
    ) -> Exporter:
        """Instantiate the exporter for a format with the given settings."""
        exporter_class = cls.get(format_name)
        return exporter_class(config=config)  # type: ignore[call-arg]

    @classmethod
    def available_formats(cls) -> list[str]:
        """Get a sorted list of all registered format names."""
        return sorted(cls._exporters.keys())

    @classmethod
    def is_registered(cls, format_name: str) -> bool:
        return format_name in cls._exporters

    @classmethod
    def clear(cls) -> None:
        """Clear all registered exporters.

        This is primarily useful for testing.
        """
        cls._exporters.clear()


class ExportManager:
    """Manages export operations to multiple formats.

    Files are named after the project, e.g.
    ``Cutting-List-Villa-12.pdf``.

    Attributes:
        output_dir: Directory where exported files will be saved.
        config: Export settings handed to every exporter.
    """

    def __init__(
        self, output_dir: Path, config: ExportConfiguration | None = None
    ) -> None:
        self.output_dir = Path(output_dir)
        self.config = config

    def export_all(self, formats: list[str], output: SolutionOutput) -> dict[str, Path]:
        """Export the solution to multiple formats.

        Args:
            formats: Format names to export (e.g., ["pdf", "xlsx"]).
            output: The solution to export.

        Returns:
            Dictionary mapping format names to output file paths.

        Raises:
            KeyError: If any format is not registered.
            ExportIOError: If the output directory or a file cannot be written.
        """
        # Resolve every exporter first so an unknown format writes nothing
        exporters = [ExporterRegistry.create(name, self.config) for name in formats]

        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ExportIOError(
                f"Could not create output directory {self.output_dir}: {e.strerror or e}",
                format_name=",".join(formats),
                path=self.output_dir,
            ) from e

        results: dict[str, Path] = {}
        stem = output.meta.filename_stem
        for exporter in exporters:
            filepath = self.output_dir / f"{stem}.{exporter.file_extension}"
            logger.info(f"Exporting to {exporter.format_name}: {filepath}")
            exporter.export(output, filepath)
            results[exporter.format_name] = filepath

        return results

    def export_single(self, format_name: str, output: SolutionOutput) -> Path:
        """Export the solution to a single format."""
        results = self.export_all([format_name], output)
        return results[format_name]
