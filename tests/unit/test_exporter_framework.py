"""Tests for the exporter framework (base.py)."""

from __future__ import annotations

from pathlib import Path
from typing import ClassVar

import pytest

from glazecut.application import ExportMeta, SolutionOutput
from glazecut.application.config import ExportConfiguration
from glazecut.infrastructure.exporters import (
    BaseExporter,
    ExcelExporter,
    Exporter,
    ExporterRegistry,
    ExportIOError,
    ExportManager,
    PdfExporter,
    ShareTextExporter,
    SvgExporter,
    write_artifact,
)


class TestExporterRegistry:
    """Tests for ExporterRegistry."""

    def setup_method(self) -> None:
        """Store original exporters before each test."""
        self._original_exporters = ExporterRegistry._exporters.copy()

    def teardown_method(self) -> None:
        """Restore original exporters after each test."""
        ExporterRegistry._exporters = self._original_exporters

    def test_builtin_exporters_are_registered(self) -> None:
        assert ExporterRegistry.get("pdf") is PdfExporter
        assert ExporterRegistry.get("xlsx") is ExcelExporter
        assert ExporterRegistry.get("svg") is SvgExporter
        assert ExporterRegistry.get("text") is ShareTextExporter

    def test_available_formats_is_sorted(self) -> None:
        assert ExporterRegistry.available_formats() == ["pdf", "svg", "text", "xlsx"]

    def test_get_unknown_format_raises_key_error(self) -> None:
        """get() should raise KeyError listing the available formats."""
        with pytest.raises(KeyError) as exc_info:
            ExporterRegistry.get("dxf")
        assert "No exporter registered for format 'dxf'" in str(exc_info.value)
        assert "pdf" in str(exc_info.value)

    def test_create_passes_config(self) -> None:
        config = ExportConfiguration.model_validate({"pdf": {"page_size": "letter"}})
        exporter = ExporterRegistry.create("pdf", config)

        assert isinstance(exporter, PdfExporter)
        assert exporter.page_size == (612.0, 792.0)

    def test_register_new_exporter(self) -> None:
        """register() should add a new exporter to the registry."""

        @ExporterRegistry.register("csv")
        class CsvExporter(BaseExporter):
            format_name: ClassVar[str] = "csv"
            file_extension: ClassVar[str] = "csv"

            def __init__(self, config=None) -> None:
                self.config = config

            def render(self, output) -> bytes:
                return b"a,b\n"

        assert ExporterRegistry.is_registered("csv")
        assert ExporterRegistry.get("csv") is CsvExporter
        assert "csv" in ExporterRegistry.available_formats()

    def test_is_registered_returns_false_for_unknown(self) -> None:
        assert not ExporterRegistry.is_registered("nonexistent_format")

    def test_clear_removes_all_exporters(self) -> None:
        ExporterRegistry.clear()
        assert ExporterRegistry.available_formats() == []


class TestExporterProtocol:
    """Every registered exporter satisfies the Exporter protocol."""

    @pytest.mark.parametrize("format_name", ["pdf", "xlsx", "svg", "text"])
    def test_exporter_satisfies_protocol(self, format_name: str) -> None:
        exporter = ExporterRegistry.create(format_name)
        assert isinstance(exporter, Exporter)
        assert exporter.format_name == format_name
        assert exporter.media_type


class TestWriteArtifact:
    """Tests for write_artifact."""

    def test_writes_bytes(self, tmp_path: Path) -> None:
        path = tmp_path / "out.txt"
        write_artifact("text", path, b"hello")
        assert path.read_bytes() == b"hello"

    def test_missing_directory_raises_export_io_error(self, tmp_path: Path) -> None:
        path = tmp_path / "missing" / "out.txt"

        with pytest.raises(ExportIOError) as exc_info:
            write_artifact("text", path, b"hello")

        assert exc_info.value.format_name == "text"
        assert exc_info.value.path == path
        assert isinstance(exc_info.value.__cause__, OSError)


class TestExportManager:
    """Tests for ExportManager."""

    def test_export_all_writes_named_files(self, tmp_path: Path, solution) -> None:
        manager = ExportManager(tmp_path / "out")

        results = manager.export_all(["text", "svg"], solution)

        assert results == {
            "text": tmp_path / "out" / "Cutting-List-Villa-12.txt",
            "svg": tmp_path / "out" / "Cutting-List-Villa-12.svg",
        }
        assert all(path.exists() for path in results.values())

    def test_export_single(self, tmp_path: Path, solution) -> None:
        path = ExportManager(tmp_path).export_single("text", solution)
        assert path.name == "Cutting-List-Villa-12.txt"
        assert path.read_text(encoding="utf-8").startswith("Cutting List - Villa 12")

    def test_unknown_format_writes_nothing(self, tmp_path: Path, solution) -> None:
        """Formats are resolved before any file is written."""
        out = tmp_path / "out"
        with pytest.raises(KeyError):
            ExportManager(out).export_all(["text", "dxf"], solution)
        assert not out.exists()

    def test_output_dir_that_is_a_file_raises(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        output = SolutionOutput(meta=ExportMeta(project_name="Empty"))

        with pytest.raises(ExportIOError) as exc_info:
            ExportManager(blocker / "out").export_all(["text"], output)

        assert exc_info.value.path == blocker / "out"

    def test_filename_for_untitled_project(self) -> None:
        assert ExportMeta(project_name="   ").filename_stem == "Cutting-List-Untitled"

    def test_filename_drops_quotes_and_slashes(self) -> None:
        meta = ExportMeta(project_name='Villa "12" / B\\1')
        assert meta.filename_stem == "Cutting-List-Villa-12-B1"

    def test_filename_keeps_non_ascii_letters(self) -> None:
        assert ExportMeta(project_name="Вилла 12").filename_stem == "Cutting-List-Вилла-12"
