"""Integration tests for the REST API."""

from __future__ import annotations

import io
import time
from typing import Any

import pytest
from fastapi.testclient import TestClient
from openpyxl import load_workbook

from glazecut.infrastructure.exporters import ExportIOError, PdfExporter
from glazecut.web.app import create_app


@pytest.fixture
def client() -> TestClient:
    """FastAPI test client."""
    return TestClient(create_app())


@pytest.fixture
def body(result_payload, price_payload) -> dict[str, Any]:
    return {
        "result": result_payload,
        "project_name": "Villa 12",
        "customer_name": "A. Customer",
        "issue_date": "2026-10-19",
        "prices": price_payload,
    }


class TestHealth:
    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestLayoutsEndpoint:
    """Tests for POST /api/v1/layouts."""

    def test_returns_layout_descriptors(self, client: TestClient, body) -> None:
        response = client.post("/api/v1/layouts", json=body)

        assert response.status_code == 200
        data = response.json()
        assert data["is_valid"] is True
        assert data["project_name"] == "Villa 12"
        assert data["total_bars"] == 8
        assert data["grand_total"] == 113250

        transom = data["profiles"][0]
        assert transom["profile_name"] == "Transom (55x55mm)"
        assert transom["stock_length_mm"] == 6000
        layout_a = transom["layouts"][0]
        assert layout_a["layout_id"] == "A"
        assert layout_a["repetition_label"] == "4X"
        assert layout_a["offcut_mm"] == 1200
        assert [s["label"] for s in layout_a["segments"]] == ["1.2m"] * 4
        assert layout_a["blocks"][-1] == {
            "kind": "offcut",
            "x_mm": 4800,
            "length_mm": 1200,
            "label": "1.2m",
        }
        assert transom["totals"]["total_bars"] == 6

    def test_layout_keys_are_stable_across_requests(self, client: TestClient, body) -> None:
        first = client.post("/api/v1/layouts", json=body).json()
        body["result"]["cuttingList"][0]["plan"].reverse()
        second = client.post("/api/v1/layouts", json=body).json()

        keys_first = [l["key"] for l in first["profiles"][0]["layouts"]]
        keys_second = [l["key"] for l in second["profiles"][0]["layouts"]]
        assert keys_first == list(reversed(keys_second))

    def test_glass_descriptors(self, client: TestClient, body) -> None:
        glass = client.post("/api/v1/layouts", json=body).json()["glass"][0]

        assert glass["sheet_width_mm"] == 3310
        assert [s["placed_count"] for s in glass["sheets"]] == [6, 6, 6, 2]
        first = glass["sheets"][0]
        assert first["waste_width_mm"] == 310
        assert first["waste_height_mm"] == 140
        assert [s["position"] for s in first["strips"]] == ["bottom", "right"]
        assert len(first["placements"]) == 6
        assert glass["other_cuts"] == [{"width_mm": 500, "height_mm": 600, "qty": 3}]

    def test_materials(self, client: TestClient, body) -> None:
        materials = client.post("/api/v1/layouts", json=body).json()["materials"]

        cleat = next(m for m in materials if m["name"] == "Corner cleat")
        assert cleat["quantity"] == 9
        assert cleat["waste_factor"] == 10
        assert cleat["total"] == 2250

    def test_bad_item_is_reported_not_fatal(self, client: TestClient, body) -> None:
        body["result"]["cuttingList"][0]["plan"].append({"offcut": ["offcut"]})

        response = client.post("/api/v1/layouts", json=body)

        assert response.status_code == 200
        data = response.json()
        assert data["is_valid"] is False
        assert [p["profile_name"] for p in data["profiles"]] == ["Mullion (40x80mm)"]
        assert data["failures"][0]["kind"] == "decode"

    def test_invalid_result_returns_json_paths(self, client: TestClient, body) -> None:
        body["result"]["cuttingList"][1]["stock_length"] = "six metres"

        response = client.post("/api/v1/layouts", json=body)

        assert response.status_code == 422
        data = response.json()
        assert data["error_type"] == "validation"
        assert data["details"][0]["path"] == "cuttingList[1].stock_length"

    def test_zero_stock_length_is_a_per_item_failure(self, client: TestClient, body) -> None:
        body["result"]["cuttingList"][1]["stock_length"] = 0

        response = client.post("/api/v1/layouts", json=body)

        assert response.status_code == 200
        data = response.json()
        assert [p["profile_name"] for p in data["profiles"]] == ["Transom (55x55mm)"]
        assert data["failures"][0]["kind"] == "integrity"
        assert data["failures"][0]["subject"] == "Mullion (40x80mm)"

    def test_invalid_settings(self, client: TestClient, body) -> None:
        body["config"] = {"pdf": {"page_size": "A0"}}

        response = client.post("/api/v1/layouts", json=body)

        assert response.status_code == 422
        assert response.json()["details"][0]["path"] == "pdf.page_size"

    def test_missing_result_is_a_request_error(self, client: TestClient) -> None:
        response = client.post("/api/v1/layouts", json={"project_name": "X"})
        assert response.status_code == 422


class TestExportEndpoint:
    """Tests for POST /api/v1/export/{format}."""

    def test_formats(self, client: TestClient) -> None:
        response = client.get("/api/v1/export/formats")
        assert response.status_code == 200
        assert response.json()["formats"] == ["pdf", "svg", "text", "xlsx"]

    def test_pdf_download(self, client: TestClient, body) -> None:
        response = client.post("/api/v1/export/pdf", json=body)

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert (
            response.headers["content-disposition"]
            == 'attachment; filename="Cutting-List-Villa-12.pdf"'
        )
        assert response.headers["x-skipped-items"] == "0"
        assert response.content.startswith(b"%PDF")

    def test_xlsx_download(self, client: TestClient, body) -> None:
        response = client.post("/api/v1/export/xlsx", json=body)

        assert response.status_code == 200
        assert response.headers["content-disposition"].endswith('Villa-12.xlsx"')
        wb = load_workbook(io.BytesIO(response.content))
        assert wb.sheetnames == ["Cutting List", "Glass Cutting", "Material List"]

    def test_text_download(self, client: TestClient, body) -> None:
        response = client.post("/api/v1/export/text", json=body)

        assert response.status_code == 200
        assert response.text.startswith("Cutting List - Villa 12\n")

    def test_non_ascii_project_name(self, client: TestClient, body) -> None:
        body["project_name"] = "Вилла 12"

        response = client.post("/api/v1/export/text", json=body)

        assert response.status_code == 200
        assert response.headers["content-disposition"] == (
            'attachment; filename="Cutting-List-_____-12.txt"; '
            "filename*=UTF-8''Cutting-List-%D0%92%D0%B8%D0%BB%D0%BB%D0%B0-12.txt"
        )
        assert response.text.startswith("Cutting List - Вилла 12\n")

    def test_quotes_in_project_name(self, client: TestClient, body) -> None:
        body["project_name"] = 'Villa "12"'

        response = client.post("/api/v1/export/pdf", json=body)

        assert response.status_code == 200
        assert (
            response.headers["content-disposition"]
            == 'attachment; filename="Cutting-List-Villa-12.pdf"'
        )

    def test_skipped_items_header(self, client: TestClient, body) -> None:
        body["result"]["glassList"]["sheet_type"] = "jumbo"
        response = client.post("/api/v1/export/svg", json=body)

        assert response.status_code == 200
        assert response.headers["x-skipped-items"] == "1"

    def test_unsupported_format(self, client: TestClient, body) -> None:
        response = client.post("/api/v1/export/dxf", json=body)

        assert response.status_code == 400
        data = response.json()
        assert data["error_type"] == "unsupported_format"
        assert "pdf" in data["details"]["available"]

    def test_timeout(self, client: TestClient, body, monkeypatch: pytest.MonkeyPatch) -> None:
        def slow_render(self, output) -> bytes:
            time.sleep(1.0)
            return b""

        monkeypatch.setattr(PdfExporter, "render", slow_render)
        body["config"] = {"export_timeout_seconds": 0.05}

        response = client.post("/api/v1/export/pdf", json=body)

        assert response.status_code == 504
        assert response.json()["error_type"] == "export_timeout"

    def test_write_failure_maps_to_503(
        self, client: TestClient, body, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def failing_render(self, output) -> bytes:
            raise ExportIOError("disk full", format_name="pdf")

        monkeypatch.setattr(PdfExporter, "render", failing_render)

        response = client.post("/api/v1/export/pdf", json=body)

        assert response.status_code == 503
        assert response.json() == {
            "error": "disk full",
            "error_type": "export_io",
            "details": {"format": "pdf"},
        }
