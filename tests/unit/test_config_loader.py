"""Tests for the JSON loaders and settings schema."""

from __future__ import annotations

import os
import sys
from decimal import Decimal
from pathlib import Path

import pytest

from glazecut.application.config import (
    ConfigError,
    ExportConfiguration,
    load_calculation_result,
    load_calculation_result_from_dict,
    load_config,
    load_config_from_dict,
    load_price_list,
    load_price_list_from_dict,
)


class TestLoadCalculationResult:
    """Tests for loading the calculation service payload."""

    def test_loads_valid_file(self, write_json, result_payload) -> None:
        path = write_json("result.json", result_payload)

        result = load_calculation_result(path)

        assert [item.profile_name for item in result.cutting_list] == [
            "Transom (55x55mm)",
            "Mullion (40x80mm)",
        ]
        assert result.cutting_list[0].stock_length == Decimal(6000)
        assert len(result.material_list) == 2
        assert result.accessory_totals[0].qty == 8
        assert result.rubber_totals[0].total_meters == Decimal("24.5")

    def test_single_glass_list_object_is_wrapped(self, result_payload) -> None:
        result = load_calculation_result_from_dict(result_payload)

        assert len(result.glass_list) == 1
        assert result.glass_list[0].sheet_type == "3310x2140mm"
        assert result.glass_list[0].cuts[0].w == Decimal(1000)

    def test_glass_list_may_be_a_list_or_null(self, result_payload) -> None:
        result_payload["glassList"] = [result_payload["glassList"]] * 2
        assert len(load_calculation_result_from_dict(result_payload).glass_list) == 2

        result_payload["glassList"] = None
        assert load_calculation_result_from_dict(result_payload).glass_list == []

    def test_snake_case_names_are_accepted(self, result_payload) -> None:
        data = {"cutting_list": result_payload["cuttingList"]}
        assert len(load_calculation_result_from_dict(data).cutting_list) == 2

    def test_bad_plan_keys_pass_validation(self, result_payload) -> None:
        """Plan keys are decoded later, per profile."""
        result_payload["cuttingList"][0]["plan"] = [{"offcut": ["x"]}]
        result = load_calculation_result_from_dict(result_payload)
        assert result.cutting_list[0].plan == [{"offcut": ["x"]}]

    def test_non_positive_dimensions_pass_validation(self, result_payload) -> None:
        """Zero stock and zero glass sizes fail later, for that item only."""
        result_payload["cuttingList"][0]["stock_length"] = 0
        result_payload["glassList"]["cuts"][0]["w"] = 0

        result = load_calculation_result_from_dict(result_payload)

        assert result.cutting_list[0].stock_length == 0
        assert result.glass_list[0].cuts[0].w == 0

    def test_to_domain(self, result_payload) -> None:
        item = load_calculation_result_from_dict(result_payload).cutting_list[1].to_domain()
        assert item.profile_name == "Mullion (40x80mm)"
        assert item.stock_length_mm == Decimal(5850)
        assert len(item.plan) == 1


class TestLoaderErrors:
    """Each failure is reported as ConfigError with its own error_type."""

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_calculation_result(tmp_path / "missing.json")

        assert exc_info.value.error_type == "file_not_found"
        assert exc_info.value.path == tmp_path / "missing.json"
        assert "not found" in str(exc_info.value)

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text('{"cuttingList": [', encoding="utf-8")

        with pytest.raises(ConfigError) as exc_info:
            load_calculation_result(path)

        error = exc_info.value
        assert error.error_type == "json_parse"
        assert error.details[0]["line"] == 1
        assert "Invalid JSON" in error.message

    @pytest.mark.skipif(
        sys.platform == "win32" or (hasattr(os, "geteuid") and os.geteuid() == 0),
        reason="file permissions are not enforced",
    )
    def test_unreadable_file(self, write_json) -> None:
        path = write_json("locked.json", {})
        path.chmod(0)
        try:
            with pytest.raises(ConfigError) as exc_info:
                load_config(path)
            assert exc_info.value.error_type == "permission_denied"
        finally:
            path.chmod(0o644)

    def test_validation_error_reports_json_path(self, result_payload) -> None:
        result_payload["cuttingList"][0]["stock_length"] = "six metres"

        with pytest.raises(ConfigError) as exc_info:
            load_calculation_result_from_dict(result_payload)

        error = exc_info.value
        assert error.error_type == "validation"
        assert "cuttingList[0].stock_length" in [d["path"] for d in error.details]
        assert error.message.startswith("Calculation result validation failed:")
        assert "(got: 'six metres')" in error.message

    def test_validation_error_from_file_keeps_path(self, write_json) -> None:
        path = write_json("result.json", {"cuttingList": [{"stock_length": 6000}]})

        with pytest.raises(ConfigError) as exc_info:
            load_calculation_result(path)

        assert exc_info.value.path == path
        assert exc_info.value.details[0]["path"] == "cuttingList[0].profile_name"


class TestExportConfiguration:
    """Tests for export settings."""

    def test_defaults(self) -> None:
        config = ExportConfiguration()

        assert config.pdf.page_size == "A4"
        assert config.pdf.show_date is True
        assert config.xlsx.sheet_title_cutting == "Cutting List"
        assert config.svg.scale == 0.1
        assert config.glass.min_visible_offcut_mm == Decimal(50)
        assert config.export_timeout_seconds == 30.0

    def test_empty_document_is_valid(self, write_json) -> None:
        assert load_config(write_json("config.json", {})) == ExportConfiguration()

    def test_partial_override(self) -> None:
        config = load_config_from_dict({"pdf": {"page_size": "letter"}, "company_name": "Acme"})
        assert config.pdf.page_size == "letter"
        assert config.pdf.show_date is True
        assert config.company_name == "Acme"

    def test_unknown_key_is_rejected(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config_from_dict({"pdf": {"colour": "red"}})
        assert exc_info.value.details[0]["path"] == "pdf.colour"

    def test_invalid_sheet_title(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config_from_dict({"xlsx": {"sheet_title_glass": "Glass/Cuts"}})
        assert exc_info.value.details[0]["path"] == "xlsx.sheet_title_glass"

    def test_sheet_titles_must_be_distinct(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config_from_dict({"xlsx": {"sheet_title_materials": "skipped"}})
        assert exc_info.value.details[0]["path"] == "xlsx"
        assert "distinct" in exc_info.value.message

    def test_newer_minor_version_is_accepted(self) -> None:
        assert load_config_from_dict({"schema_version": "1.4"}).schema_version == "1.4"

    def test_unsupported_major_version(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config_from_dict({"schema_version": "2.0"})
        assert "Unsupported schema version" in exc_info.value.message

    def test_timeout_must_be_positive(self) -> None:
        with pytest.raises(ConfigError):
            load_config_from_dict({"export_timeout_seconds": 0})


class TestPriceList:
    """Tests for price list loading."""

    def test_loads_prices(self, write_json, price_payload) -> None:
        prices = load_price_list(write_json("prices.json", price_payload))

        assert prices.prices["Transom (55x55mm)"] == Decimal(18500)
        assert prices.waste_factors["Corner cleat"] == Decimal(10)

    def test_negative_price_is_rejected(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_price_list_from_dict({"prices": {"Glass": -5}})

        assert exc_info.value.error_type == "validation"
        assert "Glass" in exc_info.value.message

    def test_unknown_section_is_rejected(self) -> None:
        with pytest.raises(ConfigError):
            load_price_list_from_dict({"discounts": {}})
