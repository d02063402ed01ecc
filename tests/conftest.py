"""Pytest configuration and shared fixtures for cutting list tests."""

from __future__ import annotations

import copy
import datetime
import json
from pathlib import Path
from typing import Any

import pytest

from glazecut.application import BuildSolutionCommand, ExportMeta, SolutionOutput
from glazecut.application.config import (
    ExportConfiguration,
    PriceListSchema,
    load_calculation_result_from_dict,
)

ISSUE_DATE = datetime.date(2026, 10, 19)

RESULT_PAYLOAD: dict[str, Any] = {
    "materialList": [
        {"item": "Transom (55x55mm)", "units": 6, "type": "Profile"},
        {"item": "Mullion (40x80mm)", "units": 2, "type": "Profile"},
    ],
    "cuttingList": [
        {
            "profile_name": "Transom (55x55mm)",
            "stock_length": 6000,
            "plan": [
                {"cut_1200mm": ["cut_1200mm"] * 4},
                {"cut_2500mm": ["cut_2500mm"] * 2, "cut_900mm": ["cut_900mm"]},
            ],
        },
        {
            "profile_name": "Mullion (40x80mm)",
            "stock_length": 5850,
            "plan": [{"cut_2925mm": ["cut_2925mm"] * 2}],
        },
    ],
    "glassList": {
        "sheet_type": "3310x2140mm",
        "total_sheets": 4,
        "cuts": [
            {"w": 1000, "h": 1000, "qty": 20},
            {"w": 500, "h": 600, "qty": 3},
        ],
    },
    "rubberTotals": [{"name": "EPDM gasket", "total_meters": 24.5}],
    "accessoryTotals": [{"name": "Corner cleat", "qty": 8}],
}

PRICE_PAYLOAD: dict[str, Any] = {
    "prices": {"Transom (55x55mm)": 18500, "Corner cleat": 250},
    "waste_factors": {"Corner cleat": 10},
}


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


@pytest.fixture
def result_payload() -> dict[str, Any]:
    """A calculation result with two profiles, one glass list and extras."""
    return copy.deepcopy(RESULT_PAYLOAD)


@pytest.fixture
def price_payload() -> dict[str, Any]:
    return copy.deepcopy(PRICE_PAYLOAD)


@pytest.fixture
def export_meta() -> ExportMeta:
    return ExportMeta(
        project_name="Villa 12",
        customer_name="A. Customer",
        issue_date=ISSUE_DATE,
    )


@pytest.fixture
def solution(
    result_payload: dict[str, Any],
    price_payload: dict[str, Any],
    export_meta: ExportMeta,
) -> SolutionOutput:
    """Solution built from the sample payload with prices applied."""
    result = load_calculation_result_from_dict(result_payload)
    command = BuildSolutionCommand.from_config(
        ExportConfiguration(), PriceListSchema.model_validate(price_payload)
    )
    return command.execute(result, export_meta)


@pytest.fixture
def write_json(tmp_path: Path):
    """Write a JSON document into the test's temporary directory."""

    def _write(name: str, data: Any) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write
