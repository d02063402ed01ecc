"""Pydantic request schemas for the REST API."""

import datetime
from typing import Any

from pydantic import BaseModel, Field


class SolutionRequest(BaseModel):
    """Request carrying a calculation result and the document identity.

    The nested payloads are validated by the same loaders the CLI uses,
    so error responses carry the same JSON paths as CLI messages.
    """

    result: dict[str, Any] = Field(..., description="Calculation service result JSON")
    project_name: str = Field(default="Untitled", min_length=1, description="Project name")
    customer_name: str = Field(default="", description="Customer printed in the header")
    issue_date: datetime.date | None = Field(
        default=None, description="Document date (defaults to today)"
    )
    config: dict[str, Any] | None = Field(default=None, description="Export settings JSON")
    prices: dict[str, Any] | None = Field(
        default=None, description='Price list JSON: {"prices": {...}, "waste_factors": {...}}'
    )
