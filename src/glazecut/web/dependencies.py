"""Request-scoped solution building for the REST API."""

import datetime
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends

from glazecut.application import BuildSolutionCommand, ExportMeta, SolutionOutput
from glazecut.application.config import (
    ExportConfiguration,
    PriceListSchema,
    load_calculation_result_from_dict,
    load_config_from_dict,
    load_price_list_from_dict,
)
from glazecut.web.schemas.requests import SolutionRequest


@dataclass
class SolvedRequest:
    """A rebuilt solution together with the settings it was built with."""

    solution: SolutionOutput
    config: ExportConfiguration


def solve_request(request: SolutionRequest) -> SolvedRequest:
    """Validate the nested payloads and run BuildSolutionCommand.

    Raises:
        ConfigError: If the result, settings or price list is invalid.
    """
    config = (
        load_config_from_dict(request.config)
        if request.config is not None
        else ExportConfiguration()
    )
    prices = (
        load_price_list_from_dict(request.prices)
        if request.prices is not None
        else PriceListSchema()
    )
    result = load_calculation_result_from_dict(request.result)

    meta = ExportMeta(
        project_name=request.project_name,
        customer_name=request.customer_name,
        issue_date=request.issue_date or datetime.date.today(),
        company_name=config.company_name,
    )
    solution = BuildSolutionCommand.from_config(config, prices).execute(result, meta)
    return SolvedRequest(solution=solution, config=config)


# Type alias for cleaner endpoint signatures
SolvedRequestDep = Annotated[SolvedRequest, Depends(solve_request)]
