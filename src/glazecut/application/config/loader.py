"""JSON loaders with comprehensive error handling.

This module loads the three JSON documents the tool consumes: the
calculation result returned by the calculation service, the optional
export settings file, and the optional price list. File system errors,
JSON parsing errors and Pydantic validation errors are all reported as
``ConfigError`` with clear, actionable messages.
"""

import json
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from glazecut.application.config.schema import ExportConfiguration, PriceListSchema
from glazecut.application.schemas import CalculationResultSchema

ModelT = TypeVar("ModelT", bound=BaseModel)


class ConfigError(Exception):
    """Exception raised when a JSON input cannot be loaded or validated.

    Attributes:
        message: The primary error message
        error_type: Category of error (file_not_found, permission_denied,
            file_read_error, json_parse, validation)
        path: Path to the file (if applicable)
        details: Additional error details (line/column for JSON, validation errors, etc.)
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


def _format_json_path(loc: tuple[str | int, ...]) -> str:
    """Format a Pydantic location tuple as a JSON path string.

    Examples:
        >>> _format_json_path(("cuttingList", 0, "stock_length"))
        'cuttingList[0].stock_length'
        >>> _format_json_path(("pdf", "page_size"))
        'pdf.page_size'
    """
    parts: list[str] = []
    for segment in loc:
        if isinstance(segment, int):
            if parts:
                parts[-1] = f"{parts[-1]}[{segment}]"
            else:
                parts.append(f"[{segment}]")
        else:
            parts.append(str(segment))
    return ".".join(parts)


def _extract_validation_errors(
    error: PydanticValidationError,
) -> list[dict[str, Any]]:
    details: list[dict[str, Any]] = []
    for err in error.errors():
        details.append(
            {
                "path": _format_json_path(err["loc"]),
                "message": err["msg"],
                "value": err.get("input"),
                "error_type": err["type"],
            }
        )
    return details


def _format_validation_error_message(title: str, details: list[dict[str, Any]]) -> str:
    lines = [f"{title} validation failed:"]
    for detail in details:
        path = detail["path"]
        message = detail["message"]
        value = detail.get("value")
        if value is not None and not isinstance(value, (dict, list)):
            lines.append(f"  - {path}: {message} (got: {value!r})")
        else:
            lines.append(f"  - {path}: {message}")
    return "\n".join(lines)


def _read_json(path: Path, title: str) -> Any:
    """Read and parse a JSON file, raising ConfigError on any failure."""
    if not path.exists():
        raise ConfigError(
            message=f"{title} file not found: {path}",
            error_type="file_not_found",
            path=path,
        )

    try:
        content = path.read_text(encoding="utf-8")
    except PermissionError:
        raise ConfigError(
            message=f"Permission denied reading {title.lower()} file: {path}",
            error_type="permission_denied",
            path=path,
        )
    except OSError as e:
        raise ConfigError(
            message=f"Error reading {title.lower()} file: {path}: {e}",
            error_type="file_read_error",
            path=path,
        )

    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            message=(
                f"Invalid JSON in {title.lower()} file: {path} "
                f"(line {e.lineno}, column {e.colno}): {e.msg}"
            ),
            error_type="json_parse",
            path=path,
            details=[{"line": e.lineno, "column": e.colno, "message": e.msg}],
        )


def _validate(
    model: type[ModelT], data: Any, title: str, path: Path | None = None
) -> ModelT:
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        details = _extract_validation_errors(e)
        raise ConfigError(
            message=_format_validation_error_message(title, details),
            error_type="validation",
            path=path,
            details=details,
        )


def load_config(path: Path) -> ExportConfiguration:
    """Load and validate export settings from a JSON file.

    Raises:
        ConfigError: If the file cannot be loaded or validated.
    """
    data = _read_json(path, "Config")
    return _validate(ExportConfiguration, data, "Configuration", path)


def load_config_from_dict(data: dict[str, Any]) -> ExportConfiguration:
    """Validate export settings supplied as a dictionary."""
    return _validate(ExportConfiguration, data, "Configuration")


def load_calculation_result(path: Path) -> CalculationResultSchema:
    """Load and validate a calculation result from a JSON file.

    Example:
        >>> from pathlib import Path
        >>> try:
        ...     result = load_calculation_result(Path("result.json"))
        ... except ConfigError as e:
        ...     print(f"Error: {e}")
        ...     for detail in e.details:
        ...         print(f"  {detail['path']}: {detail['message']}")
    """
    data = _read_json(path, "Calculation result")
    return _validate(CalculationResultSchema, data, "Calculation result", path)


def load_calculation_result_from_dict(data: dict[str, Any]) -> CalculationResultSchema:
    """Validate a calculation result supplied as a dictionary."""
    return _validate(CalculationResultSchema, data, "Calculation result")


def load_price_list(path: Path) -> PriceListSchema:
    """Load and validate a price list from a JSON file."""
    data = _read_json(path, "Price list")
    return _validate(PriceListSchema, data, "Price list", path)


def load_price_list_from_dict(data: dict[str, Any]) -> PriceListSchema:
    """Validate a price list supplied as a dictionary."""
    return _validate(PriceListSchema, data, "Price list")
