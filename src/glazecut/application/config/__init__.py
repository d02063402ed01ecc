"""Export settings and JSON input loading.

Public API:
    - ExportConfiguration: Root export settings model
    - PdfOutputConfigSchema, XlsxOutputConfigSchema, SvgOutputConfigSchema,
      GlassConfigSchema: Per-concern settings
    - PriceListSchema: Material prices and waste factors
    - load_config / load_config_from_dict: Load export settings
    - load_calculation_result / load_calculation_result_from_dict: Load a
      calculation service payload
    - load_price_list / load_price_list_from_dict: Load a price list
    - ConfigError: Exception for any load or validation failure

Example:
    >>> from pathlib import Path
    >>> from glazecut.application.config import load_calculation_result, ConfigError
    >>>
    >>> try:
    ...     result = load_calculation_result(Path("result.json"))
    ...     print(f"Profiles: {len(result.cutting_list)}")
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from .loader import (
    ConfigError,
    load_calculation_result,
    load_calculation_result_from_dict,
    load_config,
    load_config_from_dict,
    load_price_list,
    load_price_list_from_dict,
)
from .schema import (
    SUPPORTED_VERSIONS,
    ExportConfiguration,
    GlassConfigSchema,
    PdfOutputConfigSchema,
    PriceListSchema,
    SvgOutputConfigSchema,
    XlsxOutputConfigSchema,
)

__all__ = [
    "SUPPORTED_VERSIONS",
    "ConfigError",
    "ExportConfiguration",
    "GlassConfigSchema",
    "PdfOutputConfigSchema",
    "PriceListSchema",
    "SvgOutputConfigSchema",
    "XlsxOutputConfigSchema",
    "load_calculation_result",
    "load_calculation_result_from_dict",
    "load_config",
    "load_config_from_dict",
    "load_price_list",
    "load_price_list_from_dict",
]
