"""
Simple configuration management.

To avoid external dependencies on the ``pydantic_settings`` package, the
``Settings`` dataclass reads configuration directly from environment
variables.  Defaults are provided for all fields.  In a production
deployment you should override these via environment variables.
"""

import os
from dataclasses import dataclass


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Inventory API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = _env_flag("DEBUG")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Path of the JSON document holding the product collection.  Relative
    # paths are resolved against the process working directory when the
    # store is created.
    data_file: str = os.getenv("DATA_FILE", "data/products.json")

    # Products with a quantity strictly below this value count as low stock
    # on the dashboard and in the report.
    low_stock_threshold: int = int(os.getenv("LOW_STOCK_THRESHOLD", "5"))

    # When disabled, an unreadable data file makes ``GET /records`` answer
    # with an empty list (the error is logged).  When enabled, the failure
    # is reported to the client as a 500 response.
    strict_reads: bool = _env_flag("STRICT_READS")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes values at class definition time, environment variables should
# be set before importing this module.
settings = Settings()
