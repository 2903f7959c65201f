"""
Configuration models for the KPI dashboard.

These models define the structure and validation for the config.json file.
Every section has defaults, so an empty document yields the demo settings.
"""

import json
import logging
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)


class GenerationConfig(BaseModel):
    """Configuration for synthetic order generation."""

    order_count: int = Field(
        2000, gt=0, description="Number of orders in the generated corpus"
    )
    lookback_days: int = Field(
        90,
        ge=1,
        description="Orders are spread over this many days before generation time",
    )


class KpiConfig(BaseModel):
    """Configuration for KPI computation."""

    growth_multiplier: float = Field(
        1.0,
        gt=0.0,
        description=(
            "Multiplier applied to current-period values before computing "
            "percent change. Demo-only; 1.0 reports the real change."
        ),
    )
    current_conversion_rate: float = Field(
        2.4,
        ge=0.0,
        description="Synthetic conversion rate reported for the current period",
    )
    previous_conversion_rate: float = Field(
        2.1,
        ge=0.0,
        description="Synthetic conversion rate reported for the previous period",
    )


class ApiConfig(BaseModel):
    """Configuration for the HTTP layer."""

    default_page_size: int = Field(
        10, gt=0, le=500, description="Rows per page for table endpoints"
    )
    export_rate_limit: int = Field(
        10, gt=0, description="Maximum CSV exports per client per window"
    )
    export_rate_window_seconds: int = Field(
        60, gt=0, description="Rate limit window for CSV exports in seconds"
    )


class DashboardConfig(BaseModel):
    """Main configuration model for the KPI dashboard."""

    seed: int = Field(
        42,
        ge=0,
        le=2**32 - 1,
        description="Random seed for reproducible order generation",
    )
    generation: GenerationConfig = Field(
        default_factory=GenerationConfig,
        description="Synthetic order generation settings",
    )
    kpi: KpiConfig = Field(
        default_factory=KpiConfig, description="KPI computation settings"
    )
    api: ApiConfig = Field(default_factory=ApiConfig, description="HTTP settings")
    log_level: str = Field("INFO", description="Root log level")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate that the log level is a standard logging level name."""
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @classmethod
    def from_file(cls, file_path: str | Path) -> "DashboardConfig":
        """
        Load configuration from a JSON file.

        Args:
            file_path: Path to the configuration JSON file

        Returns:
            DashboardConfig instance

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the JSON is invalid or doesn't match the schema
        """
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {file_path}")

        try:
            with path.open("r") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in configuration file: {e}")

        return cls(**data)

    def to_file(self, file_path: str | Path) -> None:
        """
        Save configuration to a JSON file.

        Args:
            file_path: Path where to save the configuration file
        """
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with path.open("w") as f:
            json.dump(self.model_dump(), f, indent=2)
