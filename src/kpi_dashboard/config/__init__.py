"""Configuration models and loaders for the KPI dashboard."""

from .models import (
    ApiConfig,
    DashboardConfig,
    GenerationConfig,
    KpiConfig,
)
from .settings import (
    get_config_from_env,
    load_config,
    load_config_with_fallback,
)

__all__ = [
    "ApiConfig",
    "DashboardConfig",
    "GenerationConfig",
    "KpiConfig",
    "get_config_from_env",
    "load_config",
    "load_config_with_fallback",
]
