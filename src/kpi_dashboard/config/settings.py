"""
Configuration loading and management for the KPI dashboard.

This module provides utilities for loading, validating, and managing
configuration settings from files and environment variables.
"""

import logging
import os
from pathlib import Path

from pydantic import ValidationError

from ..shared.exceptions import ConfigurationError
from .models import DashboardConfig

logger = logging.getLogger(__name__)

CONFIG_FILE_ENV = "DASHBOARD_CONFIG_FILE"

# Environment variable -> (section, field) in DashboardConfig
ENV_OVERRIDES = {
    "DASHBOARD_SEED": (None, "seed"),
    "DASHBOARD_LOG_LEVEL": (None, "log_level"),
    "DASHBOARD_ORDER_COUNT": ("generation", "order_count"),
    "DASHBOARD_LOOKBACK_DAYS": ("generation", "lookback_days"),
    "DASHBOARD_GROWTH_MULTIPLIER": ("kpi", "growth_multiplier"),
}


def load_config(
    config_path: str | Path | None = None, config_name: str = "config.json"
) -> DashboardConfig:
    """
    Load configuration from file with path resolution.

    Args:
        config_path: Explicit path to config file or directory containing config
        config_name: Name of config file (default: "config.json")

    Returns:
        DashboardConfig: Loaded and validated configuration

    Raises:
        FileNotFoundError: If no configuration file is found
        ValueError: If configuration is invalid
    """
    if config_path is None:
        search_paths = [
            Path.cwd() / config_name,
            Path.cwd() / "config" / config_name,
            Path(__file__).parent.parent.parent.parent / config_name,
        ]

        for path in search_paths:
            if path.exists():
                config_path = path
                break
        else:
            raise FileNotFoundError(
                f"Configuration file '{config_name}' not found in any of: "
                f"{[str(p) for p in search_paths]}"
            )

    config_path = Path(config_path)

    if config_path.is_dir():
        config_path = config_path / config_name

    return DashboardConfig.from_file(config_path)


def get_config_from_env() -> DashboardConfig | None:
    """
    Try to load configuration from environment variables.

    Returns:
        DashboardConfig if any dashboard environment variable is set,
        None otherwise

    Raises:
        ConfigurationError: If an environment value does not validate
    """
    config_file_env = os.getenv(CONFIG_FILE_ENV)
    if config_file_env:
        return load_config(config_file_env)

    env_values = {key: os.getenv(key) for key in ENV_OVERRIDES}
    if not any(env_values.values()):
        return None

    config_data: dict = {}
    for env_name, value in env_values.items():
        if not value:
            continue
        section, field = ENV_OVERRIDES[env_name]
        if section is None:
            config_data[field] = value
        else:
            config_data.setdefault(section, {})[field] = value

    try:
        return DashboardConfig(**config_data)
    except ValidationError as e:
        raise ConfigurationError(
            "Invalid environment variable configuration", original_error=e
        ) from e


def load_config_with_fallback(config_path: str | Path | None = None) -> DashboardConfig:
    """
    Load configuration with fallback to environment variables and defaults.

    Priority order:
    1. Explicit config file path
    2. Environment variable DASHBOARD_CONFIG_FILE
    3. Individual DASHBOARD_* environment variables
    4. Default locations (config.json, config/config.json)
    5. Built-in defaults

    Args:
        config_path: Optional explicit path to config file

    Returns:
        DashboardConfig: Loaded configuration
    """
    if config_path:
        try:
            return load_config(config_path)
        except FileNotFoundError:
            logger.warning(f"Config file {config_path} not found, trying fallbacks")

    try:
        env_config = get_config_from_env()
        if env_config:
            return env_config
    except (ConfigurationError, FileNotFoundError) as e:
        logger.warning(f"Ignoring environment configuration: {e}")

    try:
        return load_config()
    except FileNotFoundError:
        pass

    logger.info("No configuration found, using built-in defaults")
    return DashboardConfig()
