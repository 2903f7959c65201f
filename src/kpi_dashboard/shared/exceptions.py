"""
Custom exceptions for the KPI dashboard.

This module contains specialized exception classes for handling error
conditions in configuration loading, corpus generation and aggregation.
"""

from pathlib import Path
from typing import Any


class DashboardError(Exception):
    """Base exception for all KPI dashboard errors."""

    pass


class ConfigurationError(DashboardError):
    """Exception raised when configuration cannot be loaded or is invalid."""

    def __init__(
        self,
        message: str,
        file_path: Path | None = None,
        original_error: Exception | None = None,
    ):
        self.file_path = file_path
        self.original_error = original_error

        if file_path:
            message = f"Error loading configuration '{file_path}': {message}"

        if original_error:
            message = f"{message} (Original error: {original_error})"

        super().__init__(message)


class CorpusGenerationError(DashboardError):
    """Exception raised when the synthetic order corpus cannot be built."""

    def __init__(
        self,
        message: str,
        seed: int | None = None,
        order_count: int | None = None,
        original_error: Exception | None = None,
    ):
        self.seed = seed
        self.order_count = order_count
        self.original_error = original_error

        error_parts = [message]

        if seed is not None:
            error_parts.append(f"Seed: {seed}")

        if order_count is not None:
            error_parts.append(f"Orders: {order_count}")

        if original_error:
            error_parts.append(f"Original error: {original_error}")

        super().__init__(" | ".join(error_parts))


class AggregationError(DashboardError):
    """Exception raised when KPI or chart aggregation fails."""

    def __init__(
        self,
        message: str,
        filters: dict[str, Any] | None = None,
        original_error: Exception | None = None,
    ):
        self.filters = filters or {}
        self.original_error = original_error

        if filters:
            details = ", ".join(f"{key}: {value}" for key, value in filters.items())
            message = f"{message} (Filters: {details})"

        if original_error:
            message = f"{message} (Original error: {original_error})"

        super().__init__(message)
