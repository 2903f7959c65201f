"""Shared models, exceptions and infrastructure for the KPI dashboard."""
