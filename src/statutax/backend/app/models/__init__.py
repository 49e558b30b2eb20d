"""Typed request models shared across the HTTP routes."""

from .api import (
    IncomeTaxRequest,
    LevyRequest,
    LineItemInput,
    PayrollBreakdownRequest,
    PayrollRunRequest,
    format_validation_error,
)

__all__ = [
    "IncomeTaxRequest",
    "LevyRequest",
    "LineItemInput",
    "PayrollBreakdownRequest",
    "PayrollRunRequest",
    "format_validation_error",
]
