"""Pydantic models describing the public API surface."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from typing_extensions import Self

__all__ = [
    "IncomeTaxRequest",
    "LevyRequest",
    "LineItemInput",
    "PayrollBreakdownRequest",
    "PayrollRunRequest",
    "format_validation_error",
]


class LineItemInput(BaseModel):
    """Single invoice or sale line."""

    model_config = ConfigDict(extra="forbid")

    description: str = ""
    quantity: Decimal = Decimal("1")
    unit_price: Decimal

    def as_mapping(self) -> dict[str, Any]:
        return self.model_dump()


class LevyRequest(BaseModel):
    """Payload accepted by the levy endpoint.

    Either a ``subtotal`` or a list of ``line_items`` is required. ``tax``
    replaces the active levy configuration for this request only.
    """

    model_config = ConfigDict(extra="forbid")

    subtotal: Decimal | None = None
    line_items: list[LineItemInput] | None = None
    tax: dict[str, Any] | None = None

    @model_validator(mode="after")
    def _require_single_source(self) -> Self:
        if (self.subtotal is None) == (self.line_items is None):
            raise ValueError("Provide exactly one of 'subtotal' or 'line_items'")
        return self


class PayrollBreakdownRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    gross_pay: Decimal
    payroll: dict[str, Any] | None = None


class IncomeTaxRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    taxable_income: Decimal
    tax_brackets: list[dict[str, Any]] | None = None


class PayrollRunRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    entries: list[dict[str, Any]] = Field(default_factory=list)
    payroll: dict[str, Any] | None = None


def format_validation_error(error: ValidationError) -> str:
    """Return a concise human-readable description of validation issues."""

    messages: list[str] = []
    for issue in error.errors():
        location = ".".join(str(part) for part in issue.get("loc", ()))
        message = str(issue.get("msg", "Invalid value")).removeprefix("Value error, ")
        if location:
            messages.append(f"{location}: {message}")
        else:
            messages.append(message)

    details = "; ".join(messages) if messages else str(error)
    return f"Invalid request payload: {details}"
