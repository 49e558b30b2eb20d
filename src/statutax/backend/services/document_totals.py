"""Invoice and cash-sale totals built from line items."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from statutax.backend.config.schema import TaxConfiguration
from statutax.backend.errors import InvalidInput

from .calculators import TaxBreakdown, compute_tax_breakdown, round_currency, to_amount
from .calculators.utils import ZERO


@dataclass(frozen=True)
class DocumentLine:
    description: str
    quantity: Decimal
    unit_price: Decimal
    total: Decimal

    def as_dict(self) -> dict[str, Any]:
        return {
            "description": self.description,
            "quantity": self.quantity,
            "unit_price": self.unit_price,
            "total": self.total,
        }


@dataclass(frozen=True)
class DocumentTotals:
    lines: tuple[DocumentLine, ...]
    breakdown: TaxBreakdown

    def as_dict(self) -> dict[str, Any]:
        return {
            "lines": [line.as_dict() for line in self.lines],
            **self.breakdown.as_dict(),
        }


def _build_line(raw: Mapping[str, Any], index: int) -> DocumentLine:
    if not isinstance(raw, Mapping):
        raise InvalidInput(f"line_items.{index}: line items must be mappings")

    quantity = to_amount(raw.get("quantity", 1), f"line_items.{index}.quantity")
    unit_price = to_amount(raw.get("unit_price"), f"line_items.{index}.unit_price")
    description = str(raw.get("description") or "")

    return DocumentLine(
        description=description,
        quantity=quantity,
        unit_price=unit_price,
        total=round_currency(quantity * unit_price),
    )


def compute_document_totals(
    line_items: Iterable[Mapping[str, Any]],
    config: TaxConfiguration | Mapping[str, Any],
) -> DocumentTotals:
    """Total ``line_items`` and apply the levy breakdown to their subtotal."""

    lines = tuple(_build_line(item, index) for index, item in enumerate(line_items))

    subtotal = ZERO
    for line in lines:
        subtotal += line.total

    return DocumentTotals(lines=lines, breakdown=compute_tax_breakdown(subtotal, config))


__all__ = ["DocumentLine", "DocumentTotals", "compute_document_totals"]
