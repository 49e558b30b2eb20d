"""Parallel levy calculation for invoice and cash-sale subtotals."""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from statutax.backend.config.business_config import parse_tax_configuration
from statutax.backend.config.schema import TaxConfiguration
from statutax.backend.config.validator import ensure_valid_tax_configuration

from .results import LevyAmount, TaxBreakdown
from .utils import format_percentage, round_currency, to_amount


def compute_tax_breakdown(
    subtotal: Any,
    config: TaxConfiguration | Mapping[str, Any],
) -> TaxBreakdown:
    """Return the itemised levies and grand total for ``subtotal``.

    Every levy is charged on the same pre-tax base; no levy is charged on
    another levy. Each amount is rounded on its own and the totals are sums of
    the rounded amounts, so ``total_amount == subtotal + total_levies`` holds
    exactly.
    """

    base = to_amount(subtotal, "subtotal")
    tax_config = ensure_valid_tax_configuration(parse_tax_configuration(config))

    vat_amount = _levy(base, tax_config.vat_rate)
    nhil_amount = _levy(base, tax_config.nhil_rate)
    getfund_amount = _levy(base, tax_config.getfund_rate)

    custom_amounts = tuple(
        LevyAmount(
            code=f"custom:{levy.name}",
            name=f"{levy.name} ({format_percentage(levy.rate)})",
            rate=levy.rate,
            amount=_levy(base, levy.rate),
        )
        for levy in tax_config.custom_levies
    )

    total_levies = vat_amount + nhil_amount + getfund_amount
    for levy in custom_amounts:
        total_levies += levy.amount

    rounded_subtotal = round_currency(base)

    return TaxBreakdown(
        subtotal=rounded_subtotal,
        vat_rate=tax_config.vat_rate,
        vat_amount=vat_amount,
        nhil_rate=tax_config.nhil_rate,
        nhil_amount=nhil_amount,
        getfund_rate=tax_config.getfund_rate,
        getfund_amount=getfund_amount,
        custom_levy_amounts=custom_amounts,
        total_levies=total_levies,
        total_amount=rounded_subtotal + total_levies,
    )


def _levy(base: Decimal, rate: Decimal) -> Decimal:
    return round_currency(base * rate)


__all__ = ["compute_tax_breakdown"]
