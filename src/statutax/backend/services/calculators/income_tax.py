"""Progressive, bracket-based income tax withheld from payroll."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from decimal import Decimal
from typing import Any

from statutax.backend.config.business_config import parse_bracket_table
from statutax.backend.config.schema import IncomeTaxBracket
from statutax.backend.config.validator import ensure_valid_bracket_table

from .results import BandTax
from .utils import ZERO, round_currency, to_amount

BracketTableInput = Sequence[IncomeTaxBracket | Mapping[str, Any]]


def compute_income_tax_bands(
    taxable_income: Any, brackets: BracketTableInput
) -> tuple[BandTax, ...]:
    """Split ``taxable_income`` across ``brackets`` and tax each band.

    Parameters
    ----------
    taxable_income:
        Income already net of any deduction the caller applies before
        withholding. Must be non-negative.
    brackets:
        Contiguous bracket table sorted by lower bound and terminated by a
        single open-ended bracket. The table is validated, never repaired.

    The walk starts at zero, so the first bracket's rate applies from zero even
    when its ``lower_bound`` is higher. Each band's tax is rounded to the cent;
    only bands that received income are returned.
    """

    income = to_amount(taxable_income, "taxable_income")
    table = ensure_valid_bracket_table(parse_bracket_table(brackets))

    remaining = income
    previous_limit = ZERO

    bands: list[BandTax] = []
    for bracket in table:
        if remaining <= 0:
            break

        if bracket.upper_bound is None:
            band_width = remaining
        else:
            band_width = bracket.upper_bound - previous_limit

        taxable_in_band = min(remaining, band_width)
        if taxable_in_band > 0:
            bands.append(
                BandTax(
                    lower_bound=bracket.lower_bound,
                    upper_bound=bracket.upper_bound,
                    rate=bracket.rate,
                    taxable_amount=taxable_in_band,
                    tax=round_currency(taxable_in_band * bracket.rate),
                )
            )
        remaining -= taxable_in_band
        previous_limit = (
            bracket.upper_bound
            if bracket.upper_bound is not None
            else previous_limit + band_width
        )

    return tuple(bands)


def compute_income_tax(taxable_income: Any, brackets: BracketTableInput) -> Decimal:
    """Return the income tax due on ``taxable_income``.

    The result is the sum of the rounded band taxes, so it always matches a
    printed band schedule and never decreases as income grows.
    """

    total = round_currency(ZERO)
    for band in compute_income_tax_bands(taxable_income, brackets):
        total += band.tax
    return total


__all__ = ["BracketTableInput", "compute_income_tax", "compute_income_tax_bands"]
