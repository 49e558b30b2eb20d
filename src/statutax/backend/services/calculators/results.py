"""Immutable result records produced by the calculators.

Each record is created per call and owned by the caller. ``as_dict`` keeps
``Decimal`` values so callers choose how to serialise money.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from .utils import ZERO, format_percentage


@dataclass(frozen=True)
class LevyAmount:
    """One itemised levy line."""

    code: str
    name: str
    rate: Decimal
    amount: Decimal

    def as_dict(self) -> dict[str, Any]:
        return {"code": self.code, "name": self.name, "rate": self.rate, "amount": self.amount}


@dataclass(frozen=True)
class TaxBreakdown:
    """Itemised levies and totals for a single invoice or sale subtotal."""

    subtotal: Decimal
    vat_rate: Decimal
    vat_amount: Decimal
    nhil_rate: Decimal
    nhil_amount: Decimal
    getfund_rate: Decimal
    getfund_amount: Decimal
    custom_levy_amounts: tuple[LevyAmount, ...] = field(default_factory=tuple)
    total_levies: Decimal = ZERO
    total_amount: Decimal = ZERO

    def levies(self) -> tuple[LevyAmount, ...]:
        """Return every levy in presentation order, standard levies first."""

        standard = (
            LevyAmount(
                "vat",
                f"VAT ({format_percentage(self.vat_rate)})",
                self.vat_rate,
                self.vat_amount,
            ),
            LevyAmount(
                "nhil",
                f"NHIL ({format_percentage(self.nhil_rate)})",
                self.nhil_rate,
                self.nhil_amount,
            ),
            LevyAmount(
                "getfund",
                f"GETFund ({format_percentage(self.getfund_rate)})",
                self.getfund_rate,
                self.getfund_amount,
            ),
        )
        return standard + self.custom_levy_amounts

    def as_dict(self) -> dict[str, Any]:
        return {
            "subtotal": self.subtotal,
            "vat_rate": self.vat_rate,
            "vat_amount": self.vat_amount,
            "nhil_rate": self.nhil_rate,
            "nhil_amount": self.nhil_amount,
            "getfund_rate": self.getfund_rate,
            "getfund_amount": self.getfund_amount,
            "custom_levy_amounts": [levy.as_dict() for levy in self.custom_levy_amounts],
            "levies": [levy.as_dict() for levy in self.levies()],
            "total_levies": self.total_levies,
            "total_amount": self.total_amount,
        }


@dataclass(frozen=True)
class SocialSecuritySplit:
    employee_contribution: Decimal
    employer_contribution: Decimal

    def as_dict(self) -> dict[str, Any]:
        return {
            "employee_contribution": self.employee_contribution,
            "employer_contribution": self.employer_contribution,
        }


@dataclass(frozen=True)
class BandTax:
    """Income taxed inside one bracket and the rounded tax it produced."""

    lower_bound: Decimal
    upper_bound: Decimal | None
    rate: Decimal
    taxable_amount: Decimal
    tax: Decimal

    def as_dict(self) -> dict[str, Any]:
        return {
            "lower_bound": self.lower_bound,
            "upper_bound": self.upper_bound,
            "rate": self.rate,
            "taxable_amount": self.taxable_amount,
            "tax": self.tax,
        }


@dataclass(frozen=True)
class PayrollBreakdown:
    """Withholding for one employee's gross pay."""

    gross_pay: Decimal
    employee_contribution: Decimal
    employer_contribution: Decimal
    taxable_income: Decimal
    income_tax: Decimal
    bands: tuple[BandTax, ...] = field(default_factory=tuple)

    @property
    def net_pay(self) -> Decimal:
        return self.gross_pay - self.employee_contribution - self.income_tax

    @property
    def cost_to_business(self) -> Decimal:
        return self.gross_pay + self.employer_contribution

    def as_dict(self) -> dict[str, Any]:
        return {
            "gross_pay": self.gross_pay,
            "employee_contribution": self.employee_contribution,
            "employer_contribution": self.employer_contribution,
            "taxable_income": self.taxable_income,
            "income_tax": self.income_tax,
            "net_pay": self.net_pay,
            "bands": [band.as_dict() for band in self.bands],
        }


__all__ = [
    "BandTax",
    "LevyAmount",
    "PayrollBreakdown",
    "SocialSecuritySplit",
    "TaxBreakdown",
]
