"""Domain-specific calculation helpers."""

from .income_tax import compute_income_tax, compute_income_tax_bands
from .levies import compute_tax_breakdown
from .payroll import compute_payroll_breakdown
from .results import (
    BandTax,
    LevyAmount,
    PayrollBreakdown,
    SocialSecuritySplit,
    TaxBreakdown,
)
from .social_security import split_social_security
from .utils import format_percentage, round_currency, to_amount

__all__ = [
    "BandTax",
    "LevyAmount",
    "PayrollBreakdown",
    "SocialSecuritySplit",
    "TaxBreakdown",
    "compute_income_tax",
    "compute_income_tax_bands",
    "compute_payroll_breakdown",
    "compute_tax_breakdown",
    "format_percentage",
    "round_currency",
    "split_social_security",
    "to_amount",
]
