"""Service-layer helpers for the statutax backend."""

from .calculators import (
    compute_income_tax,
    compute_payroll_breakdown,
    compute_tax_breakdown,
    split_social_security,
)
from .document_totals import compute_document_totals
from .payroll_run import PayrollEntry, process_payroll_run

__all__ = [
    "PayrollEntry",
    "compute_document_totals",
    "compute_income_tax",
    "compute_payroll_breakdown",
    "compute_tax_breakdown",
    "process_payroll_run",
    "split_social_security",
]
