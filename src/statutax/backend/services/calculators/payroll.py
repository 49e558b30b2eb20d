"""Per-employee withholding combining social security and income tax."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from statutax.backend.config.business_config import parse_payroll_configuration
from statutax.backend.config.schema import PayrollConfiguration
from statutax.backend.config.validator import ensure_valid_payroll_configuration

from .income_tax import compute_income_tax_bands
from .results import PayrollBreakdown
from .social_security import split_social_security
from .utils import ZERO, round_currency, to_amount


def compute_payroll_breakdown(
    gross_pay: Any,
    config: PayrollConfiguration | Mapping[str, Any],
) -> PayrollBreakdown:
    """Return contributions, income tax and net pay for ``gross_pay``.

    Gross pay is rounded to the cent first and every figure is derived from the
    rounded amount. Taxable income is gross pay less the employee contribution
    when ``deduct_employee_contribution`` is set, otherwise gross pay itself.
    """

    gross = round_currency(to_amount(gross_pay, "gross_pay"))
    payroll = ensure_valid_payroll_configuration(parse_payroll_configuration(config))

    split = split_social_security(gross, payroll.social_security)

    taxable_income = gross
    if payroll.deduct_employee_contribution:
        taxable_income = max(gross - split.employee_contribution, ZERO)

    bands = compute_income_tax_bands(taxable_income, payroll.brackets)
    income_tax = round_currency(ZERO)
    for band in bands:
        income_tax += band.tax

    return PayrollBreakdown(
        gross_pay=gross,
        employee_contribution=split.employee_contribution,
        employer_contribution=split.employer_contribution,
        taxable_income=taxable_income,
        income_tax=income_tax,
        bands=bands,
    )


__all__ = ["compute_payroll_breakdown"]
