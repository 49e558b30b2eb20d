"""REST endpoints for payroll withholding."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from flask import Blueprint, request

from statutax.backend.app.models import (
    IncomeTaxRequest,
    PayrollBreakdownRequest,
    PayrollRunRequest,
)
from statutax.backend.services import compute_payroll_breakdown, process_payroll_run
from statutax.backend.services.calculators import compute_income_tax_bands, round_currency
from statutax.backend.services.request_parser import parse_calculation_payload
from statutax.backend.services.response_builder import build_calculation_response

from .config import active_configuration

blueprint = Blueprint("payroll", __name__, url_prefix="/api/v1/payroll")


@blueprint.post("/breakdown")
def create_payroll_breakdown() -> tuple[Any, int]:
    """Return contributions, income tax and net pay for one gross amount."""

    payroll_request = PayrollBreakdownRequest.model_validate(parse_calculation_payload(request))
    payroll_config = payroll_request.payroll
    if payroll_config is None:
        payroll_config = active_configuration().payroll

    result = compute_payroll_breakdown(payroll_request.gross_pay, payroll_config)
    return build_calculation_response(result)


@blueprint.post("/income-tax")
def create_income_tax() -> tuple[Any, int]:
    """Return income tax and its band schedule for already-net taxable income."""

    tax_request = IncomeTaxRequest.model_validate(parse_calculation_payload(request))
    brackets = tax_request.tax_brackets
    if brackets is None:
        brackets = active_configuration().payroll.brackets

    bands = compute_income_tax_bands(tax_request.taxable_income, brackets)
    income_tax = round_currency(Decimal("0"))
    for band in bands:
        income_tax += band.tax

    return build_calculation_response(
        {
            "taxable_income": tax_request.taxable_income,
            "income_tax": income_tax,
            "bands": bands,
        }
    )


@blueprint.post("/runs")
def create_payroll_run() -> tuple[Any, int]:
    """Compute a payroll run and return its items, totals and configuration snapshot."""

    run_request = PayrollRunRequest.model_validate(parse_calculation_payload(request))
    payroll_config = run_request.payroll
    if payroll_config is None:
        payroll_config = active_configuration().payroll

    result = process_payroll_run(run_request.entries, payroll_config)
    return build_calculation_response(result, status=201)
