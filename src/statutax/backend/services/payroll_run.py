"""Aggregate per-employee withholding into a payroll run.

The run validates configuration once for the whole batch, routes every
employee through :func:`compute_payroll_breakdown`, and records a snapshot of
the configuration it used so that later settings changes never alter a run
that has already been computed.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, field
from decimal import Decimal
from time import perf_counter
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from statutax.backend.config.business_config import (
    issues_from_validation_error,
    parse_payroll_configuration,
)
from statutax.backend.config.schema import PayrollConfiguration
from statutax.backend.config.validator import ensure_valid_payroll_configuration
from statutax.backend.errors import InvalidInput

from .calculators import PayrollBreakdown, compute_payroll_breakdown, round_currency
from .calculators.utils import ZERO

_LOGGER = logging.getLogger(__name__)


def _profiling_enabled() -> bool:
    """Return ``True`` when payroll run profiling should be captured."""

    flag = os.getenv("STATUTAX_PROFILE_CALCULATIONS", "")
    return flag.strip().lower() in {"1", "true", "yes", "on"}


@contextmanager
def _profile_section(name: str, store: dict[str, float] | None):
    """Capture the duration of a named section when profiling is enabled."""

    if store is None:
        yield
        return

    start = perf_counter()
    try:
        yield
    finally:
        store[name] = perf_counter() - start


class PayrollEntry(BaseModel):
    """One employee line submitted for a payroll run."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    employee_id: str = Field(..., min_length=1)
    employee_name: str | None = None
    compensation_type: Literal["salary", "wage"] = "salary"
    gross_salary: Decimal = Field(default=ZERO, ge=0, allow_inf_nan=False)
    wage_rate: Decimal = Field(default=ZERO, ge=0, allow_inf_nan=False)
    units_worked: Decimal = Field(default=ZERO, ge=0, allow_inf_nan=False)

    @property
    def gross_pay(self) -> Decimal:
        if self.compensation_type == "wage":
            return round_currency(self.wage_rate * self.units_worked)
        return round_currency(self.gross_salary)


@dataclass(frozen=True)
class PayrollRunItem:
    employee_id: str
    employee_name: str | None
    breakdown: PayrollBreakdown

    def as_dict(self) -> dict[str, Any]:
        return {
            "employee_id": self.employee_id,
            "employee_name": self.employee_name,
            **self.breakdown.as_dict(),
        }


@dataclass
class PayrollRunTotals:
    """Tracks cumulative totals for a payroll run."""

    gross_pay: Decimal = ZERO
    employee_contribution: Decimal = ZERO
    employer_contribution: Decimal = ZERO
    income_tax: Decimal = ZERO
    net_pay: Decimal = ZERO
    cost_to_business: Decimal = ZERO

    def add(self, breakdown: PayrollBreakdown) -> None:
        self.gross_pay += breakdown.gross_pay
        self.employee_contribution += breakdown.employee_contribution
        self.employer_contribution += breakdown.employer_contribution
        self.income_tax += breakdown.income_tax
        self.net_pay += breakdown.net_pay
        self.cost_to_business += breakdown.cost_to_business

    def as_dict(self) -> dict[str, Any]:
        return {
            "total_gross_pay": self.gross_pay,
            "total_employee_contribution": self.employee_contribution,
            "total_employer_contribution": self.employer_contribution,
            "total_income_tax": self.income_tax,
            "total_net_pay": self.net_pay,
            "total_cost_to_business": self.cost_to_business,
        }


@dataclass(frozen=True)
class PayrollRun:
    items: tuple[PayrollRunItem, ...]
    totals: PayrollRunTotals
    configuration: Mapping[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        return {
            "items": [item.as_dict() for item in self.items],
            "totals": self.totals.as_dict(),
            "configuration": dict(self.configuration),
        }


def configuration_snapshot(config: PayrollConfiguration) -> dict[str, Any]:
    """Return a JSON-ready copy of ``config`` suitable for storing with a run."""

    return config.model_dump(mode="json", by_alias=True)


def _parse_entry(raw: PayrollEntry | Mapping[str, Any], index: int) -> PayrollEntry:
    if isinstance(raw, PayrollEntry):
        return raw
    if not isinstance(raw, Mapping):
        raise InvalidInput(f"entries.{index}: payroll entries must be mappings")
    try:
        return PayrollEntry.model_validate(raw)
    except ValidationError as error:
        details = "; ".join(issues_from_validation_error(error))
        raise InvalidInput(f"entries.{index}: {details}") from error


def process_payroll_run(
    entries: Iterable[PayrollEntry | Mapping[str, Any]],
    config: PayrollConfiguration | Mapping[str, Any],
) -> PayrollRun:
    """Compute withholding for every entry and return items with run totals."""

    timings: dict[str, float] | None = {} if _profiling_enabled() else None
    overall_start = perf_counter() if timings is not None else None

    payroll = ensure_valid_payroll_configuration(parse_payroll_configuration(config))
    parsed = [_parse_entry(entry, index) for index, entry in enumerate(entries)]
    if not parsed:
        raise InvalidInput("A payroll run requires at least one entry")

    items: list[PayrollRunItem] = []
    totals = PayrollRunTotals()

    with _profile_section("breakdowns", timings):
        for entry in parsed:
            breakdown = compute_payroll_breakdown(entry.gross_pay, payroll)
            items.append(
                PayrollRunItem(
                    employee_id=entry.employee_id,
                    employee_name=entry.employee_name,
                    breakdown=breakdown,
                )
            )
            totals.add(breakdown)

    if totals.gross_pay <= 0:
        raise InvalidInput("Total payroll amount is zero; enter units worked for waged employees")

    if timings is not None and overall_start is not None:
        timings["total"] = perf_counter() - overall_start
        _LOGGER.debug(
            "process_payroll_run timings (ms): %s",
            {name: round(duration * 1000, 3) for name, duration in timings.items()},
        )

    _LOGGER.info("Processed payroll run with %d employee(s)", len(items))

    return PayrollRun(
        items=tuple(items),
        totals=totals,
        configuration=configuration_snapshot(payroll),
    )


__all__ = [
    "PayrollEntry",
    "PayrollRun",
    "PayrollRunItem",
    "PayrollRunTotals",
    "configuration_snapshot",
    "process_payroll_run",
]
