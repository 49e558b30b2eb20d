"""Regression coverage ensuring calculator outputs stay stable."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from statutax.backend.config.schema import BusinessConfiguration
from statutax.backend.services import compute_payroll_breakdown, compute_tax_breakdown

_DATA_PATH = Path(__file__).resolve().parents[1] / "data" / "regression_scenarios.json"


def _calculate(scenario: dict[str, object], configuration: BusinessConfiguration) -> object:
    payload = scenario["payload"]
    if scenario["kind"] == "levies":
        return compute_tax_breakdown(payload["subtotal"], configuration.tax)
    return compute_payroll_breakdown(payload["gross_pay"], configuration.payroll)


@pytest.mark.parametrize(
    "scenario",
    json.loads(_DATA_PATH.read_text("utf-8")),
    ids=lambda item: f"{item['kind']}_{item['name']}",
)
def test_calculation_matches_regression_scenario(
    scenario: dict[str, object], default_configuration: BusinessConfiguration
) -> None:
    """The calculators return the expected amounts for known payloads."""

    result = _calculate(scenario, default_configuration).as_dict()

    for key, value in scenario["expectations"].items():
        assert str(result[key]) == value, key
