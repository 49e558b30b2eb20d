"""Integration coverage for payroll withholding endpoints."""

from http import HTTPStatus

import pytest
from flask.testing import FlaskClient

from statutax.backend.app.routes import payroll as payroll_routes

FLAT_PAYROLL = {
    "social_security": {"employee_rate": "0.1", "employer_rate": "0.2"},
    "tax_brackets": [
        {"lower": 0, "upper": 100, "rate": 0},
        {"lower": 100, "upper": None, "rate": "0.5"},
    ],
}


def test_payroll_breakdown(client: FlaskClient) -> None:
    response = client.post("/api/v1/payroll/breakdown", json={"gross_pay": "1000"})

    assert response.status_code == HTTPStatus.OK
    payload = response.get_json()
    assert payload["employee_contribution"] == "55.00"
    assert payload["employer_contribution"] == "130.00"
    assert payload["taxable_income"] == "945.00"
    assert payload["income_tax"] == "56.13"
    assert payload["net_pay"] == "888.87"
    assert [band["tax"] for band in payload["bands"]] == ["0.00", "5.50", "13.00", "37.63"]


def test_payroll_breakdown_with_override(client: FlaskClient) -> None:
    response = client.post(
        "/api/v1/payroll/breakdown",
        json={
            "gross_pay": "300",
            "payroll": {**FLAT_PAYROLL, "deduct_employee_contribution": False},
        },
    )

    assert response.status_code == HTTPStatus.OK
    payload = response.get_json()
    assert payload["taxable_income"] == "300.00"
    assert payload["income_tax"] == "100.00"
    assert payload["net_pay"] == "170.00"


def test_income_tax_endpoint(client: FlaskClient) -> None:
    response = client.post("/api/v1/payroll/income-tax", json={"taxable_income": "1000"})

    assert response.status_code == HTTPStatus.OK
    payload = response.get_json()
    assert payload["income_tax"] == "65.75"
    assert payload["bands"][1] == {
        "lower_bound": "490",
        "upper_bound": "600",
        "rate": "0.05",
        "taxable_amount": "110",
        "tax": "5.50",
    }


def test_income_tax_rejects_table_with_gap(client: FlaskClient) -> None:
    response = client.post(
        "/api/v1/payroll/income-tax",
        json={
            "taxable_income": "500",
            "tax_brackets": [
                {"lower": 0, "upper": 100, "rate": 0},
                {"lower": 150, "upper": None, "rate": 0.2},
            ],
        },
    )

    assert response.status_code == HTTPStatus.UNPROCESSABLE_ENTITY
    payload = response.get_json()
    assert payload["error"] == "invalid_configuration"
    assert any("gap between bracket 1" in issue for issue in payload["issues"])


def test_payroll_run_endpoint(client: FlaskClient) -> None:
    response = client.post(
        "/api/v1/payroll/runs",
        json={
            "entries": [
                {"employee_id": "E-1", "gross_salary": "1000"},
                {
                    "employee_id": "E-2",
                    "compensation_type": "wage",
                    "wage_rate": "20",
                    "units_worked": "25",
                },
            ]
        },
    )

    assert response.status_code == HTTPStatus.CREATED
    payload = response.get_json()
    assert len(payload["items"]) == 2
    assert payload["totals"]["total_gross_pay"] == "1500.00"
    assert payload["totals"]["total_net_pay"] == "1361.37"
    assert payload["configuration"]["social_security"]["employee_rate"] == "0.055"


def test_empty_payroll_run_is_invalid_input(client: FlaskClient) -> None:
    response = client.post("/api/v1/payroll/runs", json={"entries": []})

    assert response.status_code == HTTPStatus.BAD_REQUEST
    payload = response.get_json()
    assert payload["error"] == "invalid_input"
    assert "at least one entry" in payload["message"]


def test_negative_gross_pay_is_invalid_input(client: FlaskClient) -> None:
    response = client.post("/api/v1/payroll/breakdown", json={"gross_pay": "-1"})

    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert response.get_json()["error"] == "invalid_input"


def test_income_tax_endpoint_walks_the_table_once(
    client: FlaskClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    calls: list[object] = []
    original = payroll_routes.compute_income_tax_bands

    def counting(taxable_income, brackets):
        calls.append(taxable_income)
        return original(taxable_income, brackets)

    monkeypatch.setattr(payroll_routes, "compute_income_tax_bands", counting)

    response = client.post("/api/v1/payroll/income-tax", json={"taxable_income": "945"})

    assert response.get_json()["income_tax"] == "56.13"
    assert len(calls) == 1
