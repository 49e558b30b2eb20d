"""Unit tests for the social-security contribution split."""

from __future__ import annotations

from decimal import Decimal

import pytest

from statutax.backend.config.schema import SocialSecurityRates
from statutax.backend.errors import InvalidConfiguration, InvalidInput
from statutax.backend.services.calculators import split_social_security

RATES = {"employee_rate": 0.055, "employer_rate": 0.13}


def test_split_for_monthly_salary() -> None:
    split = split_social_security(1000, RATES)

    assert split.employee_contribution == Decimal("55.00")
    assert split.employer_contribution == Decimal("130.00")


def test_accepts_rate_model() -> None:
    rates = SocialSecurityRates.model_validate(RATES)

    split = split_social_security(Decimal("2500.50"), rates)

    assert split.employee_contribution == Decimal("137.53")
    assert split.employer_contribution == Decimal("325.07")


@pytest.mark.parametrize("gross", ["0.01", "0.09", "123.45", "999.99", "1234567.89", "7777.77"])
def test_combined_contributions_within_a_cent_of_combined_rate(gross: str) -> None:
    amount = Decimal(gross)

    split = split_social_security(amount, RATES)

    combined = split.employee_contribution + split.employer_contribution
    assert abs(combined - amount * (Decimal("0.055") + Decimal("0.13"))) <= Decimal("0.01")


def test_zero_gross_gives_zero_contributions() -> None:
    split = split_social_security(0, RATES)

    assert split.employee_contribution == Decimal("0.00")
    assert split.employer_contribution == Decimal("0.00")


@pytest.mark.parametrize("gross", [-5, "abc", None, True])
def test_invalid_gross_raises_invalid_input(gross: object) -> None:
    with pytest.raises(InvalidInput):
        split_social_security(gross, RATES)


@pytest.mark.parametrize(
    "rates",
    [
        {"employee_rate": -0.01, "employer_rate": 0.13},
        {"employee_rate": 0.055, "employer_rate": 1.5},
        {"employee_rate": 0.055},
    ],
)
def test_invalid_rates_raise_invalid_configuration(rates: dict[str, float]) -> None:
    with pytest.raises(InvalidConfiguration):
        split_social_security(1000, rates)


def test_rates_altered_after_validation_are_rejected() -> None:
    rates = SocialSecurityRates.model_validate(RATES).model_copy(
        update={"employer_rate": Decimal("2")}
    )

    with pytest.raises(InvalidConfiguration) as excinfo:
        split_social_security(1000, rates)

    assert any("employer contribution rate" in issue for issue in excinfo.value.issues)


def test_gross_beyond_supported_range_raises_invalid_input() -> None:
    with pytest.raises(InvalidInput, match="exceeds the supported range"):
        split_social_security("1e27", RATES)
