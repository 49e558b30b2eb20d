"""Flat-rate social-security contributions on gross pay."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from statutax.backend.config.business_config import parse_social_security_rates
from statutax.backend.config.schema import SocialSecurityRates
from statutax.backend.config.validator import ensure_valid_social_security_rates

from .results import SocialSecuritySplit
from .utils import round_currency, to_amount


def split_social_security(
    gross_pay: Any,
    rates: SocialSecurityRates | Mapping[str, Any],
) -> SocialSecuritySplit:
    """Return employee and employer contributions, each computed from ``gross_pay``."""

    gross = to_amount(gross_pay, "gross_pay")
    resolved = ensure_valid_social_security_rates(parse_social_security_rates(rates))

    return SocialSecuritySplit(
        employee_contribution=round_currency(gross * resolved.employee_rate),
        employer_contribution=round_currency(gross * resolved.employer_rate),
    )


__all__ = ["split_social_security"]
