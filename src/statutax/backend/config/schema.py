"""Pydantic models describing levy and payroll configuration records."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Sequence

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)
from typing_extensions import Self

from statutax.backend.errors import InvalidConfiguration


def _coerce_decimal(value: Any) -> Any:
    if isinstance(value, bool):
        raise InvalidConfiguration("Boolean values cannot be used as numbers")
    if isinstance(value, float):
        return Decimal(str(value))
    return value


def _coerce_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value in {0, "0", "false", "False", None}:
        return False
    if value in {1, "1", "true", "True"}:
        return True
    raise InvalidConfiguration("Boolean flags must be explicit true/false values")


def finite_decimal(value: Any) -> Decimal | None:
    """Return ``value`` as a finite ``Decimal`` or ``None`` when impossible."""

    if isinstance(value, bool) or value is None:
        return None
    try:
        converted = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    if not converted.is_finite():
        return None
    return converted


def rate_issue(label: str, rate: Any) -> str | None:
    """Describe why ``rate`` is not a fraction in [0, 1], if it is not."""

    value = finite_decimal(rate)
    if value is None:
        return f"{label} must be a finite number"
    if value < 0 or value > 1:
        return f"{label} {rate} must be between 0 and 1"
    return None


def bracket_table_issues(brackets: Sequence[Any]) -> list[str]:
    """Return every way ``brackets`` breaks the contiguous bracket table rules.

    A valid table is non-empty, sorted ascending by lower bound, and each
    bracket starts exactly where the previous one ends. Only the final bracket
    is open-ended, and it must be.
    """

    if not brackets:
        return ["at least one income tax bracket must be defined"]

    issues: list[str] = []
    last_index = len(brackets)
    previous_lower: Decimal | None = None
    previous_upper: Decimal | None = None
    previous_open = False

    for index, bracket in enumerate(brackets, start=1):
        lower = finite_decimal(bracket.lower_bound)
        open_ended = bracket.upper_bound is None
        upper = None if open_ended else finite_decimal(bracket.upper_bound)

        issue = rate_issue(f"bracket {index} rate", bracket.rate)
        if issue:
            issues.append(issue)

        if lower is None:
            issues.append(f"bracket {index} lower bound must be a finite number")
        elif lower < 0:
            issues.append(f"bracket {index} lower bound must be non-negative")

        if not open_ended:
            if upper is None:
                issues.append(f"bracket {index} upper bound must be a finite number")
            elif lower is not None and upper < lower:
                issues.append(
                    f"bracket {index} upper bound {upper} is below its lower bound {lower}"
                )

        if open_ended and index != last_index:
            issues.append(f"bracket {index} is open-ended but is not the final bracket")
        if index == last_index and not open_ended:
            issues.append("the final bracket must have an open-ended upper bound")

        if index > 1 and lower is not None and not previous_open:
            if previous_lower is not None and lower < previous_lower:
                issues.append(
                    f"brackets must be sorted ascending by lower bound (bracket {index})"
                )
            elif previous_upper is not None and lower > previous_upper:
                issues.append(
                    f"gap between bracket {index - 1} upper bound {previous_upper} "
                    f"and bracket {index} lower bound {lower}"
                )
            elif previous_upper is not None and lower < previous_upper:
                issues.append(f"bracket {index} overlaps bracket {index - 1}")

        previous_lower = lower
        previous_upper = upper
        previous_open = open_ended

    return issues


class ImmutableModel(BaseModel):
    """Base class that freezes instances and rejects unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


class LevyRate(ImmutableModel):
    """A named levy charged on the pre-tax subtotal."""

    name: str
    rate: Decimal
    description: str | None = None

    @field_validator("rate", mode="before")
    @classmethod
    def _coerce_rate(cls, value: Any) -> Any:
        return _coerce_decimal(value)

    @model_validator(mode="after")
    def _validate_levy(self) -> Self:
        if not self.name.strip():
            raise InvalidConfiguration("Custom levies require a name")
        issue = rate_issue(f"levy '{self.name}' rate", self.rate)
        if issue:
            raise InvalidConfiguration(issue)
        return self


class TaxConfiguration(ImmutableModel):
    """Rates for the parallel levies applied to invoices and cash sales."""

    vat_rate: Decimal = Field(alias="vat")
    nhil_rate: Decimal = Field(alias="nhil")
    getfund_rate: Decimal = Field(alias="getfund")
    custom_levies: tuple[LevyRate, ...] = Field(default_factory=tuple)

    @field_validator("vat_rate", "nhil_rate", "getfund_rate", mode="before")
    @classmethod
    def _coerce_rates(cls, value: Any) -> Any:
        return _coerce_decimal(value)

    @field_validator("custom_levies", mode="before")
    @classmethod
    def _default_custom_levies(cls, value: Any) -> Any:
        if value is None:
            return ()
        return value

    @model_validator(mode="after")
    def _validate_rates(self) -> Self:
        for label, rate in (
            ("VAT rate", self.vat_rate),
            ("NHIL rate", self.nhil_rate),
            ("GETFund rate", self.getfund_rate),
        ):
            issue = rate_issue(label, rate)
            if issue:
                raise InvalidConfiguration(issue)

        seen: set[str] = set()
        for levy in self.custom_levies:
            key = levy.name.strip().lower()
            if key in seen:
                raise InvalidConfiguration(f"Duplicate custom levy name '{levy.name}'")
            seen.add(key)
        return self


class SocialSecurityRates(ImmutableModel):
    """Employee and employer social-security contribution rates."""

    employee_rate: Decimal
    employer_rate: Decimal

    @field_validator("employee_rate", "employer_rate", mode="before")
    @classmethod
    def _coerce_rates(cls, value: Any) -> Any:
        return _coerce_decimal(value)

    @model_validator(mode="after")
    def _validate_rates(self) -> Self:
        for label, rate in (
            ("employee contribution rate", self.employee_rate),
            ("employer contribution rate", self.employer_rate),
        ):
            issue = rate_issue(label, rate)
            if issue:
                raise InvalidConfiguration(issue)
        return self


class IncomeTaxBracket(ImmutableModel):
    """A single marginal-rate income band; ``upper_bound`` of ``None`` is open-ended."""

    lower_bound: Decimal = Field(alias="lower")
    upper_bound: Decimal | None = Field(default=None, alias="upper")
    rate: Decimal

    @field_validator("lower_bound", "upper_bound", "rate", mode="before")
    @classmethod
    def _coerce_values(cls, value: Any) -> Any:
        return _coerce_decimal(value)

    @model_validator(mode="after")
    def _validate_values(self) -> Self:
        if self.lower_bound < 0:
            raise InvalidConfiguration("Bracket lower bounds must be non-negative")
        if self.upper_bound is not None and self.upper_bound < self.lower_bound:
            raise InvalidConfiguration("Bracket upper bounds cannot be below lower bounds")
        issue = rate_issue("bracket rate", self.rate)
        if issue:
            raise InvalidConfiguration(issue)
        return self

    @property
    def is_open_ended(self) -> bool:
        return self.upper_bound is None


class PayrollConfiguration(ImmutableModel):
    """Social-security rates and the income tax bracket table."""

    social_security: SocialSecurityRates
    brackets: tuple[IncomeTaxBracket, ...] = Field(alias="tax_brackets")
    deduct_employee_contribution: bool = True

    @field_validator("deduct_employee_contribution", mode="before")
    @classmethod
    def _coerce_flag(cls, value: Any) -> bool:
        return _coerce_boolean(value)

    @model_validator(mode="after")
    def _validate_brackets(self) -> Self:
        issues = bracket_table_issues(self.brackets)
        if issues:
            raise InvalidConfiguration.from_issues(issues)
        return self


class BusinessConfiguration(ImmutableModel):
    """Complete levy and payroll configuration for one business."""

    tax: TaxConfiguration
    payroll: PayrollConfiguration


__all__ = [
    "BusinessConfiguration",
    "ImmutableModel",
    "IncomeTaxBracket",
    "InvalidConfiguration",
    "LevyRate",
    "PayrollConfiguration",
    "SocialSecurityRates",
    "TaxConfiguration",
    "ValidationError",
    "bracket_table_issues",
    "finite_decimal",
    "rate_issue",
]
