"""Utilities for validating levy and payroll configuration and surfacing issues."""

from __future__ import annotations

import argparse
from collections import Counter
from pathlib import Path
from typing import Sequence

from statutax.backend.errors import InvalidConfiguration

from .business_config import DEFAULTS_FILE, load_configuration
from .schema import (
    BusinessConfiguration,
    IncomeTaxBracket,
    PayrollConfiguration,
    SocialSecurityRates,
    TaxConfiguration,
    bracket_table_issues,
    rate_issue,
)


def _format_scope(scope: str, message: str) -> str:
    return f"{scope}: {message}"


def validate_tax_configuration(config: TaxConfiguration, scope: str = "tax") -> list[str]:
    """Return issues for the levy rates in ``config``."""

    errors: list[str] = []

    for label, value in {
        "vat_rate": config.vat_rate,
        "nhil_rate": config.nhil_rate,
        "getfund_rate": config.getfund_rate,
    }.items():
        issue = rate_issue(label, value)
        if issue:
            errors.append(_format_scope(scope, issue))

    names = [levy.name.strip().lower() for levy in config.custom_levies]
    duplicates = sorted(name for name, count in Counter(names).items() if count > 1)
    if duplicates:
        errors.append(
            _format_scope(
                f"{scope}.custom_levies",
                f"duplicate levy names detected: {duplicates}",
            )
        )

    for levy in config.custom_levies:
        if not levy.name.strip():
            errors.append(_format_scope(f"{scope}.custom_levies", "levy names must be non-empty"))
        issue = rate_issue(f"levy '{levy.name}' rate", levy.rate)
        if issue:
            errors.append(_format_scope(f"{scope}.custom_levies", issue))

    return errors


def validate_social_security_rates(
    rates: SocialSecurityRates, scope: str = "payroll.social_security"
) -> list[str]:
    errors: list[str] = []

    for label, value in {
        "employee": rates.employee_rate,
        "employer": rates.employer_rate,
    }.items():
        issue = rate_issue(f"{label} contribution rate", value)
        if issue:
            errors.append(_format_scope(scope, issue))

    return errors


def validate_bracket_table(
    brackets: Sequence[IncomeTaxBracket], scope: str = "payroll.tax_brackets"
) -> list[str]:
    return [_format_scope(scope, issue) for issue in bracket_table_issues(brackets)]


def validate_payroll_configuration(
    config: PayrollConfiguration, scope: str = "payroll"
) -> list[str]:
    errors = validate_social_security_rates(config.social_security, f"{scope}.social_security")
    errors.extend(validate_bracket_table(config.brackets, f"{scope}.tax_brackets"))
    return errors


def validate_business_configuration(config: BusinessConfiguration) -> list[str]:
    """Return a list of validation issues for the provided configuration."""

    errors: list[str] = []
    errors.extend(validate_tax_configuration(config.tax))
    errors.extend(validate_payroll_configuration(config.payroll))
    return errors


def _raise_for(issues: list[str]) -> None:
    if issues:
        raise InvalidConfiguration.from_issues(issues)


def ensure_valid_tax_configuration(config: TaxConfiguration) -> TaxConfiguration:
    """Raise ``InvalidConfiguration`` unless every levy rate is usable."""

    _raise_for(validate_tax_configuration(config))
    return config


def ensure_valid_social_security_rates(rates: SocialSecurityRates) -> SocialSecurityRates:
    _raise_for(validate_social_security_rates(rates))
    return rates


def ensure_valid_bracket_table(
    brackets: Sequence[IncomeTaxBracket],
) -> Sequence[IncomeTaxBracket]:
    """Raise ``InvalidConfiguration`` unless ``brackets`` form a contiguous table."""

    _raise_for(validate_bracket_table(brackets))
    return brackets


def ensure_valid_payroll_configuration(config: PayrollConfiguration) -> PayrollConfiguration:
    _raise_for(validate_payroll_configuration(config))
    return config


def validate_configuration_files(paths: Sequence[str | Path]) -> dict[str, list[str]]:
    """Load each file and return issues keyed by path."""

    results: dict[str, list[str]] = {}
    for path in paths:
        results[str(path)] = _issues_for_file(Path(path))
    return results


def _issues_for_file(path: Path) -> list[str]:
    try:
        config = load_configuration(path)
    except InvalidConfiguration as error:
        return list(error.issues)
    return validate_business_configuration(config)


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate levy and payroll configuration files."
    )
    parser.add_argument(
        "paths",
        nargs="*",
        type=Path,
        help="Configuration files to validate (defaults to the packaged defaults)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for running validations from the command line."""

    parser = _build_argument_parser()
    args = parser.parse_args(argv)
    paths: list[Path] = args.paths or [DEFAULTS_FILE]

    exit_code = 0

    for path in paths:
        try:
            issues = _issues_for_file(path)
        except FileNotFoundError as error:
            print(f"[{path}] failed to load configuration: {error}")
            exit_code = 1
            continue

        if issues:
            exit_code = 1
            print(f"[{path}] {len(issues)} issue(s) detected:")
            for issue in issues:
                print(f"  - {issue}")
        else:
            print(f"[{path}] OK")

    return exit_code


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
