from pathlib import Path

import pytest

from statutax.backend.config.business_config import DEFAULTS_FILE, load_default_configuration
from statutax.backend.config.schema import IncomeTaxBracket
from statutax.backend.config.validator import (
    main,
    validate_business_configuration,
    validate_configuration_files,
)


def test_default_configuration_is_valid() -> None:
    results = validate_configuration_files([DEFAULTS_FILE])
    assert all(not issues for issues in results.values()), results


def test_validator_flags_invalid_levy_rate() -> None:
    config = load_default_configuration()
    tax = config.tax.model_copy(update={"nhil_rate": -0.1})
    broken = config.model_copy(update={"tax": tax})

    errors = validate_business_configuration(broken)

    assert any(error.startswith("tax: nhil_rate") for error in errors)


def test_validator_flags_invalid_contribution_rate() -> None:
    config = load_default_configuration()
    payroll = config.payroll.model_copy(
        update={
            "social_security": config.payroll.social_security.model_copy(
                update={"employee_rate": 1.5}
            )
        }
    )
    broken = config.model_copy(update={"payroll": payroll})

    errors = validate_business_configuration(broken)

    assert any("payroll.social_security" in error for error in errors)


def test_validator_flags_broken_bracket_table() -> None:
    config = load_default_configuration()
    brackets = config.payroll.brackets + (
        IncomeTaxBracket(lower=60000, upper=None, rate=0.4),
    )
    broken = config.model_copy(
        update={"payroll": config.payroll.model_copy(update={"brackets": brackets})}
    )

    errors = validate_business_configuration(broken)

    assert "payroll.tax_brackets: bracket 7 is open-ended but is not the final bracket" in errors


def test_cli_reports_success(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 0

    output = capsys.readouterr().out
    assert "OK" in output


def test_cli_reports_issues(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "broken.yaml"
    path.write_text(
        "tax: {vat: 2, nhil: 0.025, getfund: 0.025}\n"
        "payroll:\n"
        "  social_security: {employee_rate: 0.055, employer_rate: 0.13}\n"
        "  tax_brackets: [{lower: 0, upper: 100, rate: 0.1}]\n",
        encoding="utf-8",
    )

    assert main([str(path)]) == 1

    output = capsys.readouterr().out
    assert "2 issue(s) detected" in output
    assert "the final bracket must have an open-ended upper bound" in output


def test_cli_reports_missing_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main([str(tmp_path / "missing.yaml")]) == 1

    assert "failed to load configuration" in capsys.readouterr().out
