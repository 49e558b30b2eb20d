"""Configuration loader wrapping the shared schema models."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from functools import lru_cache
from pathlib import Path
from typing import Any, TypeVar

import yaml
from pydantic import BaseModel, ValidationError

from statutax.backend.errors import InvalidConfiguration

from .schema import (
    BusinessConfiguration,
    IncomeTaxBracket,
    PayrollConfiguration,
    SocialSecurityRates,
    TaxConfiguration,
)

CONFIG_DIRECTORY = Path(__file__).resolve().parent / "data"
DEFAULTS_FILE = CONFIG_DIRECTORY / "defaults.yaml"

_LOGGER = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _load_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle) or {}
        except yaml.YAMLError as error:
            raise InvalidConfiguration(f"Unable to parse {path.name}: {error}") from error
    if not isinstance(data, dict):
        raise InvalidConfiguration("Configuration file must define a mapping at the top level")
    return data


def issues_from_validation_error(error: ValidationError, prefix: str = "") -> list[str]:
    """Flatten a pydantic error into ``location: message`` strings."""

    issues: list[str] = []
    for detail in error.errors():
        parts = [prefix, *(str(part) for part in detail.get("loc", ()))]
        location = ".".join(part for part in parts if part)
        original = (detail.get("ctx") or {}).get("error")
        if isinstance(original, InvalidConfiguration):
            messages = list(original.issues)
        else:
            message = str(detail.get("msg", "Invalid value"))
            messages = [message.removeprefix("Value error, ")]
        for message in messages:
            issues.append(f"{location}: {message}" if location else message)
    return issues


def _parse(model: type[ModelT], raw: Any, label: str) -> ModelT:
    if isinstance(raw, model):
        return raw
    if not isinstance(raw, Mapping):
        raise InvalidConfiguration(f"{label} must be provided as a mapping")
    try:
        return model.model_validate(raw)
    except ValidationError as error:
        raise InvalidConfiguration.from_issues(
            issues_from_validation_error(error, prefix=label)
        ) from error


def parse_tax_configuration(raw: TaxConfiguration | Mapping[str, Any]) -> TaxConfiguration:
    """Return a validated ``TaxConfiguration`` from a model or plain mapping."""

    return _parse(TaxConfiguration, raw, "tax")


def parse_social_security_rates(
    raw: SocialSecurityRates | Mapping[str, Any],
) -> SocialSecurityRates:
    return _parse(SocialSecurityRates, raw, "social_security")


def parse_payroll_configuration(
    raw: PayrollConfiguration | Mapping[str, Any],
) -> PayrollConfiguration:
    """Return a validated ``PayrollConfiguration`` from a model or plain mapping."""

    return _parse(PayrollConfiguration, raw, "payroll")


def parse_bracket_table(
    raw: Sequence[IncomeTaxBracket | Mapping[str, Any]],
) -> tuple[IncomeTaxBracket, ...]:
    """Convert ``raw`` into bracket models without reordering or repairing it.

    Only per-bracket shape is checked here. Table-level contiguity is the job
    of :func:`statutax.backend.config.validator.ensure_valid_bracket_table`.
    """

    if isinstance(raw, (str, bytes)) or not isinstance(raw, Sequence):
        raise InvalidConfiguration("brackets must be provided as a sequence")
    return tuple(
        _parse(IncomeTaxBracket, bracket, f"brackets.{index}")
        for index, bracket in enumerate(raw)
    )


def parse_business_configuration(
    raw: BusinessConfiguration | Mapping[str, Any],
) -> BusinessConfiguration:
    return _parse(BusinessConfiguration, raw, "configuration")


@lru_cache(maxsize=1)
def load_default_configuration() -> BusinessConfiguration:
    """Load and cache the single default configuration shipped with the package."""

    return _load_file(DEFAULTS_FILE)


def load_configuration(path: str | Path | None = None) -> BusinessConfiguration:
    """Load configuration from ``path`` or fall back to the packaged defaults."""

    if path is None:
        return load_default_configuration()
    return _load_file(Path(path))


def _load_file(path: Path) -> BusinessConfiguration:
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    configuration = parse_business_configuration(_load_yaml(path))
    _LOGGER.info("Loaded business configuration from %s", path)
    return configuration


__all__ = [
    "CONFIG_DIRECTORY",
    "DEFAULTS_FILE",
    "issues_from_validation_error",
    "load_configuration",
    "load_default_configuration",
    "parse_bracket_table",
    "parse_business_configuration",
    "parse_payroll_configuration",
    "parse_social_security_rates",
    "parse_tax_configuration",
]
