"""Exception taxonomy shared by the calculators and their callers."""

from __future__ import annotations

from typing import Iterable


class StatutaxError(ValueError):
    """Base class for deterministic calculation failures."""


class InvalidInput(StatutaxError):
    """Raised when a monetary input is negative or not a finite number."""


class InvalidConfiguration(StatutaxError):
    """Raised when rates or bracket tables violate configuration rules."""

    def __init__(self, message: str, issues: Iterable[str] = ()) -> None:
        super().__init__(message)
        self.issues: tuple[str, ...] = tuple(issues) or (message,)

    @classmethod
    def from_issues(cls, issues: Iterable[str]) -> InvalidConfiguration:
        collected = tuple(issues)
        return cls("; ".join(collected), collected)


__all__ = ["InvalidConfiguration", "InvalidInput", "StatutaxError"]
