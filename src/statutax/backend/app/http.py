"""HTTP helper utilities shared across Flask blueprints."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from flask import jsonify

from statutax.backend.errors import InvalidConfiguration, InvalidInput


@dataclass(frozen=True)
class ProblemResponse:
    """Error payload with a machine-readable code and optional issue list."""

    error: str
    status: int
    message: str | None = None
    issues: Sequence[str] = ()

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.error}
        if self.message:
            payload["message"] = self.message
        if self.issues:
            payload["issues"] = list(self.issues)
        return payload

    def to_response(self) -> tuple[Any, int]:
        return jsonify(self.as_dict()), self.status


def problem_response(
    error: str,
    *,
    status: int,
    message: str | None = None,
    issues: Sequence[str] = (),
) -> ProblemResponse:
    """Convenience factory mirroring Flask's ``jsonify`` interface."""

    return ProblemResponse(error=error, status=status, message=message, issues=tuple(issues))


def invalid_input_problem(error: InvalidInput) -> ProblemResponse:
    return problem_response("invalid_input", status=400, message=str(error))


def invalid_configuration_problem(error: InvalidConfiguration) -> ProblemResponse:
    return problem_response(
        "invalid_configuration",
        status=422,
        message="Configuration is invalid",
        issues=error.issues,
    )


__all__ = [
    "ProblemResponse",
    "invalid_configuration_problem",
    "invalid_input_problem",
    "problem_response",
]
