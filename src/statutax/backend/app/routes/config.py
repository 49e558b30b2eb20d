"""Expose the active levy and payroll configuration.

Callers use these endpoints to show the rates a calculation will apply and to
check a candidate configuration before saving it elsewhere.
"""

from __future__ import annotations

from typing import Any

from flask import Blueprint, current_app, jsonify, request

from statutax.backend.config.business_config import parse_business_configuration
from statutax.backend.config.schema import BusinessConfiguration
from statutax.backend.config.validator import validate_business_configuration
from statutax.backend.errors import InvalidConfiguration
from statutax.backend.services.request_parser import parse_calculation_payload
from statutax.backend.version import get_project_version

CONFIGURATION_KEY = "STATUTAX_CONFIGURATION"

blueprint = Blueprint("config", __name__, url_prefix="/api/v1/config")


def active_configuration() -> BusinessConfiguration:
    """Return the configuration bound to the running application."""

    return current_app.config[CONFIGURATION_KEY]


def get_configuration_metadata() -> dict[str, Any]:
    return {"version": get_project_version()}


@blueprint.get("/defaults")
def get_defaults() -> Any:
    """Return the configuration applied when a request carries no override."""

    payload = {
        **get_configuration_metadata(),
        "configuration": active_configuration().model_dump(mode="json", by_alias=True),
    }
    return jsonify(payload)


@blueprint.post("/validate")
def validate_configuration() -> Any:
    """Report every issue in the submitted configuration without applying it."""

    payload = parse_calculation_payload(request)

    try:
        configuration = parse_business_configuration(payload)
    except InvalidConfiguration as error:
        issues = list(error.issues)
    else:
        issues = validate_business_configuration(configuration)

    return jsonify({"valid": not issues, "issues": issues})
