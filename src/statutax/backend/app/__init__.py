"""Application factory for statutax backend services."""

import logging
import os

from flask import Flask, jsonify
from pydantic import ValidationError
from werkzeug.exceptions import BadRequest

from statutax.backend.config.business_config import load_configuration
from statutax.backend.config.schema import BusinessConfiguration
from statutax.backend.errors import InvalidConfiguration, InvalidInput

from .http import invalid_configuration_problem, invalid_input_problem, problem_response
from .models import format_validation_error
from .routes import register_routes
from .routes.config import CONFIGURATION_KEY, get_configuration_metadata

CONFIG_FILE_ENV = "STATUTAX_CONFIG_FILE"

_LOGGER = logging.getLogger(__name__)


def create_app(configuration: BusinessConfiguration | None = None) -> Flask:
    """Create and configure the Flask application instance.

    ``configuration`` takes precedence; otherwise the file named by
    ``STATUTAX_CONFIG_FILE`` is loaded, falling back to the packaged defaults.
    """

    app = Flask(__name__)

    if configuration is None:
        configuration = load_configuration(os.getenv(CONFIG_FILE_ENV) or None)
    app.config[CONFIGURATION_KEY] = configuration

    register_routes(app)

    @app.route("/health", methods=["GET"])
    def health_check():
        """Simple health check endpoint for infrastructure monitoring."""

        payload = {"status": "ok", **get_configuration_metadata()}
        return jsonify(payload)

    @app.errorhandler(BadRequest)
    def handle_bad_request(error: BadRequest):
        """Return consistent JSON responses for malformed payloads."""

        message = error.description or "Invalid request"
        return problem_response("bad_request", status=400, message=message).to_response()

    @app.errorhandler(ValidationError)
    def handle_validation_error(error: ValidationError):
        return problem_response(
            "validation_error", status=400, message=format_validation_error(error)
        ).to_response()

    @app.errorhandler(InvalidInput)
    def handle_invalid_input(error: InvalidInput):
        return invalid_input_problem(error).to_response()

    @app.errorhandler(InvalidConfiguration)
    def handle_invalid_configuration(error: InvalidConfiguration):
        """Surface every configuration issue so callers can fix them in one pass."""

        _LOGGER.warning("Rejected request with invalid configuration: %s", error)
        return invalid_configuration_problem(error).to_response()

    return app
