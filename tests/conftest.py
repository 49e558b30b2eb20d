"""Test configuration utilities and shared fixtures."""

import sys
from pathlib import Path

# Ensure the ``src`` directory is importable when tests are executed without an
# editable install.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import pytest  # noqa: E402
from flask import Flask  # noqa: E402
from flask.testing import FlaskClient  # noqa: E402

from statutax.backend.app import create_app  # noqa: E402
from statutax.backend.config.business_config import load_default_configuration  # noqa: E402
from statutax.backend.config.schema import BusinessConfiguration  # noqa: E402


@pytest.fixture()
def default_configuration() -> BusinessConfiguration:
    """Return the packaged default levy and payroll configuration."""

    return load_default_configuration()


@pytest.fixture()
def app(monkeypatch: pytest.MonkeyPatch) -> Flask:
    """Return a configured Flask application for integration tests."""

    monkeypatch.delenv("STATUTAX_CONFIG_FILE", raising=False)
    application = create_app()
    application.config.update(TESTING=True)
    return application


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Provide a test client bound to the configured Flask app."""

    return app.test_client()
