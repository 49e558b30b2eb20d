"""Blueprint registrations for application routes."""

from flask import Flask

from .config import blueprint as config_blueprint
from .levies import blueprint as levies_blueprint
from .payroll import blueprint as payroll_blueprint


def register_routes(app: Flask) -> None:
    """Register all Flask blueprints with the provided application."""

    app.register_blueprint(levies_blueprint)
    app.register_blueprint(payroll_blueprint)
    app.register_blueprint(config_blueprint)
