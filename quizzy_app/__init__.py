"""Application factory for the Quizzy learning core."""

from __future__ import annotations

from flask import Flask

from .config import Config
from .core.bootstrap import configure_logging, register_modules

__all__ = ["create_app"]


def create_app(config_class: type[Config] = Config) -> Flask:
    """Create and configure a Flask application instance."""

    app = Flask(__name__)
    app.config.from_object(config_class)

    configure_logging(app)
    register_modules(app)

    return app
