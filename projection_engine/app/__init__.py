"""Application factory and app-wide configuration."""

import logging.config
from typing import Any, Dict, Optional

from flask import Flask
from flask_cors import CORS

from projection_engine import config
from projection_engine.app.api.routes import api_bp


def create_app(overrides: Optional[Dict[str, Any]] = None) -> Flask:
    """Build the Flask app instance."""
    logging.config.dictConfig(config.LOGGING)

    app = Flask(__name__)
    app.config.from_mapping(
        CORS_ORIGINS=config.CORS_ORIGINS,
        DEFAULT_CURRENCY=config.DEFAULT_CURRENCY,
        DEFAULT_LOCALE=config.DEFAULT_LOCALE,
    )
    if overrides:
        app.config.update(overrides)

    CORS(
        app,
        resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}},
        supports_credentials=True,
    )

    app.register_blueprint(api_bp, url_prefix="/api")
    return app
