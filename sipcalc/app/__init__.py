"""Application factory and app-wide configuration."""

from typing import Optional
from uuid import uuid4

from flask import Flask, request
from flask_cors import CORS

from sipcalc.app.api.routes import api_bp
from sipcalc.config import Settings, load_settings
from sipcalc.log import set_request_id, setup_logging


def create_app(settings: Optional[Settings] = None) -> Flask:
    """Build the Flask app instance."""
    settings = settings or load_settings()
    setup_logging(settings.log_level)

    app = Flask(__name__)
    app.config["SIPCALC_SETTINGS"] = settings

    CORS(
        app,
        resources={r"/api/*": {"origins": settings.cors_origins}},
        supports_credentials=True,
    )

    @app.before_request
    def _assign_request_id() -> None:
        set_request_id(request.headers.get("X-Request-ID") or uuid4().hex[:12])

    app.register_blueprint(api_bp, url_prefix="/api")
    return app
