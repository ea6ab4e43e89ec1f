"""
Flask Application Factory.

Creates and configures the Flask application.
"""

import os
import signal
import sys
from typing import Optional

from flask import Flask

from workday_calendar.api import api_bp
from workday_calendar.config import settings
from workday_calendar.infrastructure.logging import log_request_context, logger
from workday_calendar.infrastructure.metrics import setup_metrics_middleware


def _handle_sigterm(signum: int, frame) -> None:
    """Handle SIGTERM for graceful shutdown in containers."""
    logger.info(
        "Received SIGTERM, shutting down gracefully",
        extra={"extra_fields": {"signal": signum}}
    )
    sys.exit(0)


def create_app(config: Optional[dict] = None) -> Flask:
    """
    Create and configure the Flask application.

    Args:
        config: Optional configuration dictionary.

    Returns:
        Configured Flask application.
    """
    app = Flask(__name__)

    app.json.sort_keys = False

    if config:
        app.config.update(config)

    log_request_context(app)
    setup_metrics_middleware(app)

    app.register_blueprint(api_bp)

    logger.info(
        "Application initialized",
        extra={"extra_fields": {
            "environment": os.environ.get("ENVIRONMENT", "development"),
        }}
    )

    return app


if __name__ == "__main__":
    # Register SIGTERM handler for graceful shutdown
    signal.signal(signal.SIGTERM, _handle_sigterm)

    create_app().run(
        host="0.0.0.0",
        port=settings.port,
        debug=settings.debug,
    )
