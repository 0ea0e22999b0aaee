"""Flask application package."""

from __future__ import annotations

from flask import Flask

from pension720.config import BaseConfig


def create_app(config: BaseConfig | None = None) -> Flask:
    """Application factory.

    Args:
        config: Explicit configuration; resolved from the environment when omitted.

    Returns:
        Configured Flask application.
    """
    from dotenv import load_dotenv

    from pension720.config import get_config
    from pension720.db import init_db
    from pension720.error_handlers import register_error_handlers
    from pension720.logging_config import configure_logging
    from pension720.routes.analysis import analysis_bp
    from pension720.routes.draws import draws_bp
    from pension720.routes.health import health_bp
    from pension720.routes.recommend import recommend_bp

    if config is None:
        load_dotenv()
        config = get_config()()

    app = Flask(__name__)
    app.config.from_object(config)
    app.extensions["pension720_config"] = config

    configure_logging(config.LOG_LEVEL)
    if config.HISTORY_BACKEND == "sql":
        init_db(app)
    register_error_handlers(app)

    app.register_blueprint(health_bp)
    app.register_blueprint(draws_bp)
    app.register_blueprint(analysis_bp)
    app.register_blueprint(recommend_bp)

    return app
