"""Logging configuration."""

from __future__ import annotations

import logging


def configure_logging(level_name: str = "INFO") -> None:
    """Configure plain stdlib logging for the CLI and the web app."""

    level = getattr(logging, str(level_name).upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    # Reduce noisy loggers if needed
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
