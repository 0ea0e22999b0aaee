"""Per-request access to config and the history repository."""

from __future__ import annotations

from flask import current_app

from pension720.config import BaseConfig
from pension720.db import get_optional_session
from pension720.records import DrawRecord
from pension720.repositories.draw_repository import get_draw_repository


def current_config() -> BaseConfig:
    return current_app.extensions["pension720_config"]


def load_history() -> list[DrawRecord]:
    return get_draw_repository(current_config(), get_optional_session()).load()
