"""Frequency routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint

from pension720.routes._context import current_config, load_history
from pension720.schemas.frequency import FrequencyTableSchema
from pension720.services.frequency_service import FrequencyService
from pension720.utils.responses import ok

analysis_bp = Blueprint("analysis", __name__)

_schema = FrequencyTableSchema()
_service = FrequencyService()


@analysis_bp.get("/frequency")
def get_frequency():
    """Frequency table rebuilt from the stored history."""

    table = _service.build(load_history(), source=current_config().SOURCE_URL)
    return ok(_schema.dump(table))
