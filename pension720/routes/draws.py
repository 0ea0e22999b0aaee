"""Draw history routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, request

from pension720.errors import NotFoundError, ValidationError
from pension720.routes._context import load_history
from pension720.schemas.draw import DrawRecordSchema
from pension720.utils.responses import ok

draws_bp = Blueprint("draws", __name__)

_draw_schema = DrawRecordSchema()
_draws_schema = DrawRecordSchema(many=True)


@draws_bp.get("/draws")
def list_draws():
    """Stored history ordered by round.

    Query params:
    - recent: optional, only the latest N rounds
    """

    raw = (request.args.get("recent") or "").strip()
    draws = load_history()
    if raw:
        try:
            recent = int(raw)
        except ValueError as e:
            raise ValidationError("recent must be an integer") from e
        if recent <= 0:
            raise ValidationError("recent must be positive")
        draws = draws[-recent:]

    return ok({"count": len(draws), "draws": _draws_schema.dump(draws)})


@draws_bp.get("/draws/<int:round_no>")
def get_draw(round_no: int):
    for d in load_history():
        if d.round == round_no:
            return ok(_draw_schema.dump(d))
    raise NotFoundError(message=f"Round {round_no} not found")
