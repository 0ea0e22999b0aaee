"""Recommendation routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, request

from pension720.routes._context import current_config, load_history
from pension720.schemas.recommend import RecommendQuerySchema, RecommendResponseSchema
from pension720.services.frequency_service import FrequencyService
from pension720.services.recommendation_service import RecommendationService, resolve_cycle
from pension720.utils.responses import ok

recommend_bp = Blueprint("recommend", __name__)

_query_schema = RecommendQuerySchema()
_response_schema = RecommendResponseSchema()
_frequency = FrequencyService()
_service = RecommendationService()


@recommend_bp.get("/recommend")
def recommend():
    """Deterministic tickets for ``count`` / ``cycle`` / ``seed`` query params."""

    data = _query_schema.load(request.args)

    table = _frequency.build(load_history(), source=current_config().SOURCE_URL)
    tickets = _service.generate(table, int(data["count"]), cycle=data["cycle"], seed=str(data["seed"]))

    return ok(
        _response_schema.dump(
            {
                "count": len(tickets),
                "cycle": resolve_cycle(table, data["cycle"]),
                "seed": str(data["seed"]),
                "max_round": table.rounds.max,
                "tickets": tickets,
            }
        )
    )
