"""Schemas for the recommendation API."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

from pension720.config import DEFAULT_SEED

# Per-request ceiling for the HTTP API; the generator itself takes any count >= 1.
MAX_COUNT = 100


class RecommendQuerySchema(Schema):
    class Meta:
        unknown = EXCLUDE

    count = fields.Integer(
        required=False,
        load_default=5,
        validate=validate.Range(min=1, max=MAX_COUNT),
    )
    cycle = fields.Integer(required=False, allow_none=True, load_default=None)
    seed = fields.String(
        required=False,
        load_default=DEFAULT_SEED,
        validate=validate.Length(min=1, max=100),
    )


class TicketSchema(Schema):
    group = fields.Integer()
    digits = fields.List(fields.Integer())
    number = fields.String()
    last5 = fields.String(attribute="suffix")
    secondGroups = fields.List(fields.Integer(), attribute="alternate_groups")


class RecommendResponseSchema(Schema):
    count = fields.Integer()
    cycle = fields.Integer()
    seed = fields.String()
    maxRound = fields.Integer(attribute="max_round", allow_none=True)
    tickets = fields.List(fields.Nested(TicketSchema))
