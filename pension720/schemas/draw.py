"""Marshmallow schemas for persisted draw records.

The JSON layout (``first`` / ``winners`` keys) is the on-disk format of
``yeongeum720_draws.json``; keep it stable so older data files still load.
"""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, post_load, validate

from pension720.records import BonusResult, DrawRecord, PrimaryResult


def _digits_field() -> fields.List:
    return fields.List(
        fields.Integer(validate=validate.Range(min=0, max=9)),
        required=True,
        validate=validate.Length(equal=6),
    )


class PrimaryResultSchema(Schema):
    group = fields.Integer(required=True, validate=validate.Range(min=1, max=5))
    digits = _digits_field()
    winner_count = fields.Integer(
        data_key="winners",
        required=False,
        load_default=0,
        validate=validate.Range(min=0),
    )

    @post_load
    def _make(self, data, **kwargs):  # type: ignore[no-untyped-def]
        return PrimaryResult(
            group=int(data["group"]),
            digits=tuple(int(d) for d in data["digits"]),  # type: ignore[arg-type]
            winner_count=int(data["winner_count"]),
        )


class BonusResultSchema(Schema):
    digits = _digits_field()
    winner_count = fields.Integer(
        data_key="winners",
        required=False,
        load_default=0,
        validate=validate.Range(min=0),
    )

    @post_load
    def _make(self, data, **kwargs):  # type: ignore[no-untyped-def]
        return BonusResult(
            digits=tuple(int(d) for d in data["digits"]),  # type: ignore[arg-type]
            winner_count=int(data["winner_count"]),
        )


class DrawRecordSchema(Schema):
    """Serialize / validate one :class:`DrawRecord`."""

    class Meta:
        unknown = EXCLUDE

    round = fields.Integer(required=True, validate=validate.Range(min=1))
    date = fields.Date(required=False, allow_none=True, load_default=None)
    primary = fields.Nested(PrimaryResultSchema, data_key="first", required=True)
    bonus = fields.Nested(BonusResultSchema, required=False, allow_none=True, load_default=None)
    source = fields.String(required=False, allow_none=True, load_default="")

    @post_load
    def _make(self, data, **kwargs):  # type: ignore[no-untyped-def]
        return DrawRecord(
            round=int(data["round"]),
            date=data.get("date"),
            primary=data["primary"],
            bonus=data.get("bonus"),
            source=str(data.get("source") or ""),
        )
