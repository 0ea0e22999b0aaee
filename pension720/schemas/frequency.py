"""Schemas for the frequency artifact (``yeongeum720_freq.json``) and API."""

from __future__ import annotations

from marshmallow import Schema, fields


class RankedCountSchema(Schema):
    digit = fields.Function(lambda kv: int(kv[0]))
    count = fields.Function(lambda kv: int(kv[1]))


class RankedCountsSchema(Schema):
    counts = fields.Method("_counts")
    ranked = fields.List(fields.Nested(RankedCountSchema))

    def _counts(self, stats):  # type: ignore[no-untyped-def]
        return {str(k): int(v) for k, v in sorted(stats.counts.items())}


class RoundRangeSchema(Schema):
    min = fields.Integer(allow_none=True)
    max = fields.Integer(allow_none=True)
    count = fields.Integer()


class SuffixCountSchema(Schema):
    last5 = fields.Function(lambda kv: str(kv[0]))
    count = fields.Function(lambda kv: int(kv[1]))


class FrequencyTableSchema(Schema):
    """Dump-only view of :class:`FrequencyTable`.

    Every fixed-domain map is written out in full, zero counts included.
    """

    updatedAt = fields.DateTime(attribute="updated_at", format="iso")
    source = fields.Method("_source")
    rounds = fields.Nested(RoundRangeSchema)
    group = fields.Nested(RankedCountsSchema)
    positions = fields.Method("_positions")
    overall = fields.Nested(RankedCountsSchema)
    bonus = fields.Method("_bonus")
    third = fields.Method("_third")

    @staticmethod
    def _named(names, stats):  # type: ignore[no-untyped-def]
        schema = RankedCountsSchema()
        return [{"name": name, **schema.dump(s)} for name, s in zip(names, stats)]

    def _source(self, table):  # type: ignore[no-untyped-def]
        return {"primary": table.source}

    def _positions(self, table):  # type: ignore[no-untyped-def]
        return self._named(table.position_names, table.positions)

    def _bonus(self, table):  # type: ignore[no-untyped-def]
        return {
            "positions": self._named(table.position_names, table.bonus_positions),
            "overall": RankedCountsSchema().dump(table.bonus_overall),
        }

    def _third(self, table):  # type: ignore[no-untyped-def]
        return {"last5Top": SuffixCountSchema(many=True).dump(table.suffix_top)}
