from __future__ import annotations

from pension720.schemas.frequency import FrequencyTableSchema
from pension720.services.frequency_service import FrequencyService, rank_counts, top_suffixes
from tests.conftest import make_draw


def test_single_group_three_record(fixed_now):
    table = FrequencyService().build([make_draw(10, group=3)], now=fixed_now)

    assert table.group.counts == {1: 0, 2: 0, 3: 1, 4: 0, 5: 0}
    assert table.group.keys == [3, 1, 2, 4, 5]
    assert table.rounds.min == 10
    assert table.rounds.max == 10
    assert table.rounds.count == 1


def test_every_key_ranked_exactly_once(history, fixed_now):
    table = FrequencyService().build(history, now=fixed_now)

    assert sorted(table.group.keys) == [1, 2, 3, 4, 5]
    assert len(table.positions) == 6
    assert len(table.bonus_positions) == 6
    for stats in (*table.positions, *table.bonus_positions, table.overall, table.bonus_overall):
        assert sorted(stats.keys) == list(range(10))


def test_position_and_bonus_counts(history, fixed_now):
    table = FrequencyService().build(history, now=fixed_now)

    assert table.positions[0].counts[1] == 2
    assert table.positions[0].keys[0] == 1
    assert table.positions[4].counts[5] == 4
    assert table.group.keys[:1] == [3]
    # Only rounds 1 and 3 have a bonus line.
    assert sum(table.bonus_positions[0].counts.values()) == 2
    assert table.bonus_positions[5].counts == {**{d: 0 for d in range(10)}, 1: 1, 9: 1}
    assert sum(table.overall.counts.values()) == 24


def test_suffix_counts(history, fixed_now):
    table = FrequencyService().build(history, now=fixed_now)

    assert table.suffix_top[0] == ("23056", 1)
    assert len(table.suffix_top) == 4
    # Ties by ascending suffix.
    assert [s for s, _ in table.suffix_top] == sorted(s for s, _ in table.suffix_top)


def test_rank_counts_tie_break():
    assert rank_counts({3: 1, 1: 2, 2: 1, 0: 0}) == [(1, 2), (2, 1), (3, 1), (0, 0)]


def test_top_suffixes_limit():
    counts = {f"{i:05d}": 1 for i in range(30)}
    counts["99999"] = 5

    top = top_suffixes(counts)

    assert len(top) == 20
    assert top[0] == ("99999", 5)
    assert top[1] == ("00000", 1)


def test_empty_history(fixed_now):
    table = FrequencyService().build([], now=fixed_now)

    assert table.is_empty
    assert table.rounds.min is None
    assert table.rounds.max is None
    assert table.group.keys == [1, 2, 3, 4, 5]
    assert table.positions[0].keys == list(range(10))
    assert table.suffix_top == []


def test_schema_is_self_describing(history, fixed_now):
    data = FrequencyTableSchema().dump(FrequencyService().build(history, now=fixed_now, source="src"))

    assert data["rounds"] == {"min": 1, "max": 4, "count": 4}
    assert data["source"] == {"primary": "src"}
    assert data["group"]["counts"] == {"1": 1, "2": 0, "3": 2, "4": 0, "5": 1}
    assert data["group"]["ranked"][0] == {"digit": 3, "count": 2}
    assert [p["name"] for p in data["positions"]] == ["십만", "만", "천", "백", "십", "일"]
    assert len(data["positions"][2]["counts"]) == 10
    assert len(data["bonus"]["positions"]) == 6
    assert data["bonus"]["overall"]["counts"]["9"] == 6
    assert data["third"]["last5Top"][0] == {"last5": "23056", "count": 1}
    assert data["updatedAt"].startswith("2026-02-20T09:00:00")
