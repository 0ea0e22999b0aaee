from __future__ import annotations

import pytest

from pension720.errors import NoDataError, ValidationError
from pension720.services.frequency_service import FrequencyService
from pension720.services.recommendation_service import (
    BANDS_5,
    RecommendationService,
    Ticket,
    band_index,
    pick_band,
    tier_for,
)


@pytest.fixture()
def table(history, fixed_now):
    return FrequencyService().build(history, now=fixed_now)


def _keys(tickets):
    return [(t.group, t.number) for t in tickets]


def test_same_inputs_same_tickets(table):
    svc = RecommendationService()

    for n in (1, 5, 10):
        assert svc.generate(table, n, cycle=12, seed="s") == svc.generate(table, n, cycle=12, seed="s")


def test_exact_count_and_bounds(table):
    for n in (1, 3, 5, 10, 25):
        tickets = RecommendationService().generate(table, n, cycle=3)

        assert len(tickets) == n
        for t in tickets:
            assert 1 <= t.group <= 5
            assert len(t.digits) == 6
            assert all(0 <= d <= 9 for d in t.digits)
            assert len(t.alternate_groups) == 4
            assert t.group not in t.alternate_groups


def test_single_ticket_uses_top_ranked_values(table):
    (ticket,) = RecommendationService().generate(table, 1, cycle=99)

    assert ticket.group == table.group.keys[0] == 3
    assert ticket.digits == (1, 2, 3, 4, 5, 6)


def test_ten_ticket_batch_has_no_duplicates(table):
    tickets = RecommendationService().generate(table, 10, cycle=5)

    assert len(set(_keys(tickets))) == 10


def test_duplicates_are_walked_off_the_last_position(fixed_now):
    from tests.conftest import make_draw

    single = FrequencyService().build([make_draw(1, group=2, digits=(0, 0, 0, 0, 0, 0))], now=fixed_now)

    tickets = RecommendationService().generate(single, 10, cycle=1)

    assert len(set(_keys(tickets))) == 10


def test_cycle_and_seed_drive_variation(table):
    svc = RecommendationService()

    by_cycle = {tuple(_keys(svc.generate(table, 10, cycle=c))) for c in range(5)}
    by_seed = {tuple(_keys(svc.generate(table, 10, cycle=1, seed=s))) for s in ("a", "b", "c")}

    assert len(by_cycle) > 1
    assert len(by_seed) > 1


def test_cycle_defaults_to_latest_round(table):
    svc = RecommendationService()

    assert svc.generate(table, 5) == svc.generate(table, 5, cycle=table.rounds.max)


def test_empty_history_is_rejected(fixed_now):
    empty = FrequencyService().build([], now=fixed_now)

    with pytest.raises(NoDataError):
        RecommendationService().generate(empty, 5)


def test_invalid_count(table):
    with pytest.raises(ValidationError):
        RecommendationService().generate(table, 0)
    with pytest.raises(ValidationError):
        RecommendationService().generate(table, -3)


def test_large_counts_are_generated(table):
    for n in (3, 150):
        tickets = RecommendationService().generate(table, n, cycle=1)

        assert len(tickets) == n
        for t in tickets:
            assert 1 <= t.group <= 5
            assert len(t.digits) == 6


def test_generate_tiers(table):
    tiers = RecommendationService().generate_tiers(table, cycle=2)

    assert sorted(tiers) == [1, 5, 10]
    assert [len(v) for _, v in sorted(tiers.items())] == [1, 5, 10]


def test_band_policy():
    assert tier_for(1) == 1
    assert tier_for(5) == 5
    assert tier_for(10) == 10
    assert tier_for(7) == 10
    assert pick_band(1, 4) == (0, 1)
    assert pick_band(5, 6) == BANDS_5[1]
    assert pick_band(10, 10) == (0, 4)
    assert band_index(123, (2, 10)) == 2 + 123 % 8
    assert band_index(5, (3, 3)) == 3


def test_ticket_hints():
    t = Ticket(group=4, digits=(6, 3, 9, 5, 6, 6))

    assert t.number == "639566"
    assert t.suffix == "39566"
    assert t.alternate_groups == [1, 2, 3, 5]
