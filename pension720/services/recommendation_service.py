"""Deterministic ticket recommendations from frequency rankings.

No random source is involved: every pick is a pure function of the
frequency rankings, the cycle counter, the seed string, the slot index and
the output tier. Running twice with the same inputs yields the same tickets.

Each tier samples rank "bands" (``[start, end)`` windows over a ranking,
0 = most frequent), so a 5- or 10-ticket batch deliberately mixes popular
and unpopular digits.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from pension720.config import DEFAULT_SEED
from pension720.errors import NoDataError, ValidationError
from pension720.records import DIGIT_COUNT, GROUPS
from pension720.services.frequency_service import FrequencyTable
from pension720.utils.hashing import fnv1a32, imul32, mix32

logger = logging.getLogger(__name__)

Band = tuple[int, int]

BANDS_1: tuple[Band, ...] = ((0, 1),)
BANDS_5: tuple[Band, ...] = ((0, 7), (0, 8), (1, 9), (2, 10), (0, 10))
BANDS_10: tuple[Band, ...] = (
    (0, 4),
    (0, 5),
    (1, 6),
    (2, 7),
    (3, 8),
    (4, 9),
    (5, 10),
    (6, 10),
    (0, 10),
    (0, 10),
)
TIERS: tuple[int, ...] = (1, 5, 10)

_DEFAULT_RANK = list(range(10))


@dataclass(frozen=True)
class Ticket:
    group: int
    digits: tuple[int, ...]

    @property
    def number(self) -> str:
        return "".join(str(d) for d in self.digits)

    @property
    def suffix(self) -> str:
        """Last five digits (3rd prize match)."""

        return self.number[1:]

    @property
    def alternate_groups(self) -> list[int]:
        """Same digits in every other group (2nd prize match)."""

        return [g for g in GROUPS if g != self.group]


def tier_for(count: int) -> int:
    if count == 1:
        return 1
    if count == 5:
        return 5
    return 10


def pick_band(tier: int, slot: int) -> Band:
    if tier == 1:
        return BANDS_1[0]
    if tier == 5:
        return BANDS_5[slot % len(BANDS_5)]
    return BANDS_10[slot % len(BANDS_10)]


def group_hash(seed: int, max_round: int, cycle: int, slot: int, tier: int) -> int:
    return mix32(
        seed
        ^ imul32(max_round + 1, 0x9E3779B1)
        ^ imul32(cycle + 7, 0x85EBCA6B)
        ^ imul32(slot + 13, 0xC2B2AE35)
        ^ imul32(tier, 0x27D4EB2F)
    )


def position_hash(seed: int, max_round: int, cycle: int, slot: int, position: int, tier: int) -> int:
    x = seed
    x ^= imul32(max_round + 11, 0x9E3779B1)
    x ^= imul32(cycle + 31, 0x85EBCA6B)
    x ^= imul32(slot + 97, 0xC2B2AE35)
    x ^= imul32(position + 1, 0x27D4EB2F)
    x ^= imul32(tier, 0x165667B1)
    return mix32(x)


def band_index(x: int, band: Band) -> int:
    start, end = band
    span = max(1, end - start)
    return start + (x % span)


def resolve_cycle(table: FrequencyTable, cycle: int | None) -> int:
    """Explicit cycle, else the latest round (changes every week)."""

    if cycle is not None:
        return int(cycle)
    return int(table.rounds.max or 1)


class RecommendationService:
    """Build ticket batches from a :class:`FrequencyTable`."""

    def __init__(self, max_retries: int = 20) -> None:
        self._max_retries = max_retries

    @staticmethod
    def _ranks(table: FrequencyTable) -> tuple[list[int], list[list[int]]]:
        group_rank = table.group.keys or list(GROUPS)
        pos_rank = [(p.keys or _DEFAULT_RANK) for p in table.positions]
        while len(pos_rank) < DIGIT_COUNT:
            pos_rank.append(_DEFAULT_RANK)
        return group_rank, pos_rank

    def generate(
        self,
        table: FrequencyTable,
        count: int,
        *,
        cycle: int | None = None,
        seed: str = DEFAULT_SEED,
    ) -> list[Ticket]:
        """Return exactly ``count`` tickets.

        Raises:
            ValidationError: ``count`` below 1.
            NoDataError: the table was built from zero rounds.
        """

        if count < 1:
            raise ValidationError(
                message="Invalid count",
                details={"count": ["Must be >= 1"]},
            )
        if table.is_empty:
            raise NoDataError()

        tier = tier_for(count)
        cyc = resolve_cycle(table, cycle)
        seed_hash = fnv1a32(seed or DEFAULT_SEED)
        max_round = int(table.rounds.max or 0)
        group_rank, pos_rank = self._ranks(table)

        out: list[Ticket] = []
        used: set[tuple[int, str]] = set()
        for slot in range(count):
            band = pick_band(tier, slot)

            gx = group_hash(seed_hash, max_round, cyc, slot, tier)
            group = group_rank[band_index(gx, band) % len(group_rank)]

            rank_idx = [
                band_index(position_hash(seed_hash, max_round, cyc, slot, p, tier), band)
                for p in range(DIGIT_COUNT)
            ]

            ticket = self._ticket(group, pos_rank, rank_idx)
            attempts = 0
            while (ticket.group, ticket.number) in used and attempts < self._max_retries:
                # Walk the last position down its ranking until the ticket is new.
                rank_idx[-1] += 1
                attempts += 1
                ticket = self._ticket(group, pos_rank, rank_idx)

            if (ticket.group, ticket.number) in used:
                logger.info("Slot %s: accepting duplicate %s-%s", slot, ticket.group, ticket.number)
            used.add((ticket.group, ticket.number))
            out.append(ticket)

        return out

    @staticmethod
    def _ticket(group: int, pos_rank: Sequence[Sequence[int]], rank_idx: Sequence[int]) -> Ticket:
        digits = tuple(int(pos_rank[p][i % len(pos_rank[p])]) for p, i in enumerate(rank_idx))
        return Ticket(group=int(group), digits=digits)

    def generate_tiers(
        self,
        table: FrequencyTable,
        *,
        cycle: int | None = None,
        seed: str = DEFAULT_SEED,
    ) -> dict[int, list[Ticket]]:
        """The 1 / 5 / 10 ticket batches shown in the weekly report."""

        return {n: self.generate(table, n, cycle=cycle, seed=seed) for n in TIERS}
