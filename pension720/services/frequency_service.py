"""Positional / group / suffix frequency tables over the full draw history."""

from __future__ import annotations

from collections import Counter
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone

from pension720.records import DIGIT_COUNT, GROUPS, DrawRecord

POSITION_NAMES: tuple[str, ...] = ("십만", "만", "천", "백", "십", "일")
DIGITS: tuple[int, ...] = tuple(range(10))
SUFFIX_TOP_N = 20


def rank_counts(counts: Mapping[int, int]) -> list[tuple[int, int]]:
    """Keys by descending count, ties by ascending key."""

    return sorted(counts.items(), key=lambda kv: (-int(kv[1]), int(kv[0])))


def top_suffixes(counts: Mapping[str, int], limit: int = SUFFIX_TOP_N) -> list[tuple[str, int]]:
    return sorted(counts.items(), key=lambda kv: (-int(kv[1]), kv[0]))[: max(0, int(limit))]


@dataclass(frozen=True)
class RankedCounts:
    counts: dict[int, int]
    ranked: list[tuple[int, int]]

    @classmethod
    def from_counts(cls, counts: Mapping[int, int]) -> RankedCounts:
        plain = {int(k): int(v) for k, v in counts.items()}
        return cls(counts=plain, ranked=rank_counts(plain))

    @property
    def keys(self) -> list[int]:
        """Ranked keys only, most frequent first."""

        return [k for k, _ in self.ranked]


@dataclass(frozen=True)
class RoundRange:
    min: int | None
    max: int | None
    count: int


@dataclass(frozen=True)
class FrequencyTable:
    rounds: RoundRange
    group: RankedCounts
    positions: tuple[RankedCounts, ...]
    overall: RankedCounts
    bonus_positions: tuple[RankedCounts, ...]
    bonus_overall: RankedCounts
    suffix_top: list[tuple[str, int]]
    updated_at: datetime
    source: str = ""
    position_names: tuple[str, ...] = field(default=POSITION_NAMES)

    @property
    def is_empty(self) -> bool:
        return self.rounds.count == 0


def _zero_digits() -> dict[int, int]:
    return {d: 0 for d in DIGITS}


class FrequencyService:
    """Fold the whole history into a :class:`FrequencyTable`.

    The table is rebuilt from scratch on every call; nothing is carried
    over between runs.
    """

    def build(
        self,
        draws: Sequence[DrawRecord],
        *,
        now: datetime | None = None,
        source: str = "",
    ) -> FrequencyTable:
        group_counts: dict[int, int] = {g: 0 for g in GROUPS}
        pos_counts = [_zero_digits() for _ in range(DIGIT_COUNT)]
        overall_counts = _zero_digits()
        bonus_pos_counts = [_zero_digits() for _ in range(DIGIT_COUNT)]
        bonus_overall_counts = _zero_digits()
        suffix_counts: Counter[str] = Counter()

        for d in draws:
            group_counts[int(d.primary.group)] += 1

            for idx, digit in enumerate(d.primary.digits):
                pos_counts[idx][int(digit)] += 1
                overall_counts[int(digit)] += 1

            suffix_counts[d.suffix] += 1

            if d.bonus is not None:
                for idx, digit in enumerate(d.bonus.digits):
                    bonus_pos_counts[idx][int(digit)] += 1
                    bonus_overall_counts[int(digit)] += 1

        rounds = [int(d.round) for d in draws]
        round_range = RoundRange(
            min=min(rounds) if rounds else None,
            max=max(rounds) if rounds else None,
            count=len(rounds),
        )

        return FrequencyTable(
            rounds=round_range,
            group=RankedCounts.from_counts(group_counts),
            positions=tuple(RankedCounts.from_counts(c) for c in pos_counts),
            overall=RankedCounts.from_counts(overall_counts),
            bonus_positions=tuple(RankedCounts.from_counts(c) for c in bonus_pos_counts),
            bonus_overall=RankedCounts.from_counts(bonus_overall_counts),
            suffix_top=top_suffixes(suffix_counts),
            updated_at=now or datetime.now(timezone.utc),
            source=source,
        )
