"""Plain value objects shared by the extractor, repository and services."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

DIGIT_COUNT = 6
GROUPS: tuple[int, ...] = (1, 2, 3, 4, 5)

Digits6 = tuple[int, int, int, int, int, int]


@dataclass(frozen=True)
class PrimaryResult:
    """1st prize: group + six digits."""

    group: int
    digits: Digits6
    winner_count: int


@dataclass(frozen=True)
class BonusResult:
    """Bonus prize: six digits shared by every group."""

    digits: Digits6
    winner_count: int


@dataclass(frozen=True)
class DrawRecord:
    round: int
    date: date | None
    primary: PrimaryResult
    bonus: BonusResult | None = None
    source: str = ""

    @property
    def number(self) -> str:
        return "".join(str(d) for d in self.primary.digits)

    @property
    def suffix(self) -> str:
        """Last five digits of the 1st prize number (3rd prize tier)."""

        return self.number[1:]
