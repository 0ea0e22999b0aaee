"""Recover draw records from the normalized source text.

The page lists each round as a 1st prize line followed by a bonus line::

    303회 2026.02.19 1등 4 6 3 9 5 6 6 1
    보너스 각조 6 1 9 1 3 6 10

Markup collapse can merge both onto one physical line, so both grammars are
scanned over the whole text and paired afterwards by proximity.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime

from pension720.errors import ExtractionEmptyError
from pension720.records import BonusResult, DrawRecord, PrimaryResult

logger = logging.getLogger(__name__)

DEFAULT_MAX_GAP = 250

PRIMARY_RE = re.compile(
    r"(\d{1,4})회\s*(\d{4}\.\d{2}\.\d{2})\s*1등\s*([1-5])"
    r"\s*([0-9])\s*([0-9])\s*([0-9])\s*([0-9])\s*([0-9])\s*([0-9])\s*(\d+)"
)
BONUS_RE = re.compile(
    r"보너스\s*각조"
    r"\s*([0-9])\s*([0-9])\s*([0-9])\s*([0-9])\s*([0-9])\s*([0-9])\s*(\d+)"
)
_DATE_RE = re.compile(r"^\d{4}\.\d{2}\.\d{2}$")


@dataclass(frozen=True)
class PrimaryMatch:
    start: int
    end: int
    round: int
    date_text: str
    group: int
    digits: tuple[int, ...]
    winner_count: int


@dataclass(frozen=True)
class BonusMatch:
    start: int
    end: int
    digits: tuple[int, ...]
    winner_count: int


def parse_dot_date(value: str) -> date | None:
    """``YYYY.MM.DD`` -> date, or None when it is not a real calendar date."""

    if not _DATE_RE.match(value or ""):
        return None
    try:
        return datetime.strptime(value, "%Y.%m.%d").date()
    except ValueError:
        return None


def scan_primary(text: str) -> list[PrimaryMatch]:
    out: list[PrimaryMatch] = []
    for m in PRIMARY_RE.finditer(text):
        out.append(
            PrimaryMatch(
                start=m.start(),
                end=m.end(),
                round=int(m.group(1)),
                date_text=m.group(2),
                group=int(m.group(3)),
                digits=tuple(int(m.group(i)) for i in range(4, 10)),
                winner_count=int(m.group(10)),
            )
        )
    return out


def scan_bonus(text: str) -> list[BonusMatch]:
    out: list[BonusMatch] = []
    for m in BONUS_RE.finditer(text):
        out.append(
            BonusMatch(
                start=m.start(),
                end=m.end(),
                digits=tuple(int(m.group(i)) for i in range(1, 7)),
                winner_count=int(m.group(7)),
            )
        )
    return out


def associate(
    primaries: Sequence[PrimaryMatch],
    bonuses: Sequence[BonusMatch],
    max_gap: int = DEFAULT_MAX_GAP,
) -> list[tuple[PrimaryMatch, BonusMatch | None]]:
    """Pair each primary match with the nearest following bonus match.

    Two-pointer scan: the bonus cursor only moves forward, skipping bonus
    matches that start before the current primary match ends. The next one
    is accepted when ``0 <= gap <= max_gap`` and is then consumed so it
    can never attach to a second primary.
    """

    pairs: list[tuple[PrimaryMatch, BonusMatch | None]] = []
    b = 0
    for primary in primaries:
        while b < len(bonuses) and bonuses[b].start < primary.end:
            b += 1

        bonus: BonusMatch | None = None
        if b < len(bonuses):
            gap = bonuses[b].start - primary.end
            if 0 <= gap <= max_gap:
                bonus = bonuses[b]
                b += 1

        pairs.append((primary, bonus))
    return pairs


class DrawExtractor:
    """Extract :class:`DrawRecord` values from normalized page text."""

    def __init__(self, max_gap: int = DEFAULT_MAX_GAP, source: str = "") -> None:
        self._max_gap = int(max_gap)
        self._source = source

    @property
    def max_gap(self) -> int:
        return self._max_gap

    def extract(self, text: str) -> list[DrawRecord]:
        """Return records sorted by round, one per round.

        Lines with round 0 are skipped with a warning.

        Raises:
            ExtractionEmptyError: no 1st prize line with a valid round matched.
        """

        primaries = scan_primary(text)
        if not primaries:
            raise ExtractionEmptyError(
                message=f"Failed to parse draws from source: {self._source or '<text>'}",
                details={"source": self._source},
            )
        bonuses = scan_bonus(text)

        by_round: dict[int, DrawRecord] = {}
        missing_bonus = 0
        for primary, bonus in associate(primaries, bonuses, self._max_gap):
            if primary.round < 1:
                logger.warning("Skipping draw line with invalid round %s at offset %s", primary.round, primary.start)
                continue
            if bonus is None:
                missing_bonus += 1
            # Later in scan order wins for a repeated round.
            by_round[primary.round] = DrawRecord(
                round=primary.round,
                date=parse_dot_date(primary.date_text),
                primary=PrimaryResult(
                    group=primary.group,
                    digits=primary.digits,  # type: ignore[arg-type]
                    winner_count=primary.winner_count,
                ),
                bonus=(
                    BonusResult(digits=bonus.digits, winner_count=bonus.winner_count)  # type: ignore[arg-type]
                    if bonus is not None
                    else None
                ),
                source=self._source,
            )

        if not by_round:
            raise ExtractionEmptyError(
                message=f"No valid draws in source: {self._source or '<text>'}",
                details={"source": self._source},
            )

        logger.info(
            "Extracted %s draws (%s primary lines, %s bonus lines, %s without bonus)",
            len(by_round),
            len(primaries),
            len(bonuses),
            missing_bonus,
        )
        return [by_round[r] for r in sorted(by_round)]
