"""Update run: fetch → extract → merge → frequency table → recommendations."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, Protocol

from sqlalchemy.orm import Session

from pension720.config import DEFAULT_SEED, BaseConfig
from pension720.errors import ValidationError
from pension720.records import DrawRecord
from pension720.repositories.draw_repository import (
    DrawRepository,
    get_draw_repository,
    merge_draws,
    write_json_atomic,
)
from pension720.schemas.frequency import FrequencyTableSchema
from pension720.services.draw_extractor import DEFAULT_MAX_GAP, DrawExtractor
from pension720.services.frequency_service import FrequencyService, FrequencyTable
from pension720.services.recommendation_service import (
    RecommendationService,
    Ticket,
    resolve_cycle,
)
from pension720.services.source_fetcher import SourceFetcher, build_http_session
from pension720.services.text_normalizer import normalize

logger = logging.getLogger(__name__)

_freq_schema = FrequencyTableSchema()


class TextFetcher(Protocol):
    def fetch_text(self, url: str) -> str: ...


@dataclass(frozen=True)
class PipelineResult:
    draws: list[DrawRecord]
    table: FrequencyTable
    cycle: int | None = None
    tickets: list[Ticket] = field(default_factory=list)
    tiers: dict[int, list[Ticket]] = field(default_factory=dict)
    fetched_count: int = 0


class UpdatePipeline:
    """One synchronous update run.

    A fetch or extraction failure aborts before anything is written.
    History and the frequency artifact are written before recommendations
    are generated, so a generation error leaves both up to date.
    """

    def __init__(
        self,
        repository: DrawRepository,
        fetcher: TextFetcher,
        *,
        source_url: str,
        freq_path: str | Path | None = None,
        max_gap: int = DEFAULT_MAX_GAP,
        frequency_service: FrequencyService | None = None,
        recommendation_service: RecommendationService | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._repo = repository
        self._fetcher = fetcher
        self._source_url = source_url
        self._freq_path = Path(freq_path) if freq_path is not None else None
        self._extractor = DrawExtractor(max_gap=max_gap, source=source_url)
        self._frequency = frequency_service or FrequencyService()
        self._recommender = recommendation_service or RecommendationService()
        self._clock = clock

    @classmethod
    def from_config(
        cls,
        config: BaseConfig,
        *,
        session: Session | None = None,
        fetcher: TextFetcher | None = None,
    ) -> UpdatePipeline:
        if fetcher is None:
            http = build_http_session(retries=int(config.HTTP_RETRIES), backoff_factor=float(config.HTTP_BACKOFF))
            fetcher = SourceFetcher(http, timeout_seconds=float(config.HTTP_TIMEOUT))
        return cls(
            get_draw_repository(config, session),
            fetcher,
            source_url=config.SOURCE_URL,
            freq_path=config.freq_path,
            max_gap=int(config.BONUS_MAX_GAP),
        )

    def fetch_draws(self) -> list[DrawRecord]:
        html = self._fetcher.fetch_text(self._source_url)
        return self._extractor.extract(normalize(html))

    def build_table(self, draws: list[DrawRecord]) -> FrequencyTable:
        now = self._clock() if self._clock is not None else None
        return self._frequency.build(draws, now=now, source=self._source_url)

    def run(
        self,
        *,
        skip_update: bool = False,
        recommend: int = 0,
        cycle: int | None = None,
        seed: str = DEFAULT_SEED,
        all_tiers: bool = False,
    ) -> PipelineResult:
        if recommend < 0:
            raise ValidationError(message="Invalid recommend", details={"recommend": ["Must be >= 0"]})

        draws = self._repo.load()
        logger.info("Loaded %s stored draws", len(draws))

        fetched: list[DrawRecord] = []
        if not skip_update:
            fetched = self.fetch_draws()
            draws = merge_draws(draws, fetched)
            self._repo.save(draws)

        table = self.build_table(draws)
        if self._freq_path is not None:
            write_json_atomic(self._freq_path, _freq_schema.dump(table))
            logger.info("Wrote frequency table (%s rounds) to %s", table.rounds.count, self._freq_path)

        if recommend <= 0 and not all_tiers:
            return PipelineResult(draws=draws, table=table, fetched_count=len(fetched))

        tickets: list[Ticket] = []
        tiers: dict[int, list[Ticket]] = {}
        if recommend > 0:
            tickets = self._recommender.generate(table, recommend, cycle=cycle, seed=seed)
        if all_tiers:
            tiers = self._recommender.generate_tiers(table, cycle=cycle, seed=seed)

        return PipelineResult(
            draws=draws,
            table=table,
            cycle=resolve_cycle(table, cycle),
            tickets=tickets,
            tiers=tiers,
            fetched_count=len(fetched),
        )
