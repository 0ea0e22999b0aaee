"""Repository layer for draw history persistence."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any, Protocol

from marshmallow import ValidationError as MarshmallowValidationError
from sqlalchemy import select
from sqlalchemy.orm import Session

from pension720.config import BaseConfig
from pension720.models.draw_row import DrawRow
from pension720.records import BonusResult, DrawRecord, PrimaryResult
from pension720.schemas.draw import DrawRecordSchema

logger = logging.getLogger(__name__)

_record_schema = DrawRecordSchema()
_records_schema = DrawRecordSchema(many=True)


def merge_draws(persisted: Iterable[DrawRecord], fresh: Iterable[DrawRecord]) -> list[DrawRecord]:
    """Overlay ``fresh`` on ``persisted`` by round and return the union by round.

    A round present in both takes the fresh value; rounds only in
    ``persisted`` are kept. Nothing is ever dropped.
    """

    by_round: dict[int, DrawRecord] = {}
    for d in persisted:
        by_round[int(d.round)] = d
    for d in fresh:
        by_round[int(d.round)] = d
    return [by_round[r] for r in sorted(by_round)]


def write_json_atomic(path: str | os.PathLike[str], payload: Any) -> None:
    """Write JSON to a temp file next to ``path`` and swap it in.

    Readers see either the previous file or the complete new one.
    """

    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=str(target.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump(payload, fh, ensure_ascii=False, indent=2)
            fh.write("\n")
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp_name, target)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise


class DrawRepository(Protocol):
    def load(self) -> list[DrawRecord]: ...

    def save(self, draws: Sequence[DrawRecord]) -> None: ...


class JsonDrawRepository:
    """Draw history kept as one JSON list ordered by round."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[DrawRecord]:
        """Return the stored history; an unreadable file counts as empty."""

        if not self._path.exists():
            logger.info("No history file at %s; starting empty", self._path)
            return []

        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable history file %s: %s", self._path, exc)
            return []

        if not isinstance(raw, list):
            logger.warning("Ignoring history file %s: expected a JSON list", self._path)
            return []

        records: list[DrawRecord] = []
        for i, item in enumerate(raw):
            try:
                records.append(_record_schema.load(item))
            except MarshmallowValidationError as exc:
                logger.warning("Skipping invalid history entry #%s: %s", i, exc.messages)

        return merge_draws([], records)

    def save(self, draws: Sequence[DrawRecord]) -> None:
        ordered = merge_draws([], draws)
        write_json_atomic(self._path, _records_schema.dump(ordered))
        logger.info("Saved %s draws to %s", len(ordered), self._path)


def _row_to_record(row: DrawRow) -> DrawRecord:
    bonus = None
    if row.bonus_digits:
        bonus = BonusResult(
            digits=tuple(int(c) for c in row.bonus_digits),  # type: ignore[arg-type]
            winner_count=int(row.bonus_winners or 0),
        )
    return DrawRecord(
        round=int(row.round),
        date=row.draw_date,
        primary=PrimaryResult(
            group=int(row.group_no),
            digits=tuple(int(c) for c in row.digits),  # type: ignore[arg-type]
            winner_count=int(row.winners),
        ),
        bonus=bonus,
        source=row.source or "",
    )


def _record_to_row(record: DrawRecord) -> DrawRow:
    return DrawRow(
        round=int(record.round),
        draw_date=record.date,
        group_no=int(record.primary.group),
        digits=record.number,
        winners=int(record.primary.winner_count),
        bonus_digits="".join(str(d) for d in record.bonus.digits) if record.bonus else None,
        bonus_winners=int(record.bonus.winner_count) if record.bonus else None,
        source=record.source or "",
    )


class SqlDrawRepository:
    """Draw history in the ``pension720_draws`` table."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def load(self) -> list[DrawRecord]:
        stmt = select(DrawRow).order_by(DrawRow.round.asc())
        return [_row_to_record(row) for row in self._session.scalars(stmt).all()]

    def save(self, draws: Sequence[DrawRecord]) -> None:
        for record in draws:
            # merge() does an upsert-like behavior based on primary key
            self._session.merge(_record_to_row(record))
        self._session.flush()
        logger.info("Upserted %s draws", len(draws))


def get_draw_repository(config: BaseConfig, session: Session | None = None) -> DrawRepository:
    """Pick the history backend configured by ``HISTORY_BACKEND``."""

    if config.HISTORY_BACKEND == "sql":
        if session is None:
            raise RuntimeError("SQLAlchemy session required for sql backend")
        return SqlDrawRepository(session)
    return JsonDrawRepository(config.draws_path)
