"""Draw history stored in one wide table (``sql`` history backend).

Columns:
- round (PK)
- draw_date
- group_no, digits, winners (1st prize)
- bonus_digits, bonus_winners (nullable when no bonus line was found)
- source
"""

from __future__ import annotations

from datetime import date

from sqlalchemy import Date, Integer, SmallInteger, String
from sqlalchemy.orm import Mapped, mapped_column

from pension720.models.base import Base


class DrawRow(Base):
    """One row per round."""

    __tablename__ = "pension720_draws"

    round: Mapped[int] = mapped_column(Integer, primary_key=True)
    draw_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    group_no: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    digits: Mapped[str] = mapped_column(String(6), nullable=False)
    winners: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    bonus_digits: Mapped[str | None] = mapped_column(String(6), nullable=True)
    bonus_winners: Mapped[int | None] = mapped_column(Integer, nullable=True)

    source: Mapped[str] = mapped_column(String(500), nullable=False, default="")
