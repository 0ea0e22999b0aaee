from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from pension720.config import DevelopmentConfig
from pension720.records import BonusResult, DrawRecord, PrimaryResult

SOURCE_URL = "https://example.test/277"

SAMPLE_HTML = """<html><head>
<style>.x { color: red }</style>
<script>var fake = "999회 2020.01.01 1등 1 1 1 1 1 1 1 1";</script>
</head><body>
<div class="entry">
<p>연금복권720+ 당첨번호 모음【3†source】</p>
<table>
<tr><td>303회</td><td>2026.02.19</td><td>1등</td><td>4</td><td>6 3 9 5 6 6</td><td>1</td></tr>
<tr><td>보너스</td><td>각조</td><td>6 1 9 1 3 6</td><td>10</td></tr>
<tr><td>302회</td><td>2026.02.12</td><td>1등</td><td>1</td><td>0&nbsp;4 2 7 7 1</td><td>2</td></tr>
<tr><td>보너스</td><td>각조</td><td>8 8 0 2 4 5</td><td>10</td></tr>
<tr><td>301회</td><td>2026.02.05</td><td>1등</td><td>4</td><td>1 5 3 8 0 6</td><td>1</td></tr>
</table>
</div>
</body></html>
"""


class StubFetcher:
    def __init__(self, text: str = SAMPLE_HTML, error: Exception | None = None) -> None:
        self.text = text
        self.error = error
        self.calls: list[str] = []

    def fetch_text(self, url: str) -> str:
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return self.text


def make_draw(
    round_no: int,
    group: int = 1,
    digits: tuple[int, ...] = (1, 2, 3, 4, 5, 6),
    bonus: tuple[int, ...] | None = None,
    winners: int = 1,
) -> DrawRecord:
    return DrawRecord(
        round=round_no,
        date=date(2026, 1, 1),
        primary=PrimaryResult(group=group, digits=digits, winner_count=winners),  # type: ignore[arg-type]
        bonus=BonusResult(digits=bonus, winner_count=10) if bonus else None,  # type: ignore[arg-type]
        source=SOURCE_URL,
    )


@pytest.fixture()
def fixed_now() -> datetime:
    return datetime(2026, 2, 20, 9, 0, tzinfo=timezone.utc)


@pytest.fixture()
def history() -> list[DrawRecord]:
    return [
        make_draw(1, group=1, digits=(1, 2, 3, 4, 5, 6), bonus=(0, 0, 0, 0, 0, 1)),
        make_draw(2, group=3, digits=(1, 9, 3, 4, 5, 7)),
        make_draw(3, group=3, digits=(2, 2, 3, 0, 5, 6), bonus=(9, 9, 9, 9, 9, 9)),
        make_draw(4, group=5, digits=(7, 8, 8, 4, 5, 6)),
    ]


@pytest.fixture()
def config(tmp_path) -> DevelopmentConfig:
    return DevelopmentConfig(
        DATA_DIR=str(tmp_path / "data"),
        SOURCE_URL=SOURCE_URL,
        HISTORY_BACKEND="json",
        LOG_LEVEL="WARNING",
    )
