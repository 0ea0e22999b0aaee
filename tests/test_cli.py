from __future__ import annotations

import json

import pytest

from pension720.cli import main
from pension720.errors import FetchError
from tests.conftest import SOURCE_URL, StubFetcher


@pytest.fixture(autouse=True)
def _env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for key in ("SKIP_UPDATE", "RECOMMEND", "CYCLE", "SEED", "OUTPUT_FORMAT", "HISTORY_BACKEND", "DATA_DIR"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("SOURCE_URL", SOURCE_URL)


def test_update_and_recommend_markdown(tmp_path, capsys):
    data_dir = tmp_path / "data"

    code = main(["--data-dir", str(data_dir), "--recommend", "5", "--cycle", "3"], fetcher=StubFetcher())

    assert code == 0
    out = capsys.readouterr().out
    assert out.startswith("## 연금복권720+")
    assert "### ✅ 5개 추천" in out
    assert "- cycle: 3" in out
    assert "과거 빈도는 미래 당첨을 보장하지 않습니다." in out
    assert json.loads((data_dir / "yeongeum720_draws.json").read_text(encoding="utf-8"))[0]["round"] == 301
    assert (data_dir / "yeongeum720_freq.json").exists()


def test_plain_all_tiers_without_update(tmp_path, capsys):
    data_dir = tmp_path / "data"
    assert main(["--data-dir", str(data_dir)], fetcher=StubFetcher()) == 0
    capsys.readouterr()

    fetcher = StubFetcher()
    code = main(["--data-dir", str(data_dir), "--no-update", "--all-tiers", "--format", "plain"], fetcher=fetcher)

    assert code == 0
    assert fetcher.calls == []
    out = capsys.readouterr().out
    assert "[1개 추천]" in out
    assert "[10개 추천]" in out
    assert "3등:" in out


def test_no_recommend_prints_summary(tmp_path, capsys):
    code = main(["--data-dir", str(tmp_path / "data")], fetcher=StubFetcher())

    assert code == 0
    assert "rounds=3 min=301 max=303 fetched=3" in capsys.readouterr().out


def test_errors_exit_non_zero(tmp_path, capsys):
    code = main(["--data-dir", str(tmp_path / "data")], fetcher=StubFetcher(error=FetchError("Fetch failed: HTTP 503")))

    assert code == 1
    assert "Fetch failed: HTTP 503" in capsys.readouterr().err
    assert not (tmp_path / "data" / "yeongeum720_draws.json").exists()


def test_recommend_on_empty_history_fails(tmp_path, capsys):
    code = main(["--data-dir", str(tmp_path / "data"), "--no-update", "--recommend", "1"])

    assert code == 1
    assert "No data to recommend from" in capsys.readouterr().err
