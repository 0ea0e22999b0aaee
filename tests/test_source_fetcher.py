from __future__ import annotations

import pytest
import requests

from pension720.errors import FetchError
from pension720.services.source_fetcher import DEFAULT_HEADERS, SourceFetcher, build_http_session


class FakeResponse:
    def __init__(self, status_code: int = 200, text: str = "", reason: str = "OK", encoding: str | None = "utf-8"):
        self.status_code = status_code
        self.reason = reason
        self.encoding = encoding
        self.apparent_encoding = "utf-8"
        self.text = text
        self.content = text.encode("utf-8")

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400


class FakeSession:
    def __init__(self, response: FakeResponse | None = None, error: Exception | None = None):
        self.response = response
        self.error = error
        self.requested: list[tuple[str, float]] = []

    def get(self, url, timeout, allow_redirects=True):  # type: ignore[no-untyped-def]
        self.requested.append((url, timeout))
        if self.error is not None:
            raise self.error
        return self.response


def test_returns_body_on_success():
    http = FakeSession(FakeResponse(text="<p>303회</p>"))

    body = SourceFetcher(http, timeout_seconds=5).fetch_text("https://example.test/277")  # type: ignore[arg-type]

    assert body == "<p>303회</p>"
    assert http.requested == [("https://example.test/277", 5.0)]


def test_non_success_status_raises_with_status():
    http = FakeSession(FakeResponse(status_code=403, reason="Forbidden"))

    with pytest.raises(FetchError) as info:
        SourceFetcher(http).fetch_text("https://example.test/277")  # type: ignore[arg-type]

    assert info.value.details["status"] == 403
    assert "HTTP 403 Forbidden" in info.value.message


def test_transport_error_is_wrapped():
    http = FakeSession(error=requests.ConnectionError("dns failure"))

    with pytest.raises(FetchError) as info:
        SourceFetcher(http).fetch_text("https://example.test/277")  # type: ignore[arg-type]

    assert info.value.details["reason"] == "ConnectionError"
    assert info.value.status_code == 502


def test_build_http_session_sets_korean_headers():
    session = build_http_session(retries=2, backoff_factor=0.1)

    assert session.headers["Accept-Language"] == DEFAULT_HEADERS["Accept-Language"]
    assert session.get_adapter("https://x").max_retries.total == 2
