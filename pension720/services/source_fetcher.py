"""Fetch the source page holding the published draw results."""

from __future__ import annotations

import logging

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from pension720.errors import FetchError

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome Safari"
    ),
    "Accept-Language": "ko-KR,ko;q=0.9,en;q=0.7",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
}


def build_http_session(retries: int, backoff_factor: float) -> requests.Session:
    """Create a requests session with retry/backoff for transient network errors."""

    retry = Retry(
        total=retries,
        connect=retries,
        read=retries,
        status=retries,
        backoff_factor=backoff_factor,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=("GET",),
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry)

    session = requests.Session()
    session.headers.update(DEFAULT_HEADERS)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


class SourceFetcher:
    """GET one page and return its decoded body."""

    def __init__(self, http: requests.Session | None = None, timeout_seconds: float = 20.0) -> None:
        self._http = http or build_http_session(retries=3, backoff_factor=0.5)
        self._timeout = float(timeout_seconds)

    def fetch_text(self, url: str) -> str:
        """Return the body of ``url``.

        Raises:
            FetchError: connection failure or a non-2xx status.
        """

        try:
            resp = self._http.get(url, timeout=self._timeout, allow_redirects=True)
        except requests.RequestException as exc:
            raise FetchError(
                message=f"Fetch failed: {exc}",
                details={"url": url, "reason": type(exc).__name__},
            ) from exc

        if not resp.ok:
            raise FetchError(
                message=f"Fetch failed: HTTP {resp.status_code} {resp.reason}",
                details={"url": url, "status": resp.status_code, "reason": resp.reason},
            )

        # requests falls back to latin-1 when the charset header is missing.
        if not resp.encoding or resp.encoding.lower() == "iso-8859-1":
            resp.encoding = resp.apparent_encoding or "utf-8"

        logger.info("Fetched %s (%s bytes)", url, len(resp.content))
        return resp.text
