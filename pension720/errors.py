"""Custom exceptions for centralized error handling."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class AppError(Exception):
    """Base application error."""

    code: str
    message: str
    status_code: int
    details: Any | None = None

    def __str__(self) -> str:
        return self.message


class NotFoundError(AppError):
    """Resource not found."""

    def __init__(self, message: str = "Not found", details: Any | None = None) -> None:
        super().__init__(code="not_found", message=message, status_code=404, details=details)


class ValidationError(AppError):
    """Input validation error."""

    def __init__(self, message: str = "Validation error", details: Any | None = None) -> None:
        super().__init__(code="validation_error", message=message, status_code=400, details=details)


class FetchError(AppError):
    """The source page could not be fetched (transport error or non-2xx status)."""

    def __init__(self, message: str = "Fetch failed", details: Any | None = None) -> None:
        super().__init__(code="fetch_failed", message=message, status_code=502, details=details)


class ExtractionEmptyError(AppError):
    """No draw record could be found in the fetched page."""

    def __init__(
        self,
        message: str = "No draws found: source format changed or source unreachable",
        details: Any | None = None,
    ) -> None:
        super().__init__(code="extraction_empty", message=message, status_code=422, details=details)


class NoDataError(AppError):
    """Recommendation requested on top of an empty history."""

    def __init__(self, message: str = "No data to recommend from", details: Any | None = None) -> None:
        super().__init__(code="no_data", message=message, status_code=409, details=details)
