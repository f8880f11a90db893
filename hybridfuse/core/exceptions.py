"""Custom exceptions for the hybridfuse package."""

from __future__ import annotations

from typing import Any, Optional


class HybridFuseError(Exception):
    """Base exception for all hybridfuse errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class ConfigurationError(HybridFuseError):
    """Raised when there's a configuration error."""

    pass


class ValidationError(HybridFuseError):
    """Raised when validation of a fusion parameter fails."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.field = field
        self.value = value
        details = details or {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = value
        super().__init__(message, details)


class InvalidWeightError(ValidationError):
    """Raised when alpha is not a number in [0, 1]."""

    def __init__(self, value: Any, message: Optional[str] = None) -> None:
        msg = message or f"Fusion weight must be a number in [0, 1], got {value!r}"
        super().__init__(msg, field="alpha", value=value)


class InvalidLimitError(ValidationError):
    """Raised when the result limit is not a positive integer."""

    def __init__(self, value: Any, message: Optional[str] = None) -> None:
        msg = message or f"Result limit must be a positive integer, got {value!r}"
        super().__init__(msg, field="limit", value=value)


class MalformedResultSetError(HybridFuseError):
    """Raised when a search source breaks the result set contract."""

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.source = source
        details = details or {}
        if source:
            details["source"] = source
        super().__init__(message, details)


class UpstreamFailureError(HybridFuseError):
    """Raised when a search source fails or times out."""

    def __init__(
        self,
        source: str,
        message: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.source = source
        msg = message or f"Upstream search failed: {source}"
        details = details or {}
        details["source"] = source
        super().__init__(msg, details)
