"""Domain exceptions for the Mauboussin analysis toolkit.

All domain-specific exceptions inherit from ``MauboussinAnalyzerError`` so
callers can catch the full family with a single ``except`` clause when needed.
Every one of them is a local validation failure: the record that raised it
is left exactly as it was before the call.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any


class MauboussinAnalyzerError(Exception):
    """Base exception for all analysis-record errors."""

    def __init__(self, message: str = "", details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details: dict[str, Any] = details or {}


class UnknownDimension(MauboussinAnalyzerError):
    """Raised when a dimension setter is called with a key outside the fixed five."""

    def __init__(
        self,
        key: Any,
        message: str = "",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message or f"Unknown competitive dimension {key!r}", details)
        self.key = key


class ScoreOutOfRange(MauboussinAnalyzerError):
    """Raised when a dimension score is not an integer in [0, 5]."""

    def __init__(
        self,
        key: str,
        score: Any,
        message: str = "",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message or f"Score for {key!r} must be an integer in [0, 5], got {score!r}",
            details,
        )
        self.key = key
        self.score = score


class InvalidEnumValue(MauboussinAnalyzerError):
    """Raised when an enumerated field is given a value outside its domain."""

    def __init__(
        self,
        field_name: str,
        value: Any,
        allowed: Sequence[str] = (),
        message: str = "",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message
            or f"{field_name} must be one of {list(allowed)}, got {value!r}",
            details,
        )
        self.field_name = field_name
        self.value = value
        self.allowed: tuple[str, ...] = tuple(allowed)


class UnknownField(MauboussinAnalyzerError):
    """Raised when ``set_field`` names a field the record does not have."""

    def __init__(
        self,
        field_name: Any,
        message: str = "",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message or f"Unknown analysis field {field_name!r}", details)
        self.field_name = field_name


class InvalidFieldValue(MauboussinAnalyzerError):
    """Raised when a free-text field is given something other than a string."""

    def __init__(
        self,
        field_name: str,
        value: Any,
        message: str = "",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message
            or f"{field_name} expects a string, got {type(value).__name__}",
            details,
        )
        self.field_name = field_name
        self.value = value
