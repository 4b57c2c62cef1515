"""Custom exceptions for indexed with context support."""

import uuid
from typing import Any


def generate_correlation_id() -> str:
    """
    Generate an 8-character UUID-based correlation ID.

    Returns:
        8-character correlation ID string.
    """
    return str(uuid.uuid4())[:8]


class IndexedError(Exception):
    """Base exception for indexed with context and correlation ID support."""

    def __init__(
        self,
        message: str,
        correlation_id: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialise exception with message, correlation ID, and context.

        Args:
            message: Error message.
            correlation_id: Optional correlation ID. If None, generates a new one.
            context: Optional context dictionary for debugging.
        """
        self.message = message
        self.correlation_id = correlation_id or generate_correlation_id()
        self.context = context or {}
        super().__init__(f"{message} [correlation_id={self.correlation_id}]")


class InvalidArgumentError(IndexedError):
    """Raised when an argument is malformed for the requested operation."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
        correlation_id: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialise argument error with field and value context.

        Args:
            message: Error message.
            field: Optional name of the offending argument.
            value: Optional value that was rejected.
            correlation_id: Optional correlation ID. If None, generates a new one.
            context: Optional context dictionary for debugging.
        """
        if context is None:
            context = {}
        if field is not None:
            context["field"] = field
        if value is not None:
            context["value"] = str(value)
        super().__init__(message, correlation_id=correlation_id, context=context)


class _UrlError(IndexedError):
    """Base for errors about an entry identified by URL."""

    def __init__(
        self,
        message: str,
        url: str | None = None,
        correlation_id: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        if context is None:
            context = {}
        if url is not None:
            context["url"] = url
        super().__init__(message, correlation_id=correlation_id, context=context)


class AlreadyExistsError(_UrlError):
    """Raised when an entry with the same URL was already added."""


class NotFoundError(_UrlError):
    """Raised when an entry referenced by URL does not exist."""


class LimitExceededError(IndexedError):
    """Raised when an entry count or document size is over its ceiling."""

    def __init__(
        self,
        message: str,
        limit: int | None = None,
        actual: int | None = None,
        correlation_id: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialise limit error with the ceiling and the observed value.

        Args:
            message: Error message.
            limit: Optional ceiling that was exceeded.
            actual: Optional observed count or size.
            correlation_id: Optional correlation ID. If None, generates a new one.
            context: Optional context dictionary for debugging.
        """
        if context is None:
            context = {}
        if limit is not None:
            context["limit"] = limit
        if actual is not None:
            context["actual"] = actual
        super().__init__(message, correlation_id=correlation_id, context=context)


class UnsupportedFormatError(IndexedError):
    """Raised when an unknown output format is requested."""

    def __init__(
        self,
        message: str,
        format: str | None = None,
        correlation_id: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        if context is None:
            context = {}
        if format is not None:
            context["format"] = format
        super().__init__(message, correlation_id=correlation_id, context=context)


class ConfigurationError(IndexedError):
    """Raised when settings or a manifest cannot be loaded or validated."""

    def __init__(
        self,
        message: str,
        config_path: str | None = None,
        correlation_id: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialise configuration error with path context.

        Args:
            message: Error message.
            config_path: Optional path to the configuration or manifest file.
            correlation_id: Optional correlation ID. If None, generates a new one.
            context: Optional context dictionary for debugging.
        """
        if context is None:
            context = {}
        if config_path is not None:
            context["config_path"] = str(config_path)
        super().__init__(message, correlation_id=correlation_id, context=context)
