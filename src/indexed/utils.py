"""Utility functions for indexed."""

import logging
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from indexed.exceptions import InvalidArgumentError, LimitExceededError

LOGGER = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def is_fully_qualified(url: str) -> bool:
    """Check whether a URL carries a scheme separator."""
    return "://" in url


def qualify_url(url: str, base: str) -> str:
    """
    Fully qualify a URL by prefixing the base when it has no scheme.

    Args:
        url: Absolute path (``/posts``) or fully qualified URL.
        base: Site base, e.g. ``http://example.org``.

    Returns:
        Fully qualified URL.
    """
    if is_fully_qualified(url):
        return url
    return base + url


def build_entry(model: type[ModelT], **data: Any) -> ModelT:
    """
    Validate entry options into a model.

    Args:
        model: Entry model class.
        **data: Field values; unknown keys are ignored by the model.

    Returns:
        Validated model instance.

    Raises:
        InvalidArgumentError: If any option is invalid.
    """
    try:
        return model(**data)
    except ValidationError as e:
        first = e.errors(include_url=False)[0]
        field = ".".join(str(part) for part in first["loc"]) or None
        raise InvalidArgumentError(
            f"Invalid {model.__name__} option: {first['msg']}",
            field=field,
            value=first.get("input"),
            context={"errors": e.errors(include_url=False)},
        ) from e


def check_item_count(count: int, limit: int, what: str = "items") -> None:
    """
    Enforce an entry count ceiling.

    Raises:
        LimitExceededError: If count is over the limit.
    """
    if count > limit:
        raise LimitExceededError(f"Too many {what}: {count} > {limit}.", limit=limit, actual=count)


def check_document_size(document: bytes, limit: int) -> None:
    """
    Enforce the document size ceiling.

    Raises:
        LimitExceededError: If the encoded document is over the limit.
    """
    size = len(document)
    if size > limit:
        raise LimitExceededError(
            f"Result document exceeds allowed size: {size} > {limit} bytes.",
            limit=limit,
            actual=size,
        )
