# willowbank/validation/sanitize.py
"""
Input sanitization and validation utilities.

Everything here raises BadInput so invalid requests are rejected before any
store access.
"""

import logging
from enum import Enum
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from willowbank.errors import BadInput

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)
EnumT = TypeVar("EnumT", bound=Enum)

_TRUE_FLAGS = {"true", "1", "yes"}
_FALSE_FLAGS = {"false", "0", "no"}


def first_error_message(exc: ValidationError) -> str:
    """
    Render the first failing field of a ValidationError.

    Args:
        exc: Pydantic validation error

    Returns:
        Message like '"description" String should have at least 1 character'
    """
    error = exc.errors()[0]
    loc = ".".join(str(part) for part in error["loc"])
    msg = error["msg"]
    return f'"{loc}" {msg}' if loc else msg


def validate_payload(model_cls: type[ModelT], payload: Any) -> ModelT:
    """
    Validate a request body against a request model.

    Args:
        model_cls: Pydantic model describing the accepted shape
        payload: Decoded JSON body

    Returns:
        Validated model instance

    Raises:
        BadInput: If the body is not an object or a field fails validation
    """
    if not isinstance(payload, dict):
        raise BadInput("Request body must be a JSON object")

    try:
        return model_cls.model_validate(payload)
    except ValidationError as e:
        message = first_error_message(e)
        logger.info(f"Rejected {model_cls.__name__} payload: {message}")
        raise BadInput(message) from e


def parse_bool_flag(name: str, value: str | None) -> bool | None:
    """
    Parse a boolean query-string flag.

    Args:
        name: Query parameter name (for the error message)
        value: Raw value, or None when the parameter is absent

    Returns:
        True/False, or None when absent or empty

    Raises:
        BadInput: If the value is not a recognised boolean
    """
    lowered = (value or "").strip().lower()
    if not lowered:
        return None

    if lowered in _TRUE_FLAGS:
        return True
    if lowered in _FALSE_FLAGS:
        return False
    raise BadInput(f'"{name}" must be true or false')


def parse_enum_filter(name: str, value: str | None, enum_cls: type[EnumT]) -> EnumT | None:
    """
    Parse an enumerated query-string filter.

    Unknown values are rejected, not coerced.

    Raises:
        BadInput: If the value is not a member of enum_cls
    """
    if value is None or value == "":
        return None

    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise BadInput(f'"{name}" must be one of [{allowed}]')


def sanitize_search(text: str | None, max_length: int = 200) -> str | None:
    """
    Normalize a free-text search term.

    Strips whitespace and truncates to max_length. Empty terms become None.
    """
    if text is None:
        return None

    cleaned = text.strip()
    if not cleaned:
        return None

    if len(cleaned) > max_length:
        logger.warning(f"Search term truncated from {len(cleaned)} to {max_length} characters")
        cleaned = cleaned[:max_length]

    return cleaned


def like_pattern(term: str) -> str:
    """Wrap a search term for a substring LIKE match, escaping wildcards."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"
