"""Input validation and sanitization utilities."""

from .sanitize import (
    first_error_message,
    like_pattern,
    parse_bool_flag,
    parse_enum_filter,
    sanitize_search,
    validate_payload,
)

__all__ = [
    "validate_payload",
    "first_error_message",
    "parse_bool_flag",
    "parse_enum_filter",
    "sanitize_search",
    "like_pattern",
]
