"""Core prompt assembly and content helpers."""

from .content import (
    TokenCounter,
    count_tokens,
    estimate_tokens,
    extract_random_variables,
    get_smart_preview,
)
from .messages import (
    build_messages_from_template,
    build_messages_with_metadata,
    count_messages_by_role,
    validate_messages,
)

__all__ = [
    "build_messages_from_template",
    "build_messages_with_metadata",
    "validate_messages",
    "count_messages_by_role",
    "TokenCounter",
    "count_tokens",
    "estimate_tokens",
    "get_smart_preview",
    "extract_random_variables",
]
