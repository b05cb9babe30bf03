"""Structured outputs module for Pydantic model integration."""

from .outputs import (
    StructuredOutputError,
    format_validation_error_for_retry,
    model_tags,
    validate_tagged_response,
)

__all__ = [
    "validate_tagged_response",
    "model_tags",
    "format_validation_error_for_retry",
    "StructuredOutputError",
]
