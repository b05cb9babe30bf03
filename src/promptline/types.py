"""Shared types and exceptions for promptline."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Literal, TypedDict

# Type aliases for messages
Role = Literal["system", "user", "assistant"]


class MessageDict(TypedDict):
    """A chat message in dictionary form."""

    role: Role
    content: str


Message = MessageDict | dict[str, Any]
Messages = Sequence[Message]

# Variables passed to the template renderer
Variables = Mapping[str, Any]


@dataclass(frozen=True)
class LeadingExtraction:
    """Result of extracting a tag that opens a piece of text."""

    extracted: str | None
    remaining: str

    @property
    def found(self) -> bool:
        """Whether the leading tag was present and closed."""
        return self.extracted is not None


# Exceptions
class PromptlineError(Exception):
    """Base exception for promptline errors."""

    pass


class InputTypeError(PromptlineError, TypeError):
    """An argument had the wrong type (e.g. a template that is not a string)."""

    def __init__(self, argument: str, expected: str, value: Any):
        super().__init__(
            f"{argument} must be {expected}, got {type(value).__name__}"
        )
        self.argument = argument
        self.value = value


class TemplateError(PromptlineError):
    """Template rendering error."""

    pass


class RenderLimitError(TemplateError):
    """A template exceeded the renderer's nesting depth or length limit."""

    def __init__(self, message: str, limit: int):
        super().__init__(message)
        self.limit = limit


class ConfigError(PromptlineError):
    """Configuration error."""

    pass


def require_str(argument: str, value: Any) -> str:
    """Return ``value`` unchanged, raising InputTypeError if it is not a string."""
    if not isinstance(value, str):
        raise InputTypeError(argument, "a string", value)
    return value
