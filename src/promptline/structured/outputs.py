"""Validation of tagged LLM responses against Pydantic models."""

import logging
from collections.abc import Sequence
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from ..parsing.tags import parse_structured_content
from ..types import PromptlineError

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class StructuredOutputError(PromptlineError):
    """Error validating the tagged sections of a response."""

    def __init__(
        self,
        message: str,
        raw_content: str | None = None,
        validation_errors: list[dict[str, Any]] | None = None,
    ):
        super().__init__(message)
        self.raw_content = raw_content
        self.validation_errors = validation_errors or []


def model_tags(model: type[BaseModel]) -> list[str]:
    """
    Tag names for a model: each field's alias, or its name when it has none.

    Example:
        class Review(BaseModel):
            analysis: str
            verdict: str = Field(alias="VERDICT")

        model_tags(Review)  # ["analysis", "VERDICT"]
    """
    return [field.alias or name for name, field in model.model_fields.items()]


def validate_tagged_response(
    content: str,
    model: type[T],
    tags: Sequence[str] | None = None,
) -> T:
    """
    Extract tagged sections from a response and validate them as a model.

    Sections are extracted with parse_structured_content, so unclosed tags
    are tolerated. Empty or missing sections are left out of the data, which
    lets the model decide through defaults and required fields whether a
    section may be absent.

    Args:
        content: The raw response content from the LLM
        model: The Pydantic model class to validate against
        tags: Tag names to extract (defaults to the model's field tags)

    Returns:
        A validated instance of the model

    Raises:
        StructuredOutputError: If validation fails
    """
    tag_names = list(tags) if tags is not None else model_tags(model)
    sections = parse_structured_content(content, tag_names)
    data = {tag: text for tag, text in sections.items() if text}

    try:
        return model.model_validate(data)
    except ValidationError as e:
        errors = e.errors()
        error_messages = []
        for err in errors:
            loc = ".".join(str(x) for x in err["loc"])
            error_messages.append(f"  - {loc}: {err['msg']}")

        logger.debug("Tagged response failed validation for %s", model.__name__)
        raise StructuredOutputError(
            "Validation failed:\n" + "\n".join(error_messages),
            raw_content=content,
            validation_errors=[dict(err) for err in errors],
        ) from e


def format_validation_error_for_retry(
    error: StructuredOutputError,
    tags: Sequence[str] | None = None,
) -> str:
    """
    Format a validation error as feedback for the model to retry.

    Args:
        error: The structured output error
        tags: Tag names the response is expected to contain

    Returns:
        A formatted error message for the retry prompt
    """
    lines = ["Your previous response had the following errors:", ""]

    if error.validation_errors:
        for err in error.validation_errors:
            loc = ".".join(str(x) for x in err.get("loc", []))
            msg = err.get("msg", "Unknown error")
            if loc:
                lines.append(f"- Section '{loc}': {msg}")
            else:
                lines.append(f"- {msg}")
    else:
        lines.append(f"- {error}")

    lines.append("")
    if tags:
        wrapped = ", ".join(f"<{tag}>...</{tag}>" for tag in tags)
        lines.append(f"Please correct these errors and wrap each section in its tags: {wrapped}")
    else:
        lines.append("Please correct these errors and respond again.")

    return "\n".join(lines)
