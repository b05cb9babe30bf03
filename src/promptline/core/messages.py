"""Chat message assembly from role-tagged templates."""

from typing import Any

from ..parsing.metadata import parse_template_with_metadata
from ..parsing.roles import parse_role_tags
from ..templating.engine import TemplateRenderer
from ..types import MessageDict, Messages, Role, Variables

CHAT_ROLES: frozenset[Role] = frozenset({"system", "user", "assistant"})


def build_messages_from_template(
    template: str,
    variables: Variables | None = None,
    renderer: TemplateRenderer | None = None,
) -> list[MessageDict]:
    """
    Render a role-tagged template and split it into chat messages.

    Placeholders are only rendered when variables are given, so a template
    can also be split as-is. A leading ``<META>`` block is removed first;
    use build_messages_with_metadata to read it.

    Example:
        build_messages_from_template(
            "<SYSTEM>You know {{ topic }}.</SYSTEM><USER>{{ question }}</USER>",
            {"topic": "Python", "question": "What is a generator?"},
        )

    Args:
        template: Template with ``{{ }}`` placeholders and role tags
        variables: Variables to render into the template
        renderer: Renderer to use (defaults to an uncached renderer)

    Returns:
        Messages in the order their role tags appear

    Raises:
        InputTypeError: If template is not a string
    """
    messages, _ = build_messages_with_metadata(template, variables, renderer)
    return messages


def build_messages_with_metadata(
    template: str,
    variables: Variables | None = None,
    renderer: TemplateRenderer | None = None,
) -> tuple[list[MessageDict], dict[str, Any]]:
    """
    Build messages from a template and return its ``<META>`` metadata too.

    The metadata block is split off before rendering, so placeholders inside
    it are not expanded and it never becomes part of a message.

    Returns:
        Tuple of (messages, metadata); metadata is {} without a valid block
    """
    metadata, content = parse_template_with_metadata(template)
    if variables is not None:
        content = (renderer or TemplateRenderer()).render(content, variables)

    return parse_role_tags(content), metadata


def validate_messages(messages: Messages) -> list[str]:
    """
    Validate a list of chat messages before building a request.

    Returns list of validation errors (empty if valid).
    """
    errors: list[str] = []

    for i, msg in enumerate(messages):
        if not isinstance(msg, dict):
            errors.append(f"Message {i}: must be a dict, got {type(msg).__name__}")
            continue

        role = msg.get("role")
        if role not in CHAT_ROLES:
            errors.append(
                f"Message {i}: invalid role '{role}', must be one of {sorted(CHAT_ROLES)}"
            )

        content = msg.get("content")
        if not isinstance(content, str) or not content.strip():
            errors.append(f"Message {i}: content must be a non-empty string")

    return errors


def count_messages_by_role(messages: Messages) -> dict[str, int]:
    """Count messages by role."""
    counts: dict[str, int] = {}
    for msg in messages:
        role = msg.get("role", "unknown")
        counts[role] = counts.get(role, 0) + 1
    return counts
