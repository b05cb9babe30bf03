"""Role tag parsing for chat-style templates."""

import re

from ..text import is_blank, trim
from ..types import MessageDict, require_str

# Only the exact uppercase tags delimit messages
ROLE_TAG_PATTERN = re.compile(r"<(SYSTEM|USER|ASSISTANT)>([\s\S]*?)</\1>")


def parse_role_tags(text: str) -> list[MessageDict]:
    """
    Split text into role-labelled chat messages.

    ``<SYSTEM>``, ``<USER>`` and ``<ASSISTANT>`` sections become messages in
    the order they appear. Section bodies are trimmed and blank sections are
    dropped. Text outside the tags is ignored. Text without any role tag
    becomes a single user message.

    Example:
        parse_role_tags("<SYSTEM>Be brief.</SYSTEM><USER>Hi</USER>")
        # [{"role": "system", "content": "Be brief."},
        #  {"role": "user", "content": "Hi"}]

    Args:
        text: The (usually rendered) template text

    Returns:
        List of message dicts; empty for blank input

    Raises:
        InputTypeError: If text is not a string
    """
    require_str("template", text)

    if is_blank(text):
        return []

    messages: list[MessageDict] = []
    matched = False
    for match in ROLE_TAG_PATTERN.finditer(text):
        matched = True
        content = trim(match.group(2))
        if content:
            messages.append({"role": match.group(1).lower(), "content": content})

    if not matched:
        return [{"role": "user", "content": trim(text)}]

    return messages
