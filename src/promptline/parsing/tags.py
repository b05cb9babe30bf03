"""Extraction of XML-style tagged sections from LLM responses."""

import logging
import re
from collections.abc import Iterable

from ..text import trim, trim_start
from ..types import InputTypeError, LeadingExtraction, require_str

logger = logging.getLogger(__name__)


def _closed_pattern(tag: str) -> re.Pattern[str]:
    escaped = re.escape(tag)
    return re.compile(rf"<{escaped}>([\s\S]*?)</{escaped}>")


def _extract_unclosed(content: str, tag: str, others: list[str]) -> str | None:
    """Content after an unclosed ``<tag>`` up to the next other requested opener."""
    opener = f"<{tag}>"
    position = content.find(opener)
    if position == -1:
        return None

    start = position + len(opener)
    end = len(content)
    for other in others:
        found = content.find(f"<{other}>", start)
        if found != -1 and found < end:
            end = found

    logger.debug("Tag <%s> is not closed, captured %d chars best-effort", tag, end - start)
    return content[start:end]


def parse_structured_content(content: str, tags: Iterable[str]) -> dict[str, str]:
    """
    Extract named sections wrapped in XML-style tags.

    For each tag the first properly closed ``<TAG>...</TAG>`` section wins.
    When a tag is opened but never closed (common with truncated or streamed
    output), its content runs until the next opening tag of any other
    requested name, or to the end of the text.

    Example:
        parse_structured_content(
            "<PLAN>Outline\\n<CODE>print(1)",
            ["PLAN", "CODE"],
        )
        # {"PLAN": "Outline", "CODE": "print(1)"}

    Args:
        content: The text to parse (e.g., an LLM response)
        tags: Tag names to extract, in the order the result should follow

    Returns:
        Dict mapping every requested tag to its trimmed content, or "" when
        the tag is absent

    Raises:
        InputTypeError: If content is not a string or tags is a bare string
    """
    require_str("content", content)
    if isinstance(tags, str):
        raise InputTypeError("tags", "an iterable of tag names", tags)
    tag_list = [require_str("tag name", tag) for tag in tags]

    extracted: dict[str, str] = {}
    for tag in tag_list:
        match = _closed_pattern(tag).search(content)
        if match:
            extracted[tag] = trim(match.group(1))
            continue

        others = [other for other in tag_list if other != tag]
        section = _extract_unclosed(content, tag, others)
        extracted[tag] = trim(section) if section is not None else ""

    return extracted


def extract_initial_tagged_content(content: str, tag_name: str) -> LeadingExtraction:
    """
    Extract a tagged block only if it opens the text.

    Used to split a leading reasoning block (e.g. ``<thinking>``) from the
    final answer. Leading whitespace is ignored. A tag that appears later in
    the text, or that is never closed, is left untouched.

    Example:
        result = extract_initial_tagged_content(
            "<thinking>2 + 2</thinking>\\n\\nAnswer: 4", "thinking"
        )
        result.extracted  # "2 + 2"
        result.remaining  # "Answer: 4"

    Args:
        content: The response text
        tag_name: Tag name without angle brackets

    Returns:
        LeadingExtraction with the trimmed tag content and the trimmed text
        after the closing tag, or ``extracted=None`` and the original content

    Raises:
        InputTypeError: If content or tag_name is not a string
    """
    require_str("content", content)
    require_str("tag_name", tag_name)

    open_tag = f"<{tag_name}>"
    close_tag = f"</{tag_name}>"

    trimmed = trim_start(content)
    if not trimmed.startswith(open_tag):
        return LeadingExtraction(extracted=None, remaining=content)

    close = trimmed.find(close_tag, len(open_tag))
    if close == -1:
        return LeadingExtraction(extracted=None, remaining=content)

    return LeadingExtraction(
        extracted=trim(trimmed[len(open_tag) : close]),
        remaining=trim(trimmed[close + len(close_tag) :]),
    )
