"""Template metadata stored in a leading <META> block."""

import json
import logging
import re
from typing import Any

from ..text import trim_start
from ..types import require_str

logger = logging.getLogger(__name__)

META_BLOCK_PATTERN = re.compile(r"<META>([\s\S]*?)</META>")


def parse_template_with_metadata(template: str) -> tuple[dict[str, Any], str]:
    """
    Split a leading ``<META>{json}</META>`` block from a template.

    The block must open the template (leading whitespace is ignored) and hold
    a JSON object, typically ``{"settings": {...}}`` with request settings.
    A block that is not valid JSON, or not an object, is logged and yields
    empty metadata; it is still removed from the content.

    Example:
        metadata, content = parse_template_with_metadata(
            '<META>{"settings": {"temperature": 0.2}}</META><USER>Hi</USER>'
        )
        metadata  # {"settings": {"temperature": 0.2}}
        content   # "<USER>Hi</USER>"

    Args:
        template: Template source, possibly starting with a META block

    Returns:
        Tuple of (metadata dict, template content without the block)

    Raises:
        InputTypeError: If template is not a string
    """
    require_str("template", template)

    body = trim_start(template)
    match = META_BLOCK_PATTERN.match(body)
    if not match:
        return {}, template

    content = trim_start(body[match.end() :])
    try:
        metadata = json.loads(match.group(1))
    except json.JSONDecodeError as e:
        logger.warning("Ignoring <META> block with invalid JSON: %s", e)
        return {}, content

    if not isinstance(metadata, dict):
        logger.warning(
            "Ignoring <META> block: expected a JSON object, got %s", type(metadata).__name__
        )
        return {}, content

    return metadata, content
