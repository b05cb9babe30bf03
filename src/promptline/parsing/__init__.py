"""Parsing of role-tagged templates and tagged LLM responses."""

from .metadata import META_BLOCK_PATTERN, parse_template_with_metadata
from .roles import ROLE_TAG_PATTERN, parse_role_tags
from .tags import extract_initial_tagged_content, parse_structured_content

__all__ = [
    "parse_role_tags",
    "parse_structured_content",
    "extract_initial_tagged_content",
    "parse_template_with_metadata",
    "ROLE_TAG_PATTERN",
    "META_BLOCK_PATTERN",
]
