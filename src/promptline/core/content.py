"""Content preparation helpers: token counting, previews and few-shot variables."""

import logging
import math
import random
import re
from collections.abc import Callable
from typing import Any, Protocol

import tiktoken

from ..cache import MemoryCache
from ..types import require_str

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_MODEL = "gpt-4"
DEFAULT_MAX_PER_TAG = 30

# Rough estimate used when no tokenizer is available
CHARS_PER_TOKEN_ESTIMATE = 4

TRUNCATION_MARKER = "\n... (content truncated)"

RANDOM_TAG_PATTERN = re.compile(r"<RANDOM_([A-Za-z0-9_]+)>([\s\S]*?)</RANDOM_\1>")


class Encoding(Protocol):
    def encode(self, text: str, *, disallowed_special: Any = ...) -> list[int]: ...


EncodingFactory = Callable[[str], Encoding]


class TokenCounter:
    """
    Counts tokens with the tokenizer of a given model.

    Encoders are built once per model and kept in a cache owned by the
    counter. When no encoder can be built for a model, counts fall back to
    a characters-per-token estimate.

    Example:
        counter = TokenCounter()
        counter.count("Hello, world!")
        counter.count("Hello, world!", model="gpt-3.5-turbo")
    """

    def __init__(
        self,
        default_model: str = DEFAULT_TOKEN_MODEL,
        cache: MemoryCache[str, Encoding] | None = None,
        encoding_factory: EncodingFactory = tiktoken.encoding_for_model,
    ):
        """
        Initialize the token counter.

        Args:
            default_model: Model whose tokenizer is used when none is given
            cache: Cache of encoders by model name
            encoding_factory: Builds an encoder for a model name
        """
        self.default_model = default_model
        self._cache: MemoryCache[str, Encoding] = (
            cache if cache is not None else MemoryCache(max_size=16)
        )
        self._encoding_factory = encoding_factory

    def encoding(self, model: str | None = None) -> Encoding:
        """Get the (cached) encoder for a model."""
        return self._cache.get_or_create(model or self.default_model, self._encoding_factory)

    def count(self, text: str, model: str | None = None) -> int:
        """
        Count the tokens in text.

        Args:
            text: The text to count tokens for
            model: Model whose tokenizer to use (defaults to default_model)

        Returns:
            Number of tokens, or an estimate if the tokenizer is unavailable
        """
        require_str("text", text)
        if not text:
            return 0

        try:
            return len(self.encoding(model).encode(text, disallowed_special=()))
        except Exception as e:
            logger.debug(
                "Tokenizer for %s unavailable (%s), estimating token count",
                model or self.default_model,
                e,
            )
            return estimate_tokens(text)


def estimate_tokens(text: str) -> int:
    """Estimate tokens as one per CHARS_PER_TOKEN_ESTIMATE characters, rounded up."""
    return math.ceil(len(text) / CHARS_PER_TOKEN_ESTIMATE)


def count_tokens(text: str, model: str = DEFAULT_TOKEN_MODEL) -> int:
    """
    Count the tokens in text using the specified model's tokenizer.

    Builds a fresh counter per call; hold a TokenCounter to reuse encoders.
    """
    return TokenCounter(default_model=model).count(text)


def get_smart_preview(content: str, min_lines: int, max_lines: int) -> str:
    """
    Preview content, preferring to cut at a blank line.

    Content with at most max_lines lines is returned in full. Otherwise at
    least min_lines lines are kept; if fewer than two blank lines appear in
    them, the preview extends up to and including the next blank line,
    never past max_lines.

    Args:
        content: The content to preview
        min_lines: Minimum number of lines to show
        max_lines: Maximum number of lines to show

    Returns:
        The preview, followed by a truncation marker when content was cut
    """
    require_str("content", content)
    lines = content.split("\n")

    if len(lines) <= max_lines:
        return content

    end_line = min_lines
    blank_lines = sum(1 for line in lines[:min_lines] if not line.strip())

    if blank_lines < 2 and len(lines) > min_lines:
        for i in range(min_lines, min(len(lines), max_lines)):
            end_line = i + 1
            if not lines[i].strip():
                break

    return "\n".join(lines[:end_line]) + TRUNCATION_MARKER


def extract_random_tags(content: str) -> dict[str, list[str]]:
    """Group the bodies of ``<RANDOM_X>...</RANDOM_X>`` sections by X."""
    groups: dict[str, list[str]] = {}
    for match in RANDOM_TAG_PATTERN.finditer(content):
        groups.setdefault(match.group(1), []).append(match.group(2))
    return groups


def extract_random_variables(
    content: Any,
    max_per_tag: int = DEFAULT_MAX_PER_TAG,
    rng: random.Random | None = None,
) -> dict[str, str]:
    """
    Turn ``<RANDOM_X>`` sections into shuffled few-shot template variables.

    Each tag group is shuffled and flattened to ``random_x_1`` ...
    ``random_x_<max_per_tag>``; missing slots are "".

    Example:
        extract_random_variables(
            "<RANDOM_GREETING>Hello</RANDOM_GREETING>"
            "<RANDOM_GREETING>Hi</RANDOM_GREETING>",
            max_per_tag=3,
        )
        # {"random_greeting_1": "Hi", "random_greeting_2": "Hello",
        #  "random_greeting_3": ""}

    Args:
        content: Text containing RANDOM_ tags; anything else yields {}
        max_per_tag: Number of variables generated per tag
        rng: Random generator to shuffle with (for reproducible output)

    Returns:
        Flattened variables ready to pass to a template renderer
    """
    if not isinstance(content, str):
        return {}

    rng = rng or random.Random()
    flattened: dict[str, str] = {}

    for tag, bodies in extract_random_tags(content).items():
        shuffled = list(bodies)
        rng.shuffle(shuffled)
        for i in range(max_per_tag):
            key = f"random_{tag.lower()}_{i + 1}"
            flattened[key] = shuffled[i] if i < len(shuffled) else ""

    return flattened
