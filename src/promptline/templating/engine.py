"""Template renderer for prompt templates."""

import math
import re
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from ..cache import MemoryCache
from ..text import is_blank
from ..types import InputTypeError, RenderLimitError, Variables, require_str
from .conditions import evaluate_condition, is_truthy
from .parser import Node, Placeholder, parse_template

# Rendered as "" when empty or whitespace-only
TASK_CONTEXT = "task_context"

DEFAULT_MAX_DEPTH = 32


_EXPONENT_PADDING = re.compile(r"e([+-])0+(?=\d)")


def _format_float(value: float) -> str:
    # Positional between 1e-6 and 1e21, exponent notation outside
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"

    magnitude = abs(value)
    if magnitude >= 1e21 or (magnitude and magnitude < 1e-6):
        return _EXPONENT_PADDING.sub(r"e\1", repr(value))
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), "f")


def format_value(value: Any) -> str:
    """
    Convert a variable value to template output text.

    None renders as "" and booleans as "true"/"false". Floats use the
    shortest round-tripping digits: integral floats drop the fractional
    part, very large or small ones use exponent notation (``1e+21``) and
    non-finite ones render as ``NaN``/``Infinity``.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _format_float(value)
    return str(value)


class TemplateRenderer:
    """
    Renders templates with ``{{ }}`` placeholders.

    Features:
    - Variable substitution: ``{{ name }}``
    - Ternaries: ``{{ cond ? `yes` : `no` }}`` and ``{{ cond ? `yes` }}``
    - Conditions with ``!``, ``&&`` and ``||`` (two operands at most)
    - Nested placeholders inside the selected branch
    - A placeholder that renders empty swallows the newline after it

    Rendering is stateless apart from the optional parse cache, which the
    renderer owns. A renderer is safe to share between threads.

    Example:
        renderer = TemplateRenderer(cache=MemoryCache(max_size=64))
        renderer.render("Hello {{ name }}!", {"name": "World"})
    """

    def __init__(
        self,
        max_depth: int = DEFAULT_MAX_DEPTH,
        max_length: int | None = None,
        cache: MemoryCache[str, tuple[Node, ...]] | None = None,
    ):
        """
        Initialize the renderer.

        Args:
            max_depth: Maximum number of nested branch re-renders
            max_length: Maximum template length in characters (None = unlimited)
            cache: Optional cache of parsed templates keyed by source
        """
        self.max_depth = max_depth
        self.max_length = max_length
        self._cache = cache

    @property
    def cache(self) -> MemoryCache[str, tuple[Node, ...]] | None:
        return self._cache

    def parse(self, template: str) -> tuple[Node, ...]:
        """Parse a template, using the cache when one is configured."""
        if self._cache is None:
            return parse_template(template)
        return self._cache.get_or_create(template, parse_template)

    def render(self, template: str, variables: Variables | None = None) -> str:
        """
        Render a template with variables.

        Args:
            template: Template source string
            variables: Variables available to placeholders and conditions

        Returns:
            Rendered text

        Raises:
            InputTypeError: If template is not a string or variables is not a mapping
            RenderLimitError: If a configured depth or length limit is exceeded
        """
        require_str("template", template)
        if variables is not None and not isinstance(variables, Mapping):
            raise InputTypeError("variables", "a mapping", variables)
        if self.max_length is not None and len(template) > self.max_length:
            raise RenderLimitError(
                f"Template length {len(template)} exceeds limit of {self.max_length}",
                limit=self.max_length,
            )
        return self._render(template, variables or {}, depth=0)

    def _render(self, template: str, variables: Variables, depth: int) -> str:
        if depth > self.max_depth:
            raise RenderLimitError(
                f"Template nesting exceeds maximum depth of {self.max_depth}",
                limit=self.max_depth,
            )

        parts: list[str] = []
        for node in self.parse(template):
            if isinstance(node, Placeholder):
                value = self._evaluate(node, variables, depth)
                parts.append(value)
                if value and node.trailing_newline:
                    parts.append("\n")
            else:
                parts.append(node.text)
        return "".join(parts)

    def _evaluate(self, node: Placeholder, variables: Variables, depth: int) -> str:
        if node.condition is None:
            value = variables.get(node.expression)
            if node.expression == TASK_CONTEXT and (
                not is_truthy(value) or (isinstance(value, str) and is_blank(value))
            ):
                return ""
            return format_value(value)

        selected = (
            node.true_branch
            if evaluate_condition(node.condition, variables)
            else node.false_branch
        )
        if "{{" in selected:
            selected = self._render(selected, variables, depth + 1)
        return selected


def render_template(template: str, variables: Variables | None = None) -> str:
    """
    Render a template string with a default, uncached renderer.

    Args:
        template: Template source string
        variables: Variables available to the template

    Returns:
        Rendered text
    """
    return TemplateRenderer().render(template, variables)
