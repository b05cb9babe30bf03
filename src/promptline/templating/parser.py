"""Template lexer and parser.

Turns template source into a flat sequence of nodes:

- ``Literal`` - text copied to the output as-is
- ``Placeholder`` - a ``{{ ... }}`` span, either a bare variable lookup or a
  ternary ``condition ? `yes` : `no` `` with literal branches

Parsing never fails on template shape. An opening ``{{`` without a matching
``}}`` is kept as literal text.
"""

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

OPEN = "{{"
CLOSE = "}}"
BACKTICK = "`"


@dataclass(frozen=True)
class Literal:
    """Literal template text."""

    text: str


@dataclass(frozen=True)
class Placeholder:
    """
    A ``{{ ... }}`` placeholder.

    Attributes:
        expression: The trimmed text between the braces
        condition: Condition of a ternary, None for a bare variable lookup
        true_branch: Branch text used when the condition holds
        false_branch: Branch text used otherwise ("" when one-armed)
        trailing_newline: Whether a newline directly followed the closing
            braces; it is emitted only when the placeholder renders non-empty
    """

    expression: str
    condition: str | None = None
    true_branch: str = ""
    false_branch: str = ""
    trailing_newline: bool = False

    @property
    def is_conditional(self) -> bool:
        return self.condition is not None


Node = Literal | Placeholder


def find_placeholder_close(source: str, start: int) -> int | None:
    """
    Find the ``}}`` that closes the placeholder opened at ``start``.

    Nested ``{{``/``}}`` pairs are counted. Braces inside a backtick span are
    ignored; a backtick preceded by a backslash does not toggle the span.

    Returns:
        Index of the closing ``}}``, or None if the placeholder never closes
    """
    depth = 1
    in_backtick = False
    first = start + len(OPEN)
    i = first

    while i < len(source):
        char = source[i]
        if char == BACKTICK and (i == first or source[i - 1] != "\\"):
            in_backtick = not in_backtick
        elif not in_backtick:
            if source.startswith(OPEN, i):
                depth += 1
                i += 1
            elif source.startswith(CLOSE, i):
                depth -= 1
                if depth == 0:
                    return i
                i += 1
        i += 1

    return None


def find_condition_marker(expression: str) -> int:
    """Index of the first ``?`` outside backtick spans and nested braces, or -1."""
    depth = 0
    in_backtick = False
    i = 0

    while i < len(expression):
        char = expression[i]
        if char == BACKTICK and (i == 0 or expression[i - 1] != "\\"):
            in_backtick = not in_backtick
        elif not in_backtick:
            if expression.startswith(OPEN, i):
                depth += 1
                i += 1
            elif expression.startswith(CLOSE, i):
                depth = max(depth - 1, 0)
                i += 1
            elif char == "?" and depth == 0:
                return i
        i += 1

    return -1


def _closing_backtick(text: str) -> int | None:
    """Index of the backtick closing the span that opens at ``text[0]``."""
    i = 1
    while i < len(text):
        if text[i] == "\\" and text.startswith(BACKTICK, i + 1):
            i += 2
        elif text[i] == BACKTICK:
            return i
        else:
            i += 1
    return None


def _unquote(text: str) -> str:
    for quote in ('"', "'"):
        if text.startswith(quote) and text.endswith(quote):
            return text[1:-1].replace("\\" + quote, quote)
    return text


def _split_quoted_branches(rest: str) -> tuple[str, str]:
    # The separating ':' is the first one outside single or double quotes
    separator = -1
    in_single = False
    in_double = False

    for i, char in enumerate(rest):
        escaped = i > 0 and rest[i - 1] == "\\"
        if char == "'" and not escaped:
            if not in_double:
                in_single = not in_single
        elif char == '"' and not escaped:
            if not in_single:
                in_double = not in_double
        elif char == ":" and not in_single and not in_double:
            separator = i
            break

    if separator == -1:
        return _unquote(rest), ""
    return _unquote(rest[:separator].strip()), _unquote(rest[separator + 1 :].strip())


def split_branches(rest: str) -> tuple[str, str]:
    """
    Split the text after ``?`` into true and false branch text.

    Backtick-delimited branches are preferred and may span lines or contain
    further placeholders. Single or double quoted branches are accepted as
    well. Escaped delimiters inside a branch are unescaped.

    Args:
        rest: Everything after the condition marker

    Returns:
        ``(true_branch, false_branch)``; the false branch is "" when absent
    """
    rest = rest.strip()
    if not rest.startswith(BACKTICK):
        return _split_quoted_branches(rest)

    close = _closing_backtick(rest)
    if close is None:
        # No matching backtick: the whole remainder is the true branch
        return rest, ""

    true_text = rest[1:close]
    false_text = ""

    after_true = rest[close + 1 :].strip()
    if after_true.startswith(":"):
        false_part = after_true[1:].strip()
        if false_part.startswith(BACKTICK):
            false_close = _closing_backtick(false_part)
            if false_close is not None:
                false_text = false_part[1:false_close]

    escaped = "\\" + BACKTICK
    return true_text.replace(escaped, BACKTICK), false_text.replace(escaped, BACKTICK)


def parse_placeholder(raw: str, trailing_newline: bool = False) -> Placeholder:
    """Classify the raw text between ``{{`` and ``}}``."""
    expression = raw.strip()
    marker = find_condition_marker(expression)
    if marker == -1:
        return Placeholder(expression=expression, trailing_newline=trailing_newline)

    true_branch, false_branch = split_branches(expression[marker + 1 :])
    return Placeholder(
        expression=expression,
        condition=expression[:marker].strip(),
        true_branch=true_branch,
        false_branch=false_branch,
        trailing_newline=trailing_newline,
    )


def parse_template(source: str) -> tuple[Node, ...]:
    """
    Parse template source into literal and placeholder nodes.

    Adjacent literal text is merged into a single node.

    Args:
        source: The template source

    Returns:
        Tuple of nodes in source order
    """
    nodes: list[Node] = []
    pending: list[str] = []
    position = 0

    def flush() -> None:
        text = "".join(pending)
        pending.clear()
        if text:
            nodes.append(Literal(text))

    while position < len(source):
        start = source.find(OPEN, position)
        if start == -1:
            pending.append(source[position:])
            break

        pending.append(source[position:start])
        close = find_placeholder_close(source, start)

        if close is None:
            logger.debug("Unmatched '{{' at offset %d, keeping it as literal text", start)
            pending.append(OPEN)
            position = start + len(OPEN)
            continue

        flush()
        end = close + len(CLOSE)
        trailing_newline = source.startswith("\n", end)
        nodes.append(parse_placeholder(source[start + len(OPEN) : close], trailing_newline))
        position = end + 1 if trailing_newline else end

    flush()
    return tuple(nodes)
