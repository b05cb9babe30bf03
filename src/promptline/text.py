"""Whitespace trimming shared by the parsers and the renderer."""

# str.strip() keeps the byte order mark; template files and responses often start with one
BOM = "\ufeff"


def trim_start(text: str) -> str:
    """Strip leading whitespace, including a byte order mark."""
    while True:
        stripped = text.lstrip().lstrip(BOM)
        if stripped == text:
            return text
        text = stripped


def trim(text: str) -> str:
    """Strip whitespace, including a byte order mark, from both ends."""
    while True:
        stripped = text.strip().strip(BOM)
        if stripped == text:
            return text
        text = stripped


def is_blank(text: str) -> bool:
    return not trim(text)
