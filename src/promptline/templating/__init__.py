"""Prompt templating with placeholders, ternaries and simple conditions."""

from .conditions import evaluate_condition, is_truthy
from .engine import TemplateRenderer, format_value, render_template
from .parser import Literal, Node, Placeholder, parse_template
from .registry import TemplateRegistry

__all__ = [
    "TemplateRenderer",
    "TemplateRegistry",
    "render_template",
    "format_value",
    "evaluate_condition",
    "is_truthy",
    "parse_template",
    "Literal",
    "Placeholder",
    "Node",
]
