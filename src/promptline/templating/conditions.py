"""Condition evaluation for ternary placeholders.

Supported condition shapes:

- ``name`` - truthiness of a variable
- ``!name`` - negated truthiness
- ``a && b`` / ``!a && b`` - both operands truthy
- ``a || b`` / ``a || !b`` - either operand truthy

Parentheses, mixing ``&&`` with ``||`` and three or more operands are not
supported. A condition with the wrong operand count is looked up whole as a
variable name, so ``a && b && c`` is truthy only if a variable literally
named ``"a && b && c"`` is.
"""

import math
from typing import Any

from ..types import Variables

_OPERATORS = (
    ("&&", all),
    ("||", any),
)


def is_truthy(value: Any) -> bool:
    """
    Truthiness used by template conditions.

    ``None``, ``False``, ``""``, zero and NaN are falsy. Everything else is
    truthy, including empty containers.
    """
    if value is None or value is False:
        return False
    if isinstance(value, str):
        return value != ""
    if isinstance(value, (int, float)):
        return value != 0 and not (isinstance(value, float) and math.isnan(value))
    return True


def evaluate_operand(operand: str, variables: Variables) -> bool:
    """Evaluate a single variable reference with an optional leading ``!``."""
    operand = operand.strip()
    if operand.startswith("!"):
        return not is_truthy(variables.get(operand[1:].strip()))
    return is_truthy(variables.get(operand))


def evaluate_condition(condition: str, variables: Variables) -> bool:
    """
    Evaluate a condition string against template variables.

    Args:
        condition: The condition text to the left of ``?``
        variables: Variable mapping used for lookups

    Returns:
        The boolean result
    """
    condition = condition.strip()

    for operator, combine in _OPERATORS:
        if operator in condition:
            parts = [part.strip() for part in condition.split(operator)]
            if len(parts) != 2:
                return is_truthy(variables.get(condition))
            return combine(evaluate_operand(part, variables) for part in parts)

    return evaluate_operand(condition, variables)
