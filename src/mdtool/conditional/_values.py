"""Error types and value conversion helpers.

Truthiness, text rendering and equality over the ``Value`` union.
"""

from __future__ import annotations

import json

from mdtool.model.values import (
    BooleanValue,
    NumberValue,
    StringValue,
    Value,
    to_python,
)


EPSILON = 1e-7


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class ConditionalError(Exception):
    """Error during conditional evaluation, with optional source location."""

    def __init__(self, message: str, line: int | None = None, expression: str | None = None):
        self.message = message
        self.line = line
        self.expression = expression
        loc = ""
        if line is not None and expression is not None:
            loc = f" (line {line}: {expression})"
        elif line is not None:
            loc = f" (line {line})"
        elif expression is not None:
            loc = f" (in {expression!r})"
        super().__init__(f"{message}{loc}")

    def at(self, line: int, expression: str | None = None) -> ConditionalError:
        """Return a copy of this error located at *line* / *expression*."""
        return type(self)(self.message, line=line, expression=expression)


class DirectiveError(ConditionalError):
    """Structural problem with ``{{#if}}`` / ``{{else}}`` / ``{{/if}}`` tags."""


class ExpressionError(ConditionalError):
    """Malformed expression: bad token, unbalanced grouping, bad call."""


class StrictModeError(ExpressionError):
    """Unknown variable or cross-kind comparison under strict options."""


# ---------------------------------------------------------------------------
# Conversions
# ---------------------------------------------------------------------------

def truthy(value: Value) -> bool:
    """Coerce a bare primary to a boolean.

    - booleans are themselves
    - strings are false when empty or ``"false"`` (any case)
    - numbers are false within EPSILON of zero
    - objects and arrays are true
    """
    if isinstance(value, BooleanValue):
        return value.value
    if isinstance(value, StringValue):
        return value.value != "" and value.value.lower() != "false"
    if isinstance(value, NumberValue):
        return abs(value.value) > EPSILON
    return True


def format_number(number: float) -> str:
    """Render integral floats without a fractional part (``5`` not ``5.0``)."""
    if number.is_integer():
        return str(int(number))
    return repr(number)


def _jsonable(data: object) -> object:
    if isinstance(data, float) and data.is_integer():
        return int(data)
    if isinstance(data, dict):
        return {k: _jsonable(v) for k, v in data.items()}
    if isinstance(data, list):
        return [_jsonable(v) for v in data]
    return data


def as_text(value: Value) -> str:
    """Text rendering used by the substring builtins."""
    if isinstance(value, StringValue):
        return value.value
    if isinstance(value, NumberValue):
        return format_number(value.value)
    if isinstance(value, BooleanValue):
        return "true" if value.value else "false"
    return json.dumps(_jsonable(to_python(value)), separators=(",", ":"))


def values_equal(left: Value, right: Value, *, strict: bool, case_sensitive: bool) -> bool:
    """Same-kind equality.

    A kind mismatch is simply unequal, or a ``StrictModeError`` under
    *strict*.  Objects and arrays never compare equal.
    """
    if left.kind != right.kind:
        if strict:
            raise StrictModeError(
                f"Type mismatch in comparison: {left.kind} vs {right.kind}"
            )
        return False

    if isinstance(left, StringValue):
        if case_sensitive:
            return left.value == right.value
        return left.value.lower() == right.value.lower()
    if isinstance(left, NumberValue):
        return abs(left.value - right.value) < EPSILON
    if isinstance(left, BooleanValue):
        return truthy(left) == truthy(right)
    # ObjectValue / ArrayValue
    return False
