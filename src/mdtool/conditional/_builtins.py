"""Builtin functions callable from conditional expressions.

Each builtin takes the evaluated argument values plus the active
options and returns a ``bool``.  Names are matched case-insensitively.
"""

from __future__ import annotations

from collections.abc import Callable

from mdtool.model.options import ConditionalOptions
from mdtool.model.values import ArrayValue, BooleanValue, Value

from ._values import ExpressionError, as_text, values_equal


def _fold(text: str, options: ConditionalOptions) -> str:
    return text if options.case_sensitive_strings else text.lower()


def _contains(options: ConditionalOptions, haystack: Value, needle: Value) -> bool:
    return _fold(as_text(needle), options) in _fold(as_text(haystack), options)


def _starts_with(options: ConditionalOptions, text: Value, prefix: Value) -> bool:
    return _fold(as_text(text), options).startswith(_fold(as_text(prefix), options))


def _ends_with(options: ConditionalOptions, text: Value, suffix: Value) -> bool:
    return _fold(as_text(text), options).endswith(_fold(as_text(suffix), options))


def _in(options: ConditionalOptions, value: Value, array: Value) -> bool:
    if not isinstance(array, ArrayValue):
        raise ExpressionError("Second argument to in() must be an array")
    return any(
        values_equal(
            value, item,
            strict=options.strict,
            case_sensitive=options.case_sensitive_strings,
        )
        for item in array.items
    )


def _exists(options: ConditionalOptions, value: Value) -> bool:
    # Unknown variables already arrive as boolean false in non-strict mode,
    # so an explicit false is indistinguishable from a missing one.
    return not (isinstance(value, BooleanValue) and value.value is False)


class Builtin:
    """A named builtin with a fixed arity."""

    def __init__(self, name: str, arity: int, func: Callable[..., bool]) -> None:
        self.name = name
        self.arity = arity
        self.func = func

    def __call__(self, args: list[Value], options: ConditionalOptions) -> bool:
        if len(args) != self.arity:
            plural = "argument" if self.arity == 1 else "arguments"
            raise ExpressionError(
                f"{self.name}() requires {self.arity} {plural}, got {len(args)}"
            )
        return self.func(options, *args)


BUILTIN_FUNCTIONS: dict[str, Builtin] = {
    b.name.lower(): b
    for b in (
        Builtin("contains", 2, _contains),
        Builtin("startsWith", 2, _starts_with),
        Builtin("endsWith", 2, _ends_with),
        Builtin("in", 2, _in),
        Builtin("exists", 1, _exists),
    )
}


def call_builtin(name: str, args: list[Value], options: ConditionalOptions) -> bool:
    """Dispatch *name* (any case) to its builtin."""
    builtin = BUILTIN_FUNCTIONS.get(name.lower())
    if builtin is None:
        raise ExpressionError(f"Unknown function: {name}")
    return builtin(args, options)
