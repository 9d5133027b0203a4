"""Shared test helpers for the mdtool test suite."""

import textwrap

from mdtool.conditional import ExpressionEvaluator, ValueResolver, evaluate_detailed
from mdtool.model.options import ConditionalOptions


def doc(source: str) -> str:
    """Dedent a template and drop the leading newline of a triple-quoted block."""
    return textwrap.dedent(source).lstrip("\n")


def run(content: str, args=None, **opts):
    """Evaluate *content* and return ``(text, trace)``."""
    return evaluate_detailed(content, args or {}, ConditionalOptions(**opts))


def check(expression: str, args=None, **opts) -> bool:
    """Evaluate a single expression string."""
    evaluator = ExpressionEvaluator(ValueResolver(args or {}), ConditionalOptions(**opts))
    return evaluator.evaluate_text(expression)


def nested(depth: int) -> str:
    """A template with *depth* nested always-true blocks around one line."""
    opening = [f"{{{{#if LEVEL{i}}}}}" for i in range(depth)]
    closing = ["{{/if}}"] * depth
    return "\n".join(opening + ["Content"] + closing)
