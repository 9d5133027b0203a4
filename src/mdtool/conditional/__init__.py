"""mdtool conditionals: ``{{#if}}`` evaluation and pruning.

Entry point::

    from mdtool.conditional import evaluate, evaluate_detailed

    text = evaluate(content, {"ROLE": "TEST"})
    text, trace = evaluate_detailed(content, args, ConditionalOptions(strict=True))
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from mdtool.model.options import ConditionalOptions
from mdtool.model.trace import ConditionalTrace
from mdtool.model.values import ObjectValue

from ._evaluator import ExpressionEvaluator
from ._pruner import prune, select_branch
from ._resolver import ValueResolver, merge_defaults
from ._scanner import scan
from ._tokenizer import Token, TokenKind, tokenize
from ._values import (
    ConditionalError,
    DirectiveError,
    ExpressionError,
    StrictModeError,
)


def evaluate_detailed(
    content: str,
    args: Mapping[str, Any] | ObjectValue | ValueResolver | None,
    options: ConditionalOptions | None = None,
) -> tuple[str, ConditionalTrace]:
    """Prune *content* against *args* and return the text with its trace.

    Parameters
    ----------
    content
        Template text; lines are separated by ``\\n``.
    args
        Argument values: a plain mapping, an ``ObjectValue``, or a
        ``ValueResolver``.
    options
        Evaluation options (defaults when omitted).

    Raises
    ------
    ConditionalError
        ``DirectiveError`` for structural problems, ``ExpressionError``
        (or ``StrictModeError``) for expression problems.
    """
    options = options or ConditionalOptions()
    if not content:
        return "", ConditionalTrace()

    evaluator = ExpressionEvaluator(ValueResolver(args), options)
    blocks = scan(content, options)
    return prune(content, blocks, evaluator)


def evaluate(
    content: str,
    args: Mapping[str, Any] | ObjectValue | ValueResolver | None,
    options: ConditionalOptions | None = None,
) -> str:
    """Like :func:`evaluate_detailed` but returns only the pruned text."""
    text, _ = evaluate_detailed(content, args, options)
    return text


__all__ = [
    "ConditionalError",
    "ConditionalOptions",
    "DirectiveError",
    "ExpressionError",
    "ExpressionEvaluator",
    "StrictModeError",
    "Token",
    "TokenKind",
    "ValueResolver",
    "evaluate",
    "evaluate_detailed",
    "merge_defaults",
    "prune",
    "scan",
    "select_branch",
    "tokenize",
]
