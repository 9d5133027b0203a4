"""Options controlling conditional evaluation."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ConditionalOptions(BaseModel):
    """Per-call evaluation options.  Immutable once built.

    strict
        Unknown variables and cross-kind comparisons raise instead of
        evaluating to ``false``.
    case_sensitive_strings
        String equality and the substring builtins compare exactly.
    max_nesting
        Deepest allowed stack of open ``{{#if}}`` blocks.
    parse_fences
        Recognize directives inside ```` ``` ```` / ``~~~`` fences too.
    """

    model_config = ConfigDict(frozen=True)

    strict: bool = False
    case_sensitive_strings: bool = False
    max_nesting: int = Field(default=10, ge=1)
    parse_fences: bool = False
