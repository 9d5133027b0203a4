"""Conditional block structure produced by the directive scanner."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, model_validator


class BranchKind(str, Enum):
    IF = "if"
    ELSE_IF = "else-if"
    ELSE = "else"


class ConditionalBranch(BaseModel):
    """One arm of a block.

    *start_line* is the directive line; the body runs from the line after
    it through *end_line* (both 1-indexed, inclusive).  An empty body has
    ``end_line == start_line``.
    """

    kind: BranchKind
    expression: str | None = None
    start_line: int
    end_line: int

    @model_validator(mode="after")
    def _expression_matches_kind(self):
        if self.kind == BranchKind.ELSE and self.expression is not None:
            raise ValueError("else branches carry no expression")
        if self.kind != BranchKind.ELSE and not self.expression:
            raise ValueError(f"{self.kind.value} branch requires an expression")
        return self


class ConditionalBlock(BaseModel):
    """A ``{{#if}}`` ... ``{{/if}}`` unit spanning *start_line*..*end_line*."""

    start_line: int
    end_line: int
    branches: list[ConditionalBranch]

    @model_validator(mode="after")
    def _branch_layout(self):
        if not self.branches or self.branches[0].kind != BranchKind.IF:
            raise ValueError("a block must open with an if branch")
        for branch in self.branches[:-1]:
            if branch.kind == BranchKind.ELSE:
                raise ValueError("else must be the last branch of a block")
        return self
