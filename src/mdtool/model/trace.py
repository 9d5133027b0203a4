"""Diagnostic trace of which branch each block took."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .blocks import BranchKind


class _TraceModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BranchTrace(_TraceModel):
    kind: BranchKind
    expr: str | None = None
    taken: bool = False


class BlockTrace(_TraceModel):
    start_line: int
    end_line: int
    branches: list[BranchTrace] = []

    @property
    def taken_branch(self) -> BranchTrace | None:
        for branch in self.branches:
            if branch.taken:
                return branch
        return None


class ConditionalTrace(_TraceModel):
    """Blocks in evaluation order (inner blocks before their enclosing block)."""

    blocks: list[BlockTrace] = []
