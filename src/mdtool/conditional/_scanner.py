"""Directive scanner: locates ``{{#if}}`` blocks line by line.

Open blocks live on an explicit stack of builder records; a block is
emitted when its ``{{/if}}`` is reached, so inner blocks come out
before the blocks that enclose them.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from mdtool.model.blocks import BranchKind, ConditionalBlock, ConditionalBranch
from mdtool.model.options import ConditionalOptions

from ._values import DirectiveError, ExpressionError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Directive patterns
# ---------------------------------------------------------------------------

# An expression may be anything except the closing braces.
_EXPR = r"((?:(?!\}\}).)+?)"

_IF_RE = re.compile(r"\s*\{\{\s*#if\s+" + _EXPR + r"\s*\}\}\s*", re.IGNORECASE)
_ELSE_IF_RE = re.compile(r"\s*\{\{\s*else\s+if\s+" + _EXPR + r"\s*\}\}\s*", re.IGNORECASE)
_ELSE_RE = re.compile(r"\s*\{\{\s*else\s*\}\}\s*", re.IGNORECASE)
_END_IF_RE = re.compile(r"\s*\{\{\s*/if\s*\}\}\s*", re.IGNORECASE)

_FENCE_MARKERS = ("```", "~~~")


def is_fence_toggle(line: str) -> bool:
    return line.lstrip().startswith(_FENCE_MARKERS)


def _expression(m: re.Match[str], line_no: int) -> str:
    expression = m.group(1).strip()
    if not expression:
        raise ExpressionError("Empty expression", line=line_no, expression="")
    return expression


# ---------------------------------------------------------------------------
# Builder records
# ---------------------------------------------------------------------------

@dataclass
class _OpenBranch:
    kind: BranchKind
    expression: str | None
    start_line: int
    end_line: int | None = None


@dataclass
class _OpenBlock:
    start_line: int
    branches: list[_OpenBranch] = field(default_factory=list)

    def close_last_branch(self, end_line: int) -> None:
        self.branches[-1].end_line = end_line

    def add_branch(self, kind: BranchKind, expression: str | None, line: int) -> None:
        if self.branches[-1].kind == BranchKind.ELSE:
            tag = "{{else}}" if kind == BranchKind.ELSE else "{{else if}}"
            raise DirectiveError(
                f"{tag} after {{{{else}}}} in block starting at line {self.start_line}",
                line=line,
            )
        self.close_last_branch(line - 1)
        self.branches.append(_OpenBranch(kind, expression, line))

    def build(self, end_line: int) -> ConditionalBlock:
        self.close_last_branch(end_line - 1)
        return ConditionalBlock(
            start_line=self.start_line,
            end_line=end_line,
            branches=[
                ConditionalBranch(
                    kind=b.kind,
                    expression=b.expression,
                    start_line=b.start_line,
                    end_line=b.end_line,
                )
                for b in self.branches
            ],
        )


# ---------------------------------------------------------------------------
# scan()
# ---------------------------------------------------------------------------

def scan(text: str, options: ConditionalOptions | None = None) -> list[ConditionalBlock]:
    """Find every conditional block in *text*.

    Raises ``DirectiveError`` for dangling ``{{else}}`` / ``{{else if}}`` /
    ``{{/if}}`` tags, a branch after ``{{else}}``, nesting deeper than
    ``options.max_nesting``, or a block left open at end of input, and
    ``ExpressionError`` for a directive whose expression is blank.
    """
    options = options or ConditionalOptions()
    blocks: list[ConditionalBlock] = []
    stack: list[_OpenBlock] = []
    in_fence = False

    for index, line in enumerate(text.split("\n")):
        line_no = index + 1

        if not options.parse_fences:
            if is_fence_toggle(line):
                in_fence = not in_fence
                continue
            if in_fence:
                continue

        m = _IF_RE.fullmatch(line)
        if m:
            if len(stack) >= options.max_nesting:
                raise DirectiveError(
                    f"Maximum nesting depth exceeded ({options.max_nesting})",
                    line=line_no,
                )
            block = _OpenBlock(start_line=line_no)
            block.branches.append(_OpenBranch(BranchKind.IF, _expression(m, line_no), line_no))
            stack.append(block)
            continue

        m = _ELSE_IF_RE.fullmatch(line)
        if m:
            if not stack:
                raise DirectiveError("{{else if}} without matching {{#if}}", line=line_no)
            stack[-1].add_branch(BranchKind.ELSE_IF, _expression(m, line_no), line_no)
            continue

        if _ELSE_RE.fullmatch(line):
            if not stack:
                raise DirectiveError("{{else}} without matching {{#if}}", line=line_no)
            stack[-1].add_branch(BranchKind.ELSE, None, line_no)
            continue

        if _END_IF_RE.fullmatch(line):
            if not stack:
                raise DirectiveError("{{/if}} without matching {{#if}}", line=line_no)
            blocks.append(stack.pop().build(line_no))
            continue

    if stack:
        unclosed = stack[-1]
        raise DirectiveError(
            "Unclosed {{#if}} block",
            line=unclosed.start_line,
        )

    logger.debug("Found %d conditional block(s)", len(blocks))
    return blocks
