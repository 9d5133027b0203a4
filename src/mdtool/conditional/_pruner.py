"""Branch selection and pruning.

For each block the first ``else`` or true branch is taken.  Every line
of the block is then dropped except the body of the taken branch.
Inner blocks lie wholly inside one branch body of their enclosing block,
so marking lines per block needs no special nesting handling.
"""

from __future__ import annotations

import logging

from mdtool.model.blocks import BranchKind, ConditionalBlock, ConditionalBranch
from mdtool.model.trace import BlockTrace, BranchTrace, ConditionalTrace

from ._evaluator import ExpressionEvaluator
from ._values import ExpressionError

logger = logging.getLogger(__name__)


def select_branch(block: ConditionalBlock, evaluator: ExpressionEvaluator) -> tuple[ConditionalBranch | None, BlockTrace]:
    """Pick the taken branch of *block* and record the decision.

    Branches after the taken one are not evaluated; they are still traced
    with ``taken=False``.
    """
    block_trace = BlockTrace(start_line=block.start_line, end_line=block.end_line)
    chosen: ConditionalBranch | None = None

    for branch in block.branches:
        taken = False
        if chosen is None:
            if branch.kind == BranchKind.ELSE:
                taken = True
            else:
                try:
                    taken = evaluator.evaluate_text(branch.expression)
                except ExpressionError as exc:
                    raise exc.at(branch.start_line, branch.expression) from exc
            if taken:
                chosen = branch

        logger.debug(
            "Line %d: %s %s -> %s",
            branch.start_line, branch.kind.value, branch.expression or "", taken,
        )
        block_trace.branches.append(
            BranchTrace(kind=branch.kind, expr=branch.expression, taken=taken)
        )

    return chosen, block_trace


def prune(
    text: str,
    blocks: list[ConditionalBlock],
    evaluator: ExpressionEvaluator,
) -> tuple[str, ConditionalTrace]:
    """Rewrite *text* keeping only each block's taken branch body.

    Any expression error aborts the whole call; nothing partial is
    returned.
    """
    trace = ConditionalTrace()
    if not blocks:
        return text, trace

    removed: set[int] = set()
    for block in blocks:
        chosen, block_trace = select_branch(block, evaluator)
        trace.blocks.append(block_trace)

        for line_no in range(block.start_line, block.end_line + 1):
            if chosen is not None and chosen.start_line < line_no <= chosen.end_line:
                continue
            removed.add(line_no)

    lines = text.split("\n")
    kept = [line for i, line in enumerate(lines, start=1) if i not in removed]
    return "\n".join(kept), trace
