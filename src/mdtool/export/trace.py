"""Trace rendering for diagnostic sinks (trace files, stderr)."""

from __future__ import annotations

from mdtool.model.trace import ConditionalTrace


def trace_to_json(trace: ConditionalTrace, indent: int | None = 2) -> str:
    """Serialize *trace* with camelCase field names.

    Shape::

        {"blocks": [{"startLine": 1, "endLine": 5,
                     "branches": [{"kind": "if", "expr": "A", "taken": true}]}]}
    """
    return trace.model_dump_json(by_alias=True, indent=indent)


def trace_to_text(trace: ConditionalTrace) -> str:
    """Human-readable summary, one line per block and per branch."""
    if not trace.blocks:
        return "no conditional blocks"

    lines: list[str] = []
    for block in trace.blocks:
        lines.append(f"lines {block.start_line}-{block.end_line}")
        for branch in block.branches:
            mark = "x" if branch.taken else " "
            label = branch.kind.value
            if branch.expr is not None:
                label = f"{label} {branch.expr}"
            lines.append(f"  [{mark}] {label}")
    return "\n".join(lines)
