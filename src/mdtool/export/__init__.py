"""mdtool export: trace presentation.

Public API::

    from mdtool.export import trace_to_json, trace_to_text
    sys.stderr.write(trace_to_json(trace))
"""

from .trace import trace_to_json, trace_to_text

__all__ = ["trace_to_json", "trace_to_text"]
