"""Per-call state container for the trace assembly loop.

State Fields:
    trace_id: Trace identifier copied from the document `Id`
    processes: Service name -> process table built before span assembly
    max_depth: Subsegment nesting limit passed to the walker
    subsegment_spans: Spans for every nested subsegment, walk order
    segment_spans: One span per top-level segment, document order
    parent_spans: Synthesized grouping spans, creation order
    parent_span_index: Grouping span id -> span, for O(1) reuse
    span_process_ids: Segment or subsegment id -> resolved process id

Usage Pattern:
    1. Orchestrator creates the context once per document
    2. Each top-level segment appends to the three span lists
    3. `all_spans` concatenates them in output order

Design Note:
    Context mutability stays inside one orchestrator call; helpers receive
    what they need as explicit parameters.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..models.jaeger import JaegerProcess, JaegerSpan

__all__ = ["MappingContext"]


@dataclass
class MappingContext:
    trace_id: Optional[str]
    processes: Dict[str, JaegerProcess]
    max_depth: int
    subsegment_spans: List[JaegerSpan] = field(default_factory=list)
    segment_spans: List[JaegerSpan] = field(default_factory=list)
    parent_spans: List[JaegerSpan] = field(default_factory=list)
    parent_span_index: Dict[str, JaegerSpan] = field(default_factory=dict)
    span_process_ids: Dict[str, Optional[str]] = field(default_factory=dict)

    def all_spans(self) -> List[JaegerSpan]:
        return [*self.subsegment_spans, *self.segment_spans, *self.parent_spans]
