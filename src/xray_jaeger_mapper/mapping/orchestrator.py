"""Central assembly of an X-Ray trace into the Jaeger-UI trace model.

`_map_trace` performs these steps for one document:
    1. Build the process table from the top-level segments
    2. For each top-level segment:
        - Walk its subsegment tree; every subsegment becomes a span parented
          on its immediate parent, with the process resolved by name and
          falling back to the immediate parent's resolved process
        - Find or create the grouping span for its (name, origin) pair
        - Convert the segment itself into a span parented on that grouping span
    3. Return subsegment spans + segment spans + grouping spans

Output span count is always N subsegments + S segments + P distinct
(name, origin) pairs, and every reference points at a span in the output.

Helper Functions:
    _resolve_subsegment_process: Process id lookup with parent-process fallback
    _get_or_create_parent_span: Shared zero-duration grouping span per pair
"""
from __future__ import annotations

import logging

from ..models.jaeger import JaegerSpan, JaegerTrace
from ..models.xray import SegmentDocument, XrayTraceData
from .id_utils import parent_span_id as _parent_span_id
from .mapping_context import MappingContext
from .processes import MergePolicy
from .processes import gather_processes as _gather_processes
from .segment_walker import DEFAULT_MAX_DEPTH
from .segment_walker import walk_subsegments as _walk_subsegments
from .span_builder import segment_to_span as _segment_to_span
from .time_utils import to_micros as _to_micros

logger = logging.getLogger(__name__)


def _resolve_subsegment_process(
    ctx: MappingContext,
    subsegment: SegmentDocument,
    parent: SegmentDocument,
    segment_name: str | None,
) -> str | None:
    """Process id for a subsegment, never one absent from the table when avoidable.

    A name match wins. Otherwise the parent's already resolved process is
    inherited, which for a direct child of the top-level segment is that
    segment's own name. Parents are always visited first (pre-order).
    """
    process = ctx.processes.get(subsegment.name) if subsegment.name is not None else None
    if process is not None and process.serviceName is not None:
        resolved = process.serviceName
    elif parent.id is not None and parent.id in ctx.span_process_ids:
        resolved = ctx.span_process_ids[parent.id]
    else:
        resolved = segment_name
    if subsegment.id is not None:
        ctx.span_process_ids[subsegment.id] = resolved
    return resolved


def _get_or_create_parent_span(ctx: MappingContext, document: SegmentDocument) -> JaegerSpan:
    span_id = _parent_span_id(document.name, document.origin)
    parent_span = ctx.parent_span_index.get(span_id)
    if parent_span is None:
        parent_span = JaegerSpan(
            spanID=span_id,
            traceID=document.trace_id,
            processID=document.name,
            operationName=document.origin if document.origin is not None else document.name,
            startTime=_to_micros(document.start_time),
            duration=0,
            flags=1,
            logs=[],
            tags=[],
            references=[],
        )
        ctx.parent_span_index[span_id] = parent_span
        ctx.parent_spans.append(parent_span)
    return parent_span


def _map_trace(
    trace: XrayTraceData,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
    merge_policy: MergePolicy = "last",
) -> JaegerTrace:
    """Assemble the Jaeger trace for one parsed X-Ray document.

    Raises:
        MalformedTraceError: from the walker, for cyclic or too-deep subsegments
    """
    ctx = MappingContext(
        trace_id=trace.Id,
        processes=_gather_processes(trace.Segments, merge_policy=merge_policy),
        max_depth=max_depth,
    )

    for segment in trace.Segments:
        document = segment.Document
        if document.id is not None:
            ctx.span_process_ids[document.id] = document.name

        def _visit(subsegment: SegmentDocument, parent: SegmentDocument, _name=document.name) -> None:
            process_id = _resolve_subsegment_process(ctx, subsegment, parent, _name)
            ctx.subsegment_spans.append(_segment_to_span(subsegment, process_id, parent.id))

        _walk_subsegments(document, _visit, max_depth=ctx.max_depth)
        parent_span = _get_or_create_parent_span(ctx, document)
        ctx.segment_spans.append(_segment_to_span(document, document.name, parent_span.spanID))

    spans = ctx.all_spans()
    if trace.Segments:
        logger.debug(
            "Trace %s mapped to %d spans (%d subsegment, %d segment, %d grouping)",
            ctx.trace_id,
            len(spans),
            len(ctx.subsegment_spans),
            len(ctx.segment_spans),
            len(ctx.parent_spans),
        )
    else:
        logger.warning("Trace %s has no segments; produced an empty span list", ctx.trace_id)
    return JaegerTrace(
        processes=ctx.processes,
        traceID=ctx.trace_id,
        spans=spans,
        warnings=None,
    )
