"""Conversion of one segment or subsegment document into a Jaeger span.

Tag order on every span is fixed:
    1. AWS allow-list tags (`aws_tags.tags_from_aws`)
    2. `http.*` flattened tags
    3. `annotations.*` flattened tags
    4. `metadata.*` flattened tags
    5. `in progress` boolean (always present)
    6. `origin` string, when the segment has one
    7. `error` = true, when any of error / fault / throttle is set

Icon color: error -> "#FFC46E", throttle -> "mediumpurple". Faults keep the
view's default (red) color so no value is set for them.
"""
from __future__ import annotations

from typing import List, Optional

from ..models.jaeger import JaegerSpan, SpanReference, TraceTag
from ..models.xray import SegmentDocument
from .aws_tags import tags_from_aws
from .flatten import object_to_tags
from .time_utils import duration_micros, to_micros

__all__ = [
    "ERROR_ICON_COLOR",
    "THROTTLE_ICON_COLOR",
    "segment_to_span",
    "get_stack_traces",
    "get_icon_color",
    "get_tags_for_span",
]

ERROR_ICON_COLOR = "#FFC46E"
THROTTLE_ICON_COLOR = "mediumpurple"


def segment_to_span(
    segment: SegmentDocument, process_id: Optional[str], parent_id: Optional[str] = None
) -> JaegerSpan:
    """Build the span for `segment`, parented on `parent_id` when given.

    No validation happens here; missing timestamps surface as NaN.
    """
    references: List[SpanReference] = []
    if parent_id:
        references.append(
            SpanReference(refType="CHILD_OF", spanID=parent_id, traceID=segment.trace_id)
        )
    return JaegerSpan(
        spanID=segment.id,
        traceID=segment.trace_id,
        processID=process_id,
        operationName=segment.name,
        startTime=to_micros(segment.start_time),
        duration=duration_micros(segment.start_time, segment.end_time),
        flags=1,
        logs=[],
        tags=get_tags_for_span(segment),
        references=references,
        stackTraces=get_stack_traces(segment),
        errorIconColor=get_icon_color(segment),
    )


def get_icon_color(segment: SegmentDocument) -> Optional[str]:
    if segment.error:
        return ERROR_ICON_COLOR
    if segment.throttle:
        return THROTTLE_ICON_COLOR
    return None


def get_stack_traces(segment: SegmentDocument) -> Optional[List[str]]:
    """Render one "Type: message" string per exception, frames on following lines.

    Returns None (not an empty list) when the segment has no `cause.exceptions`.
    """
    if segment.cause is None or segment.cause.exceptions is None:
        return None
    stack_traces: List[str] = []
    for exception in segment.cause.exceptions:
        stack_trace = f"{exception.type}: {exception.message}"
        for frame in exception.stack or []:
            stack_trace += f"\nat {frame.label} ({frame.path}:{frame.line})"
        stack_traces.append(stack_trace)
    return stack_traces


def get_tags_for_span(segment: SegmentDocument) -> List[TraceTag]:
    tags: List[TraceTag] = [
        *tags_from_aws(segment.aws),
        *object_to_tags({"http": segment.http}),
        *object_to_tags({"annotations": segment.annotations}),
        *object_to_tags({"metadata": segment.metadata}),
        TraceTag(key="in progress", value=bool(segment.in_progress), type="boolean"),
    ]
    if segment.origin:
        tags.append(TraceTag(key="origin", value=segment.origin, type="string"))
    if segment.error or segment.fault or segment.throttle:
        tags.append(TraceTag(key="error", value=True, type="boolean"))
    return tags
