"""Public facade for AWS X-Ray trace to Jaeger-UI trace mapping.

This module provides the stable public API for converting X-Ray trace
documents into the flattened process/span model rendered by Jaeger-style trace
views. All assembly logic is delegated to `xray_jaeger_mapper.mapping`.

Public Functions:
    transform_trace_response: Convert a parsed XrayTraceData to JaegerTrace
    map_trace_document: Parse raw payload(s) and convert every trace

Internal Re-exports:
    _map_trace: Orchestrator entry point (test usage)
    flatten: Tag flattener (test usage)
    PARENT_SPAN_NAMESPACE: Deterministic UUID namespace (test usage)
"""
from __future__ import annotations

from typing import Any, List, Optional

from .config import get_settings
from .document import load_traces, parse_trace_document
from .mapping.flatten import flatten
from .mapping.id_utils import PARENT_SPAN_NAMESPACE
from .mapping.orchestrator import _map_trace
from .mapping.processes import MergePolicy
from .models.jaeger import JaegerTrace
from .models.xray import XrayTraceData

__all__ = [
    "transform_trace_response",
    "map_trace_document",
    "_map_trace",
    "flatten",
    "PARENT_SPAN_NAMESPACE",
]


def transform_trace_response(
    trace: XrayTraceData | dict,
    *,
    max_depth: Optional[int] = None,
    merge_policy: Optional[MergePolicy] = None,
) -> JaegerTrace:
    """Convert one X-Ray trace into the Jaeger-UI trace model.

    Args:
        trace: Parsed `XrayTraceData`, or a decoded dict which is validated first
        max_depth: Subsegment nesting limit; defaults to MAX_SUBSEGMENT_DEPTH
        merge_policy: Duplicate process policy; defaults to PROCESS_MERGE_POLICY

    Returns:
        JaegerTrace with processes, spans (subsegment, segment, grouping) and
        `warnings=None`

    Raises:
        TraceDocumentError: if a dict input is not trace-shaped
        MalformedTraceError: if a subsegment tree is cyclic or too deep
    """
    if max_depth is None or merge_policy is None:
        settings = get_settings()
        if max_depth is None:
            max_depth = settings.MAX_SUBSEGMENT_DEPTH
        if merge_policy is None:
            merge_policy = settings.PROCESS_MERGE_POLICY  # type: ignore[assignment]
    return _map_trace(
        parse_trace_document(trace),
        max_depth=max_depth,
        merge_policy=merge_policy,  # type: ignore[arg-type]
    )


def map_trace_document(
    raw: Any,
    *,
    max_depth: Optional[int] = None,
    merge_policy: Optional[MergePolicy] = None,
) -> List[JaegerTrace]:
    """Parse a raw payload (single trace, list, or BatchGetTraces) and map it.

    Returns:
        One JaegerTrace per trace in the payload, in payload order
    """
    return [
        transform_trace_response(trace, max_depth=max_depth, merge_policy=merge_policy)
        for trace in load_traces(raw)
    ]
