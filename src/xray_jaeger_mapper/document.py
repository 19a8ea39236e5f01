"""Parsing and validation of raw X-Ray trace payloads.

The X-Ray API returns traces as JSON in which every segment `Document` is
itself a JSON-encoded string, so payloads are decoded twice. This module
accepts every shape callers hand over and produces validated
`XrayTraceData` models for the mapper:

    1. A JSON string or bytes is decoded first.
    2. A dict with a `Traces` list (BatchGetTraces output) yields one trace
       per entry.
    3. A dict with `Segments` is a single trace.
    4. A list is treated as a list of traces.

Segment `Document` strings are decoded by the model itself. Structural
problems (wrong container types, undecodable documents, non-numeric
timestamps) raise `TraceDocumentError`; missing optional fields do not.
"""
from __future__ import annotations

import json
import logging
from typing import Any, List

from pydantic import ValidationError

from .models.xray import XrayTraceData

logger = logging.getLogger(__name__)

__all__ = ["TraceDocumentError", "parse_trace_document", "load_traces"]


class TraceDocumentError(ValueError):
    """Raised when a payload cannot be parsed into an X-Ray trace."""


def _decode(raw: Any) -> Any:
    if isinstance(raw, (str, bytes, bytearray)):
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise TraceDocumentError(f"trace payload is not valid JSON: {e}") from e
    return raw


def parse_trace_document(raw: Any) -> XrayTraceData:
    """Validate one trace object (or its JSON text) into `XrayTraceData`.

    Args:
        raw: Decoded dict, JSON string, or an existing `XrayTraceData`

    Returns:
        Validated trace model with every segment `Document` decoded

    Raises:
        TraceDocumentError: if the payload is not a trace-shaped object
    """
    if isinstance(raw, XrayTraceData):
        return raw
    data = _decode(raw)
    if not isinstance(data, dict):
        raise TraceDocumentError(
            f"trace payload must be a JSON object, got {type(data).__name__}"
        )
    try:
        return XrayTraceData.model_validate(data)
    except ValidationError as e:
        raise TraceDocumentError(
            f"invalid X-Ray trace {data.get('Id')!r}: {e.error_count()} error(s)\n{e}"
        ) from e


def load_traces(raw: Any) -> List[XrayTraceData]:
    """Parse a single trace, a list of traces, or a BatchGetTraces response.

    Returns:
        Parsed traces in payload order (empty for an empty `Traces` list)

    Raises:
        TraceDocumentError: if the payload matches none of the accepted shapes
    """
    data = _decode(raw)
    if isinstance(data, dict) and "Traces" in data:
        entries = data["Traces"]
        if not isinstance(entries, list):
            raise TraceDocumentError("'Traces' must be a list of trace objects")
        unprocessed = data.get("UnprocessedTraceIds") or []
        if unprocessed:
            logger.warning("Batch response lists %d unprocessed trace id(s): %s", len(unprocessed), unprocessed)
        return [parse_trace_document(entry) for entry in entries]
    if isinstance(data, list):
        return [parse_trace_document(entry) for entry in data]
    return [parse_trace_document(data)]
