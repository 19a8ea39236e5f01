"""Pydantic models for the Jaeger-UI compatible trace representation.

These models are the target structure of the mapper. Field names follow the
Jaeger UI JSON contract verbatim (`spanID`, `processID`, ...) so `to_payload`
can hand the result straight to a trace view. `stackTraces` and
`errorIconColor` are vendor extensions the view tolerates.
"""
from __future__ import annotations

import math
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

__all__ = [
    "TraceTag",
    "SpanReference",
    "JaegerProcess",
    "JaegerSpan",
    "JaegerTrace",
]


class TraceTag(BaseModel):
    """Typed key/value pair shown on a span or process."""

    key: str
    type: str
    value: Any = None


class SpanReference(BaseModel):
    refType: Literal["CHILD_OF"] = "CHILD_OF"
    spanID: str
    traceID: Optional[str] = None


class JaegerProcess(BaseModel):
    """One logical service, keyed by `serviceName` in `JaegerTrace.processes`."""

    serviceName: Optional[str] = None
    tags: List[TraceTag] = Field(default_factory=list)


class JaegerSpan(BaseModel):
    """Flattened representation of one segment, subsegment or grouping span.

    Timestamps are microseconds since the epoch. `duration` and `startTime`
    are floats: malformed source timestamps surface as NaN.
    """

    spanID: Optional[str] = None
    traceID: Optional[str] = None
    processID: Optional[str] = None
    operationName: Optional[str] = None
    startTime: float
    duration: float
    flags: int = 1
    logs: List[Any] = Field(default_factory=list)
    tags: List[TraceTag] = Field(default_factory=list)
    references: List[SpanReference] = Field(default_factory=list)
    stackTraces: Optional[List[str]] = None
    errorIconColor: Optional[str] = None


class JaegerTrace(BaseModel):
    """Complete mapped trace: process table plus every span."""

    processes: Dict[str, JaegerProcess] = Field(default_factory=dict)
    traceID: Optional[str] = None
    spans: List[JaegerSpan] = Field(default_factory=list)
    warnings: Optional[List[str]] = None

    def to_payload(self) -> Dict[str, Any]:
        """Return the plain dict handed to the trace view.

        Absent optional span fields (`stackTraces`, `errorIconColor`, missing
        ids) are omitted; `warnings` is always present, `null` when empty.
        Non-finite `startTime` / `duration` values become `None` so the
        payload serialises as strict JSON.
        """
        payload = self.model_dump(exclude_none=True)
        for span in payload["spans"]:
            for key in ("startTime", "duration"):
                if not math.isfinite(span[key]):
                    span[key] = None
        payload["warnings"] = self.warnings
        return payload
