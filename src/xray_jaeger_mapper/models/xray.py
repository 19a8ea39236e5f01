"""Pydantic models for representing raw AWS X-Ray trace documents.

These models give a typed view over the JSON returned by the X-Ray
`BatchGetTraces` API after the per-segment `Document` strings have been
decoded. Every field read by the mapper is optional: a malformed segment is
carried through to the output rather than rejected here. Keys the mapper does
not read are kept (`extra="allow"`) so nothing is lost on re-serialization.
"""
from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class StackFrame(BaseModel):
    """One frame of a recorded exception stack."""

    model_config = ConfigDict(extra="allow")

    path: Optional[str] = None
    line: Optional[int] = None
    label: Optional[str] = None


class ExceptionRecord(BaseModel):
    """An exception captured in a segment's `cause.exceptions` list."""

    model_config = ConfigDict(extra="allow")

    type: Optional[str] = None
    message: Optional[str] = None
    stack: Optional[List[StackFrame]] = None


class Cause(BaseModel):
    model_config = ConfigDict(extra="allow")

    working_directory: Optional[str] = None
    exceptions: Optional[List[ExceptionRecord]] = None


class SegmentDocument(BaseModel):
    """A segment or subsegment document.

    Subsegments share this shape and nest through `subsegments` to any depth.
    `http`, `aws`, `annotations` and `metadata` are kept as raw dicts because
    they are flattened verbatim into tags.
    """

    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    name: Optional[str] = None
    trace_id: Optional[str] = None
    parent_id: Optional[str] = None
    origin: Optional[str] = None
    start_time: Optional[float] = None
    end_time: Optional[float] = None
    in_progress: Optional[bool] = None
    error: Optional[bool] = None
    fault: Optional[bool] = None
    throttle: Optional[bool] = None
    http: Optional[Dict[str, Any]] = None
    aws: Optional[Dict[str, Any]] = None
    annotations: Optional[Dict[str, Any]] = None
    metadata: Optional[Dict[str, Any]] = None
    cause: Optional[Cause] = None
    subsegments: Optional[List["SegmentDocument"]] = None


class XrayTraceSegment(BaseModel):
    """Envelope for one top-level segment as listed in `Segments`."""

    model_config = ConfigDict(extra="allow")

    Id: Optional[str] = None
    Document: SegmentDocument

    @field_validator("Document", mode="before")
    @classmethod
    def decode_document(cls, v: Any) -> Any:
        """Decode the JSON-encoded `Document` string sent by the X-Ray API.

        Already-decoded dicts (and model instances) pass through unchanged.
        """
        if isinstance(v, (str, bytes)):
            return json.loads(v)
        return v


class XrayTraceData(BaseModel):
    """The primary model representing one complete X-Ray trace."""

    model_config = ConfigDict(extra="allow")

    Id: Optional[str] = None
    Duration: Optional[float] = None
    Segments: List[XrayTraceSegment] = Field(default_factory=list)


SegmentDocument.model_rebuild()
