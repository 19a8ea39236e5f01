"""Process table construction, one entry per top-level segment.

Each process is keyed by the segment's service name and carries:
    - `name` tag (the service name)
    - AWS allow-list tags (`aws_tags.tags_from_aws`)
    - `hostname` tag parsed from `http.request.url`, when present

Segments without a name have no discoverable process and are skipped; their
spans keep `processID=None`.

Duplicate service names are resolved by an explicit merge policy:
    last  : later segment replaces the earlier entry (default)
    first : earliest segment wins, later ones are ignored
    merge : later tags are appended unless the same (key, value) pair exists
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Literal, Optional
from urllib.parse import urlparse

from ..models.jaeger import JaegerProcess, TraceTag
from ..models.xray import SegmentDocument, XrayTraceSegment
from .aws_tags import tags_from_aws

logger = logging.getLogger(__name__)

__all__ = ["MERGE_POLICIES", "MergePolicy", "gather_processes", "process_for_segment"]

MergePolicy = Literal["last", "first", "merge"]
MERGE_POLICIES = ("last", "first", "merge")


def _request_hostname(http: Optional[Dict[str, Any]]) -> Optional[str]:
    request = (http or {}).get("request")
    if not isinstance(request, dict):
        return None
    url = request.get("url")
    if not url or not isinstance(url, str):
        return None
    return urlparse(url).hostname


def process_for_segment(document: SegmentDocument) -> JaegerProcess:
    tags: List[TraceTag] = [TraceTag(key="name", value=document.name, type="string")]
    tags.extend(tags_from_aws(document.aws))
    hostname = _request_hostname(document.http)
    if hostname:
        tags.append(TraceTag(key="hostname", value=hostname, type="string"))
    return JaegerProcess(serviceName=document.name, tags=tags)


def _merge_tags(existing: JaegerProcess, incoming: JaegerProcess) -> JaegerProcess:
    seen = [(t.key, t.value) for t in existing.tags]
    merged = list(existing.tags)
    for tag in incoming.tags:
        if (tag.key, tag.value) not in seen:
            merged.append(tag)
            seen.append((tag.key, tag.value))
    return JaegerProcess(serviceName=existing.serviceName, tags=merged)


def gather_processes(
    segments: Iterable[XrayTraceSegment], merge_policy: MergePolicy = "last"
) -> Dict[str, JaegerProcess]:
    """Build the `serviceName -> JaegerProcess` table for top-level segments.

    Args:
        segments: Top-level segment envelopes in arrival order
        merge_policy: How to resolve two segments with the same name

    Returns:
        Dict keyed by service name, in first-seen order
    """
    if merge_policy not in MERGE_POLICIES:
        raise ValueError(f"unknown process merge policy {merge_policy!r}")
    processes: Dict[str, JaegerProcess] = {}
    for segment in segments:
        if segment.Document.name is None:
            logger.debug("Segment %s has no name; no process registered", segment.Document.id)
            continue
        process = process_for_segment(segment.Document)
        key = process.serviceName
        existing = processes.get(key)
        if existing is None:
            processes[key] = process
            continue
        logger.debug("Duplicate process %s resolved with policy=%s", key, merge_policy)
        if merge_policy == "last":
            processes[key] = process
        elif merge_policy == "merge":
            processes[key] = _merge_tags(existing, process)
    return processes
