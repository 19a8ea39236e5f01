"""Deterministic identity for synthesized grouping spans using UUIDv5.

Top-level segments sharing a service name and origin are anchored under one
synthesized parent span. Its id is derived from the structured `(name, origin)`
pair, JSON-encoded before hashing, so `("ab", "c")` and `("a", "bc")` never
collide and a missing origin differs from the string "None".

Constants:
    PARENT_SPAN_NAMESPACE: UUIDv5 namespace derived from DNS namespace + seed
        string "xray-jaeger-mapper-parent-span". Changing it changes every
        synthesized id.
"""
from __future__ import annotations

import json
from typing import Optional
from uuid import NAMESPACE_DNS, uuid5

PARENT_SPAN_NAMESPACE = uuid5(NAMESPACE_DNS, "xray-jaeger-mapper-parent-span")

__all__ = ["PARENT_SPAN_NAMESPACE", "parent_span_id"]


def parent_span_id(name: Optional[str], origin: Optional[str]) -> str:
    """Generate the grouping span id for a `(name, origin)` pair.

    Args:
        name: Top-level segment name (service name)
        origin: Segment origin, e.g. "AWS::EC2::Instance"; may be absent

    Returns:
        UUIDv5 string representation
    """
    seed = json.dumps([name, origin])
    return str(uuid5(PARENT_SPAN_NAMESPACE, seed))
