"""Internal mapping subpackage for decomposed transformation logic.

This package holds the core implementation of the X-Ray to Jaeger mapping,
split into single-responsibility modules. Everything here is pure: no file,
network or environment access, and identical input gives identical output.

The public API lives in the top-level `mapper.py` facade.

Modules:
    orchestrator: Trace assembly pipeline coordinating all steps
    span_builder: Segment/subsegment to span conversion
    segment_walker: Depth-guarded pre-order subsegment traversal
    processes: Process table construction and merge policy
    flatten: Nested payload flattening and tag conversion
    aws_tags: Allow-listed `aws` field tags
    id_utils: Deterministic grouping span ids
    time_utils: Seconds to microseconds conversion
    mapping_context: State container for one assembly call
"""
from __future__ import annotations

from . import id_utils as id_utils  # noqa: F401
from . import time_utils as time_utils  # noqa: F401

__all__ = ["time_utils", "id_utils"]
