"""Pre-order traversal of a segment's nested `subsegments` tree.

The visitor receives `(child, immediate_parent)` for every node at every
depth: parent before descendants, siblings in source order. Traversal is
recursive, so it is bounded by `max_depth` and refuses to revisit a node that
is already on its own ancestor path.
"""
from __future__ import annotations

from typing import Callable, Set

from ..models.xray import SegmentDocument

__all__ = ["DEFAULT_MAX_DEPTH", "MalformedTraceError", "walk_subsegments"]

DEFAULT_MAX_DEPTH = 256

SubsegmentVisitor = Callable[[SegmentDocument, SegmentDocument], None]


class MalformedTraceError(ValueError):
    """Raised when a subsegment tree is cyclic or deeper than allowed."""


def walk_subsegments(
    segment: SegmentDocument,
    visit: SubsegmentVisitor,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> None:
    """Call `visit(child, parent)` for every subsegment below `segment`.

    Args:
        segment: Top-level segment (or any subsegment) to descend from
        visit: Callback invoked once per descendant
        max_depth: Maximum nesting level below `segment`; 1 allows direct
            children only

    Raises:
        MalformedTraceError: if nesting exceeds `max_depth` or a node is its
            own ancestor
    """
    _walk(segment, visit, 1, max_depth, {id(segment)})


def _walk(
    segment: SegmentDocument,
    visit: SubsegmentVisitor,
    depth: int,
    max_depth: int,
    ancestors: Set[int],
) -> None:
    if not segment.subsegments:
        return
    if depth > max_depth:
        raise MalformedTraceError(
            f"subsegment nesting under segment {segment.id!r} exceeds max depth {max_depth}"
        )
    for child in segment.subsegments:
        if id(child) in ancestors:
            raise MalformedTraceError(
                f"subsegment {child.id!r} is its own ancestor (cyclic subsegments)"
            )
        visit(child, segment)
        ancestors.add(id(child))
        try:
            _walk(child, visit, depth + 1, max_depth, ancestors)
        finally:
            ancestors.discard(id(child))
