"""Flattening of nested segment payloads into typed display tags.

`flatten` turns an arbitrarily nested dict into a single-level mapping keyed by
dotted paths, with list elements addressed as `key[i]`. `object_to_tags` then
turns every leaf into a `TraceTag`, skipping blank leaves.

Flattening rules:
    - non-empty dict: recurse, the dict's own key is never emitted
    - list: each element at `key[i]`; dict elements recurse under that key
    - anything else (including `{}`): emitted verbatim

Blank leaves (skipped by `value_to_tag`): None, False, 0, NaN, "" and [].
An empty dict is not blank and is kept with type "object".
"""
from __future__ import annotations

import math
from typing import Any, Dict, List, Optional

from ..models.jaeger import TraceTag

__all__ = ["flatten", "tag_type", "value_to_tag", "object_to_tags"]


def flatten(target: Dict[str, Any], prefix: Optional[str] = None) -> Dict[str, Any]:
    """Flatten nested dicts and lists into a `{path: leaf}` mapping.

    Example:
        >>> flatten({"a": {"b": 1, "c": [2, 3]}})
        {'a.b': 1, 'a.c[0]': 2, 'a.c[1]': 3}
    """
    output: Dict[str, Any] = {}
    _step(target, prefix, output)
    return output


def _step(obj: Dict[str, Any], prefix: Optional[str], output: Dict[str, Any]) -> None:
    for key, value in obj.items():
        new_key = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, dict) and value:
            _step(value, new_key, output)
        elif isinstance(value, list):
            for i, item in enumerate(value):
                item_key = f"{new_key}[{i}]"
                if isinstance(item, dict):
                    _step(item, item_key, output)
                else:
                    output[item_key] = item
        else:
            output[new_key] = value


def tag_type(value: Any) -> str:
    """Return the display type name used by the trace view for `value`."""
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    return "object"


def _is_blank(value: Any) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0 or math.isnan(value)
    if isinstance(value, (str, list)):
        return len(value) == 0
    return False


def value_to_tag(key: str, value: Any) -> Optional[TraceTag]:
    """Build a tag for one flattened leaf, or None when the leaf is blank."""
    if _is_blank(value):
        return None
    return TraceTag(key=key, type=tag_type(value), value=value)


def object_to_tags(obj: Optional[Dict[str, Any]]) -> List[TraceTag]:
    """Flatten `obj` and convert every non-blank leaf into a tag, in key order."""
    if not obj:
        return []
    tags: List[TraceTag] = []
    for key, value in flatten(obj).items():
        tag = value_to_tag(key, value)
        if tag is not None:
            tags.append(tag)
    return tags
