"""Tags from the allow-listed parts of a segment's `aws` object.

Only `ec2`, `ecs`, `elastic_beanstalk` and `region` are surfaced (see the
X-Ray segment document reference for the `aws` field). Object values are
flattened without a prefix; scalar values become a single string tag. Other
keys (operation, table_name, request_id, ...) are ignored.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..models.jaeger import TraceTag
from .flatten import object_to_tags

__all__ = ["AWS_TAG_KEYS", "tags_from_aws"]

AWS_TAG_KEYS = ("ec2", "ecs", "elastic_beanstalk", "region")


def tags_from_aws(aws: Optional[Dict[str, Any]]) -> List[TraceTag]:
    tags: List[TraceTag] = []
    if not aws:
        return tags
    for key in AWS_TAG_KEYS:
        value = aws.get(key)
        if not value:
            continue
        if isinstance(value, dict):
            tags.extend(object_to_tags(value))
        else:
            tags.append(TraceTag(key=key, value=value, type="string"))
    return tags
