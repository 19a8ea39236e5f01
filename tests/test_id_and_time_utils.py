from __future__ import annotations

import math

from xray_jaeger_mapper.mapping.id_utils import parent_span_id
from xray_jaeger_mapper.mapping.time_utils import (
    MICROS_PER_SECOND,
    Seconds,
    duration_micros,
    to_micros,
)


def test_parent_span_id_is_deterministic():
    assert parent_span_id("svc", "AWS::EC2::Instance") == parent_span_id(
        "svc", "AWS::EC2::Instance"
    )


def test_parent_span_id_does_not_collide_on_concatenation():
    assert parent_span_id("ab", "c") != parent_span_id("a", "bc")
    assert parent_span_id("svc", None) != parent_span_id("svc", "None")
    assert parent_span_id("svc", None) != parent_span_id("svc", "")


def test_to_micros_scales_seconds():
    assert MICROS_PER_SECOND == 1_000_000
    assert to_micros(Seconds(1.0)) == 1_000_000
    assert to_micros(Seconds(2.5)) == 2_500_000


def test_missing_timestamp_becomes_nan():
    assert math.isnan(to_micros(None))
    assert math.isnan(duration_micros(None, Seconds(1.0)))


def test_duration_without_end_is_zero():
    assert duration_micros(Seconds(1.0), None) == 0


def test_duration_is_not_clamped():
    assert duration_micros(Seconds(2.0), Seconds(1.0)) == -1_000_000
