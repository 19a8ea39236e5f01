from __future__ import annotations

import pytest

from xray_jaeger_mapper.mapping.processes import gather_processes
from xray_jaeger_mapper.models.xray import XrayTraceSegment


def _segments(*documents):
    return [XrayTraceSegment.model_validate({"Id": d.get("id"), "Document": d}) for d in documents]


def _pairs(process):
    return [(t.key, t.value) for t in process.tags]


def test_process_per_segment_with_name_aws_and_hostname_tags():
    processes = gather_processes(
        _segments(
            {
                "id": "1",
                "name": "myfrontend-dev",
                "aws": {"ec2": {"instance_id": "i-1"}, "operation": "ignored"},
                "http": {"request": {"url": "http://3.23.148.72:8080/signup", "method": "POST"}},
            }
        )
    )
    assert list(processes) == ["myfrontend-dev"]
    process = processes["myfrontend-dev"]
    assert process.serviceName == "myfrontend-dev"
    assert _pairs(process) == [
        ("name", "myfrontend-dev"),
        ("instance_id", "i-1"),
        ("hostname", "3.23.148.72"),
    ]


def test_no_hostname_without_request_url():
    processes = gather_processes(_segments({"id": "1", "name": "svc", "http": {"response": {"status": 200}}}))
    assert _pairs(processes["svc"]) == [("name", "svc")]


def test_empty_segment_list():
    assert gather_processes([]) == {}


def _duplicates():
    return _segments(
        {"id": "1", "name": "svc", "aws": {"region": "us-east-1"}},
        {"id": "2", "name": "svc", "aws": {"region": "eu-west-1"}},
    )


def test_duplicate_names_last_write_wins_by_default():
    processes = gather_processes(_duplicates())
    assert _pairs(processes["svc"]) == [("name", "svc"), ("region", "eu-west-1")]


def test_duplicate_names_first_policy():
    processes = gather_processes(_duplicates(), merge_policy="first")
    assert _pairs(processes["svc"]) == [("name", "svc"), ("region", "us-east-1")]


def test_duplicate_names_merge_policy_unions_tags():
    processes = gather_processes(_duplicates(), merge_policy="merge")
    assert _pairs(processes["svc"]) == [
        ("name", "svc"),
        ("region", "us-east-1"),
        ("region", "eu-west-1"),
    ]


def test_unknown_merge_policy_rejected():
    with pytest.raises(ValueError):
        gather_processes(_duplicates(), merge_policy="newest")  # type: ignore[arg-type]


def test_nameless_segment_registers_no_process():
    processes = gather_processes(_segments({"id": "1"}, {"id": "2", "name": "svc"}))
    assert list(processes) == ["svc"]
    assert "None" not in processes
