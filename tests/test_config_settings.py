from __future__ import annotations

import pytest

from xray_jaeger_mapper.config import Settings, get_settings
from xray_jaeger_mapper.mapper import transform_trace_response

ENV_KEYS = ("LOG_LEVEL", "MAX_SUBSEGMENT_DEPTH", "PROCESS_MERGE_POLICY", "OUTPUT_INDENT")


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    # Keep a developer's .env or shell overrides out of these scenarios.
    monkeypatch.chdir(tmp_path)
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    s = get_settings()
    assert s.LOG_LEVEL == "INFO"
    assert s.MAX_SUBSEGMENT_DEPTH == 256
    assert s.PROCESS_MERGE_POLICY == "last"
    assert s.OUTPUT_INDENT is None


def test_env_overrides(clean_env):
    clean_env.setenv("LOG_LEVEL", " debug ")
    clean_env.setenv("MAX_SUBSEGMENT_DEPTH", "10")
    clean_env.setenv("PROCESS_MERGE_POLICY", " Merge ")
    clean_env.setenv("OUTPUT_INDENT", "2")
    s = get_settings()
    assert s.LOG_LEVEL == "DEBUG"
    assert s.MAX_SUBSEGMENT_DEPTH == 10
    assert s.PROCESS_MERGE_POLICY == "merge"
    assert s.OUTPUT_INDENT == 2


def test_dotenv_file_read_from_working_directory(clean_env, tmp_path):
    (tmp_path / ".env").write_text("PROCESS_MERGE_POLICY=first\n", encoding="utf-8")
    assert get_settings().PROCESS_MERGE_POLICY == "first"


def test_settings_are_cached(clean_env):
    assert get_settings() is get_settings()


@pytest.mark.parametrize(
    "key, value",
    [("PROCESS_MERGE_POLICY", "newest"), ("MAX_SUBSEGMENT_DEPTH", "0")],
)
def test_invalid_values_raise_runtime_error(clean_env, key, value):
    clean_env.setenv(key, value)
    with pytest.raises(RuntimeError, match=key):
        get_settings()


def test_direct_construction_accepts_keyword_values():
    s = Settings(PROCESS_MERGE_POLICY="FIRST", MAX_SUBSEGMENT_DEPTH=3)
    assert s.PROCESS_MERGE_POLICY == "first"
    assert s.MAX_SUBSEGMENT_DEPTH == 3


def test_facade_defaults_come_from_settings(clean_env):
    clean_env.setenv("PROCESS_MERGE_POLICY", "first")
    doc = {
        "Id": "t",
        "Segments": [
            {"Document": {"id": "1", "name": "svc", "aws": {"region": "us-east-1"}, "start_time": 1.0}},
            {"Document": {"id": "2", "name": "svc", "aws": {"region": "eu-west-1"}, "start_time": 2.0}},
        ],
    }
    trace = transform_trace_response(doc)
    assert [t.value for t in trace.processes["svc"].tags] == ["svc", "us-east-1"]


def test_facade_depth_limit_from_settings(clean_env):
    from xray_jaeger_mapper import MalformedTraceError

    clean_env.setenv("MAX_SUBSEGMENT_DEPTH", "1")
    doc = {
        "Id": "t",
        "Segments": [
            {
                "Document": {
                    "id": "1",
                    "name": "svc",
                    "start_time": 1.0,
                    "subsegments": [{"id": "2", "subsegments": [{"id": "3"}]}],
                }
            }
        ],
    }
    with pytest.raises(MalformedTraceError):
        transform_trace_response(doc)
