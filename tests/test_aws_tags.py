from __future__ import annotations

from xray_jaeger_mapper.mapping.aws_tags import tags_from_aws


def _pairs(tags):
    return [(t.key, t.value, t.type) for t in tags]


def test_absent_aws_yields_no_tags():
    assert tags_from_aws(None) == []
    assert tags_from_aws({}) == []


def test_allow_listed_keys_in_fixed_order():
    aws = {
        "region": "us-east-2",
        "ec2": {"availability_zone": "us-east-2b", "instance_id": "i-0ec3e264928bf8dba"},
        "ecs": "container-1",
    }
    assert _pairs(tags_from_aws(aws)) == [
        ("availability_zone", "us-east-2b", "string"),
        ("instance_id", "i-0ec3e264928bf8dba", "string"),
        ("ecs", "container-1", "string"),
        ("region", "us-east-2", "string"),
    ]


def test_other_aws_keys_ignored():
    aws = {
        "retries": 3,
        "operation": "PutItem",
        "table_name": "orders",
        "resource_names": ["orders"],
    }
    assert tags_from_aws(aws) == []


def test_falsy_allow_listed_values_skipped():
    assert tags_from_aws({"region": "", "ec2": {}, "ecs": None}) == []


def test_nested_object_values_flattened_without_prefix():
    aws = {
        "elastic_beanstalk": {
            "environment_name": "prod",
            "version_label": "v7",
            "deployment_id": 12,
        }
    }
    assert _pairs(tags_from_aws(aws)) == [
        ("environment_name", "prod", "string"),
        ("version_label", "v7", "string"),
        ("deployment_id", 12, "number"),
    ]
