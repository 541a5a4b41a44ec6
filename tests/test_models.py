"""
Tests for domain models — answer record, rules, generated files, config.
"""

import pytest
from pydantic import ValidationError

from ml_container_creator.core.models import (
    AnswerRecord,
    Condition,
    DependencyRule,
    ExclusionRule,
    GeneratedFile,
    GeneratorConfig,
    unless,
    when,
)


class TestAnswerRecord:
    """AnswerRecord model tests."""

    def test_camel_case_environment(self, make_record):
        env = make_record().to_environment()
        assert env["projectName"] == "iris-classifier"
        assert env["awsRegion"] == "us-east-1"
        assert env["testTypes"] == (
            "local-model-cli", "local-model-server", "hosted-model-endpoint",
        )
        assert "project_name" not in env

    def test_populate_by_field_name(self):
        record = AnswerRecord(
            project_name="p", destination_dir="./p", framework="sklearn",
            model_server="flask", deploy_target="sagemaker",
            instance_type="cpu-optimized", aws_region="us-east-1",
        )
        assert record.get("modelServer") == "flask"
        assert record.model_format is None

    def test_get_default(self, make_record):
        assert make_record().get("gpuCount", 0) == 0

    def test_unknown_field_rejected(self, make_record):
        with pytest.raises(ValidationError):
            make_record(gpuCount=2)

    def test_empty_project_name_rejected(self, make_record):
        with pytest.raises(ValidationError):
            make_record(projectName="")

    def test_frozen(self, make_record):
        record = make_record()
        with pytest.raises(ValidationError):
            record.aws_region = "us-west-2"

    def test_model_copy_leaves_original(self, make_record):
        record = make_record()
        other = record.model_copy(update={"framework": "xgboost"})
        assert record.framework == "sklearn"
        assert other.framework == "xgboost"


class TestCondition:
    def test_equality(self):
        assert when("framework", "sklearn").holds({"framework": "sklearn"})
        assert not when("framework", "sklearn").holds({"framework": "xgboost"})

    def test_negated(self):
        assert unless("framework", "transformers").holds({"framework": "sklearn"})
        assert not unless("framework", "transformers").holds({"framework": "transformers"})

    def test_missing_field(self):
        assert not when("framework", "sklearn").holds({})
        assert unless("framework", "sklearn").holds({})

    def test_multiselect_membership(self):
        cond = when("testTypes", "local-model-cli")
        assert cond.holds({"testTypes": ("local-model-cli", "hosted-model-endpoint")})
        assert not cond.holds({"testTypes": ("hosted-model-endpoint",)})
        assert not cond.holds({"testTypes": ()})

    def test_boolean_values(self):
        assert when("includeTesting", False).holds({"includeTesting": False})
        assert not when("includeTesting", False).holds({"includeTesting": True})

    def test_describe(self):
        assert when("framework", "sklearn").describe() == "framework == 'sklearn'"
        assert unless("framework", "a", "b").describe() == "framework not in ['a', 'b']"

    def test_hashable(self):
        assert len({Condition("a", ("x",)), Condition("a", ("x",))}) == 1


class TestRules:
    def test_dependency_applies(self):
        rule = DependencyRule("modelFormat", when("framework", "transformers"), "skip")
        assert rule.applies({"framework": "transformers"})
        assert not rule.applies({"framework": "sklearn"})

    def test_unconditional_exclusion(self):
        assert ExclusionRule(("**/README.md",)).applies({})

    def test_conditional_exclusion(self):
        rule = ExclusionRule(("**/test/**",), when=when("includeTesting", False))
        assert rule.applies({"includeTesting": False})
        assert not rule.applies({"includeTesting": True})


class TestGeneratedFile:
    def test_defaults(self):
        f = GeneratedFile(path="Dockerfile", content="FROM scratch\n")
        assert f.executable is False
        assert f.reason == ""

    def test_model_dump(self):
        d = GeneratedFile(path="deploy/deploy.sh", content="", executable=True).model_dump()
        assert d["path"] == "deploy/deploy.sh"
        assert d["executable"] is True


class TestGeneratorConfig:
    def test_defaults(self):
        c = GeneratorConfig()
        assert c.defaults == {}
        assert c.templates.strict is True
        assert c.templates.path is None
        assert c.destination.on_existing == "abort"

    def test_bad_policy(self):
        with pytest.raises(ValidationError):
            GeneratorConfig.model_validate({"destination": {"on_existing": "merge"}})
