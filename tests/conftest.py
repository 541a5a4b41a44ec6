"""
Shared test fixtures and configuration.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path

import pytest

from ml_container_creator.core.models import AnswerRecord

FIXED_NOW = datetime(2026, 10, 17, 12, 30, 45, 123000, tzinfo=timezone.utc)
FIXED_STAMP = "2026-10-17T12-30-45"

ALL_TEST_TYPES = ("local-model-cli", "local-model-server", "hosted-model-endpoint")


class ScriptedPrompter:
    """Prompter that answers from a dict (else the prompt default) and records every prompt."""

    def __init__(self, answers: dict | None = None):
        self.answers = dict(answers or {})
        self.asked = []
        self.titles = []

    def announce(self, title):
        self.titles.append(title)

    def ask(self, spec):
        self.asked.append(spec)
        if spec.name in self.answers:
            return self.answers[spec.name]
        return spec.default

    @property
    def asked_names(self) -> list[str]:
        return [s.name for s in self.asked]

    def spec(self, name):
        return next(s for s in self.asked if s.name == name)


@pytest.fixture
def scripted():
    """Factory for ScriptedPrompter instances."""
    return ScriptedPrompter


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def make_record(tmp_path: Path):
    """Build an AnswerRecord from a full sklearn/flask baseline plus overrides."""

    def _make(**overrides) -> AnswerRecord:
        data = {
            "projectName": "iris-classifier",
            "destinationDir": str(tmp_path / "out"),
            "framework": "sklearn",
            "modelFormat": "pkl",
            "modelServer": "flask",
            "includeSampleModel": True,
            "includeTesting": True,
            "testTypes": ALL_TEST_TYPES,
            "deployTarget": "sagemaker",
            "instanceType": "cpu-optimized",
            "awsRegion": "us-east-1",
            "buildTimestamp": FIXED_STAMP,
        }
        data.update(overrides)
        return AnswerRecord.model_validate(data)

    return _make


@pytest.fixture
def llm_record(make_record) -> AnswerRecord:
    """transformers + vLLM, no sample model, no tests."""
    return make_record(
        framework="transformers",
        modelFormat=None,
        modelServer="vllm",
        includeSampleModel=False,
        includeTesting=False,
        testTypes=(),
        instanceType="gpu-enabled",
    )


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """CLI tests install their own root handlers; put the originals back."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
