"""
Tests for the prompt sequencer — phase order, skipped/forced prompts,
configured defaults, answer coercion.
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from ml_container_creator.core.errors import InvalidAnswer, UnknownOption
from ml_container_creator.core.services.sequencer import (
    PromptSequencer,
    PromptSpec,
    build_timestamp,
    coerce_answer,
    finalize_answers,
)

FIXED_STAMP = "2026-10-17T12-30-45"


class TestTimestamp:
    def test_format(self):
        now = datetime(2026, 10, 17, 12, 30, 45, 123000, tzinfo=timezone.utc)
        assert build_timestamp(now) == "2026-10-17T12-30-45"

    def test_no_separators_left(self):
        stamp = build_timestamp()
        assert ":" not in stamp and "." not in stamp
        assert len(stamp) == 19


class TestRun:
    def test_sklearn_defaults(self, scripted, fixed_clock):
        prompter = scripted({"framework": "sklearn"})
        record = PromptSequencer(prompter, clock=fixed_clock).run()

        assert record.framework == "sklearn"
        assert record.model_format == "pkl"
        assert record.model_server == "flask"
        assert record.include_sample_model is False
        assert record.include_testing is True
        assert record.test_types == (
            "local-model-cli", "local-model-server", "hosted-model-endpoint",
        )
        assert record.instance_type == "cpu-optimized"
        assert record.aws_region == "us-east-1"
        assert record.build_timestamp == FIXED_STAMP

    def test_asks_every_option_for_traditional(self, scripted, fixed_clock):
        prompter = scripted({"framework": "xgboost"})
        PromptSequencer(prompter, clock=fixed_clock).run()
        assert prompter.asked_names == [
            "projectName", "destinationDir",
            "framework", "modelFormat", "modelServer",
            "includeSampleModel", "includeTesting", "testTypes",
            "deployTarget", "instanceType", "awsRegion",
        ]

    def test_phase_titles_announced_in_order(self, scripted, fixed_clock):
        prompter = scripted()
        PromptSequencer(prompter, clock=fixed_clock).run()
        assert prompter.titles == [
            "📋 Project Configuration",
            "🔧 Core Configuration",
            "📦 Module Selection",
            "💪 Infrastructure & Performance",
        ]

    def test_transformers_skips_format_and_sample(self, scripted, fixed_clock):
        prompter = scripted({"framework": "transformers", "modelServer": "sglang"})
        record = PromptSequencer(prompter, clock=fixed_clock).run()

        assert "modelFormat" not in prompter.asked_names
        assert "includeSampleModel" not in prompter.asked_names
        assert record.model_format is None
        assert record.include_sample_model is False
        assert record.model_server == "sglang"
        assert record.instance_type == "gpu-enabled"
        assert record.test_types == ("hosted-model-endpoint",)

    def test_choices_follow_earlier_answer_in_same_phase(self, scripted, fixed_clock):
        prompter = scripted({"framework": "tensorflow"})
        PromptSequencer(prompter, clock=fixed_clock).run()
        assert prompter.spec("modelFormat").choices == ("keras", "h5", "SavedModel")
        assert prompter.spec("modelServer").choices == ("flask", "fastapi")

    def test_no_testing_skips_test_types(self, scripted, fixed_clock):
        prompter = scripted({"includeTesting": False})
        record = PromptSequencer(prompter, clock=fixed_clock).run()
        assert "testTypes" not in prompter.asked_names
        assert record.test_types == ()

    def test_destination_default_uses_name_and_stamp(self, scripted, fixed_clock):
        prompter = scripted({"projectName": "churn"})
        record = PromptSequencer(prompter, clock=fixed_clock).run()
        assert prompter.spec("destinationDir").default == f"./churn-{FIXED_STAMP}"
        assert record.destination_dir == f"./churn-{FIXED_STAMP}"

    def test_text_answers_stripped(self, scripted, fixed_clock):
        prompter = scripted({"projectName": "  churn  "})
        record = PromptSequencer(prompter, clock=fixed_clock).run()
        assert record.project_name == "churn"

    def test_multiselect_normalized_to_choice_order(self, scripted, fixed_clock):
        prompter = scripted({"testTypes": ["hosted-model-endpoint", "local-model-cli"]})
        record = PromptSequencer(prompter, clock=fixed_clock).run()
        assert record.test_types == ("local-model-cli", "hosted-model-endpoint")

    def test_illegal_prompter_answer(self, scripted, fixed_clock):
        prompter = scripted({"framework": "transformers", "modelServer": "flask"})
        with pytest.raises(InvalidAnswer) as exc:
            PromptSequencer(prompter, clock=fixed_clock).run()
        assert exc.value.option == "modelServer"

    def test_interrupt_propagates(self, scripted, fixed_clock):
        class Interrupt(Exception):
            pass

        class Interrupting(scripted):
            def ask(self, spec):
                if spec.name == "modelServer":
                    raise Interrupt
                return super().ask(spec)

        with pytest.raises(Interrupt):
            PromptSequencer(Interrupting(), clock=fixed_clock).run()

    def test_record_is_frozen(self, scripted, fixed_clock):
        record = PromptSequencer(scripted(), clock=fixed_clock).run()
        with pytest.raises(ValidationError):
            record.framework = "xgboost"


class TestConfiguredDefaults:
    def test_legal_default_used(self, scripted, fixed_clock):
        prompter = scripted()
        defaults = {"framework": "xgboost", "modelFormat": "ubj", "includeSampleModel": True}
        record = PromptSequencer(prompter, defaults=defaults, clock=fixed_clock).run()
        assert prompter.spec("framework").default == "xgboost"
        assert record.model_format == "ubj"
        assert record.include_sample_model is True

    def test_illegal_default_falls_back(self, scripted, fixed_clock, caplog):
        prompter = scripted()
        defaults = {"framework": "sklearn", "modelFormat": "ubj"}
        with caplog.at_level("WARNING"):
            record = PromptSequencer(prompter, defaults=defaults, clock=fixed_clock).run()
        assert record.model_format == "pkl"
        assert "modelFormat" in caplog.text

    def test_default_still_prompted(self, scripted, fixed_clock):
        prompter = scripted({"framework": "tensorflow"})
        record = PromptSequencer(
            prompter, defaults={"framework": "xgboost"}, clock=fixed_clock,
        ).run()
        assert "framework" in prompter.asked_names
        assert record.framework == "tensorflow"

    def test_unknown_default_rejected(self, scripted):
        with pytest.raises(UnknownOption):
            PromptSequencer(scripted(), defaults={"gpuCount": 2})

    def test_multiselect_default(self, scripted, fixed_clock):
        prompter = scripted()
        record = PromptSequencer(
            prompter, defaults={"testTypes": ["local-model-server"]}, clock=fixed_clock,
        ).run()
        assert record.test_types == ("local-model-server",)


class TestCoerce:
    def _spec(self, kind, choices=(), name="x"):
        return PromptSpec(name=name, kind=kind, message="?", choices=choices)

    def test_blank_text(self):
        with pytest.raises(InvalidAnswer):
            coerce_answer(self._spec("text"), "   ")

    def test_confirm_needs_bool(self):
        with pytest.raises(InvalidAnswer):
            coerce_answer(self._spec("confirm", (True, False)), "yes")

    def test_select_outside_choices(self):
        with pytest.raises(InvalidAnswer):
            coerce_answer(self._spec("select", ("a", "b")), "c")

    def test_multiselect_empty(self):
        with pytest.raises(InvalidAnswer):
            coerce_answer(self._spec("multiselect", ("a", "b")), [])

    def test_multiselect_string_rejected(self):
        with pytest.raises(InvalidAnswer):
            coerce_answer(self._spec("multiselect", ("a", "b")), "a")

    def test_multiselect_stray(self):
        with pytest.raises(InvalidAnswer):
            coerce_answer(self._spec("multiselect", ("a", "b")), ["a", "z"])

    def test_multiselect_order(self):
        assert coerce_answer(self._spec("multiselect", ("a", "b", "c")), ["c", "a"]) == ("a", "c")


class TestFinalize:
    def _answers(self, **overrides):
        answers = {
            "projectName": "p", "destinationDir": "./p",
            "framework": "transformers", "modelFormat": None, "modelServer": "vllm",
            "includeSampleModel": True, "includeTesting": False,
            "testTypes": ("hosted-model-endpoint",),
            "deployTarget": "sagemaker", "instanceType": "gpu-enabled",
            "awsRegion": "us-east-1",
        }
        answers.update(overrides)
        return answers

    def test_corrects_skipped_and_forced(self):
        final = finalize_answers(self._answers())
        assert final["includeSampleModel"] is False
        assert final["testTypes"] == ()

    def test_missing_option(self):
        answers = self._answers()
        del answers["awsRegion"]
        with pytest.raises(InvalidAnswer):
            finalize_answers(answers)
