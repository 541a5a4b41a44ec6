"""
Answer record — the completed set of user choices driving generation.

Built by the prompt sequencer, frozen after construction, consumed
read-only by validation, planning and materialization.  Attribute names
are snake_case; the names templates and rules see are the camelCase
aliases (``projectName``, ``awsRegion``, …).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class AnswerRecord(BaseModel):
    """Completed configuration for one generation run."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    # Identity
    project_name: str = Field(min_length=1)
    destination_dir: str = Field(min_length=1)

    # Core: model_format is None for frameworks that load from a hub
    framework: str
    model_format: str | None = None
    model_server: str

    # Modules
    include_sample_model: bool = False
    include_testing: bool = False
    test_types: tuple[str, ...] = ()

    # Infrastructure
    deploy_target: str
    instance_type: str
    aws_region: str

    build_timestamp: str = ""

    def to_environment(self) -> dict[str, Any]:
        """Return the template variable environment (camelCase keys)."""
        return self.model_dump(by_alias=True)

    def get(self, name: str, default: Any = None) -> Any:
        """Look up a field by its camelCase option name."""
        return self.to_environment().get(name, default)
