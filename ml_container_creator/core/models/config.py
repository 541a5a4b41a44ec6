"""
Generator configuration — optional ``mlcc.yml`` settings.

None of these settings bypass prompting: ``defaults`` only pre-fills the
suggested answer of each prompt.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class TemplateSettings(BaseModel):
    """How the template corpus is located and rendered."""

    strict: bool = True          # unresolved names are errors, not blanks
    path: str | None = None      # alternative corpus root


class DestinationSettings(BaseModel):
    """What to do when the output directory is already populated."""

    on_existing: Literal["abort", "overwrite"] = "abort"


class GeneratorConfig(BaseModel):
    """Root of ``mlcc.yml``."""

    defaults: dict[str, Any] = Field(default_factory=dict)
    templates: TemplateSettings = Field(default_factory=TemplateSettings)
    destination: DestinationSettings = Field(default_factory=DestinationSettings)
