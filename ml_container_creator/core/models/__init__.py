"""
Domain models — Pydantic types for the generator.

All models are re-exported here for convenient access:

    from ml_container_creator.core.models import AnswerRecord, Option, GeneratedFile
"""

from ml_container_creator.core.models.answers import AnswerRecord
from ml_container_creator.core.models.config import (
    DestinationSettings,
    GeneratorConfig,
    TemplateSettings,
)
from ml_container_creator.core.models.option import Option, Phase
from ml_container_creator.core.models.rules import (
    Condition,
    DependencyRule,
    ExclusionRule,
    unless,
    when,
)
from ml_container_creator.core.models.template import GeneratedFile

__all__ = [
    # answers.py
    "AnswerRecord",
    # rules.py
    "Condition",
    "DependencyRule",
    # config.py
    "DestinationSettings",
    "ExclusionRule",
    # template.py
    "GeneratedFile",
    "GeneratorConfig",
    # option.py
    "Option",
    "Phase",
    "TemplateSettings",
    "unless",
    "when",
]
