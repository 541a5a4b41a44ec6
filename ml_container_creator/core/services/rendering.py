"""
Template rendering — variable substitution and conditional blocks.

The materializer only depends on the ``TemplateRenderer`` protocol;
``JinjaRenderer`` is the default engine.  Template syntax:

    {{ projectName }}                                substitution
    {% if framework == 'xgboost' %} … {% endif %}     conditional block
    {% if 'local-model-cli' in testTypes %} … {% endif %}   membership

Blocks nest.  In strict mode an unknown name raises
``UnresolvedReference``; in lenient mode it renders as empty text.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol

from jinja2 import (
    Environment,
    StrictUndefined,
    Template,
    TemplateError,
    Undefined,
    UndefinedError,
)

from ml_container_creator.core.errors import UnresolvedReference


class TemplateRenderer(Protocol):
    """Renders one template's text against an environment."""

    def render(self, text: str, environment: Mapping[str, Any], name: str = "<string>") -> str: ...


class JinjaRenderer:
    """Jinja2-backed renderer.

    Args:
        strict: Raise on undefined names instead of rendering them blank.
    """

    def __init__(self, *, strict: bool = True) -> None:
        self.strict = strict
        self._env = Environment(
            undefined=StrictUndefined if strict else Undefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            autoescape=False,
        )
        self._compiled: dict[str, Template] = {}

    def render(self, text: str, environment: Mapping[str, Any], name: str = "<string>") -> str:
        try:
            template = self._compiled.get(text)
            if template is None:
                template = self._compiled[text] = self._env.from_string(text)
            return template.render(**environment)
        except UndefinedError as e:
            raise UnresolvedReference(name, str(e)) from e
        except TemplateError as e:
            raise UnresolvedReference(name, f"template error: {e}") from e
