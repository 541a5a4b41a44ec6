"""
Terminal prompter — renders ``PromptSpec`` questions with click.

Ctrl-C / EOF raise ``click.Abort``, which the sequencer lets propagate.
"""

from __future__ import annotations

from typing import Any

import click

from ml_container_creator.core.services.sequencer import PromptSpec


class NonBlank(click.ParamType):
    """Free text that is not empty after stripping whitespace."""

    name = "text"

    def convert(self, value: Any, param: click.Parameter | None, ctx: click.Context | None) -> str:
        text = str(value).strip()
        if not text:
            self.fail("a value is required", param, ctx)
        return text


class MultiChoice(click.ParamType):
    """Comma-separated subset of a fixed choice list."""

    name = "multichoice"

    def __init__(self, choices: tuple[str, ...]) -> None:
        self.choices = choices

    def convert(self, value: Any, param: click.Parameter | None, ctx: click.Context | None) -> tuple:
        if isinstance(value, (tuple, list)):
            items = [str(v) for v in value]
        else:
            items = [part.strip() for part in str(value).split(",") if part.strip()]
        if not items:
            self.fail("select at least one option", param, ctx)
        stray = [i for i in items if i not in self.choices]
        if stray:
            self.fail(
                f"{', '.join(stray)} not in {', '.join(self.choices)}", param, ctx,
            )
        return tuple(c for c in self.choices if c in items)


class ClickPrompter:
    """Interactive prompter backed by ``click.prompt`` / ``click.confirm``."""

    def announce(self, title: str) -> None:
        click.echo()
        click.secho(title, fg="cyan", bold=True)

    def ask(self, spec: PromptSpec) -> Any:
        if spec.kind == "confirm":
            return click.confirm(spec.message, default=bool(spec.default))

        if spec.kind == "select":
            return click.prompt(
                spec.message,
                type=click.Choice(list(spec.choices)),
                default=spec.default,
                show_choices=True,
            )

        if spec.kind == "multiselect":
            click.echo(f"  Choices: {', '.join(spec.choices)}")
            return click.prompt(
                f"{spec.message} (comma-separated)",
                type=MultiChoice(spec.choices),
                default=",".join(spec.default or ()),
            )

        return click.prompt(spec.message, default=spec.default, type=NonBlank())
