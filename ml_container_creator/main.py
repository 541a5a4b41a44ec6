"""
ML Container Creator — CLI entrypoint.

Usage:
    mlcc
    mlcc --verbose
    mlcc --config ./mlcc.yml
    python -m ml_container_creator.main

There is no flag that skips the questions: every run walks the four
prompt phases, validates the answers, then writes the project.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from ml_container_creator import __version__
from ml_container_creator.core.observability.logging_config import resolve_level, setup_logging


@click.command()
@click.version_option(version=__version__, prog_name="mlcc")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False, dir_okay=False),
    default=None,
    help="Path to mlcc.yml (default: auto-detect).",
)
def cli(verbose: bool, quiet: bool, debug: bool, config_path: str | None) -> None:
    """ML Container Creator — scaffold a SageMaker BYOC model-serving project."""
    from ml_container_creator.core.config.loader import ConfigError, load_config
    from ml_container_creator.core.errors import GeneratorError
    from ml_container_creator.core.services.materializer import TemplateCorpus, materialize
    from ml_container_creator.core.services.rendering import JinjaRenderer
    from ml_container_creator.core.services.resolver import check_rules
    from ml_container_creator.core.services.sequencer import PromptSequencer
    from ml_container_creator.core.services.validation import validate_answers
    from ml_container_creator.ui.cli.prompter import ClickPrompter

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(level=resolve_level(debug=debug, verbose=verbose, quiet=quiet))

    # ── Startup checks ──────────────────────────────────────────
    try:
        check_rules()
        config = load_config(Path(config_path) if config_path else None)
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)
    except GeneratorError as e:
        click.secho(f"❌ Internal configuration error: {e}", fg="red")
        sys.exit(1)

    # ── Prompt → validate → materialize ─────────────────────────
    corpus = TemplateCorpus(Path(config.templates.path)) if config.templates.path else None
    try:
        record = PromptSequencer(ClickPrompter(), defaults=config.defaults).run()
        validate_answers(record)
        result = materialize(
            record,
            corpus=corpus,
            renderer=JinjaRenderer(strict=config.templates.strict),
            on_existing=config.destination.on_existing,
        )
    except GeneratorError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)
    except OSError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    # ── Report ──────────────────────────────────────────────────
    if quiet:
        click.echo(str(result.destination))
        return

    click.echo()
    click.secho(
        f"✅ Generated {len(result.files)} files in {result.destination}",
        fg="green", bold=True,
    )
    for gen in result.files:
        click.echo(f"   {gen.path}")

    _print_deploy_steps(record.framework)


def _print_deploy_steps(framework: str) -> None:
    """Manual deployment instructions for the generated scripts."""
    from ml_container_creator.core.services.resolver import LLM_FRAMEWORK

    click.echo()
    click.secho("🚀 Manual Deployment", fg="cyan", bold=True)
    click.echo("☁️  The following steps assume authentication to an AWS account.")
    click.echo("💰 The following commands will incur charges to your AWS account.")
    if framework == LLM_FRAMEWORK:
        click.echo("\t ./deploy/upload_to_s3.sh -- Uploads model artifacts to S3 (optional).")
    click.echo("\t ./deploy/build_and_push.sh -- Builds the image and pushes to ECR.")
    click.echo("\t ./deploy/deploy.sh -- Deploys the image to a SageMaker AI Managed Inference Endpoint.")
    click.echo("\t\t deploy.sh needs a valid IAM Role ARN as a parameter.")


if __name__ == "__main__":
    cli()
