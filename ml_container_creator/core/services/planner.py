"""
File selection planner — which template files are dropped from output.

``EXCLUSION_RULES`` maps answer predicates to gitignore-style path
patterns.  Rules are purely additive: the exclusion set is the union of
every rule that fires, evaluated eagerly into a concrete tuple before any
file-system work.  A file matched by any pattern is excluded.
"""

from __future__ import annotations

import logging
from typing import Iterable

import pathspec

from ml_container_creator.core.models.answers import AnswerRecord
from ml_container_creator.core.models.rules import ExclusionRule, unless, when
from ml_container_creator.core.services.resolver import LLM_FRAMEWORK

logger = logging.getLogger(__name__)


# ── Rule table ──────────────────────────────────────────────────

EXCLUSION_RULES: tuple[ExclusionRule, ...] = (
    ExclusionRule(
        ("**/README.md",),
        reason="template-system documentation",
    ),
    ExclusionRule(
        (
            "**/code/model_handler.py",
            "**/code/start_server.py",
            "**/code/serve.py",
            "**/nginx.conf*",
            "**/requirements.txt*",
            "**/test/test_local_image.sh",
            "**/test/test_model_handler.py",
        ),
        when=when("framework", LLM_FRAMEWORK),
        reason="LLM images serve with a built-in engine",
    ),
    ExclusionRule(
        ("**/code/serve", "**/deploy/upload_to_s3.sh"),
        when=unless("framework", LLM_FRAMEWORK),
        reason="LLM entrypoint and model upload",
    ),
    ExclusionRule(
        ("**/code/flask/**",),
        when=unless("modelServer", "flask"),
        reason="flask-only server configuration",
    ),
    ExclusionRule(
        ("**/sample_model/**",),
        when=when("includeSampleModel", False),
        reason="sample model not selected",
    ),
    ExclusionRule(
        ("**/test/**",),
        when=when("includeTesting", False),
        reason="test suite not selected",
    ),
    # ── Test categories ─────────────────────────────────────────
    ExclusionRule(
        ("**/test/test_model_handler.py",),
        when=unless("testTypes", "local-model-cli"),
        reason="local-model-cli tests not selected",
    ),
    ExclusionRule(
        ("**/test/test_local_image.sh",),
        when=unless("testTypes", "local-model-server"),
        reason="local-model-server tests not selected",
    ),
    ExclusionRule(
        ("**/test/test_endpoint.py",),
        when=unless("testTypes", "hosted-model-endpoint"),
        reason="hosted-model-endpoint tests not selected",
    ),
)


# ── Planning ────────────────────────────────────────────────────


def explain_exclusions(record: AnswerRecord) -> list[tuple[str, str]]:
    """Return ``(pattern, reason)`` for every pattern that fires, first reason wins."""
    env = record.to_environment()
    seen: dict[str, str] = {}
    for rule in EXCLUSION_RULES:
        if not rule.applies(env):
            continue
        for pattern in rule.patterns:
            seen.setdefault(pattern, rule.reason)
    return list(seen.items())


def plan_exclusions(record: AnswerRecord) -> tuple[str, ...]:
    """Union of the exclusion patterns that fire for ``record``, in rule order."""
    explained = explain_exclusions(record)
    for pattern, reason in explained:
        logger.debug("Excluding %s: %s", pattern, reason)
    logger.debug("Planned %d exclusion patterns", len(explained))
    return tuple(p for p, _ in explained)


def compile_patterns(patterns: Iterable[str]) -> pathspec.PathSpec:
    return pathspec.GitIgnoreSpec.from_lines(patterns)


def is_excluded(path: str, patterns: Iterable[str]) -> bool:
    """Whether relative POSIX ``path`` matches any of ``patterns``."""
    return compile_patterns(patterns).match_file(path)


def select_files(paths: Iterable[str], patterns: Iterable[str]) -> list[str]:
    """Relative paths that survive every pattern, sorted."""
    spec = compile_patterns(patterns)
    kept = sorted(p for p in paths if not spec.match_file(p))
    return kept
