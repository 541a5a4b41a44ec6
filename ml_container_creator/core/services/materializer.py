"""
Template materializer — render the selected template files and write
them under the destination root.

Two strictly separated steps:

    render_project()  plan + render every kept file in memory
    write_project()   check the destination, build the tree beside it, swap it in

A rendering failure therefore never leaves a half-written tree.  Each
file is rendered independently and the corpus is walked in sorted order,
so the same record and corpus always produce the same output.
"""

from __future__ import annotations

import logging
import shutil
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from ml_container_creator.core.errors import DestinationExistsError
from ml_container_creator.core.models.answers import AnswerRecord
from ml_container_creator.core.models.template import GeneratedFile
from ml_container_creator.core.services.planner import (
    compile_patterns,
    plan_exclusions,
    select_files,
)
from ml_container_creator.core.services.rendering import JinjaRenderer, TemplateRenderer

logger = logging.getLogger(__name__)

# ── Template corpus ─────────────────────────────────────────────

TEMPLATES_DIR = Path(__file__).resolve().parents[2] / "templates"

# Files written with the executable bit set
EXECUTABLE_PATTERNS = ("*.sh", "code/serve")

_IGNORED_PARTS = {"__pycache__", ".DS_Store"}

OnExisting = Literal["abort", "overwrite"]


class TemplateCorpus:
    """The static set of template files under ``root``."""

    def __init__(self, root: Path | None = None) -> None:
        self.root = (root or TEMPLATES_DIR).resolve()
        self._exec = compile_patterns(EXECUTABLE_PATTERNS)

    def paths(self) -> list[str]:
        """Relative POSIX paths of every template file, sorted."""
        if not self.root.is_dir():
            raise FileNotFoundError(f"Template directory not found: {self.root}")
        found = []
        for path in self.root.rglob("*"):
            if not path.is_file():
                continue
            rel = path.relative_to(self.root)
            if _IGNORED_PARTS.intersection(rel.parts) or path.suffix == ".pyc":
                continue
            found.append(rel.as_posix())
        return sorted(found)

    def read(self, rel_path: str) -> str:
        return (self.root / rel_path).read_text(encoding="utf-8")

    def is_executable(self, rel_path: str) -> bool:
        return self._exec.match_file(rel_path)


# ── Result ──────────────────────────────────────────────────────


@dataclass
class MaterializeResult:
    """Outcome of one materialization run."""

    destination: Path
    files: list[GeneratedFile] = field(default_factory=list)
    excluded_patterns: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "destination": str(self.destination),
            "files": [f.path for f in self.files],
            "excluded_patterns": list(self.excluded_patterns),
        }


# ── Render ──────────────────────────────────────────────────────


def render_project(
    record: AnswerRecord,
    corpus: TemplateCorpus | None = None,
    renderer: TemplateRenderer | None = None,
) -> list[GeneratedFile]:
    """Render every template file the plan keeps, without touching disk.

    Raises:
        UnresolvedReference: A template names an undefined variable (strict).
    """
    corpus = corpus or TemplateCorpus()
    renderer = renderer or JinjaRenderer()
    environment = record.to_environment()

    kept = select_files(corpus.paths(), plan_exclusions(record))
    files = []
    for rel_path in kept:
        content = renderer.render(corpus.read(rel_path), environment, name=rel_path)
        files.append(
            GeneratedFile(
                path=rel_path,
                content=content,
                executable=corpus.is_executable(rel_path),
                reason=f"Rendered from template {rel_path}",
            )
        )
    logger.info("Rendered %d files (%d templates in corpus)", len(files), len(corpus.paths()))
    return files


# ── Write ───────────────────────────────────────────────────────


def check_destination(destination: Path, on_existing: OnExisting = "abort") -> None:
    """Refuse a populated destination unless ``on_existing`` is ``overwrite``.

    Raises:
        DestinationExistsError: Destination is a file, or a non-empty
            directory under ``abort``.
    """
    if not destination.exists():
        return
    if not destination.is_dir():
        raise DestinationExistsError(str(destination))
    if on_existing == "abort" and any(destination.iterdir()):
        raise DestinationExistsError(str(destination))


def write_project(
    files: list[GeneratedFile],
    destination: Path,
    *,
    on_existing: OnExisting = "abort",
) -> list[Path]:
    """Write ``files`` as the complete contents of ``destination``.

    The tree is built in a staging directory next to ``destination`` and
    moved into place once every file is written, so under ``overwrite``
    nothing from the previous tree survives.  The destination policy is
    checked before the first write.  I/O errors propagate unchanged.
    """
    destination = destination.resolve()
    check_destination(destination, on_existing)

    destination.parent.mkdir(parents=True, exist_ok=True)
    staging = Path(tempfile.mkdtemp(prefix=f".{destination.name}-", dir=destination.parent))
    try:
        staging.chmod(0o755)
        for gen in files:
            target = staging / gen.path
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(gen.content, encoding="utf-8", newline="")
            if gen.executable:
                target.chmod(target.stat().st_mode | 0o111)
        _swap_in(staging, destination)
    finally:
        if staging.exists():
            shutil.rmtree(staging, ignore_errors=True)

    written = [destination / gen.path for gen in files]
    for target in written:
        logger.info("Wrote generated file: %s", target)
    return written


def _swap_in(staging: Path, destination: Path) -> None:
    """Replace ``destination`` with ``staging``; the old tree is removed last."""
    if not destination.exists():
        staging.rename(destination)
        return
    retired = staging.with_name(f"{staging.name}-old")
    destination.rename(retired)
    try:
        staging.rename(destination)
    except OSError:
        retired.rename(destination)
        raise
    shutil.rmtree(retired)
    logger.info("Replaced previous contents of %s", destination)


def materialize(
    record: AnswerRecord,
    *,
    corpus: TemplateCorpus | None = None,
    renderer: TemplateRenderer | None = None,
    on_existing: OnExisting = "abort",
) -> MaterializeResult:
    """Plan, render and write the project described by ``record``."""
    destination = Path(record.destination_dir).expanduser()
    check_destination(destination, on_existing)

    files = render_project(record, corpus, renderer)
    write_project(files, destination, on_existing=on_existing)

    return MaterializeResult(
        destination=destination,
        files=files,
        excluded_patterns=plan_exclusions(record),
    )
