"""
Answer validation — reject legal-but-unimplemented choices before
anything is planned or written.

Every option with a finite supported set is checked against the catalog's
*supported* subset, not its full value set.  Not-applicable fields
(``None``) pass.
"""

from __future__ import annotations

import logging

from ml_container_creator.core.errors import UnsupportedOption
from ml_container_creator.core.models.answers import AnswerRecord
from ml_container_creator.core.services.catalog import get_option, option_names

logger = logging.getLogger(__name__)


def find_unsupported(record: AnswerRecord) -> list[UnsupportedOption]:
    """Return one ``UnsupportedOption`` per offending field value, in catalog order."""
    problems: list[UnsupportedOption] = []

    for name in option_names():
        opt = get_option(name)
        if not opt.is_finite:
            continue
        value = record.get(name)
        if value is None:
            continue
        members = value if opt.is_multi else (value,)
        for member in members:
            if member not in opt.supported:
                problems.append(UnsupportedOption(name, member))

    return problems


def validate_answers(record: AnswerRecord) -> None:
    """Raise the first ``UnsupportedOption`` found in ``record``.

    Raises:
        UnsupportedOption: A field holds a value outside the supported subset.
    """
    problems = find_unsupported(record)
    for problem in problems:
        logger.error("%s", problem)
    if problems:
        raise problems[0]
    logger.debug("Answer record passed validation")
