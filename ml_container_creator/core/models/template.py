"""
Generated file model — one materialized file of the output tree.
"""

from __future__ import annotations

from pydantic import BaseModel


class GeneratedFile(BaseModel):
    """A file produced by the materialize phase.

    Attributes:
        path:       Relative POSIX path from the destination root.
        content:    Fully rendered file content.
        executable: Whether the file keeps the template's exec bit.
        reason:     Which template produced this file.
    """

    path: str
    content: str
    executable: bool = False
    reason: str = ""
