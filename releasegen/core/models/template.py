"""
Written-file record — what ``write_document`` reports back to callers.
"""

from __future__ import annotations

from pydantic import BaseModel


class GeneratedFile(BaseModel):
    """A release config written to disk.

    Attributes:
        path:      Where the YAML was written.
        content:   Exact text written (LF line endings).
        overwrite: True when a file already existed at ``path`` and was
                   replaced; the CLI reports "Updated" vs "Created".
        reason:    Short summary, e.g. how many distributions it covers.
    """

    path: str
    content: str
    overwrite: bool = False
    reason: str = ""
