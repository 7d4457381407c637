"""Bounded reads of artifact files for classification."""

from __future__ import annotations

import os

# Enough for an HTML <head>, a JSON document's top-level keys or an XML root.
CONTENT_SAMPLE_SIZE = 50_000


def read_file_sample(path: str | os.PathLike, size: int = CONTENT_SAMPLE_SIZE) -> str:
    """Read at most ``size`` bytes from the start of ``path`` as text.

    Invalid UTF-8 is replaced rather than rejected, since the cut-off can
    land inside a multi-byte character. Raises ``OSError`` when the file
    cannot be opened or read.
    """
    with open(path, "rb") as fh:
        data = fh.read(size)
    return data.decode("utf-8", errors="replace")
