from __future__ import annotations

import re

_whitespace_re = re.compile(r"\s+")


def normalize_label_token(value: str) -> str:
    """Normalize a selection label for case/whitespace-insensitive matching."""

    v = value.strip().lower()
    v = _whitespace_re.sub(" ", v)
    return v
