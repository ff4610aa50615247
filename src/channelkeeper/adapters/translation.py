"""Helpers shared by the provider translators."""

from __future__ import annotations

import re
from typing import Final

_TRAILING_YEAR_RE: Final = re.compile(r"\((\d{4})\)\s*$")


def year_from_title(title: str) -> int | None:
    """Year of a ``Title (2019)`` style string."""

    match = _TRAILING_YEAR_RE.search(title)
    return int(match.group(1)) if match else None
