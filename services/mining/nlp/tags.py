"""Keyword-group tagging (area characteristics, cuisine types)."""

from __future__ import annotations

import re
from typing import Mapping, Sequence


def detect_keyword_groups(
    text: str,
    groups: Mapping[str, Sequence[re.Pattern[str]]],
) -> list[str]:
    """
    Return the tags whose keyword patterns appear in text.

    Tags come back in the group mapping's order so callers get a
    deterministic union across posts.
    """
    if not text:
        return []
    return [
        tag for tag, patterns in groups.items()
        if any(p.search(text) for p in patterns)
    ]
