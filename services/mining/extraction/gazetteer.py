"""
Closed-list name matcher with canonical display forms.

A Gazetteer compiles its entries into a single alternation so that
overlapping entries resolve leftmost-longest by entry order: list
"Park Hyatt" before "Hyatt" and the shorter one never fires inside
the longer one.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence


@dataclass(frozen=True)
class GazetteerEntry:
    pattern: str                     # regex fragment, no capture groups
    canonical: Optional[str] = None  # display name; None keeps the surface form


class Gazetteer:
    """Match known names and map each hit to its canonical form."""

    def __init__(
        self,
        entries: Sequence[GazetteerEntry],
        *,
        suffix: Optional[str] = None,
        ignore_case: bool = False,
    ) -> None:
        """
        Args:
            entries: ordered entries, more specific first.
            suffix: optional regex fragment (no capture groups) allowed to
                follow a hit, e.g. a property-type word; it is kept in the
                canonical name.
            ignore_case: match names case-insensitively.
        """
        if not entries:
            raise ValueError("Gazetteer needs at least one entry")
        self.entries = tuple(entries)
        flags = re.IGNORECASE if ignore_case else 0
        alternation = "|".join(f"(?:{e.pattern})" for e in self.entries)
        tail = rf"(?:[ ](?P<suffix>{suffix}))?" if suffix else ""
        self.pattern = re.compile(rf"\b(?P<name>{alternation}){tail}\b", flags)
        self._entry_patterns = [
            (re.compile(e.pattern, flags), e.canonical) for e in self.entries
        ]

    def canonical(self, surface: str) -> Optional[str]:
        """Canonical name for a matched surface form, or None if unknown."""
        for entry_pattern, canonical in self._entry_patterns:
            if entry_pattern.fullmatch(surface):
                return canonical or " ".join(surface.split())
        return None

    def _resolve(self, match: re.Match[str]) -> Optional[str]:
        canonical = self.canonical(match.group("name"))
        if canonical is None:
            return None
        suffix = match.groupdict().get("suffix")
        if suffix:
            canonical = f"{canonical} {suffix.title()}"
        return canonical

    def finditer(self, text: str) -> Iterator[tuple[re.Match[str], str]]:
        """Yield (match, canonical_name) for every hit in text."""
        for match in self.pattern.finditer(text):
            canonical = self._resolve(match)
            if canonical is not None:
                yield match, canonical

    def canonicalize_prefix(self, surface: str) -> str:
        """
        Rewrite a known name at the start of surface to its canonical form.

        "Ritz-Carlton Resort" -> "Ritz Carlton Resort",
        "Hilton Garden Inn" -> "Hilton Garden Inn". Anything else is
        returned unchanged.
        """
        match = self.pattern.match(surface)
        if match is None:
            return surface
        canonical = self._resolve(match)
        if canonical is None:
            return surface
        rest = surface[match.end():].strip()
        return f"{canonical} {rest}" if rest else canonical
