"""
Lexicon-based polarity scoring with a fixed-window negation heuristic.

score_sentiment() is pure and total: any text (including None and the
empty string) maps to a float in [-1, 1]. No model, no state.
"""

from __future__ import annotations

from typing import Optional

from services.mining.nlp.lexicon import (
    NEGATED_NEGATIVE_WEIGHT,
    NEGATED_POSITIVE_WEIGHT,
    NEGATION_LOOKBACK_CHARS,
    NEGATION_WINDOW_TOKENS,
    NEGATION_WORDS,
    NEGATIVE_LABEL_THRESHOLD,
    NEGATIVE_PATTERNS,
    NEGATIVE_WEIGHT,
    POSITIVE_LABEL_THRESHOLD,
    POSITIVE_PATTERNS,
    POSITIVE_WEIGHT,
)

_TOKEN_STRIP = "\"'.,!?;:()[]{}*_~`"


def _is_negation_token(token: str) -> bool:
    token = token.replace("’", "'").strip(_TOKEN_STRIP)
    return token in NEGATION_WORDS or token.endswith("n't")


def is_negated(
    text: str,
    match_index: int,
    window_size: int = NEGATION_WINDOW_TOKENS,
    lookback_chars: int = NEGATION_LOOKBACK_CHARS,
) -> bool:
    """
    True when a negation marker sits within the last `window_size` tokens
    of the `lookback_chars` characters before `match_index`.

    A token cut in half by the lookback boundary is ignored.
    """
    start = max(0, match_index - lookback_chars)
    before = text[start:match_index].lower()
    tokens = before.split()
    if start > 0 and tokens and not text[start - 1].isspace() and not before[:1].isspace():
        tokens = tokens[1:]
    return any(_is_negation_token(tok) for tok in tokens[-window_size:])


def score_sentiment(text: Optional[str]) -> float:
    """
    Score text polarity in [-1, 1].

    Every lexicon term found (first whole-word occurrence) contributes:
      positive +1, negated positive -1, negative -1, negated negative +0.5.
    The result is the mean contribution, clamped. No matches -> 0.0.
    """
    if not text:
        return 0.0

    total = 0.0
    matches = 0

    for pattern in POSITIVE_PATTERNS:
        match = pattern.search(text)
        if match is None:
            continue
        matches += 1
        total += NEGATED_POSITIVE_WEIGHT if is_negated(text, match.start()) else POSITIVE_WEIGHT

    for pattern in NEGATIVE_PATTERNS:
        match = pattern.search(text)
        if match is None:
            continue
        matches += 1
        total += NEGATED_NEGATIVE_WEIGHT if is_negated(text, match.start()) else NEGATIVE_WEIGHT

    if matches == 0:
        return 0.0
    return max(-1.0, min(1.0, total / matches))


def sentiment_label(score: float) -> str:
    """Map a score to positive / neutral / negative."""
    if score > POSITIVE_LABEL_THRESHOLD:
        return "positive"
    if score < NEGATIVE_LABEL_THRESHOLD:
        return "negative"
    return "neutral"
