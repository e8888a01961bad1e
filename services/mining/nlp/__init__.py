"""
Lexicon-based text utilities for the mining engine.

Pure text-in / numbers-or-tags-out. No network, no model files.
"""

from services.mining.nlp.sentiment import (
    is_negated,
    score_sentiment,
    sentiment_label,
)
from services.mining.nlp.tags import detect_keyword_groups

__all__ = [
    "is_negated",
    "score_sentiment",
    "sentiment_label",
    "detect_keyword_groups",
]
