"""
Display helpers over SentimentSummary: merging, wording, tips and the
lodging "is this recommended" status.
"""

from __future__ import annotations

from typing import Iterable, Optional

from services.mining.models.recommendation import LodgingStatus, SentimentSummary
from services.mining.nlp.sentiment import sentiment_label

MAX_TOP_COMMENTS = 5
TOP_TIP_MAX_LEN = 200
LODGING_RECOMMENDED_THRESHOLD = 0.2

# (minimum score, description), checked top-down
SENTIMENT_DESCRIPTIONS: tuple[tuple[float, str], ...] = (
    (0.5, "Highly Recommended"),
    (0.2, "Positive"),
    (-0.2, "Mixed Reviews"),
    (-0.5, "Some Concerns"),
)


def aggregate_sentiment(summaries: Iterable[Optional[SentimentSummary]]) -> SentimentSummary:
    """
    Merge several summaries into one.

    Score is the mention-weighted mean; comments are pooled and the top
    five by score kept; subreddits are unioned in first-seen order.
    """
    valid = [s for s in summaries if s is not None]
    if not valid:
        return SentimentSummary()

    total_mentions = sum(s.mention_count for s in valid)
    if total_mentions > 0:
        score = sum(s.score * s.mention_count for s in valid) / total_mentions
        score = max(-1.0, min(1.0, score))
    else:
        score = 0.0

    comments = [c for s in valid for c in s.top_comments]
    comments.sort(key=lambda c: c.score, reverse=True)

    subreddits: list[str] = []
    for s in valid:
        for sub in s.subreddits:
            if sub not in subreddits:
                subreddits.append(sub)

    return SentimentSummary(
        score=score,
        label=sentiment_label(score),
        mention_count=total_mentions,
        top_comments=comments[:MAX_TOP_COMMENTS],
        subreddits=subreddits,
    )


def describe_sentiment(summary: Optional[SentimentSummary]) -> str:
    if summary is None or summary.mention_count == 0:
        return "No reviews"
    for minimum, description in SENTIMENT_DESCRIPTIONS:
        if summary.score >= minimum:
            return description
    return "Not Recommended"


def format_mention_count(count: int) -> str:
    """'No mentions', '1 mention', '7 mentions', '40+ mentions', '300+ mentions'."""
    if count <= 0:
        return "No mentions"
    if count == 1:
        return "1 mention"
    if count < 10:
        return f"{count} mentions"
    if count < 100:
        return f"{count // 10 * 10}+ mentions"
    return f"{count // 100 * 100}+ mentions"


def truncate_comment(text: str, max_length: int = 150) -> str:
    if len(text) <= max_length:
        return text
    return text[:max_length].strip() + "..."


def top_tip(summary: Optional[SentimentSummary]) -> Optional[str]:
    """Highest-scored comment, truncated, or None."""
    if summary is None or not summary.top_comments:
        return None
    return truncate_comment(summary.top_comments[0].text, TOP_TIP_MAX_LEN)


def lodging_status(summary: SentimentSummary) -> LodgingStatus:
    """A property is recommended when it has mentions and a clearly positive score."""
    return LodgingStatus(
        is_recommended=summary.mention_count > 0 and summary.score > LODGING_RECOMMENDED_THRESHOLD,
        mention_count=summary.mention_count,
        sentiment_score=summary.score,
        top_quote=summary.top_comments[0].text if summary.top_comments else None,
    )
