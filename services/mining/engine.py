"""
Synchronous mining engine: post batch -> ranked recommendations.

One forward pass per call, in batch order:

  extract -> (area, eatery) skip the destination and area -> relevance gate -> aggregate

followed by one terminal rank/filter/truncate step. Nothing is shared
between calls, so concurrent callers need no locking.
"""

from __future__ import annotations

import logging
from typing import Optional

from services.mining.extraction.extractor import get_extractor
from services.mining.extraction.patterns import NameSpan
from services.mining.models.category import Category, parse_category
from services.mining.models.recommendation import Recommendation, SentimentSummary
from services.mining.models.social import Comment, Post, PostContext, as_batch
from services.mining.nlp.sentiment import score_sentiment, sentiment_label
from services.mining.pipeline.aggregation import CandidateMention, EvidenceAggregator, normalize_key
from services.mining.pipeline.relevance import DestinationKeywords, is_relevant_to_any
from services.mining.ranking.composite import rank

logger = logging.getLogger(__name__)

MAX_TOP_COMMENTS = 5
SNIPPET_MAX_LEN = 200

__all__ = ["mine_recommendations", "summarize_sentiment", "score_sentiment", "unique_posts"]


def unique_posts(posts: list[Post]) -> list[Post]:
    """Drop posts whose dedup_key was already seen, keeping the first."""
    seen: set[str] = set()
    result = []
    for post in posts:
        key = post.dedup_key
        if key in seen:
            continue
        seen.add(key)
        result.append(post)
    return result


def mine_recommendations(
    destination: str,
    category: Category | str,
    context: PostContext,
    *,
    area: Optional[str] = None,
    limit: Optional[int] = None,
) -> list[Recommendation]:
    """
    Mine ranked recommendations of one category from a post batch.

    Args:
        destination: destination name, e.g. "Cancun" or "Dominican Republic".
        category: "lodging", "area" or "eatery" (or a Category).
        context: a PostBatch or a plain sequence of posts.
        area: eatery only; a sub-area the mentions may be tied to instead
            of the destination.
        limit: optional cap below the category default.

    Returns:
        Category-shaped recommendations, best first. Empty when nothing
        survives; that is a normal outcome.

    Raises:
        UnsupportedCategoryError: unknown category.
        ValueError: empty destination or negative limit.
    """
    if not isinstance(destination, str) or not destination.strip():
        raise ValueError("destination must be a non-empty string")
    category = parse_category(category)
    if limit is not None and limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")

    batch = as_batch(context)
    posts = unique_posts(batch.posts)

    keywords = DestinationKeywords.from_destination(destination)
    keyword_sets = [keywords]
    # The place names themselves are never recommended as areas or eateries
    excluded_keys = {normalize_key(destination)}
    if category is Category.EATERY and area and area.strip():
        keyword_sets.append(DestinationKeywords.from_destination(area))
        excluded_keys.add(normalize_key(area))

    exclude = None
    if category is not Category.LODGING:

        def exclude(span: NameSpan) -> bool:
            return normalize_key(span.name) in excluded_keys

    extractor = get_extractor(category)
    aggregator = EvidenceAggregator(category)
    gated_out = 0

    for post in posts:
        for span in extractor.extract(post.full_text, exclude=exclude):
            if not is_relevant_to_any(span.raw, post, keyword_sets):
                gated_out += 1
                logger.debug("Gate rejected %r in post %s", span.raw, post.dedup_key)
                continue
            aggregator.merge(CandidateMention(span=span, post=post))

    results = rank(aggregator.records, category, limit=limit)

    logger.info(
        "Mined %d %s recommendations for %s from %d posts (%d candidates, %d gated out%s)",
        len(results), category.value, destination, len(posts),
        len(aggregator), gated_out,
        ", partial batch" if batch.is_partial else "",
    )
    return results


def _mentions(post: Post, keywords: DestinationKeywords) -> bool:
    return keywords.mentioned_in(post.full_text)


def _snippet(post: Post) -> Comment:
    text = post.body.strip() or post.title
    return Comment(
        text=text[:SNIPPET_MAX_LEN],
        subreddit=post.subreddit,
        score=post.score,
    )


def summarize_sentiment(name: str, context: PostContext) -> SentimentSummary:
    """
    Sentiment for an entity or destination across a post batch.

    Posts that mention the name (full name, or for multi-word names the
    primary keyword) are scored together as one text. Top comments come
    from the batch's comments, or from post snippets when it carries none.
    """
    batch = as_batch(context)
    if not name or not name.strip():
        return SentimentSummary(subreddits=list(batch.subreddits))

    keywords = DestinationKeywords.from_destination(name)
    relevant = [p for p in unique_posts(batch.posts) if _mentions(p, keywords)]
    if not relevant:
        return SentimentSummary(subreddits=list(batch.subreddits))

    score = score_sentiment(" ".join(p.full_text for p in relevant))

    comments = list(batch.comments) if batch.comments else [
        _snippet(p) for p in relevant if p.body.strip() or p.title
    ]
    comments = [c for c in comments if c.text]
    comments.sort(key=lambda c: c.score, reverse=True)

    subreddits: list[str] = []
    for post in relevant:
        if post.subreddit and post.subreddit not in subreddits:
            subreddits.append(post.subreddit)

    return SentimentSummary(
        score=score,
        label=sentiment_label(score),
        mention_count=len(relevant),
        top_comments=comments[:MAX_TOP_COMMENTS],
        subreddits=subreddits,
    )
