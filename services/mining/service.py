"""
Async mining service: bounded-parallel retrieval, then the synchronous engine.

Every (query, subreddit) pair of a SearchPlan is one retrieval task. Tasks
run under a semaphore and wait on a shared RequestPacer before each request.
Results are reassembled in task-creation order, so the engine folds the
same batch in the same order however the requests interleave.

A failed source is logged, recorded in PostBatch.sources_failed and skipped;
the engine then runs on the partial batch.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional, Sequence

from services.mining import engine, summaries
from services.mining.config import Settings, settings as default_settings
from services.mining.models.category import Category, parse_category
from services.mining.models.recommendation import LodgingStatus, Recommendation, SentimentSummary
from services.mining.models.social import Comment, Post, PostBatch
from services.mining.scrapers.base import RequestPacer
from services.mining.scrapers.reddit import CommentFetcher, PostFetcher
from services.mining.scrapers.subreddits import (
    SearchPlan,
    airline_plan,
    destination_plan,
    lodging_plan,
    recommendation_plan,
)

logger = logging.getLogger(__name__)

# Destination summaries pull comments from this many top posts
COMMENT_SOURCE_POSTS = 2


def source_label(query: str, subreddit: str) -> str:
    return f"r/{subreddit}?q={query}"


class MiningService:
    """
    Fetch-then-mine entry points for the API layer.

    Args:
        fetcher: post search implementation (RedditClient in production).
        comment_fetcher: comment implementation; defaults to `fetcher` when
            it also fetches comments.
        config: settings; the module-level singleton by default.
        pacer: shared politeness pacer; built from config by default.
    """

    def __init__(
        self,
        fetcher: PostFetcher,
        comment_fetcher: Optional[CommentFetcher] = None,
        *,
        config: Optional[Settings] = None,
        pacer: Optional[RequestPacer] = None,
    ) -> None:
        self.fetcher = fetcher
        if comment_fetcher is None and hasattr(fetcher, "fetch_comments"):
            comment_fetcher = fetcher  # type: ignore[assignment]
        self.comment_fetcher = comment_fetcher
        self.config = config or default_settings
        self.pacer = pacer or RequestPacer(self.config.reddit_request_delay_s)

    # ------------------------------------------------------------------
    # Retrieval
    # ------------------------------------------------------------------

    async def _search_source(
        self,
        semaphore: asyncio.Semaphore,
        query: str,
        subreddit: str,
        limit: int,
    ) -> Optional[list[Post]]:
        """One (query, subreddit) source. None means the source failed."""
        async with semaphore:
            await self.pacer.wait()
            try:
                posts = await self.fetcher.search(query, [subreddit], limit)
            except Exception as exc:
                logger.warning("Source %s failed, skipping: %s", source_label(query, subreddit), exc)
                return None
        return sorted(posts, key=lambda p: p.score, reverse=True)

    async def collect(self, plan: SearchPlan) -> PostBatch:
        """Run every source of a plan and assemble the batch in source order."""
        sources = plan.sources
        batch = PostBatch(
            subreddits=plan.searched_subreddits,
            sources_requested=[source_label(q, s) for q, s in sources],
        )
        if not sources:
            return batch

        semaphore = asyncio.Semaphore(self.config.reddit_max_concurrency)
        results = await asyncio.gather(*(
            self._search_source(semaphore, q, s, plan.limit) for q, s in sources
        ))

        for (query, subreddit), posts in zip(sources, results):
            if posts is None:
                batch.sources_failed.append(source_label(query, subreddit))
                continue
            batch.posts.extend(posts)

        if batch.is_partial:
            logger.info(
                "Partial batch: %d/%d sources scanned, %d posts",
                batch.sources_scanned, len(sources), len(batch.posts),
            )
        return batch

    async def _comments_for_post(
        self,
        semaphore: asyncio.Semaphore,
        post: Post,
        limit: int,
    ) -> list[Comment]:
        async with semaphore:
            await self.pacer.wait()
            try:
                return await self.comment_fetcher.fetch_comments(post.subreddit, post.id, limit)
            except Exception as exc:
                logger.warning("Comments for %s/%s failed, skipping: %s", post.subreddit, post.id, exc)
                return []

    async def collect_comments(self, posts: Sequence[Post], limit: int) -> list[Comment]:
        """Top comments of the given posts, best first. Empty without a comment fetcher."""
        if self.comment_fetcher is None or limit <= 0:
            return []
        targets = [p for p in posts if p.id and p.subreddit]
        if not targets:
            return []
        semaphore = asyncio.Semaphore(self.config.reddit_max_concurrency)
        results = await asyncio.gather(*(
            self._comments_for_post(semaphore, p, limit) for p in targets
        ))
        comments = [c for batch in results for c in batch]
        comments.sort(key=lambda c: c.score, reverse=True)
        return comments

    # ------------------------------------------------------------------
    # Recommendations
    # ------------------------------------------------------------------

    async def mine_recommendations(
        self,
        destination: str,
        category: Category | str,
        *,
        budget_per_person: Optional[float] = None,
        area: Optional[str] = None,
        activities: Sequence[str] = (),
        subreddits: Optional[Sequence[str]] = None,
        limit: Optional[int] = None,
    ) -> list[Recommendation]:
        """
        Search the category's plan for destination and mine recommendations.

        Raises:
            UnsupportedCategoryError: unknown category.
            ValueError: empty destination or negative limit.
        """
        if not isinstance(destination, str) or not destination.strip():
            raise ValueError("destination must be a non-empty string")
        category = parse_category(category)
        if limit is not None and limit < 0:
            raise ValueError(f"limit must be >= 0, got {limit}")

        plan = recommendation_plan(
            category,
            destination,
            budget_per_person=budget_per_person,
            area=area,
            activities=activities,
            subreddits=subreddits,
            limit=self.config.search_limit,
        )
        batch = await self.collect(plan)
        return engine.mine_recommendations(destination, category, batch, area=area, limit=limit)

    # ------------------------------------------------------------------
    # Sentiment summaries
    # ------------------------------------------------------------------

    async def summarize_destination(
        self,
        destination: str,
        budget_per_person: Optional[float] = None,
    ) -> SentimentSummary:
        """Destination sentiment plus top comments from the best-scored posts."""
        plan = destination_plan(destination, budget_per_person, self.config.destination_search_limit)
        batch = await self.collect(plan)
        if batch.posts:
            top_posts = sorted(engine.unique_posts(batch.posts), key=lambda p: p.score, reverse=True)
            top_posts = top_posts[:COMMENT_SOURCE_POSTS]
            batch.comments = await self.collect_comments(top_posts, self.config.comment_limit)
        return engine.summarize_sentiment(destination, batch)

    async def summarize_lodging(self, hotel_name: str, city: str) -> SentimentSummary:
        batch = await self.collect(lodging_plan(hotel_name, city, self.config.search_limit))
        return engine.summarize_sentiment(hotel_name, batch)

    async def summarize_airline(self, airline_name: str) -> SentimentSummary:
        batch = await self.collect(airline_plan(airline_name))
        return engine.summarize_sentiment(airline_name, batch)

    async def lodging_status(self, hotel_name: str, destination: str) -> LodgingStatus:
        """Is this property talked about positively around destination?"""
        summary = await self.summarize_lodging(hotel_name, destination)
        return summaries.lodging_status(summary)
