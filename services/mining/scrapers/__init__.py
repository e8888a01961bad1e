"""
Retrieval layer: Reddit client, request pacing and search plans.
"""

from .base import RequestPacer, retry_with_backoff, validate_subreddit
from .reddit import (
    CommentFetcher,
    PostFetcher,
    RedditClient,
    RedditFetchError,
    parse_comment_listing,
    parse_search_listing,
)
from .subreddits import (
    SearchPlan,
    airline_plan,
    destination_plan,
    lodging_plan,
    recommendation_plan,
    subreddits_for_budget_tier,
)

__all__ = [
    "RequestPacer",
    "retry_with_backoff",
    "validate_subreddit",
    "PostFetcher",
    "CommentFetcher",
    "RedditClient",
    "RedditFetchError",
    "parse_search_listing",
    "parse_comment_listing",
    "SearchPlan",
    "recommendation_plan",
    "destination_plan",
    "lodging_plan",
    "airline_plan",
    "subreddits_for_budget_tier",
]
