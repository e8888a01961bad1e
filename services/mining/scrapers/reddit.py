"""
Reddit public JSON API client.

Implements the two retrieval protocols the mining service consumes:

  PostFetcher.search(query, subreddits, limit)           -> list[Post]
  CommentFetcher.fetch_comments(subreddit, post_id, n)   -> list[Comment]

Endpoints:
  GET /r/{sub}/search.json?q=...&sort=relevance&limit=N&restrict_sr=true
  GET /r/{sub}/comments/{id}.json?limit=N&depth=1

Rate-limited statuses (429) and server errors are retried with exponential
backoff; once retries run out RedditFetchError is raised so the caller can
skip that source. Other 4xx statuses and malformed payloads are logged and
treated as zero results.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Any, Optional, Protocol, Sequence

import httpx
from pydantic import ValidationError

from services.mining.config import Settings, settings as default_settings
from services.mining.models.social import Comment, Post
from services.mining.scrapers.base import RequestPacer, retry_with_backoff, validate_subreddit
from services.mining.scrapers.subreddits import MAX_SUBREDDITS_PER_SEARCH

logger = logging.getLogger(__name__)

POST_ID_RE = re.compile(r"^[A-Za-z0-9]+$")
CONNECT_TIMEOUT_S = 5.0


class PostFetcher(Protocol):
    async def search(self, query: str, subreddits: Sequence[str], limit: int) -> list[Post]: ...


class CommentFetcher(Protocol):
    async def fetch_comments(self, subreddit: str, post_id: str, limit: int) -> list[Comment]: ...


class RedditFetchError(Exception):
    """A Reddit request failed after all retries (transport error, 429 or 5xx)."""


class RetryableStatusError(Exception):
    """Response status worth retrying (429, 5xx)."""

    def __init__(self, status_code: int, url: str):
        super().__init__(f"HTTP {status_code} from {url}")
        self.status_code = status_code


def _is_retryable_status(status_code: int) -> bool:
    return status_code == 429 or status_code >= 500


def parse_search_listing(payload: Any, source: str = "") -> list[Post]:
    """Posts from a search listing; malformed shapes yield []."""
    if not isinstance(payload, dict):
        logger.warning("Unexpected search payload type %s for %s", type(payload).__name__, source)
        return []
    data = payload.get("data")
    children = data.get("children") if isinstance(data, dict) else None
    if not isinstance(children, list):
        logger.warning("Search payload without children for %s", source)
        return []

    posts: list[Post] = []
    for child in children:
        item = child.get("data") if isinstance(child, dict) else None
        if not isinstance(item, dict):
            continue
        try:
            posts.append(Post(
                id=item.get("id"),
                title=item.get("title"),
                body=item.get("selftext"),
                subreddit=item.get("subreddit"),
                score=item.get("score"),
                num_comments=item.get("num_comments"),
                created_at=item.get("created_utc"),
                permalink=item.get("permalink"),
            ))
        except (ValidationError, TypeError, ValueError) as exc:
            logger.debug("Skipping malformed post in %s: %s", source, exc)
    return posts


def parse_comment_listing(payload: Any, subreddit: str) -> list[Comment]:
    """Top-level comments from a comments payload ([post listing, comment listing])."""
    if not isinstance(payload, list) or len(payload) < 2 or not isinstance(payload[1], dict):
        logger.warning("Unexpected comments payload for r/%s", subreddit)
        return []
    data = payload[1].get("data")
    children = data.get("children") if isinstance(data, dict) else None
    if not isinstance(children, list):
        logger.warning("Comments payload without children for r/%s", subreddit)
        return []

    comments: list[Comment] = []
    for child in children:
        if not isinstance(child, dict) or child.get("kind") != "t1":
            continue
        item = child.get("data")
        body = item.get("body") if isinstance(item, dict) else None
        if not body:
            continue
        try:
            created = float(item.get("created_utc") or 0)
            comments.append(Comment(
                text=body,
                subreddit=subreddit,
                score=item.get("score"),
                date=datetime.fromtimestamp(created, tz=timezone.utc).isoformat(),
            ))
        except (ValidationError, TypeError, ValueError, OverflowError, OSError) as exc:
            logger.debug("Skipping malformed comment in r/%s: %s", subreddit, exc)
    return comments


class RedditClient:
    """
    Async Reddit client over httpx.

    Use as an async context manager, or pass in an existing AsyncClient
    (e.g. one built on httpx.MockTransport in tests) which the caller owns.
    Without a pacer requests go out unpaced; MiningService paces its tasks
    itself.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        *,
        config: Optional[Settings] = None,
        pacer: Optional[RequestPacer] = None,
    ) -> None:
        self.config = config or default_settings
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=self.config.reddit_base_url,
            headers={"User-Agent": self.config.reddit_user_agent},
            timeout=httpx.Timeout(self.config.reddit_timeout_s, connect=CONNECT_TIMEOUT_S),
            follow_redirects=True,
        )
        self.pacer = pacer
        self._get_with_retry = retry_with_backoff(
            max_attempts=self.config.reddit_max_retries + 1,
            base_delay=self.config.reddit_retry_base_delay_s,
            retry_on=(RetryableStatusError, httpx.TransportError),
        )(self._get_json_once)

    async def __aenter__(self) -> "RedditClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _get_json_once(self, path: str, params: dict[str, Any]) -> Any:
        if self.pacer is not None:
            await self.pacer.wait()
        resp = await self._client.get(path, params=params)
        if _is_retryable_status(resp.status_code):
            raise RetryableStatusError(resp.status_code, path)
        if resp.status_code != 200:
            logger.warning("Unexpected HTTP %d for %s, treating as empty", resp.status_code, path)
            return None
        try:
            return resp.json()
        except ValueError:
            logger.warning("Invalid JSON from %s", path)
            return None

    async def get_json(self, path: str, params: dict[str, Any]) -> Any:
        """GET a JSON document with retries. Raises RedditFetchError when retries run out."""
        try:
            return await self._get_with_retry(path, params)
        except (RetryableStatusError, httpx.TransportError) as exc:
            raise RedditFetchError(f"Failed to fetch {path}: {exc}") from exc

    async def search(self, query: str, subreddits: Sequence[str], limit: int) -> list[Post]:
        """
        Search up to three subreddits for query; posts sorted by score desc.

        Raises:
            RedditFetchError: a subreddit could not be fetched after retries.
        """
        if not query.strip() or limit <= 0:
            return []

        posts: list[Post] = []
        for sub in list(subreddits)[:MAX_SUBREDDITS_PER_SEARCH]:
            if not validate_subreddit(sub):
                logger.warning("Invalid subreddit name: %r, skipping", sub)
                continue
            payload = await self.get_json(
                f"/r/{sub}/search.json",
                {"q": query, "sort": "relevance", "limit": limit, "restrict_sr": "true"},
            )
            if payload is None:
                continue
            posts.extend(parse_search_listing(payload, f"r/{sub}"))

        posts.sort(key=lambda p: p.score, reverse=True)
        return posts

    async def fetch_comments(self, subreddit: str, post_id: str, limit: int) -> list[Comment]:
        """
        Top-level comments of one post, sorted by score desc.

        Raises:
            RedditFetchError: the post could not be fetched after retries.
        """
        if limit <= 0:
            return []
        if not validate_subreddit(subreddit) or not POST_ID_RE.match(post_id or ""):
            logger.warning("Invalid comment source r/%s post %r, skipping", subreddit, post_id)
            return []

        payload = await self.get_json(
            f"/r/{subreddit}/comments/{post_id}.json",
            {"limit": limit, "depth": 1},
        )
        if payload is None:
            return []
        comments = parse_comment_listing(payload, subreddit)
        comments.sort(key=lambda c: c.score, reverse=True)
        return comments[:limit]
