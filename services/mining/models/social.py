"""Discussion-platform content handed to the mining engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, field_validator

COMMENT_TEXT_MAX_LEN = 500


class Post(BaseModel):
    """A single post as returned by the retrieval layer."""

    id: str = ""
    title: str = ""
    body: str = ""
    subreddit: str = ""
    score: int = 0
    num_comments: int = 0
    created_at: float = 0.0  # epoch seconds
    permalink: str = ""

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("id", "title", "body", "subreddit", "permalink", mode="before")
    @classmethod
    def coerce_str(cls, v):
        return "" if v is None else str(v)

    @field_validator("score", "num_comments", mode="before")
    @classmethod
    def coerce_int(cls, v):
        return int(v) if v is not None else 0

    @field_validator("created_at", mode="before")
    @classmethod
    def coerce_float(cls, v):
        return float(v) if v is not None else 0.0

    @property
    def full_text(self) -> str:
        return f"{self.title} {self.body}"

    @property
    def dedup_key(self) -> str:
        if self.id:
            return self.id
        if self.permalink:
            return self.permalink
        return f"{self.subreddit}:{self.created_at}:{self.title}"


class Comment(BaseModel):
    """A top-level comment on a post."""

    text: str
    subreddit: str = ""
    score: int = 0
    date: str = ""  # ISO-8601

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("text", mode="before")
    @classmethod
    def truncate_text(cls, v):
        if v is None:
            return ""
        return str(v)[:COMMENT_TEXT_MAX_LEN]

    @field_validator("score", mode="before")
    @classmethod
    def coerce_int(cls, v):
        return int(v) if v is not None else 0


@dataclass
class PostBatch:
    """
    Posts (and optionally comments) collected for one engine call.

    sources_requested / sources_failed let callers tell a batch that is
    complete from one that scanned fewer sources than planned. A partial
    batch is still a valid input; it only lowers recall.
    """
    posts: list[Post] = field(default_factory=list)
    comments: list[Comment] = field(default_factory=list)
    subreddits: list[str] = field(default_factory=list)  # subreddits searched
    sources_requested: list[str] = field(default_factory=list)
    sources_failed: list[str] = field(default_factory=list)

    @property
    def sources_scanned(self) -> int:
        return len(self.sources_requested) - len(self.sources_failed)

    @property
    def is_partial(self) -> bool:
        return bool(self.sources_failed)


PostContext = Union[PostBatch, Sequence[Post]]


def as_batch(context: Optional[PostContext]) -> PostBatch:
    """Normalise a bare post sequence (or None) into a PostBatch."""
    if context is None:
        return PostBatch()
    if isinstance(context, PostBatch):
        return context
    return PostBatch(posts=list(context))
