"""Post features: listing, search, random sample, per-user and comments."""

from __future__ import annotations

import logging
import random

from api_showcase.api import endpoints
from api_showcase.api.errors import EmptyQueryError
from api_showcase.api.orchestrator import Fetcher
from api_showcase.pipeline.cards import CommentItem, PostCard

logger = logging.getLogger(__name__)

POSTS_LIMIT = 12


async def load_posts(client: Fetcher, limit: int = POSTS_LIMIT) -> list[PostCard]:
    posts = await client.fetch(endpoints.posts())
    return [PostCard.from_record(post) for post in posts[:limit]]


def _matches(post: dict, needle: str) -> bool:
    return needle in post["title"].lower() or needle in post["body"].lower()


async def search_posts(client: Fetcher, query: str) -> list[PostCard]:
    if not query.strip():
        raise EmptyQueryError("Please enter a search term.")

    posts = await client.fetch(endpoints.posts())
    needle = query.lower()
    found = [PostCard.from_record(post) for post in posts if _matches(post, needle)]
    logger.info("Search %r matched %d of %d posts", query, len(found), len(posts))
    return found


async def random_posts(
    client: Fetcher, count: int = 5, rng: random.Random | None = None
) -> list[PostCard]:
    posts = await client.fetch(endpoints.posts())
    rng = rng or random.Random()
    sample = rng.sample(posts, max(0, min(count, len(posts))))
    return [PostCard.from_record(post) for post in sample]


async def posts_by_user(client: Fetcher, user_id: int) -> list[PostCard]:
    posts = await client.fetch(endpoints.posts_by_user(user_id))
    return [PostCard.from_record(post) for post in posts]


async def post_comments(client: Fetcher, post_id: int) -> list[CommentItem]:
    comments = await client.fetch(endpoints.post_comments(post_id))
    return [CommentItem.from_record(comment) for comment in comments]
