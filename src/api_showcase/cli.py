"""Command line front end for the API showcase."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Awaitable, Callable, Sequence

from api_showcase.api import endpoints
from api_showcase.api.fetcher import DataFetcher
from api_showcase.api.orchestrator import Fetcher, RetryingFetcher
from api_showcase.config import AppConfig, load_config
from api_showcase.io.results_writer import write_jsonl
from api_showcase.pipeline import albums, posts, users
from api_showcase.pipeline.section import ConsoleSurface, RenderSurface, run_section
from api_showcase.utils.logging import configure_logging

logger = logging.getLogger(__name__)

Loader = Callable[[], Awaitable[Sequence[Any]]]


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fetch and display demo API data.")
    parser.add_argument("--max-attempts", type=int, default=None, help="Override MAX_ATTEMPTS")
    parser.add_argument("--out", type=Path, default=None, help="Also write the items as JSONL")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL (e.g. DEBUG)")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("posts", help="Show the first posts")
    sub.add_parser("users", help="Show all users")
    sub.add_parser("albums", help="Show the first albums with their creators")
    sub.add_parser("endpoints", help="List the available collections")

    search = sub.add_parser("search", help="Search post titles and bodies")
    search.add_argument("query")

    rand = sub.add_parser("random", help="Show a random sample of posts")
    rand.add_argument("--count", type=int, default=5)

    by_user = sub.add_parser("user-posts", help="Show every post by one user")
    by_user.add_argument("user_id", type=int)

    comments = sub.add_parser("comments", help="Show the comments on a post")
    comments.add_argument("post_id", type=int)

    photos = sub.add_parser("photos", help="Show the photos in an album")
    photos.add_argument("album_id", type=int)

    return parser.parse_args(argv)


def build_loader(args: argparse.Namespace, client: Fetcher) -> tuple[str, Loader, str | None]:
    """Map a parsed command onto (section name, loader, empty-result message)."""
    command = args.command
    if command == "posts":
        return "posts", lambda: posts.load_posts(client), None
    if command == "users":
        return "users", lambda: users.load_users(client), None
    if command == "albums":
        return "albums", lambda: albums.load_albums(client), None
    if command == "search":
        return (
            "search",
            lambda: posts.search_posts(client, args.query),
            f'No posts found matching "{args.query}".',
        )
    if command == "random":
        return "posts", lambda: posts.random_posts(client, args.count), None
    if command == "user-posts":
        return "posts", lambda: posts.posts_by_user(client, args.user_id), None
    if command == "comments":
        return "comments", lambda: posts.post_comments(client, args.post_id), None
    if command == "photos":
        return "photos", lambda: albums.album_photos(client, args.album_id), None
    raise ValueError(f"Unknown command: {command}")


class _CollectingSurface:
    """Forwards to another surface and keeps what was rendered."""

    def __init__(self, inner: RenderSurface) -> None:
        self._inner = inner
        self.items: list[Any] = []

    def show_loading(self, section: str) -> None:
        self._inner.show_loading(section)

    def hide_loading(self, section: str) -> None:
        self._inner.hide_loading(section)

    def render(self, section: str, items: Sequence[Any]) -> None:
        self.items.extend(items)
        self._inner.render(section, items)

    def show_message(self, section: str, message: str) -> None:
        self._inner.show_message(section, message)

    def clear(self, section: str) -> None:
        self.items.clear()
        self._inner.clear(section)


async def run_command(
    args: argparse.Namespace,
    config: AppConfig,
    surface: RenderSurface,
    fetcher: DataFetcher | None = None,
) -> int:
    fetcher = fetcher or DataFetcher(config)
    async with fetcher:
        client = RetryingFetcher.from_config(fetcher, config, logger=logger)
        section, loader, empty_message = build_loader(args, client)
        collector = _CollectingSurface(surface)
        ok = await run_section(collector, section, loader, empty_message=empty_message)

    if ok and args.out:
        count = write_jsonl(args.out, collector.items)
        logger.info("Wrote %d items to %s", count, args.out.resolve())
    return 0 if ok else 1


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    config = load_config()
    if args.max_attempts is not None:
        if args.max_attempts < 1:
            sys.exit("Error: --max-attempts must be a positive integer.")
        config = replace(config, max_attempts=args.max_attempts)
    if getattr(args, "count", 0) < 0:
        sys.exit("Error: --count must be zero or positive.")

    configure_logging(args.log_level or config.log_level)
    logger.info("Available endpoints: %s", ", ".join(f"/{name}" for name in endpoints.RESOURCES))

    if args.command == "endpoints":
        for name in endpoints.RESOURCES:
            print(f"{config.api_base_url}/{name}")
        return

    sys.exit(asyncio.run(run_command(args, config, ConsoleSurface())))


if __name__ == "__main__":
    main()
