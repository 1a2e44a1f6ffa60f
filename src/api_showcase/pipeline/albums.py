"""Album listing with creator names, and album photos."""

from __future__ import annotations

from typing import Any, Iterable

from api_showcase.api import endpoints
from api_showcase.api.orchestrator import Fetcher
from api_showcase.pipeline.cards import AlbumCard, PhotoItem, capitalize_title

ALBUMS_LIMIT = 15
UNKNOWN_USER = "Unknown User"


def _user_names(users: Iterable[dict[str, Any]]) -> dict[int, str]:
    return {user["id"]: user["name"] for user in users}


async def load_albums(client: Fetcher, limit: int = ALBUMS_LIMIT) -> list[AlbumCard]:
    # albums first, then users; never in parallel
    albums = await client.fetch(endpoints.albums())
    users = await client.fetch(endpoints.users())
    names = _user_names(users)
    return [
        AlbumCard(
            album_id=album["id"],
            title=capitalize_title(album["title"]),
            created_by=names.get(album["userId"], UNKNOWN_USER),
        )
        for album in albums[:limit]
    ]


async def album_photos(client: Fetcher, album_id: int) -> list[PhotoItem]:
    photos = await client.fetch(endpoints.album_photos(album_id))
    return [PhotoItem.from_record(photo) for photo in photos]
