"""User listing."""

from __future__ import annotations

from api_showcase.api import endpoints
from api_showcase.api.orchestrator import Fetcher
from api_showcase.pipeline.cards import UserCard


async def load_users(client: Fetcher) -> list[UserCard]:
    users = await client.fetch(endpoints.users())
    return [UserCard.from_record(user) for user in users]
