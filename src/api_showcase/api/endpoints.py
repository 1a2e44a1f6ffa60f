"""Endpoint identifiers for the demo API collections."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import parse_qsl, urlencode, urlsplit

RESOURCES = ("posts", "users", "albums", "comments", "photos")


@dataclass(frozen=True)
class Endpoint:
    path: str
    params: tuple[tuple[str, str], ...] = ()

    def __post_init__(self) -> None:
        if not self.path or not self.path.strip():
            raise ValueError("Endpoint path must not be empty")
        if not self.path.startswith("/"):
            object.__setattr__(self, "path", "/" + self.path)

    @classmethod
    def parse(cls, target: str | Endpoint) -> Endpoint:
        if isinstance(target, Endpoint):
            return target
        if not target or not target.strip():
            raise ValueError("Endpoint identifier must not be empty")
        parts = urlsplit(target.strip())
        if parts.scheme or parts.netloc:
            raise ValueError(f"Endpoint identifier must be a path relative to the API, got {target!r}")
        params = tuple(parse_qsl(parts.query, keep_blank_values=True))
        return cls(parts.path or "/", params)

    @property
    def query(self) -> dict[str, str]:
        return dict(self.params)

    def __str__(self) -> str:
        if not self.params:
            return self.path
        return f"{self.path}?{urlencode(self.params)}"


def posts() -> Endpoint:
    return Endpoint("/posts")


def post(post_id: int) -> Endpoint:
    return Endpoint(f"/posts/{post_id}")


def posts_by_user(user_id: int) -> Endpoint:
    return Endpoint("/posts", (("userId", str(user_id)),))


def post_comments(post_id: int) -> Endpoint:
    return Endpoint(f"/posts/{post_id}/comments")


def users() -> Endpoint:
    return Endpoint("/users")


def user(user_id: int) -> Endpoint:
    return Endpoint(f"/users/{user_id}")


def albums() -> Endpoint:
    return Endpoint("/albums")


def album_photos(album_id: int) -> Endpoint:
    return Endpoint(f"/albums/{album_id}/photos")
