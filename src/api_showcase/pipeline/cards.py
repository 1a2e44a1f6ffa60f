"""View models handed to a rendering surface."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


def capitalize_title(title: str) -> str:
    return " ".join(word[:1].upper() + word[1:].lower() for word in title.split(" "))


def capitalize_first_letter(text: str) -> str:
    return text[:1].upper() + text[1:]


def get_initials(name: str) -> str:
    return "".join(word[:1] for word in name.split(" ")).upper()


@dataclass(frozen=True)
class PostCard:
    post_id: int
    user_id: int
    title: str
    body: str

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> PostCard:
        return cls(
            post_id=record["id"],
            user_id=record["userId"],
            title=capitalize_title(record["title"]),
            body=capitalize_first_letter(record["body"]),
        )

    def lines(self) -> list[str]:
        return [self.title, self.body, f"Post ID: {self.post_id} | User ID: {self.user_id}"]


@dataclass(frozen=True)
class UserCard:
    user_id: int
    initials: str
    name: str
    username: str
    email: str
    phone: str
    website: str
    company: str
    city: str

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> UserCard:
        return cls(
            user_id=record["id"],
            initials=get_initials(record["name"]),
            name=record["name"],
            username=record["username"],
            email=record["email"],
            phone=record["phone"],
            website=record["website"],
            company=record["company"]["name"],
            city=record["address"]["city"],
        )

    def lines(self) -> list[str]:
        return [
            f"[{self.initials}] {self.name}",
            f"Username: {self.username}",
            self.email,
            f"Phone: {self.phone}",
            f"Website: {self.website}",
            f"Company: {self.company}",
            f"City: {self.city}",
        ]


@dataclass(frozen=True)
class AlbumCard:
    album_id: int
    title: str
    created_by: str

    def lines(self) -> list[str]:
        return [self.title, f"Album ID: {self.album_id}", f"Created by: {self.created_by}"]


@dataclass(frozen=True)
class CommentItem:
    comment_id: int
    post_id: int
    name: str
    email: str
    body: str

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> CommentItem:
        return cls(
            comment_id=record["id"],
            post_id=record["postId"],
            name=record["name"],
            email=record["email"],
            body=record["body"],
        )

    def lines(self) -> list[str]:
        return [f"{self.name} <{self.email}>", self.body]


@dataclass(frozen=True)
class PhotoItem:
    photo_id: int
    album_id: int
    title: str
    url: str
    thumbnail_url: str

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> PhotoItem:
        return cls(
            photo_id=record["id"],
            album_id=record["albumId"],
            title=record["title"],
            url=record["url"],
            thumbnail_url=record["thumbnailUrl"],
        )

    def lines(self) -> list[str]:
        return [self.title, self.url]
