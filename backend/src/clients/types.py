from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any


@dataclass
class CastMember:
    name: str
    character: str | None = None


@dataclass
class Title:
    id: int
    name: str
    media_type: str  # "movie" | "tv"
    overview: str = ""
    poster_path: str | None = None
    backdrop_path: str | None = None
    vote_average: float = 0.0
    release_date: str | None = None
    genre_ids: list[int] = field(default_factory=list)
    poster_url: str | None = None
    backdrop_url: str | None = None
    # Detail-only fields
    runtime: int | None = None
    cast: list[CastMember] = field(default_factory=list)
    trailer: str | None = None


@dataclass
class Genre:
    id: int
    name: str


@dataclass
class Section:
    slug: str
    title: str
    items: list[Title] = field(default_factory=list)


@dataclass
class IdentityUser:
    id: uuid.UUID
    email: str
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class Session:
    access_token: str
    refresh_token: str | None
    expires_in: int | None
    user: IdentityUser


@dataclass(frozen=True)
class Identity:
    """The authenticated caller, resolved from a bearer token per request."""

    id: uuid.UUID
    email: str
    access_token: str
