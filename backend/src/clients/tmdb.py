import asyncio
import logging
from typing import Any, Optional

import httpx

from clients.types import CastMember, Genre, Section, Title
from config import settings
from constants.tmdb import (
    HOME_SECTIONS,
    MAX_CAST,
    MEDIA_TYPES,
    MISSING_OVERVIEW,
    TRAILER_EMBED_URL,
)

logger = logging.getLogger(__name__)


def _records(value: Any) -> list[dict]:
    """Objects of a JSON array; anything else in the payload is ignored."""
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, dict)]


class CatalogClient:
    """Read-only access to the TMDB catalog.

    Every call is independent and never raises: a transport, status or parse
    failure yields an empty list (or ``None``) and a message in ``notices``
    that callers hand back to the user.
    """

    def __init__(self, api_key: str, client: Optional[httpx.AsyncClient] = None):
        self.api_key = api_key
        self.base_url = settings.TMDB_BASE_URL
        self.image_base_url = settings.TMDB_IMAGE_BASE_URL
        self.client = client or httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT)
        self.notices: list[str] = []

    async def aclose(self) -> None:
        await self.client.aclose()

    async def search(self, query: str, media_type: str = "multi") -> list[Title]:
        if not query or not query.strip():
            return []
        if media_type != "movie":
            media_type = "multi"

        return await self._list(
            f"/search/{media_type}",
            "Error searching titles",
            media_type="movie" if media_type == "movie" else None,
            query=query.strip(),
        )

    async def discover(self, genre_id: int, media_type: str = "movie") -> list[Title]:
        return await self._list(
            f"/discover/{media_type}",
            "Error loading titles for this genre",
            media_type=media_type,
            with_genres=genre_id,
        )

    async def popular(self, media_type: str = "movie") -> list[Title]:
        return await self._list(
            f"/{media_type}/popular",
            "Error loading popular titles",
            media_type=media_type,
        )

    async def top_rated(self, media_type: str = "movie") -> list[Title]:
        return await self._list(
            f"/{media_type}/top_rated",
            "Error loading top rated titles",
            media_type=media_type,
        )

    async def trending(self) -> list[Title]:
        return await self._list("/trending/all/week", "Error loading trending titles")

    async def genres(self, media_type: str = "movie") -> list[Genre]:
        data = await self._get(f"/genre/{media_type}/list")
        if data is None:
            self._notify("Error loading genres")
            return []
        return [
            Genre(id=g["id"], name=g["name"])
            for g in _records(data.get("genres"))
            if isinstance(g.get("id"), int) and g.get("name")
        ]

    async def home_sections(self) -> list[Section]:
        rows = await asyncio.gather(
            *(
                self._list(
                    path,
                    "Error loading titles",
                    media_type=None if path.startswith("/trending") else "movie",
                    **params,
                )
                for _, _, path, params in HOME_SECTIONS
            )
        )
        return [
            Section(slug=slug, title=title, items=items)
            for (slug, title, _, _), items in zip(HOME_SECTIONS, rows)
        ]

    async def get_title(self, title_id: int, media_type: str) -> Optional[Title]:
        path = f"/{media_type}/{title_id}"
        data = await self._get(path, append_to_response="credits")
        if data is None:
            self._notify("Error loading title details")
            return None

        if not data.get("overview"):
            fallback = await self._get(path, language=settings.TMDB_FALLBACK_LANGUAGE)
            data["overview"] = (fallback or {}).get("overview") or MISSING_OVERVIEW

        title = self._to_title(data, media_type)
        if title is None:
            self._notify("Error loading title details")
            return None

        runtime = data.get("runtime")
        run_times = data.get("episode_run_time")
        if runtime is None and isinstance(run_times, list) and run_times:
            runtime = run_times[0]
        title.runtime = runtime
        title.genre_ids = title.genre_ids or [
            g["id"] for g in _records(data.get("genres")) if isinstance(g.get("id"), int)
        ]
        credits = data.get("credits")
        cast = _records(credits.get("cast")) if isinstance(credits, dict) else []
        title.cast = [
            CastMember(name=a["name"], character=a.get("character"))
            for a in cast
            if a.get("name")
        ][:MAX_CAST]
        return title

    async def get_trailer(self, title_id: int, media_type: str) -> Optional[str]:
        path = f"/{media_type}/{title_id}/videos"
        for language in (settings.TMDB_LANGUAGE, settings.TMDB_FALLBACK_LANGUAGE):
            data = await self._get(path, language=language)
            if data is None:
                self._notify("Error loading trailer")
                continue
            key = next(
                (
                    v["key"]
                    for v in _records(data.get("results"))
                    if v.get("type") == "Trailer" and v.get("site") == "YouTube" and v.get("key")
                ),
                None,
            )
            if key:
                return TRAILER_EMBED_URL.format(key=key)
        return None

    async def _list(
        self,
        path: str,
        notice: str,
        media_type: Optional[str] = None,
        **params: Any,
    ) -> list[Title]:
        data = await self._get(path, **params)
        if data is None:
            self._notify(notice)
            return []

        titles = []
        for raw in _records(data.get("results")):
            title = self._to_title(raw, media_type)
            if title is not None:
                titles.append(title)
        return titles

    async def _get(self, path: str, language: Optional[str] = None, **params: Any) -> Optional[dict]:
        params = {
            "api_key": self.api_key,
            "language": language or settings.TMDB_LANGUAGE,
            **params,
        }
        try:
            response = await self.client.get(f"{self.base_url}{path}", params=params)
            response.raise_for_status()
            body = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("TMDB request %s failed: %s", path, e)
            return None
        if not isinstance(body, dict):
            logger.warning(
                "TMDB request %s returned %s, expected an object", path, type(body).__name__
            )
            return None
        return body

    def _to_title(self, raw: dict, media_type: Optional[str]) -> Optional[Title]:
        kind = raw.get("media_type") or media_type
        if kind not in MEDIA_TYPES:
            # multi-search also returns people
            return None
        if not isinstance(raw.get("id"), int):
            logger.debug("Skipping TMDB item without an id: %r", raw)
            return None

        poster = raw.get("poster_path")
        backdrop = raw.get("backdrop_path")
        return Title(
            id=raw["id"],
            name=raw.get("title") or raw.get("name") or "",
            media_type=kind,
            overview=raw.get("overview") or "",
            poster_path=poster,
            backdrop_path=backdrop,
            vote_average=raw.get("vote_average") or 0.0,
            release_date=raw.get("release_date") or raw.get("first_air_date"),
            genre_ids=[g for g in raw.get("genre_ids") or [] if isinstance(g, int)],
            poster_url=f"{self.image_base_url}{poster}" if poster else None,
            backdrop_url=f"{self.image_base_url}{backdrop}" if backdrop else None,
        )

    def _notify(self, message: str) -> None:
        if message not in self.notices:
            self.notices.append(message)
