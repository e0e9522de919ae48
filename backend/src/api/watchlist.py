import uuid
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from api.dependencies import get_current_identity
from clients.types import Identity
from core.database import get_db
from models.watchlist import WatchlistEntry
from services.watchlist import WatchlistResult, WatchlistService

router = APIRouter(prefix="/watchlist", tags=["watchlist"])


class MovieData(BaseModel):
    title: Optional[str] = None
    name: Optional[str] = None
    movieId: Optional[uuid.UUID] = None


class WatchlistRequest(BaseModel):
    # Any client-sent user id is ignored: the owner comes from the bearer token.
    action: str
    movieData: MovieData = Field(default_factory=MovieData)


class AddEntryRequest(BaseModel):
    title: str


def _entry_payload(entry: WatchlistEntry) -> dict:
    return {
        "id": str(entry.id),
        "title_name": entry.title_name,
        "created_at": entry.created_at.isoformat() if entry.created_at else None,
    }


def _result_payload(result: WatchlistResult) -> dict:
    payload = {"success": result.ok, "message": result.message}
    if result.entry is not None:
        payload["entry"] = _entry_payload(result.entry)
    return payload


@router.post("")
async def watchlist_action(
    request: WatchlistRequest,
    identity: Identity = Depends(get_current_identity),
):
    if request.action not in ("add", "remove", "list"):
        raise HTTPException(status_code=400, detail="Invalid action")

    async with get_db() as db:
        service = WatchlistService(db)

        if request.action == "add":
            name = request.movieData.title or request.movieData.name or ""
            return _result_payload(await service.add(identity, name))

        if request.action == "remove":
            if request.movieData.movieId is None:
                return {"success": False, "message": "Entry id is required"}
            return _result_payload(await service.remove(identity, request.movieData.movieId))

        entries = await service.list(identity)
        return {"success": True, "movies": [_entry_payload(e) for e in entries]}


@router.get("")
async def list_entries(identity: Identity = Depends(get_current_identity)):
    async with get_db() as db:
        entries = await WatchlistService(db).list(identity)
    return {"success": True, "movies": [_entry_payload(e) for e in entries]}


@router.post("/entries")
async def add_entry(
    request: AddEntryRequest,
    identity: Identity = Depends(get_current_identity),
):
    async with get_db() as db:
        result = await WatchlistService(db).add(identity, request.title)
    return _result_payload(result)


@router.delete("/entries/{entry_id}")
async def remove_entry(
    entry_id: uuid.UUID,
    identity: Identity = Depends(get_current_identity),
):
    async with get_db() as db:
        result = await WatchlistService(db).remove(identity, entry_id)
    return _result_payload(result)


@router.get("/contains")
async def contains(name: str, identity: Identity = Depends(get_current_identity)):
    async with get_db() as db:
        snapshot = await WatchlistService(db).snapshot(identity)
    return {"name": name, "in_list": snapshot.is_member(name)}
