import uuid
from typing import Literal, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from api.dependencies import get_current_identity, get_optional_identity
from clients.types import Identity
from core.database import get_db
from models.rating import Rating
from services.rating import RatingService

router = APIRouter(prefix="/ratings", tags=["ratings"])


class RateRequest(BaseModel):
    title: str
    kind: Literal["like", "dislike"]


class CommentRequest(BaseModel):
    title: str
    text: str


def _comment_payload(row: Rating) -> dict:
    return {
        "id": str(row.id),
        "owner_id": str(row.owner_id),
        "title_name": row.title_name,
        "comment": row.comment,
        "created_at": row.created_at.isoformat() if row.created_at else None,
    }


@router.get("")
async def title_summary(
    title: str,
    identity: Optional[Identity] = Depends(get_optional_identity),
):
    async with get_db() as db:
        summary = await RatingService(db).summary(title, identity)
    return {
        "title_name": summary.title_name,
        "likes": summary.likes,
        "dislikes": summary.dislikes,
        "my_rating": summary.my_rating,
        "comments": [_comment_payload(c) for c in summary.comments],
    }


@router.post("/rate")
async def rate(request: RateRequest, identity: Identity = Depends(get_current_identity)):
    async with get_db() as db:
        result = await RatingService(db).rate(identity, request.title, request.kind)
    return {
        "success": result.ok,
        "message": result.message,
        "state": result.state,
        "kind": result.kind,
    }


@router.post("/comments")
async def add_comment(request: CommentRequest, identity: Identity = Depends(get_current_identity)):
    async with get_db() as db:
        row = await RatingService(db).comment(identity, request.title, request.text)
        if row is None:
            return {"success": False, "message": "Comment cannot be empty"}
        return {"success": True, "message": "Comment added", "comment": _comment_payload(row)}


@router.delete("/comments/{comment_id}")
async def delete_comment(comment_id: uuid.UUID, identity: Identity = Depends(get_current_identity)):
    async with get_db() as db:
        deleted = await RatingService(db).delete_comment(identity, comment_id)
    if not deleted:
        return {"success": False, "message": "Comment not found"}
    return {"success": True, "message": "Comment deleted"}
