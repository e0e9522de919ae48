from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from api.dependencies import get_current_identity, get_identity_client
from clients.identity import IdentityClient
from clients.types import Identity
from core.database import get_db
from models.profile import Profile
from services.profile import ProfileService

router = APIRouter(prefix="/profile", tags=["profile"])


class ProfileUpdate(BaseModel):
    name: str
    phone: Optional[str] = None
    address: Optional[str] = None


class PasswordChange(BaseModel):
    newPassword: str
    confirmPassword: str


def _profile_payload(profile: Profile) -> dict:
    return {
        "name": profile.name,
        "email": profile.email,
        "phone": profile.phone or "",
        "address": profile.address or "",
    }


@router.get("")
async def get_profile(
    identity: Identity = Depends(get_current_identity),
    client: IdentityClient = Depends(get_identity_client),
):
    async with get_db() as db:
        profile = await ProfileService(db, client).get(identity)
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return _profile_payload(profile)


@router.put("")
async def update_profile(
    request: ProfileUpdate,
    identity: Identity = Depends(get_current_identity),
    client: IdentityClient = Depends(get_identity_client),
):
    async with get_db() as db:
        result = await ProfileService(db, client).update(
            identity, request.name, request.phone, request.address
        )
        if not result.ok:
            return {"success": False, "message": result.message}
        return {"success": True, "message": result.message, "profile": _profile_payload(result.data)}


@router.put("/password")
async def change_password(
    request: PasswordChange,
    identity: Identity = Depends(get_current_identity),
    client: IdentityClient = Depends(get_identity_client),
):
    async with get_db() as db:
        result = await ProfileService(db, client).change_password(
            identity, request.newPassword, request.confirmPassword
        )
    return {"success": result.ok, "message": result.message}
