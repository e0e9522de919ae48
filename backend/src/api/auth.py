from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from api.dependencies import get_current_identity, get_identity_client
from clients.identity import IdentityClient
from clients.types import Identity, IdentityUser
from core.database import get_db
from core.rate_limiter import auth_rate_limiter
from services.auth import AuthService

router = APIRouter(tags=["auth"])


class UserData(BaseModel):
    name: str
    phone: Optional[str] = None
    address: Optional[str] = None


class AuthRequest(BaseModel):
    action: str
    email: str
    password: str
    userData: Optional[UserData] = None


class ResetPasswordRequest(BaseModel):
    email: str


def _user_payload(user: IdentityUser) -> dict:
    return {"id": str(user.id), "email": user.email, "user_metadata": user.metadata}


@router.post("/auth")
async def auth_action(
    request: AuthRequest,
    client: IdentityClient = Depends(get_identity_client),
):
    email = request.email.strip()

    if request.action == "signup":
        if request.userData is None:
            return {"success": False, "error": "Name is required"}
        async with get_db() as db:
            result = await AuthService(db, client).sign_up(
                email,
                request.password,
                request.userData.name,
                request.userData.phone,
                request.userData.address,
            )
        if not result.ok:
            return {"success": False, "error": result.message}
        return {"success": True, "user": _user_payload(result.data), "message": result.message}

    if request.action == "signin":
        if not auth_rate_limiter.is_allowed(email):
            raise HTTPException(status_code=429, detail="Too many attempts. Wait a moment and try again.")
        async with get_db() as db:
            session = await AuthService(db, client).sign_in(email, request.password)
        return {
            "success": True,
            "user": _user_payload(session.user),
            "session": {
                "access_token": session.access_token,
                "refresh_token": session.refresh_token,
                "expires_in": session.expires_in,
            },
            "message": "Signed in successfully!",
        }

    raise HTTPException(status_code=400, detail="Invalid action")


@router.post("/auth/signout")
async def sign_out(
    identity: Identity = Depends(get_current_identity),
    client: IdentityClient = Depends(get_identity_client),
):
    async with get_db() as db:
        await AuthService(db, client).sign_out(identity)
    return {"success": True}


@router.post("/auth/reset-password")
async def reset_password(
    request: ResetPasswordRequest,
    client: IdentityClient = Depends(get_identity_client),
):
    email = request.email.strip()
    if not auth_rate_limiter.is_allowed(email):
        raise HTTPException(status_code=429, detail="Too many attempts. Wait a moment and try again.")

    async with get_db() as db:
        result = await AuthService(db, client).request_password_reset(email)
    return {"success": result.ok, "message": result.message}


@router.delete("/account")
async def delete_account(
    identity: Identity = Depends(get_current_identity),
    client: IdentityClient = Depends(get_identity_client),
):
    async with get_db() as db:
        await AuthService(db, client).delete_account(identity)
    return {"success": True, "message": "Account deleted. Your data was permanently removed."}
