from collections.abc import AsyncIterator
from typing import Optional

from fastapi import Depends, Header, HTTPException

from clients.identity import IdentityClient, IdentityError, identity_client
from clients.tmdb import CatalogClient
from clients.types import Identity
from config import settings


def _bearer_token(authorization: Optional[str]) -> str:
    raw = (authorization or "").strip()
    if raw.lower().startswith("bearer "):
        return raw.split(" ", 1)[1].strip()
    return ""


def get_identity_client() -> IdentityClient:
    return identity_client


async def get_optional_identity(
    authorization: Optional[str] = Header(default=None),
    client: IdentityClient = Depends(get_identity_client),
) -> Optional[Identity]:
    token = _bearer_token(authorization)
    if not token:
        return None

    try:
        user = await client.get_user(token)
    except IdentityError as e:
        if e.code == "network_error":
            raise HTTPException(status_code=503, detail=e.message)
        raise HTTPException(status_code=401, detail=e.message)
    return Identity(id=user.id, email=user.email, access_token=token)


async def get_current_identity(
    identity: Optional[Identity] = Depends(get_optional_identity),
) -> Identity:
    if identity is None:
        raise HTTPException(status_code=401, detail="Authorization token required")
    return identity


async def get_catalog() -> AsyncIterator[CatalogClient]:
    catalog = CatalogClient(settings.TMDB_API_KEY)
    try:
        yield catalog
    finally:
        await catalog.aclose()
