import logging
import uuid
from dataclasses import dataclass
from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from clients.identity import IdentityClient
from clients.types import Identity
from config import settings
from constants.identity import ERROR_MESSAGES
from core.sanitization import (
    MAX_ADDRESS_LENGTH,
    normalize_phone,
    sanitize_profile_field,
)
from models.profile import Profile

logger = logging.getLogger(__name__)


@dataclass
class ActionResult:
    ok: bool
    message: str
    data: Any = None


class ProfileService:
    def __init__(self, db: AsyncSession, identity_client: IdentityClient):
        self.db = db
        self.identity_client = identity_client

    async def get(self, identity: Identity) -> Profile | None:
        return await self.db.get(Profile, identity.id)

    async def get_by_email(self, email: str) -> Profile | None:
        stmt = select(Profile).where(func.lower(Profile.email) == email.strip().lower())
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def create(
        self,
        user_id: uuid.UUID,
        email: str,
        name: str,
        phone: str | None = None,
        address: str | None = None,
    ) -> Profile:
        profile = Profile(
            id=user_id,
            email=email.strip().lower(),
            name=sanitize_profile_field(name) or email,
            phone=normalize_phone(phone),
            address=sanitize_profile_field(address, MAX_ADDRESS_LENGTH),
            active=True,
        )
        self.db.add(profile)
        await self.db.flush()
        return profile

    async def update(
        self,
        identity: Identity,
        name: str,
        phone: str | None = None,
        address: str | None = None,
    ) -> ActionResult:
        profile = await self.get(identity)
        if profile is None:
            return ActionResult(False, "Profile not found")

        clean_name = sanitize_profile_field(name)
        if not clean_name:
            return ActionResult(False, "Name is required")

        profile.name = clean_name
        profile.phone = normalize_phone(phone)
        profile.address = sanitize_profile_field(address, MAX_ADDRESS_LENGTH)
        await self.db.flush()
        return ActionResult(True, "Profile updated successfully!", profile)

    async def change_password(
        self, identity: Identity, new_password: str, confirm_password: str
    ) -> ActionResult:
        if new_password != confirm_password:
            return ActionResult(False, ERROR_MESSAGES["password_mismatch"])
        if len(new_password) < settings.MIN_PASSWORD_LENGTH:
            return ActionResult(False, ERROR_MESSAGES["weak_password"])

        await self.identity_client.update_password(identity.access_token, new_password)
        logger.info("Password changed for %s", identity.id)
        return ActionResult(True, "Password changed successfully!")

    async def delete(self, identity: Identity) -> None:
        await self.db.execute(delete(Profile).where(Profile.id == identity.id))
