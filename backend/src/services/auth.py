import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from clients.identity import IdentityClient, IdentityError
from clients.types import Identity, IdentityUser, Session
from config import settings
from constants.identity import ALREADY_REGISTERED_CODES, ERROR_MESSAGES
from models.profile import Profile
from services.profile import ActionResult, ProfileService
from services.rating import RatingService
from services.watchlist import WatchlistService

logger = logging.getLogger(__name__)

RESET_REQUESTED_MESSAGE = "If this email is registered, a reset link is on its way."


def normalize_email(email: str) -> str:
    return email.strip().lower()


class AuthService:
    def __init__(self, db: AsyncSession, identity_client: IdentityClient):
        self.db = db
        self.identity_client = identity_client
        self.profiles = ProfileService(db, identity_client)

    async def sign_up(
        self,
        email: str,
        password: str,
        name: str,
        phone: Optional[str] = None,
        address: Optional[str] = None,
    ) -> ActionResult:
        """Create the identity, then its profile row.

        The two writes are independent: a profile failure leaves the identity
        in place, and a later sign-up for the same email cleans it up.
        """
        email = normalize_email(email)
        if len(password) < settings.MIN_PASSWORD_LENGTH:
            return ActionResult(False, ERROR_MESSAGES["weak_password"])

        metadata = {"name": name, "phone": phone, "address": address}
        try:
            user = await self.identity_client.sign_up(email, password, metadata)
        except IdentityError as e:
            if e.code == "network_error":
                raise
            user = None
            if e.code in ALREADY_REGISTERED_CODES and await self.profiles.get_by_email(email) is None:
                user = await self._recreate_orphan(email, password, metadata)
            if user is None:
                return ActionResult(False, e.message)

        await self.profiles.create(user.id, email, name, phone, address)
        logger.info("Account created: %s", user.id)
        return ActionResult(True, "Account created successfully!", user)

    async def _recreate_orphan(
        self, email: str, password: str, metadata: dict
    ) -> Optional[IdentityUser]:
        # Registered with the provider but no profile: a half-finished sign-up
        orphan = await self.identity_client.find_user_by_email(email)
        if orphan is None:
            return None
        if await self.db.get(Profile, orphan.id) is not None:
            logger.warning("Identity %s for %s owns a profile; not removing it", orphan.id, email)
            return None

        logger.warning("Removing orphaned identity %s for %s", orphan.id, email)
        try:
            await self.identity_client.delete_user(orphan.id)
            return await self.identity_client.sign_up(email, password, metadata)
        except IdentityError as e:
            logger.error("Error cleaning up orphaned identity %s: %s", orphan.id, e)
            return None

    async def sign_in(self, email: str, password: str) -> Session:
        session = await self.identity_client.sign_in(normalize_email(email), password)
        logger.info("Signed in: %s", session.user.id)
        return session

    async def sign_out(self, identity: Identity) -> None:
        await self.identity_client.sign_out(identity.access_token)

    async def request_password_reset(self, email: str) -> ActionResult:
        """Ask the provider to email a recovery link.

        The answer is the same whether or not the email is registered. The new
        password is set afterwards by the signed-in owner.
        """
        email = normalize_email(email)
        if not email:
            return ActionResult(False, ERROR_MESSAGES["email_address_invalid"])

        try:
            await self.identity_client.recover(email, settings.PASSWORD_RESET_REDIRECT_URL)
        except IdentityError as e:
            if e.code == "network_error":
                raise
            logger.info("Password reset for %s not sent: %s", email, e.code)
        return ActionResult(True, RESET_REQUESTED_MESSAGE)

    async def delete_account(self, identity: Identity) -> None:
        """Remove every row owned by the identity, then the identity itself.

        Runs inside the request transaction, so a provider failure rolls the
        local deletes back.
        """
        entries = await WatchlistService(self.db).clear(identity)
        ratings = await RatingService(self.db).clear(identity)
        await self.profiles.delete(identity)
        await self.db.flush()

        await self.identity_client.delete_user(identity.id)
        logger.info(
            "Account deleted: %s (%d list entries, %d ratings)", identity.id, entries, ratings
        )
