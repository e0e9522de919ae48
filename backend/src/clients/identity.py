import logging
import uuid
from typing import Any, Optional

import httpx

from clients.types import IdentityUser, Session
from config import settings
from constants.identity import DEFAULT_ERROR_MESSAGE, ERROR_MESSAGES

logger = logging.getLogger(__name__)

USERS_PAGE_SIZE = 200


class IdentityError(Exception):
    """A failure reported by (or while reaching) the identity provider."""

    def __init__(self, code: str, status_code: int = 400, message: Optional[str] = None):
        self.code = code
        self.status_code = status_code
        self.message = message or ERROR_MESSAGES.get(code, DEFAULT_ERROR_MESSAGE)
        super().__init__(f"{code}: {self.message}")


def _error_from_response(response: httpx.Response) -> IdentityError:
    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}

    code = body.get("error_code") or body.get("error")
    if not code:
        code = "session_expired" if response.status_code == 401 else "unknown"
    return IdentityError(code, status_code=response.status_code)


def _to_user(raw: dict) -> IdentityUser:
    return IdentityUser(
        id=uuid.UUID(raw["id"]),
        email=raw.get("email") or "",
        metadata=raw.get("user_metadata") or {},
    )


class IdentityClient:
    """Thin wrapper over a hosted GoTrue-compatible auth API.

    User-facing calls are made with the anon key (plus the caller's access
    token when there is one); ``admin`` calls use the service key.
    """

    def __init__(
        self,
        base_url: str,
        anon_key: str,
        service_key: str,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = f"{base_url.rstrip('/')}/auth/v1"
        self.anon_key = anon_key
        self.service_key = service_key
        self.client = client or httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT)

    async def aclose(self) -> None:
        await self.client.aclose()

    async def sign_in(self, email: str, password: str) -> Session:
        data = await self._request(
            "POST",
            "/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        return Session(
            access_token=data["access_token"],
            refresh_token=data.get("refresh_token"),
            expires_in=data.get("expires_in"),
            user=_to_user(data["user"]),
        )

    async def sign_up(self, email: str, password: str, metadata: dict[str, Any]) -> IdentityUser:
        data = await self._request(
            "POST",
            "/admin/users",
            admin=True,
            json={
                "email": email,
                "password": password,
                "email_confirm": True,
                "user_metadata": metadata,
            },
        )
        return _to_user(data)

    async def sign_out(self, access_token: str) -> None:
        await self._request("POST", "/logout", token=access_token)

    async def get_user(self, access_token: str) -> IdentityUser:
        data = await self._request("GET", "/user", token=access_token)
        return _to_user(data)

    async def update_password(self, access_token: str, password: str) -> None:
        await self._request("PUT", "/user", token=access_token, json={"password": password})

    async def find_user_by_email(self, email: str) -> Optional[IdentityUser]:
        page = 1
        while True:
            data = await self._request(
                "GET",
                "/admin/users",
                admin=True,
                params={"page": page, "per_page": USERS_PAGE_SIZE},
            )
            users = data.get("users", [])
            for raw in users:
                if (raw.get("email") or "").lower() == email.lower():
                    return _to_user(raw)
            if len(users) < USERS_PAGE_SIZE:
                return None
            page += 1

    async def recover(self, email: str, redirect_to: Optional[str] = None) -> None:
        params = {"redirect_to": redirect_to} if redirect_to else None
        await self._request("POST", "/recover", params=params, json={"email": email})

    async def delete_user(self, user_id: uuid.UUID) -> None:
        await self._request("DELETE", f"/admin/users/{user_id}", admin=True)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        token: Optional[str] = None,
        admin: bool = False,
        **kwargs: Any,
    ) -> dict:
        key = self.service_key if admin else self.anon_key
        headers = {"apikey": key, "Authorization": f"Bearer {token or key}"}
        try:
            response = await self.client.request(
                method, f"{self.base_url}{path}", headers=headers, **kwargs
            )
        except httpx.HTTPError as e:
            logger.warning("Identity provider unreachable (%s %s): %s", method, path, e)
            raise IdentityError("network_error", status_code=503) from e

        if response.is_error:
            error = _error_from_response(response)
            logger.info("Identity provider rejected %s %s: %s", method, path, error.code)
            raise error

        if not response.content:
            return {}
        return response.json()


identity_client = IdentityClient(
    settings.IDENTITY_URL,
    settings.IDENTITY_ANON_KEY,
    settings.IDENTITY_SERVICE_KEY,
)
