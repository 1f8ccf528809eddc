# storefront/api/identity_client.py
import asyncio
import logging
from typing import Any, Dict
import aiohttp
from pydantic import BaseModel
from ..errors import IdentityError

logger = logging.getLogger(__name__)

class AuthUser(BaseModel):
    """Signed-in account"""
    uid: str
    email: str
    id_token: str = ""

class FirebaseIdentityClient:
    """Email/password accounts and user profiles over the Firebase REST APIs"""

    AUTH_URL = "https://identitytoolkit.googleapis.com/v1"
    FIRESTORE_URL = "https://firestore.googleapis.com/v1"

    def __init__(self, session: aiohttp.ClientSession, api_key: str, project_id: str = ""):
        self.session = session
        self.api_key = api_key
        self.project_id = project_id

    async def sign_up(self, email: str, password: str) -> AuthUser:
        data = await self._post_account("accounts:signUp", email, password)
        return self._to_user(data, email)

    async def sign_in(self, email: str, password: str) -> AuthUser:
        data = await self._post_account("accounts:signInWithPassword", email, password)
        return self._to_user(data, email)

    async def save_profile(self, user: AuthUser, profile: Dict[str, str]):
        """Store the profile document usuarios/{uid}"""
        if not self.project_id:
            raise IdentityError("No FIREBASE_PROJECT_ID configured", code="config")

        url = (
            f"{self.FIRESTORE_URL}/projects/{self.project_id}"
            f"/databases/(default)/documents/usuarios/{user.uid}"
        )
        document = {
            "fields": {key: {"stringValue": value} for key, value in profile.items()}
        }
        headers = {"Authorization": f"Bearer {user.id_token}"} if user.id_token else {}

        await self._send("PATCH", url, document, headers=headers)

    async def _post_account(self, endpoint: str, email: str, password: str) -> Dict[str, Any]:
        url = f"{self.AUTH_URL}/{endpoint}?key={self.api_key}"
        body = {"email": email, "password": password, "returnSecureToken": True}
        return await self._send("POST", url, body)

    async def _send(self, method: str, url: str, body: Dict[str, Any], headers=None) -> Dict[str, Any]:
        try:
            async with self.session.request(method, url, json=body, headers=headers) as response:
                data = await response.json(content_type=None)
                status = response.status
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning("Identity request failed: %r", e)
            raise IdentityError(f"A network error has occurred: {e}", code="network") from e
        except ValueError as e:
            raise IdentityError(f"Invalid identity response: {e}") from e

        if not 200 <= status < 300:
            error = (data or {}).get("error", {}) if isinstance(data, dict) else {}
            message = error.get("message") or f"HTTP {status}"
            raise IdentityError(message, code=message.split(" ")[0])

        return data or {}

    @staticmethod
    def _to_user(data: Dict[str, Any], email: str) -> AuthUser:
        return AuthUser(
            uid=data.get("localId", ""),
            email=data.get("email", email),
            id_token=data.get("idToken", "")
        )
