# storefront/services/auth_service.py
import asyncio
import logging
from typing import Awaitable, Optional
from pydantic import BaseModel
from ..api.identity_client import AuthUser, FirebaseIdentityClient
from ..errors import IdentityError
from .. import constants

logger = logging.getLogger(__name__)

# substring (case-insensitive) -> user-facing message, first match wins
AUTH_ERROR_MESSAGES = [
    (("already in use", "EMAIL_EXISTS"), constants.EMAIL_IN_USE),
    (("badly formatted", "INVALID_EMAIL"), constants.EMAIL_INVALID),
    (("weak-password", "WEAK_PASSWORD"), constants.WEAK_PASSWORD),
    (("network",), constants.NETWORK_ERROR),
    (("INVALID_LOGIN_CREDENTIALS", "INVALID_PASSWORD", "EMAIL_NOT_FOUND"),
     constants.WRONG_CREDENTIALS),
]

def classify_auth_error(error: Optional[str]) -> str:
    """Translate an identity service error into a message for the user"""
    text = (error or "").lower()
    for needles, message in AUTH_ERROR_MESSAGES:
        if any(needle.lower() in text for needle in needles):
            return message
    return constants.AUTH_UNKNOWN.format(error=error or "Desconocido")

class AuthResult(BaseModel):
    success: bool
    message: Optional[str] = None
    user: Optional[AuthUser] = None
    # Set when a newer attempt (or a sign-out) replaced this one
    stale: bool = False

class AuthService:
    """Registration and sign-in with a time bound and late-result discard"""

    def __init__(self, identity: FirebaseIdentityClient, timeout: float = 15,
                 profile_timeout: float = 5):
        self.identity = identity
        self.timeout = timeout
        self.profile_timeout = profile_timeout
        self.current_user: Optional[AuthUser] = None
        self._generation = 0

    @property
    def is_signed_in(self) -> bool:
        return self.current_user is not None

    async def register(self, usuario: str, rut: str, correo: str, password: str) -> AuthResult:
        if not all(value.strip() for value in (usuario, rut, correo, password)):
            return AuthResult(success=False, message=constants.FILL_ALL_FIELDS)

        profile = {"usuario": usuario, "rut": rut, "correo": correo}
        return await self._run(self._register(correo, password, profile))

    async def sign_in(self, correo: str, password: str) -> AuthResult:
        if not correo.strip() or not password.strip():
            return AuthResult(success=False, message=constants.FILL_ALL_FIELDS)
        return await self._run(self.identity.sign_in(correo, password))

    def sign_out(self):
        self._generation += 1
        self.current_user = None

    async def _register(self, correo: str, password: str, profile: dict) -> AuthUser:
        user = await self.identity.sign_up(correo, password)

        # The account exists at this point; a missing profile does not undo it
        try:
            await asyncio.wait_for(
                self.identity.save_profile(user, profile),
                timeout=self.profile_timeout
            )
        except (IdentityError, asyncio.TimeoutError) as e:
            logger.warning("Profile for %s not saved: %r", user.uid, e)

        return user

    async def _run(self, operation: Awaitable[AuthUser]) -> AuthResult:
        self._generation += 1
        generation = self._generation

        try:
            user = await asyncio.wait_for(operation, timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning("Identity call timed out after %ss", self.timeout)
            if generation != self._generation:
                return AuthResult(success=False, stale=True)
            return AuthResult(success=False, message=constants.AUTH_TIMEOUT)
        except (IdentityError, ValueError) as e:
            # ValueError covers replies that do not parse as a user
            logger.info("Identity call rejected: %s", e)
            if generation != self._generation:
                return AuthResult(success=False, stale=True)
            return AuthResult(success=False, message=classify_auth_error(str(e)))

        if generation != self._generation:
            logger.info("Discarding superseded identity result for %s", user.email)
            return AuthResult(success=False, stale=True)

        self.current_user = user
        return AuthResult(success=True, user=user)
