"""
Tests for AuthService and auth error classification.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from storefront import constants
from storefront.api.identity_client import AuthUser, FirebaseIdentityClient
from storefront.errors import IdentityError
from storefront.services.auth_service import AuthService, classify_auth_error


USER = AuthUser(uid="u-1", email="ana@example.com", id_token="token")


@pytest.fixture
def identity():
    client = MagicMock(spec=FirebaseIdentityClient)
    client.sign_up = AsyncMock(return_value=USER)
    client.sign_in = AsyncMock(return_value=USER)
    client.save_profile = AsyncMock(return_value=None)
    return client


@pytest.fixture
def auth(identity):
    return AuthService(identity, timeout=1, profile_timeout=0.05)


class TestClassify:

    @pytest.mark.parametrize("error, expected", [
        ("The email address is already in use by another account.", constants.EMAIL_IN_USE),
        ("EMAIL_EXISTS", constants.EMAIL_IN_USE),
        ("The email address is badly formatted.", constants.EMAIL_INVALID),
        ("INVALID_EMAIL", constants.EMAIL_INVALID),
        ("[ ERROR_WEAK_PASSWORD ] weak-password", constants.WEAK_PASSWORD),
        ("WEAK_PASSWORD : Password should be at least 6 characters", constants.WEAK_PASSWORD),
        ("A Network error has occurred", constants.NETWORK_ERROR),
        ("INVALID_LOGIN_CREDENTIALS", constants.WRONG_CREDENTIALS),
    ])
    def test_known_errors(self, error, expected):
        assert classify_auth_error(error) == expected

    def test_unknown_error(self):
        assert classify_auth_error("TOO_MANY_ATTEMPTS") == "Error: TOO_MANY_ATTEMPTS. Intenta nuevamente."

    def test_missing_error(self):
        assert classify_auth_error(None) == "Error: Desconocido. Intenta nuevamente."


class TestRegister:

    @pytest.mark.asyncio
    async def test_blank_fields_skip_remote(self, auth, identity):
        result = await auth.register("ana", " ", "ana@example.com", "secreto")
        assert not result.success
        assert result.message == constants.FILL_ALL_FIELDS
        identity.sign_up.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_register_saves_profile(self, auth, identity):
        result = await auth.register("ana", "11.111.111-1", "ana@example.com", "secreto")

        assert result.success
        assert auth.current_user == USER
        identity.save_profile.assert_awaited_once_with(
            USER, {"usuario": "ana", "rut": "11.111.111-1", "correo": "ana@example.com"}
        )

    @pytest.mark.asyncio
    async def test_profile_timeout_still_succeeds(self, auth, identity):
        async def hang(user, profile):
            await asyncio.sleep(10)

        identity.save_profile.side_effect = hang
        result = await auth.register("ana", "1-9", "ana@example.com", "secreto")
        assert result.success

    @pytest.mark.asyncio
    async def test_profile_failure_still_succeeds(self, auth, identity):
        identity.save_profile.side_effect = IdentityError("PERMISSION_DENIED")
        result = await auth.register("ana", "1-9", "ana@example.com", "secreto")
        assert result.success

    @pytest.mark.asyncio
    async def test_email_in_use(self, auth, identity):
        identity.sign_up.side_effect = IdentityError("EMAIL_EXISTS")
        result = await auth.register("ana", "1-9", "ana@example.com", "secreto")
        assert not result.success
        assert result.message == constants.EMAIL_IN_USE
        assert auth.current_user is None


class TestSignIn:

    @pytest.mark.asyncio
    async def test_sign_in_and_out(self, auth):
        result = await auth.sign_in("ana@example.com", "secreto")
        assert result.success
        assert auth.is_signed_in

        auth.sign_out()
        assert not auth.is_signed_in

    @pytest.mark.asyncio
    async def test_timeout_reports_slow_connection(self, identity):
        async def hang(email, password):
            await asyncio.sleep(10)

        identity.sign_in.side_effect = hang
        auth = AuthService(identity, timeout=0.05)

        result = await auth.sign_in("ana@example.com", "secreto")

        assert not result.success
        assert result.message == constants.AUTH_TIMEOUT
        assert auth.current_user is None

    @pytest.mark.asyncio
    async def test_result_after_sign_out_is_discarded(self, auth, identity):
        release = asyncio.Event()

        async def slow_sign_in(email, password):
            await release.wait()
            return USER

        identity.sign_in.side_effect = slow_sign_in
        pending = asyncio.create_task(auth.sign_in("ana@example.com", "secreto"))
        await asyncio.sleep(0)

        auth.sign_out()
        release.set()
        result = await pending

        assert result.stale
        assert not result.success
        assert auth.current_user is None

    @pytest.mark.asyncio
    async def test_older_attempt_is_superseded(self, auth, identity):
        release = asyncio.Event()
        other = AuthUser(uid="u-2", email="bea@example.com")

        async def sign_in(email, password):
            if email == "ana@example.com":
                await release.wait()
                return USER
            return other

        identity.sign_in.side_effect = sign_in
        first = asyncio.create_task(auth.sign_in("ana@example.com", "secreto"))
        await asyncio.sleep(0)

        second = await auth.sign_in("bea@example.com", "secreto")
        release.set()
        first_result = await first

        assert second.success
        assert first_result.stale
        assert auth.current_user == other

    @pytest.mark.asyncio
    async def test_unreadable_reply_comes_back_as_result(self, auth, identity):
        async def bad_reply(email, password):
            return AuthUser.model_validate({"email": email})

        identity.sign_in.side_effect = bad_reply

        result = await auth.sign_in("ana@example.com", "secreto")

        assert not result.success
        assert result.message.startswith("Error: ")
        assert auth.current_user is None
