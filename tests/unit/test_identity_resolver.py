"""IdentityResolver unit tests with mocked verifier and key repository."""

from unittest.mock import AsyncMock

import pytest

from pindown.application.dtos.api_key import ApiKey
from pindown.application.dtos.auth import Credentials
from pindown.application.interfaces.services import IdentityVerificationError
from pindown.application.services.access_policy import AccessPolicy
from pindown.application.services.api_key_hasher import ApiKeyHasher
from pindown.application.services.identity_resolver import (
    IdentityResolver,
    parse_authorization,
)
from pindown.domain.enums import AuthMethod
from pindown.domain.exceptions import AuthenticationException

HASHER = ApiKeyHasher("salt")


def _key(user_id: str = "alice") -> ApiKey:
    return ApiKey(
        id="key_1",
        user_id=user_id,
        name="ci",
        key_hash=HASHER.hash("pk_secret"),
        permissions=("workflow_data:write",),
    )


@pytest.fixture
def verifier() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def api_keys() -> AsyncMock:
    repo = AsyncMock()
    repo.find_active_by_hash.return_value = None
    return repo


def _resolver(verifier, api_keys, policy: AccessPolicy | None = None) -> IdentityResolver:
    return IdentityResolver(verifier, api_keys, HASHER, policy or AccessPolicy())


class TestParseAuthorization:
    def test_bearer(self) -> None:
        assert parse_authorization("Bearer abc") == ("bearer", "abc")

    def test_apikey_scheme_case_insensitive(self) -> None:
        assert parse_authorization("APIKEY pk_x") == ("apikey", "pk_x")

    @pytest.mark.parametrize("header", [None, "", "Bearer", "Bearer   "])
    def test_unusable(self, header) -> None:
        assert parse_authorization(header) is None


class TestResolve:
    async def test_bearer_token(self, verifier: AsyncMock, api_keys: AsyncMock) -> None:
        verifier.verify.return_value = "alice"
        principal = await _resolver(verifier, api_keys).resolve(
            Credentials(authorization="Bearer good")
        )
        assert principal.user_id == "alice"
        assert principal.auth_method is AuthMethod.TOKEN
        api_keys.find_active_by_hash.assert_not_awaited()

    async def test_api_key_header(self, verifier: AsyncMock, api_keys: AsyncMock) -> None:
        api_keys.find_active_by_hash.return_value = _key()
        principal = await _resolver(verifier, api_keys).resolve(
            Credentials(authorization="ApiKey pk_secret")
        )
        assert principal.user_id == "alice"
        assert principal.auth_method is AuthMethod.API_KEY
        assert principal.permissions == ("workflow_data:write",)
        api_keys.find_active_by_hash.assert_awaited_once_with(HASHER.hash("pk_secret"))
        verifier.verify.assert_not_awaited()

    async def test_body_api_key(self, verifier: AsyncMock, api_keys: AsyncMock) -> None:
        api_keys.find_active_by_hash.return_value = _key()
        principal = await _resolver(verifier, api_keys).resolve(
            Credentials(api_key="pk_secret")
        )
        assert principal.auth_method is AuthMethod.API_KEY

    async def test_rejected_token_falls_through_to_body_key(
        self, verifier: AsyncMock, api_keys: AsyncMock
    ) -> None:
        verifier.verify.side_effect = IdentityVerificationError("expired")
        api_keys.find_active_by_hash.return_value = _key("bob")
        principal = await _resolver(verifier, api_keys).resolve(
            Credentials(authorization="Bearer stale", api_key="pk_secret")
        )
        assert principal.user_id == "bob"

    async def test_nothing_resolves_is_auth_required(
        self, verifier: AsyncMock, api_keys: AsyncMock
    ) -> None:
        with pytest.raises(AuthenticationException) as exc_info:
            await _resolver(verifier, api_keys).resolve(Credentials())
        assert exc_info.value.error_code == "AUTH_REQUIRED"

    async def test_unknown_key_is_auth_required(
        self, verifier: AsyncMock, api_keys: AsyncMock
    ) -> None:
        with pytest.raises(AuthenticationException) as exc_info:
            await _resolver(verifier, api_keys).resolve(Credentials(api_key="pk_nope"))
        assert exc_info.value.error_code == "AUTH_REQUIRED"

    async def test_unexpected_failure_is_auth_invalid(
        self, verifier: AsyncMock, api_keys: AsyncMock
    ) -> None:
        api_keys.find_active_by_hash.side_effect = RuntimeError("store down")
        with pytest.raises(AuthenticationException) as exc_info:
            await _resolver(verifier, api_keys).resolve(Credentials(api_key="pk_x"))
        assert exc_info.value.error_code == "AUTH_INVALID"

    async def test_dev_bypass_skips_verification(
        self, verifier: AsyncMock, api_keys: AsyncMock
    ) -> None:
        policy = AccessPolicy(dev_auth_bypass=True, dev_user_id="dev")
        principal = await _resolver(verifier, api_keys, policy).resolve(
            Credentials(authorization="Bearer whatever")
        )
        assert principal.user_id == "dev"
        assert principal.auth_method is AuthMethod.DEVELOPMENT
        verifier.verify.assert_not_awaited()


class TestResolveOptional:
    async def test_anonymous(self, verifier: AsyncMock, api_keys: AsyncMock) -> None:
        assert await _resolver(verifier, api_keys).resolve_optional(Credentials()) is None

    async def test_failure_is_anonymous(
        self, verifier: AsyncMock, api_keys: AsyncMock
    ) -> None:
        api_keys.find_active_by_hash.side_effect = RuntimeError("boom")
        assert (
            await _resolver(verifier, api_keys).resolve_optional(Credentials(api_key="k"))
            is None
        )
