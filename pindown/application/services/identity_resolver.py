"""Identity resolution: turn request credentials into a Principal.

Order: development bypass, bearer ID token, API key (Authorization: ApiKey
header or body api_key). A rejected bearer token falls through to the API
key. Error messages never say which scheme came close.
"""

from __future__ import annotations

import logging

from pindown.application.dtos.auth import TOKEN_PERMISSIONS, Credentials, Principal
from pindown.application.interfaces.repositories import IApiKeyRepository
from pindown.application.interfaces.services import (
    IdentityVerificationError,
    IIdentityVerifier,
)
from pindown.application.services.access_policy import AccessPolicy
from pindown.application.services.api_key_hasher import ApiKeyHasher
from pindown.domain.enums import AuthMethod
from pindown.domain.exceptions import AuthenticationException

logger = logging.getLogger(__name__)


def parse_authorization(header: str | None) -> tuple[str, str] | None:
    """Split 'Scheme value' into (lowercased scheme, value); None if unusable."""
    if not header:
        return None
    scheme, _, value = header.strip().partition(" ")
    value = value.strip()
    if not scheme or not value:
        return None
    return scheme.lower(), value


class IdentityResolver:
    def __init__(
        self,
        verifier: IIdentityVerifier,
        api_keys: IApiKeyRepository,
        hasher: ApiKeyHasher,
        policy: AccessPolicy,
    ) -> None:
        self._verifier = verifier
        self._api_keys = api_keys
        self._hasher = hasher
        self._policy = policy

    async def resolve(self, credentials: Credentials) -> Principal:
        """Return the caller's Principal.

        Raises:
            AuthenticationException: AUTH_REQUIRED if no credential resolved,
                AUTH_INVALID if resolution failed unexpectedly.
        """
        try:
            principal = await self._resolve(credentials)
        except Exception:
            logger.exception("Authentication failed unexpectedly")
            raise AuthenticationException.invalid() from None
        if principal is None:
            raise AuthenticationException.required()
        return principal

    async def resolve_optional(self, credentials: Credentials) -> Principal | None:
        """Like resolve, but returns None instead of raising (public routes)."""
        try:
            return await self._resolve(credentials)
        except Exception:
            logger.exception("Optional authentication failed; continuing anonymously")
            return None

    async def _resolve(self, credentials: Credentials) -> Principal | None:
        dev = self._policy.development_principal()
        if dev is not None:
            return dev

        parsed = parse_authorization(credentials.authorization)
        if parsed and parsed[0] == "bearer":
            try:
                uid = await self._verifier.verify(parsed[1])
            except IdentityVerificationError as e:
                logger.warning("Invalid bearer token: %s", e)
            else:
                return Principal(uid, AuthMethod.TOKEN, TOKEN_PERMISSIONS)

        api_key = parsed[1] if parsed and parsed[0] == "apikey" else credentials.api_key
        if api_key:
            key = await self._api_keys.find_active_by_hash(self._hasher.hash(api_key))
            if key is not None:
                return Principal(key.user_id, AuthMethod.API_KEY, key.permissions)
            logger.warning("API key did not match an active key")
        return None
