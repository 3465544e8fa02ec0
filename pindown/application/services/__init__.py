"""Application services: identity resolution, access control, key hashing."""

from pindown.application.services.access_guard import AccessGuard
from pindown.application.services.access_policy import AccessPolicy
from pindown.application.services.api_key_hasher import ApiKeyHasher
from pindown.application.services.identity_resolver import IdentityResolver

__all__ = [
    "AccessGuard",
    "AccessPolicy",
    "ApiKeyHasher",
    "IdentityResolver",
]
