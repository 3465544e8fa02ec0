"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the document store, repositories, identity
resolution and access control. The store and verifier are created in the
lifespan and read from request.app.state; everything else is built per
request from them. Routes depend only on these dependencies, not on infra
directly.
"""

from __future__ import annotations

import json
import logging
from typing import Annotated

from fastapi import Depends, HTTPException, Request

from pindown.application.dtos.auth import Credentials, Principal
from pindown.application.interfaces.repositories import (
    IApiKeyRepository,
    IBlockRepository,
    IDatasetRepository,
    IPinboardRepository,
    IPinRepository,
    IUserRepository,
    IWorkflowDataRepository,
)
from pindown.application.interfaces.services import (
    IDocumentStore,
    IIdentityVerifier,
    IIdGenerator,
)
from pindown.application.services.access_guard import AccessGuard
from pindown.application.services.access_policy import AccessPolicy
from pindown.application.services.api_key_hasher import ApiKeyHasher
from pindown.application.services.identity_resolver import IdentityResolver
from pindown.core.config import get_settings
from pindown.infrastructure.firebase.ids import IdGenerator
from pindown.infrastructure.firebase.repositories import (
    FirebaseApiKeyRepository,
    FirebaseBlockRepository,
    FirebaseDatasetRepository,
    FirebasePinboardRepository,
    FirebasePinRepository,
    FirebaseUserRepository,
    FirebaseWorkflowDataRepository,
)

logger = logging.getLogger(__name__)

_BODY_METHODS = ("POST", "PUT", "PATCH")


# ---------------------------------------------------------------------------
# Infrastructure (from lifespan)
# ---------------------------------------------------------------------------


def get_document_store(request: Request) -> IDocumentStore:
    """Return the store created at startup; 503 if startup did not create one."""
    store = getattr(request.app.state, "document_store", None)
    if store is None:
        raise HTTPException(status_code=503, detail="Document store not configured")
    return store


def get_identity_verifier(request: Request) -> IIdentityVerifier:
    verifier = getattr(request.app.state, "identity_verifier", None)
    if verifier is None:
        raise HTTPException(status_code=503, detail="Identity verifier not configured")
    return verifier


def get_access_policy() -> AccessPolicy:
    return AccessPolicy.from_settings(get_settings())


def get_api_key_hasher() -> ApiKeyHasher:
    return ApiKeyHasher(get_settings().api_key_salt.get_secret_value())


def get_id_generator(
    store: Annotated[IDocumentStore, Depends(get_document_store)],
) -> IIdGenerator:
    return IdGenerator(store)


# ---------------------------------------------------------------------------
# Repositories
# ---------------------------------------------------------------------------


def get_pin_repo(
    store: Annotated[IDocumentStore, Depends(get_document_store)],
    ids: Annotated[IIdGenerator, Depends(get_id_generator)],
) -> IPinRepository:
    return FirebasePinRepository(
        store, ids, max_cas_retries=get_settings().store_max_cas_retries
    )


def get_block_repo(
    store: Annotated[IDocumentStore, Depends(get_document_store)],
    ids: Annotated[IIdGenerator, Depends(get_id_generator)],
) -> IBlockRepository:
    return FirebaseBlockRepository(
        store, ids, max_cas_retries=get_settings().store_max_cas_retries
    )


def get_dataset_repo(
    store: Annotated[IDocumentStore, Depends(get_document_store)],
    ids: Annotated[IIdGenerator, Depends(get_id_generator)],
) -> IDatasetRepository:
    return FirebaseDatasetRepository(
        store, ids, max_cas_retries=get_settings().store_max_cas_retries
    )


def get_pinboard_repo(
    store: Annotated[IDocumentStore, Depends(get_document_store)],
    ids: Annotated[IIdGenerator, Depends(get_id_generator)],
) -> IPinboardRepository:
    return FirebasePinboardRepository(
        store, ids, max_cas_retries=get_settings().store_max_cas_retries
    )


def get_api_key_repo(
    store: Annotated[IDocumentStore, Depends(get_document_store)],
    ids: Annotated[IIdGenerator, Depends(get_id_generator)],
    hasher: Annotated[ApiKeyHasher, Depends(get_api_key_hasher)],
) -> IApiKeyRepository:
    return FirebaseApiKeyRepository(store, ids, hasher)


def get_user_repo(
    store: Annotated[IDocumentStore, Depends(get_document_store)],
) -> IUserRepository:
    return FirebaseUserRepository(store)


def get_workflow_data_repo(
    store: Annotated[IDocumentStore, Depends(get_document_store)],
) -> IWorkflowDataRepository:
    return FirebaseWorkflowDataRepository(store)


# ---------------------------------------------------------------------------
# Identity and access
# ---------------------------------------------------------------------------


def get_identity_resolver(
    verifier: Annotated[IIdentityVerifier, Depends(get_identity_verifier)],
    api_keys: Annotated[IApiKeyRepository, Depends(get_api_key_repo)],
    hasher: Annotated[ApiKeyHasher, Depends(get_api_key_hasher)],
    policy: Annotated[AccessPolicy, Depends(get_access_policy)],
) -> IdentityResolver:
    return IdentityResolver(verifier, api_keys, hasher, policy)


def get_access_guard(
    pins: Annotated[IPinRepository, Depends(get_pin_repo)],
    pinboards: Annotated[IPinboardRepository, Depends(get_pinboard_repo)],
    policy: Annotated[AccessPolicy, Depends(get_access_policy)],
) -> AccessGuard:
    return AccessGuard(pins, pinboards, policy)


async def _read_credentials(request: Request) -> Credentials:
    """Authorization header plus the api_key field of a JSON body, if any."""
    api_key = None
    if request.method in _BODY_METHODS:
        raw = await request.body()
        if raw:
            try:
                body = json.loads(raw)
            except (json.JSONDecodeError, UnicodeDecodeError):
                logger.debug("Request body is not JSON; ignoring body api_key")
                body = None
            if isinstance(body, dict) and isinstance(body.get("api_key"), str):
                api_key = body["api_key"]
    return Credentials(
        authorization=request.headers.get("Authorization"),
        api_key=api_key,
    )


async def get_current_principal(
    request: Request,
    resolver: Annotated[IdentityResolver, Depends(get_identity_resolver)],
) -> Principal:
    """Resolve the caller or raise 401 (AUTH_REQUIRED / AUTH_INVALID)."""
    principal = await resolver.resolve(await _read_credentials(request))
    request.state.principal = principal
    return principal


async def get_optional_principal(
    request: Request,
    resolver: Annotated[IdentityResolver, Depends(get_identity_resolver)],
) -> Principal | None:
    """Resolve the caller if credentials are present; None for anonymous callers."""
    return await resolver.resolve_optional(await _read_credentials(request))
