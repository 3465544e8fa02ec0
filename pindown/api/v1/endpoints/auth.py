"""API key management for the authenticated caller.

The plaintext key is returned once, on creation; only its salted hash is stored.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from pindown.api.v1.dependencies import get_api_key_repo, get_current_principal
from pindown.application.dtos.auth import Principal
from pindown.application.interfaces.repositories import IApiKeyRepository
from pindown.core.limiter import limit_create_api_key, limit_writes
from pindown.schemas.auth import ApiKeyCreateRequest
from pindown.schemas.common import SuccessResponse, success_response

router = APIRouter()


@router.post("/api-keys", response_model=SuccessResponse, status_code=201)
@limit_create_api_key
async def create_api_key(
    request: Request,
    body: ApiKeyCreateRequest,
    principal: Annotated[Principal, Depends(get_current_principal)],
    api_keys: Annotated[IApiKeyRepository, Depends(get_api_key_repo)],
):
    key, plaintext = await api_keys.create_api_key(
        principal.user_id, body.name, body.permissions
    )
    data = key.to_public()
    data["key"] = plaintext
    return success_response(data, "API key created. Store it now; it will not be shown again.")


@router.get("/api-keys", response_model=SuccessResponse)
async def list_api_keys(
    principal: Annotated[Principal, Depends(get_current_principal)],
    api_keys: Annotated[IApiKeyRepository, Depends(get_api_key_repo)],
):
    keys = await api_keys.list_api_keys(principal.user_id)
    return success_response([k.to_public() for k in keys])


@router.delete("/api-keys/{key_id}", response_model=SuccessResponse)
@limit_writes
async def revoke_api_key(
    request: Request,
    key_id: str,
    principal: Annotated[Principal, Depends(get_current_principal)],
    api_keys: Annotated[IApiKeyRepository, Depends(get_api_key_repo)],
):
    await api_keys.revoke_api_key(principal.user_id, key_id)
    return success_response({"id": key_id}, "API key revoked")
