"""User profile API (sync from the client after sign-in). No auth required."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from pindown.api.v1.dependencies import get_user_repo
from pindown.application.dtos.user import UserUpsert
from pindown.application.interfaces.repositories import IUserRepository
from pindown.core.limiter import limit_writes
from pindown.domain.exceptions import ResourceNotFoundException
from pindown.schemas.common import SuccessResponse, success_response
from pindown.schemas.user import UserUpsertRequest

router = APIRouter()


@router.post("", response_model=SuccessResponse)
@limit_writes
async def upsert_user(
    request: Request,
    body: UserUpsertRequest,
    users: Annotated[IUserRepository, Depends(get_user_repo)],
):
    """Create or update the profile; createdAt is kept from the first write."""
    existing = await users.get_user(body.uid)
    user = await users.upsert_user(
        UserUpsert(
            uid=body.uid,
            email=str(body.email),
            display_name=body.display_name,
            photo_url=body.photo_url,
            email_verified=body.email_verified,
        )
    )
    message = "User updated" if existing is not None else "User created"
    return success_response(user.to_record(), message)


@router.get("/{uid}", response_model=SuccessResponse)
async def get_user(
    uid: str,
    users: Annotated[IUserRepository, Depends(get_user_repo)],
):
    user = await users.get_user(uid)
    if user is None:
        raise ResourceNotFoundException("user", uid)
    return success_response(user.to_record())
