"""Pinboard API: CRUD plus adding and removing pins.

Adding a pin requires that the caller may read it; the pin list itself is
updated with a conditional write so concurrent adds are not lost.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from pindown.api.v1.dependencies import (
    get_access_guard,
    get_current_principal,
    get_pinboard_repo,
)
from pindown.application.dtos.auth import Principal
from pindown.application.dtos.pinboard import PinboardCreate, PinboardUpdate
from pindown.application.interfaces.repositories import IPinboardRepository
from pindown.application.services.access_guard import AccessGuard
from pindown.core.limiter import limit_writes
from pindown.domain.enums import Action
from pindown.schemas.common import SuccessResponse, success_response
from pindown.schemas.pinboard import (
    PinboardAddPinRequest,
    PinboardCreateRequest,
    PinboardUpdateRequest,
)

router = APIRouter()


@router.post("", response_model=SuccessResponse, status_code=201)
@limit_writes
async def create_pinboard(
    request: Request,
    body: PinboardCreateRequest,
    principal: Annotated[Principal, Depends(get_current_principal)],
    pinboards: Annotated[IPinboardRepository, Depends(get_pinboard_repo)],
):
    board = await pinboards.create_pinboard(
        PinboardCreate(
            user_id=principal.user_id,
            name=body.name,
            description=body.description,
            pins=tuple(body.pins),
            tags=tuple(body.tags),
            is_public=body.is_public,
        )
    )
    return success_response(board.to_record(), "Pinboard created")


@router.get("", response_model=SuccessResponse)
async def list_pinboards(
    principal: Annotated[Principal, Depends(get_current_principal)],
    pinboards: Annotated[IPinboardRepository, Depends(get_pinboard_repo)],
):
    boards = await pinboards.get_user_pinboards(principal.user_id)
    return success_response([b.to_record() for b in boards])


@router.get("/{pinboard_id}", response_model=SuccessResponse)
async def get_pinboard(
    pinboard_id: str,
    principal: Annotated[Principal, Depends(get_current_principal)],
    guard: Annotated[AccessGuard, Depends(get_access_guard)],
):
    board = await guard.load_pinboard(principal, pinboard_id, Action.READ)
    return success_response(board.to_record())


@router.put("/{pinboard_id}", response_model=SuccessResponse)
@limit_writes
async def update_pinboard(
    request: Request,
    pinboard_id: str,
    body: PinboardUpdateRequest,
    principal: Annotated[Principal, Depends(get_current_principal)],
    guard: Annotated[AccessGuard, Depends(get_access_guard)],
    pinboards: Annotated[IPinboardRepository, Depends(get_pinboard_repo)],
):
    board = await guard.load_pinboard(principal, pinboard_id, Action.WRITE)
    updated = await pinboards.update_pinboard(
        board,
        PinboardUpdate(
            name=body.name,
            description=body.description,
            pins=tuple(body.pins) if body.pins is not None else None,
            tags=tuple(body.tags) if body.tags is not None else None,
            is_public=body.is_public,
        ),
    )
    return success_response(updated.to_record(), "Pinboard updated")


@router.delete("/{pinboard_id}", response_model=SuccessResponse)
@limit_writes
async def delete_pinboard(
    request: Request,
    pinboard_id: str,
    principal: Annotated[Principal, Depends(get_current_principal)],
    guard: Annotated[AccessGuard, Depends(get_access_guard)],
    pinboards: Annotated[IPinboardRepository, Depends(get_pinboard_repo)],
):
    board = await guard.load_pinboard(principal, pinboard_id, Action.DELETE)
    await pinboards.delete_pinboard(board)
    return success_response({"id": pinboard_id}, "Pinboard deleted")


@router.post("/{pinboard_id}/pins", response_model=SuccessResponse)
@limit_writes
async def add_pin(
    request: Request,
    pinboard_id: str,
    body: PinboardAddPinRequest,
    principal: Annotated[Principal, Depends(get_current_principal)],
    guard: Annotated[AccessGuard, Depends(get_access_guard)],
    pinboards: Annotated[IPinboardRepository, Depends(get_pinboard_repo)],
):
    await guard.load_pinboard(principal, pinboard_id, Action.WRITE)
    await guard.load_pin(principal, body.pin_id, Action.READ)
    board = await pinboards.add_pin_to_pinboard(pinboard_id, body.pin_id)
    return success_response(board.to_record(), "Pin added to pinboard")


@router.delete("/{pinboard_id}/pins/{pin_id}", response_model=SuccessResponse)
@limit_writes
async def remove_pin(
    request: Request,
    pinboard_id: str,
    pin_id: str,
    principal: Annotated[Principal, Depends(get_current_principal)],
    guard: Annotated[AccessGuard, Depends(get_access_guard)],
    pinboards: Annotated[IPinboardRepository, Depends(get_pinboard_repo)],
):
    await guard.load_pinboard(principal, pinboard_id, Action.WRITE)
    board = await pinboards.remove_pin_from_pinboard(pinboard_id, pin_id)
    return success_response(board.to_record(), "Pin removed from pinboard")
