"""Block API, scoped to a parent pin (/pins/{pid}/blocks)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from pindown.api.v1.dependencies import (
    get_access_guard,
    get_block_repo,
    get_current_principal,
)
from pindown.application.dtos.auth import Principal
from pindown.application.dtos.block import BlockCreate, BlockUpdate
from pindown.application.interfaces.repositories import IBlockRepository
from pindown.application.services.access_guard import AccessGuard
from pindown.core.limiter import limit_writes
from pindown.domain.enums import Action
from pindown.domain.exceptions import ResourceNotFoundException
from pindown.schemas.block import BlockCreateRequest, BlockUpdateRequest
from pindown.schemas.common import SuccessResponse, success_response

router = APIRouter()


@router.post("/{pid}/blocks", response_model=SuccessResponse, status_code=201)
@limit_writes
async def create_block(
    request: Request,
    pid: str,
    body: BlockCreateRequest,
    principal: Annotated[Principal, Depends(get_current_principal)],
    guard: Annotated[AccessGuard, Depends(get_access_guard)],
    blocks: Annotated[IBlockRepository, Depends(get_block_repo)],
):
    await guard.authorize_pin_child(principal, pid, Action.WRITE)
    block = await blocks.create_block(
        pid,
        BlockCreate(
            name=body.name, type=body.type, template=body.template, order=body.order
        ),
    )
    return success_response(block.to_record(), "Block created")


@router.get("/{pid}/blocks", response_model=SuccessResponse)
async def list_blocks(
    pid: str,
    principal: Annotated[Principal, Depends(get_current_principal)],
    guard: Annotated[AccessGuard, Depends(get_access_guard)],
    blocks: Annotated[IBlockRepository, Depends(get_block_repo)],
):
    """List blocks in display order."""
    await guard.authorize_pin_child(principal, pid, Action.READ)
    items = await blocks.get_pin_blocks(pid)
    return success_response([b.to_record() for b in items])


@router.get("/{pid}/blocks/{block_id}", response_model=SuccessResponse)
async def get_block(
    pid: str,
    block_id: str,
    principal: Annotated[Principal, Depends(get_current_principal)],
    guard: Annotated[AccessGuard, Depends(get_access_guard)],
    blocks: Annotated[IBlockRepository, Depends(get_block_repo)],
):
    await guard.authorize_pin_child(principal, pid, Action.READ)
    block = await blocks.get_block(pid, block_id)
    if block is None:
        raise ResourceNotFoundException("block", block_id)
    return success_response(block.to_record())


@router.put("/{pid}/blocks/{block_id}", response_model=SuccessResponse)
@limit_writes
async def update_block(
    request: Request,
    pid: str,
    block_id: str,
    body: BlockUpdateRequest,
    principal: Annotated[Principal, Depends(get_current_principal)],
    guard: Annotated[AccessGuard, Depends(get_access_guard)],
    blocks: Annotated[IBlockRepository, Depends(get_block_repo)],
):
    await guard.authorize_pin_child(principal, pid, Action.WRITE)
    block = await blocks.update_block(
        pid,
        block_id,
        BlockUpdate(
            name=body.name, type=body.type, template=body.template, order=body.order
        ),
    )
    return success_response(block.to_record(), "Block updated")


@router.delete("/{pid}/blocks/{block_id}", response_model=SuccessResponse)
@limit_writes
async def delete_block(
    request: Request,
    pid: str,
    block_id: str,
    principal: Annotated[Principal, Depends(get_current_principal)],
    guard: Annotated[AccessGuard, Depends(get_access_guard)],
    blocks: Annotated[IBlockRepository, Depends(get_block_repo)],
):
    await guard.authorize_pin_child(principal, pid, Action.DELETE)
    await blocks.delete_block(pid, block_id)
    return success_response({"id": block_id}, "Block deleted")
