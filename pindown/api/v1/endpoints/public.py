"""Public read API: shareable views of pins and pinboards.

Credentials are optional. Anonymous callers see public resources only; an
authenticated owner also sees their private ones.
"""

import asyncio
from typing import Annotated, Any

from fastapi import APIRouter, Depends

from pindown.api.v1.dependencies import (
    get_access_guard,
    get_block_repo,
    get_optional_principal,
    get_pin_repo,
)
from pindown.application.dtos.auth import Principal
from pindown.application.dtos.block import Block
from pindown.application.dtos.pin import Pin
from pindown.application.interfaces.repositories import IBlockRepository, IPinRepository
from pindown.application.services.access_guard import AccessGuard
from pindown.domain.enums import Action
from pindown.domain.value_objects import is_valid_key
from pindown.schemas.common import SuccessResponse, success_response

router = APIRouter()


def _block_view(block: Block) -> dict[str, Any]:
    return {
        "id": block.id,
        "name": block.name,
        "type": block.type.value,
        "template": block.template,
        "order": block.order if block.order is not None else 0,
    }


def _pin_view(pin: Pin, blocks: list[Block]) -> dict[str, Any]:
    return {
        "id": pin.id,
        "metadata": {
            "title": pin.metadata.title,
            "description": pin.metadata.description,
            "tags": list(pin.metadata.tags),
            "created_at": pin.metadata.created_at,
            "updated_at": pin.metadata.updated_at,
        },
        "blocks": [_block_view(b) for b in blocks],
    }


def _board_item(pin: Pin, blocks: list[Block]) -> dict[str, Any]:
    return {
        "id": pin.id,
        "name": pin.metadata.title,
        "description": pin.metadata.description,
        "content": pin.content,
        "blocks": [_block_view(b) for b in blocks],
        "created_at": pin.metadata.created_at,
        "author": pin.user_id,
        "metadata": {"tags": list(pin.metadata.tags)},
    }


@router.get("/pins/{pid}", response_model=SuccessResponse)
async def get_public_pin(
    pid: str,
    principal: Annotated[Principal | None, Depends(get_optional_principal)],
    guard: Annotated[AccessGuard, Depends(get_access_guard)],
    blocks: Annotated[IBlockRepository, Depends(get_block_repo)],
):
    pin = await guard.load_pin(principal, pid, Action.READ)
    items = await blocks.get_pin_blocks(pid)
    return success_response({"pin": _pin_view(pin, items)})


@router.get("/pinboards/{pinboard_id}", response_model=SuccessResponse)
async def get_public_pinboard(
    pinboard_id: str,
    principal: Annotated[Principal | None, Depends(get_optional_principal)],
    guard: Annotated[AccessGuard, Depends(get_access_guard)],
    pins: Annotated[IPinRepository, Depends(get_pin_repo)],
    blocks: Annotated[IBlockRepository, Depends(get_block_repo)],
):
    """Expand the board's pins with their blocks.

    Pins that no longer exist, that the caller may not read, or whose stored
    id is not a valid key are skipped.
    """
    board = await guard.load_pinboard(principal, pinboard_id, Action.READ)
    pin_ids = [pin_id for pin_id in board.pins if is_valid_key(pin_id)]
    loaded = await asyncio.gather(*(pins.get_pin(pin_id) for pin_id in pin_ids))
    visible = [p for p in loaded if p is not None and guard.can_read_pin(principal, p)]
    block_lists = await asyncio.gather(*(blocks.get_pin_blocks(p.id) for p in visible))
    return success_response(
        {
            "pinboard": {
                "id": board.id,
                "name": board.name,
                "description": board.description,
                "tags": list(board.tags),
                "author": board.user_id,
                "created_at": board.created_at,
                "updated_at": board.updated_at,
                "pins": [_board_item(p, b) for p, b in zip(visible, block_lists)],
            }
        }
    )
