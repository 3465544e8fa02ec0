"""Pin API: create, list, read, update, content, publish, delete.

Thin routes: the AccessGuard decides, the pin repository writes.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from pindown.api.v1.dependencies import (
    get_access_guard,
    get_current_principal,
    get_pin_repo,
)
from pindown.application.dtos.auth import Principal
from pindown.application.dtos.pin import PinCreate, PinMetadataUpdate
from pindown.application.interfaces.repositories import IPinRepository
from pindown.application.services.access_guard import AccessGuard
from pindown.core.limiter import limit_writes
from pindown.domain.enums import Action
from pindown.schemas.common import SuccessResponse, success_response
from pindown.schemas.pin import PinContentRequest, PinCreateRequest, PinUpdateRequest

router = APIRouter()


@router.post("/send", response_model=SuccessResponse, status_code=201)
@limit_writes
async def create_pin(
    request: Request,
    body: PinCreateRequest,
    principal: Annotated[Principal, Depends(get_current_principal)],
    pins: Annotated[IPinRepository, Depends(get_pin_repo)],
):
    """Create an empty pin owned by the caller; content arrives later via /content."""
    meta = body.metadata
    data = PinCreate(
        user_id=principal.user_id,
        data_type=body.data_type,
        title=meta.title if meta else None,
        description=(meta.description or "") if meta else "",
        tags=tuple(meta.tags or ()) if meta else (),
        is_public=meta.is_public if meta else False,
        extra_metadata=dict(meta.model_extra or {}) if meta else {},
    )
    pin = await pins.create_pin(data)
    return success_response({"pid": pin.id, "pin": pin.to_record()}, "Pin created")


@router.get("", response_model=SuccessResponse)
async def list_pins(
    principal: Annotated[Principal, Depends(get_current_principal)],
    pins: Annotated[IPinRepository, Depends(get_pin_repo)],
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
):
    """List the caller's pins (index order), paginated."""
    owned = await pins.get_user_pins(principal.user_id)
    page = owned[offset : offset + limit]
    return success_response(
        {"pins": [p.to_record() for p in page], "total": len(owned)}
    )


@router.get("/{pid}", response_model=SuccessResponse)
async def get_pin(
    pid: str,
    principal: Annotated[Principal, Depends(get_current_principal)],
    guard: Annotated[AccessGuard, Depends(get_access_guard)],
):
    pin = await guard.load_pin(principal, pid, Action.READ)
    return success_response(pin.to_record())


@router.put("/{pid}", response_model=SuccessResponse)
@limit_writes
async def update_pin(
    request: Request,
    pid: str,
    body: PinUpdateRequest,
    principal: Annotated[Principal, Depends(get_current_principal)],
    guard: Annotated[AccessGuard, Depends(get_access_guard)],
    pins: Annotated[IPinRepository, Depends(get_pin_repo)],
):
    """Merge metadata fields; omitted fields are left unchanged."""
    pin = await guard.load_pin(principal, pid, Action.WRITE)
    meta = body.metadata
    patch = PinMetadataUpdate(
        title=meta.title if meta else None,
        description=meta.description if meta else None,
        tags=tuple(meta.tags) if meta and meta.tags is not None else None,
        is_public=meta.is_public if meta else None,
    )
    updated = await pins.update_pin(pin, patch)
    return success_response(updated.to_record(), "Pin updated")


@router.put("/{pid}/content", response_model=SuccessResponse)
@limit_writes
async def update_pin_content(
    request: Request,
    pid: str,
    body: PinContentRequest,
    principal: Annotated[Principal, Depends(get_current_principal)],
    guard: Annotated[AccessGuard, Depends(get_access_guard)],
    pins: Annotated[IPinRepository, Depends(get_pin_repo)],
):
    """Write rendered content; workflow sources are recomputed from it."""
    pin = await guard.load_pin(principal, pid, Action.WRITE)
    updated = await pins.update_content(pin, body.content, body.wid, body.data_type)
    return success_response(updated.to_record(), "Pin content updated")


@router.post("/{pid}/publish", response_model=SuccessResponse)
@limit_writes
async def publish_pin(
    request: Request,
    pid: str,
    principal: Annotated[Principal, Depends(get_current_principal)],
    guard: Annotated[AccessGuard, Depends(get_access_guard)],
    pins: Annotated[IPinRepository, Depends(get_pin_repo)],
):
    pin = await guard.load_pin(principal, pid, Action.WRITE)
    updated = await pins.set_visibility(pin, True)
    return success_response(updated.to_record(), "Pin published")


@router.post("/{pid}/unpublish", response_model=SuccessResponse)
@limit_writes
async def unpublish_pin(
    request: Request,
    pid: str,
    principal: Annotated[Principal, Depends(get_current_principal)],
    guard: Annotated[AccessGuard, Depends(get_access_guard)],
    pins: Annotated[IPinRepository, Depends(get_pin_repo)],
):
    pin = await guard.load_pin(principal, pid, Action.WRITE)
    updated = await pins.set_visibility(pin, False)
    return success_response(updated.to_record(), "Pin unpublished")


@router.delete("/{pid}", response_model=SuccessResponse)
@limit_writes
async def delete_pin(
    request: Request,
    pid: str,
    principal: Annotated[Principal, Depends(get_current_principal)],
    guard: Annotated[AccessGuard, Depends(get_access_guard)],
    pins: Annotated[IPinRepository, Depends(get_pin_repo)],
):
    """Delete the pin together with its blocks, datasets and workflow data."""
    pin = await guard.load_pin(principal, pid, Action.DELETE)
    await pins.delete_pin(pin)
    return success_response({"pid": pid}, "Pin deleted")
