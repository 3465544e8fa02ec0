"""Workflow data channel: automation runs push results keyed by pin and workflow id.

Writes usually authenticate with an API key in the body; the owner writes,
the owner or anyone (for a public pin) reads.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from pindown.api.v1.dependencies import (
    get_access_guard,
    get_current_principal,
    get_workflow_data_repo,
)
from pindown.application.dtos.auth import Principal
from pindown.application.interfaces.repositories import IWorkflowDataRepository
from pindown.application.services.access_guard import AccessGuard
from pindown.core.limiter import limit_writes
from pindown.domain.enums import Action
from pindown.domain.exceptions import ResourceNotFoundException
from pindown.schemas.common import SuccessResponse, success_response
from pindown.schemas.workflow_data import WorkflowDataRequest

router = APIRouter()


@router.put("/{pid}/{wid}", response_model=SuccessResponse)
@limit_writes
async def put_workflow_data(
    request: Request,
    pid: str,
    wid: str,
    body: WorkflowDataRequest,
    principal: Annotated[Principal, Depends(get_current_principal)],
    guard: Annotated[AccessGuard, Depends(get_access_guard)],
    workflow_data: Annotated[IWorkflowDataRepository, Depends(get_workflow_data_repo)],
):
    """Replace the workflow's data (last writer wins)."""
    await guard.authorize_pin_child(principal, pid, Action.WRITE)
    await workflow_data.put(pid, wid, body.data)
    return success_response({"pid": pid, "wid": wid}, "Workflow data updated")


@router.get("/{pid}/{wid}", response_model=SuccessResponse)
async def get_workflow_data(
    pid: str,
    wid: str,
    principal: Annotated[Principal, Depends(get_current_principal)],
    guard: Annotated[AccessGuard, Depends(get_access_guard)],
    workflow_data: Annotated[IWorkflowDataRepository, Depends(get_workflow_data_repo)],
):
    await guard.authorize_pin_child(principal, pid, Action.READ)
    data = await workflow_data.get(pid, wid)
    if data is None:
        raise ResourceNotFoundException("workflow_data", wid)
    return success_response(data)


@router.get("/{pid}", response_model=SuccessResponse)
async def get_all_workflow_data(
    pid: str,
    principal: Annotated[Principal, Depends(get_current_principal)],
    guard: Annotated[AccessGuard, Depends(get_access_guard)],
    workflow_data: Annotated[IWorkflowDataRepository, Depends(get_workflow_data_repo)],
):
    await guard.authorize_pin_child(principal, pid, Action.READ)
    return success_response(await workflow_data.get_all(pid))
