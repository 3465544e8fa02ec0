"""Dataset API, scoped to a parent pin (/pins/{pid}/datasets).

JSON datasets arrive as a string and are parsed by the repository; a parse
failure is a 400 and nothing is stored.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from pindown.api.v1.dependencies import (
    get_access_guard,
    get_current_principal,
    get_dataset_repo,
)
from pindown.application.dtos.auth import Principal
from pindown.application.dtos.dataset import DatasetCreate, DatasetUpdate
from pindown.application.interfaces.repositories import IDatasetRepository
from pindown.application.services.access_guard import AccessGuard
from pindown.core.limiter import limit_writes
from pindown.domain.enums import Action
from pindown.domain.exceptions import ResourceNotFoundException
from pindown.schemas.common import SuccessResponse, success_response
from pindown.schemas.dataset import DatasetCreateRequest, DatasetUpdateRequest

router = APIRouter()


@router.post("/{pid}/datasets", response_model=SuccessResponse, status_code=201)
@limit_writes
async def create_dataset(
    request: Request,
    pid: str,
    body: DatasetCreateRequest,
    principal: Annotated[Principal, Depends(get_current_principal)],
    guard: Annotated[AccessGuard, Depends(get_access_guard)],
    datasets: Annotated[IDatasetRepository, Depends(get_dataset_repo)],
):
    await guard.authorize_pin_child(principal, pid, Action.WRITE)
    dataset = await datasets.create_dataset(
        pid,
        DatasetCreate(
            name=body.name,
            type=body.type,
            data=body.data,
            created_by=principal.user_id,
            dataset_type=body.dataset_type,
            description=body.description or "",
        ),
    )
    return success_response(dataset.to_record(), "Dataset created")


@router.get("/{pid}/datasets", response_model=SuccessResponse)
async def list_datasets(
    pid: str,
    principal: Annotated[Principal, Depends(get_current_principal)],
    guard: Annotated[AccessGuard, Depends(get_access_guard)],
    datasets: Annotated[IDatasetRepository, Depends(get_dataset_repo)],
):
    await guard.authorize_pin_child(principal, pid, Action.READ)
    items = await datasets.get_pin_datasets(pid)
    return success_response([d.to_record() for d in items])


@router.get("/{pid}/datasets/{dataset_id}", response_model=SuccessResponse)
async def get_dataset(
    pid: str,
    dataset_id: str,
    principal: Annotated[Principal, Depends(get_current_principal)],
    guard: Annotated[AccessGuard, Depends(get_access_guard)],
    datasets: Annotated[IDatasetRepository, Depends(get_dataset_repo)],
):
    await guard.authorize_pin_child(principal, pid, Action.READ)
    dataset = await datasets.get_dataset(pid, dataset_id)
    if dataset is None:
        raise ResourceNotFoundException("dataset", dataset_id)
    return success_response(dataset.to_record())


@router.put("/{pid}/datasets/{dataset_id}", response_model=SuccessResponse)
@limit_writes
async def update_dataset(
    request: Request,
    pid: str,
    dataset_id: str,
    body: DatasetUpdateRequest,
    principal: Annotated[Principal, Depends(get_current_principal)],
    guard: Annotated[AccessGuard, Depends(get_access_guard)],
    datasets: Annotated[IDatasetRepository, Depends(get_dataset_repo)],
):
    """Partial update; data is re-parsed with the new (or current) type."""
    await guard.authorize_pin_child(principal, pid, Action.WRITE)
    dataset = await datasets.update_dataset(
        pid,
        dataset_id,
        DatasetUpdate(
            name=body.name,
            type=body.type,
            dataset_type=body.dataset_type,
            description=body.description,
            data=body.data,
        ),
    )
    return success_response(dataset.to_record(), "Dataset updated")


@router.delete("/{pid}/datasets/{dataset_id}", response_model=SuccessResponse)
@limit_writes
async def delete_dataset(
    request: Request,
    pid: str,
    dataset_id: str,
    principal: Annotated[Principal, Depends(get_current_principal)],
    guard: Annotated[AccessGuard, Depends(get_access_guard)],
    datasets: Annotated[IDatasetRepository, Depends(get_dataset_repo)],
):
    await guard.authorize_pin_child(principal, pid, Action.DELETE)
    await datasets.delete_dataset(pid, dataset_id)
    return success_response({"id": dataset_id}, "Dataset deleted")
