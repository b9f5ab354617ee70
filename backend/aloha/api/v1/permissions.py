"""Permission endpoints."""

import uuid
from typing import Annotated, List, Optional

from fastapi import APIRouter, Body, Depends, status

from aloha.api.dependencies import (
    PageParamsDep,
    PermissionRepoDep,
    TransactionDep,
    get_current_session,
)
from aloha.core.exceptions import NotFoundError
from aloha.schemas.envelope import ResponseEnvelope
from aloha.schemas.permission import PermissionRequest, PermissionResponse
from aloha.schemas.query import PermissionFilter, Query

router = APIRouter(dependencies=[Depends(get_current_session)])


@router.get("", response_model=ResponseEnvelope[List[PermissionResponse]])
async def list_permissions(
    tx: TransactionDep,
    repo: PermissionRepoDep,
    params: PageParamsDep,
    name: Optional[str] = None,
):
    query = Query[PermissionFilter].parse(**params, filter=PermissionFilter(name=name))
    envelope = await repo.list(tx, query)
    return envelope.map_items(PermissionResponse.from_entity)


@router.get("/{permission_id}", response_model=ResponseEnvelope[PermissionResponse])
async def get_permission(
    permission_id: uuid.UUID, tx: TransactionDep, repo: PermissionRepoDep
):
    permission = await repo.get_by_id(tx, permission_id)
    if permission is None:
        raise NotFoundError(f"permission {permission_id} not found")
    return ResponseEnvelope(data=PermissionResponse.from_entity(permission))


@router.post(
    "",
    response_model=ResponseEnvelope[PermissionResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_permission(
    body: PermissionRequest, tx: TransactionDep, repo: PermissionRepoDep
):
    permission = await repo.insert(tx, name=body.name, description=body.description)
    return ResponseEnvelope(data=PermissionResponse.from_entity(permission))


@router.put("/{permission_id}", response_model=ResponseEnvelope[PermissionResponse])
async def save_permission(
    permission_id: uuid.UUID,
    body: PermissionRequest,
    tx: TransactionDep,
    repo: PermissionRepoDep,
):
    permission = await repo.save(tx, permission_id, body.name, body.description)
    return ResponseEnvelope(data=PermissionResponse.from_entity(permission))


@router.delete("/{permission_id}", response_model=ResponseEnvelope[PermissionResponse])
async def delete_permission(
    permission_id: uuid.UUID, tx: TransactionDep, repo: PermissionRepoDep
):
    permission = await repo.delete_by_id(tx, permission_id)
    return ResponseEnvelope(data=PermissionResponse.from_entity(permission))


@router.delete("", response_model=ResponseEnvelope[List[PermissionResponse]])
async def delete_permissions(
    ids: Annotated[List[uuid.UUID], Body()], tx: TransactionDep, repo: PermissionRepoDep
):
    permissions = await repo.delete_by_ids(tx, ids)
    return ResponseEnvelope(data=[PermissionResponse.from_entity(p) for p in permissions])
