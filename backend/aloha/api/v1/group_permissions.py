"""
Group permission grant endpoints.

Grants are keyed by (group_id, permission_id). Scoped listings and
bulk revocations live under ``/group/{id}`` and ``/permission/{id}``.
"""

import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, status

from aloha.api.dependencies import (
    GroupPermissionRepoDep,
    PageParamsDep,
    TransactionDep,
    get_current_session,
)
from aloha.core.exceptions import NotFoundError
from aloha.schemas.envelope import ResponseEnvelope
from aloha.schemas.grant import GroupPermissionRequest, GroupPermissionResponse
from aloha.schemas.query import GroupPermissionFilter, Query

router = APIRouter(dependencies=[Depends(get_current_session)])

GrantList = ResponseEnvelope[List[GroupPermissionResponse]]
Grant = ResponseEnvelope[GroupPermissionResponse]


@router.get("", response_model=GrantList)
async def list_group_permissions(
    tx: TransactionDep,
    repo: GroupPermissionRepoDep,
    params: PageParamsDep,
    group_id: Optional[uuid.UUID] = None,
    permission_id: Optional[uuid.UUID] = None,
):
    query = Query[GroupPermissionFilter].parse(
        **params,
        filter=GroupPermissionFilter(group_id=group_id, permission_id=permission_id),
    )
    envelope = await repo.list(tx, query)
    return envelope.map_items(GroupPermissionResponse.from_entity)


@router.get("/group/{group_id}", response_model=GrantList)
async def list_by_group(
    group_id: uuid.UUID, tx: TransactionDep, repo: GroupPermissionRepoDep, params: PageParamsDep
):
    query = Query[GroupPermissionFilter].parse(**params)
    envelope = await repo.list_by_group_id(tx, group_id, query)
    return envelope.map_items(GroupPermissionResponse.from_entity)


@router.get("/permission/{permission_id}", response_model=GrantList)
async def list_by_permission(
    permission_id: uuid.UUID,
    tx: TransactionDep,
    repo: GroupPermissionRepoDep,
    params: PageParamsDep,
):
    query = Query[GroupPermissionFilter].parse(**params)
    envelope = await repo.list_by_permission_id(tx, permission_id, query)
    return envelope.map_items(GroupPermissionResponse.from_entity)


@router.delete("/group/{group_id}", response_model=GrantList)
async def revoke_group(group_id: uuid.UUID, tx: TransactionDep, repo: GroupPermissionRepoDep):
    grants = await repo.delete_by_group_id(tx, group_id)
    return ResponseEnvelope(data=[GroupPermissionResponse.from_entity(g) for g in grants])


@router.delete("/permission/{permission_id}", response_model=GrantList)
async def revoke_permission(
    permission_id: uuid.UUID, tx: TransactionDep, repo: GroupPermissionRepoDep
):
    grants = await repo.delete_by_permission_id(tx, permission_id)
    return ResponseEnvelope(data=[GroupPermissionResponse.from_entity(g) for g in grants])


@router.get("/{group_id}/{permission_id}", response_model=Grant)
async def get_group_permission(
    group_id: uuid.UUID,
    permission_id: uuid.UUID,
    tx: TransactionDep,
    repo: GroupPermissionRepoDep,
):
    grant = await repo.get(tx, group_id, permission_id)
    if grant is None:
        raise NotFoundError(f"group_permission ({group_id}, {permission_id}) not found")
    return ResponseEnvelope(data=GroupPermissionResponse.from_entity(grant))


@router.post("", response_model=Grant, status_code=status.HTTP_201_CREATED)
async def create_group_permission(
    body: GroupPermissionRequest, tx: TransactionDep, repo: GroupPermissionRepoDep
):
    grant = await repo.insert(tx, group_id=body.group_id, permission_id=body.permission_id)
    return ResponseEnvelope(data=GroupPermissionResponse.from_entity(grant))


@router.delete("/{group_id}/{permission_id}", response_model=Grant)
async def delete_group_permission(
    group_id: uuid.UUID,
    permission_id: uuid.UUID,
    tx: TransactionDep,
    repo: GroupPermissionRepoDep,
):
    grant = await repo.delete(tx, group_id, permission_id)
    return ResponseEnvelope(data=GroupPermissionResponse.from_entity(grant))
