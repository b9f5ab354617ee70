"""
User permission grant endpoints.

Grants are keyed by (user_id, permission_id). Scoped listings and
bulk revocations live under ``/user/{id}`` and ``/permission/{id}``.
"""

import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, status

from aloha.api.dependencies import (
    UserPermissionRepoDep,
    PageParamsDep,
    TransactionDep,
    get_current_session,
)
from aloha.core.exceptions import NotFoundError
from aloha.schemas.envelope import ResponseEnvelope
from aloha.schemas.grant import UserPermissionRequest, UserPermissionResponse
from aloha.schemas.query import UserPermissionFilter, Query

router = APIRouter(dependencies=[Depends(get_current_session)])

GrantList = ResponseEnvelope[List[UserPermissionResponse]]
Grant = ResponseEnvelope[UserPermissionResponse]


@router.get("", response_model=GrantList)
async def list_user_permissions(
    tx: TransactionDep,
    repo: UserPermissionRepoDep,
    params: PageParamsDep,
    user_id: Optional[uuid.UUID] = None,
    permission_id: Optional[uuid.UUID] = None,
):
    query = Query[UserPermissionFilter].parse(
        **params,
        filter=UserPermissionFilter(user_id=user_id, permission_id=permission_id),
    )
    envelope = await repo.list(tx, query)
    return envelope.map_items(UserPermissionResponse.from_entity)


@router.get("/user/{user_id}", response_model=GrantList)
async def list_by_user(
    user_id: uuid.UUID, tx: TransactionDep, repo: UserPermissionRepoDep, params: PageParamsDep
):
    query = Query[UserPermissionFilter].parse(**params)
    envelope = await repo.list_by_user_id(tx, user_id, query)
    return envelope.map_items(UserPermissionResponse.from_entity)


@router.get("/permission/{permission_id}", response_model=GrantList)
async def list_by_permission(
    permission_id: uuid.UUID,
    tx: TransactionDep,
    repo: UserPermissionRepoDep,
    params: PageParamsDep,
):
    query = Query[UserPermissionFilter].parse(**params)
    envelope = await repo.list_by_permission_id(tx, permission_id, query)
    return envelope.map_items(UserPermissionResponse.from_entity)


@router.delete("/user/{user_id}", response_model=GrantList)
async def revoke_user(user_id: uuid.UUID, tx: TransactionDep, repo: UserPermissionRepoDep):
    grants = await repo.delete_by_user_id(tx, user_id)
    return ResponseEnvelope(data=[UserPermissionResponse.from_entity(g) for g in grants])


@router.delete("/permission/{permission_id}", response_model=GrantList)
async def revoke_permission(
    permission_id: uuid.UUID, tx: TransactionDep, repo: UserPermissionRepoDep
):
    grants = await repo.delete_by_permission_id(tx, permission_id)
    return ResponseEnvelope(data=[UserPermissionResponse.from_entity(g) for g in grants])


@router.get("/{user_id}/{permission_id}", response_model=Grant)
async def get_user_permission(
    user_id: uuid.UUID,
    permission_id: uuid.UUID,
    tx: TransactionDep,
    repo: UserPermissionRepoDep,
):
    grant = await repo.get(tx, user_id, permission_id)
    if grant is None:
        raise NotFoundError(f"user_permission ({user_id}, {permission_id}) not found")
    return ResponseEnvelope(data=UserPermissionResponse.from_entity(grant))


@router.post("", response_model=Grant, status_code=status.HTTP_201_CREATED)
async def create_user_permission(
    body: UserPermissionRequest, tx: TransactionDep, repo: UserPermissionRepoDep
):
    grant = await repo.insert(tx, user_id=body.user_id, permission_id=body.permission_id)
    return ResponseEnvelope(data=UserPermissionResponse.from_entity(grant))


@router.delete("/{user_id}/{permission_id}", response_model=Grant)
async def delete_user_permission(
    user_id: uuid.UUID,
    permission_id: uuid.UUID,
    tx: TransactionDep,
    repo: UserPermissionRepoDep,
):
    grant = await repo.delete(tx, user_id, permission_id)
    return ResponseEnvelope(data=UserPermissionResponse.from_entity(grant))
