"""User group endpoints."""

import uuid
from typing import Annotated, List, Optional

from fastapi import APIRouter, Body, Depends, status

from aloha.api.dependencies import (
    PageParamsDep,
    TransactionDep,
    UserGroupRepoDep,
    get_current_session,
)
from aloha.core.exceptions import NotFoundError
from aloha.schemas.envelope import ResponseEnvelope
from aloha.schemas.query import Query, UserGroupFilter
from aloha.schemas.user_group import UserGroupRequest, UserGroupResponse

router = APIRouter(dependencies=[Depends(get_current_session)])


@router.get("", response_model=ResponseEnvelope[List[UserGroupResponse]])
async def list_user_groups(
    tx: TransactionDep,
    repo: UserGroupRepoDep,
    params: PageParamsDep,
    group_name: Optional[str] = None,
):
    query = Query[UserGroupFilter].parse(
        **params, filter=UserGroupFilter(group_name=group_name)
    )
    envelope = await repo.list(tx, query)
    return envelope.map_items(UserGroupResponse.from_entity)


@router.get("/{group_id}", response_model=ResponseEnvelope[UserGroupResponse])
async def get_user_group(group_id: uuid.UUID, tx: TransactionDep, repo: UserGroupRepoDep):
    group = await repo.get_by_id(tx, group_id)
    if group is None:
        raise NotFoundError(f"user_group {group_id} not found")
    return ResponseEnvelope(data=UserGroupResponse.from_entity(group))


@router.post(
    "",
    response_model=ResponseEnvelope[UserGroupResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_user_group(body: UserGroupRequest, tx: TransactionDep, repo: UserGroupRepoDep):
    group = await repo.insert(tx, group_name=body.group_name)
    return ResponseEnvelope(data=UserGroupResponse.from_entity(group))


@router.put("/{group_id}", response_model=ResponseEnvelope[UserGroupResponse])
async def save_user_group(
    group_id: uuid.UUID, body: UserGroupRequest, tx: TransactionDep, repo: UserGroupRepoDep
):
    group = await repo.save(tx, group_id, body.group_name)
    return ResponseEnvelope(data=UserGroupResponse.from_entity(group))


@router.delete("/{group_id}", response_model=ResponseEnvelope[UserGroupResponse])
async def delete_user_group(group_id: uuid.UUID, tx: TransactionDep, repo: UserGroupRepoDep):
    group = await repo.delete_by_id(tx, group_id)
    return ResponseEnvelope(data=UserGroupResponse.from_entity(group))


@router.delete("", response_model=ResponseEnvelope[List[UserGroupResponse]])
async def delete_user_groups(
    ids: Annotated[List[uuid.UUID], Body()], tx: TransactionDep, repo: UserGroupRepoDep
):
    groups = await repo.delete_by_ids(tx, ids)
    return ResponseEnvelope(data=[UserGroupResponse.from_entity(g) for g in groups])
