"""
User management endpoints.

All routes require a valid session cookie.
"""

import uuid
from typing import Annotated, List, Optional

from fastapi import APIRouter, Body, Depends, status

from aloha.api.dependencies import (
    PageParamsDep,
    TransactionDep,
    UserRepoDep,
    get_current_session,
)
from aloha.core.exceptions import NotFoundError
from aloha.schemas.envelope import ResponseEnvelope
from aloha.schemas.query import Query, UserFilter
from aloha.schemas.user import UserCreateRequest, UserResponse, UserSaveRequest

router = APIRouter(dependencies=[Depends(get_current_session)])


@router.get("", response_model=ResponseEnvelope[List[UserResponse]])
async def list_users(
    tx: TransactionDep,
    repo: UserRepoDep,
    params: PageParamsDep,
    user_group_id: Optional[uuid.UUID] = None,
):
    """
    List users, optionally restricted to one group.

    Example:
        GET /api/users?page=2&size=10&sort=username&order=desc

        Response:
        {
            "data": [{"id": "...", "username": "alice", ...}],
            "pagination": {"page": 2, "size": 10, "total": 12,
                           "prev_page": ".../api/users?page=1&size=10",
                           "next_page": null}
        }
    """
    query = Query[UserFilter].parse(**params, filter=UserFilter(user_group_id=user_group_id))
    envelope = await repo.list(tx, query)
    return envelope.map_items(UserResponse.from_entity)


@router.get("/{user_id}", response_model=ResponseEnvelope[UserResponse])
async def get_user(user_id: uuid.UUID, tx: TransactionDep, repo: UserRepoDep):
    user = await repo.get_by_id(tx, user_id)
    if user is None:
        raise NotFoundError(f"user {user_id} not found")
    return ResponseEnvelope(data=UserResponse.from_entity(user))


@router.post(
    "",
    response_model=ResponseEnvelope[UserResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_user(body: UserCreateRequest, tx: TransactionDep, repo: UserRepoDep):
    user = await repo.create(tx, body.username, body.password, body.user_group_id)
    return ResponseEnvelope(data=UserResponse.from_entity(user))


@router.put("/{user_id}", response_model=ResponseEnvelope[UserResponse])
async def save_user(
    user_id: uuid.UUID, body: UserSaveRequest, tx: TransactionDep, repo: UserRepoDep
):
    """Update the user, or create it under this id when it does not exist."""
    user = await repo.save(tx, user_id, body.username, body.password, body.user_group_id)
    return ResponseEnvelope(data=UserResponse.from_entity(user))


@router.delete("/{user_id}", response_model=ResponseEnvelope[UserResponse])
async def delete_user(user_id: uuid.UUID, tx: TransactionDep, repo: UserRepoDep):
    user = await repo.delete_by_id(tx, user_id)
    return ResponseEnvelope(data=UserResponse.from_entity(user))


@router.delete("", response_model=ResponseEnvelope[List[UserResponse]])
async def delete_users(
    ids: Annotated[List[uuid.UUID], Body()], tx: TransactionDep, repo: UserRepoDep
):
    """Delete every listed user; ids that do not exist are skipped."""
    users = await repo.delete_by_ids(tx, ids)
    return ResponseEnvelope(data=[UserResponse.from_entity(u) for u in users])
