"""
FastAPI dependency functions.

Provides the per-request transaction, the repositories (each bound to
its collection URL for pagination links), the session store and the
session guard used by every entity router.
"""

from typing import Annotated, Any, AsyncIterator, Dict, Optional

from fastapi import Depends, Query as QueryParam, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from aloha.core.config import settings
from aloha.core.database import async_session_maker
from aloha.core.exceptions import AuthenticationError
from aloha.core.session_store import SessionData, SessionStore
from aloha.core.transaction import Transaction
from aloha.repositories import (
    ContentRepository,
    GroupPermissionRepository,
    PermissionRepository,
    UserGroupRepository,
    UserPermissionRepository,
    UserRepository,
)
from aloha.schemas.pagination import PageLinks
from aloha.schemas.query import MAX_PAGE, MAX_SIZE
from aloha.services.auth import AuthService


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    return async_session_maker


async def get_transaction(
    session_factory: Annotated[async_sessionmaker[AsyncSession], Depends(get_session_factory)],
) -> AsyncIterator[Transaction]:
    """
    Open one transaction for the request.

    Mutating repository calls commit it themselves; whatever is still
    uncommitted when the request finishes is rolled back.
    """
    async with Transaction.begin(session_factory) as tx:
        yield tx


TransactionDep = Annotated[Transaction, Depends(get_transaction)]


def _links(name: str) -> PageLinks:
    return PageLinks(collection_url=settings.collection_url(name))


def get_user_repository() -> UserRepository:
    return UserRepository(_links("users"))


def get_user_group_repository() -> UserGroupRepository:
    return UserGroupRepository(_links("user_groups"))


def get_permission_repository() -> PermissionRepository:
    return PermissionRepository(_links("permissions"))


def get_group_permission_repository() -> GroupPermissionRepository:
    return GroupPermissionRepository(_links("group_permissions"))


def get_user_permission_repository() -> UserPermissionRepository:
    return UserPermissionRepository(_links("user_permissions"))


def get_content_repository() -> ContentRepository:
    return ContentRepository(_links("contents"))


UserRepoDep = Annotated[UserRepository, Depends(get_user_repository)]
UserGroupRepoDep = Annotated[UserGroupRepository, Depends(get_user_group_repository)]
PermissionRepoDep = Annotated[PermissionRepository, Depends(get_permission_repository)]
GroupPermissionRepoDep = Annotated[
    GroupPermissionRepository, Depends(get_group_permission_repository)
]
UserPermissionRepoDep = Annotated[
    UserPermissionRepository, Depends(get_user_permission_repository)
]
ContentRepoDep = Annotated[ContentRepository, Depends(get_content_repository)]


def get_session_store(request: Request) -> SessionStore:
    """Session store created at startup (see ``aloha.main.lifespan``)."""
    return request.app.state.session_store


SessionStoreDep = Annotated[SessionStore, Depends(get_session_store)]


def get_auth_service(users: UserRepoDep, sessions: SessionStoreDep) -> AuthService:
    return AuthService(users, sessions)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]


async def get_current_session(request: Request, store: SessionStoreDep) -> SessionData:
    """
    Resolve the identity behind the session cookie.

    Raises:
        AuthenticationError: No cookie, or the session is unknown or expired

    Example:
        router = APIRouter(dependencies=[Depends(get_current_session)])
    """
    session_id = request.cookies.get(settings.session_cookie_name)
    if not session_id:
        raise AuthenticationError("Not logged in")

    session = await store.get(session_id)
    if session is None:
        raise AuthenticationError("Session expired or invalid")
    return session


CurrentSessionDep = Annotated[SessionData, Depends(get_current_session)]


def page_params(
    page: Annotated[Optional[int], QueryParam(ge=1, le=MAX_PAGE, description="1-based page number")] = None,
    size: Annotated[Optional[int], QueryParam(ge=1, le=MAX_SIZE, description="Rows per page")] = None,
    sort: Annotated[Optional[str], QueryParam(description="Field to sort by")] = None,
    order: Annotated[Optional[str], QueryParam(description="asc or desc")] = None,
) -> Dict[str, Any]:
    """Paging and ordering parameters shared by every list endpoint."""
    return {"page": page, "size": size, "sort": sort, "order": order}


PageParamsDep = Annotated[Dict[str, Any], Depends(page_params)]
