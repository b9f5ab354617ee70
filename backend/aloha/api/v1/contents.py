"""
Content endpoints.

Content ids are integers assigned by the store; PUT only updates and
answers 404 for an unknown id.
"""

import uuid
from typing import Annotated, List, Optional

from fastapi import APIRouter, Body, Depends, Path, status
from pydantic import Field

from aloha.api.dependencies import (
    ContentRepoDep,
    PageParamsDep,
    TransactionDep,
    get_current_session,
)
from aloha.core.exceptions import NotFoundError
from aloha.schemas.content import ContentCreateRequest, ContentResponse, ContentUpdateRequest
from aloha.schemas.envelope import ResponseEnvelope
from aloha.schemas.query import MAX_INT64, ContentFilter, Query

router = APIRouter(dependencies=[Depends(get_current_session)])

ContentId = Annotated[int, Path(ge=1, le=MAX_INT64)]
ContentIds = Annotated[List[Annotated[int, Field(ge=1, le=MAX_INT64)]], Body()]


@router.get("", response_model=ResponseEnvelope[List[ContentResponse]])
async def list_contents(
    tx: TransactionDep,
    repo: ContentRepoDep,
    params: PageParamsDep,
    author_id: Optional[uuid.UUID] = None,
):
    query = Query[ContentFilter].parse(**params, filter=ContentFilter(author_id=author_id))
    envelope = await repo.list(tx, query)
    return envelope.map_items(ContentResponse.from_entity)


@router.get("/{content_id}", response_model=ResponseEnvelope[ContentResponse])
async def get_content(content_id: ContentId, tx: TransactionDep, repo: ContentRepoDep):
    content = await repo.get_by_id(tx, content_id)
    if content is None:
        raise NotFoundError(f"content {content_id} not found")
    return ResponseEnvelope(data=ContentResponse.from_entity(content))


@router.post(
    "",
    response_model=ResponseEnvelope[ContentResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_content(body: ContentCreateRequest, tx: TransactionDep, repo: ContentRepoDep):
    content = await repo.insert(tx, body=body.body, author_id=body.author_id)
    return ResponseEnvelope(data=ContentResponse.from_entity(content))


@router.put("/{content_id}", response_model=ResponseEnvelope[ContentResponse])
async def update_content(
    content_id: ContentId, body: ContentUpdateRequest, tx: TransactionDep, repo: ContentRepoDep
):
    content = await repo.update(tx, content_id, body=body.body)
    return ResponseEnvelope(data=ContentResponse.from_entity(content))


@router.delete("/{content_id}", response_model=ResponseEnvelope[ContentResponse])
async def delete_content(content_id: ContentId, tx: TransactionDep, repo: ContentRepoDep):
    content = await repo.delete_by_id(tx, content_id)
    return ResponseEnvelope(data=ContentResponse.from_entity(content))


@router.delete("", response_model=ResponseEnvelope[List[ContentResponse]])
async def delete_contents(
    ids: ContentIds, tx: TransactionDep, repo: ContentRepoDep
):
    contents = await repo.delete_by_ids(tx, ids)
    return ResponseEnvelope(data=[ContentResponse.from_entity(c) for c in contents])
