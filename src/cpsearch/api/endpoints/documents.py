"""Document endpoints — Term search and CRUD on postal-code documents."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Query, status

from cpsearch.adapters.base.adapter import SearchAdapter
from cpsearch.api.deps import get_adapter
from cpsearch.api.responses import PrettyJSONResponse
from cpsearch.models.document import (
    DocumentRef,
    DeleteResult,
    Document,
    DocumentCreate,
    DocumentUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/search", tags=["documents"])


@router.get(
    "",
    response_model=list[Document],
    response_class=PrettyJSONResponse,
    summary="Term Search",
    description=(
        "Match every word of `q` (prefixes included) against all document fields. "
        "At most 10 documents, sorted by `colonia` ascending."
    ),
    responses={400: {"description": "Empty search term"}},
)
async def search(
    q: str = Query(description="Search term"),
    adapter: SearchAdapter = Depends(get_adapter),
) -> list[Document]:
    return await adapter.search(q)


@router.get(
    "/{doc_id}",
    response_class=PrettyJSONResponse,
    summary="Read Document",
    description="Return the document as stored in the index.",
    responses={404: {"description": "No document with this id"}},
)
async def read_document(
    doc_id: str,
    adapter: SearchAdapter = Depends(get_adapter),
) -> dict[str, Any]:
    return await adapter.read_document(doc_id)


@router.post(
    "",
    response_model=DocumentRef,
    status_code=status.HTTP_201_CREATED,
    summary="Create Document",
    description="Store a new document under a server-generated UUID.",
)
async def create_document(
    doc: DocumentCreate,
    adapter: SearchAdapter = Depends(get_adapter),
) -> DocumentRef:
    return DocumentRef(id=await adapter.create_document(doc))


@router.put(
    "/{doc_id}",
    response_model=DocumentRef,
    summary="Update Document",
    description="Overwrite the fields present in the body; other fields are kept.",
    responses={404: {"description": "No document with this id"}},
)
async def update_document(
    doc_id: str,
    changes: DocumentUpdate,
    adapter: SearchAdapter = Depends(get_adapter),
) -> DocumentRef:
    return DocumentRef(id=await adapter.update_document(doc_id, changes))


@router.delete(
    "/{doc_id}",
    response_model=DeleteResult,
    summary="Delete Document",
)
async def delete_document(
    doc_id: str,
    adapter: SearchAdapter = Depends(get_adapter),
) -> DeleteResult:
    found = await adapter.delete_document(doc_id)
    if not found:
        logger.info("Delete of unknown document %s", doc_id)
    return DeleteResult(id=doc_id, found=found)
