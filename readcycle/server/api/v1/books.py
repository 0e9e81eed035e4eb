"""
Book API Endpoints.

Public catalogue: book detail, active book listing and the bulk import used
by administrators.
"""

from typing import List, Optional

from fastapi import APIRouter, Query, status

from readcycle.core.models.io import (
    BookCreate,
    BookRead,
    BulkCreateResult,
    ResultPaginate,
    ResultResponse,
    build_response,
)
from readcycle.server.services.deps import AdminDep, BookServiceDep, PageDep

router = APIRouter()


@router.get(
    "/{book_id}",
    response_model=ResultResponse[BookRead],
    summary="Get Book",
    description="Retrieve an active book by id.",
    responses={400: {"description": "Book does not exist or is inactive"}},
)
async def get_book(book_id: int, books: BookServiceDep):
    return build_response(await books.get_book(book_id), "Get book by id")


@router.get(
    "",
    response_model=ResultResponse[ResultPaginate[BookRead]],
    summary="List Books",
    description="Paginated list of active books, optionally narrowed with a filter expression.",
)
async def list_books(
    books: BookServiceDep,
    page: PageDep,
    filter: Optional[str] = Query(default=None, description="Filter expression, e.g. category:'Novel'"),
):
    """
    List active books.

    The **filter** expression joins clauses with ``and``; each clause is
    ``field op value`` with ``:`` equals, ``!`` not equals, ``~`` contains,
    ``>``, ``<``, ``>:`` and ``<:`` comparisons.
    """
    return build_response(await books.list_books(page, filter, active_only=True), "Get all books")


@router.post(
    "/bulk-create",
    response_model=ResultResponse[BulkCreateResult],
    status_code=status.HTTP_201_CREATED,
    summary="Import Books",
    description="Create many books at once. Titles already in the catalogue are counted as errors.",
)
async def bulk_create(payload: List[BookCreate], admin: AdminDep, books: BookServiceDep):
    data = await books.bulk_create(payload, admin)
    return build_response(data, "Import books", status.HTTP_201_CREATED)
