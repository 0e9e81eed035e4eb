"""
Book Search API Endpoints.

Criteria based listing of active books. Each criterion is a case-insensitive
substring match; omitted criteria are ignored.
"""

from typing import Optional

from fastapi import APIRouter, Query

from readcycle.core.models.io import BookRead, ResultPaginate, ResultResponse, build_response
from readcycle.server.services.deps import BookServiceDep, PageDep

router = APIRouter()


@router.get(
    "",
    response_model=ResultResponse[ResultPaginate[BookRead]],
    summary="Search Books",
    description="Active books matching category, title and author criteria.",
)
async def search_books(
    books: BookServiceDep,
    page: PageDep,
    category: Optional[str] = Query(default=None),
    title: Optional[str] = Query(default=None),
    author: Optional[str] = Query(default=None),
):
    return build_response(await books.search_books(page, category, title, author), "Get all books")
