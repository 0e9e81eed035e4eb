"""
Book Administration API Endpoints.

Catalogue management including inactive books. Every change is recorded in
the activity log.
"""

from typing import Optional

from fastapi import APIRouter, Query, status

from readcycle.core.models.io import BookCreate, BookRead, BookUpdate, ResultPaginate, ResultResponse, build_response
from readcycle.server.services.deps import AdminDep, BookServiceDep, PageDep

router = APIRouter()


@router.get(
    "",
    response_model=ResultResponse[ResultPaginate[BookRead]],
    summary="List All Books",
    description="Paginated list of every book, inactive ones included.",
)
async def list_books(
    _: AdminDep,
    books: BookServiceDep,
    page: PageDep,
    filter: Optional[str] = Query(default=None, description="Filter expression"),
):
    return build_response(await books.list_books(page, filter, active_only=False), "Get all books")


@router.post(
    "",
    response_model=ResultResponse[BookRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create Book",
    description="Add a book to the catalogue. A quantity of 0 makes it unavailable.",
    responses={400: {"description": "Invalid book data"}},
)
async def create_book(payload: BookCreate, admin: AdminDep, books: BookServiceDep):
    data = await books.create_book(payload, admin)
    return build_response(data, "Create a book", status.HTTP_201_CREATED)


@router.put(
    "",
    response_model=ResultResponse[BookRead],
    summary="Update Book",
    description="Update a book selected by the id in the body.",
    responses={400: {"description": "Invalid book data or book does not exist"}},
)
async def update_book(payload: BookUpdate, admin: AdminDep, books: BookServiceDep):
    return build_response(await books.update_book(payload, admin), "Update book")


@router.put(
    "/{book_id}",
    response_model=ResultResponse[BookRead],
    summary="Toggle Book Active",
    description="Hide a book from the public catalogue or show it again (soft delete).",
    responses={400: {"description": "Book does not exist"}},
)
async def toggle_book(book_id: int, admin: AdminDep, books: BookServiceDep):
    return build_response(await books.toggle_active(book_id, admin), "Toggle soft delete a book")


@router.delete(
    "/{book_id}",
    response_model=ResultResponse[None],
    summary="Delete Book",
    description="Delete a book with the cart lines and borrows referencing it.",
    responses={400: {"description": "Book does not exist"}},
)
async def delete_book(book_id: int, admin: AdminDep, books: BookServiceDep):
    await books.delete_book(book_id, admin)
    return build_response(None, "Delete a book")
