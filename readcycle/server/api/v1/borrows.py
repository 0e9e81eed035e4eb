"""
Cart and Borrow API Endpoints.

Everything here acts on behalf of the signed-in user.
"""

from typing import List

from fastapi import APIRouter, Body, Response, status

from readcycle.core.models.io import (
    BookRef,
    BorrowRead,
    BorrowRequest,
    CartRead,
    ResultPaginate,
    ResultResponse,
    ReturnBookRequest,
    build_response,
)
from readcycle.server.services.deps import BorrowServiceDep, CurrentUserDep, PageDep

router = APIRouter()


@router.post(
    "/add-to-cart",
    response_model=ResultResponse[CartRead],
    status_code=status.HTTP_201_CREATED,
    summary="Add Book To Cart",
    description="Put a book in the cart of the signed-in user.",
    responses={400: {"description": "Book unknown, or a book of the same title or category is still borrowed"}},
)
async def add_to_cart(payload: BookRef, user: CurrentUserDep, borrows: BorrowServiceDep):
    data = await borrows.add_to_cart(payload.id, user)
    return build_response(data, "Add book to cart", status.HTTP_201_CREATED)


@router.get(
    "/carts",
    response_model=ResultResponse[List[CartRead]],
    summary="Get Carts",
    description="Cart lines of the signed-in user with the requested books.",
)
async def list_carts(user: CurrentUserDep, borrows: BorrowServiceDep):
    return build_response(await borrows.list_carts(user), "Get carts by user")


@router.delete(
    "/carts/{cart_id}",
    response_model=ResultResponse[None],
    summary="Delete Cart",
    description="Remove one cart line of the signed-in user.",
    responses={400: {"description": "Cart line does not exist or belongs to another user"}},
)
async def delete_cart(cart_id: int, user: CurrentUserDep, borrows: BorrowServiceDep):
    await borrows.delete_cart(cart_id, user)
    return build_response(None, "Delete cart")


@router.post(
    "/remove-carts",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Carts",
    description="Remove several cart lines of the signed-in user, typically after a checkout.",
)
async def remove_carts(user: CurrentUserDep, borrows: BorrowServiceDep, cart_ids: List[int] = Body(...)):
    await borrows.remove_carts(cart_ids, user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/borrow",
    response_model=ResultResponse[List[BorrowRead]],
    status_code=status.HTTP_201_CREATED,
    summary="Borrow Books",
    description="Borrow every listed book, or none of them when one is unavailable.",
    responses={400: {"description": "A book does not exist or has no copy left"}},
)
async def borrow(payload: BorrowRequest, user: CurrentUserDep, borrows: BorrowServiceDep):
    """
    Borrow books.

    Each borrowed copy is taken off the shelf; a book whose last copy leaves
    becomes unavailable. Any failure rolls back the whole checkout.
    """
    data = await borrows.borrow(payload, user)
    return build_response(data, "Borrow books", status.HTTP_201_CREATED)


@router.put(
    "/return-book",
    response_model=ResultResponse[BorrowRead],
    summary="Return Book",
    description="Return a borrowed copy to the shelf.",
    responses={400: {"description": "Borrow does not exist or was already returned"}},
)
async def return_book(payload: ReturnBookRequest, user: CurrentUserDep, borrows: BorrowServiceDep):
    return build_response(await borrows.return_book(payload.id, user), "Return books")


@router.get(
    "/history",
    response_model=ResultResponse[ResultPaginate[BorrowRead]],
    summary="Borrow History",
    description="Borrow records of the signed-in user, newest first.",
)
async def history(user: CurrentUserDep, borrows: BorrowServiceDep, page: PageDep):
    return build_response(await borrows.history(user, page), "Get history by user")
