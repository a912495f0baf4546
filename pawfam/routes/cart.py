"""Cart and catalog API routes"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..core.session import StorefrontSession
from ..models.cart import AddToCartRequest, CartResponse, Product, UpdateCartItemRequest
from ..services.api_client import PawFamAPIError, PawFamClient
from ..services.catalog import CatalogService
from .deps import api_error_to_http, get_client, get_session

router = APIRouter(prefix="/api", tags=["Cart"])


def get_catalog_service(client: PawFamClient = Depends(get_client)) -> CatalogService:
    return CatalogService(client)


def cart_response(session: StorefrontSession) -> CartResponse:
    cart = session.cart
    return CartResponse(
        items=cart.lines(),
        item_count=cart.item_count(),
        total=cart.total(),
        notice=cart.notice,
    )


@router.get("/products", response_model=list[Product])
async def list_products(
    category: Optional[str] = Query(None),
    search: str = Query(""),
    sort_by: str = Query("name"),
    catalog: CatalogService = Depends(get_catalog_service),
):
    """Browse accessories posted by vendors"""
    try:
        return await catalog.list_products(category=category, search=search, sort_by=sort_by)
    except PawFamAPIError as e:
        raise api_error_to_http(e)


@router.get("/cart", response_model=CartResponse)
async def get_cart(session: StorefrontSession = Depends(get_session)):
    return cart_response(session)


@router.post("/cart/items", response_model=CartResponse)
async def add_to_cart(
    request: AddToCartRequest,
    session: StorefrontSession = Depends(get_session),
):
    """Add one unit of a product"""
    session.cart.add_item(request.product)
    session.touch()
    return cart_response(session)


@router.put("/cart/items/{product_id}", response_model=CartResponse)
async def update_cart_item(
    product_id: str,
    request: UpdateCartItemRequest,
    session: StorefrontSession = Depends(get_session),
):
    """Set a line quantity; zero or less removes the line"""
    session.cart.set_quantity(product_id, request.quantity)
    session.touch()
    return cart_response(session)


@router.delete("/cart/items/{product_id}", response_model=CartResponse)
async def remove_from_cart(
    product_id: str,
    session: StorefrontSession = Depends(get_session),
):
    session.cart.remove_item(product_id)
    session.touch()
    return cart_response(session)


@router.delete("/cart", response_model=CartResponse)
async def clear_cart(session: StorefrontSession = Depends(get_session)):
    session.cart.clear()
    session.touch()
    return cart_response(session)


@router.delete("/cart/notice", response_model=CartResponse)
async def dismiss_notice(session: StorefrontSession = Depends(get_session)):
    """Close the "added to cart" toast"""
    session.cart.dismiss_notice()
    return cart_response(session)
