#storefront/api/routers/carts.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_user
from storefront.data.database import get_db
from storefront.data.models.user import UserModel
from storefront.domain.cart_pricing import MissingProductError
from storefront.domain.schemas import (
    CartItemIn,
    CartItemUpdate,
    CartLineOut,
    CartSummaryOut,
    CartMutationOut,
    CartClearedOut,
)
from storefront.services.cart_service import CartService
from storefront.services.errors import NotFoundError
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(db: Session = Depends(get_db)) -> CartService:
    return CartService(db)


@router.get("/", response_model=List[CartLineOut], response_model_exclude_none=True)
def get_cart(
    user: UserModel = Depends(get_current_user),
    svc: CartService = Depends(get_service),
):
    try:
        return svc.get_cart(user.id)
    except MissingProductError as e:
        logger.error(f"Cart pricing failed for user {user.id}: {e}")
        raise HTTPException(status_code=500, detail="Cart pricing unavailable")


@router.get("/summary", response_model=CartSummaryOut, response_model_exclude_none=True)
def get_cart_summary(
    user: UserModel = Depends(get_current_user),
    svc: CartService = Depends(get_service),
):
    try:
        lines, totals = svc.get_summary(user.id)
    except MissingProductError as e:
        logger.error(f"Cart pricing failed for user {user.id}: {e}")
        raise HTTPException(status_code=500, detail="Cart pricing unavailable")

    return {
        "items": lines,
        "subtotal": totals.subtotal,
        "discount": totals.discount,
        "total": totals.total,
        "item_count": totals.item_count,
    }


@router.post("/", response_model=CartMutationOut, status_code=201)
def add_item(
    payload: CartItemIn,
    user: UserModel = Depends(get_current_user),
    svc: CartService = Depends(get_service),
):
    try:
        item = svc.add_product(user.id, payload.product_id, payload.quantity)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {"message": "Item added to cart successfully", "cart_item": item}


@router.put("/{item_id}", response_model=CartMutationOut)
def update_item(
    item_id: int,
    payload: CartItemUpdate,
    user: UserModel = Depends(get_current_user),
    svc: CartService = Depends(get_service),
):
    try:
        item = svc.update_quantity(user.id, item_id, payload.quantity)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {"message": "Cart item updated successfully", "cart_item": item}


@router.delete("/{item_id}", response_model=CartMutationOut)
def remove_item(
    item_id: int,
    user: UserModel = Depends(get_current_user),
    svc: CartService = Depends(get_service),
):
    try:
        item = svc.remove_item(user.id, item_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return {"message": "Item removed from cart successfully", "cart_item": item}


@router.delete("/", response_model=CartClearedOut)
def clear_cart(
    user: UserModel = Depends(get_current_user),
    svc: CartService = Depends(get_service),
):
    deleted = svc.clear_cart(user.id)
    return {"message": "Cart cleared successfully", "deleted": deleted}
