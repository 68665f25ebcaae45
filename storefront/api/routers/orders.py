# storefront/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.api.deps import (
    get_current_user,
    get_lock_service,
    get_notification_service,
    require_admin,
)
from storefront.data.database import get_db
from storefront.data.models.user import UserModel
from storefront.domain.cart_pricing import MissingProductError
from storefront.domain.schemas import OrderOut, OrderStatusIn
from storefront.services.errors import NotFoundError
from storefront.services.lock_service import LockService
from storefront.services.notification_service import NotificationService
from storefront.services.order_service import OrderService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
    notification_service: NotificationService = Depends(get_notification_service),
) -> OrderService:
    return OrderService(db, lock_service, notification_service)


@router.post("/", response_model=OrderOut, status_code=201)
def place_order(
    user: UserModel = Depends(get_current_user),
    svc: OrderService = Depends(get_service),
):
    """
    Places an order from the caller's cart and empties the cart.
    """
    try:
        return svc.place_order(user.id)
    except MissingProductError as e:
        logger.error(f"Checkout pricing failed for user {user.id}: {e}")
        raise HTTPException(status_code=500, detail="Cart pricing unavailable")
    except RuntimeError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/", response_model=List[OrderOut])
def list_orders(
    user: UserModel = Depends(get_current_user),
    svc: OrderService = Depends(get_service),
):
    return svc.list_orders(user.id)


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: int,
    user: UserModel = Depends(get_current_user),
    svc: OrderService = Depends(get_service),
):
    try:
        return svc.get_order(order_id, user)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/{order_id}/status", response_model=OrderOut, dependencies=[Depends(require_admin)])
def update_order_status(
    order_id: int,
    payload: OrderStatusIn,
    svc: OrderService = Depends(get_service),
):
    try:
        return svc.update_status(order_id, payload.status)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
