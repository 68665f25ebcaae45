# storefront/services/order_service.py
import uuid
from decimal import Decimal, ROUND_HALF_UP
from typing import List

from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel, OrderItemModel
from storefront.data.models.user import UserModel
from storefront.domain.cart_pricing import cart_totals
from storefront.repos.cart_repo import CartRepo
from storefront.repos.order_repo import OrderRepo
from storefront.repos.product_repo import ProductRepo
from storefront.services.cart_service import CartService
from storefront.services.errors import NotFoundError
from storefront.services.lock_service import LockService
from storefront.services.notification_service import NotificationService
from storefront.utils.settings import CHECKOUT_LOCK_TTL_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

CENT = Decimal("0.01")


class OrderService:
    """
    Orders are placed from the caller's cart, priced at the moment of checkout.
    """

    def __init__(
        self,
        db: Session,
        lock_service: LockService,
        notification_service: NotificationService,
    ):
        self.repo = OrderRepo(db)
        self.cart_repo = CartRepo(db)
        self.products = ProductRepo(db)
        self.cart_service = CartService(db)
        self.lock_service = lock_service
        self.notification_service = notification_service

    def place_order(self, user_id: int) -> OrderModel:
        """
        Use case: checkout.

        1. takes the per-user checkout lock
        2. prices the cart against live promotions
        3. checks stock, creates the order, decrements stock, empties the cart
        4. commits once, then sends the notification (async)
        """
        token = uuid.uuid4().hex
        if not self.lock_service.acquire_checkout_lock(user_id, token, CHECKOUT_LOCK_TTL_SECONDS):
            raise RuntimeError("Checkout already in progress")

        try:
            lines = self.cart_service.get_cart(user_id)
            if not lines:
                raise ValueError("Cart is empty")

            products = self.products.get_products(line.product_id for line in lines)
            for line in lines:
                if products[line.product_id].stock < line.quantity:
                    raise ValueError(f"Insufficient stock for {line.name}")

            totals = cart_totals(lines)
            order = OrderModel(
                user_id=user_id,
                status="pending",
                total=totals.total.quantize(CENT, rounding=ROUND_HALF_UP),
                items=[
                    OrderItemModel(
                        product_id=line.product_id,
                        quantity=line.quantity,
                        price=line.unit_price,
                    )
                    for line in lines
                ],
            )
            self.repo.create_order(order)

            for line in lines:
                products[line.product_id].stock -= line.quantity

            self.cart_repo.clear(user_id)
            self.repo.commit()

        except Exception:
            self.repo.rollback()
            raise

        finally:
            self.lock_service.release_checkout_lock(user_id, token)

        self.repo.refresh(order)
        logger.info(f"Order {order.id} placed by user {user_id}, total {order.total}")

        self.notification_service.send_order_notification(user_id, order.id, str(order.total))
        return order

    def get_order(self, order_id: int, user: UserModel) -> OrderModel:
        order = self.repo.get_order(order_id)

        if not order:
            raise NotFoundError("Order not found")

        if order.user_id != user.id and user.role != "admin":
            raise PermissionError("No access to this order")

        return order

    def list_orders(self, user_id: int) -> List[OrderModel]:
        return self.repo.list_user_orders(user_id)

    def update_status(self, order_id: int, status: str) -> OrderModel:
        order = self.repo.update_order_status(order_id, status)
        if not order:
            raise NotFoundError("Order not found")

        logger.info(f"Order {order_id} status -> {status}")
        return order
