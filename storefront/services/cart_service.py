# storefront/services/cart_service.py
from datetime import date
from typing import List, Tuple

from sqlalchemy.orm import Session

from storefront.data.models.cart_item import CartItemModel
from storefront.domain.cart_pricing import CartLine, CartTotals, PricedCartLine, cart_totals, price_cart
from storefront.domain.schemas import CartItemRead
from storefront.repos.cart_repo import CartRepo
from storefront.repos.product_repo import ProductRepo, to_snapshot
from storefront.services.errors import NotFoundError
from storefront.services.promotion_service import PromotionService, today
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Cart use cases for one user.
    commands (add, update, remove, clear) change the stored lines,
    queries (get_cart, get_summary) only read and price them.
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.products = ProductRepo(db)
        self.promotions = PromotionService(db)

    #query
    def get_cart(self, user_id: int, on: date | None = None) -> List[PricedCartLine]:
        on = on or today()

        items = self.repo.get_user_items(user_id)
        products = self.products.get_products(i.product_id for i in items)
        images = self.products.get_images(products.keys())
        promotions = self.promotions.active_snapshots(on)

        lines = [
            CartLine(
                id=i.id,
                product_id=i.product_id,
                quantity=i.quantity,
                created_at=i.created_at,
                updated_at=i.updated_at,
            )
            for i in items
        ]
        snapshots = {pid: to_snapshot(p) for pid, p in products.items()}

        return price_cart(lines, snapshots, images, promotions, on)

    def get_summary(self, user_id: int, on: date | None = None) -> Tuple[List[PricedCartLine], CartTotals]:
        lines = self.get_cart(user_id, on)
        return lines, cart_totals(lines)

    #commands
    def add_product(self, user_id: int, product_id: int, quantity: int = 1) -> CartItemModel:
        if quantity < 1:
            raise ValueError("Invalid product ID or quantity")

        product = self.products.get_product(product_id)
        if not product:
            raise NotFoundError("Product not found")

        if product.stock < quantity:
            raise ValueError("Insufficient stock")

        existing = self.repo.get_item_by_product(user_id, product_id)

        if existing:
            new_quantity = existing.quantity + quantity
            if new_quantity > product.stock:
                raise ValueError("Insufficient stock for requested quantity")

            logger.info(
                f"Product {product_id} already in cart of user {user_id}, "
                f"quantity {existing.quantity} -> {new_quantity}"
            )
            existing.quantity = new_quantity
            item = existing
        else:
            logger.info(f"Adding product {product_id} to cart of user {user_id}")
            item = self.repo.add_item(
                CartItemModel(
                    user_id=user_id,
                    product_id=product_id,
                    quantity=quantity,
                )
            )

        self.repo.commit()
        self.repo.refresh(item)
        return item

    def update_quantity(self, user_id: int, item_id: int, quantity: int) -> CartItemModel:
        if quantity < 1:
            raise ValueError("Quantity must be at least 1")

        item = self.repo.get_item(item_id, user_id)
        if not item:
            raise NotFoundError("Cart item not found")

        product = self.products.get_product(item.product_id)
        if product is None or quantity > product.stock:
            raise ValueError("Insufficient stock")

        item.quantity = quantity
        self.repo.commit()
        self.repo.refresh(item)

        logger.info(f"Cart item {item_id} of user {user_id} set to quantity {quantity}")
        return item

    def remove_item(self, user_id: int, item_id: int) -> CartItemRead:
        item = self.repo.get_item(item_id, user_id)
        if not item:
            raise NotFoundError("Cart item not found")

        #read it out before the row is gone
        removed = CartItemRead.model_validate(item)
        self.repo.delete_item(item)
        self.repo.commit()

        logger.info(f"Cart item {item_id} removed for user {user_id}")
        return removed

    def clear_cart(self, user_id: int) -> int:
        deleted = self.repo.clear(user_id)
        self.repo.commit()

        logger.info(f"Cart of user {user_id} cleared ({deleted} lines)")
        return deleted
