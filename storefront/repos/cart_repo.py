# storefront/repos/cart_repo.py
from typing import List

from sqlalchemy import select, delete
from sqlalchemy.orm import Session

from storefront.data.models.cart_item import CartItemModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_user_items(self, user_id: int) -> List[CartItemModel]:
        #newest first
        return list(
            self.db.execute(
                select(CartItemModel)
                .where(CartItemModel.user_id == user_id)
                .order_by(CartItemModel.created_at.desc(), CartItemModel.id.desc())
            ).scalars()
        )

    def get_item(self, item_id: int, user_id: int) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.id == item_id,
                CartItemModel.user_id == user_id,
            )
        ).scalar_one_or_none()

    def get_item_by_product(self, user_id: int, product_id: int) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.user_id == user_id,
                CartItemModel.product_id == product_id,
            )
        ).scalar_one_or_none()

    def add_item(self, item: CartItemModel) -> CartItemModel:
        self.db.add(item)
        self.db.flush()
        return item

    def delete_item(self, item: CartItemModel) -> None:
        self.db.delete(item)
        self.db.flush()

    def clear(self, user_id: int) -> int:
        result = self.db.execute(
            delete(CartItemModel).where(CartItemModel.user_id == user_id)
        )
        return result.rowcount or 0

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()

    def refresh(self, obj):
        self.db.refresh(obj)
