# storefront/services/product_service.py
from datetime import date
from typing import Any, Dict, List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel
from storefront.domain.pricing import PromotionSnapshot, best_price
from storefront.domain.schemas import ProductIn
from storefront.repos.product_repo import ProductRepo, to_snapshot
from storefront.services.errors import NotFoundError
from storefront.services.media_client import MediaClient
from storefront.services.promotion_service import PromotionService, today
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class ProductService:
    """
    Catalog use cases. Every read is priced against today's promotions,
    the same way cart lines are.
    """

    def __init__(self, db: Session, media_client: MediaClient | None = None):
        self.repo = ProductRepo(db)
        self.promotions = PromotionService(db)
        self.media_client = media_client

    #queries
    def list_products(self, category: str | None = None, on: date | None = None) -> List[Dict[str, Any]]:
        on = on or today()
        promotions = self.promotions.active_snapshots(on)
        return [self._priced(p, promotions, on) for p in self.repo.list_products(category)]

    def get_product(self, product_id: int, on: date | None = None) -> Dict[str, Any]:
        on = on or today()
        product = self._get(product_id)
        return self._priced(product, self.promotions.active_snapshots(on), on)

    #commands
    def create_product(self, payload: ProductIn) -> Dict[str, Any]:
        if self.repo.get_by_sku(payload.sku):
            raise ValueError("SKU already exists")

        product = ProductModel(**payload.model_dump())
        self.repo.add_product(product)
        self.repo.commit()
        self.repo.refresh(product)

        logger.info(f"Product {product.id} created ({product.sku})")
        return self.get_product(product.id)

    def update_product(self, product_id: int, payload: ProductIn) -> Dict[str, Any]:
        product = self._get(product_id)

        clash = self.repo.get_by_sku(payload.sku)
        if clash and clash.id != product.id:
            raise ValueError("SKU already exists")

        for field, value in payload.model_dump().items():
            setattr(product, field, value)
        self.repo.commit()

        logger.info(f"Product {product_id} updated")
        return self.get_product(product_id)

    def delete_product(self, product_id: int) -> None:
        product = self._get(product_id)
        try:
            self.repo.delete_product(product)
            self.repo.commit()
        except IntegrityError:
            self.repo.rollback()
            raise ValueError("Product is referenced by orders and cannot be deleted")

        logger.info(f"Product {product_id} deleted")

    def add_image(self, product_id: int, filename: str, content: bytes, content_type: str | None = None) -> Dict[str, Any]:
        product = self._get(product_id)
        if not content:
            raise ValueError("Empty image file")

        image_url = self.media_client.upload_image(filename, content, content_type)
        self.repo.add_image(product, image_url)
        self.repo.commit()

        logger.info(f"Image attached to product {product_id}: {image_url}")
        return self.get_product(product_id)

    def _get(self, product_id: int) -> ProductModel:
        product = self.repo.get_product(product_id)
        if not product:
            raise NotFoundError("Product not found")
        return product

    @staticmethod
    def _priced(product: ProductModel, promotions: List[PromotionSnapshot], on: date) -> Dict[str, Any]:
        discount = best_price(to_snapshot(product), promotions, on)
        return {
            "id": product.id,
            "name": product.name,
            "sku": product.sku,
            "category": product.category,
            "price": product.price,
            "discount_price": discount.price if discount else None,
            "discount_percentage": discount.percent if discount else None,
            "stock": product.stock,
            "description": product.description,
            "status": product.status,
            "images": [img.image_url for img in product.images],
        }
