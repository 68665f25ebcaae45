# storefront/repos/product_repo.py
from typing import Dict, Iterable, List

from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel, ProductImageModel
from storefront.domain.pricing import ProductSnapshot


def to_snapshot(product: ProductModel) -> ProductSnapshot:
    return ProductSnapshot(
        id=product.id,
        name=product.name,
        price=product.price,
        stock=product.stock,
        category=product.category,
        sku=product.sku,
    )


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: int) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def get_by_sku(self, sku: str) -> ProductModel | None:
        return self.db.execute(
            select(ProductModel).where(ProductModel.sku == sku)
        ).scalar_one_or_none()

    def get_products(self, product_ids: Iterable[int]) -> Dict[int, ProductModel]:
        ids = set(product_ids)
        if not ids:
            return {}
        rows = self.db.execute(
            select(ProductModel).where(ProductModel.id.in_(ids))
        ).scalars()
        return {p.id: p for p in rows}

    def list_products(self, category: str | None = None) -> List[ProductModel]:
        stmt = select(ProductModel).order_by(ProductModel.created_at.desc(), ProductModel.id.desc())
        if category is not None:
            stmt = stmt.where(ProductModel.category == category)
        return list(self.db.execute(stmt).scalars())

    def get_images(self, product_ids: Iterable[int]) -> Dict[int, List[str]]:
        """product_id -> ordered image urls; products without images are absent."""
        ids = set(product_ids)
        if not ids:
            return {}
        rows = self.db.execute(
            select(ProductImageModel)
            .where(ProductImageModel.product_id.in_(ids))
            .order_by(ProductImageModel.position, ProductImageModel.id)
        ).scalars()

        images: Dict[int, List[str]] = {}
        for img in rows:
            images.setdefault(img.product_id, []).append(img.image_url)
        return images

    def add_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.flush()
        return product

    def add_image(self, product: ProductModel, image_url: str) -> ProductImageModel:
        image = ProductImageModel(
            image_url=image_url,
            position=len(product.images),
        )
        product.images.append(image)
        self.db.flush()
        return image

    def delete_product(self, product: ProductModel) -> None:
        self.db.delete(product)
        self.db.flush()

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()

    def refresh(self, obj):
        self.db.refresh(obj)
