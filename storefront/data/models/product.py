#storefront/data/models/product.py
from sqlalchemy import Column, Integer, ForeignKey, String, Numeric, DateTime, Text
from sqlalchemy.orm import relationship

from storefront.data.database import Base, utcnow


class ProductImageModel(Base):
    __tablename__ = "product_images"

    id = Column(Integer, primary_key=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    image_url = Column(String, nullable=False)
    position = Column(Integer, nullable=False, default=0)

    product = relationship("ProductModel", back_populates="images")


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    sku = Column(String, nullable=False, unique=True)
    category = Column(String, nullable=False, index=True)
    price = Column(Numeric(10, 2), nullable=False)
    stock = Column(Integer, nullable=False, default=0)
    description = Column(Text, nullable=True)
    status = Column(String, nullable=False, default="In Stock")

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    #image order matters, the first one is the thumbnail
    images = relationship(
        "ProductImageModel",
        back_populates="product",
        cascade="all, delete-orphan",
        order_by=[ProductImageModel.position, ProductImageModel.id],
    )
