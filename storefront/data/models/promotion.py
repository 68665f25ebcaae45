from sqlalchemy import Column, Integer, String, Numeric, Date, DateTime, Boolean

from storefront.data.database import Base, utcnow


class PromotionModel(Base):
    __tablename__ = "promotions"

    id = Column(Integer, primary_key=True)
    code = Column(String, nullable=True, unique=True)  # NULL -> general discount
    description = Column(String, nullable=False)
    type = Column(String, nullable=False)  # percentage, fixed
    value = Column(Numeric(10, 2), nullable=False)

    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    applies_to = Column(String, nullable=False, default="All Products")
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
