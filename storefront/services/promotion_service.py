# storefront/services/promotion_service.py
from datetime import date, datetime, timezone
from typing import List

from sqlalchemy.orm import Session

from storefront.data.models.promotion import PromotionModel
from storefront.domain.pricing import PERCENTAGE, PromotionSnapshot
from storefront.domain.schemas import PromotionIn
from storefront.repos.promotion_repo import PromotionRepo, to_snapshot
from storefront.services.errors import NotFoundError
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def today() -> date:
    #calendar date in UTC, promotion windows are plain dates
    return datetime.now(timezone.utc).date()


class PromotionService:
    """
    Promotions admin use cases plus the read used by pricing.
    Nothing here is cached: every pricing read asks the store again.
    """

    def __init__(self, db: Session):
        self.repo = PromotionRepo(db)

    #queries
    def active_snapshots(self, on: date | None = None) -> List[PromotionSnapshot]:
        return [to_snapshot(p) for p in self.repo.get_active(on or today())]

    def list_active(self, on: date | None = None) -> List[PromotionModel]:
        return self.repo.get_active(on or today())

    def list_promotions(self) -> List[PromotionModel]:
        return self.repo.list_promotions()

    def get_promotion(self, promotion_id: int) -> PromotionModel:
        promotion = self.repo.get_promotion(promotion_id)
        if not promotion:
            raise NotFoundError("Promotion not found")
        return promotion

    #commands
    def create_promotion(self, payload: PromotionIn) -> PromotionModel:
        code = self._validate(payload)

        promotion = PromotionModel(
            code=code,
            description=payload.description,
            type=payload.type,
            value=payload.value,
            start_date=payload.start_date,
            end_date=payload.end_date,
            applies_to=payload.applies_to,
            is_active=payload.is_active,
        )
        self.repo.add_promotion(promotion)
        self.repo.commit()
        self.repo.refresh(promotion)

        logger.info(f"Promotion {promotion.id} created (code={promotion.code}, {promotion.type} {promotion.value})")
        return promotion

    def update_promotion(self, promotion_id: int, payload: PromotionIn) -> PromotionModel:
        promotion = self.get_promotion(promotion_id)
        code = self._validate(payload, current_id=promotion.id)

        promotion.code = code
        promotion.description = payload.description
        promotion.type = payload.type
        promotion.value = payload.value
        promotion.start_date = payload.start_date
        promotion.end_date = payload.end_date
        promotion.applies_to = payload.applies_to
        promotion.is_active = payload.is_active

        self.repo.commit()
        self.repo.refresh(promotion)

        logger.info(f"Promotion {promotion.id} updated")
        return promotion

    def toggle_promotion(self, promotion_id: int) -> PromotionModel:
        promotion = self.get_promotion(promotion_id)
        promotion.is_active = not promotion.is_active
        self.repo.commit()
        self.repo.refresh(promotion)

        logger.info(f"Promotion {promotion.id} is_active={promotion.is_active}")
        return promotion

    def delete_promotion(self, promotion_id: int) -> None:
        promotion = self.get_promotion(promotion_id)
        self.repo.delete_promotion(promotion)
        self.repo.commit()

        logger.info(f"Promotion {promotion_id} deleted")

    def deactivate_expired(self, on: date | None = None) -> int:
        count = self.repo.deactivate_expired(on or today())
        self.repo.commit()
        return count

    def _validate(self, payload: PromotionIn, current_id: int | None = None) -> str | None:
        """Returns the code to store (None for a general discount)."""
        code = payload.code or None

        if code is not None and not code.strip():
            raise ValueError("Discount code cannot be empty")

        # general discounts can only be percentage based
        if code is None and payload.type != PERCENTAGE:
            raise ValueError("General discounts can only be percentage-based")

        if code is not None:
            code = code.strip()
            existing = self.repo.get_by_code(code)
            if existing and existing.id != current_id:
                raise ValueError("Discount code already exists")

        return code
