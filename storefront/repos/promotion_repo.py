# storefront/repos/promotion_repo.py
from datetime import date
from typing import List

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from storefront.data.models.promotion import PromotionModel
from storefront.domain.pricing import PromotionSnapshot


def to_snapshot(promotion: PromotionModel) -> PromotionSnapshot:
    return PromotionSnapshot(
        id=promotion.id,
        code=promotion.code,
        type=promotion.type,
        value=promotion.value,
        start_date=promotion.start_date,
        end_date=promotion.end_date,
        applies_to=promotion.applies_to,
        is_active=promotion.is_active,
    )


class PromotionRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_promotions(self) -> List[PromotionModel]:
        return list(
            self.db.execute(
                select(PromotionModel).order_by(PromotionModel.created_at.desc(), PromotionModel.id.desc())
            ).scalars()
        )

    def get_active(self, today: date) -> List[PromotionModel]:
        #active and inside the inclusive window
        return list(
            self.db.execute(
                select(PromotionModel)
                .where(
                    PromotionModel.is_active.is_(True),
                    PromotionModel.start_date <= today,
                    PromotionModel.end_date >= today,
                )
                .order_by(PromotionModel.created_at.desc(), PromotionModel.id.desc())
            ).scalars()
        )

    def get_promotion(self, promotion_id: int) -> PromotionModel | None:
        return self.db.get(PromotionModel, promotion_id)

    def get_by_code(self, code: str) -> PromotionModel | None:
        return self.db.execute(
            select(PromotionModel).where(PromotionModel.code == code)
        ).scalar_one_or_none()

    def add_promotion(self, promotion: PromotionModel) -> PromotionModel:
        self.db.add(promotion)
        self.db.flush()
        return promotion

    def delete_promotion(self, promotion: PromotionModel) -> None:
        self.db.delete(promotion)
        self.db.flush()

    def deactivate_expired(self, today: date) -> int:
        result = self.db.execute(
            update(PromotionModel)
            .where(
                PromotionModel.is_active.is_(True),
                PromotionModel.end_date < today,
            )
            .values(is_active=False)
        )
        return result.rowcount or 0

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()

    def refresh(self, obj):
        self.db.refresh(obj)
