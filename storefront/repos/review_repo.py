# storefront/repos/review_repo.py
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.data.models.review import ReviewModel


class ReviewRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_for_product(self, product_id: int) -> List[ReviewModel]:
        stmt = (
            select(ReviewModel)
            .where(ReviewModel.product_id == product_id)
            .order_by(ReviewModel.created_at.desc(), ReviewModel.id.desc())
        )
        return list(self.db.execute(stmt).scalars())

    def get_user_review(self, review_id: int, user_id: int) -> ReviewModel | None:
        return self.db.execute(
            select(ReviewModel).where(
                ReviewModel.id == review_id,
                ReviewModel.user_id == user_id,
            )
        ).scalar_one_or_none()

    def add_review(self, review: ReviewModel) -> ReviewModel:
        self.db.add(review)
        self.db.flush()
        return review

    def delete_review(self, review: ReviewModel) -> None:
        self.db.delete(review)

    def commit(self):
        self.db.commit()

    def refresh(self, obj):
        self.db.refresh(obj)
