from typing import List

from sqlalchemy.orm import Session

from storefront.data.models.review import ReviewModel
from storefront.data.models.user import UserModel
from storefront.domain.schemas import ReviewIn, ReviewOut
from storefront.repos.product_repo import ProductRepo
from storefront.repos.review_repo import ReviewRepo
from storefront.services.errors import NotFoundError
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def to_out(review: ReviewModel) -> ReviewOut:
    return ReviewOut(
        id=review.id,
        product_id=review.product_id,
        user=review.user.name if review.user else "Anonymous",
        comment=review.comment,
        rating=review.rating,
        created_at=review.created_at,
    )


class ReviewService:
    """
    Product reviews. Anyone can read them; a user may post any number of
    reviews per product and edit or delete only their own.
    """

    def __init__(self, db: Session):
        self.repo = ReviewRepo(db)
        self.products = ProductRepo(db)

    def list_reviews(self, product_id: int) -> List[ReviewOut]:
        if not self.products.get_product(product_id):
            raise NotFoundError("Product not found")
        return [to_out(r) for r in self.repo.list_for_product(product_id)]

    def create_review(self, product_id: int, user: UserModel, payload: ReviewIn) -> ReviewOut:
        if not self.products.get_product(product_id):
            raise NotFoundError("Product not found")

        review = self.repo.add_review(
            ReviewModel(
                product_id=product_id,
                user_id=user.id,
                comment=payload.comment,
                rating=payload.rating,
            )
        )
        self.repo.commit()
        self.repo.refresh(review)
        logger.info(f"User {user.id} reviewed product {product_id} ({payload.rating}/5)")
        return to_out(review)

    def update_review(self, review_id: int, user: UserModel, payload: ReviewIn) -> ReviewOut:
        review = self._own_review(review_id, user)
        review.comment = payload.comment
        review.rating = payload.rating
        self.repo.commit()
        self.repo.refresh(review)
        return to_out(review)

    def delete_review(self, review_id: int, user: UserModel) -> None:
        review = self._own_review(review_id, user)
        self.repo.delete_review(review)
        self.repo.commit()
        logger.info(f"User {user.id} deleted review {review_id}")

    def _own_review(self, review_id: int, user: UserModel) -> ReviewModel:
        review = self.repo.get_user_review(review_id, user.id)
        if not review:
            raise NotFoundError("Review not found or not authorized")
        return review
