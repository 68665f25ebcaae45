# storefront/api/routers/reviews.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_user
from storefront.data.database import get_db
from storefront.data.models.user import UserModel
from storefront.domain.schemas import ReviewIn, ReviewOut
from storefront.services.errors import NotFoundError
from storefront.services.review_service import ReviewService

router = APIRouter(tags=["reviews"])


@router.get("/products/{product_id}/reviews", response_model=List[ReviewOut])
def list_reviews(product_id: int, db: Session = Depends(get_db)):
    try:
        return ReviewService(db).list_reviews(product_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/products/{product_id}/reviews", response_model=ReviewOut, status_code=201)
def create_review(
    product_id: int,
    payload: ReviewIn,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        return ReviewService(db).create_review(product_id, user, payload)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/reviews/{review_id}", response_model=ReviewOut)
def update_review(
    review_id: int,
    payload: ReviewIn,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        return ReviewService(db).update_review(review_id, user, payload)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/reviews/{review_id}")
def delete_review(
    review_id: int,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        ReviewService(db).delete_review(review_id, user)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"message": "Review deleted successfully"}
