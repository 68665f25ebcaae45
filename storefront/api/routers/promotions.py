# storefront/api/routers/promotions.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.api.deps import require_admin
from storefront.data.database import get_db
from storefront.domain.schemas import PromotionIn, PromotionOut
from storefront.services.errors import NotFoundError
from storefront.services.promotion_service import PromotionService

router = APIRouter(prefix="/promotions", tags=["promotions"])


def get_service(db: Session = Depends(get_db)) -> PromotionService:
    return PromotionService(db)


@router.get("/active", response_model=List[PromotionOut])
def list_active_promotions(svc: PromotionService = Depends(get_service)):
    """Promotions running today, public."""
    return svc.list_active()


@router.get("/", response_model=List[PromotionOut], dependencies=[Depends(require_admin)])
def list_promotions(svc: PromotionService = Depends(get_service)):
    return svc.list_promotions()


@router.get("/{promotion_id}", response_model=PromotionOut, dependencies=[Depends(require_admin)])
def get_promotion(promotion_id: int, svc: PromotionService = Depends(get_service)):
    try:
        return svc.get_promotion(promotion_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/", response_model=PromotionOut, status_code=201, dependencies=[Depends(require_admin)])
def create_promotion(payload: PromotionIn, svc: PromotionService = Depends(get_service)):
    try:
        return svc.create_promotion(payload)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/{promotion_id}", response_model=PromotionOut, dependencies=[Depends(require_admin)])
def update_promotion(
    promotion_id: int,
    payload: PromotionIn,
    svc: PromotionService = Depends(get_service),
):
    try:
        return svc.update_promotion(promotion_id, payload)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/{promotion_id}/toggle", response_model=PromotionOut, dependencies=[Depends(require_admin)])
def toggle_promotion(promotion_id: int, svc: PromotionService = Depends(get_service)):
    try:
        return svc.toggle_promotion(promotion_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{promotion_id}", dependencies=[Depends(require_admin)])
def delete_promotion(promotion_id: int, svc: PromotionService = Depends(get_service)):
    try:
        svc.delete_promotion(promotion_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"message": "Promotion deleted successfully"}
