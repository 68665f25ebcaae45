# storefront/tasks/promotions.py
from storefront.celery_worker import celery_app
from storefront.data.database import SessionLocal
from storefront.services.promotion_service import PromotionService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@celery_app.task(name="storefront.tasks.promotions.deactivate_expired_promotions_task")
def deactivate_expired_promotions_task():
    logger.info("Deactivate expired promotions task started")

    db = SessionLocal()
    try:
        count = PromotionService(db).deactivate_expired()
        logger.info(f"Deactivated {count} expired promotions")
        return count
    finally:
        db.close()
