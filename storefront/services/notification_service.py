# storefront/services/notification_service.py
from storefront.celery_worker import celery_app
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Order notifications, pushed through celery so checkout never waits on them.
    """

    @staticmethod
    def send_order_notification(user_id: int, order_id: int, total: str):
        send_order_notification_task.delay(user_id, order_id, total)


@celery_app.task(name="storefront.services.notification_service.send_order_notification_task")
def send_order_notification_task(user_id: int, order_id: int, total: str):
    """
    Only logs for now; an email provider would be called from here.
    """
    logger.info(f"[NOTIFICATION] User {user_id}: order {order_id} placed, total {total}")

    return {"user_id": user_id, "order_id": order_id, "status": "sent"}
