# shopcart/services/notification_service.py
from decimal import Decimal

from shopcart.celery_worker import celery_app
from shopcart.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Serwis do wysylania powiadomien.
    Uzywa Celery do asynchronicznego przetwarzania.
    """

    @staticmethod
    def send_order_notification(user_id: int, order_id: int, total: Decimal) -> bool:
        """
        Zamowienie jest juz zacommitowane, blad kolejki tylko logujemy.
        """
        try:
            send_order_notification_task.delay(user_id, order_id, str(total))
        except Exception as e:
            logger.error(f"Failed to enqueue notification for order {order_id}: {e}")
            return False
        return True


@celery_app.task(name="shopcart.services.notification_service.send_order_notification_task")
def send_order_notification_task(user_id: int, order_id: int, total: str):
    """
    Celery task - na razie tylko loguje zdarzenie "order placed".
    """
    logger.info(f"[NOTIFICATION] User {user_id}: Order {order_id} placed, total {total}")

    return {"user_id": user_id, "order_id": order_id, "total": total, "status": "sent"}
