# app/services/notification_service.py
from app.celery_worker import celery_app
from app.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Serwis do wysyłania powiadomień.
    Używa Celery do asynchronicznego przetwarzania.
    """

    @staticmethod
    def send_order_notification(order_id: int, user_id: int | None):
        """
        Kolejkuje powiadomienie o zlozonym zamowieniu.
        Zamowienie jest juz zapisane, wiec blad brokera tylko logujemy.
        """
        try:
            send_order_notification_task.delay(order_id, user_id)
        except Exception as e:
            logger.warning(f"Failed to queue notification for order {order_id}: {e}")


@celery_app.task(name="app.services.notification_service.send_order_notification_task")
def send_order_notification_task(order_id: int, user_id: int | None):
    """
    Celery task - w prawdziwym systemie wysłałby email z potwierdzeniem zamowienia.
    Teraz tylko loguje.
    """
    recipient = f"user {user_id}" if user_id is not None else "guest"
    logger.info(f"[NOTIFICATION] Order {order_id} placed by {recipient}")

    return {"order_id": order_id, "user_id": user_id, "status": "sent"}
