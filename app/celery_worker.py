# app/celery_worker.py
from celery import Celery

from app.utils.settings import Settings, load_settings

celery_app = Celery("storefront")

# WAŻNE: Explicite importuj taski, żeby Celery je zarejestrował
celery_app.conf.imports = (
    "app.services.notification_service",
)
celery_app.conf.timezone = "UTC"


def configure_celery(settings: Settings) -> Celery:
    celery_app.conf.update(
        broker_url=settings.celery_broker_url,
        result_backend=settings.celery_result_backend,
        task_always_eager=settings.celery_task_always_eager,
        task_ignore_result=True,
        # bez ponawiania publikacji, blad brokera tylko logujemy
        task_publish_retry=False,
    )
    return celery_app


# worker (`celery -A app.celery_worker worker`) czyta konfiguracje ze srodowiska,
# aplikacja webowa nadpisuje ja w create_app
configure_celery(load_settings())
