# shopcart/celery_worker.py
from celery import Celery

from shopcart.utils.settings import CELERY_BROKER_URL, CELERY_RESULT_BACKEND

celery_app = Celery(
    "shopcart",
    broker=CELERY_BROKER_URL or None,
    backend=CELERY_RESULT_BACKEND or None,
)

# WAZNE: explicite importuj taski, zeby Celery je zarejestrowal
celery_app.conf.imports = (
    "shopcart.services.notification_service",
)

#bez brokera (dev, testy) taski wykonuja sie od razu w procesie
celery_app.conf.task_always_eager = not CELERY_BROKER_URL
celery_app.conf.task_ignore_result = not CELERY_RESULT_BACKEND
celery_app.conf.timezone = "UTC"
