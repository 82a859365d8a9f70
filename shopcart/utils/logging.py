# shopcart/utils/logging.py
import logging

from shopcart.utils.settings import LOG_LEVEL

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)

#sqlalchemy i celery loguja bardzo duzo na INFO
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
logging.getLogger("celery").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
