# shopcart/utils/retry.py
import logging

import redis
import requests
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from shopcart.utils.logging import get_logger

logger = get_logger(__name__)


#wspolny backoff dla bledow przejsciowych (siec, redis)
def _backoff(exc_types, multiplier: float, max_wait: float, attempts: int = 3):
    return retry(
        reraise=True,
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=multiplier, min=multiplier, max=max_wait),
        retry=retry_if_exception_type(exc_types),
        before_sleep=before_sleep_log(logger, logging.WARNING),
    )


def http_retry():
    return _backoff(requests.RequestException, multiplier=0.3, max_wait=3)


def redis_retry():
    return _backoff(redis.RedisError, multiplier=0.2, max_wait=2)
