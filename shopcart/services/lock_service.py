import uuid
from contextlib import contextmanager

import redis

from shopcart.domain.errors import ConflictError
from shopcart.utils.retry import redis_retry
from shopcart.utils.settings import REDIS_URL, CART_LOCK_TTL_SECONDS
from shopcart.utils.logging import get_logger

logger = get_logger(__name__)

#LUA porownaj i usun, atomicity
_RELEASE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""

#skrypt lua wykonuje sie atomowo, nikt nie wcisnie sie miedzy GET a DEL
#wiec cudzy lock (po wygasnieciu naszego TTL) nie zostanie skasowany


class LockService:
    """
    -blokada koszyka usera na czas jednej mutacji (add/remove/convert)
    -zwalnianie tylko przez wlasciciela (token)
    -TTL, lock po crashu wygasa sam
    """

    def __init__(self, url: str | None = None, client: redis.Redis | None = None,
                 ttl: int | None = None):
        self.redis = client or redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )
        self.ttl = ttl or CART_LOCK_TTL_SECONDS

    @staticmethod
    def _key(user_id: int) -> str:
        return f"cart:user:{user_id}:lock"

    @redis_retry()
    def acquire_user_lock(self, user_id: int, owner: str) -> bool:
        key = self._key(user_id)
        logger.info(f"Acquire lock {key}")
        #SET cart:user:1:lock "<owner>" NX EX 10
        return bool(self.redis.set(name=key, value=owner, nx=True, ex=self.ttl))

    @redis_retry()
    def release_user_lock(self, user_id: int, owner: str) -> bool:
        key = self._key(user_id)
        logger.info(f"Release lock {key}")
        res = self.redis.eval(_RELEASE_LUA, 1, key, owner)
        return bool(res)

    @contextmanager
    def user_lock(self, user_id: int):
        owner = uuid.uuid4().hex
        if not self.acquire_user_lock(user_id, owner):
            raise ConflictError("Cart is being modified by another request, retry")
        try:
            yield
        finally:
            self.release_user_lock(user_id, owner)
