# storefront/services/lock_service.py
import secrets
from contextlib import contextmanager

import redis
from tenacity import RetryError, retry, retry_if_result, stop_after_attempt, wait_exponential

from storefront.domain.exceptions import CartBusyError
from storefront.utils.retry import redis_retry
from storefront.utils.settings import REDIS_URL, CART_LOCK_TTL_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

#LUA porownaj i usun, atomicity
_RELEASE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""

#redis wykonuje skrypt lua atomowo, nikt nie wcisnie sie miedzy GET a DEL
#wiec lock zwolni tylko ten kto go trzyma (porownanie tokenu)


def _acquire_retry():
    return retry(
        stop=stop_after_attempt(5),
        wait=wait_exponential(multiplier=0.05, min=0.05, max=0.5),
        retry=retry_if_result(lambda locked: not locked),
    )


class LockService:
    """
    -blokada koszyka na czas read-modify-write (wiele workerow)
    -zwalnianie locka tokenem
    -atomowosc przy pomocy lua
    """

    def __init__(self, client: redis.Redis | None = None, ttl: int = CART_LOCK_TTL_SECONDS):
        self.redis = client or redis.Redis.from_url(REDIS_URL, decode_responses=True)
        self.ttl = ttl

    @staticmethod
    def key(session_id: str) -> str:
        return f"cart:{session_id}:lock"

    @redis_retry()
    def acquire_cart_lock(self, session_id: str, token: str) -> bool:
        key = self.key(session_id)
        logger.info(f"Acquire lock {key}")
        #SET cart:abc:lock "token" NX EX 10
        return bool(self.redis.set(name=key, value=token, nx=True, ex=self.ttl))

    @redis_retry()
    def release_cart_lock(self, session_id: str, token: str) -> bool:
        key = self.key(session_id)
        logger.info(f"Release lock {key}")
        res = self.redis.eval(_RELEASE_LUA, 1, key, token)
        return bool(res)

    @contextmanager
    def hold(self, session_id: str):
        token = secrets.token_hex(16)
        acquire = _acquire_retry()(self.acquire_cart_lock)

        try:
            acquire(session_id, token)
        except RetryError:
            raise CartBusyError(session_id)

        try:
            yield
        finally:
            if not self.release_cart_lock(session_id, token):
                #ttl wygasl w trakcie operacji
                logger.warning(f"Lock {self.key(session_id)} was not held at release")
