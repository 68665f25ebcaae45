import redis
from redis.exceptions import RedisError
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type
from storefront.utils.settings import REDIS_URL
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

#compare-and-delete in one lua call, so a lock that already expired and was
#taken by another checkout is never released by us
_RELEASE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""


def redis_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.2, min=0.2, max=2),
        retry=retry_if_exception_type(RedisError),
    )


class LockService:
    """
    Per-user checkout lock in redis.
    One order placement per user at a time; the lock expires on its own (EX).
    """

    def __init__(self, url: str | None = None):
        self.redis = redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )

    @staticmethod
    def _key(user_id: int) -> str:
        return f"checkout:{user_id}:lock"

    @redis_retry()
    def acquire_checkout_lock(self, user_id: int, token: str, ttl: int) -> bool:
        key = self._key(user_id)
        logger.info(f"Acquire lock {key}")
        #SET checkout:7:lock "<token>" NX EX 30
        return bool(
            self.redis.set(
                name=key,
                value=token,
                nx=True,
                ex=ttl,
            )
        )

    @redis_retry()
    def release_checkout_lock(self, user_id: int, token: str) -> bool:
        key = self._key(user_id)
        logger.info(f"Release lock {key}")
        res = self.redis.eval(_RELEASE_LUA, 1, key, token)
        return bool(res)
