# storefront/utils/retry.py
import requests
import redis
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception


def _is_retryable_http_error(exc: BaseException) -> bool:
    #4xx to blad klienta, ponowienie nic nie zmieni
    if isinstance(exc, requests.HTTPError) and exc.response is not None:
        return exc.response.status_code >= 500
    return isinstance(exc, requests.RequestException)


def http_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.3, min=0.3, max=3),
        retry=retry_if_exception(_is_retryable_http_error),
    )


def redis_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.2, min=0.2, max=2),
        retry=retry_if_exception(lambda e: isinstance(e, redis.RedisError)),
    )
