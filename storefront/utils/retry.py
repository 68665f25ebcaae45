# storefront/utils/retry.py
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type
import requests


def http_retry():
    """Retry transport failures only; an HTTP error status from the upstream is final."""
    return retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.3, min=0.3, max=3),
        retry=retry_if_exception_type((requests.ConnectionError, requests.Timeout)),
    )
