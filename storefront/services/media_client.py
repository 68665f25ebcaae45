# storefront/services/media_client.py
import requests

from storefront.utils.retry import http_retry
from storefront.utils.settings import MEDIA_SERVICE_URL, MEDIA_SERVICE_TIMEOUT, MEDIA_FOLDER
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class MediaClient:
    """HTTP client for the image host. Returns the public url of an uploaded file."""

    def __init__(self, base_url: str | None = None, timeout: int = MEDIA_SERVICE_TIMEOUT):
        self.base_url = (base_url or MEDIA_SERVICE_URL).rstrip("/")
        self.timeout = timeout

    @http_retry()
    def upload_image(self, filename: str, content: bytes, content_type: str | None = None) -> str:
        url = f"{self.base_url}/upload"
        logger.info(f"MediaClient POST {url} ({filename}, {len(content)} bytes)")

        resp = requests.post(
            url,
            files={"file": (filename, content, content_type or "application/octet-stream")},
            data={"folder": MEDIA_FOLDER},
            timeout=self.timeout,
        )
        resp.raise_for_status()

        secure_url = resp.json().get("secure_url")
        if not secure_url:
            raise RuntimeError("Media service response has no secure_url")
        return secure_url
