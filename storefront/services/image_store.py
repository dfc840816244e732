# storefront/services/image_store.py
from uuid import uuid4

import requests
from requests import RequestException

from storefront.domain.exceptions import ImageUploadError
from storefront.utils.retry import http_retry
from storefront.utils.settings import (
    CLOUDINARY_CLOUD_NAME,
    CLOUDINARY_UPLOAD_PRESET,
    HTTP_TIMEOUT_SECONDS,
)
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

CDN_HOST = "cloudinary.com"
UPLOAD_MARKER = "/upload/"


def derive_url(url: str, width: int = 500, height: int = 500) -> str:
    """Wersja obrazka w podanym rozmiarze (transformacja w url CDN)."""
    if CDN_HOST not in url or UPLOAD_MARKER not in url:
        return url

    head, tail = url.split(UPLOAD_MARKER, 1)
    return f"{head}{UPLOAD_MARKER}c_fill,w_{width},h_{height}/{tail}"


class ImageStore:
    """Upload obrazkow produktow do CDN (unsigned upload preset)."""

    def __init__(
        self,
        cloud_name: str | None = None,
        upload_preset: str | None = None,
        timeout: int = HTTP_TIMEOUT_SECONDS * 6,
    ):
        self.cloud_name = cloud_name or CLOUDINARY_CLOUD_NAME
        self.upload_preset = upload_preset or CLOUDINARY_UPLOAD_PRESET
        self.timeout = timeout

    @property
    def upload_url(self) -> str:
        return f"https://api.{CDN_HOST}/v1_1/{self.cloud_name}/image/upload"

    @http_retry()
    def _post(self, data: bytes, filename: str, content_type: str | None) -> dict:
        logger.info(f"ImageStore POST {self.upload_url} file={filename}")

        resp = requests.post(
            self.upload_url,
            data={"upload_preset": self.upload_preset},
            files={"file": (filename, data, content_type or "application/octet-stream")},
            timeout=self.timeout,
        )
        resp.raise_for_status()
        return resp.json()

    def upload(self, data: bytes, filename: str | None = None, content_type: str | None = None) -> str:
        if not data:
            raise ImageUploadError("Pusty plik")

        try:
            body = self._post(data, filename or str(uuid4()), content_type)
        except RequestException as e:
            logger.error(f"Upload error: {e}")
            raise ImageUploadError() from e

        return body["secure_url"]

    def derive_url(self, url: str, width: int = 500, height: int = 500) -> str:
        return derive_url(url, width, height)
