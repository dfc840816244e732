# storefront/services/settings_client.py
from datetime import datetime, timezone

from storefront.domain.schemas import HeroSettings
from storefront.services.catalog_client import DocumentStoreClient
from storefront.utils.settings import HERO_DEFAULT_IMAGE
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class SiteSettingsClient(DocumentStoreClient):
    """Ustawienia strony (dokument settings/hero)."""

    def get_hero(self) -> HeroSettings:
        resp = self._fetch("GET", "/settings/hero")
        if resp.status_code == 404:
            return HeroSettings(image_url=HERO_DEFAULT_IMAGE)
        return HeroSettings.model_validate(resp.json())

    def update_hero(self, image_url: str) -> HeroSettings:
        body = {"imageUrl": image_url, "updatedAt": datetime.now(timezone.utc).isoformat()}

        resp = self._fetch("PUT", "/settings/hero", json=body)
        logger.info(f"Hero image set to {image_url}")
        return HeroSettings.model_validate(resp.json())
