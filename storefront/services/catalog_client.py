# storefront/services/catalog_client.py
from datetime import datetime, timezone

import requests
from requests import RequestException

from storefront.domain.exceptions import CatalogUnavailableError
from storefront.domain.schemas import (
    Category,
    CategoryIn,
    Order,
    Product,
    ProductIn,
    ProductUpdate,
)
from storefront.utils.retry import http_retry
from storefront.utils.slugs import generate_product_id, slugify
from storefront.utils.settings import CATALOG_SERVICE_URL, HTTP_TIMEOUT_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class DocumentStoreClient:
    """Wspolny klient HTTP bazy dokumentow (katalog, ustawienia, zamowienia)."""

    def __init__(self, base_url: str | None = None, timeout: int = HTTP_TIMEOUT_SECONDS):
        self.base_url = (base_url or CATALOG_SERVICE_URL).rstrip("/")
        self.timeout = timeout

    def _call(self, method: str, path: str, params: dict | None = None, json: dict | None = None) -> requests.Response:
        url = f"{self.base_url}{path}"
        logger.info(f"{self.__class__.__name__} {method} {url} params={params}")

        resp = requests.request(method, url, params=params, json=json, timeout=self.timeout)
        #404 to brak dokumentu, nie blad
        if resp.status_code != 404:
            resp.raise_for_status()
        return resp

    @http_retry()
    def _call_with_retry(self, method: str, path: str, params: dict | None = None, json: dict | None = None) -> requests.Response:
        return self._call(method, path, params, json)

    def _fetch(
        self,
        method: str,
        path: str,
        params: dict | None = None,
        json: dict | None = None,
        retry: bool = True,
    ) -> requests.Response:
        call = self._call_with_retry if retry else self._call
        try:
            return call(method, path, params, json)
        except RequestException as e:
            logger.error(f"Document store {method} {path} failed: {e}")
            raise CatalogUnavailableError() from e


class CatalogClient(DocumentStoreClient):
    """Klient katalogu: odczyt dla sklepu, zapis dla panelu admina."""

    #query
    def list_products(self, category: str | None = None, featured: bool | None = None) -> list[Product]:
        params = {}
        if category:
            params["category"] = category
        if featured is not None:
            params["featured"] = str(featured).lower()

        resp = self._fetch("GET", "/products", params or None)
        return [Product.model_validate(p) for p in resp.json()]

    def get_product(self, product_id: str) -> Product | None:
        resp = self._fetch("GET", f"/products/{product_id}")
        if resp.status_code == 404:
            return None
        return Product.model_validate(resp.json())

    def list_categories(self) -> list[Category]:
        resp = self._fetch("GET", "/categories")
        return [Category.model_validate(c) for c in resp.json()]

    def get_category_by_slug(self, slug: str) -> Category | None:
        #katalog nie ma lookupu po slugu, filtrujemy liste
        return next((c for c in self.list_categories() if c.slug == slug), None)

    def list_orders(self) -> list[Order]:
        resp = self._fetch("GET", "/orders")
        return [Order.model_validate(o) for o in resp.json()]

    #commands (admin)
    def create_product(self, payload: ProductIn) -> Product:
        product_id = generate_product_id(payload.name)
        now = _now()
        body = {
            **payload.model_dump(by_alias=True, mode="json"),
            "createdAt": now,
            "updatedAt": now,
        }

        #PUT pod wygenerowanym id, ponowienie nie tworzy duplikatu
        resp = self._fetch("PUT", f"/products/{product_id}", json=body)
        logger.info(f"Utworzono produkt {product_id}")
        return Product.model_validate(resp.json())

    def update_product(self, product_id: str, payload: ProductUpdate) -> Product | None:
        body = {
            **payload.model_dump(by_alias=True, mode="json", exclude_unset=True),
            "updatedAt": _now(),
        }

        resp = self._fetch("PATCH", f"/products/{product_id}", json=body)
        if resp.status_code == 404:
            return None
        return Product.model_validate(resp.json())

    def delete_product(self, product_id: str) -> bool:
        resp = self._fetch("DELETE", f"/products/{product_id}")
        return resp.status_code != 404

    def create_category(self, payload: CategoryIn) -> Category:
        body = payload.model_dump(by_alias=True)
        body["slug"] = payload.slug or slugify(payload.name)

        #POST nadaje nowe id, bez ponawiania zeby nie zdublowac kategorii
        resp = self._fetch("POST", "/categories", json=body, retry=False)
        return Category.model_validate(resp.json())

    def update_category(self, category_id: str, payload: CategoryIn) -> Category | None:
        body = payload.model_dump(by_alias=True)
        body["slug"] = payload.slug or slugify(payload.name)

        resp = self._fetch("PUT", f"/categories/{category_id}", json=body)
        if resp.status_code == 404:
            return None
        return Category.model_validate(resp.json())

    def delete_category(self, category_id: str) -> bool:
        resp = self._fetch("DELETE", f"/categories/{category_id}")
        return resp.status_code != 404
