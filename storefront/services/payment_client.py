# storefront/services/payment_client.py
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import List

import requests
from requests import RequestException

from storefront.domain.exceptions import CheckoutError
from storefront.domain.schemas import LineItem
from storefront.utils.retry import http_retry
from storefront.utils.settings import (
    PAYMENT_API_URL,
    PAYMENT_SECRET_KEY,
    PAYMENT_CURRENCY,
    HTTP_TIMEOUT_SECONDS,
)
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class PaymentSession:
    session_id: str
    url: str | None = None
    payment_status: str | None = None


def to_minor_units(amount: Decimal) -> int:
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def encode_line_items(items: List[LineItem], currency: str) -> dict:
    """Pozycje koszyka w formacie form-encoded bramki (line_items[i][...])."""
    data = {}
    for n, item in enumerate(items):
        prefix = f"line_items[{n}]"
        data[f"{prefix}[quantity]"] = item.quantity
        data[f"{prefix}[price_data][currency]"] = currency
        data[f"{prefix}[price_data][unit_amount]"] = to_minor_units(item.price)
        data[f"{prefix}[price_data][product_data][name]"] = item.name
        data[f"{prefix}[price_data][product_data][metadata][product_id]"] = item.product_id
        if item.image:
            data[f"{prefix}[price_data][product_data][images][0]"] = item.image
    return data


class PaymentClient:
    def __init__(
        self,
        base_url: str | None = None,
        secret_key: str | None = None,
        currency: str = PAYMENT_CURRENCY,
        timeout: int = HTTP_TIMEOUT_SECONDS,
    ):
        self.base_url = (base_url or PAYMENT_API_URL).rstrip("/")
        self.secret_key = secret_key if secret_key is not None else PAYMENT_SECRET_KEY
        self.currency = currency
        self.timeout = timeout

    @http_retry()
    def _post(self, path: str, data: dict) -> dict:
        url = f"{self.base_url}{path}"
        logger.info(f"PaymentClient POST {url}")

        resp = requests.post(url, data=data, auth=(self.secret_key, ""), timeout=self.timeout)
        resp.raise_for_status()
        return resp.json()

    @http_retry()
    def _get(self, path: str) -> dict:
        url = f"{self.base_url}{path}"
        logger.info(f"PaymentClient GET {url}")

        resp = requests.get(url, auth=(self.secret_key, ""), timeout=self.timeout)
        resp.raise_for_status()
        return resp.json()

    def create_payment_session(
        self,
        items: List[LineItem],
        success_url: str,
        cancel_url: str,
    ) -> PaymentSession:
        data = {
            "mode": "payment",
            "success_url": success_url,
            "cancel_url": cancel_url,
            **encode_line_items(items, self.currency),
        }

        try:
            body = self._post("/checkout/sessions", data)
        except RequestException as e:
            logger.error(f"Payment session creation failed: {e}")
            raise CheckoutError("Nie udalo sie utworzyc sesji platnosci") from e

        return PaymentSession(
            session_id=body["id"],
            url=body.get("url"),
            payment_status=body.get("payment_status"),
        )

    def retrieve_session(self, session_id: str) -> PaymentSession:
        try:
            body = self._get(f"/checkout/sessions/{session_id}")
        except RequestException as e:
            logger.error(f"Payment session {session_id} lookup failed: {e}")
            raise CheckoutError("Nie udalo sie pobrac sesji platnosci") from e

        return PaymentSession(
            session_id=body["id"],
            url=body.get("url"),
            payment_status=body.get("payment_status"),
        )
