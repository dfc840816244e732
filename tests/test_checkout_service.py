"""
Tests for the checkout flow.

A failed or unpaid checkout must leave the cart exactly as it was so the user
can retry. Only a confirmed payment clears the cart.
"""
from contextlib import contextmanager
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from storefront.domain.exceptions import CheckoutError, EmptyCartError
from storefront.domain.schemas import ItemIn
from storefront.services.cart_store import CartStore
from storefront.services.checkout_service import CheckoutService
from storefront.services.payment_client import PaymentClient, PaymentSession


@pytest.fixture
def store():
    store = CartStore()
    store.add_item(ItemIn(product_id="p1", name="Vase", price=Decimal("25"), image="i1"))
    store.add_item(ItemIn(product_id="p2", name="Lamp", price=Decimal("40"), image="i2"))
    return store


@pytest.fixture
def payment_client():
    return MagicMock(spec=PaymentClient)


@pytest.fixture
def service(payment_client):
    return CheckoutService(payment_client, success_url="https://ok", cancel_url="https://cancel")


class TestStartCheckout:

    def test_sends_cart_items(self, service, payment_client, store):
        payment_client.create_payment_session.return_value = PaymentSession("cs_1", "https://pay/cs_1")

        session = service.start_checkout(store)

        assert session.session_id == "cs_1"
        payment_client.create_payment_session.assert_called_once_with(
            store.items, success_url="https://ok", cancel_url="https://cancel"
        )
        # starting a checkout never touches the cart
        assert len(store.items) == 2

    def test_empty_cart_rejected(self, service, payment_client):
        with pytest.raises(EmptyCartError):
            service.start_checkout(CartStore())

        payment_client.create_payment_session.assert_not_called()

    def test_gateway_failure_leaves_cart_untouched(self, service, payment_client, store):
        payment_client.create_payment_session.side_effect = CheckoutError("gateway down")
        before = store.snapshot()

        with pytest.raises(CheckoutError):
            service.start_checkout(store)

        assert store.snapshot() == before


class TestConfirmCheckout:

    def locked(self, store, events):
        @contextmanager
        def factory():
            events.append("lock")
            yield store
            events.append("unlock")
        return factory

    def test_paid_session_clears_cart(self, service, payment_client, store):
        payment_client.retrieve_session.return_value = PaymentSession("cs_1", payment_status="paid")
        events = []

        assert service.confirm_checkout("cs_1", self.locked(store, events)) is True
        assert store.items == []
        assert store.total == Decimal("0")
        assert events == ["lock", "unlock"]

    def test_gateway_is_asked_before_the_lock(self, service, payment_client, store):
        """
        Test the cart lock is not held while the gateway is queried.

        Validates:
        - retrieve_session runs before the lock is entered
        - the lock is held only around clearing the cart
        """
        # Arrange
        events = []

        def retrieve(session_id):
            events.append("retrieve")
            return PaymentSession(session_id, payment_status="paid")

        payment_client.retrieve_session.side_effect = retrieve

        # Act
        service.confirm_checkout("cs_1", self.locked(store, events))

        # Assert
        assert events == ["retrieve", "lock", "unlock"]

    def test_unpaid_session_keeps_cart(self, service, payment_client, store):
        payment_client.retrieve_session.return_value = PaymentSession("cs_1", payment_status="unpaid")
        before = store.snapshot()
        events = []

        assert service.confirm_checkout("cs_1", self.locked(store, events)) is False
        assert store.snapshot() == before
        assert events == []

    def test_lookup_failure_keeps_cart(self, service, payment_client, store):
        payment_client.retrieve_session.side_effect = CheckoutError("gateway down")
        before = store.snapshot()
        events = []

        with pytest.raises(CheckoutError):
            service.confirm_checkout("cs_1", self.locked(store, events))

        assert store.snapshot() == before
        assert events == []
