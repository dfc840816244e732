"""
Pytest configuration and fixtures.
"""
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from storefront.api import create_app
from storefront.services.cart_persistence import CartSnapshotStore
from storefront.services.catalog_client import CatalogClient
from storefront.services.identity_client import IdentityClient
from storefront.services.image_store import ImageStore
from storefront.services.lock_service import LockService
from storefront.services.payment_client import PaymentClient
from storefront.services.settings_client import SiteSettingsClient


class InMemoryRedis:
    """Minimal in-memory stand-in for the redis commands the service uses."""

    def __init__(self):
        self.data = {}

    def get(self, name):
        return self.data.get(name)

    def set(self, name, value, nx=False, ex=None):
        if nx and name in self.data:
            return None
        self.data[name] = value
        return True

    def delete(self, *names):
        return sum(1 for n in names if self.data.pop(n, None) is not None)

    def eval(self, script, numkeys, *keys_and_args):
        # only the compare-and-delete release script is used
        key, token = keys_and_args[0], keys_and_args[1]
        if self.data.get(key) == token:
            del self.data[key]
            return 1
        return 0


@pytest.fixture
def fake_redis():
    return InMemoryRedis()


@pytest.fixture
def snapshot_store(fake_redis):
    return CartSnapshotStore(client=fake_redis)


@pytest.fixture
def lock_service(fake_redis):
    return LockService(client=fake_redis)


@pytest.fixture
def catalog_client():
    return MagicMock(spec=CatalogClient)


@pytest.fixture
def payment_client():
    return MagicMock(spec=PaymentClient)


@pytest.fixture
def image_store():
    store = MagicMock(spec=ImageStore)
    store.derive_url.side_effect = lambda url, width=500, height=500: f"{url}?w={width}&h={height}"
    return store


@pytest.fixture
def identity_client():
    return MagicMock(spec=IdentityClient)


@pytest.fixture
def settings_client():
    return MagicMock(spec=SiteSettingsClient)


@pytest.fixture
def test_client(
    snapshot_store,
    lock_service,
    catalog_client,
    payment_client,
    image_store,
    identity_client,
    settings_client,
):
    app = create_app(
        snapshot_store=snapshot_store,
        lock_service=lock_service,
        catalog_client=catalog_client,
        payment_client=payment_client,
        image_store=image_store,
        identity_client=identity_client,
        settings_client=settings_client,
    )
    with TestClient(app) as client:
        yield client
