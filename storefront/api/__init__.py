# storefront/api/__init__.py
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from redis.exceptions import RedisError

from storefront.api.routers import admin, cart, checkout, health, products, site
from storefront.domain.exceptions import (
    AuthenticationError,
    CartBusyError,
    CatalogUnavailableError,
    ImageUploadError,
    PermissionDeniedError,
    StorefrontError,
)
from storefront.services.cart_persistence import CartSnapshotStore
from storefront.services.catalog_client import CatalogClient
from storefront.services.identity_client import IdentityClient
from storefront.services.image_store import ImageStore
from storefront.services.lock_service import LockService
from storefront.services.payment_client import PaymentClient
from storefront.services.settings_client import SiteSettingsClient
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

_STATUS_BY_ERROR = {
    AuthenticationError: 401,
    PermissionDeniedError: 403,
    CartBusyError: 409,
    ImageUploadError: 502,
    CatalogUnavailableError: 503,
}


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StorefrontError)
    async def storefront_error(request: Request, exc: StorefrontError):
        status = next(
            (code for cls, code in _STATUS_BY_ERROR.items() if isinstance(exc, cls)),
            400,
        )
        return JSONResponse(status_code=status, content={"detail": exc.message, "code": exc.code})

    @app.exception_handler(RedisError)
    async def redis_error(request: Request, exc: RedisError):
        logger.error(f"Cart storage unavailable: {exc}")
        return JSONResponse(
            status_code=503,
            content={"detail": "Magazyn koszykow jest niedostepny", "code": "CART_STORAGE_UNAVAILABLE"},
        )


def create_app(
    snapshot_store: CartSnapshotStore | None = None,
    lock_service: LockService | None = None,
    catalog_client: CatalogClient | None = None,
    payment_client: PaymentClient | None = None,
    image_store: ImageStore | None = None,
    identity_client: IdentityClient | None = None,
    settings_client: SiteSettingsClient | None = None,
) -> FastAPI:
    app = FastAPI(
        title="Storefront Service",
        version="1.0.0",
    )

    #klienci uslug zewnetrznych trzymani w app.state, routery biora je z requestu
    app.state.snapshot_store = snapshot_store or CartSnapshotStore()
    app.state.lock_service = lock_service or LockService()
    app.state.catalog_client = catalog_client or CatalogClient()
    app.state.payment_client = payment_client or PaymentClient()
    app.state.image_store = image_store or ImageStore()
    app.state.identity_client = identity_client or IdentityClient()
    app.state.settings_client = settings_client or SiteSettingsClient()

    _register_exception_handlers(app)

    # Include routers
    app.include_router(health.router)
    app.include_router(cart.router)
    app.include_router(products.router)
    app.include_router(checkout.router)
    app.include_router(site.router)
    app.include_router(admin.router)

    return app
