# storefront/services/dashboard_service.py
from decimal import Decimal

from storefront.domain.schemas import DashboardOut
from storefront.services.catalog_client import CatalogClient
from storefront.utils.settings import LOW_STOCK_THRESHOLD


class DashboardService:
    """Metryki panelu admina liczone z zamowien i produktow."""

    def __init__(self, catalog_client: CatalogClient, low_stock_threshold: int = LOW_STOCK_THRESHOLD):
        self.catalog_client = catalog_client
        self.low_stock_threshold = low_stock_threshold

    def metrics(self, recent: int = 10) -> DashboardOut:
        orders = self.catalog_client.list_orders()
        products = self.catalog_client.list_products()

        #najnowsze najpierw, zamowienia bez daty na koncu
        ordered = sorted(
            orders,
            key=lambda o: (o.created_at is not None, o.created_at.timestamp() if o.created_at else 0),
            reverse=True,
        )

        return DashboardOut(
            total_orders=len(orders),
            total_revenue=sum((o.total for o in orders), Decimal("0")),
            pending_orders=sum(1 for o in orders if o.status == "pending"),
            low_stock_items=sum(1 for p in products if p.stock < self.low_stock_threshold),
            recent_orders=ordered[:recent],
        )
