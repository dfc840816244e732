# storefront/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict, model_validator
from typing import List
from decimal import Decimal
from datetime import datetime


class ItemIn(BaseModel):
    """Schema dla dodawania produktu do koszyka (snapshot atrybutow produktu)."""

    model_config = ConfigDict(populate_by_name=True)

    product_id: str = Field(..., alias="productId", min_length=1, description="ID produktu z katalogu")
    name: str = ""
    price: Decimal = Field(..., ge=0, description="Cena jednostkowa (nie moze byc ujemna)")
    image: str = ""


class QuantityIn(BaseModel):
    """Schema dla zmiany ilosci. Walidacja < 1 jest w store (no-op), nie tutaj."""

    quantity: int


class LineItem(BaseModel):
    """Pozycja w koszyku."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(..., min_length=1)
    product_id: str = Field(..., alias="productId")
    name: str
    price: Decimal = Field(..., ge=0)
    image: str = ""
    quantity: int = Field(..., ge=1)


class CartSnapshot(BaseModel):
    """Zserializowany stan koszyka {items, total}."""

    model_config = ConfigDict(populate_by_name=True)

    items: List[LineItem] = Field(default_factory=list)
    total: Decimal = Decimal("0")

    @model_validator(mode="after")
    def check_unique(self):
        ids = [i.id for i in self.items]
        product_ids = [i.product_id for i in self.items]
        if len(set(ids)) != len(ids):
            raise ValueError("Zduplikowane id pozycji w koszyku")
        if len(set(product_ids)) != len(product_ids):
            raise ValueError("Zduplikowany produkt w koszyku")
        return self


class Product(BaseModel):
    """Schema produktu z katalogu."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    name: str
    description: str = ""
    price: Decimal = Field(..., ge=0)
    stock: int = 0
    category: str = ""
    cover_image: str = Field("", alias="coverImage")
    images: List[str] = Field(default_factory=list)
    featured: bool = False
    created_at: datetime | None = Field(None, alias="createdAt")
    updated_at: datetime | None = Field(None, alias="updatedAt")


class ProductIn(BaseModel):
    """Schema dla tworzenia produktu (panel admina). Cover image jest wymagany."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1)
    description: str = ""
    price: Decimal = Field(..., ge=0)
    stock: int = Field(0, ge=0)
    category: str = ""
    cover_image: str = Field(..., alias="coverImage", min_length=1)
    images: List[str] = Field(default_factory=list)
    featured: bool = False


class ProductUpdate(BaseModel):
    """Czesciowa aktualizacja produktu, tylko przeslane pola."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = Field(None, min_length=1)
    description: str | None = None
    price: Decimal | None = Field(None, ge=0)
    stock: int | None = Field(None, ge=0)
    category: str | None = None
    cover_image: str | None = Field(None, alias="coverImage", min_length=1)
    images: List[str] | None = None
    featured: bool | None = None


class Category(BaseModel):
    """Schema kategorii z katalogu."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    name: str
    slug: str
    description: str = ""
    image_url: str = Field("", alias="imageUrl")


class CategoryIn(BaseModel):
    """Schema dla tworzenia/edycji kategorii. Slug domyslnie z nazwy."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1)
    description: str = ""
    slug: str = ""
    image_url: str = Field(..., alias="imageUrl", min_length=1)


class Order(BaseModel):
    """Zamowienie zapisane po platnosci (tylko odczyt)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    user_id: str = Field("", alias="userId")
    total: Decimal = Decimal("0")
    status: str = "pending"
    created_at: datetime | None = Field(None, alias="createdAt")


class DashboardOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_orders: int = Field(..., alias="totalOrders")
    total_revenue: Decimal = Field(..., alias="totalRevenue")
    pending_orders: int = Field(..., alias="pendingOrders")
    low_stock_items: int = Field(..., alias="lowStockItems")
    recent_orders: List[Order] = Field(default_factory=list, alias="recentOrders")


class HeroSettings(BaseModel):
    """Ustawienia hero na stronie glownej."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    image_url: str = Field(..., alias="imageUrl")
    updated_at: datetime | None = Field(None, alias="updatedAt")


class CheckoutOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(..., alias="sessionId")
    url: str | None = None


class ConfirmIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(..., alias="sessionId", min_length=1)


class ConfirmOut(BaseModel):
    paid: bool
    cart: CartSnapshot


class ImageOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    url: str
    thumbnail_url: str = Field(..., alias="thumbnailUrl")


class DerivedImageOut(BaseModel):
    url: str
