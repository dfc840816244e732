# storefront/api/routers/products.py
from typing import List

from fastapi import APIRouter, HTTPException, Query, Request

from storefront.domain.exceptions import CatalogUnavailableError
from storefront.domain.schemas import Category, Product

router = APIRouter(tags=["catalog"])


@router.get("/products", response_model=List[Product])
def list_products(
    request: Request,
    category: str | None = Query(None),
    featured: bool | None = Query(None),
):
    try:
        return request.app.state.catalog_client.list_products(category=category, featured=featured)
    except CatalogUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.get("/products/{product_id}", response_model=Product)
def get_product(product_id: str, request: Request):
    try:
        product = request.app.state.catalog_client.get_product(product_id)
    except CatalogUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))
    if not product:
        raise HTTPException(status_code=404, detail="Produkt nie znaleziony")
    return product


@router.get("/categories", response_model=List[Category])
def list_categories(request: Request):
    try:
        return request.app.state.catalog_client.list_categories()
    except CatalogUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.get("/categories/{slug}", response_model=Category)
def get_category(slug: str, request: Request):
    try:
        category = request.app.state.catalog_client.get_category_by_slug(slug)
    except CatalogUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))
    if not category:
        raise HTTPException(status_code=404, detail="Kategoria nie znaleziona")
    return category
