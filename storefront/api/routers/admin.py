# storefront/api/routers/admin.py
from fastapi import APIRouter, Depends, File, HTTPException, Query, Request, Response, UploadFile
from starlette.concurrency import run_in_threadpool

from storefront.api.deps import bearer_token
from storefront.domain.exceptions import ImageUploadError
from storefront.domain.schemas import (
    Category,
    CategoryIn,
    DashboardOut,
    DerivedImageOut,
    HeroSettings,
    ImageOut,
    Product,
    ProductIn,
    ProductUpdate,
)
from storefront.services.dashboard_service import DashboardService
from storefront.services.identity_client import Identity
from storefront.utils import settings

router = APIRouter(prefix="/admin", tags=["admin"])

UPLOAD_CHUNK_BYTES = 64 * 1024


def require_admin(request: Request, token: str = Depends(bearer_token)) -> Identity:
    return request.app.state.identity_client.require_role(token)


async def read_upload(file: UploadFile, limit: int | None = None) -> bytes:
    #czytamy porcjami i przerywamy po przekroczeniu limitu
    limit = limit if limit is not None else settings.MAX_UPLOAD_BYTES
    data = bytearray()
    while True:
        chunk = await file.read(UPLOAD_CHUNK_BYTES)
        if not chunk:
            break
        data.extend(chunk)
        if len(data) > limit:
            raise HTTPException(status_code=413, detail=f"Plik wiekszy niz {limit} bajtow")
    return bytes(data)


async def store_upload(request: Request, file: UploadFile) -> str:
    data = await read_upload(file)
    try:
        return await run_in_threadpool(
            request.app.state.image_store.upload, data, filename=file.filename, content_type=file.content_type
        )
    except ImageUploadError as e:
        raise HTTPException(status_code=502, detail=str(e))


#obrazki
@router.post("/images", response_model=ImageOut, status_code=201)
async def upload_image(
    request: Request,
    file: UploadFile = File(...),
    admin: Identity = Depends(require_admin),
):
    url = await store_upload(request, file)
    return ImageOut(url=url, thumbnail_url=request.app.state.image_store.derive_url(url))


@router.get("/images/derive", response_model=DerivedImageOut)
def derive_image(
    request: Request,
    url: str = Query(...),
    width: int = Query(500, gt=0),
    height: int = Query(500, gt=0),
    admin: Identity = Depends(require_admin),
):
    return DerivedImageOut(url=request.app.state.image_store.derive_url(url, width, height))


#produkty
@router.post("/products", response_model=Product, status_code=201)
def create_product(payload: ProductIn, request: Request, admin: Identity = Depends(require_admin)):
    return request.app.state.catalog_client.create_product(payload)


@router.patch("/products/{product_id}", response_model=Product)
def update_product(
    product_id: str,
    payload: ProductUpdate,
    request: Request,
    admin: Identity = Depends(require_admin),
):
    product = request.app.state.catalog_client.update_product(product_id, payload)
    if not product:
        raise HTTPException(status_code=404, detail="Produkt nie znaleziony")
    return product


@router.delete("/products/{product_id}", status_code=204)
def delete_product(product_id: str, request: Request, admin: Identity = Depends(require_admin)):
    if not request.app.state.catalog_client.delete_product(product_id):
        raise HTTPException(status_code=404, detail="Produkt nie znaleziony")
    return Response(status_code=204)


#kategorie
@router.post("/categories", response_model=Category, status_code=201)
def create_category(payload: CategoryIn, request: Request, admin: Identity = Depends(require_admin)):
    return request.app.state.catalog_client.create_category(payload)


@router.put("/categories/{category_id}", response_model=Category)
def update_category(
    category_id: str,
    payload: CategoryIn,
    request: Request,
    admin: Identity = Depends(require_admin),
):
    category = request.app.state.catalog_client.update_category(category_id, payload)
    if not category:
        raise HTTPException(status_code=404, detail="Kategoria nie znaleziona")
    return category


@router.delete("/categories/{category_id}", status_code=204)
def delete_category(category_id: str, request: Request, admin: Identity = Depends(require_admin)):
    if not request.app.state.catalog_client.delete_category(category_id):
        raise HTTPException(status_code=404, detail="Kategoria nie znaleziona")
    return Response(status_code=204)


#ustawienia strony
@router.get("/settings/hero", response_model=HeroSettings)
def get_hero(request: Request, admin: Identity = Depends(require_admin)):
    return request.app.state.settings_client.get_hero()


@router.post("/settings/hero", response_model=HeroSettings)
async def upload_hero(
    request: Request,
    file: UploadFile = File(...),
    admin: Identity = Depends(require_admin),
):
    url = await store_upload(request, file)
    return await run_in_threadpool(request.app.state.settings_client.update_hero, url)


#dashboard
@router.get("/dashboard", response_model=DashboardOut)
def dashboard(request: Request, recent: int = Query(10, ge=0), admin: Identity = Depends(require_admin)):
    return DashboardService(request.app.state.catalog_client).metrics(recent=recent)
