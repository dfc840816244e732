# storefront/api/routers/site.py
from fastapi import APIRouter, HTTPException, Request

from storefront.domain.exceptions import CatalogUnavailableError
from storefront.domain.schemas import HeroSettings

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("/hero", response_model=HeroSettings)
def get_hero(request: Request):
    try:
        return request.app.state.settings_client.get_hero()
    except CatalogUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))
