# storefront/api/routers/cart.py
from fastapi import APIRouter, Depends, Request

from storefront.api.deps import cart_session, locked_cart
from storefront.domain.schemas import CartSnapshot, ItemIn, QuantityIn

router = APIRouter(prefix="/cart", tags=["cart"])


@router.get("", response_model=CartSnapshot)
def get_cart(request: Request, session_id: str = Depends(cart_session)):
    store = request.app.state.snapshot_store.open(session_id)
    return store.snapshot()


@router.post("/items", response_model=CartSnapshot)
def add_item(payload: ItemIn, request: Request, session_id: str = Depends(cart_session)):
    with locked_cart(request, session_id) as store:
        store.add_item(payload)
        return store.snapshot()


@router.delete("/items/{item_id}", response_model=CartSnapshot)
def remove_item(item_id: str, request: Request, session_id: str = Depends(cart_session)):
    with locked_cart(request, session_id) as store:
        store.remove_item(item_id)
        return store.snapshot()


@router.patch("/items/{item_id}", response_model=CartSnapshot)
def update_quantity(
    item_id: str,
    payload: QuantityIn,
    request: Request,
    session_id: str = Depends(cart_session),
):
    #quantity < 1 -> no-op, zwracamy niezmieniony koszyk
    with locked_cart(request, session_id) as store:
        store.update_quantity(item_id, payload.quantity)
        return store.snapshot()


@router.delete("", response_model=CartSnapshot)
def clear_cart(request: Request, session_id: str = Depends(cart_session)):
    with locked_cart(request, session_id) as store:
        store.clear_cart()
        return store.snapshot()
