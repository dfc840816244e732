# storefront/api/routers/checkout.py
from fastapi import APIRouter, Depends, HTTPException, Request

from storefront.api.deps import cart_session, locked_cart
from storefront.domain.exceptions import CheckoutError, EmptyCartError
from storefront.domain.schemas import CheckoutOut, ConfirmIn, ConfirmOut
from storefront.services.checkout_service import CheckoutService

router = APIRouter(prefix="/checkout", tags=["checkout"])


def get_service(request: Request) -> CheckoutService:
    return CheckoutService(payment_client=request.app.state.payment_client)


@router.post("", response_model=CheckoutOut)
def start_checkout(request: Request, session_id: str = Depends(cart_session)):
    svc = get_service(request)
    store = request.app.state.snapshot_store.open(session_id)
    try:
        session = svc.start_checkout(store)
    except EmptyCartError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except CheckoutError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return CheckoutOut(session_id=session.session_id, url=session.url)


@router.post("/confirm", response_model=ConfirmOut)
def confirm_checkout(payload: ConfirmIn, request: Request, session_id: str = Depends(cart_session)):
    svc = get_service(request)
    try:
        paid = svc.confirm_checkout(payload.session_id, lambda: locked_cart(request, session_id))
    except CheckoutError as e:
        raise HTTPException(status_code=502, detail=str(e))

    cart = request.app.state.snapshot_store.open(session_id).snapshot()
    return ConfirmOut(paid=paid, cart=cart)
