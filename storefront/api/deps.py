# storefront/api/deps.py
import secrets
from contextlib import contextmanager

from fastapi import Header, Request, Response

from storefront.domain.exceptions import AuthenticationError
from storefront.services.cart_store import CartStore
from storefront.utils.settings import CART_SESSION_COOKIE


def cart_session(request: Request, response: Response) -> str:
    """Id sesji koszyka z cookie, nowa sesja gdy brak."""
    session_id = request.cookies.get(CART_SESSION_COOKIE)
    if not session_id:
        session_id = secrets.token_urlsafe(16)
        response.set_cookie(CART_SESSION_COOKIE, session_id, httponly=True, samesite="lax")
    return session_id


@contextmanager
def locked_cart(request: Request, session_id: str):
    #read-modify-write koszyka pod lockiem w redisie
    state = request.app.state
    with state.lock_service.hold(session_id):
        store: CartStore = state.snapshot_store.open(session_id)
        yield store


def bearer_token(authorization: str | None = Header(default=None)) -> str:
    if not authorization or not authorization.lower().startswith("bearer "):
        raise AuthenticationError()
    return authorization.split(" ", 1)[1].strip()
