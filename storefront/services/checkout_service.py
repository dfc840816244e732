# storefront/services/checkout_service.py
from typing import Callable, ContextManager

from storefront.domain.exceptions import EmptyCartError
from storefront.services.cart_store import CartStore
from storefront.services.payment_client import PaymentClient, PaymentSession
from storefront.utils.settings import CHECKOUT_SUCCESS_URL, CHECKOUT_CANCEL_URL
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CheckoutService:
    """
    Serwis platnosci za koszyk.
    start_checkout nie zmienia koszyka (blad = mozna ponowic),
    confirm_checkout czysci koszyk dopiero gdy bramka potwierdzi platnosc.
    """

    def __init__(
        self,
        payment_client: PaymentClient,
        success_url: str = CHECKOUT_SUCCESS_URL,
        cancel_url: str = CHECKOUT_CANCEL_URL,
    ):
        self.payment_client = payment_client
        self.success_url = success_url
        self.cancel_url = cancel_url

    def start_checkout(self, store: CartStore) -> PaymentSession:
        items = store.items
        if not items:
            raise EmptyCartError()

        logger.info(f"Tworzenie sesji platnosci dla {len(items)} pozycji, total {store.total}")
        session = self.payment_client.create_payment_session(
            items,
            success_url=self.success_url,
            cancel_url=self.cancel_url,
        )
        logger.info(f"Sesja platnosci {session.session_id} utworzona")
        return session

    def confirm_checkout(self, session_id: str, locked_store: Callable[[], ContextManager[CartStore]]) -> bool:
        #bramka pytana przed lockiem, lock tylko na czas czyszczenia koszyka
        session = self.payment_client.retrieve_session(session_id)

        if session.payment_status != "paid":
            logger.info(f"Sesja {session_id} nieoplacona ({session.payment_status}), koszyk bez zmian")
            return False

        with locked_store() as store:
            store.clear_cart()
        logger.info(f"Sesja {session_id} oplacona, koszyk wyczyszczony")
        return True
