# storefront/services/cart_store.py
import secrets
import threading
from decimal import Decimal
from typing import Callable, List

from storefront.domain.schemas import CartSnapshot, ItemIn, LineItem

Listener = Callable[[CartSnapshot], None]


def compute_total(items: List[LineItem]) -> Decimal:
    return sum((i.price * i.quantity for i in items), Decimal("0"))


def generate_item_id() -> str:
    return secrets.token_urlsafe(12)


class CartStore:
    """
    Koszyk: uporzadkowana lista pozycji + total wyliczany po kazdej zmianie.

    - jedna pozycja na produkt, ponowne dodanie zwieksza quantity o 1
      (cena/nazwa/obrazek z pierwszego dodania zostaja)
    - quantity >= 1 zawsze, zmiana na < 1 to no-op (usuwanie przez remove_item)
    - operacje nigdy nie rzucaja wyjatkow, nieznane id to no-op
    - po kazdej zmianie listenery dostaja nowy snapshot (persystencja)
    """

    def __init__(self, snapshot: CartSnapshot | None = None):
        self._lock = threading.Lock()
        self._items: List[LineItem] = list(snapshot.items) if snapshot else []
        #total nigdy nie jest brany ze snapshotu
        self._total = compute_total(self._items)
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    @property
    def items(self) -> List[LineItem]:
        with self._lock:
            return list(self._items)

    @property
    def total(self) -> Decimal:
        with self._lock:
            return self._total

    def snapshot(self) -> CartSnapshot:
        with self._lock:
            return CartSnapshot(items=list(self._items), total=self._total)

    #commands
    def add_item(self, candidate: ItemIn) -> None:
        with self._lock:
            existing = next(
                (i for i in self._items if i.product_id == candidate.product_id), None
            )

            if existing:
                self._items = [
                    i.model_copy(update={"quantity": i.quantity + 1})
                    if i.product_id == candidate.product_id
                    else i
                    for i in self._items
                ]
            else:
                self._items = self._items + [
                    LineItem(
                        id=self._new_id(),
                        product_id=candidate.product_id,
                        name=candidate.name,
                        price=candidate.price,
                        image=candidate.image,
                        quantity=1,
                    )
                ]
            snap = self._commit()

        self._notify(snap)

    def remove_item(self, item_id: str) -> None:
        with self._lock:
            self._items = [i for i in self._items if i.id != item_id]
            snap = self._commit()

        self._notify(snap)

    def update_quantity(self, item_id: str, quantity: int) -> None:
        if quantity < 1:
            return

        with self._lock:
            self._items = [
                i.model_copy(update={"quantity": quantity}) if i.id == item_id else i
                for i in self._items
            ]
            snap = self._commit()

        self._notify(snap)

    def clear_cart(self) -> None:
        with self._lock:
            self._items = []
            snap = self._commit()

        self._notify(snap)

    def _new_id(self) -> str:
        taken = {i.id for i in self._items}
        new_id = generate_item_id()
        while new_id in taken:
            new_id = generate_item_id()
        return new_id

    def _commit(self) -> CartSnapshot:
        self._total = compute_total(self._items)
        return CartSnapshot(items=list(self._items), total=self._total)

    def _notify(self, snap: CartSnapshot) -> None:
        for listener in self._listeners:
            listener(snap)
