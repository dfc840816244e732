# storefront/services/cart_persistence.py
import redis
from redis.exceptions import RedisError
from pydantic import ValidationError

from storefront.domain.schemas import CartSnapshot
from storefront.services.cart_store import CartStore
from storefront.utils.retry import redis_retry
from storefront.utils.settings import REDIS_URL, CART_STORAGE_NAMESPACE
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CartSnapshotStore:
    """
    Adapter persystencji koszyka w redisie:
    -jeden slot na sesje koszyka: <namespace>:<session_id>
    -zapis pelnego snapshotu po kazdej zmianie (fire-and-forget)
    -odczyt przy starcie, brak/uszkodzony snapshot = pusty koszyk
    """

    def __init__(self, client: redis.Redis | None = None, namespace: str = CART_STORAGE_NAMESPACE):
        #surowe bajty, dekodowanie i walidacja po stronie pydantic
        self.redis = client or redis.Redis.from_url(REDIS_URL, decode_responses=False)
        self.namespace = namespace

    def key(self, session_id: str) -> str:
        return f"{self.namespace}:{session_id}"

    @redis_retry()
    def _read(self, key: str) -> str | bytes | None:
        return self.redis.get(key)

    @redis_retry()
    def _write(self, key: str, payload: str) -> None:
        self.redis.set(key, payload)

    def load(self, session_id: str) -> CartSnapshot:
        key = self.key(session_id)

        #blad polaczenia leci wyzej, nie nadpisujemy koszyka pustym
        try:
            raw = self._read(key)
        except UnicodeDecodeError as e:
            #klient z decode_responses=True dekoduje juz w GET
            logger.warning(f"Corrupted cart snapshot {key}, starting empty: {e}")
            return CartSnapshot()

        if raw is None:
            return CartSnapshot()

        try:
            snap = CartSnapshot.model_validate_json(raw)
        except (ValidationError, UnicodeDecodeError) as e:
            logger.warning(f"Corrupted cart snapshot {key}, starting empty: {e}")
            return CartSnapshot()

        return snap

    def save(self, session_id: str, snapshot: CartSnapshot) -> None:
        key = self.key(session_id)
        try:
            self._write(key, snapshot.model_dump_json(by_alias=True))
        except RedisError as e:
            #stan w pamieci jest juz zmieniony, zapis nie blokuje operacji
            logger.warning(f"Failed to persist cart snapshot {key}: {e}")

    def open(self, session_id: str) -> CartStore:
        store = CartStore(self.load(session_id))
        store.subscribe(lambda snap: self.save(session_id, snap))
        return store
