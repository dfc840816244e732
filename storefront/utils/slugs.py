# storefront/utils/slugs.py
import re
import time

_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def slugify(name: str) -> str:
    return _NON_ALNUM.sub("-", name.lower()).strip("-")


def to_base36(n: int) -> str:
    if n == 0:
        return "0"
    out = []
    while n:
        n, r = divmod(n, 36)
        out.append(_DIGITS[r])
    return "".join(reversed(out))


def generate_product_id(name: str, now_ms: int | None = None) -> str:
    """Czytelne id produktu: slug nazwy + znacznik czasu (ms) w base36."""
    stamp = to_base36(now_ms if now_ms is not None else int(time.time() * 1000))
    slug = slugify(name)
    return f"{slug}-{stamp}" if slug else stamp
