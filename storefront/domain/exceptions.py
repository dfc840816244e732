# storefront/domain/exceptions.py


class StorefrontError(Exception):
    """Bazowy wyjatek domeny sklepu."""

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class CatalogUnavailableError(StorefrontError):
    def __init__(self, message: str = "Katalog produktow jest niedostepny"):
        super().__init__(message, code="CATALOG_UNAVAILABLE")


class CheckoutError(StorefrontError):
    def __init__(self, message: str, code: str = "CHECKOUT_FAILED"):
        super().__init__(message, code=code)


class EmptyCartError(CheckoutError):
    def __init__(self):
        super().__init__("Nie mozna zaplacic za pusty koszyk", code="EMPTY_CART")


class ImageUploadError(StorefrontError):
    def __init__(self, message: str = "Upload obrazka nie powiodl sie"):
        super().__init__(message, code="IMAGE_UPLOAD_FAILED")


class AuthenticationError(StorefrontError):
    def __init__(self, message: str = "Nieprawidlowy lub brakujacy token"):
        super().__init__(message, code="UNAUTHENTICATED")


class PermissionDeniedError(StorefrontError):
    def __init__(self, message: str = "Brak uprawnien administratora"):
        super().__init__(message, code="PERMISSION_DENIED")


class CartBusyError(StorefrontError):
    def __init__(self, session_id: str):
        super().__init__(
            f"Koszyk {session_id} jest modyfikowany przez inna operacje",
            code="CART_BUSY",
        )
        self.session_id = session_id
