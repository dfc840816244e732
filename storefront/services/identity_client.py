# storefront/services/identity_client.py
from dataclasses import dataclass, field

import firebase_admin
from firebase_admin import auth, credentials
from firebase_admin.exceptions import FirebaseError

from storefront.domain.exceptions import AuthenticationError, PermissionDeniedError
from storefront.utils.settings import (
    FIREBASE_CREDENTIALS_PATH,
    FIREBASE_PROJECT_ID,
    ADMIN_ROLE,
)
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Identity:
    uid: str
    email: str | None = None
    roles: frozenset = field(default_factory=frozenset)

    def has_role(self, role: str) -> bool:
        return role in self.roles


def roles_from_claims(claims) -> frozenset:
    """Role z custom claims tokenu: {"roles": [...]} albo {"admin": true}."""
    if not isinstance(claims, dict):
        return frozenset()

    raw_roles = claims.get("roles")
    roles = set()
    if isinstance(raw_roles, list):
        roles.update(r for r in raw_roles if isinstance(r, str))
    elif raw_roles is not None:
        logger.warning(f"Ignoring malformed roles claim of type {type(raw_roles).__name__}")

    if claims.get(ADMIN_ROLE) is True:
        roles.add(ADMIN_ROLE)
    return frozenset(roles)


class IdentityClient:
    """Weryfikacja ID tokenu przez Firebase Admin SDK (lokalnie, po kluczach publicznych)."""

    def __init__(self, credentials_path: str | None = None, app=None):
        self.credentials_path = credentials_path if credentials_path is not None else FIREBASE_CREDENTIALS_PATH
        self._app = app

    def _get_app(self):
        #leniwa inicjalizacja, aplikacja startuje bez credentiali
        if self._app is not None:
            return self._app

        try:
            self._app = firebase_admin.get_app()
            return self._app
        except ValueError:
            pass

        if self.credentials_path:
            cred = credentials.Certificate(self.credentials_path)
        else:
            cred = credentials.ApplicationDefault()

        options = {"projectId": FIREBASE_PROJECT_ID} if FIREBASE_PROJECT_ID else None
        self._app = firebase_admin.initialize_app(cred, options)
        logger.info("Firebase Admin SDK initialized")
        return self._app

    def verify(self, token: str) -> Identity:
        if not token:
            raise AuthenticationError()

        app = self._get_app()
        try:
            claims = auth.verify_id_token(token, app=app)
        except auth.CertificateFetchError as e:
            logger.error(f"Identity key fetch failed: {e}")
            raise AuthenticationError("Nie udalo sie zweryfikowac tokenu") from e
        except (ValueError, FirebaseError) as e:
            logger.info(f"Rejected ID token: {e}")
            raise AuthenticationError() from e

        return Identity(
            uid=claims["uid"],
            email=claims.get("email"),
            roles=roles_from_claims(claims),
        )

    def require_role(self, token: str, role: str = ADMIN_ROLE) -> Identity:
        identity = self.verify(token)
        if not identity.has_role(role):
            logger.warning(f"User {identity.uid} denied, missing role {role}")
            raise PermissionDeniedError()
        return identity
