"""
Tests for ID token verification through the Firebase Admin SDK.

The SDK calls are patched, so no credentials or network access are needed.
"""
from unittest.mock import MagicMock, patch

import pytest
from firebase_admin import auth

from storefront.domain.exceptions import AuthenticationError, PermissionDeniedError
from storefront.services.identity_client import IdentityClient, roles_from_claims


@pytest.fixture
def client():
    return IdentityClient(app=MagicMock())


class TestRolesFromClaims:

    def test_roles_list(self):
        assert roles_from_claims({"roles": ["admin", "editor"]}) == {"admin", "editor"}

    def test_admin_flag(self):
        assert roles_from_claims({"admin": True}) == {"admin"}

    def test_string_roles_are_ignored(self):
        """A plain string must not be split into single-letter roles."""
        assert roles_from_claims({"roles": "admin"}) == frozenset()

    def test_non_string_entries_are_dropped(self):
        assert roles_from_claims({"roles": ["admin", 1, None, {"x": 1}]}) == {"admin"}

    def test_truthy_admin_flag_is_not_enough(self):
        assert roles_from_claims({"admin": "yes"}) == frozenset()

    @pytest.mark.parametrize("claims", [None, "admin", ["admin"], 42])
    def test_non_dict_claims(self, claims):
        assert roles_from_claims(claims) == frozenset()


class TestIdentityClient:

    @patch("storefront.services.identity_client.auth.verify_id_token")
    def test_valid_token(self, mock_verify, client):
        mock_verify.return_value = {"uid": "u1", "email": "a@b.c", "roles": ["admin"]}

        identity = client.verify("token")

        assert identity.uid == "u1"
        assert identity.email == "a@b.c"
        assert identity.has_role("admin")
        mock_verify.assert_called_once_with("token", app=client._app)

    @patch("storefront.services.identity_client.auth.verify_id_token")
    def test_rejected_token(self, mock_verify, client):
        mock_verify.side_effect = auth.InvalidIdTokenError("bad token")

        with pytest.raises(AuthenticationError):
            client.verify("bad")

    @patch("storefront.services.identity_client.auth.verify_id_token")
    def test_malformed_token(self, mock_verify, client):
        mock_verify.side_effect = ValueError("not a JWT")

        with pytest.raises(AuthenticationError):
            client.verify("garbage")

    @patch("storefront.services.identity_client.auth.verify_id_token")
    def test_key_fetch_failure(self, mock_verify, client):
        mock_verify.side_effect = auth.CertificateFetchError("no keys", None)

        with pytest.raises(AuthenticationError):
            client.verify("token")

    @patch("storefront.services.identity_client.auth.verify_id_token")
    def test_empty_token(self, mock_verify, client):
        with pytest.raises(AuthenticationError):
            client.verify("")

        mock_verify.assert_not_called()

    @patch("storefront.services.identity_client.auth.verify_id_token")
    def test_missing_admin_role(self, mock_verify, client):
        mock_verify.return_value = {"uid": "u2", "roles": ["editor"]}

        with pytest.raises(PermissionDeniedError):
            client.require_role("token")

    @patch("storefront.services.identity_client.auth.verify_id_token")
    def test_string_roles_claim_is_not_admin(self, mock_verify, client):
        mock_verify.return_value = {"uid": "u3", "roles": "admin"}

        with pytest.raises(PermissionDeniedError):
            client.require_role("token")


class TestAppInitialization:

    @patch("storefront.services.identity_client.credentials")
    @patch("storefront.services.identity_client.firebase_admin")
    def test_initializes_from_credentials_file(self, mock_firebase, mock_credentials):
        mock_firebase.get_app.side_effect = ValueError("no app")
        client = IdentityClient(credentials_path="/secrets/sa.json")

        app = client._get_app()

        mock_credentials.Certificate.assert_called_once_with("/secrets/sa.json")
        mock_firebase.initialize_app.assert_called_once()
        assert app is mock_firebase.initialize_app.return_value
        # initialized once per client
        assert client._get_app() is app
        assert mock_firebase.initialize_app.call_count == 1

    @patch("storefront.services.identity_client.credentials")
    @patch("storefront.services.identity_client.firebase_admin")
    def test_reuses_existing_app(self, mock_firebase, mock_credentials):
        client = IdentityClient(credentials_path="")

        assert client._get_app() is mock_firebase.get_app.return_value
        mock_firebase.initialize_app.assert_not_called()
        mock_credentials.Certificate.assert_not_called()

    @patch("storefront.services.identity_client.credentials")
    @patch("storefront.services.identity_client.firebase_admin")
    def test_default_credentials_without_file(self, mock_firebase, mock_credentials):
        mock_firebase.get_app.side_effect = ValueError("no app")

        IdentityClient(credentials_path="")._get_app()

        mock_credentials.ApplicationDefault.assert_called_once_with()
        mock_credentials.Certificate.assert_not_called()
