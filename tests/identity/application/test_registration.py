"""Application tests for registration and login via domain.process()."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError

from storefront.identity.authentication import login, resolve_bearer
from storefront.identity.passwords import verify_password
from storefront.identity.registration import RegisterUser
from storefront.identity.user import User
from storefront.shared.exceptions import AuthenticationError


def _register(email="jane@example.com", password="s3cret-pass", **extra):
    command = RegisterUser(email=email, password=password, name="Jane Doe", **extra)
    return current_domain.process(command, asynchronous=False)


class TestRegisterUser:
    def test_register_persists_hashed_password(self):
        user_id = _register()

        user = current_domain.repository_for(User).get(user_id)
        assert user.email == "jane@example.com"
        assert user.password_hash != "s3cret-pass"
        assert verify_password("s3cret-pass", user.password_hash)

    def test_duplicate_email_is_rejected(self):
        _register()

        with pytest.raises(ValidationError) as exc:
            _register(email="JANE@example.com")

        assert "email" in exc.value.messages

    def test_admin_role_cannot_be_self_assigned(self):
        with pytest.raises(ValidationError) as exc:
            _register(role="admin")

        assert "role" in exc.value.messages

    def test_find_by_email(self):
        user_id = _register()

        user = current_domain.repository_for(User).find_by_email(" Jane@Example.com")
        assert str(user.id) == user_id


class TestLogin:
    def test_login_issues_token(self):
        user_id = _register()

        user, token = login("jane@example.com", "s3cret-pass")

        assert str(user.id) == user_id
        assert str(resolve_bearer(f"Bearer {token}").id) == user_id

    def test_wrong_password(self):
        _register()

        with pytest.raises(AuthenticationError):
            login("jane@example.com", "wrong")

    def test_unknown_email(self):
        with pytest.raises(AuthenticationError):
            login("nobody@example.com", "s3cret-pass")


class TestResolveBearer:
    @pytest.mark.parametrize("header", [None, "", "Token abc", "Bearer ", "Bearer not-a-token"])
    def test_invalid_headers(self, header):
        with pytest.raises(AuthenticationError):
            resolve_bearer(header)
