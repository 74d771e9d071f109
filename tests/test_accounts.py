import pytest

from quillpost import db
from quillpost.accounts import authenticate, find_user_by_email, register_user
from quillpost.errors import GENERIC_LOGIN_FAILURE, EmailTaken, InvalidCredentials
from quillpost.models import User


def test_register_hashes_password(app):
    with app.app_context():
        user = register_user("a@x.com", "pw1")
        stored = db.session.get(User, user.id)
        assert stored.email == "a@x.com"
        assert stored.password_hash != "pw1"


def test_register_normalizes_email(app):
    with app.app_context():
        register_user("  A@X.com ", "pw1")
        assert find_user_by_email("a@x.com") is not None
        assert authenticate("A@x.COM", "pw1").email == "a@x.com"


def test_register_twice_fails_regardless_of_password(app):
    with app.app_context():
        register_user("a@x.com", "pw1")
        with pytest.raises(EmailTaken):
            register_user("a@x.com", "something-else")
        assert User.query.count() == 1


def test_register_requires_email_and_password(app):
    with app.app_context():
        with pytest.raises(ValueError):
            register_user("", "pw1")
        with pytest.raises(ValueError):
            register_user("a@x.com", "")


def test_authenticate_returns_user(app):
    with app.app_context():
        created = register_user("a@x.com", "pw1")
        assert authenticate("a@x.com", "pw1").id == created.id


def test_unknown_email_and_wrong_password_fail_the_same_way(app):
    with app.app_context():
        register_user("a@x.com", "pw1")
        with pytest.raises(InvalidCredentials) as unknown:
            authenticate("nouser@x.com", "pw1")
        with pytest.raises(InvalidCredentials) as wrong:
            authenticate("a@x.com", "nope")
        assert str(unknown.value) == str(wrong.value) == GENERIC_LOGIN_FAILURE
