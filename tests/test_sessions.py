from datetime import datetime, timedelta

from quillpost.accounts import register_user
from quillpost.models import LoginSession
from quillpost.sessions import create_session, destroy_session, load_session, purge_expired

T0 = datetime(2026, 1, 1, 12, 0, 0)


def test_create_then_load(app):
    with app.app_context():
        user = register_user("a@x.com", "pw1")
        principal = create_session(user, now=T0)
        assert principal.expires_at == T0 + timedelta(hours=24)

        loaded = load_session(principal.get_id(), now=T0 + timedelta(hours=1))
        assert loaded is not None
        assert loaded.user_id == user.id
        assert loaded.email == "a@x.com"
        assert loaded.is_authenticated


def test_session_rejected_at_exactly_24_hours(app):
    with app.app_context():
        user = register_user("a@x.com", "pw1")
        token = create_session(user, now=T0).token

        assert load_session(token, now=T0 + timedelta(hours=24) - timedelta(seconds=1)) is not None
        assert load_session(token, now=T0 + timedelta(hours=24)) is None
        # lazily removed once seen expired
        assert LoginSession.query.filter_by(token=token).first() is None


def test_expiry_does_not_slide_with_activity(app):
    with app.app_context():
        user = register_user("a@x.com", "pw1")
        token = create_session(user, now=T0).token
        for hour in (6, 12, 23):
            assert load_session(token, now=T0 + timedelta(hours=hour)) is not None
        assert load_session(token, now=T0 + timedelta(hours=25)) is None


def test_destroy_session(app):
    with app.app_context():
        user = register_user("a@x.com", "pw1")
        token = create_session(user).token
        assert destroy_session(token) is True
        assert load_session(token) is None
        assert destroy_session(token) is False


def test_unknown_or_empty_token(app):
    with app.app_context():
        assert load_session("not-a-token") is None
        assert load_session("") is None


def test_tokens_are_unique_per_login(app):
    with app.app_context():
        user = register_user("a@x.com", "pw1")
        assert create_session(user).token != create_session(user).token


def test_purge_expired(app):
    with app.app_context():
        user = register_user("a@x.com", "pw1")
        create_session(user, now=T0)
        create_session(user, now=T0 + timedelta(hours=20))
        assert purge_expired(now=T0 + timedelta(hours=30)) == 1
        assert LoginSession.query.count() == 1
