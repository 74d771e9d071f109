from pathlib import Path

import pytest

from quillpost import create_app, db
from quillpost.accounts import register_user


@pytest.fixture()
def app(tmp_path: Path):
    """App built from TestingConfig against a throwaway SQLite file."""
    app = create_app("testing", SQLALCHEMY_DATABASE_URI=f"sqlite:///{tmp_path / 'test.db'}")
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()
        db.engine.dispose()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def other_client(app):
    return app.test_client()


@pytest.fixture()
def make_user(app):
    def _make(email="a@x.com", password="pw1"):
        with app.app_context():
            user = register_user(email, password)
            return user.id
    return _make


def register(client, email, password, **kwargs):
    return client.post("/register", data={"email": email, "password": password}, **kwargs)


def login(client, email, password, next_url=None, **kwargs):
    url = "/login" if next_url is None else f"/login?next={next_url}"
    return client.post(url, data={"email": email, "password": password}, **kwargs)


def create(client, title, content, **kwargs):
    return client.post("/blogs", data={"title": title, "content": content}, **kwargs)


@pytest.fixture()
def alice(client, make_user):
    make_user("a@x.com", "pw1")
    login(client, "a@x.com", "pw1")
    return client


@pytest.fixture()
def bob(other_client, make_user):
    make_user("b@x.com", "pw2")
    login(other_client, "b@x.com", "pw2")
    return other_client
